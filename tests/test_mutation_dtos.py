from unittest import TestCase

from pydantic import ValidationError

from treatment_checklist.core.application.dtos.mutation_dtos import (
    ConsentDocumentUploadDTO,
    DoseStatusUpdateDTO,
    PaymentStatusUpdateDTO,
    SurveyMarkDTO,
    SurveyResponseDTO,
)
from treatment_checklist.core.domain.enums import DoseStatus, PaymentStatus, SurveyStatus


class MutationPayloadTests(TestCase):
    def test_wire_format_uses_labels_and_camel_case(self):
        self.assertEqual(DoseStatusUpdateDTO(status=DoseStatus.APPLIED).to_wire(), {"status": "Aplicada"})
        self.assertEqual(
            PaymentStatusUpdateDTO(payment_status=PaymentStatus.PAID).to_wire(),
            {"paymentStatus": "PAGO"},
        )

    def test_survey_response(self):
        dto = SurveyResponseDTO(survey_score=9, survey_comment="Ótimo atendimento")
        self.assertEqual(
            dto.to_wire(),
            {"surveyStatus": "Respondido", "surveyScore": 9, "surveyComment": "Ótimo atendimento"},
        )

    def test_survey_blank_comment_is_dropped(self):
        self.assertNotIn("surveyComment", SurveyResponseDTO(survey_score=1, survey_comment="  ").to_wire())

    def test_survey_score_bounds(self):
        for score in (0, 11):
            with self.subTest(score=score), self.assertRaises(ValidationError):
                SurveyResponseDTO(survey_score=score)

    def test_mark_only_sent_or_not_sent(self):
        self.assertEqual(SurveyMarkDTO(survey_status=SurveyStatus.SENT).to_wire(), {"surveyStatus": "Enviado"})
        with self.assertRaises(ValidationError):
            SurveyMarkDTO(survey_status=SurveyStatus.ANSWERED)

    def test_consent_upload_payload(self):
        pdf = ConsentDocumentUploadDTO.for_patient("P1", " termo.PDF ")
        self.assertEqual(pdf.file_name, "termo.PDF")
        self.assertEqual(pdf.file_type, "pdf")
        self.assertEqual(pdf.file_url, "/uploads/P1/termo.PDF")

        docx = ConsentDocumentUploadDTO.for_patient("P1", "termo.docx")
        self.assertEqual(docx.file_type, "docx")

    def test_consent_upload_requires_name(self):
        with self.assertRaises(ValidationError):
            ConsentDocumentUploadDTO.for_patient("P1", "   ")
