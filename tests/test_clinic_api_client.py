from unittest import TestCase
from unittest.mock import MagicMock

import requests

from treatment_checklist.adapters.api_clients.clinic_api_client import ClinicRecordsAPIClient
from treatment_checklist.adapters.repositories.api_consent_document_repo_impl import (
    ConsentDocumentRepoImpl,
)
from treatment_checklist.adapters.repositories.api_dose_repo_impl import DoseRepoImpl
from treatment_checklist.adapters.repositories.api_snapshot_repo_impl import SnapshotRepoImpl
from treatment_checklist.core.application.dtos.record_store_dtos import ConsentDocumentDTO
from treatment_checklist.core.domain.enums import PaymentStatus


def _response(payload=None, status_code=200):
    resp = MagicMock(spec=requests.Response)
    resp.status_code = status_code
    resp.content = b"{}" if payload is not None else b""
    resp.json.return_value = payload
    if status_code >= 400:
        resp.raise_for_status.side_effect = requests.HTTPError(f"{status_code} Server Error")
    return resp


class ClinicRecordsAPIClientTests(TestCase):
    def setUp(self):
        self.client = ClinicRecordsAPIClient(
            base_url="http://api.local/api",
            token="tok",
            timeout=2.0,
            retries=2,
            treatments_limit=100,
            patients_limit=100,
            doses_limit=500,
        )

    def test_session_configuration(self):
        self.assertEqual(self.client.session.headers["Authorization"], "Bearer tok")
        retry = self.client.session.get_adapter("https://api.local").max_retries
        self.assertEqual(retry.total, 2)
        self.assertEqual(set(retry.allowed_methods), {"GET"})

    def test_list_doses_uses_limit_and_envelope(self):
        self.client.session = MagicMock()
        self.client.session.get.return_value = _response({
            "data": [{
                "id": "D1", "treatmentId": "T1", "applicationDate": "2024-03-01T09:00:00Z",
                "status": "Aplicada", "paymentStatus": "PAGO",
            }],
            "total": 1, "page": 1, "limit": 500, "totalPages": 1,
        })

        doses = self.client.list_doses()

        self.client.session.get.assert_called_once_with(
            "http://api.local/api/doses", params={"limit": 500}, timeout=2.0
        )
        self.assertEqual(doses[0].payment_status, PaymentStatus.PAID)

    def test_read_failure_propagates(self):
        self.client.session = MagicMock()
        self.client.session.get.return_value = _response({}, status_code=503)
        with self.assertRaises(requests.HTTPError):
            self.client.list_protocols()

    def test_update_dose_patch(self):
        self.client.session = MagicMock()
        self.client.session.request.return_value = _response({"id": "D1"})

        self.client.update_dose("D1", {"paymentStatus": "PAGO"})

        self.client.session.request.assert_called_once_with(
            "PATCH", "http://api.local/api/doses/D1", json={"paymentStatus": "PAGO"}, timeout=2.0
        )

    def test_update_survey_patch(self):
        self.client.session = MagicMock()
        self.client.session.request.return_value = _response(None, status_code=204)
        self.client.update_dose_survey("D1", {"surveyStatus": "Enviado"})
        args = self.client.session.request.call_args.args
        self.assertEqual(args, ("PATCH", "http://api.local/api/doses/D1/survey"))

    def test_upload_document_post(self):
        self.client.session = MagicMock()
        self.client.session.request.return_value = _response({"data": {"id": 77, "uploadDate": None}})

        dto = self.client.upload_document(
            "P1", file_name="termo.pdf", file_type="pdf", file_url="/uploads/P1/termo.pdf"
        )

        self.client.session.request.assert_called_once_with(
            "POST",
            "http://api.local/api/patients/P1/documents",
            json={"fileName": "termo.pdf", "fileType": "pdf", "fileUrl": "/uploads/P1/termo.pdf"},
            timeout=2.0,
        )
        self.assertEqual(dto.id, "77")
        self.assertEqual(dto.patient_id, "P1")
        self.assertEqual(dto.url, "/uploads/P1/termo.pdf")


class ApiRepositoriesTests(TestCase):
    def test_snapshot_repo_maps_entities(self):
        client = MagicMock()
        client.list_diagnoses.return_value = []
        client.list_treatments.return_value = []
        repo = SnapshotRepoImpl(client)
        self.assertEqual(repo.list_diagnosis_configs(), [])
        self.assertEqual(repo.list_treatments(), [])
        client.list_diagnoses.assert_called_once_with()

    def test_dose_repo_delegates(self):
        client = MagicMock()
        repo = DoseRepoImpl(client)
        repo.update("D1", {"status": "Aplicada"})
        repo.update_survey("D1", {"surveyStatus": "Enviado"})
        client.update_dose.assert_called_once_with("D1", {"status": "Aplicada"})
        client.update_dose_survey.assert_called_once_with("D1", {"surveyStatus": "Enviado"})

    def test_consent_repo_returns_entity(self):
        client = MagicMock()
        client.upload_document.return_value = ConsentDocumentDTO(id="9", patient_id="P1", file_name="a.pdf")
        doc = ConsentDocumentRepoImpl(client).upload(
            "P1", file_name="a.pdf", file_type="pdf", file_url="/uploads/P1/a.pdf"
        )
        self.assertEqual(doc.id, "9")
        self.assertEqual(doc.patient_id, "P1")
