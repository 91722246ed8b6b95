from unittest import TestCase

from tests.helpers.factories import (
    make_diagnosis,
    make_document,
    make_dose,
    make_patient,
    make_protocol,
    make_snapshot,
    make_treatment,
)
from treatment_checklist.core.domain.entities.patient_entity import GuardianEntity
from treatment_checklist.core.domain.entities.snapshot_entity import ChecklistSnapshot
from treatment_checklist.core.domain.enums import (
    DoseStatus,
    PaymentStatus,
    ProtocolCategory,
    StepName,
    StepStatus,
    TreatmentStatus,
)
from treatment_checklist.core.domain.services.checklist_projector import (
    derive_checklist,
    summarize_pending,
)

OK, PENDING, NA = StepStatus.OK, StepStatus.PENDING, StepStatus.NA


class DeriveChecklistScenarioTests(TestCase):
    def test_fully_resolved_treatment_is_excluded(self):
        self.assertEqual(derive_checklist(make_snapshot()), [])

    def test_waiting_pix_treatment_is_included(self):
        snapshot = make_snapshot(doses=[make_dose(payment=PaymentStatus.WAITING_PIX)])
        items = derive_checklist(snapshot)

        self.assertEqual(len(items), 1)
        item = items[0]
        self.assertEqual(item.treatment_id, "T1")
        self.assertEqual(item.dose_id, "D1")
        self.assertFalse(item.is_complete)
        self.assertEqual(
            item.steps,
            {
                StepName.REGISTRATION: OK,
                StepName.MEDICATION: OK,
                StepName.CONSENT: NA,
                StepName.PAYMENT: PENDING,
                StepName.DELIVERY: PENDING,
                StepName.APPLICATION: OK,
                StepName.SURVEY: OK,
            },
        )
        self.assertEqual(item.pending_steps, [StepName.PAYMENT, StepName.DELIVERY])

    def test_denormalized_fields(self):
        snapshot = make_snapshot(doses=[make_dose(status=DoseStatus.PENDING)])
        item = derive_checklist(snapshot)[0]
        self.assertEqual(item.patient_name, "Maria da Silva")
        self.assertEqual(item.guardian_name, "Ana da Silva")
        self.assertEqual(item.phone, "(11) 99999-0000")
        self.assertEqual(item.diagnosis, "Artrite Reumatoide")
        self.assertEqual(item.protocol_name, "Imunobiológico mensal")
        self.assertEqual(item.missing_info, [])


class DeriveChecklistPropertyTests(TestCase):
    def test_empty_snapshot(self):
        self.assertEqual(derive_checklist(ChecklistSnapshot.build()), [])

    def test_terminal_treatments_never_appear(self):
        for status in (TreatmentStatus.FINISHED, TreatmentStatus.REFUSED):
            with self.subTest(status=status):
                snapshot = make_snapshot(
                    treatments=[make_treatment(status=status)],
                    doses=[make_dose(status=DoseStatus.PENDING, payment=PaymentStatus.WAITING_PIX)],
                )
                self.assertEqual(derive_checklist(snapshot), [])

    def test_other_non_terminal_statuses_are_eligible(self):
        for status in (TreatmentStatus.EXTERNAL, TreatmentStatus.SUSPENDED):
            with self.subTest(status=status):
                snapshot = make_snapshot(
                    treatments=[make_treatment(status=status)],
                    doses=[make_dose(status=DoseStatus.PENDING)],
                )
                self.assertEqual(len(derive_checklist(snapshot)), 1)

    def test_non_medication_protocol_is_ignored(self):
        snapshot = make_snapshot(
            protocols=[make_protocol(category=ProtocolCategory.MONITORING)],
            doses=[make_dose(status=DoseStatus.PENDING)],
        )
        self.assertEqual(derive_checklist(snapshot), [])

    def test_missing_patient_or_protocol_is_skipped_silently(self):
        snapshot = make_snapshot(
            treatments=[
                make_treatment("T1", patient_id="NOPE"),
                make_treatment("T2", protocol_id="NOPE"),
            ],
            doses=[],
        )
        self.assertEqual(derive_checklist(snapshot), [])

    def test_whitespace_registration_fields_do_not_include_treatment(self):
        patient = make_patient(
            full_name="   ", guardian=GuardianEntity(full_name=" ", phone_primary="11 9999")
        )
        self.assertEqual(derive_checklist(make_snapshot(patients=[patient])), [])

    def test_single_pending_step_flips_inclusion(self):
        self.assertEqual(derive_checklist(make_snapshot()), [])
        snapshot = make_snapshot(patients=[make_patient(address=None)])
        items = derive_checklist(snapshot)
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].pending_steps, [StepName.REGISTRATION])
        self.assertEqual(items[0].missing_info, ["Endereco Completo"])

    def test_consent_gating(self):
        configs = [make_diagnosis(requires_consent=True)]
        without_doc = derive_checklist(make_snapshot(diagnosis_configs=configs))
        self.assertEqual(without_doc[0].steps[StepName.CONSENT], PENDING)

        with_doc = derive_checklist(
            make_snapshot(diagnosis_configs=configs, consent_documents=[make_document()])
        )
        self.assertEqual(with_doc, [])

    def test_document_of_other_patient_does_not_count(self):
        snapshot = make_snapshot(
            diagnosis_configs=[make_diagnosis(requires_consent=True)],
            consent_documents=[make_document(patient_id="P2")],
        )
        self.assertEqual(derive_checklist(snapshot)[0].steps[StepName.CONSENT], PENDING)

    def test_duplicate_diagnosis_name_first_wins(self):
        snapshot = make_snapshot(
            diagnosis_configs=[
                make_diagnosis(requires_consent=True, did="A"),
                make_diagnosis(requires_consent=False, did="B"),
            ]
        )
        self.assertEqual(derive_checklist(snapshot)[0].steps[StepName.CONSENT], PENDING)

    def test_treatment_without_doses(self):
        snapshot = make_snapshot(doses=[])
        item = derive_checklist(snapshot)[0]
        self.assertIsNone(item.dose_id)
        self.assertIs(item.steps[StepName.MEDICATION], OK)
        for step in (StepName.PAYMENT, StepName.DELIVERY, StepName.APPLICATION, StepName.SURVEY):
            self.assertIs(item.steps[step], PENDING)

    def test_output_follows_treatment_order(self):
        snapshot = make_snapshot(
            treatments=[make_treatment("T2"), make_treatment("T1")],
            doses=[],
        )
        self.assertEqual([i.treatment_id for i in derive_checklist(snapshot)], ["T2", "T1"])

    def test_every_item_carries_all_steps(self):
        snapshot = make_snapshot(doses=[make_dose(status=DoseStatus.PENDING)])
        for item in derive_checklist(snapshot):
            self.assertEqual(list(item.steps), list(StepName))

    def test_derivation_is_repeatable(self):
        snapshot = make_snapshot(doses=[make_dose(payment=PaymentStatus.WAITING_DELIVERY)])
        self.assertEqual(derive_checklist(snapshot), derive_checklist(snapshot))


class SummarizePendingTests(TestCase):
    def test_counts_per_step(self):
        snapshot = make_snapshot(
            treatments=[make_treatment("T1"), make_treatment("T2")],
            doses=[
                make_dose("D1", treatment_id="T1", payment=PaymentStatus.WAITING_PIX),
                make_dose("D2", treatment_id="T2", payment=PaymentStatus.WAITING_DELIVERY),
            ],
        )
        summary = summarize_pending(derive_checklist(snapshot))
        self.assertEqual(summary[StepName.PAYMENT], 1)
        self.assertEqual(summary[StepName.DELIVERY], 2)
        self.assertEqual(summary[StepName.REGISTRATION], 0)
        self.assertEqual(list(summary), list(StepName))
