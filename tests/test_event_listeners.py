from unittest import TestCase
from unittest.mock import patch

from treatment_checklist.adapters.observability import event_listeners
from treatment_checklist.adapters.observability.metrics import registry
from treatment_checklist.core.domain.events.events import ConsentDocumentUploadedEvent, DoseUpdatedEvent


def _count(event_name: str) -> float:
    return registry.get_sample_value("checklist_domain_events_total", {"event": event_name}) or 0.0


class AuditDomainEventTests(TestCase):
    def test_dose_update_is_logged_and_counted(self):
        before = _count("DoseUpdatedEvent")
        evt = DoseUpdatedEvent(dose_id="D1", operation="confirm_delivery", changes={"paymentStatus": "PAGO"})

        with patch.object(event_listeners, "audit_log") as audit_log:
            event_listeners.audit_domain_event(evt)

        self.assertEqual(_count("DoseUpdatedEvent"), before + 1)
        audit_log.info.assert_called_once()
        fields = audit_log.info.call_args.kwargs
        self.assertEqual(audit_log.info.call_args.args, ("audit.mutation_applied",))
        self.assertEqual(fields["dose_id"], "D1")
        self.assertEqual(fields["operation"], "confirm_delivery")
        self.assertEqual(fields["changes"], {"paymentStatus": "PAGO"})
        self.assertEqual(fields["event_id"], str(evt.event_id))

    def test_consent_upload_is_logged_and_counted(self):
        before = _count("ConsentDocumentUploadedEvent")
        evt = ConsentDocumentUploadedEvent(patient_id="P1", document_id="DOC9", file_name="termo.pdf")

        with patch.object(event_listeners, "audit_log") as audit_log:
            event_listeners.audit_domain_event(evt)

        self.assertEqual(_count("ConsentDocumentUploadedEvent"), before + 1)
        fields = audit_log.info.call_args.kwargs
        self.assertEqual(fields["patient_id"], "P1")
        self.assertEqual(fields["document_id"], "DOC9")
        self.assertEqual(fields["file_name"], "termo.pdf")
        self.assertNotIn("dose_id", fields)
