from types import SimpleNamespace
from unittest import TestCase
from unittest.mock import MagicMock, patch

from treatment_checklist.adapters.config import composition_root
from treatment_checklist.adapters.observability.event_listeners import audit_domain_event
from treatment_checklist.adapters.observability.metrics import registry
from treatment_checklist.core.application.commands.consent_commands import UploadConsentDocumentCommand
from treatment_checklist.core.application.commands.dose_commands import (
    ConfirmDeliveryCommand,
    MarkSurveyCommand,
    RecordSurveyResponseCommand,
    UpdateDosePaymentStatusCommand,
    UpdateDoseStatusCommand,
)
from treatment_checklist.core.application.queries.checklist_queries import GetChecklistQuery
from treatment_checklist.core.application.services.checklist_service import ChecklistFacadeService
from treatment_checklist.core.domain.events.events import ConsentDocumentUploadedEvent, DoseUpdatedEvent

SETTINGS = SimpleNamespace(
    CLINIC_API_BASE="http://records.local/api",
    CLINIC_API_TOKEN="secret",
    CLINIC_API_TIMEOUT=3.0,
    CLINIC_API_RETRIES=1,
    TREATMENTS_FETCH_LIMIT=50,
    PATIENTS_FETCH_LIMIT=60,
    DOSES_FETCH_LIMIT=70,
    SNAPSHOT_FETCH_WORKERS=2,
)


class CompositionRootTests(TestCase):
    def setUp(self):
        composition_root.reset_container()
        self.addCleanup(composition_root.reset_container)

    def test_wires_buses_and_service(self):
        container = composition_root.setup_di_container_from_settings(SETTINGS)

        self.assertIsInstance(container.checklist_service(), ChecklistFacadeService)
        self.assertEqual(
            set(container.command_bus()._handlers),
            {
                UpdateDoseStatusCommand,
                UpdateDosePaymentStatusCommand,
                ConfirmDeliveryCommand,
                RecordSurveyResponseCommand,
                MarkSurveyCommand,
                UploadConsentDocumentCommand,
            },
        )
        self.assertEqual(set(container.query_bus()._handlers), {GetChecklistQuery})

    def test_settings_reach_client_and_snapshot_service(self):
        container = composition_root.setup_di_container_from_settings(SETTINGS)
        client = container.clinic_client()
        self.assertEqual(client.base_url, "http://records.local/api/")
        self.assertEqual(client.timeout, 3.0)
        self.assertEqual(client.doses_limit, 70)
        self.assertEqual(client.session.headers["Authorization"], "Bearer secret")
        self.assertEqual(container.snapshot_service().max_workers, 2)

    def test_container_is_reused(self):
        first = composition_root.setup_di_container_from_settings(SETTINGS)
        self.assertIs(composition_root.setup_di_container_from_settings(SETTINGS), first)

    def test_audit_listener_receives_every_mutation_event(self):
        container = composition_root.setup_di_container_from_settings(SETTINGS)
        dispatcher = container.event_dispatcher()

        self.assertIs(container.command_bus().dispatcher, dispatcher)
        self.assertIn(audit_domain_event, dispatcher.listeners(DoseUpdatedEvent))
        self.assertIn(audit_domain_event, dispatcher.listeners(ConsentDocumentUploadedEvent))

    def test_command_through_container_is_audited(self):
        container = composition_root.setup_di_container_from_settings(SETTINGS)
        labels = {"event": "DoseUpdatedEvent"}
        before = registry.get_sample_value("checklist_domain_events_total", labels) or 0.0
        resp = MagicMock(status_code=204, content=b"")

        with patch.object(container.clinic_client().session, "request", return_value=resp) as request:
            container.command_bus().dispatch(ConfirmDeliveryCommand("D1"))

        request.assert_called_once()
        self.assertEqual(request.call_args.kwargs["json"], {"paymentStatus": "PAGO"})
        self.assertEqual(registry.get_sample_value("checklist_domain_events_total", labels), before + 1)
