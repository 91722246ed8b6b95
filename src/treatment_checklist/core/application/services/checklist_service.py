from __future__ import annotations

import structlog

from treatment_checklist.adapters.observability.metrics import MUTATION_COUNT
from treatment_checklist.core.application.commands.consent_commands import UploadConsentDocumentCommand
from treatment_checklist.core.application.commands.dose_commands import (
    ConfirmDeliveryCommand,
    MarkSurveyCommand,
    RecordSurveyResponseCommand,
    UpdateDosePaymentStatusCommand,
    UpdateDoseStatusCommand,
)
from treatment_checklist.core.application.cqrs import CommandBus, CommandDTO, QueryBus
from treatment_checklist.core.application.queries.checklist_queries import GetChecklistQuery
from treatment_checklist.core.domain.entities.checklist_item_entity import ChecklistItemEntity
from treatment_checklist.core.domain.enums import StepName
from treatment_checklist.core.domain.events.exceptions import ChecklistError

logger = structlog.get_logger(__name__)


class ChecklistFacadeService:
    """
    Fachada usada pelos consumidores (CLI, relatórios).

    - `get_checklist()` busca um snapshot novo e deriva o checklist
    - cada mutação é enviada ao repositório externo e, em caso de sucesso,
      o checklist é derivado de novo a partir de um snapshot recém-buscado
    - em caso de falha a exceção sobe e nada é re-derivado
    """

    def __init__(self, command_bus: CommandBus, query_bus: QueryBus) -> None:
        self.commands = command_bus
        self.queries = query_bus

    # ------------------------------------------------ leitura
    def get_checklist(
        self, step: StepName | str | None = None, search: str | None = None
    ) -> list[ChecklistItemEntity]:
        filtros = {k: v for k, v in {"step": step, "search": search}.items() if v}
        return self.queries.dispatch(GetChecklistQuery(filtros=filtros))

    # ------------------------------------------------ mutação + re-derivação
    def apply(self, command: CommandDTO) -> list[ChecklistItemEntity]:
        operation = type(command).__name__
        try:
            self.commands.dispatch(command)
        except ChecklistError as exc:
            MUTATION_COUNT.labels(operation, "false").inc()
            logger.warning("checklist.mutation_rejected", command=operation, error=str(exc))
            raise
        MUTATION_COUNT.labels(operation, "true").inc()
        return self.get_checklist()

    def update_dose_status(self, dose_id: str, status: str) -> list[ChecklistItemEntity]:
        return self.apply(UpdateDoseStatusCommand(dose_id=dose_id, status=status))

    def update_payment_status(self, dose_id: str, payment_status: str) -> list[ChecklistItemEntity]:
        return self.apply(UpdateDosePaymentStatusCommand(dose_id=dose_id, payment_status=payment_status))

    def confirm_delivery(self, dose_id: str) -> list[ChecklistItemEntity]:
        return self.apply(ConfirmDeliveryCommand(dose_id=dose_id))

    def upload_consent(self, patient_id: str, file_name: str) -> list[ChecklistItemEntity]:
        return self.apply(UploadConsentDocumentCommand(patient_id=patient_id, file_name=file_name))

    def record_survey(
        self, dose_id: str, score: int, comment: str | None = None
    ) -> list[ChecklistItemEntity]:
        return self.apply(RecordSurveyResponseCommand(dose_id=dose_id, score=score, comment=comment))

    def mark_survey(self, dose_id: str, survey_status: str) -> list[ChecklistItemEntity]:
        return self.apply(MarkSurveyCommand(dose_id=dose_id, survey_status=survey_status))
