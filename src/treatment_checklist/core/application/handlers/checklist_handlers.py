from __future__ import annotations

import structlog

from treatment_checklist.adapters.observability.metrics import (
    CHECKLIST_DERIVATION_DURATION,
    CHECKLIST_PENDING_ITEMS,
)
from treatment_checklist.core.application.cqrs import QueryHandler
from treatment_checklist.core.application.queries.checklist_queries import GetChecklistQuery
from treatment_checklist.core.application.services.snapshot_service import SnapshotService
from treatment_checklist.core.domain.entities.checklist_item_entity import ChecklistItemEntity
from treatment_checklist.core.domain.enums import StepName, StepStatus
from treatment_checklist.core.domain.services.checklist_projector import derive_checklist

logger = structlog.get_logger(__name__)


class GetChecklistHandler(QueryHandler[GetChecklistQuery, list[ChecklistItemEntity]]):
    """Sempre busca um snapshot novo: nada é reaproveitado entre chamadas."""

    def __init__(self, snapshot_service: SnapshotService):
        self.snapshot_service = snapshot_service

    def handle(self, q: GetChecklistQuery) -> list[ChecklistItemEntity]:
        snapshot = self.snapshot_service.load()

        with CHECKLIST_DERIVATION_DURATION.time():
            items = derive_checklist(snapshot)
        CHECKLIST_PENDING_ITEMS.set(len(items))

        filtros = q.filtros or {}
        if step := filtros.get("step"):
            name = StepName(step)
            items = [i for i in items if i.steps[name] is StepStatus.PENDING]
        if search := (filtros.get("search") or "").strip().lower():
            items = [
                i for i in items
                if search in i.patient_name.lower() or search in i.guardian_name.lower()
            ]
        return items
