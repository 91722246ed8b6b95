"""
Ouvintes de eventos de domínio registrados pelo composition root.

`audit_domain_event` deixa uma linha de auditoria por mutação aplicada no
repositório externo e conta os eventos publicados por tipo.
"""
from __future__ import annotations

from typing import Any

import structlog

from treatment_checklist.adapters.observability.metrics import DOMAIN_EVENT_COUNT
from treatment_checklist.core.domain.events.events import (
    ConsentDocumentUploadedEvent,
    DomainEvent,
    DoseUpdatedEvent,
)

audit_log = structlog.get_logger("treatment_checklist.audit")


def _audit_fields(event: DomainEvent) -> dict[str, Any]:
    match event:
        case DoseUpdatedEvent():
            return {"dose_id": event.dose_id, "operation": event.operation, "changes": dict(event.changes)}
        case ConsentDocumentUploadedEvent():
            return {
                "patient_id": event.patient_id,
                "document_id": event.document_id,
                "file_name": event.file_name,
            }
        case _:
            return {}


def audit_domain_event(event: DomainEvent) -> None:
    event_name = type(event).__name__
    DOMAIN_EVENT_COUNT.labels(event=event_name).inc()
    audit_log.info(
        "audit.mutation_applied",
        event_name=event_name,
        event_id=str(event.event_id),
        occurred_at=event.occurred_at.isoformat(),
        **_audit_fields(event),
    )
