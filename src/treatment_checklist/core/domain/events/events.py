from __future__ import annotations

import uuid
from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any


# ───────────────────────────────────────────────
# Event Base e Domain Events
# ───────────────────────────────────────────────
@dataclass(frozen=True, kw_only=True)
class DomainEvent:
    event_id: uuid.UUID = field(default_factory=uuid.uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True, kw_only=True)
class DoseUpdatedEvent(DomainEvent):
    """Uma dose foi alterada no repositório externo."""
    dose_id: str
    operation: str
    changes: dict[str, Any]


@dataclass(frozen=True, kw_only=True)
class ConsentDocumentUploadedEvent(DomainEvent):
    patient_id: str
    document_id: str | None
    file_name: str
