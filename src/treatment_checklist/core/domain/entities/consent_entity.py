from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from treatment_checklist.core.domain.entities._base import EntityMixin


@dataclass(frozen=True, slots=True)
class ConsentDocumentEntity(EntityMixin):
    id: str
    patient_id: str
    file_name: str | None = None
    file_type: str | None = None
    url: str | None = None
    upload_date: datetime | None = None


@dataclass(frozen=True, slots=True)
class DiagnosisConfigEntity(EntityMixin):
    id: str
    name: str
    requires_consent: bool = False
