from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from treatment_checklist.core.domain.entities._base import EntityMixin
from treatment_checklist.core.domain.enums import ProtocolCategory, TreatmentStatus


@dataclass(frozen=True, slots=True)
class ProtocolEntity(EntityMixin):
    id: str
    name: str
    category: ProtocolCategory
    medication_type: str | None = None
    frequency_days: int | None = None

    @property
    def is_medication(self) -> bool:
        return self.category is ProtocolCategory.MEDICATION


@dataclass(frozen=True, slots=True)
class TreatmentEntity(EntityMixin):
    id: str
    patient_id: str
    protocol_id: str
    status: TreatmentStatus
    start_date: date | None = None
    next_consultation_date: date | None = None
    observations: str | None = None
    planned_doses_before_consult: int | None = None
