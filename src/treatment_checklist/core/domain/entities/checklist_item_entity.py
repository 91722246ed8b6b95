from __future__ import annotations

from dataclasses import dataclass, field

from treatment_checklist.core.domain.entities._base import EntityMixin
from treatment_checklist.core.domain.enums import StepName, StepStatus


@dataclass(frozen=True, slots=True)
class ChecklistItemEntity(EntityMixin):
    """Linha derivada do checklist. Nunca é persistida."""

    treatment_id: str
    patient_id: str
    dose_id: str | None
    patient_name: str
    guardian_name: str
    phone: str
    diagnosis: str
    protocol_name: str
    steps: dict[StepName, StepStatus]
    is_complete: bool
    missing_info: list[str] = field(default_factory=list)

    @property
    def pending_steps(self) -> list[StepName]:
        return [name for name, st in self.steps.items() if st is StepStatus.PENDING]
