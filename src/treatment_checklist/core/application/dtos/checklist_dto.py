from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from treatment_checklist.core.domain.entities.checklist_item_entity import ChecklistItemEntity
from treatment_checklist.core.domain.enums import StepStatus


class ChecklistItemDTO(BaseModel):
    """Representação de saída (JSON camelCase) de um item do checklist."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    treatment_id: str
    patient_id: str
    dose_id: str | None = None
    patient_name: str
    guardian_name: str
    phone: str
    diagnosis: str
    protocol_name: str
    steps: dict[str, StepStatus]
    is_complete: bool
    missing_info: list[str] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, item: ChecklistItemEntity) -> ChecklistItemDTO:
        return cls(
            treatment_id=item.treatment_id,
            patient_id=item.patient_id,
            dose_id=item.dose_id,
            patient_name=item.patient_name,
            guardian_name=item.guardian_name,
            phone=item.phone,
            diagnosis=item.diagnosis,
            protocol_name=item.protocol_name,
            steps={name.value: status for name, status in item.steps.items()},
            is_complete=item.is_complete,
            missing_info=list(item.missing_info),
        )
