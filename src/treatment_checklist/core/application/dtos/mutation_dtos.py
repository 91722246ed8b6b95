from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from treatment_checklist.core.domain.enums import DoseStatus, PaymentStatus, SurveyStatus

# ───────────────────────────────────────────────
# Payloads de mutação (validados antes de qualquer I/O)
# ───────────────────────────────────────────────


class MutationPayload(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    def to_wire(self) -> dict[str, Any]:
        """Formato aceito pela API: camelCase, enums como rótulo, sem nulos."""
        return self.model_dump(by_alias=True, exclude_none=True, mode="json")


class DoseStatusUpdateDTO(MutationPayload):
    status: DoseStatus


class PaymentStatusUpdateDTO(MutationPayload):
    payment_status: PaymentStatus


class SurveyResponseDTO(MutationPayload):
    survey_status: Literal[SurveyStatus.ANSWERED] = SurveyStatus.ANSWERED
    survey_score: int = Field(ge=1, le=10)
    survey_comment: str | None = None

    @field_validator("survey_comment", mode="before")
    @classmethod
    def _blank_comment(cls, v):
        if isinstance(v, str) and not v.strip():
            return None
        return v


class SurveyMarkDTO(MutationPayload):
    """Marca a pesquisa como enviada / não enviada, sem nota."""

    survey_status: SurveyStatus

    @field_validator("survey_status")
    @classmethod
    def _only_sent_or_not_sent(cls, v: SurveyStatus) -> SurveyStatus:
        if v not in (SurveyStatus.SENT, SurveyStatus.NOT_SENT):
            raise ValueError("use SENT ou NOT_SENT; respostas exigem nota")
        return v


class ConsentDocumentUploadDTO(MutationPayload):
    file_name: str = Field(min_length=1)
    file_type: str
    file_url: str

    @classmethod
    def for_patient(cls, patient_id: str, file_name: str) -> ConsentDocumentUploadDTO:
        name = file_name.strip()
        return cls(
            file_name=name,
            file_type="pdf" if name.lower().endswith(".pdf") else "docx",
            file_url=f"/uploads/{patient_id}/{name}",
        )
