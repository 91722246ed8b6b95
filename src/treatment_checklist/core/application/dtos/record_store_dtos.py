from __future__ import annotations

from datetime import date, datetime
from typing import Annotated, Generic, TypeVar

from pydantic import AliasChoices, BaseModel, BeforeValidator, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from treatment_checklist.core.domain.enums import (
    DoseStatus,
    PaymentStatus,
    ProtocolCategory,
    SurveyStatus,
    TreatmentStatus,
)

# ───────────────────────────────────────────────
# DTOs do repositório externo (JSON camelCase)
# ───────────────────────────────────────────────


class RecordBaseModel(BaseModel):
    """
    BaseModel padrão da API de registros:
    - aliases camelCase (patientId, applicationDate, ...)
    - aceita snake_case também
    - ignora campos que o checklist não usa
    - ids numéricos viram string
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )


def _date_only(v):
    """'2015-03-02T00:00:00.000Z' ⇒ date(2015, 3, 2); vazios e datas zeradas ⇒ None."""
    if v is None:
        return None
    if isinstance(v, str):
        s = v.strip()
        if not s or s.startswith("-") or s.startswith("0000"):
            return None
        try:
            return date.fromisoformat(s.split("T")[0].split(" ")[0])
        except ValueError:
            return None
    return v


SafeDate = Annotated[date | None, BeforeValidator(_date_only)]


class GuardianDTO(RecordBaseModel):
    full_name: str | None = None
    phone_primary: str | None = None
    phone_secondary: str | None = None
    email: str | None = None
    relationship: str | None = None


class AddressDTO(RecordBaseModel):
    street: str | None = None
    number: str | None = None
    complement: str | None = None
    neighborhood: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None


class PatientDTO(RecordBaseModel):
    id: str
    full_name: str | None = None
    main_diagnosis: str | None = None
    guardian: GuardianDTO | None = None
    address: AddressDTO | None = None
    birth_date: SafeDate = None
    active: bool = True


class ProtocolDTO(RecordBaseModel):
    id: str
    name: str
    category: ProtocolCategory
    medication_type: str | None = None
    frequency_days: int | None = None


class TreatmentDTO(RecordBaseModel):
    id: str
    patient_id: str
    protocol_id: str
    status: TreatmentStatus
    start_date: SafeDate = None
    next_consultation_date: SafeDate = None
    observations: str | None = None
    planned_doses_before_consult: int | None = None


class DoseDTO(RecordBaseModel):
    id: str
    treatment_id: str
    application_date: datetime
    status: DoseStatus
    payment_status: PaymentStatus
    nurse: bool = False
    survey_status: SurveyStatus = SurveyStatus.NOT_SENT
    survey_score: int | None = None
    survey_comment: str | None = None
    cycle_number: int | None = None
    lot_number: str | None = None

    @field_validator("nurse", mode="before")
    @classmethod
    def _nurse_default(cls, v):
        return False if v is None else v

    @field_validator("survey_status", mode="before")
    @classmethod
    def _survey_default(cls, v):
        return SurveyStatus.NOT_SENT if v in (None, "") else v


class ConsentDocumentDTO(RecordBaseModel):
    id: str
    patient_id: str
    file_name: str | None = None
    file_type: str | None = None
    url: str | None = Field(None, validation_alias=AliasChoices("url", "fileUrl", "file_url"))
    upload_date: datetime | None = None


class DiagnosisDTO(RecordBaseModel):
    id: str
    name: str
    requires_consent: bool = False

    @field_validator("requires_consent", mode="before")
    @classmethod
    def _requires_consent_default(cls, v):
        return False if v is None else v


T = TypeVar("T", bound=BaseModel)


class DataListResponseDTO(BaseModel, Generic[T]):
    """Envelope `{"data": [...]}` usado por todas as listagens (paginadas ou não)."""

    model_config = ConfigDict(extra="ignore")

    data: list[T] = Field(default_factory=list)

    @field_validator("data", mode="before")
    @classmethod
    def _null_as_empty(cls, v):
        return [] if v is None else v
