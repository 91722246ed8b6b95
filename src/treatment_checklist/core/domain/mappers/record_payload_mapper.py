from __future__ import annotations

from datetime import UTC, datetime

import structlog

from treatment_checklist.core.application.dtos.record_store_dtos import (
    AddressDTO,
    ConsentDocumentDTO,
    DiagnosisDTO,
    DoseDTO,
    GuardianDTO,
    PatientDTO,
    ProtocolDTO,
    TreatmentDTO,
)
from treatment_checklist.core.domain.entities.consent_entity import (
    ConsentDocumentEntity,
    DiagnosisConfigEntity,
)
from treatment_checklist.core.domain.entities.dose_entity import DoseEntity
from treatment_checklist.core.domain.entities.patient_entity import (
    AddressEntity,
    GuardianEntity,
    PatientEntity,
)
from treatment_checklist.core.domain.entities.treatment_entity import ProtocolEntity, TreatmentEntity

logger = structlog.get_logger(__name__)


class MappingError(Exception):
    """Erro no mapeamento DTO ➜ Entity."""


class RecordPayloadMapper:
    # ───────────────────────── helpers ──────────────────────────
    @staticmethod
    def _aware(value: datetime | None) -> datetime | None:
        """Datas sem fuso são tratadas como UTC para permitir ordenação."""
        if value is None or value.tzinfo is not None:
            return value
        return value.replace(tzinfo=UTC)

    @staticmethod
    def _guardian(dto: GuardianDTO | None) -> GuardianEntity | None:
        if dto is None:
            return None
        return GuardianEntity(
            full_name=dto.full_name,
            phone_primary=dto.phone_primary,
            phone_secondary=dto.phone_secondary,
            email=dto.email,
            relationship=dto.relationship,
        )

    @staticmethod
    def _address(dto: AddressDTO | None) -> AddressEntity | None:
        if dto is None:
            return None
        return AddressEntity(
            street=dto.street or "",
            number=dto.number or "",
            city=dto.city or "",
            state=dto.state or "",
            zip_code=dto.zip_code or "",
            complement=dto.complement,
            neighborhood=dto.neighborhood,
        )

    # ───────────────────────── pacientes ────────────────────────
    @classmethod
    def map_patient(cls, dto: PatientDTO) -> PatientEntity:
        try:
            return PatientEntity(
                id=dto.id,
                full_name=dto.full_name,
                main_diagnosis=dto.main_diagnosis,
                guardian=cls._guardian(dto.guardian),
                address=cls._address(dto.address),
                birth_date=dto.birth_date,
                active=dto.active,
            )
        except Exception as exc:  # pragma: no cover
            logger.error("map_patient", error=str(exc), dto=dto.model_dump())
            raise MappingError(exc) from exc

    # ──────────────────── tratamentos / protocolos ───────────────
    @classmethod
    def map_treatment(cls, dto: TreatmentDTO) -> TreatmentEntity:
        try:
            return TreatmentEntity(
                id=dto.id,
                patient_id=dto.patient_id,
                protocol_id=dto.protocol_id,
                status=dto.status,
                start_date=dto.start_date,
                next_consultation_date=dto.next_consultation_date,
                observations=dto.observations,
                planned_doses_before_consult=dto.planned_doses_before_consult,
            )
        except Exception as exc:  # pragma: no cover
            logger.error("map_treatment", error=str(exc), dto=dto.model_dump())
            raise MappingError(exc) from exc

    @classmethod
    def map_protocol(cls, dto: ProtocolDTO) -> ProtocolEntity:
        return ProtocolEntity(
            id=dto.id,
            name=dto.name,
            category=dto.category,
            medication_type=dto.medication_type or None,
            frequency_days=dto.frequency_days,
        )

    # ─────────────────────────── doses ──────────────────────────
    @classmethod
    def map_dose(cls, dto: DoseDTO) -> DoseEntity:
        try:
            return DoseEntity(
                id=dto.id,
                treatment_id=dto.treatment_id,
                application_date=cls._aware(dto.application_date),
                status=dto.status,
                payment_status=dto.payment_status,
                nurse=dto.nurse,
                survey_status=dto.survey_status,
                survey_score=dto.survey_score,
                survey_comment=dto.survey_comment,
                cycle_number=dto.cycle_number,
                lot_number=dto.lot_number,
            )
        except Exception as exc:  # pragma: no cover
            logger.error("map_dose", error=str(exc), dto=dto.model_dump())
            raise MappingError(exc) from exc

    # ─────────────────── termos / diagnósticos ──────────────────
    @classmethod
    def map_consent_document(cls, dto: ConsentDocumentDTO) -> ConsentDocumentEntity:
        return ConsentDocumentEntity(
            id=dto.id,
            patient_id=dto.patient_id,
            file_name=dto.file_name,
            file_type=dto.file_type,
            url=dto.url,
            upload_date=cls._aware(dto.upload_date),
        )

    @classmethod
    def map_diagnosis(cls, dto: DiagnosisDTO) -> DiagnosisConfigEntity:
        return DiagnosisConfigEntity(
            id=dto.id,
            name=dto.name,
            requires_consent=dto.requires_consent,
        )
