from __future__ import annotations

from enum import Enum
from typing import Any, TypeVar

import structlog
from pydantic import BaseModel, ValidationError

from treatment_checklist.core.application.commands.consent_commands import UploadConsentDocumentCommand
from treatment_checklist.core.application.commands.dose_commands import (
    ConfirmDeliveryCommand,
    MarkSurveyCommand,
    RecordSurveyResponseCommand,
    UpdateDosePaymentStatusCommand,
    UpdateDoseStatusCommand,
)
from treatment_checklist.core.application.cqrs import CommandHandler
from treatment_checklist.core.application.dtos.mutation_dtos import (
    ConsentDocumentUploadDTO,
    DoseStatusUpdateDTO,
    PaymentStatusUpdateDTO,
    SurveyMarkDTO,
    SurveyResponseDTO,
)
from treatment_checklist.core.domain.enums import DoseStatus, PaymentStatus, SurveyStatus
from treatment_checklist.core.domain.events.events import (
    ConsentDocumentUploadedEvent,
    DoseUpdatedEvent,
)
from treatment_checklist.core.domain.events.exceptions import (
    DeliveryConfirmationError,
    DocumentUploadError,
    DoseUpdateError,
    InvalidMutationError,
    MutationError,
    SurveyUpdateError,
)
from treatment_checklist.core.domain.repositories.consent_document_repository import (
    ConsentDocumentRepository,
)
from treatment_checklist.core.domain.repositories.dose_repository import DoseRepository

logger = structlog.get_logger(__name__)

P = TypeVar("P", bound=BaseModel)
E = TypeVar("E", bound=Enum)


def _validate(model: type[P], **data: Any) -> P:
    try:
        return model(**data)
    except ValidationError as exc:
        raise InvalidMutationError(str(exc)) from exc


def _coerce(enum_cls: type[E], value: Any) -> E:
    """Aceita o rótulo ('Aplicada') ou o nome do membro ('APPLIED')."""
    try:
        return enum_cls(value)
    except ValueError as exc:
        raise InvalidMutationError(f"{enum_cls.__name__} inválido: {value!r}") from exc


class _DoseMutationHandler:
    """Base: valida, envia a alteração parcial e devolve o evento de domínio."""

    operation = "update_dose"
    error_cls: type[MutationError] = DoseUpdateError

    def __init__(self, repo: DoseRepository):
        self.repo = repo

    def _send(self, dose_id: str, changes: dict[str, Any]) -> None:
        self.repo.update(dose_id, changes)

    def _apply(self, dose_id: str, payload: BaseModel) -> DoseUpdatedEvent:
        changes = payload.to_wire()
        log = logger.bind(dose_id=dose_id, operation=self.operation)
        try:
            self._send(dose_id, changes)
        except Exception as exc:
            log.error("dose.mutation_failed", error=str(exc))
            raise self.error_cls(str(exc)) from exc
        log.info("dose.mutation_applied", changes=changes)
        return DoseUpdatedEvent(dose_id=dose_id, operation=self.operation, changes=changes)


class UpdateDoseStatusHandler(_DoseMutationHandler, CommandHandler[UpdateDoseStatusCommand]):
    operation = "update_dose_status"

    def handle(self, cmd: UpdateDoseStatusCommand) -> DoseUpdatedEvent:
        payload = _validate(DoseStatusUpdateDTO, status=_coerce(DoseStatus, cmd.status))
        return self._apply(cmd.dose_id, payload)


class UpdateDosePaymentStatusHandler(
    _DoseMutationHandler, CommandHandler[UpdateDosePaymentStatusCommand]
):
    operation = "update_payment_status"

    def handle(self, cmd: UpdateDosePaymentStatusCommand) -> DoseUpdatedEvent:
        payload = _validate(
            PaymentStatusUpdateDTO, payment_status=_coerce(PaymentStatus, cmd.payment_status)
        )
        return self._apply(cmd.dose_id, payload)


class ConfirmDeliveryHandler(_DoseMutationHandler, CommandHandler[ConfirmDeliveryCommand]):
    operation = "confirm_delivery"
    error_cls = DeliveryConfirmationError

    def handle(self, cmd: ConfirmDeliveryCommand) -> DoseUpdatedEvent:
        payload = PaymentStatusUpdateDTO(payment_status=PaymentStatus.PAID)
        return self._apply(cmd.dose_id, payload)


class RecordSurveyResponseHandler(_DoseMutationHandler, CommandHandler[RecordSurveyResponseCommand]):
    operation = "record_survey_response"
    error_cls = SurveyUpdateError

    def _send(self, dose_id: str, changes: dict[str, Any]) -> None:
        self.repo.update_survey(dose_id, changes)

    def handle(self, cmd: RecordSurveyResponseCommand) -> DoseUpdatedEvent:
        payload = _validate(SurveyResponseDTO, survey_score=cmd.score, survey_comment=cmd.comment)
        return self._apply(cmd.dose_id, payload)


class MarkSurveyHandler(_DoseMutationHandler, CommandHandler[MarkSurveyCommand]):
    operation = "mark_survey"
    error_cls = SurveyUpdateError

    def _send(self, dose_id: str, changes: dict[str, Any]) -> None:
        self.repo.update_survey(dose_id, changes)

    def handle(self, cmd: MarkSurveyCommand) -> DoseUpdatedEvent:
        payload = _validate(SurveyMarkDTO, survey_status=_coerce(SurveyStatus, cmd.survey_status))
        return self._apply(cmd.dose_id, payload)


class UploadConsentDocumentHandler(CommandHandler[UploadConsentDocumentCommand]):
    operation = "upload_consent_document"

    def __init__(self, repo: ConsentDocumentRepository):
        self.repo = repo

    def handle(self, cmd: UploadConsentDocumentCommand) -> ConsentDocumentUploadedEvent:
        try:
            payload = ConsentDocumentUploadDTO.for_patient(cmd.patient_id, cmd.file_name)
        except ValidationError as exc:
            raise InvalidMutationError(str(exc)) from exc

        log = logger.bind(patient_id=cmd.patient_id, file_name=payload.file_name)
        try:
            doc = self.repo.upload(
                cmd.patient_id,
                file_name=payload.file_name,
                file_type=payload.file_type,
                file_url=payload.file_url,
            )
        except Exception as exc:
            log.error("consent.upload_failed", error=str(exc))
            raise DocumentUploadError(str(exc)) from exc

        log.info("consent.uploaded", document_id=doc.id)
        return ConsentDocumentUploadedEvent(
            patient_id=cmd.patient_id,
            document_id=doc.id,
            file_name=payload.file_name,
        )
