from dataclasses import dataclass

from treatment_checklist.core.application.cqrs import CommandDTO


@dataclass(frozen=True)
class UpdateDoseStatusCommand(CommandDTO):
    dose_id: str
    status: str  # Aplicada / Pendente / Não Realizada (ou APPLIED, ...)


@dataclass(frozen=True)
class UpdateDosePaymentStatusCommand(CommandDTO):
    dose_id: str
    payment_status: str


@dataclass(frozen=True)
class ConfirmDeliveryCommand(CommandDTO):
    """Entrega confirmada ⇒ paymentStatus = PAGO."""
    dose_id: str


@dataclass(frozen=True)
class RecordSurveyResponseCommand(CommandDTO):
    dose_id: str
    score: int
    comment: str | None = None


@dataclass(frozen=True)
class MarkSurveyCommand(CommandDTO):
    dose_id: str
    survey_status: str  # SENT / NOT_SENT
