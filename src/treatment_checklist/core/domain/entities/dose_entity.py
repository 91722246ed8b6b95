from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from treatment_checklist.core.domain.entities._base import EntityMixin
from treatment_checklist.core.domain.enums import DoseStatus, PaymentStatus, SurveyStatus


@dataclass(frozen=True, slots=True)
class DoseEntity(EntityMixin):
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

    @property
    def survey_outstanding(self) -> bool:
        """Enfermagem atendeu e a pesquisa ainda aguarda resposta."""
        return self.nurse and self.survey_status not in (
            SurveyStatus.ANSWERED,
            SurveyStatus.NOT_SENT,
        )

    @property
    def is_unresolved(self) -> bool:
        return (
            self.status is not DoseStatus.APPLIED
            or self.payment_status is not PaymentStatus.PAID
            or self.survey_outstanding
        )
