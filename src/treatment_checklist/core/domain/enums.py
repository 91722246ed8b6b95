from __future__ import annotations

from enum import Enum

# ───────────────────────────────────────────────
# Enumerações do domínio (valores = rótulos gravados pela API)
# ───────────────────────────────────────────────


class _LabeledEnum(str, Enum):
    """
    Enum cujo valor é o rótulo em português enviado pela API.
    Aceita também o nome do membro (ex.: "PAID") como alias.
    """

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            member = cls.__members__.get(value.strip().upper())
            if member is not None:
                return member
        return None

    def __str__(self) -> str:
        return self.value


class TreatmentStatus(_LabeledEnum):
    ONGOING = "Em andamento"
    FINISHED = "Encerrado"
    REFUSED = "Recusado"
    EXTERNAL = "Medicamento Externo"
    SUSPENDED = "Suspenso"

    @property
    def is_terminal(self) -> bool:
        return self in (TreatmentStatus.FINISHED, TreatmentStatus.REFUSED)


class ProtocolCategory(_LabeledEnum):
    MEDICATION = "Medicamentoso"
    MONITORING = "Régua de Contato / Acompanhamento"


class DoseStatus(_LabeledEnum):
    PENDING = "Pendente"
    APPLIED = "Aplicada"
    NOT_ACCEPTED = "Não Realizada"


class PaymentStatus(_LabeledEnum):
    WAITING_PIX = "Aguardando PIX"
    WAITING_CARD = "Aguardando Cartão"
    WAITING_BOLETO = "Aguardando Boleto"
    WAITING_DELIVERY = "AGUARDANDO ENTREGA"
    PAID = "PAGO"


class SurveyStatus(_LabeledEnum):
    WAITING = "Aguardando"
    SENT = "Enviado"
    ANSWERED = "Respondido"
    NOT_SENT = "Não Enviado"


class StepStatus(str, Enum):
    OK = "OK"
    PENDING = "PENDING"
    NA = "NA"

    @property
    def is_resolved(self) -> bool:
        return self is not StepStatus.PENDING


class StepName(str, Enum):
    """Etapas do checklist, na ordem em que aparecem para a equipe."""

    REGISTRATION = "registration"
    MEDICATION = "medication"
    CONSENT = "consent"
    PAYMENT = "payment"
    DELIVERY = "delivery"
    APPLICATION = "application"
    SURVEY = "survey"

    @property
    def label(self) -> str:
        return STEP_LABELS[self]


STEP_LABELS: dict[StepName, str] = {
    StepName.REGISTRATION: "Cadastro",
    StepName.MEDICATION: "Medicamento",
    StepName.CONSENT: "Termo",
    StepName.PAYMENT: "Pagamento",
    StepName.DELIVERY: "Entrega",
    StepName.APPLICATION: "Aplicacao",
    StepName.SURVEY: "Pesquisa",
}
