"""
Regras de cada etapa do checklist.

Cada avaliador é uma função pura que recebe o contexto já resolvido
(paciente, dose ativa, configuração do diagnóstico) e devolve um StepStatus.
"""
from __future__ import annotations

from collections.abc import Mapping
from typing import assert_never

from treatment_checklist.core.domain.entities.consent_entity import DiagnosisConfigEntity
from treatment_checklist.core.domain.entities.dose_entity import DoseEntity
from treatment_checklist.core.domain.entities.patient_entity import PatientEntity
from treatment_checklist.core.domain.enums import (
    DoseStatus,
    PaymentStatus,
    StepStatus,
    SurveyStatus,
)

OK, PENDING, NA = StepStatus.OK, StepStatus.PENDING, StepStatus.NA


# ───────────────────────────────────────────────
# 1. Cadastro
# ───────────────────────────────────────────────
def missing_registration_fields(patient: PatientEntity) -> list[str]:
    """Rótulos dos campos obrigatórios ausentes, sempre na mesma ordem."""
    guardian = patient.guardian
    checks = (
        ("Nome Completo", not patient.full_name),
        ("Nome Responsavel", guardian is None or not guardian.full_name),
        ("Telefone", guardian is None or not guardian.phone_primary),
        ("Endereco Completo", patient.address is None),
    )
    return [label for label, missing in checks if missing]


def evaluate_registration(missing_info: list[str]) -> StepStatus:
    return PENDING if missing_info else OK


# ───────────────────────────────────────────────
# 2. Medicamento
# ───────────────────────────────────────────────
def evaluate_medication(dose: DoseEntity | None) -> StepStatus:
    # sem dose o passo fica OK; comportamento herdado e coberto por teste
    if dose is None:
        return OK
    match dose.status:
        case DoseStatus.PENDING:
            return PENDING
        case DoseStatus.APPLIED | DoseStatus.NOT_ACCEPTED:
            return OK
        case _ as unreachable:
            assert_never(unreachable)


# ───────────────────────────────────────────────
# 3. Termo de consentimento
# ───────────────────────────────────────────────
def requires_consent(
    diagnosis: str | None, configs: Mapping[str, DiagnosisConfigEntity]
) -> bool:
    cfg = configs.get(diagnosis) if diagnosis is not None else None
    return cfg.requires_consent if cfg else False


def evaluate_consent(required: bool, has_document: bool) -> StepStatus:
    if not required:
        return NA
    return OK if has_document else PENDING


# ───────────────────────────────────────────────
# 4. Pagamento / 5. Entrega
# ───────────────────────────────────────────────
def evaluate_payment(dose: DoseEntity | None) -> StepStatus:
    if dose is None:
        return PENDING
    match dose.payment_status:
        case PaymentStatus.PAID | PaymentStatus.WAITING_DELIVERY:
            return OK
        case PaymentStatus.WAITING_PIX | PaymentStatus.WAITING_CARD | PaymentStatus.WAITING_BOLETO:
            return PENDING
        case _ as unreachable:
            assert_never(unreachable)


def evaluate_delivery(dose: DoseEntity | None) -> StepStatus:
    if dose is None:
        return PENDING
    match dose.payment_status:
        case PaymentStatus.PAID:
            return OK
        case PaymentStatus.WAITING_DELIVERY:
            return PENDING
        case PaymentStatus.WAITING_PIX | PaymentStatus.WAITING_CARD | PaymentStatus.WAITING_BOLETO:
            return PENDING
        case _ as unreachable:
            assert_never(unreachable)


# ───────────────────────────────────────────────
# 6. Aplicação
# ───────────────────────────────────────────────
def evaluate_application(dose: DoseEntity | None) -> StepStatus:
    if dose is None:
        return PENDING
    match dose.status:
        case DoseStatus.APPLIED | DoseStatus.NOT_ACCEPTED:
            return OK
        case DoseStatus.PENDING:
            return PENDING
        case _ as unreachable:
            assert_never(unreachable)


# ───────────────────────────────────────────────
# 7. Pesquisa de satisfação
# ───────────────────────────────────────────────
def evaluate_survey(dose: DoseEntity | None) -> StepStatus:
    if dose is None:
        return PENDING
    if not dose.nurse:
        return OK
    match dose.survey_status:
        case SurveyStatus.ANSWERED | SurveyStatus.NOT_SENT:
            return OK
        case SurveyStatus.SENT | SurveyStatus.WAITING:
            return PENDING
        case _ as unreachable:
            assert_never(unreachable)
