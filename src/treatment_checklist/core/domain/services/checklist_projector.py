from __future__ import annotations

from collections import Counter, defaultdict
from collections.abc import Iterable

import structlog

from treatment_checklist.core.domain.entities.checklist_item_entity import ChecklistItemEntity
from treatment_checklist.core.domain.entities.dose_entity import DoseEntity
from treatment_checklist.core.domain.entities.patient_entity import PatientEntity
from treatment_checklist.core.domain.entities.snapshot_entity import ChecklistSnapshot
from treatment_checklist.core.domain.entities.treatment_entity import ProtocolEntity, TreatmentEntity
from treatment_checklist.core.domain.enums import StepName, StepStatus
from treatment_checklist.core.domain.services import step_rules
from treatment_checklist.core.domain.services.active_dose_selector import select_active_dose

logger = structlog.get_logger(__name__)


def derive_checklist(snapshot: ChecklistSnapshot) -> list[ChecklistItemEntity]:
    """
    Projeta o snapshot no checklist de tratamentos incompletos.

    A ordem de saída segue a ordem dos tratamentos no snapshot. Tratamentos
    encerrados/recusados, de protocolos não medicamentosos ou com paciente /
    protocolo inexistente ficam de fora sem erro.
    """
    patients = {p.id: p for p in snapshot.patients}
    protocols = {p.id: p for p in snapshot.protocols}

    doses_by_treatment: dict[str, list[DoseEntity]] = defaultdict(list)
    for dose in snapshot.doses:
        doses_by_treatment[dose.treatment_id].append(dose)

    patients_with_documents = {doc.patient_id for doc in snapshot.consent_documents}

    items: list[ChecklistItemEntity] = []
    for treatment in snapshot.treatments:
        protocol = protocols.get(treatment.protocol_id)
        patient = patients.get(treatment.patient_id)
        if protocol is None or patient is None:
            logger.debug(
                "checklist.skip_integrity_gap",
                treatment_id=treatment.id,
                patient_found=patient is not None,
                protocol_found=protocol is not None,
            )
            continue
        if not protocol.is_medication or treatment.status.is_terminal:
            continue

        item = build_item(
            treatment,
            patient,
            protocol,
            doses_by_treatment.get(treatment.id, ()),
            snapshot=snapshot,
            has_document=patient.id in patients_with_documents,
        )
        if not item.is_complete:
            items.append(item)

    logger.debug(
        "checklist.derived",
        treatments=len(snapshot.treatments),
        pending_items=len(items),
    )
    return items


def build_item(  # noqa: PLR0913
    treatment: TreatmentEntity,
    patient: PatientEntity,
    protocol: ProtocolEntity,
    doses: Iterable[DoseEntity],
    *,
    snapshot: ChecklistSnapshot,
    has_document: bool,
) -> ChecklistItemEntity:
    """Avalia as 7 etapas de um tratamento elegível, completo ou não."""
    active = select_active_dose(doses)
    missing = step_rules.missing_registration_fields(patient)
    consent_required = step_rules.requires_consent(
        patient.main_diagnosis, snapshot.diagnosis_configs
    )

    steps = {
        StepName.REGISTRATION: step_rules.evaluate_registration(missing),
        StepName.MEDICATION: step_rules.evaluate_medication(active),
        StepName.CONSENT: step_rules.evaluate_consent(consent_required, has_document),
        StepName.PAYMENT: step_rules.evaluate_payment(active),
        StepName.DELIVERY: step_rules.evaluate_delivery(active),
        StepName.APPLICATION: step_rules.evaluate_application(active),
        StepName.SURVEY: step_rules.evaluate_survey(active),
    }

    return ChecklistItemEntity(
        treatment_id=treatment.id,
        patient_id=patient.id,
        dose_id=active.id if active else None,
        patient_name=patient.full_name or "",
        guardian_name=patient.guardian_name,
        phone=patient.guardian_phone,
        diagnosis=patient.main_diagnosis or "",
        protocol_name=protocol.name,
        steps=steps,
        is_complete=all(st.is_resolved for st in steps.values()),
        missing_info=missing,
    )


def summarize_pending(items: Iterable[ChecklistItemEntity]) -> dict[StepName, int]:
    """Quantidade de itens com cada etapa pendente (todas as etapas presentes)."""
    counts: Counter[StepName] = Counter()
    for item in items:
        counts.update(name for name, st in item.steps.items() if st is StepStatus.PENDING)
    return {name: counts.get(name, 0) for name in StepName}
