from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from types import MappingProxyType

from treatment_checklist.core.domain.entities.consent_entity import (
    ConsentDocumentEntity,
    DiagnosisConfigEntity,
)
from treatment_checklist.core.domain.entities.dose_entity import DoseEntity
from treatment_checklist.core.domain.entities.patient_entity import PatientEntity
from treatment_checklist.core.domain.entities.treatment_entity import (
    ProtocolEntity,
    TreatmentEntity,
)


@dataclass(frozen=True, slots=True)
class ChecklistSnapshot:
    """
    Conjunto consistente das seis coleções buscadas juntas.
    Imutável: cada passada de derivação recebe o seu próprio snapshot.
    """

    treatments: tuple[TreatmentEntity, ...] = ()
    patients: tuple[PatientEntity, ...] = ()
    protocols: tuple[ProtocolEntity, ...] = ()
    doses: tuple[DoseEntity, ...] = ()
    consent_documents: tuple[ConsentDocumentEntity, ...] = ()
    diagnosis_configs: Mapping[str, DiagnosisConfigEntity] = field(
        default_factory=lambda: MappingProxyType({})
    )
    fetched_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def build(  # noqa: PLR0913
        cls,
        *,
        treatments: Iterable[TreatmentEntity] = (),
        patients: Iterable[PatientEntity] = (),
        protocols: Iterable[ProtocolEntity] = (),
        doses: Iterable[DoseEntity] = (),
        consent_documents: Iterable[ConsentDocumentEntity] = (),
        diagnosis_configs: Iterable[DiagnosisConfigEntity] = (),
    ) -> ChecklistSnapshot:
        # nome duplicado: prevalece o primeiro recebido
        configs: dict[str, DiagnosisConfigEntity] = {}
        for cfg in diagnosis_configs:
            configs.setdefault(cfg.name, cfg)
        return cls(
            treatments=tuple(treatments),
            patients=tuple(patients),
            protocols=tuple(protocols),
            doses=tuple(doses),
            consent_documents=tuple(consent_documents),
            diagnosis_configs=MappingProxyType(configs),
        )
