from abc import ABC, abstractmethod

from treatment_checklist.core.domain.entities.consent_entity import (
    ConsentDocumentEntity,
    DiagnosisConfigEntity,
)
from treatment_checklist.core.domain.entities.dose_entity import DoseEntity
from treatment_checklist.core.domain.entities.patient_entity import PatientEntity
from treatment_checklist.core.domain.entities.treatment_entity import ProtocolEntity, TreatmentEntity


class SnapshotRepository(ABC):
    """Leitura das seis coleções que compõem um snapshot."""

    @abstractmethod
    def list_treatments(self) -> list[TreatmentEntity]:
        ...

    @abstractmethod
    def list_patients(self) -> list[PatientEntity]:
        ...

    @abstractmethod
    def list_protocols(self) -> list[ProtocolEntity]:
        ...

    @abstractmethod
    def list_doses(self) -> list[DoseEntity]:
        ...

    @abstractmethod
    def list_consent_documents(self) -> list[ConsentDocumentEntity]:
        """Todos os termos de consentimento cadastrados (de todos os pacientes)."""
        ...

    @abstractmethod
    def list_diagnosis_configs(self) -> list[DiagnosisConfigEntity]:
        ...
