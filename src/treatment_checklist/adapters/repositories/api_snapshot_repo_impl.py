from __future__ import annotations

from treatment_checklist.adapters.api_clients.clinic_api_client import ClinicRecordsAPIClient
from treatment_checklist.core.domain.entities.consent_entity import (
    ConsentDocumentEntity,
    DiagnosisConfigEntity,
)
from treatment_checklist.core.domain.entities.dose_entity import DoseEntity
from treatment_checklist.core.domain.entities.patient_entity import PatientEntity
from treatment_checklist.core.domain.entities.treatment_entity import ProtocolEntity, TreatmentEntity
from treatment_checklist.core.domain.mappers.record_payload_mapper import RecordPayloadMapper
from treatment_checklist.core.domain.repositories.snapshot_repository import SnapshotRepository


class SnapshotRepoImpl(SnapshotRepository):
    """Lê as coleções da API de registros e converte DTO ➜ Entity."""

    def __init__(self, client: ClinicRecordsAPIClient, mapper: type[RecordPayloadMapper] = RecordPayloadMapper):
        self.client = client
        self.mapper = mapper

    def list_treatments(self) -> list[TreatmentEntity]:
        return [self.mapper.map_treatment(d) for d in self.client.list_treatments()]

    def list_patients(self) -> list[PatientEntity]:
        return [self.mapper.map_patient(d) for d in self.client.list_patients()]

    def list_protocols(self) -> list[ProtocolEntity]:
        return [self.mapper.map_protocol(d) for d in self.client.list_protocols()]

    def list_doses(self) -> list[DoseEntity]:
        return [self.mapper.map_dose(d) for d in self.client.list_doses()]

    def list_consent_documents(self) -> list[ConsentDocumentEntity]:
        return [self.mapper.map_consent_document(d) for d in self.client.list_consent_documents()]

    def list_diagnosis_configs(self) -> list[DiagnosisConfigEntity]:
        return [self.mapper.map_diagnosis(d) for d in self.client.list_diagnoses()]
