from treatment_checklist.adapters.api_clients.clinic_api_client import ClinicRecordsAPIClient
from treatment_checklist.core.domain.entities.consent_entity import ConsentDocumentEntity
from treatment_checklist.core.domain.mappers.record_payload_mapper import RecordPayloadMapper
from treatment_checklist.core.domain.repositories.consent_document_repository import (
    ConsentDocumentRepository,
)


class ConsentDocumentRepoImpl(ConsentDocumentRepository):
    def __init__(self, client: ClinicRecordsAPIClient):
        self.client = client

    def upload(
        self, patient_id: str, *, file_name: str, file_type: str, file_url: str
    ) -> ConsentDocumentEntity:
        dto = self.client.upload_document(
            patient_id, file_name=file_name, file_type=file_type, file_url=file_url
        )
        return RecordPayloadMapper.map_consent_document(dto)
