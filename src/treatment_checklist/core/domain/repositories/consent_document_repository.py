from abc import ABC, abstractmethod

from treatment_checklist.core.domain.entities.consent_entity import ConsentDocumentEntity


class ConsentDocumentRepository(ABC):
    @abstractmethod
    def upload(
        self, patient_id: str, *, file_name: str, file_type: str, file_url: str
    ) -> ConsentDocumentEntity:
        """Registra um termo de consentimento para o paciente."""
        ...
