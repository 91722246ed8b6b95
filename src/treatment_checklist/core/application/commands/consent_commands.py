from dataclasses import dataclass

from treatment_checklist.core.application.cqrs import CommandDTO


@dataclass(frozen=True)
class UploadConsentDocumentCommand(CommandDTO):
    patient_id: str
    file_name: str
