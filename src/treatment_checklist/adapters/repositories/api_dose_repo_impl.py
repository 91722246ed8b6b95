from typing import Any

from treatment_checklist.adapters.api_clients.clinic_api_client import ClinicRecordsAPIClient
from treatment_checklist.core.domain.repositories.dose_repository import DoseRepository


class DoseRepoImpl(DoseRepository):
    def __init__(self, client: ClinicRecordsAPIClient):
        self.client = client

    def update(self, dose_id: str, changes: dict[str, Any]) -> None:
        self.client.update_dose(dose_id, changes)

    def update_survey(self, dose_id: str, changes: dict[str, Any]) -> None:
        self.client.update_dose_survey(dose_id, changes)
