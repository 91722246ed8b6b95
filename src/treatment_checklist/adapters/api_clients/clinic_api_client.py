from __future__ import annotations

from typing import Any

import structlog

from config import settings
from treatment_checklist.adapters.api_clients.base_api_client import BaseAPIClient
from treatment_checklist.core.application.dtos.record_store_dtos import (
    ConsentDocumentDTO,
    DataListResponseDTO,
    DiagnosisDTO,
    DoseDTO,
    PatientDTO,
    ProtocolDTO,
    TreatmentDTO,
)

logger = structlog.get_logger(__name__)


class ClinicRecordsAPIClient(BaseAPIClient):
    """
    Wrapper de alto-nível para a API de registros clínicos.
    Leituras devolvem DTOs validados; escritas são parciais (PATCH) ou
    criação de termo (POST) e nunca são repetidas.
    """

    # ---------------------------------------------------------------- init ----------
    def __init__(
        self,
        *,
        base_url: str | None = None,
        token: str | None = None,
        timeout: float | None = None,
        retries: int | None = None,
        treatments_limit: int | None = None,
        patients_limit: int | None = None,
        doses_limit: int | None = None,
    ) -> None:
        super().__init__(
            base_url=base_url or settings.CLINIC_API_BASE,
            default_headers={"Accept": "application/json", "Content-Type": "application/json"},
            timeout=timeout if timeout is not None else settings.CLINIC_API_TIMEOUT,
            retries=retries if retries is not None else settings.CLINIC_API_RETRIES,
        )
        token = token if token is not None else settings.CLINIC_API_TOKEN
        # token vai em TODOS os requests
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

        self.treatments_limit = treatments_limit or settings.TREATMENTS_FETCH_LIMIT
        self.patients_limit = patients_limit or settings.PATIENTS_FETCH_LIMIT
        self.doses_limit = doses_limit or settings.DOSES_FETCH_LIMIT
        logger.debug("ClinicRecordsAPIClient inicializado", base_url=self.base_url)

    # ---------------------------------------------------------------- leituras ------
    def list_treatments(self) -> list[TreatmentDTO]:
        raw = self._get(
            "/treatments",
            params={"limit": self.treatments_limit},
            response_model=DataListResponseDTO[TreatmentDTO],
        )
        return raw.data

    def list_patients(self) -> list[PatientDTO]:
        raw = self._get(
            "/patients",
            params={"limit": self.patients_limit},
            response_model=DataListResponseDTO[PatientDTO],
        )
        return raw.data

    def list_protocols(self) -> list[ProtocolDTO]:
        return self._get("/protocols", response_model=DataListResponseDTO[ProtocolDTO]).data

    def list_doses(self) -> list[DoseDTO]:
        raw = self._get(
            "/doses",
            params={"limit": self.doses_limit},
            response_model=DataListResponseDTO[DoseDTO],
        )
        return raw.data

    def list_consent_documents(self) -> list[ConsentDocumentDTO]:
        """Termos de todos os pacientes (`/dashboard/documents`)."""
        return self._get(
            "/dashboard/documents", response_model=DataListResponseDTO[ConsentDocumentDTO]
        ).data

    def list_diagnoses(self) -> list[DiagnosisDTO]:
        return self._get("/diagnoses", response_model=DataListResponseDTO[DiagnosisDTO]).data

    # ---------------------------------------------------------------- escritas ------
    def update_dose(self, dose_id: str, changes: dict[str, Any]) -> None:
        self._send("PATCH", f"/doses/{dose_id}", payload=changes)

    def update_dose_survey(self, dose_id: str, changes: dict[str, Any]) -> None:
        self._send("PATCH", f"/doses/{dose_id}/survey", payload=changes)

    def upload_document(
        self, patient_id: str, *, file_name: str, file_type: str, file_url: str
    ) -> ConsentDocumentDTO:
        raw = self._send(
            "POST",
            f"/patients/{patient_id}/documents",
            payload={"fileName": file_name, "fileType": file_type, "fileUrl": file_url},
        )
        # alguns back-ends embrulham o registro criado em {"data": {...}}
        if isinstance(raw, dict) and isinstance(raw.get("data"), dict):
            raw = raw["data"]
        return ConsentDocumentDTO.model_validate(
            {
                "patientId": patient_id,
                "fileName": file_name,
                "fileType": file_type,
                "url": file_url,
                **(raw or {}),
            }
        )
