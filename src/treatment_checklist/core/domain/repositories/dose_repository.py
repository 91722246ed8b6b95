from abc import ABC, abstractmethod
from typing import Any


class DoseRepository(ABC):
    @abstractmethod
    def update(self, dose_id: str, changes: dict[str, Any]) -> None:
        """
        Atualização parcial de uma dose (status, paymentStatus).
        `changes` já vem no formato do repositório externo.
        """
        ...

    @abstractmethod
    def update_survey(self, dose_id: str, changes: dict[str, Any]) -> None:
        """Atualiza surveyStatus / surveyScore / surveyComment da dose."""
        ...
