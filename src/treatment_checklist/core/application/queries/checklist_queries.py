from dataclasses import dataclass, field
from typing import Any

from treatment_checklist.core.application.cqrs import QueryDTO


@dataclass(frozen=True)
class GetChecklistQuery(QueryDTO[dict[str, Any]]):
    """
    filtros aceitos:
      • step   : só itens com essa etapa pendente (nome ou StepName)
      • search : trecho do nome do paciente ou do responsável
    """
    filtros: dict[str, Any] = field(default_factory=dict)
