from __future__ import annotations

from collections.abc import Iterable

from treatment_checklist.core.domain.entities.dose_entity import DoseEntity


def order_doses(doses: Iterable[DoseEntity]) -> list[DoseEntity]:
    """Ordena por data de aplicação crescente (estável para datas iguais)."""
    return sorted(doses, key=lambda d: d.application_date)


def select_active_dose(doses: Iterable[DoseEntity]) -> DoseEntity | None:
    """
    Escolhe a dose que representa o estado atual do tratamento.

    Percorre as doses da mais antiga para a mais recente e devolve a primeira
    ainda em aberto (não aplicada, não paga ou com pesquisa de enfermagem
    pendente). Se todas estiverem resolvidas, a mais recente é a ativa.
    Sem doses ⇒ None.
    """
    ordered = order_doses(doses)
    if not ordered:
        return None
    return next((d for d in ordered if d.is_unresolved), ordered[-1])
