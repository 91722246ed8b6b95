class ChecklistError(Exception):
    """Classe base para todas as exceções do checklist."""
    message = "Erro no checklist"

    def __init__(self, detail: str | None = None) -> None:
        self.detail = detail
        super().__init__(f"{self.message}: {detail}" if detail else self.message)


class SnapshotFetchError(ChecklistError):
    """
    Alguma das coleções do snapshot falhou. O snapshot inteiro é descartado;
    nenhuma derivação parcial é feita.
    """
    message = "Erro ao carregar dados"

    def __init__(self, failures: dict[str, BaseException]) -> None:
        self.failures = failures
        detail = "; ".join(f"{name}: {exc}" for name, exc in failures.items())
        super().__init__(detail)


class MutationError(ChecklistError):
    """Falha ao aplicar uma alteração no repositório externo."""
    message = "Erro ao atualizar dados"


class DoseUpdateError(MutationError):
    message = "Erro ao atualizar dose"


class DeliveryConfirmationError(MutationError):
    message = "Erro ao confirmar entrega"


class DocumentUploadError(MutationError):
    message = "Erro ao enviar documento"


class SurveyUpdateError(MutationError):
    message = "Erro ao registrar pesquisa"


class InvalidMutationError(ChecklistError):
    """Payload rejeitado antes de qualquer chamada externa."""
    message = "Dados inválidos"
