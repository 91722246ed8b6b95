from prometheus_client import (
    CollectorRegistry,
    Counter,
    Gauge,
    Histogram,
    generate_latest,
)

registry = CollectorRegistry()

CHECKLIST_DERIVATION_DURATION = Histogram(
    "checklist_derivation_duration_seconds",
    "Duracao da derivacao do checklist (snapshot ja carregado)",
    registry=registry,
)

CHECKLIST_PENDING_ITEMS = Gauge(
    "checklist_pending_items",
    "Tratamentos incompletos na ultima derivacao",
    registry=registry,
)

SNAPSHOT_FETCH_DURATION = Histogram(
    "checklist_snapshot_fetch_duration_seconds",
    "Duracao da carga completa do snapshot",
    registry=registry,
)

SNAPSHOT_FETCH_FAILURES = Counter(
    "checklist_snapshot_fetch_failures_total",
    "Falhas de carga por colecao",
    ["collection"],
    registry=registry,
)

MUTATION_COUNT = Counter(
    "checklist_mutation_total",
    "Mutacoes aplicadas no repositorio externo",
    ["operation", "success"],
    registry=registry,
)

DOMAIN_EVENT_COUNT = Counter(
    "checklist_domain_events_total",
    "Eventos de dominio publicados apos mutacoes",
    ["event"],
    registry=registry,
)


def render_latest() -> bytes:
    """Métricas no formato texto do Prometheus."""
    return generate_latest(registry)
