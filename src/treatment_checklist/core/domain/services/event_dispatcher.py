from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Any

import structlog

from treatment_checklist.core.domain.events.events import DomainEvent

logger = structlog.get_logger(__name__)

Listener = Callable[[DomainEvent], None]


def _listener_name(listener: Listener) -> str:
    return getattr(listener, "__qualname__", type(listener).__name__)


class EventDispatcher:
    """
    Publica eventos de domínio para os ouvintes inscritos.

    Um ouvinte inscrito em uma classe de evento recebe também as subclasses;
    inscrever em `DomainEvent` cobre todos os eventos. Ouvintes rodam na ordem
    de inscrição, do tipo mais específico para o mais genérico.
    """

    def __init__(self) -> None:
        self._listeners: dict[type[DomainEvent], list[Listener]] = {}

    def subscribe(self, event_type: type[DomainEvent], listener: Listener) -> None:
        self._listeners.setdefault(event_type, []).append(listener)
        logger.debug("event.subscribed", event_type=event_type.__name__, listener=_listener_name(listener))

    def listeners(self, event_type: type[DomainEvent]) -> tuple[Listener, ...]:
        found: list[Listener] = []
        for cls in event_type.__mro__:
            found.extend(self._listeners.get(cls, ()))
        return tuple(found)

    def dispatch(self, event: DomainEvent) -> int:
        """Entrega o evento; devolve quantos ouvintes terminaram sem erro."""
        listeners = self.listeners(type(event))
        log = logger.bind(event_name=type(event).__name__, event_id=str(event.event_id))
        log.info("event.dispatch", listeners=len(listeners))

        delivered = 0
        for listener in listeners:
            # a mutação já foi aplicada no repositório externo
            try:
                listener(event)
            except Exception as exc:  # noqa: BLE001
                log.error("event.listener_failed", listener=_listener_name(listener), error=str(exc), exc_info=True)
            else:
                delivered += 1
        return delivered

    def publish(self, result: Any) -> list[DomainEvent]:
        """Publica o retorno de um handler: um evento ou uma sequência de eventos."""
        candidates: Iterable[Any] = result if isinstance(result, list | tuple) else (result,)
        events = [evt for evt in candidates if isinstance(evt, DomainEvent)]
        for evt in events:
            self.dispatch(evt)
        return events
