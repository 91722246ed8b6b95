from __future__ import annotations

import time
import uuid
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

import structlog

from treatment_checklist.adapters.observability.metrics import (
    SNAPSHOT_FETCH_DURATION,
    SNAPSHOT_FETCH_FAILURES,
)
from treatment_checklist.core.domain.entities.snapshot_entity import ChecklistSnapshot
from treatment_checklist.core.domain.events.exceptions import SnapshotFetchError
from treatment_checklist.core.domain.repositories.snapshot_repository import SnapshotRepository

logger = structlog.get_logger(__name__)


class SnapshotService:
    """
    Monta o snapshot buscando as seis coleções em paralelo.

    Semântica join-all: espera todas as buscas terminarem; se qualquer uma
    falhar o snapshot é descartado e um único SnapshotFetchError lista todas
    as coleções com erro.
    """

    def __init__(self, repo: SnapshotRepository, max_workers: int = 6) -> None:
        self.repo = repo
        self.max_workers = max(1, max_workers)

    def _fetchers(self) -> dict[str, Callable[[], list]]:
        return {
            "treatments": self.repo.list_treatments,
            "patients": self.repo.list_patients,
            "protocols": self.repo.list_protocols,
            "doses": self.repo.list_doses,
            "consent_documents": self.repo.list_consent_documents,
            "diagnosis_configs": self.repo.list_diagnosis_configs,
        }

    def load(self) -> ChecklistSnapshot:
        log = logger.bind(snapshot_id=uuid.uuid4().hex[:12])
        start = time.perf_counter()
        log.debug("snapshot.fetch_started", workers=self.max_workers)

        futures: dict[str, Future] = {}
        with ThreadPoolExecutor(
            max_workers=self.max_workers, thread_name_prefix="snapshot-fetch"
        ) as pool:
            for name, fetch in self._fetchers().items():
                futures[name] = pool.submit(fetch)
        # saída do `with` = todas as buscas concluídas

        results: dict[str, list] = {}
        failures: dict[str, BaseException] = {}
        for name, fut in futures.items():
            exc = fut.exception()
            if exc is not None:
                failures[name] = exc
                SNAPSHOT_FETCH_FAILURES.labels(name).inc()
            else:
                results[name] = fut.result()

        elapsed = time.perf_counter() - start
        SNAPSHOT_FETCH_DURATION.observe(elapsed)

        if failures:
            log.error(
                "snapshot.fetch_failed",
                failed=sorted(failures),
                errors={k: str(v) for k, v in failures.items()},
                duration=f"{elapsed:.3f}s",
            )
            raise SnapshotFetchError(failures)

        snapshot = ChecklistSnapshot.build(**results)
        log.info(
            "snapshot.fetched",
            duration=f"{elapsed:.3f}s",
            **{name: len(rows) for name, rows in results.items()},
        )
        return snapshot
