from __future__ import annotations

from typing import Any, TypeVar
from urllib.parse import urljoin

import requests
import structlog
from pydantic import BaseModel
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

T = TypeVar("T", bound=BaseModel)


class BaseAPIClient:
    """
    Utilitário HTTP simples com:
      • retry exponencial (somente GET; escritas nunca são repetidas)
      • timeout configurável
      • parse + validação Pydantic
    """

    def __init__(
        self,
        *,
        base_url: str,
        default_headers: dict[str, str] | None = None,
        timeout: float = 5.0,
        retries: int = 3,
    ) -> None:
        self.log = structlog.get_logger(__name__).bind(component="BaseAPIClient")
        self.base_url = base_url.rstrip("/") + "/"
        self.timeout = timeout

        self.log.debug("Configurando cliente", base_url=self.base_url, timeout=timeout)

        # sessão + retry -----------------------------------------------------------------
        self.session = requests.Session()
        if default_headers:
            self.session.headers.update(default_headers)

        retry_cfg = Retry(
            total=retries,
            backoff_factor=0.3,
            status_forcelist=[500, 502, 503, 504],
            allowed_methods=frozenset({"GET"}),
            raise_on_status=False,
        )
        adapter = HTTPAdapter(max_retries=retry_cfg)
        for scheme in ("https://", "http://"):
            self.session.mount(scheme, adapter)

    # ---------------------------------------------------------------------- utils -----
    def _url(self, path: str) -> str:
        return urljoin(self.base_url, path.lstrip("/"))

    @staticmethod
    def _json(resp: requests.Response) -> Any:
        # 204 No Content ⇒ corpo vazio
        if resp.status_code == 204 or not resp.content:  # noqa: PLR2004
            return {}
        return resp.json()

    # ---------------------------------------------------------------------- HTTP GET --
    def _get(self, path: str, *, params: dict[str, Any] | None = None, response_model: type[T]) -> T:
        """Executa GET e retorna objeto Pydantic já validado."""
        url = self._url(path)
        log = self.log.bind(method="GET", url=url, params=params, model=response_model.__name__)
        log.debug("Enviando requisição")

        try:
            resp = self.session.get(url, params=params, timeout=self.timeout)
            log.debug("Resposta recebida", status_code=resp.status_code)
            resp.raise_for_status()

            result = response_model.model_validate(self._json(resp))
            log.debug("Resposta validada com sucesso")
            return result

        except Exception as exc:  # noqa: BLE001
            log.error("Falha em _get()", error=str(exc), exc_info=True)
            raise

    # ----------------------------------------------------------------- PATCH / POST --
    def _send(self, method: str, path: str, *, payload: dict[str, Any]) -> Any:
        """Escrita sem retry; devolve o JSON bruto da resposta."""
        url = self._url(path)
        log = self.log.bind(method=method, url=url)
        log.debug("Enviando requisição", payload=payload)

        try:
            resp = self.session.request(method, url, json=payload, timeout=self.timeout)
            log.debug("Resposta recebida", status_code=resp.status_code)
            resp.raise_for_status()
            return self._json(resp)

        except Exception as exc:  # noqa: BLE001
            log.error(f"Falha em {method}", error=str(exc))
            raise
