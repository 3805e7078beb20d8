"""Contexto de API: credenciales + transporte + cache de audience.

Por qué un objeto explícito:
- Los resources reciben el contexto (o usan el default del proceso) en vez de
  leer estado global escondido.
- El patrón "configurar una vez" se mantiene con `configure()`, y
  `reset_context()` da un ciclo de vida claro (tests, re-configuración).
"""

from __future__ import annotations

import logging
import threading
from typing import Mapping

import httpx

from streamsend.adapters.http_client import HttpTransport, credentials_from_settings
from streamsend.adapters.xml_codec import decode_collection
from streamsend.core.config import DEFAULT_HOST, AppSettings
from streamsend.core.domain.errors import MalformedResponseError, MissingFieldError, NotFoundError
from streamsend.core.domain.models import Credentials
from streamsend.core.interfaces.transport import Transport
from streamsend.core.services.audience_cache import AudienceCache
from streamsend.core.services.error_classifier import ApiResult, classify

logger = logging.getLogger(__name__)

AUDIENCES_PATH = "/audiences.xml"


class ApiContext:
    """Todo lo que un resource necesita para hablar con la API."""

    def __init__(self, transport: Transport, settings: AppSettings | None = None) -> None:
        self.transport = transport
        self.settings = settings or AppSettings()
        self.audience_cache = AudienceCache(self._load_audience_id)

    @classmethod
    def from_settings(
        cls,
        settings: AppSettings | None = None,
        *,
        credentials: Credentials | None = None,
        http_transport: httpx.BaseTransport | None = None,
    ) -> "ApiContext":
        settings = settings or AppSettings()
        credentials = credentials or credentials_from_settings(settings)
        return cls(HttpTransport(credentials, settings, transport=http_transport), settings)

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> ApiResult:
        return classify(self.transport.request(method, path, params=params, body=body))

    def audience_id(self) -> int:
        return self.audience_cache.audience_id()

    def clear_audience(self) -> None:
        self.audience_cache.clear()

    def _load_audience_id(self) -> int:
        response = self.request("GET", AUDIENCES_PATH).unwrap()
        audiences = decode_collection(response.body, "audiences")
        if not audiences:
            raise NotFoundError("Account has no audiences", status=response.status, body=response.body)
        try:
            return int(audiences[0]["id"])
        except (MissingFieldError, TypeError, ValueError) as exc:
            raise MalformedResponseError(
                "First audience has no integer id",
                status=response.status,
                body=response.body,
            ) from exc


_default_context: ApiContext | None = None
_default_lock = threading.Lock()


def configure(
    username: str,
    password: str,
    host: str = DEFAULT_HOST,
    *,
    settings: AppSettings | None = None,
    http_transport: httpx.BaseTransport | None = None,
) -> ApiContext:
    """Instala el contexto por defecto del proceso con estas credenciales.

    Re-configurar reemplaza el contexto completo, incluido el audience cacheado.
    """

    global _default_context

    settings = settings or AppSettings()
    credentials = Credentials(username=username, password=password, host=host)
    context = ApiContext.from_settings(settings, credentials=credentials, http_transport=http_transport)
    with _default_lock:
        _default_context = context
    logger.debug("Configured StreamSend context for %s@%s", username, host)
    return context


def get_context() -> ApiContext:
    """Devuelve el contexto por defecto; si no existe, lo construye desde env."""

    global _default_context

    context = _default_context
    if context is not None:
        return context
    with _default_lock:
        if _default_context is None:
            _default_context = ApiContext.from_settings()
        return _default_context


def reset_context() -> None:
    global _default_context

    with _default_lock:
        _default_context = None
