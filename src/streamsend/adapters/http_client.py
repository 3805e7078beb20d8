"""Wrapper de httpx.

Por qué un wrapper:
- Estandariza Basic Auth, headers, timeouts y logging de todas las llamadas.
- Facilita testeo: se puede inyectar un `httpx.MockTransport`.

Reglas:
- Sin reintentos ni redirects: el llamador decide la política.
- Cada request abre y cierra su propia sesión (sin conexiones persistentes).
"""

from __future__ import annotations

import logging
from typing import Mapping

import httpx

from streamsend.core.config import AppSettings
from streamsend.core.domain.errors import ConfigurationError, TransportError
from streamsend.core.domain.models import ApiResponse, Credentials

logger = logging.getLogger(__name__)

XML_CONTENT_TYPE = "application/xml"


def build_client(
    settings: AppSettings,
    credentials: Credentials,
    *,
    transport: httpx.BaseTransport | None = None,
) -> httpx.Client:
    """Crea un `httpx.Client` autenticado contra el host configurado.

    Por qué un builder:
    - Centraliza auth/headers para que todos los resources se comporten igual.
    - `transport` permite sustituir la red en tests.
    """

    headers: dict[str, str] = {
        "User-Agent": settings.user_agent,
        "Accept": XML_CONTENT_TYPE,
    }

    netloc = credentials.host if settings.port is None else f"{credentials.host}:{settings.port}"
    kwargs: dict[str, object] = {}
    if settings.http_timeout_seconds is not None:
        kwargs["timeout"] = httpx.Timeout(settings.http_timeout_seconds)
    return httpx.Client(
        base_url=f"{settings.scheme}://{netloc}",
        auth=httpx.BasicAuth(credentials.username, credentials.password),
        follow_redirects=False,
        headers=headers,
        transport=transport,
        **kwargs,
    )


def credentials_from_settings(settings: AppSettings) -> Credentials:
    if not settings.has_credentials:
        raise ConfigurationError(
            "StreamSend credentials are not configured "
            "(set STREAMSEND_USERNAME / STREAMSEND_PASSWORD or call streamsend.configure)",
        )
    return Credentials(
        username=settings.username or "",
        password=settings.password or "",
        host=settings.host,
    )


class HttpTransport:
    """Implementación httpx de `core.interfaces.transport.Transport`."""

    def __init__(
        self,
        credentials: Credentials,
        settings: AppSettings | None = None,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._credentials = credentials
        self._settings = settings or AppSettings()
        self._transport = transport

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> ApiResponse:
        headers: dict[str, str] = {}
        content: bytes | None = None
        if body is not None:
            content = body.encode("utf-8")
            headers["Content-Type"] = f"{XML_CONTENT_TYPE}; charset=utf-8"

        try:
            with build_client(self._settings, self._credentials, transport=self._transport) as client:
                response = client.request(
                    method.upper(),
                    path,
                    params=dict(params) if params else None,
                    content=content,
                    headers=headers,
                )
        except httpx.RequestError as exc:
            logger.warning("%s %s failed: %s", method.upper(), path, exc)
            raise TransportError(f"Request failed: {exc}") from exc

        logger.debug("%s %s -> %s", method.upper(), path, response.status_code)
        return ApiResponse(
            status=response.status_code,
            headers=dict(response.headers.items()),
            body=response.text,
        )
