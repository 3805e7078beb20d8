"""Clasificación de respuestas HTTP.

Función pura de la respuesta a un `ApiResult`: éxito (el llamador decodifica
el body) o un `ApiError` concreto. Los resources llaman a `unwrap()` para
propagar el error como excepción.

| status | resultado |
|---|---|
| 2xx | éxito (201: id creado desde el header `location`) |
| 404 | `NotFoundError` |
| 422 | `SemanticError` con todos los `<error>` del body (`MalformedResponseError` si no es `<errors>`) |
| 423 | `LockedError` |
| otro | `UnexpectedResponseError` con el body literal |
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from urllib.parse import urlsplit

from streamsend.adapters.xml_codec import decode_errors
from streamsend.core.domain.errors import (
    ApiError,
    LockedError,
    MalformedResponseError,
    NotFoundError,
    SemanticError,
    UnexpectedResponseError,
)
from streamsend.core.domain.models import ApiResponse

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ApiResult:
    """Resultado discriminado de una respuesta: `error is None` significa éxito."""

    response: ApiResponse
    error: ApiError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def created_id(self) -> int:
        """Id del recurso creado, tomado del último segmento de `location`."""

        return parse_location_id(self.response.header("location"))

    def unwrap(self) -> ApiResponse:
        if self.error is not None:
            raise self.error
        return self.response


def parse_location_id(location: str | None) -> int:
    if not location:
        raise MalformedResponseError("Created response without a location header")
    path = urlsplit(location).path.rstrip("/")
    segment = path.rsplit("/", 1)[-1]
    if segment.endswith(".xml"):
        segment = segment[: -len(".xml")]
    try:
        return int(segment)
    except ValueError as exc:
        raise MalformedResponseError(f"Location header has no numeric id: {location!r}") from exc


def classify(response: ApiResponse) -> ApiResult:
    status = response.status
    if response.is_success:
        return ApiResult(response)

    error: ApiError
    if status == 404:
        error = NotFoundError("Resource not found", status=status, body=response.body)
    elif status == 422:
        try:
            error = SemanticError(decode_errors(response.body), status=status, body=response.body)
        except MalformedResponseError as exc:
            error = MalformedResponseError(
                f"Unprocessable entity without an <errors> document: {exc.message}",
                status=status,
                body=response.body,
            )
    elif status == 423:
        error = LockedError("Resource is locked", status=status, body=response.body)
    else:
        error = UnexpectedResponseError(status, response.body)

    logger.debug("API error %s (%s)", status, error.kind.value)
    return ApiResult(response, error)
