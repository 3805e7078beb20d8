"""Taxonomía de errores de la librería.

Por qué una jerarquía propia:
- Los llamadores distinguen validación (422), no encontrado (404), bloqueo
  (423) y respuestas inesperadas sin comparar códigos de estado ni strings.
- `kind` permite hacer `match` sobre el tipo de fallo sin `isinstance`.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Discriminante de los errores de la API."""

    NOT_FOUND = "not_found"
    SEMANTIC_ERROR = "semantic_error"
    LOCKED = "locked"
    UNEXPECTED_RESPONSE = "unexpected_response"
    MALFORMED_RESPONSE = "malformed_response"
    TRANSPORT_ERROR = "transport_error"


class StreamSendError(Exception):
    """Base exception for all client errors."""


class ConfigurationError(StreamSendError):
    """Raised when credentials are missing or invalid."""


class MissingFieldError(KeyError):
    """Raised when a record does not carry the requested field."""

    def __init__(self, field: str) -> None:
        super().__init__(field)
        self.field = field

    def __str__(self) -> str:
        return f"record has no field {self.field!r}"


class ApiError(StreamSendError):
    """Error reported by (or about) an API response."""

    kind: ErrorKind = ErrorKind.UNEXPECTED_RESPONSE

    def __init__(self, message: str, *, status: int | None = None, body: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.status = status
        self.body = body


class NotFoundError(ApiError):
    """Raised on 404 and when a lookup yields no resource."""

    kind = ErrorKind.NOT_FOUND


class SemanticError(ApiError):
    """Raised on 422; `errors` holds every validation message in server order."""

    kind = ErrorKind.SEMANTIC_ERROR

    def __init__(
        self,
        errors: list[str],
        *,
        status: int | None = 422,
        body: str | None = None,
    ) -> None:
        message = "; ".join(errors) if errors else "Unprocessable entity"
        super().__init__(message, status=status, body=body)
        self.errors = list(errors)


class LockedError(ApiError):
    """Raised on 423 Locked."""

    kind = ErrorKind.LOCKED


class UnexpectedResponseError(ApiError):
    """Raised for non-2xx responses outside the mapped statuses."""

    kind = ErrorKind.UNEXPECTED_RESPONSE

    def __init__(self, status: int, body: str) -> None:
        super().__init__(f"Unexpected status code: {status}", status=status, body=body)


class MalformedResponseError(ApiError):
    """Raised when a response body cannot be decoded as expected."""

    kind = ErrorKind.MALFORMED_RESPONSE


class TransportError(StreamSendError):
    """Raised when the HTTP exchange itself fails (DNS, connect, timeout)."""

    kind = ErrorKind.TRANSPORT_ERROR
