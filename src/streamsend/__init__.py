"""Cliente Python para la API de listas de marketing de StreamSend.

Uso típico:

    >>> import streamsend
    >>> streamsend.configure("login-id", "api-key")
    >>> subscriber = streamsend.Subscriber.find("scott@example.com")
    >>> subscriber.show().first_name
"""

from streamsend.adapters.api import (
    ApiContext,
    Audience,
    Resource,
    Subscriber,
    configure,
    get_context,
    reset_context,
)
from streamsend.core.config import AppSettings
from streamsend.core.domain.errors import (
    ApiError,
    ConfigurationError,
    ErrorKind,
    LockedError,
    MalformedResponseError,
    MissingFieldError,
    NotFoundError,
    SemanticError,
    StreamSendError,
    TransportError,
    UnexpectedResponseError,
)
from streamsend.core.domain.models import ApiResponse, Credentials, Record

__version__ = "0.1.0"

__all__ = [
    "ApiContext",
    "ApiError",
    "ApiResponse",
    "AppSettings",
    "Audience",
    "ConfigurationError",
    "Credentials",
    "ErrorKind",
    "LockedError",
    "MalformedResponseError",
    "MissingFieldError",
    "NotFoundError",
    "Record",
    "Resource",
    "SemanticError",
    "StreamSendError",
    "Subscriber",
    "TransportError",
    "UnexpectedResponseError",
    "configure",
    "get_context",
    "reset_context",
]
