"""Modelos del dominio (Pydantic v2).

Por qué Pydantic en el dominio:
- Credenciales y respuestas crudas se validan en el borde y quedan inmutables.
- `Record` es un mapping de solo lectura: los campos de la API no son fijos,
  así que no se modelan como atributos de clase.

Nota:
- Estos modelos describen *qué* viaja por la API, no *cómo* se obtiene.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from typing import Any

from pydantic import BaseModel, Field, field_validator
from pydantic.config import ConfigDict

from streamsend.core.domain.errors import MissingFieldError


class Credentials(BaseModel):
    """Credenciales de Basic Auth + host de la API."""

    model_config = ConfigDict(frozen=True)

    username: str = Field(
        ...,
        min_length=1,
        description="Login ID de la cuenta.",
    )
    password: str = Field(
        ...,
        repr=False,
        description="API key de la cuenta.",
    )
    host: str = Field(
        ...,
        min_length=1,
        description="Host de la API (p.ej. 'app.streamsend.com').",
    )


class ApiResponse(BaseModel):
    """Respuesta HTTP sin interpretar, tal como la devuelve un Transport."""

    model_config = ConfigDict(frozen=True)

    status: int = Field(
        ...,
        ge=100,
        description="Código de estado HTTP (sin tope: los no estándar los clasifica `classify`).",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="Headers de respuesta con nombres en minúsculas.",
    )
    body: str = Field(
        default="",
        description="Cuerpo decodificado como texto (UTF-8).",
    )

    @field_validator("headers", mode="before")
    @classmethod
    def lowercase_headers(cls, value: Any) -> dict[str, str]:
        if value is None:
            return {}
        return {str(k).lower(): str(v) for k, v in dict(value).items()}

    @property
    def is_success(self) -> bool:
        return 200 <= self.status < 300

    def header(self, name: str) -> str | None:
        return self.headers.get(name.lower())


class Record(Mapping[str, Any]):
    """Mapping ordenado e inmutable campo -> valor tipado.

    Leer un campo ausente es un error (`MissingFieldError`), no un default;
    `get()` es la forma explícita de leer campos opcionales.
    """

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] | None = None) -> None:
        self._data: dict[str, Any] = dict(data or {})

    def __getitem__(self, name: str) -> Any:
        try:
            return self._data[name]
        except KeyError:
            raise MissingFieldError(name) from None

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __repr__(self) -> str:
        return f"Record({self._data!r})"

    def merged(self, other: Mapping[str, Any]) -> "Record":
        """Devuelve un Record nuevo con `other` sobrescribiendo los campos propios."""

        data = dict(self._data)
        data.update(other)
        return Record(data)

    def to_dict(self) -> dict[str, Any]:
        return {
            key: value.to_dict() if isinstance(value, Record) else value
            for key, value in self._data.items()
        }
