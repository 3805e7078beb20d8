"""Contrato del transporte HTTP.

Por qué Protocol:
- Define un contrato estructural (duck typing) sin herencia rígida.
- Permite que el transporte httpx sea intercambiable y testeable sin acoplar
  el Core a una implementación concreta.
"""

from __future__ import annotations

from typing import Mapping, Protocol, runtime_checkable

from streamsend.core.domain.models import ApiResponse


@runtime_checkable
class Transport(Protocol):
    """Contrato mínimo para ejecutar un request autenticado.

    Reglas de diseño:
    - `path` es absoluto y sin host; el transporte compone esquema/host/puerto.
    - No interpreta códigos de estado ni reintenta.
    - Fallos de red se elevan como `TransportError`.
    """

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Mapping[str, str] | None = None,
        body: str | None = None,
    ) -> ApiResponse:
        """Ejecuta el request y devuelve la respuesta sin interpretar."""

        ...
