"""Resource: audience (lista de marketing de la cuenta)."""

from __future__ import annotations

from typing import ClassVar

from streamsend.adapters.api.resource import Resource


class Audience(Resource):
    collection: ClassVar[str] = "audiences"
    element: ClassVar[str] = "audience"
    nested: ClassVar[bool] = False

    @property
    def name(self) -> str | None:
        return self.get("name")
