"""Resource: subscriber (`person`) de un audience.

Las operaciones de colección (`index`, `find`, `create`) usan el audience
cacheado salvo que se pase uno explícito. Las de instancia (`show`,
`activate`, `unsubscribe`, `destroy`) usan el `audience_id` propio y nunca
consultan el cache.
"""

from __future__ import annotations

from datetime import datetime
from typing import ClassVar

from streamsend.adapters.api.resource import Resource


class Subscriber(Resource):
    collection: ClassVar[str] = "people"
    element: ClassVar[str] = "person"
    nested: ClassVar[bool] = True
    find_key: ClassVar[str | None] = "email_address"

    def activate(self) -> bool:
        return self._member_action("activate")

    def unsubscribe(self) -> bool:
        return self._member_action("unsubscribe")

    # Campos que la API siempre envía.

    @property
    def email_address(self) -> str:
        return self.field("email_address")

    @property
    def created_at(self) -> datetime | None:
        return self.field("created_at")

    # Campos opcionales: None si el servidor no los incluye.

    @property
    def first_name(self) -> str | None:
        return self.get("first_name")

    @property
    def last_name(self) -> str | None:
        return self.get("last_name")

    @property
    def updated_at(self) -> datetime | None:
        return self.get("updated_at")

    @property
    def subscribed_at(self) -> datetime | None:
        return self.get("subscribed_at")

    @property
    def unsubscribed_at(self) -> datetime | None:
        return self.get("unsubscribed_at")

    @property
    def email_content_format(self) -> str | None:
        return self.get("email_content_format")

    @property
    def opt_status(self) -> str | None:
        return self.get("opt_status")

    @property
    def ip_address(self) -> str | None:
        return self.get("ip_address")

    @property
    def user_agent(self) -> str | None:
        return self.get("user_agent")

    @property
    def tracking_hash(self) -> bytes | None:
        return self.get("tracking_hash")

    @property
    def soft_bounce_count(self) -> int | None:
        return self.get("soft_bounce_count")
