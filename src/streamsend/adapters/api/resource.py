"""Base genérica de resources de la API.

Por qué una base:
- Todas las entidades comparten el mismo esquema de URLs jerárquicas
  (`/audiences/{a}/people/{id}.xml`) y el mismo ciclo request -> clasificación
  -> decodificación.
- Cada llamada devuelve instancias nuevas; una instancia nunca se reutiliza
  entre respuestas distintas.

El acceso a campos es explícito (`resource["email_address"]`,
`resource.field(...)`, `resource.get(...)`): leer un campo ausente es
`MissingFieldError`.
"""

from __future__ import annotations

import logging
from typing import Any, ClassVar, Mapping, TypeVar

from streamsend.adapters.api.context import ApiContext, get_context
from streamsend.adapters.xml_codec import decode_collection, decode_record, encode_record
from streamsend.core.domain.errors import NotFoundError
from streamsend.core.domain.models import Record

logger = logging.getLogger(__name__)

R = TypeVar("R", bound="Resource")


class Resource:
    """Entidad con nombre que envuelve exactamente un `Record`."""

    collection: ClassVar[str] = ""
    element: ClassVar[str] = ""
    nested: ClassVar[bool] = True
    find_key: ClassVar[str | None] = None

    def __init__(
        self,
        attributes: Mapping[str, Any] | None = None,
        *,
        context: ApiContext | None = None,
        **fields: Any,
    ) -> None:
        data = dict(attributes or {})
        data.update(fields)
        self._record = Record(data)
        self._context = context

    # -- acceso a campos -------------------------------------------------

    @property
    def record(self) -> Record:
        return self._record

    @property
    def context(self) -> ApiContext:
        return self._context or get_context()

    def __getitem__(self, name: str) -> Any:
        return self._record[name]

    def __contains__(self, name: object) -> bool:
        return name in self._record

    def field(self, name: str) -> Any:
        return self._record[name]

    def get(self, name: str, default: Any = None) -> Any:
        return self._record.get(name, default)

    @property
    def id(self) -> int | None:
        return self._record.get("id")

    @property
    def audience_id(self) -> int | None:
        return self._record.get("audience_id")

    def to_dict(self) -> dict[str, Any]:
        return self._record.to_dict()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Resource):
            return NotImplemented
        return type(self) is type(other) and dict(self._record) == dict(other._record)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({dict(self._record)!r})"

    # -- URLs ------------------------------------------------------------

    @classmethod
    def collection_path(cls, audience_id: int | None = None) -> str:
        if cls.nested:
            return f"/audiences/{audience_id}/{cls.collection}.xml"
        return f"/{cls.collection}.xml"

    @classmethod
    def member_path(cls, resource_id: int, audience_id: int | None = None, action: str | None = None) -> str:
        base = f"/audiences/{audience_id}/{cls.collection}" if cls.nested else f"/{cls.collection}"
        if action:
            return f"{base}/{resource_id}/{action}.xml"
        return f"{base}/{resource_id}.xml"

    def _member_path(self, action: str | None = None) -> str:
        # Estado local incompleto: se falla antes de tocar la red.
        if self.id is None:
            raise NotFoundError(f"{type(self).__name__} has no id")
        if self.nested and self.audience_id is None:
            raise NotFoundError(f"{type(self).__name__} {self.id} has no audience_id")
        return self.member_path(self.id, self.audience_id, action)

    # -- audience actual --------------------------------------------------

    @classmethod
    def current_audience_id(cls, *, context: ApiContext | None = None) -> int:
        return (context or get_context()).audience_id()

    @classmethod
    def clear_audience(cls, *, context: ApiContext | None = None) -> None:
        (context or get_context()).clear_audience()

    @classmethod
    def _resolve_audience(cls, audience_id: int | None, context: ApiContext) -> int | None:
        if not cls.nested:
            return None
        if audience_id is not None:
            return audience_id
        return context.audience_id()

    @classmethod
    def _from_record(cls: type[R], record: Record, audience_id: int | None, context: ApiContext) -> R:
        data = dict(record)
        if cls.nested and audience_id is not None:
            data.setdefault("audience_id", audience_id)
        return cls(data, context=context)

    # -- operaciones de colección ----------------------------------------

    @classmethod
    def index(
        cls: type[R],
        audience_id: int | None = None,
        *,
        params: Mapping[str, str] | None = None,
        context: ApiContext | None = None,
    ) -> list[R]:
        """GET de la colección; un audience inválido es `NotFoundError`, no `[]`."""

        ctx = context or get_context()
        audience = cls._resolve_audience(audience_id, ctx)
        response = ctx.request("GET", cls.collection_path(audience), params=params).unwrap()
        records = decode_collection(response.body, cls.collection)
        return [cls._from_record(record, audience, ctx) for record in records]

    @classmethod
    def find(
        cls: type[R],
        key: str,
        audience_id: int | None = None,
        *,
        context: ApiContext | None = None,
    ) -> R:
        """Primer resource que coincide con `key`, o `NotFoundError`."""

        if cls.find_key is None:
            raise TypeError(f"{cls.__name__} does not support find()")
        matches = cls.index(audience_id, params={cls.find_key: key}, context=context)
        if not matches:
            raise NotFoundError(f"No {cls.element} matching {cls.find_key}={key!r}")
        return matches[0]

    @classmethod
    def create(
        cls,
        attributes: Mapping[str, Any],
        audience_id: int | None = None,
        *,
        context: ApiContext | None = None,
    ) -> int:
        """POST de los atributos; devuelve el id tomado del header `location`."""

        ctx = context or get_context()
        audience = cls._resolve_audience(audience_id, ctx)
        body = encode_record(cls.element, attributes)
        result = ctx.request("POST", cls.collection_path(audience), body=body)
        result.unwrap()
        created_id = result.created_id
        logger.info("Created %s %s", cls.element, created_id)
        return created_id

    # -- operaciones de instancia ----------------------------------------

    def show(self: R) -> R:
        """GET del miembro; devuelve una instancia nueva con los campos del servidor."""

        path = self._member_path()
        ctx = self.context
        response = ctx.request("GET", path).unwrap()
        record = self._record.merged(decode_record(response.body, self.element))
        return type(self)(record, context=ctx)

    def destroy(self) -> bool:
        path = self._member_path()
        self.context.request("DELETE", path).unwrap()
        logger.info("Destroyed %s %s", self.element, self.id)
        return True

    def _member_action(self, action: str) -> bool:
        path = self._member_path(action)
        self.context.request("POST", path).unwrap()
        logger.info("%s %s %s", action.capitalize(), self.element, self.id)
        return True
