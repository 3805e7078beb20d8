"""Codec XML de la API (lxml).

Por qué un módulo aparte:
- La API habla XML estilo Rails (`type="integer"`, `type="array"`, `nil="true"`),
  así que el tipado de campos se resuelve en un único lugar.
- Los resources solo piden "un record" o "una colección" y reciben tipos
  Python; nunca ven elementos lxml.

Reglas de decodificación:
- Los nombres de elemento pasan de `email-address` a `email_address`.
- Un elemento vacío sin tipo es `""`; un `datetime` vacío es `None`.
- Una colección sin hijos es `[]`.
- Un root inesperado o XML inválido es `MalformedResponseError`.
"""

from __future__ import annotations

import base64
import binascii
from datetime import date, datetime, timezone
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Mapping

from lxml import etree
from pydantic import TypeAdapter, ValidationError

from streamsend.core.domain.errors import MalformedResponseError
from streamsend.core.domain.models import Record

_DATETIME = TypeAdapter(datetime)
_DATE = TypeAdapter(date)

_TRUE_VALUES = {"true", "1"}


def _parser() -> etree.XMLParser:
    return etree.XMLParser(resolve_entities=False, no_network=True, remove_blank_text=True)


def _field_name(tag: str) -> str:
    return tag.replace("-", "_")


def _elements(element: etree._Element) -> list[etree._Element]:
    # Comentarios e instrucciones de proceso no tienen tag str.
    return [child for child in element if isinstance(child.tag, str)]


def parse_document(text: str | bytes | None) -> etree._Element:
    """Parsea un documento y devuelve el elemento raíz."""

    if text is None:
        raise MalformedResponseError("Empty response body")
    raw = text.encode("utf-8") if isinstance(text, str) else text
    raw = raw.strip()
    if not raw:
        raise MalformedResponseError("Empty response body")
    try:
        return etree.fromstring(raw, _parser())
    except etree.XMLSyntaxError as exc:
        raise MalformedResponseError(f"Invalid XML document: {exc}") from exc


def _expect_root(element: etree._Element, root: str) -> None:
    if _field_name(element.tag) != _field_name(root):
        raise MalformedResponseError(
            f"Expected <{root}> document, got <{element.tag}>",
        )


def _require_iso8601(text: str) -> str:
    # Pydantic en modo lax acepta timestamps Unix ("1253237225"); aquí solo ISO-8601.
    try:
        float(text)
    except ValueError:
        return text
    raise ValueError(f"not an ISO-8601 value: {text!r}")


def _parse_date(text: str) -> date:
    return _DATE.validate_python(_require_iso8601(text))


def _parse_datetime(text: str) -> datetime:
    value = _DATETIME.validate_python(_require_iso8601(text))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _parse_binary(element: etree._Element, text: str) -> bytes:
    if element.get("encoding") == "base64":
        return base64.b64decode(text, validate=False)
    return text.encode("utf-8")


def _parse_bool(text: str) -> bool:
    return text.strip().lower() in _TRUE_VALUES


_SCALARS: dict[str, Callable[[str], Any]] = {
    "integer": int,
    "float": float,
    "decimal": Decimal,
    "boolean": _parse_bool,
    "datetime": _parse_datetime,
    "date": _parse_date,
}


def _decode_value(element: etree._Element) -> Any:
    if element.get("nil") == "true":
        return None

    type_ = element.get("type")
    children = _elements(element)

    if type_ == "array":
        return [_decode_value(child) if not _elements(child) else _decode_fields(child) for child in children]
    if children and type_ is None:
        return _decode_fields(element)

    text = element.text or ""
    if type_ == "binary":
        try:
            return _parse_binary(element, text.strip())
        except (binascii.Error, ValueError) as exc:
            raise MalformedResponseError(f"Invalid binary field <{element.tag}>: {exc}") from exc

    convert = _SCALARS.get(type_ or "")
    if convert is None:
        return text
    if not text.strip():
        return None
    try:
        return convert(text.strip())
    except (ValueError, InvalidOperation, ValidationError) as exc:
        raise MalformedResponseError(
            f"Invalid {type_} field <{element.tag}>: {text.strip()!r}",
        ) from exc


def _decode_fields(element: etree._Element) -> Record:
    data: dict[str, Any] = {}
    for child in _elements(element):
        name = _field_name(child.tag)
        value = _decode_value(child)
        if name in data:
            # Elementos repetidos se acumulan en lista (paridad con Hash.from_xml).
            previous = data[name]
            data[name] = previous + [value] if isinstance(previous, list) else [previous, value]
        else:
            data[name] = value
    return Record(data)


def decode_record(text: str | bytes | None, root: str) -> Record:
    """Decodifica un documento singular (p.ej. `<person>…</person>`)."""

    element = parse_document(text)
    _expect_root(element, root)
    return _decode_fields(element)


def decode_collection(text: str | bytes | None, root: str) -> list[Record]:
    """Decodifica un documento colección (p.ej. `<people type="array">`)."""

    element = parse_document(text)
    _expect_root(element, root)
    return [_decode_fields(child) for child in _elements(element)]


def decode_errors(text: str | bytes | None) -> list[str]:
    """Decodifica `<errors><error>…</error></errors>` preservando orden y duplicados."""

    element = parse_document(text)
    _expect_root(element, "errors")
    return [
        (child.text or "").strip()
        for child in _elements(element)
        if child.tag == "error"
    ]


def _encode_value(child: etree._Element, value: Any) -> None:
    if value is None:
        child.set("nil", "true")
    elif isinstance(value, bool):
        child.set("type", "boolean")
        child.text = "true" if value else "false"
    elif isinstance(value, int):
        child.set("type", "integer")
        child.text = str(value)
    elif isinstance(value, float):
        child.set("type", "float")
        child.text = repr(value)
    elif isinstance(value, Decimal):
        child.set("type", "decimal")
        child.text = str(value)
    elif isinstance(value, datetime):
        if value.tzinfo is None:
            raise ValueError(f"<{child.tag}>: naive datetime {value!r} needs a timezone")
        child.set("type", "datetime")
        child.text = value.isoformat()
    elif isinstance(value, date):
        child.set("type", "date")
        child.text = value.isoformat()
    elif isinstance(value, bytes):
        child.set("type", "binary")
        child.set("encoding", "base64")
        child.text = base64.b64encode(value).decode("ascii")
    else:
        child.text = str(value)


def encode_record(root: str, attributes: Mapping[str, Any]) -> str:
    """Serializa atributos planos como `<root><campo>valor</campo>…</root>`.

    Los nombres de campo se usan tal cual, sin transformación de guiones.
    Un `datetime` sin zona horaria es `ValueError`: decodificado volvería en UTC
    y ya no sería igual al original.
    """

    element = etree.Element(root)
    for name, value in attributes.items():
        _encode_value(etree.SubElement(element, name), value)
    return etree.tostring(element, xml_declaration=True, encoding="UTF-8").decode("utf-8")
