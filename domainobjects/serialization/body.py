"""Element-Body Codec

Writes and reads the inner content of one ValidatedObject, walking its
declared properties in order. The enclosing element belongs to the
caller on write and is consumed here on read, so nested objects and
collection elements compose by plain recursion:

    <Customer>                 <- caller (or parent) writes this
      <name>Ada</name>         <- scalar: leaf named by property
      <Address>...</Address>   <- composite: named by child type tag
      <Order>...</Order>       <- collection: one per element, by element tag
      <Order>...</Order>
    </Customer>
"""
from __future__ import annotations

from typing import TYPE_CHECKING

from domainobjects.config import get_settings
from domainobjects.errors import raise_error, unexpected_node, unwrap_or_raise
from domainobjects.logging import serialization_logger
from domainobjects.properties import DeclaredProperty, PropertyKind, declared_properties

from .coercion import ScalarCodec
from .stream import XmlReader, XmlWriter

if TYPE_CHECKING:
    from domainobjects.base import ValidatedObject


def _codec() -> ScalarCodec:
    return ScalarCodec(decimal_format=get_settings().DECIMAL_FORMAT)


def _date_format(obj: ValidatedObject, prop: DeclaredProperty) -> str | None:
    if obj.xml_date_format and prop.name not in (obj.xml_date_format_ignore_properties or ()):
        return obj.xml_date_format
    return None


def _element_tag(prop: DeclaredProperty) -> str:
    return prop.value_type.xml_name if prop.is_object else prop.name


def _write_object(child: ValidatedObject, writer: XmlWriter) -> None:
    writer.write_start_element(child.xml_name)
    write_body(child, writer)
    writer.write_end_element()


def write_body(obj: ValidatedObject, writer: XmlWriter) -> None:
    """Write the inner content of ``obj``; leaves the writer at the same depth."""
    codec = _codec()
    for prop in declared_properties(type(obj)):
        value = prop.get_value(obj)
        match prop.kind:
            case PropertyKind.COMPOSITE:
                if value is None or value.is_empty():
                    continue
                _write_object(value, writer)
            case PropertyKind.COLLECTION:
                for item in value:
                    _write_object(item, writer)
            case PropertyKind.SCALAR:
                text = codec.format(value, element=prop.name, date_format=_date_format(obj, prop))
                if text is not None:
                    writer.write_element_string(prop.name, text)


def _match(props: tuple[DeclaredProperty, ...], tag: str, consumed: set[str]) -> DeclaredProperty | None:
    for prop in props:
        if prop.name in consumed:
            continue
        if tag == _element_tag(prop) or (prop.kind is PropertyKind.COMPOSITE and tag == prop.name):
            return prop
    return None


def read_body(obj: ValidatedObject, reader: XmlReader) -> None:
    """Read the current element into ``obj``, consuming it entirely.

    Unknown child elements are skipped. Child objects are filled in
    place; collections are cleared and rebuilt from the contiguous run
    of elements carrying the element type's tag.
    """
    log = serialization_logger()
    codec = _codec()
    props = declared_properties(type(obj))
    if reader.has_text():
        raise_error(unexpected_node(
            f"child elements in <{reader.name}>", "text content", origin="body",
        ).error)
    reader.read_start_element()

    # Each object-valued property is filled at most once per read.
    consumed: set[str] = set()
    while reader.is_start_element():
        tag = reader.name
        prop = _match(props, tag, consumed)
        if prop is None:
            log.debug("unknown_element_skipped", type=type(obj).__name__, element=tag)
            reader.skip()
            continue

        match prop.kind:
            case PropertyKind.COMPOSITE:
                consumed.add(prop.name)
                read_body(prop.get_value(obj), reader)
            case PropertyKind.COLLECTION:
                consumed.add(prop.name)
                items = prop.get_value(obj)
                items.clear()
                while reader.is_start_element(tag):
                    item = prop.value_type()
                    read_body(item, reader)
                    items.append(item)
            case PropertyKind.SCALAR:
                text = reader.read_element_content_as_string()
                value = unwrap_or_raise(
                    codec.coerce(text, prop.value_type, element=tag, date_format=_date_format(obj, prop))
                )
                prop.set_value(obj, value)
    reader.read_end_element()
