"""Whole-Document Helpers

Thin wrappers that open a root element, delegate to the body codec and
close it again. The root element defaults to the object's type tag.
"""
from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, TypeVar

from domainobjects.config import get_settings
from domainobjects.logging import serialization_logger

from .body import read_body, write_body
from .stream import XmlReader, XmlWriter

if TYPE_CHECKING:
    from domainobjects.base import ValidatedObject

V = TypeVar("V", bound="ValidatedObject")


def _write_document(obj: ValidatedObject, root: str | None) -> XmlWriter:
    writer = XmlWriter()
    writer.write_start_element(root or obj.xml_name)
    write_body(obj, writer)
    writer.write_end_element()
    return writer


def _instance(target: V | type[V]) -> V:
    return target() if isinstance(target, type) else target


def to_xml(obj: ValidatedObject, root: str | None = None, *, indent: str | None = None) -> str:
    """Serialize ``obj`` as a complete XML document string."""
    if indent is None:
        indent = get_settings().XML_INDENT
    return _write_document(obj, root).to_string(indent=indent)


def from_xml(target: V | type[V], text: str | bytes) -> V:
    """Read a document into ``target`` (an instance, or a class to instantiate)."""
    obj = _instance(target)
    read_body(obj, XmlReader.from_string(text))
    return obj


def write_xml_file(obj: ValidatedObject, path: str | Path, root: str | None = None) -> None:
    settings = get_settings()
    _write_document(obj, root).write_file(path, indent=settings.XML_INDENT, encoding=settings.XML_ENCODING)
    serialization_logger().info("xml_document_written", type=type(obj).__name__, path=str(path))


def read_xml_file(target: V | type[V], path: str | Path) -> V:
    obj = _instance(target)
    read_body(obj, XmlReader.from_file(path))
    serialization_logger().info("xml_document_read", type=type(obj).__name__, path=str(path))
    return obj
