"""Sequential XML Reader and Writer

Forward-only, element-structured cursors over ElementTree. The writer
streams start/end/text events into a TreeBuilder; the reader walks a
parsed tree as a flat sequence of start and end tokens, ignoring
whitespace-only text, and exposes the peek/enter/exit/skip operations
the body codec needs.
"""
from __future__ import annotations

from enum import Enum
from pathlib import Path
import xml.etree.ElementTree as ET
from xml.etree.ElementTree import Element

from domainobjects.errors import file_error, malformed_document, raise_error, unexpected_node


class NodeType(str, Enum):
    ELEMENT = "element"
    END_ELEMENT = "end_element"
    NONE = "none"


class XmlWriter:
    """Streams elements into an in-memory tree.

    Usage:
        w = XmlWriter()
        w.write_start_element("Customer")
        customer.write_body(w)
        w.write_end_element()
        text = w.to_string()
    """

    __slots__ = ("_builder", "_open", "_root")

    def __init__(self):
        self._builder = ET.TreeBuilder()
        self._open: list[str] = []
        self._root: Element | None = None

    @property
    def depth(self) -> int:
        return len(self._open)

    def write_start_element(self, name: str) -> None:
        if self._root is not None:
            raise ValueError("Document already has a closed root element")
        self._builder.start(name, {})
        self._open.append(name)

    def write_end_element(self) -> None:
        if not self._open:
            raise ValueError("No open element to close")
        self._builder.end(self._open.pop())
        if not self._open:
            self._root = self._builder.close()

    def write_element_string(self, name: str, text: str) -> None:
        self.write_start_element(name)
        self._builder.data(text)
        self.write_end_element()

    def close(self) -> Element:
        """Return the finished root element."""
        if self._open or self._root is None:
            raise ValueError("Document is incomplete: "
                             f"{'unclosed ' + self._open[-1] if self._open else 'no root element'}")
        return self._root

    def to_string(self, indent: str = "  ") -> str:
        root = self.close()
        if indent:
            ET.indent(root, space=indent)
        return ET.tostring(root, encoding="unicode")

    def write_file(self, path: str | Path, *, indent: str = "  ", encoding: str = "utf-8") -> None:
        root = self.close()
        if indent:
            ET.indent(root, space=indent)
        try:
            ET.ElementTree(root).write(path, encoding=encoding, xml_declaration=True)
        except OSError as e:
            raise_error(file_error(str(path), "write", e, origin="stream").error)


class XmlReader:
    """Forward-only cursor positioned on the document's root element.

    Usage:
        r = XmlReader.from_string(text)
        customer.read_body(r)
    """

    __slots__ = ("_tokens", "_ends", "_pos")

    def __init__(self, root: Element):
        self._tokens: list[tuple[NodeType, Element]] = []
        self._ends: dict[int, int] = {}
        self._tokenize(root)
        self._pos = 0

    @classmethod
    def from_string(cls, text: str | bytes) -> XmlReader:
        try:
            return cls(ET.fromstring(text))
        except ET.ParseError as e:
            raise_error(malformed_document(str(e), origin="stream", cause=e).error)

    @classmethod
    def from_file(cls, path: str | Path) -> XmlReader:
        try:
            return cls(ET.parse(path).getroot())
        except ET.ParseError as e:
            raise_error(malformed_document(str(e), origin="stream", cause=e).error)
        except OSError as e:
            raise_error(file_error(str(path), "read", e, origin="stream").error)

    def _tokenize(self, element: Element) -> None:
        start = len(self._tokens)
        self._tokens.append((NodeType.ELEMENT, element))
        for child in element:
            self._tokenize(child)
        self._ends[start] = len(self._tokens)
        self._tokens.append((NodeType.END_ELEMENT, element))

    @property
    def node_type(self) -> NodeType:
        if self._pos >= len(self._tokens):
            return NodeType.NONE
        return self._tokens[self._pos][0]

    @property
    def name(self) -> str:
        if self._pos >= len(self._tokens):
            return ""
        return self._tokens[self._pos][1].tag

    @property
    def eof(self) -> bool:
        return self._pos >= len(self._tokens)

    def is_start_element(self, name: str | None = None) -> bool:
        return self.node_type is NodeType.ELEMENT and (name is None or self.name == name)

    def has_text(self) -> bool:
        """True if the current element holds non-whitespace text of its own."""
        if not self.is_start_element():
            return False
        return bool((self._tokens[self._pos][1].text or "").strip())

    def _describe(self) -> str:
        if self.eof:
            return "end of document"
        kind = "start of" if self.node_type is NodeType.ELEMENT else "end of"
        return f"{kind} <{self.name}>"

    def read_start_element(self, name: str | None = None) -> None:
        """Enter the current element."""
        if not self.is_start_element(name):
            expected = f"start of <{name}>" if name else "a start element"
            raise_error(unexpected_node(expected, self._describe(), origin="reader").error)
        self._pos += 1

    def read_end_element(self) -> None:
        """Exit the element entered last."""
        if self.node_type is not NodeType.END_ELEMENT:
            raise_error(unexpected_node("an end element", self._describe(), origin="reader").error)
        self._pos += 1

    def read_element_content_as_string(self) -> str:
        """Consume a leaf element and return its text."""
        if not self.is_start_element():
            raise_error(unexpected_node("a leaf element", self._describe(), origin="reader").error)
        element = self._tokens[self._pos][1]
        if len(element):
            raise_error(unexpected_node(
                f"text content in <{element.tag}>", f"child element <{element[0].tag}>", origin="reader",
            ).error)
        self._pos += 2
        return element.text or ""

    def skip(self) -> None:
        """Move past the current element and all of its descendants."""
        if self.is_start_element():
            self._pos = self._ends[self._pos] + 1
        elif not self.eof:
            self._pos += 1
