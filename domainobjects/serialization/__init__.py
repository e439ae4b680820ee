"""Order-preserving XML (de)serialization driven by declared properties."""
from .stream import NodeType, XmlReader, XmlWriter
from .coercion import ScalarCodec, CoercionRule
from .body import read_body, write_body
from .document import from_xml, read_xml_file, to_xml, write_xml_file

__all__ = [
    "NodeType",
    "XmlReader",
    "XmlWriter",
    "ScalarCodec",
    "CoercionRule",
    "read_body",
    "write_body",
    "from_xml",
    "read_xml_file",
    "to_xml",
    "write_xml_file",
]
