"""Validated Domain Objects

Domain classes extend ValidatedObject and declare ordered data
properties. The same property list drives validation, path-qualified
error aggregation, XML body (de)serialization, emptiness, structural
equality/hashing and change notification.

Usage:
    from domainobjects import (
        ValidatedObject, data_property, child_property, collection_property,
        RequiredValidator, LengthValidator, to_xml, from_xml,
    )

    class Address(ValidatedObject):
        city = data_property(str, order=0)

        def create_rules(self):
            return [RequiredValidator("city")]

    class Customer(ValidatedObject):
        name = data_property(str, order=0)
        address = child_property(Address, order=1)

        def create_rules(self):
            return [RequiredValidator("name"), LengthValidator("name", 1, 40)]

    customer = Customer(name="Ada")
    customer.address.city = "London"
    assert customer.is_valid
    assert from_xml(Customer, to_xml(customer)) == customer
"""
from .base import ValidatedObject
from .properties import (
    DeclaredProperty,
    PropertyKind,
    child_property,
    collection_property,
    data_property,
    declared_properties,
    find_property,
)
from .validation import (
    AndCompositeValidator,
    BrokenRuleDetail,
    DelegateValidator,
    DomainValidator,
    LengthValidator,
    RegexValidator,
    RequiredValidator,
    Validator,
    XorRequiredValidator,
)
from .serialization import (
    XmlReader,
    XmlWriter,
    from_xml,
    read_xml_file,
    to_xml,
    write_xml_file,
)
from .errors import AppErrorException, ConfigurationError, ParseError
from .logging import configure_logging, get_logger

__version__ = "0.1.0"

__all__ = [
    "ValidatedObject",
    "DeclaredProperty",
    "PropertyKind",
    "child_property",
    "collection_property",
    "data_property",
    "declared_properties",
    "find_property",
    "AndCompositeValidator",
    "BrokenRuleDetail",
    "DelegateValidator",
    "DomainValidator",
    "LengthValidator",
    "RegexValidator",
    "RequiredValidator",
    "Validator",
    "XorRequiredValidator",
    "XmlReader",
    "XmlWriter",
    "from_xml",
    "read_xml_file",
    "to_xml",
    "write_xml_file",
    "AppErrorException",
    "ConfigurationError",
    "ParseError",
    "configure_logging",
    "get_logger",
]
