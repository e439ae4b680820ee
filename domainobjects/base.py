"""ValidatedObject: the base every domain type extends.

A subclass declares its data properties and, optionally, its rules:

    class Address(ValidatedObject):
        street = data_property(str, order=0)
        city = data_property(str, order=1)

        def create_rules(self):
            return [RequiredValidator("city")]

    class Customer(ValidatedObject):
        xml_name = "Customer"
        name = data_property(str, order=0)
        address = child_property(Address, order=1)

    c = Customer(name="Ada")
    c.address.street = "1 Analytical Way"
    c.is_valid      # False
    c.error         # "address.city: Required."
    c["name"]       # None

and gets validation with path-qualified error aggregation, XML
body (de)serialization, emptiness, structural equality/hashing and
synchronous change notification, all driven by the same ordered
property list.

Instances are not safe for concurrent mutation or validation; callers
must confine each instance to one thread at a time.
"""
from __future__ import annotations

from typing import Any, Callable, ClassVar

from domainobjects.logging import validation_logger
from domainobjects.properties import (
    DeclaredProperty,
    PropertyKind,
    declared_properties,
    require_property,
)
from domainobjects.serialization.body import read_body, write_body
from domainobjects.serialization.stream import XmlReader, XmlWriter
from domainobjects.validation import BrokenRuleDetail, Validator

PropertyChangedListener = Callable[["ValidatedObject", str], None]
ValidityChangedListener = Callable[["ValidatedObject"], None]

_HASH_SEED = 691
_HASH_FACTOR = 397
_HASH_MASK = (1 << 64) - 1


def _clean(value: str | None) -> str:
    return (value or "").strip()


def _is_empty_value(prop: DeclaredProperty, value: Any) -> bool:
    if value is None:
        return True
    match prop.kind:
        case PropertyKind.COMPOSITE:
            return value.is_empty()
        case PropertyKind.COLLECTION:
            return len(value) == 0
        case PropertyKind.SCALAR:
            return isinstance(value, str) and value == ""


class ValidatedObject:
    """Base class for validated, serializable domain objects.

    Class attributes:
        xml_name: element name for instances of this type (defaults to the class name)
        xml_date_format: strftime pattern for datetime/date properties, or None for ISO-8601
        xml_date_format_ignore_properties: properties that keep ISO-8601 despite xml_date_format
    """
    xml_name: ClassVar[str] = "ValidatedObject"
    xml_date_format: ClassVar[str | None] = None
    xml_date_format_ignore_properties: ClassVar[tuple[str, ...]] = ()

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        if "xml_name" not in cls.__dict__:
            cls.xml_name = cls.__name__
        declared_properties(cls)

    def __init__(self, **values: Any):
        self._rules: list[Validator] | None = None
        self._property_listeners: list[PropertyChangedListener] = []
        self._validity_listeners: list[ValidityChangedListener] = []
        for name, value in values.items():
            prop = require_property(type(self), name)
            if prop.kind is PropertyKind.COMPOSITE:
                if not isinstance(value, prop.value_type):
                    raise TypeError(f"{name} expects {prop.value_type.__name__}, got {type(value).__name__}")
                self.__dict__[name] = value
            else:
                prop.set_value(self, value)

    # ------------------------------------------------------------------
    # Rules
    # ------------------------------------------------------------------

    def create_rules(self) -> list[Validator]:
        """Override to return the rules for this type. Called once per instance."""
        return []

    def _ensure_rules(self) -> list[Validator]:
        rules = self.__dict__.get("_rules")
        if rules is None:
            rules = self._rules = list(self.create_rules())
            validation_logger().debug("rules_created", type=type(self).__name__, count=len(rules))
        return rules

    def get_broken_rules(self, property_name: str | None = None) -> tuple[Validator, ...]:
        """Evaluate rules and return the broken ones, in rule order.

        With no name (or an empty one) every rule is evaluated; otherwise
        only rules targeting that property. Unknown names yield ().
        """
        property_name = _clean(property_name)
        return tuple(
            rule for rule in self._ensure_rules()
            if (not property_name or rule.property_name == property_name) and not rule.validate(self)
        )

    def _own_details(self, property_name: str | None = None) -> list[BrokenRuleDetail]:
        scope = _clean(property_name)
        return [BrokenRuleDetail.for_rule(rule, scope) for rule in self.get_broken_rules(scope)]

    def error_for(self, property_name: str | None) -> str | None:
        """Error text for one property (or all own rules for ""), None if no rule is broken.

        Each line reads ``property_name + rule.property_name + ": " + description``,
        so ``obj["name"]`` for a broken required rule is "namename: Required.".
        """
        details = self._own_details(property_name)
        if not details:
            return None
        return "\n".join(detail.line for detail in details).strip()

    def __getitem__(self, property_name: str) -> str | None:
        return self.error_for(property_name)

    def _children(self) -> list[tuple[str, ValidatedObject]]:
        children: list[tuple[str, ValidatedObject]] = []
        for prop in declared_properties(type(self)):
            match prop.kind:
                case PropertyKind.COMPOSITE:
                    children.append((prop.name, prop.get_value(self)))
                case PropertyKind.COLLECTION:
                    children.extend((f"{prop.name}[{i}]", item) for i, item in enumerate(prop.get_value(self)))
        return children

    def validation_report(self) -> list[BrokenRuleDetail]:
        """Broken rules of the whole subtree as structured records, in ``error`` line order.

        Own rules come first, then each child's report qualified with the
        property path that holds it ("address", "orders[1]").
        """
        details = self._own_details()
        for path, child in self._children():
            details.extend(detail.with_prefix(path) for detail in child.validation_report())
        return details

    @property
    def error(self) -> str | None:
        """Every broken rule in this object's subtree, one path-qualified line each; None if valid."""
        details = self.validation_report()
        if not details:
            return None
        return "\n".join(detail.line for detail in details).strip()

    @property
    def is_valid(self) -> bool:
        return not self.validation_report()

    # ------------------------------------------------------------------
    # Emptiness
    # ------------------------------------------------------------------

    def is_empty(self) -> bool:
        """True when every data property is empty.

        Text is empty when None or ""; child objects when they are empty
        themselves; collections when they hold no elements. Any other
        non-None scalar counts as present.
        """
        props = declared_properties(type(self))
        empty = sum(1 for prop in props if _is_empty_value(prop, prop.get_value(self)))
        return empty == len(props)

    # ------------------------------------------------------------------
    # XML
    # ------------------------------------------------------------------

    def write_body(self, writer: XmlWriter) -> None:
        """Write inner content only; the caller writes the enclosing element."""
        write_body(self, writer)

    def read_body(self, reader: XmlReader) -> None:
        """Consume the current element (enclosing element included) into this instance."""
        read_body(self, reader)

    @classmethod
    def from_xml_reader(cls, reader: XmlReader):
        obj = cls()
        obj.read_body(reader)
        return obj

    # ------------------------------------------------------------------
    # Change notification
    # ------------------------------------------------------------------

    def add_property_changed_listener(self, listener: PropertyChangedListener) -> None:
        self.__dict__.setdefault("_property_listeners", []).append(listener)

    def remove_property_changed_listener(self, listener: PropertyChangedListener) -> None:
        self.__dict__.setdefault("_property_listeners", []).remove(listener)

    def add_validity_changed_listener(self, listener: ValidityChangedListener) -> None:
        self.__dict__.setdefault("_validity_listeners", []).append(listener)

    def remove_validity_changed_listener(self, listener: ValidityChangedListener) -> None:
        self.__dict__.setdefault("_validity_listeners", []).remove(listener)

    def notify_changed(self, *property_names: str) -> None:
        """Signal each changed property, then a single validity change."""
        for name in property_names:
            for listener in list(self.__dict__.get("_property_listeners", ())):
                listener(self, name)
        for listener in list(self.__dict__.get("_validity_listeners", ())):
            listener(self)

    # ------------------------------------------------------------------
    # Equality
    # ------------------------------------------------------------------

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidatedObject):
            return NotImplemented
        if type(self) is not type(other):
            return False
        return all(prop.get_value(self) == prop.get_value(other) for prop in declared_properties(type(self)))

    def __hash__(self) -> int:
        h = _HASH_SEED
        for prop in declared_properties(type(self)):
            value = prop.get_value(self)
            if value is None:
                continue
            if prop.kind is PropertyKind.COLLECTION:
                value = tuple(value)
            h = (h * _HASH_FACTOR + hash(value)) & _HASH_MASK
        return h

    def __repr__(self) -> str:
        fields = ", ".join(f"{p.name}={p.get_value(self)!r}" for p in declared_properties(type(self)))
        return f"{type(self).__name__}({fields})"
