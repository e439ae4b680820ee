"""Data Property Declarations and Registry

A data property is a class-level descriptor that takes part in
validation, serialization, equality and emptiness checks. Each concrete
type declares its properties once; the registry resolves them into an
ordered, immutable tuple of DeclaredProperty records that every other
module iterates.

Usage:
    class Address(ValidatedObject):
        street = data_property(str, order=0)
        city = data_property(str, order=1)

    class Customer(ValidatedObject):
        name = data_property(str, order=0)
        address = child_property(Address, order=1)
        orders = collection_property(Order, order=2)

    declared_properties(Customer)  # (name, address, orders)
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from enum import Enum
from itertools import count
from typing import Any

from domainobjects.errors import raise_error, unknown_property, unsupported_property_type
from domainobjects.logging import registry_logger

SCALAR_TYPES: tuple[type, ...] = (str, int, float, Decimal, bool, datetime, date)

_declaration_sequence = count()


class PropertyKind(str, Enum):
    """Semantic shape of a data property value."""
    SCALAR = "scalar"
    COMPOSITE = "composite"
    COLLECTION = "collection"


class DataProperty:
    """Descriptor for a scalar data property.

    Values live in the instance ``__dict__``; every assignment fires the
    owner's change notification for this property.
    """
    kind = PropertyKind.SCALAR

    def __init__(self, value_type: type = str, *, order: int | None = None, default: Any = None):
        self.value_type = value_type
        self.order = order
        self.default = default
        self.sequence = next(_declaration_sequence)
        self.name = ""

    def __set_name__(self, owner: type, name: str) -> None:
        self.name = name

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        return instance.__dict__.get(self.name, self.default)

    def __set__(self, instance, value) -> None:
        instance.__dict__[self.name] = value
        instance.notify_changed(self.name)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.value_type.__name__}, name={self.name!r}, order={self.order})"


class ChildProperty(DataProperty):
    """Descriptor for a composite child object.

    The child is constructed on first access and never replaced; reading
    XML fills the existing instance in place.
    """
    kind = PropertyKind.COMPOSITE

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        child = instance.__dict__.get(self.name)
        if child is None:
            child = instance.__dict__[self.name] = self.value_type()
        return child

    def __set__(self, instance, value) -> None:
        raise AttributeError(f"'{self.name}' is a child object and cannot be replaced")


class CollectionProperty(DataProperty):
    """Descriptor for an ordered list of composite objects.

    Assignment replaces the list contents in place.
    """
    kind = PropertyKind.COLLECTION

    def __get__(self, instance, owner=None):
        if instance is None:
            return self
        items = instance.__dict__.get(self.name)
        if items is None:
            items = instance.__dict__[self.name] = []
        return items

    def __set__(self, instance, value) -> None:
        items = self.__get__(instance)
        items[:] = list(value or ())
        instance.notify_changed(self.name)


def data_property(value_type: type = str, *, order: int | None = None, default: Any = None) -> Any:
    """Declare a scalar data property (text, numeric, boolean or temporal)."""
    return DataProperty(value_type, order=order, default=default)


def child_property(child_type: type, *, order: int | None = None) -> Any:
    """Declare a composite child object property."""
    return ChildProperty(child_type, order=order)


def collection_property(element_type: type, *, order: int | None = None) -> Any:
    """Declare an ordered collection of composite objects."""
    return CollectionProperty(element_type, order=order)


@dataclass(frozen=True, slots=True)
class DeclaredProperty:
    """Resolved, immutable metadata for one data property of a type."""
    name: str
    order: int
    kind: PropertyKind
    value_type: type
    sequence: int

    @property
    def is_object(self) -> bool:
        """True for composite and collection-of-composite properties."""
        return self.kind is not PropertyKind.SCALAR

    def get_value(self, instance) -> Any:
        return getattr(instance, self.name)

    def set_value(self, instance, value: Any) -> None:
        setattr(instance, self.name, value)


_PROPERTIES: dict[type, tuple[DeclaredProperty, ...]] = {}
_PROPERTY_INDEX: dict[type, dict[str, DeclaredProperty]] = {}


def _collect_descriptors(cls: type) -> dict[str, DataProperty]:
    """Gather descriptors along the MRO; subclasses override by name."""
    found: dict[str, DataProperty] = {}
    for klass in reversed(cls.__mro__):
        for name, attr in vars(klass).items():
            if isinstance(attr, DataProperty):
                found[name] = attr
            elif name in found:
                del found[name]
    return found


def _check_declaration(cls: type, descriptor: DataProperty) -> None:
    from domainobjects.base import ValidatedObject

    value_type = descriptor.value_type
    if descriptor.kind is PropertyKind.SCALAR:
        supported = value_type in SCALAR_TYPES
    else:
        supported = isinstance(value_type, type) and issubclass(value_type, ValidatedObject)
    if not supported:
        raise_error(unsupported_property_type(
            cls.__name__, descriptor.name, getattr(value_type, "__name__", repr(value_type)),
            origin="properties",
        ).error)


def _resolve(cls: type) -> tuple[DeclaredProperty, ...]:
    descriptors = _collect_descriptors(cls)
    for descriptor in descriptors.values():
        _check_declaration(cls, descriptor)

    # An omitted order falls back to the declaration sequence.
    ordered = sorted(
        descriptors.values(),
        key=lambda d: (d.sequence if d.order is None else d.order, d.sequence),
    )
    return tuple(
        DeclaredProperty(
            name=d.name,
            order=d.sequence if d.order is None else d.order,
            kind=d.kind,
            value_type=d.value_type,
            sequence=d.sequence,
        )
        for d in ordered
    )


def declared_properties(cls: type) -> tuple[DeclaredProperty, ...]:
    """Ordered data properties of ``cls``, resolved once and cached.

    Resolution is a pure function of the class, so concurrent first
    access can only ever publish equal tuples.
    """
    if not isinstance(cls, type):
        cls = type(cls)
    cached = _PROPERTIES.get(cls)
    if cached is not None:
        return cached

    resolved = _resolve(cls)
    _PROPERTY_INDEX.setdefault(cls, {p.name: p for p in resolved})
    registry_logger().debug(
        "properties_resolved",
        type=cls.__name__,
        properties=[p.name for p in resolved],
    )
    return _PROPERTIES.setdefault(cls, resolved)


def find_property(cls: type, name: str) -> DeclaredProperty | None:
    """Look up a declared property by name, or None."""
    if not isinstance(cls, type):
        cls = type(cls)
    declared_properties(cls)
    return _PROPERTY_INDEX[cls].get(name)


def require_property(cls: type, name: str) -> DeclaredProperty:
    """Look up a declared property by name; unknown names are a configuration error."""
    if not isinstance(cls, type):
        cls = type(cls)
    prop = find_property(cls, name)
    if prop is None:
        raise_error(unknown_property(cls.__name__, name, origin="properties").error)
    return prop
