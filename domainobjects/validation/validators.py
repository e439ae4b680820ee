"""Rule Validators

A validator inspects one ValidatedObject instance, optionally scoped to a
single named data property, and reports pass/fail. Its description is
the text shown when the rule is broken.

Validators compose via AND:
- ``a & b`` builds an AndCompositeValidator that evaluates every child
  and accumulates the descriptions of all failing ones.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from functools import cached_property
from typing import TYPE_CHECKING, Any, Callable, Iterable, Sequence
import re

from domainobjects.properties import require_property

if TYPE_CHECKING:
    from domainobjects.base import ValidatedObject

REQUIRED_MESSAGE = "Required."


def _clean(value: str | None) -> str:
    return (value or "").strip()


class Validator(ABC):
    """Base class for all rules.

    Contract:
        - ``property_name`` is trimmed; empty means a whole-object rule
        - ``validate()`` is re-evaluated on every call, never cached
        - a property name absent from the type's declared properties is
          a ConfigurationError, raised while evaluating
    """

    def __init__(self, property_name: str | None = None, description: str | None = None):
        self.property_name = property_name
        self.description = description

    @property
    def property_name(self) -> str:
        return self._property_name

    @property_name.setter
    def property_name(self, value: str | None) -> None:
        self._property_name = _clean(value)

    @abstractmethod
    def validate(self, obj: ValidatedObject) -> bool:
        """Return True if the rule holds for ``obj``."""

    def get_property_value(self, obj: ValidatedObject, property_name: str | None = None) -> Any:
        """Read a declared data property of ``obj`` (defaults to this rule's property)."""
        name = self.property_name if property_name is None else property_name
        return require_property(type(obj), name).get_value(obj)

    def __and__(self, other: Validator) -> AndCompositeValidator:
        return AndCompositeValidator(self.property_name, [self, other])

    def __str__(self) -> str:
        return self.description or ""

    def __repr__(self) -> str:
        return f"{type(self).__name__}(property_name={self.property_name!r}, description={self.description!r})"


def _is_empty_value(value: Any) -> bool:
    from domainobjects.base import ValidatedObject

    if value is None:
        return True
    if isinstance(value, str):
        return value == ""
    if isinstance(value, ValidatedObject):
        return value.is_empty()
    if isinstance(value, list):
        return not value
    return False


class RequiredValidator(Validator):
    """Property must be set: non-empty text, a non-empty child object or collection, or any non-None value."""

    def __init__(self, property_name: str | None = None, description: str = REQUIRED_MESSAGE):
        super().__init__(property_name, description)

    def validate(self, obj: ValidatedObject) -> bool:
        return not _is_empty_value(self.get_property_value(obj))


class LengthValidator(Validator):
    """Text length must fall within [min_length, max_length]. Empty text is accepted."""

    def __init__(self, property_name: str | None, min_length: int, max_length: int | None = None,
                 description: str | None = None):
        if max_length is None:
            max_length = min_length
        if description is None:
            description = (f"Length must be {min_length}." if min_length == max_length
                           else f"Length must be between {min_length} and {max_length}.")
        super().__init__(property_name, description)
        self.min_length, self.max_length = min_length, max_length

    def validate(self, obj: ValidatedObject) -> bool:
        value = self.get_property_value(obj)
        if not value:
            return True
        return self.min_length <= len(value) <= self.max_length


class RegexValidator(Validator):
    """Text must match a regular expression. Empty text is accepted."""

    def __init__(self, property_name: str | None, pattern: str, description: str = "Unrecognized format.",
                 flags: int = 0):
        super().__init__(property_name, description)
        self.pattern, self.flags = pattern, flags

    @cached_property
    def _compiled(self) -> re.Pattern:
        return re.compile(self.pattern, self.flags)

    def validate(self, obj: ValidatedObject) -> bool:
        value = self.get_property_value(obj)
        return not value or self._compiled.match(value) is not None


class DomainValidator(Validator):
    """Value must be one of an allowed set."""

    def __init__(self, property_name: str | None, allowed: Iterable[Any], description: str = "Value not allowed."):
        super().__init__(property_name, description)
        self.allowed = tuple(allowed)

    def validate(self, obj: ValidatedObject) -> bool:
        return self.get_property_value(obj) in self.allowed


class DelegateValidator(Validator):
    """Rule backed by a predicate over the instance.

    Usage:
        DelegateValidator("name", "Name must be at least 5 letters long.",
                          lambda customer: len(customer.name or "") >= 5)
    """

    def __init__(self, property_name: str | None, description: str, predicate: Callable[[Any], bool]):
        super().__init__(property_name, description)
        self.predicate = predicate

    def validate(self, obj: ValidatedObject) -> bool:
        return bool(self.predicate(obj))


class AndCompositeValidator(Validator):
    """All child validators must pass; evaluation is not short-circuited.

    Children are re-targeted to the composite's property. After each
    evaluation the description holds the concatenated descriptions of
    the failing children, or is empty when all passed.
    """

    def __init__(self, property_name: str | None, validators: Sequence[Validator]):
        super().__init__(property_name, "")
        self.validators = list(validators)
        for validator in self.validators:
            validator.property_name = self.property_name

    def validate(self, obj: ValidatedObject) -> bool:
        failed = [v.description or "" for v in self.validators if not v.validate(obj)]
        self.description = "".join(failed)
        return not failed

    def __and__(self, other: Validator) -> AndCompositeValidator:
        return AndCompositeValidator(self.property_name, [*self.validators, other])


class XorRequiredValidator(Validator):
    """Exactly one of the named properties must be non-None."""

    def __init__(self, property_names: Sequence[str], description: str = REQUIRED_MESSAGE,
                 property_name: str | None = None):
        super().__init__(property_name, description)
        self.property_names = tuple(_clean(name) for name in property_names)

    def validate(self, obj: ValidatedObject) -> bool:
        present = sum(1 for name in self.property_names if self.get_property_value(obj, name) is not None)
        return present == 1
