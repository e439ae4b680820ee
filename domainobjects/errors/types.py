"""Error Values and Result

The codec layer reports failures as values: a Result is either Ok(value)
or Err(AppError), and only the exception boundary in ``handlers`` turns
an Err into a raised exception. Broken validation rules are not errors
in this sense and never appear here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Generic, NoReturn, TypeVar, Union, final

T = TypeVar("T")
E = TypeVar("E", bound="AppError")

_CATEGORIES = {2: "parse", 5: "configuration", 6: "resource"}


class ErrorCode(Enum):
    """Numbered error codes; the thousands digit selects the category.

    2xxx  malformed or unconvertible serialized input
    5xxx  type or rule declarations that contradict their metadata
    6xxx  document files that cannot be read or written
    """
    E2000_PARSE_GENERIC = 2000
    E2001_UNEXPECTED_NODE = 2001
    E2002_INVALID_FORMAT = 2002
    E2003_MALFORMED_DOCUMENT = 2003
    E2004_INVALID_TYPE = 2004

    E5000_CONFIGURATION_GENERIC = 5000
    E5001_UNKNOWN_PROPERTY = 5001
    E5002_UNSUPPORTED_PROPERTY_TYPE = 5002

    E6001_FILE_NOT_FOUND = 6001
    E6002_FILE_READ_ERROR = 6002
    E6003_FILE_WRITE_ERROR = 6003

    @property
    def category(self) -> str:
        return _CATEGORIES[self.value // 1000]


@dataclass(frozen=True, slots=True)
class AppError:
    """An error value.

    - origin: module that produced it ("stream", "coercion", ...)
    - metadata: element names, offending text, property names
    - cause: the underlying exception, when one was caught
    """
    code: ErrorCode
    message: str
    origin: str = ""
    metadata: dict[str, Any] = field(default_factory=dict)
    cause: Exception | None = None

    def to_dict(self) -> dict[str, Any]:
        return {
            "error_code": self.code.name,
            "category": self.code.category,
            "message": self.message,
            "origin": self.origin,
            **self.metadata,
        }

    def __str__(self) -> str:
        return f"[{self.code.name}] {self.message}"


@final
@dataclass(frozen=True, slots=True)
class Ok(Generic[T]):
    value: T

    def is_err(self) -> bool:
        return False

    def unwrap(self) -> T:
        return self.value


@final
@dataclass(frozen=True, slots=True)
class Err(Generic[E]):
    error: E

    def is_err(self) -> bool:
        return True

    def unwrap(self) -> NoReturn:
        raise ValueError(f"unwrap() on {self.error}")

    def unwrap_err(self) -> E:
        return self.error


Result = Union[Ok[T], Err[E]]
