"""Scalar Text Codec

Element text is converted to a property's declared scalar type by an
explicit rule per target type; conversions never guess across types.
Each rule returns a Result so the reader decides when a failure becomes
a ParseError.
"""
from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
from typing import Any, ClassVar, Generic, TypeVar

from domainobjects.errors import AppError, Err, ErrorCode, Ok, Result, invalid_format, raise_error

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class CoercionRule(ABC, Generic[T]):
    """Converts element text to one scalar type."""
    target_type: ClassVar[type]

    @abstractmethod
    def _parse(self, text: str, fmt: str | None) -> T:
        """Parse text, raising ValueError (or InvalidOperation) on bad input."""

    def coerce(self, text: str, *, element: str = "", fmt: str | None = None) -> Result[T, AppError]:
        try:
            return Ok(self._parse(text, fmt))
        except (ValueError, InvalidOperation):
            return invalid_format(element, text, self.target_type.__name__, origin="coercion")


@dataclass(frozen=True, slots=True)
class TextRule(CoercionRule[str]):
    """Surrounding whitespace is dropped, as on write."""
    target_type: ClassVar[type] = str

    def _parse(self, text: str, fmt: str | None) -> str:
        return text.strip()


@dataclass(frozen=True, slots=True)
class IntegerRule(CoercionRule[int]):
    target_type: ClassVar[type] = int

    def _parse(self, text: str, fmt: str | None) -> int:
        return int(text.strip())


@dataclass(frozen=True, slots=True)
class FloatRule(CoercionRule[float]):
    target_type: ClassVar[type] = float

    def _parse(self, text: str, fmt: str | None) -> float:
        return float(text.strip())


@dataclass(frozen=True, slots=True)
class DecimalRule(CoercionRule[Decimal]):
    """Full precision on read; only finite values."""
    target_type: ClassVar[type] = Decimal

    def _parse(self, text: str, fmt: str | None) -> Decimal:
        value = Decimal(text.strip())
        if not value.is_finite():
            raise ValueError(f"Non-finite decimal: {text}")
        return value


@dataclass(frozen=True, slots=True)
class BooleanRule(CoercionRule[bool]):
    """xs:boolean lexical forms."""
    target_type: ClassVar[type] = bool
    lexical: dict[str, bool] = field(default_factory=lambda: {"true": True, "1": True, "false": False, "0": False})

    def _parse(self, text: str, fmt: str | None) -> bool:
        try:
            return self.lexical[text.strip().lower()]
        except KeyError:
            raise ValueError(f"Not a boolean: {text}") from None


@dataclass(frozen=True, slots=True)
class DateTimeRule(CoercionRule[datetime]):
    """ISO-8601 (a trailing Z is UTC) or an explicit strptime pattern."""
    target_type: ClassVar[type] = datetime

    def _parse(self, text: str, fmt: str | None) -> datetime:
        if fmt:
            return datetime.strptime(text.strip(), fmt)
        return datetime.fromisoformat(text.strip().replace("Z", "+00:00"))


@dataclass(frozen=True, slots=True)
class DateRule(CoercionRule[date]):
    target_type: ClassVar[type] = date

    def _parse(self, text: str, fmt: str | None) -> date:
        if fmt:
            return datetime.strptime(text.strip(), fmt).date()
        return date.fromisoformat(text.strip())


DEFAULT_RULES: tuple[CoercionRule, ...] = (
    TextRule(), IntegerRule(), FloatRule(), DecimalRule(), BooleanRule(), DateTimeRule(), DateRule(),
)


@dataclass(frozen=True, slots=True)
class ScalarCodec:
    """Text conversion for every supported scalar type.

    Usage:
        codec = ScalarCodec()
        codec.coerce("12", int, element="quantity")  # Ok(12)
        codec.format(Decimal("3.5"))                  # "3.50"
    """
    rules: tuple[CoercionRule, ...] = DEFAULT_RULES
    decimal_format: str = "0.00"

    def coerce(self, text: str, target_type: type[T], *, element: str = "",
               date_format: str | None = None) -> Result[T, AppError]:
        """Convert element text to ``target_type``."""
        # Exact type match: bool must not be handled by the int rule.
        rule = next((r for r in self.rules if r.target_type is target_type), None)
        if rule is None:
            return Err(AppError(
                code=ErrorCode.E2004_INVALID_TYPE,
                message=f"No text conversion to {target_type.__name__}",
                origin="coercion",
                metadata={"element": element, "target_type": target_type.__name__},
            ))
        return rule.coerce(text, element=element, fmt=date_format)

    def format(self, value: Any, *, element: str = "", date_format: str | None = None) -> str | None:
        """Canonical element text for a scalar, or None when nothing should be written.

        Raises ParseError for a non-finite Decimal, which has no text the
        reader would accept.
        """
        match value:
            case None:
                return None
            case str():
                return value.strip() or None
            case bool():
                return "true" if value else "false"
            case Decimal():
                return self._format_decimal(value, element)
            case datetime() | date():
                return value.strftime(date_format) if date_format else value.isoformat()
            case float():
                return repr(value)
            case _:
                return str(value)

    def _format_decimal(self, value: Decimal, element: str) -> str:
        if not value.is_finite():
            raise_error(invalid_format(element, str(value), "finite Decimal", origin="coercion").error)
        quantum = Decimal(self.decimal_format)
        with localcontext() as ctx:
            # Room for every integer digit plus the quantum's fraction digits.
            ctx.prec = max(ctx.prec, value.adjusted() + 2 - quantum.as_tuple().exponent)
            return f"{value.quantize(quantum, rounding=ROUND_HALF_UP):f}"
