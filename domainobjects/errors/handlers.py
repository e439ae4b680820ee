"""Exception Boundary

Parse, configuration and file failures are fatal: they leave the Result
world here and propagate to the immediate caller as exceptions carrying
the originating AppError.
"""
from __future__ import annotations

from typing import NoReturn

from domainobjects.logging import get_logger

from .types import AppError, ErrorCode, Result

log = get_logger("errors")


class AppErrorException(Exception):
    """Exception carrying an AppError."""

    def __init__(self, error: AppError):
        self.error = error
        super().__init__(str(error))

    @property
    def code(self) -> ErrorCode:
        return self.error.code


class ParseError(AppErrorException):
    """Serialized input does not have the shape the declared properties require."""


class ConfigurationError(AppErrorException):
    """A type or validator is declared inconsistently with its metadata."""


_EXCEPTIONS: dict[str, type[AppErrorException]] = {
    "parse": ParseError,
    "configuration": ConfigurationError,
}


def raise_error(error: AppError) -> NoReturn:
    """Raise ``error`` as the exception class of its category.

    Usage:
        if prop is None:
            raise_error(unknown_property(cls.__name__, name).error)
    """
    exc_type = _EXCEPTIONS.get(error.code.category, AppErrorException)
    if exc_type is ConfigurationError:
        log.error("configuration_error", **error.to_dict())
    if error.cause is not None:
        raise exc_type(error) from error.cause
    raise exc_type(error)


def raise_result(result: Result) -> None:
    """Raise if ``result`` is an Err, otherwise return."""
    if result.is_err():
        raise_error(result.unwrap_err())


def unwrap_or_raise(result: Result):
    """Return the Ok value, raising the Err as its exception."""
    raise_result(result)
    return result.unwrap()
