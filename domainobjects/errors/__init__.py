"""Errors raised by domainobjects.

Inside the codec, failures travel as ``Result`` values (``Ok`` / ``Err``
holding an ``AppError``). At the public surface they become exceptions:

- ParseError: serialized input does not fit the declared properties
- ConfigurationError: a type or rule contradicts its declared metadata
- AppErrorException: base class, also raised for file errors

Usage:
    from domainobjects.errors import ParseError

    try:
        customer = from_xml(Customer, text)
    except ParseError as e:
        print(e.code, e.error.metadata)
"""
from .types import AppError, Err, ErrorCode, Ok, Result
from .builders import (
    configuration_error,
    file_error,
    invalid_format,
    malformed_document,
    parse_error,
    unexpected_node,
    unknown_property,
    unsupported_property_type,
)
from .handlers import (
    AppErrorException,
    ConfigurationError,
    ParseError,
    raise_error,
    raise_result,
    unwrap_or_raise,
)

__all__ = [
    "AppError",
    "Err",
    "ErrorCode",
    "Ok",
    "Result",
    "configuration_error",
    "file_error",
    "invalid_format",
    "malformed_document",
    "parse_error",
    "unexpected_node",
    "unknown_property",
    "unsupported_property_type",
    "AppErrorException",
    "ConfigurationError",
    "ParseError",
    "raise_error",
    "raise_result",
    "unwrap_or_raise",
]
