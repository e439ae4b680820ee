"""Error Builders

One constructor per failure the library can report. Each returns an
``Err`` so callers inside the codec can pass it along as a Result, or
hand ``.error`` straight to ``raise_error``.
"""
from .types import AppError, Err, ErrorCode


def _err(code: ErrorCode, message: str, origin: str, cause: Exception | None = None, **metadata) -> Err[AppError]:
    return Err(AppError(
        code=code,
        message=message,
        origin=origin,
        metadata={k: v for k, v in metadata.items() if v is not None},
        cause=cause,
    ))


# Serialized input

def parse_error(message: str, *, code: ErrorCode = ErrorCode.E2000_PARSE_GENERIC,
                origin: str = "", **metadata) -> Err[AppError]:
    return _err(code, message, origin, **metadata)


def unexpected_node(expected: str, actual: str, origin: str = "") -> Err[AppError]:
    return parse_error(f"Expected {expected}, found {actual}",
                       code=ErrorCode.E2001_UNEXPECTED_NODE, origin=origin, expected=expected, actual=actual)


def invalid_format(element: str, value: str, target: str, origin: str = "") -> Err[AppError]:
    return parse_error(f"Cannot convert '{value}' in <{element}> to {target}",
                       code=ErrorCode.E2002_INVALID_FORMAT, origin=origin, element=element, value=value, target=target)


def malformed_document(reason: str, origin: str = "", cause: Exception | None = None) -> Err[AppError]:
    return _err(ErrorCode.E2003_MALFORMED_DOCUMENT, f"Malformed XML document: {reason}", origin, cause)


# Declarations

def configuration_error(message: str, *, code: ErrorCode = ErrorCode.E5000_CONFIGURATION_GENERIC,
                        origin: str = "", **metadata) -> Err[AppError]:
    return _err(code, message, origin, **metadata)


def unknown_property(type_name: str, property_name: str, origin: str = "") -> Err[AppError]:
    return configuration_error(f"'{property_name}' is not a declared data property of {type_name}",
                               code=ErrorCode.E5001_UNKNOWN_PROPERTY, origin=origin,
                               type_name=type_name, property_name=property_name)


def unsupported_property_type(type_name: str, property_name: str, value_type: str, origin: str = "") -> Err[AppError]:
    return configuration_error(f"{type_name}.{property_name}: unsupported data property type {value_type}",
                               code=ErrorCode.E5002_UNSUPPORTED_PROPERTY_TYPE, origin=origin,
                               type_name=type_name, property_name=property_name, value_type=value_type)


# Document files

def file_error(path: str, operation: str, cause: Exception, origin: str = "") -> Err[AppError]:
    if isinstance(cause, FileNotFoundError):
        code = ErrorCode.E6001_FILE_NOT_FOUND
    elif operation == "write":
        code = ErrorCode.E6003_FILE_WRITE_ERROR
    else:
        code = ErrorCode.E6002_FILE_READ_ERROR
    return _err(code, f"Cannot {operation} '{path}': {cause}", origin, cause, path=path, operation=operation)
