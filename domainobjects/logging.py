"""Structured Logging

The library logs through structlog loggers bound to stdlib loggers under
the "domainobjects" namespace, so nothing is printed until a handler is
installed, either by the host application or by ``configure_logging``.

Events:
    properties_resolved      debug   a type's ordered property list was built
    rules_created            debug   an instance built its rule list
    unknown_element_skipped  debug   read_body ignored an element
    xml_document_written     info    write_xml_file finished
    xml_document_read        info    read_xml_file finished
    configuration_error      error   a declaration contradicts its metadata
"""
import logging
import sys
from typing import TextIO

import structlog
from structlog.types import EventDict, Processor

LIBRARY_LOGGER = "domainobjects"


def _add_library_info(logger: logging.Logger, method_name: str, event_dict: EventDict) -> EventDict:
    event_dict.setdefault("library", LIBRARY_LOGGER)
    return event_dict


def get_shared_processors() -> list[Processor]:
    """Enrichment applied to every event, ours or foreign, before rendering."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        _add_library_info,
    ]


def _renderer(json_logs: bool, stream: TextIO) -> Processor:
    if json_logs:
        return structlog.processors.JSONRenderer(sort_keys=True)
    return structlog.dev.ConsoleRenderer(
        colors=stream.isatty(),
        exception_formatter=structlog.dev.plain_traceback,
    )


def configure_logging(level: str = "WARNING", json_logs: bool = False, stream: TextIO | None = None) -> None:
    """Install a structlog-formatted handler on the library logger.

    Args:
        level: DEBUG, INFO, WARNING, ERROR or CRITICAL; unknown names mean WARNING
        json_logs: one JSON object per line instead of console output
        stream: destination, stdout by default
    """
    stream = stream or sys.stdout
    handler = logging.StreamHandler(stream)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=get_shared_processors(),
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            _renderer(json_logs, stream),
        ],
    ))

    library_logger = logging.getLogger(LIBRARY_LOGGER)
    library_logger.handlers = [handler]
    library_logger.setLevel(logging.getLevelNamesMapping().get(level.strip().upper(), logging.WARNING))
    library_logger.propagate = False


def configure_from_settings() -> None:
    """Configure logging from DOMAINOBJECTS_LOG_LEVEL / DOMAINOBJECTS_LOG_JSON."""
    from domainobjects.config import get_settings

    settings = get_settings()
    configure_logging(level=settings.LOG_LEVEL, json_logs=settings.LOG_JSON)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Structured logger for ``name``, namespaced under the library logger."""
    if name != LIBRARY_LOGGER and not name.startswith(f"{LIBRARY_LOGGER}."):
        name = f"{LIBRARY_LOGGER}.{name}"
    return structlog.wrap_logger(
        logging.getLogger(name),
        processors=[
            structlog.stdlib.filter_by_level,
            *get_shared_processors(),
            structlog.processors.format_exc_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
    )


class LoggerRegistry:
    """One logger per library area, created on first use."""

    _loggers: dict[str, structlog.stdlib.BoundLogger] = {}

    @classmethod
    def get(cls, area: str) -> structlog.stdlib.BoundLogger:
        logger = cls._loggers.get(area)
        if logger is None:
            logger = cls._loggers.setdefault(area, get_logger(area))
        return logger


def registry_logger() -> structlog.stdlib.BoundLogger:
    return LoggerRegistry.get("properties")


def validation_logger() -> structlog.stdlib.BoundLogger:
    return LoggerRegistry.get("validation")


def serialization_logger() -> structlog.stdlib.BoundLogger:
    return LoggerRegistry.get("serialization")
