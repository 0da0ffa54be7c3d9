"""
Centralized Logging Configuration.

All modules log through structlog on top of the stdlib logging module.
Settings come from the validated logging section of the app config
(config/settings/logging.yaml, checked against LoggingSchema).

Note plaintext, sealed blobs, passphrases and keys must never reach a log
record. Every record, structlog or stdlib, passes through
``redact_note_secrets`` before it is rendered, so a stray
``passphrase=...`` or ``content=...`` field shows up as ``[redacted]``.

Usage:
    from notevault.backend.core.logging import get_logger, setup_logging

    setup_logging()                                   # from logging.yaml
    setup_logging(level="DEBUG", format_type="console")

    logger = get_logger(__name__)
    logger.info("Note saved", extra={"note_id": note_id})
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Any

import structlog
from structlog.typing import EventDict, Processor, WrappedLogger

from notevault.backend.core.config import find_project_root, get_app_config
from notevault.backend.core.config_schema import LoggingSchema

REDACTED = "[redacted]"

SENSITIVE_FIELDS = frozenset({"passphrase", "plaintext", "content", "key"})
"""Field names whose values are replaced before a record is rendered."""


def redact_note_secrets(
    logger: WrappedLogger, method_name: str, event_dict: EventDict
) -> EventDict:
    """Replace sensitive fields, top-level or inside ``extra``, with a marker."""
    for field in SENSITIVE_FIELDS & event_dict.keys():
        event_dict[field] = REDACTED

    extra = event_dict.get("extra")
    if isinstance(extra, dict) and SENSITIVE_FIELDS & extra.keys():
        event_dict["extra"] = {
            name: REDACTED if name in SENSITIVE_FIELDS else value
            for name, value in extra.items()
        }
    return event_dict


def setup_logging(
    level: str | None = None,
    format_type: str | None = None,
    config: LoggingSchema | None = None,
) -> None:
    """
    Configure structured logging for the application.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL). Overrides config.
        format_type: Output format ('json' or 'console'). Overrides config.
        config: Logging settings; defaults to ``get_app_config().logging``.
    """
    if config is None:
        config = get_app_config().logging

    log_level = getattr(logging, (level or config.level).upper())
    effective_format = format_type or config.format

    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FUNC_NAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
        redact_note_secrets,
    ]

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    json_formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.processors.JSONRenderer(),
        foreign_pre_chain=shared_processors,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    # stdout is reserved for command output
    if config.handlers.console.enabled:
        console_handler = logging.StreamHandler(sys.stderr)
        if effective_format == "console":
            console_handler.setFormatter(structlog.stdlib.ProcessorFormatter(
                processor=structlog.dev.ConsoleRenderer(colors=True),
                foreign_pre_chain=shared_processors,
            ))
        else:
            console_handler.setFormatter(json_formatter)
        root_logger.addHandler(console_handler)

    file_config = config.handlers.file
    if file_config.enabled:
        log_path = find_project_root() / file_config.path
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = RotatingFileHandler(
            filename=str(log_path),
            maxBytes=file_config.max_bytes,
            backupCount=file_config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(json_formatter)
        root_logger.addHandler(file_handler)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)


def get_logger(name: str) -> Any:
    """Get a structlog logger, typically for ``__name__``."""
    return structlog.get_logger(name)


def log_with_source(logger: Any, source: str, level: str, message: str, **kwargs: Any) -> None:
    """
    Log a message tagged with where it came from.

    The CLI tags its own records with ``source="cli"`` so they can be told
    apart from service records in the JSONL file.

    Raises:
        AttributeError: If level is not a valid log level
    """
    getattr(logger, level.lower())(message, source=source, **kwargs)
