"""Logging configuration for the Storefront service.

Every record is rendered by structlog, including records that Protean,
uvicorn and other libraries emit through the standard library: those are
routed through `structlog.stdlib.ProcessorFormatter` with the same processor
chain, so a request's `customer_id` shows up next to framework messages too.

Environment:
    LOG_LEVEL   overrides the level derived from the environment name
    LOG_DIR     directory for rotating log files (default "logs"); files are
                not written when the environment is "test"
"""

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import Any

import structlog

_LEVELS = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_MAX_BYTES = 10 * 1024 * 1024


def _environment() -> str:
    return (os.getenv("ENV") or os.getenv("ENVIRONMENT") or os.getenv("PROTEAN_ENV") or "development").lower()


def get_log_level() -> str:
    """Get log level based on environment."""
    return os.getenv("LOG_LEVEL", _LEVELS.get(_environment(), "INFO")).upper()


def _shared_processors() -> list:
    """Processors applied to structlog and stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
                structlog.processors.CallsiteParameter.FUNC_NAME,
            ]
        ),
    ]


def _renderers(env: str) -> list:
    if env in ("production", "staging"):
        return [
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ]
    return [
        structlog.dev.ConsoleRenderer(
            colors=sys.stdout.isatty(),
            exception_formatter=structlog.dev.RichTracebackFormatter(show_locals=True, max_frames=2),
        )
    ]


def _file_handler(path: Path, level: int | str) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=_MAX_BYTES,
        backupCount=5,
        encoding="utf-8",
    )
    handler.setLevel(level)
    return handler


def _handlers(level: str, env: str, log_dir: str | None, log_file_prefix: str) -> list[logging.Handler]:
    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    handlers = [console]

    if env != "test":
        log_path = Path(log_dir or os.getenv("LOG_DIR", "logs"))
        log_path.mkdir(parents=True, exist_ok=True)
        handlers.append(_file_handler(log_path / f"{log_file_prefix}.log", level))
        handlers.append(_file_handler(log_path / f"{log_file_prefix}_error.log", logging.ERROR))

    return handlers


def configure_logging(log_dir: str | None = None, log_file_prefix: str = "storefront") -> None:
    """Configure stdlib handlers and structlog for the application."""
    env = _environment()
    level = get_log_level()
    shared = _shared_processors()

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=shared,
        processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, *_renderers(env)],
    )

    root_logger = logging.getLogger()
    root_logger.handlers = []
    root_logger.setLevel(level)
    for handler in _handlers(level, env, log_dir, log_file_prefix):
        handler.setFormatter(formatter)
        root_logger.addHandler(handler)

    # Framework chatter stays at WARNING unless explicitly asked for
    for noisy in ("protean", "asyncio", "urllib3"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            *shared,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a configured logger instance."""
    return structlog.get_logger(name)


def add_context(**kwargs: Any) -> None:
    """Bind key-value pairs into every log line of the current request."""
    structlog.contextvars.bind_contextvars(**kwargs)


def clear_context() -> None:
    """Drop everything bound with `add_context`."""
    structlog.contextvars.clear_contextvars()
