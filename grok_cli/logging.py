"""
Diagnostic logging.

The REPL owns stdout, so log records go only to an append-only file.
Entries are timestamped, human-readable text carrying the callsite
(file and line) plus any structured fields passed as kwargs.

Usage:
    from grok_cli.logging import get_logger, setup_logging

    setup_logging("grok_app.log")
    logger = get_logger(__name__)
    logger.error("api returned non-200 status", url=url, status=503)
"""

import logging
from pathlib import Path
from typing import Any

import structlog
from structlog.typing import Processor

DEFAULT_LOG_FILE = "grok_app.log"
DEFAULT_LOG_LEVEL = "INFO"


def setup_logging(
    log_file: str | Path = DEFAULT_LOG_FILE,
    level: str = DEFAULT_LOG_LEVEL,
) -> logging.Handler:
    """
    Configure structured logging to a file.

    Args:
        log_file: Path of the log file (opened in append mode)
        level: Log level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)

    Returns:
        The file handler attached to the root logger

    Raises:
        ValueError: If level is not a known log level name
        OSError: If the log file cannot be opened

    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        raise ValueError(f"Unknown log level: {level}")

    shared_processors: list[Processor] = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.CallsiteParameterAdder(
            parameters=[
                structlog.processors.CallsiteParameter.FILENAME,
                structlog.processors.CallsiteParameter.LINENO,
            ],
        ),
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

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=False),
        foreign_pre_chain=shared_processors,
    )

    path = Path(log_file)
    path.parent.mkdir(parents=True, exist_ok=True)
    file_handler = logging.FileHandler(path, mode="a", encoding="utf-8")
    file_handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    root_logger.addHandler(file_handler)

    return file_handler


def get_logger(name: str) -> Any:
    """
    Get a logger instance for the given name.

    Args:
        name: Logger name, typically __name__

    Returns:
        Configured structlog logger

    """
    return structlog.get_logger(name)
