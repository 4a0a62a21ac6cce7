"""Logging configuration using structlog for structured logging."""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import structlog
from structlog.types import FilteringBoundLogger


SENSITIVE_KEYS = {
    "password",
    "token",
    "key",
    "secret",
    "authorization",
    "api_key",
    "access_token",
    "refresh_token",
    "jwt",
}


def configure_logging(
    level: str = "WARNING",
    log_file: Optional[str] = None,
    json_logs: bool = False,
) -> FilteringBoundLogger:
    """Configure structured logging with structlog.

    Console output is reserved for the interactive prompts, so the default
    level only lets warnings and errors through to stderr.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        log_file: Optional log file path for file logging
        json_logs: Whether to use JSON formatting

    Returns:
        Configured structlog logger
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        redact_sensitive_values,
    ]

    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stderr,
        level=numeric_level,
        force=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        # 1MB per file, 5 backups
        file_handler = logging.handlers.RotatingFileHandler(
            log_path,
            maxBytes=1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(logging.Formatter("%(message)s"))
        logging.getLogger().addHandler(file_handler)

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    return structlog.get_logger()


def sanitize_log_data(data: Dict[str, Any]) -> Dict[str, Any]:
    """Remove sensitive information from log data.

    Args:
        data: Dictionary that may contain sensitive information

    Returns:
        Sanitized dictionary with sensitive values masked
    """
    sanitized = data.copy()

    for key, value in data.items():
        if any(sensitive in key.lower() for sensitive in SENSITIVE_KEYS):
            sanitized[key] = "[REDACTED]"
        elif key.lower() == "env" and isinstance(value, dict):
            # Values are resolved credentials
            sanitized[key] = {name: "[REDACTED]" for name in value}
        elif isinstance(value, dict):
            sanitized[key] = sanitize_log_data(value)

    return sanitized


def redact_sensitive_values(
    logger: Any, method_name: str, event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """structlog processor masking secrets before rendering."""
    return sanitize_log_data(event_dict)
