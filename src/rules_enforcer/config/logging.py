"""
logging.py - Diagnostic logging configuration

Structured logging with ANSI colors, written to stderr only. stdout is
owned by the MCP stdio transport, so nothing in this package may print
diagnostics there.

Example output:
    2026-01-21 10:30:45 [INFO    ] rules_enforcer.store: 📋 Rules loaded path=/work/rules.md length=812

Usage:
    from rules_enforcer.config.logging import configure_logging, get_logger
    configure_logging(level="INFO")
    logger = get_logger("rules_enforcer.my_module")
    logger.info("Starting...", path=str(path))
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from typing import Any

import structlog


class Colors:
    """ANSI color codes for terminal output."""

    RESET = "\033[0m"
    DIM = "\033[2m"
    BOLD = "\033[1m"

    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    MAGENTA = "\033[35m"
    CYAN = "\033[36m"
    BRIGHT_BLACK = "\033[90m"


LOG_COLORS = {
    "DEBUG": f"{Colors.BRIGHT_BLACK}{Colors.DIM}",
    "INFO": Colors.GREEN,
    "WARNING": Colors.YELLOW,
    "ERROR": f"{Colors.RED}{Colors.BOLD}",
    "CRITICAL": f"{Colors.RED}{Colors.BOLD}",
}

_RESERVED_KEYS = ("logger", "logger_name", "event", "_colors", "level", "timestamp")


def format_log(
    _logger: Any,
    method_name: str,
    event_dict: dict[str, Any],
) -> str:
    """Render an event dict as a single log line.

    Args:
        _logger: The logger instance (unused)
        method_name: The log method name (info, error, etc.)
        event_dict: The event dictionary containing event and other data

    Returns:
        Formatted log string, colored when the target stream is a TTY
    """
    colors = event_dict.pop("_colors", None)
    if colors is None:
        colors = _force_colors

    msg = str(event_dict.get("event", ""))
    if colors:
        return _format_rich(method_name, msg, event_dict)
    return _format_plain(method_name, msg, event_dict)


def _format_rich(level: str, msg: str, data: dict[str, Any]) -> str:
    level_upper = level.upper()
    color = LOG_COLORS.get(level_upper, "")
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

    parts = [
        f"{Colors.BRIGHT_BLACK}{timestamp}{Colors.RESET}",
        f"{color}[{level_upper:<8}]{Colors.RESET}",
    ]

    logger_name = data.get("logger", "") or data.get("logger_name", "")
    if logger_name:
        parts.append(f"{Colors.CYAN}{logger_name}:{Colors.RESET}")

    parts.append(msg)

    for key, value in data.items():
        if key in _RESERVED_KEYS:
            continue
        parts.append(f"{Colors.MAGENTA}{key}={Colors.RESET}{Colors.GREEN}{value}{Colors.RESET}")

    return " ".join(parts)


def _format_plain(level: str, msg: str, data: dict[str, Any]) -> str:
    timestamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")
    parts = [f"{timestamp} [{level.upper():<8}]"]

    logger_name = data.get("logger", "") or data.get("logger_name", "")
    if logger_name:
        parts.append(f"{logger_name}:")
    parts.append(msg)

    extra = {k: v for k, v in data.items() if k not in _RESERVED_KEYS}
    if extra:
        parts.append(" ".join(f"{k}={v}" for k, v in extra.items()))

    return " ".join(parts)


class _SafeStreamHandler(logging.StreamHandler):
    """StreamHandler that drops records once its stream has been closed.

    Test runners swap and close stderr between invocations.
    """

    def emit(self, record: logging.LogRecord) -> None:
        if getattr(self.stream, "closed", False):
            return
        super().emit(record)


_configured = False
_force_colors = False


def configure_logging(
    level: str = "INFO",
    colors: bool | None = None,
    verbose: bool = False,
    force: bool = False,
) -> None:
    """Configure global logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
        colors: Enable ANSI colors. If None, auto-detect from TTY.
        verbose: Enable verbose mode (DEBUG level)
        force: Force reconfiguration even if already configured
    """
    global _configured, _force_colors

    if _configured and not force:
        return

    log_level = getattr(logging, level.upper(), logging.INFO)
    if verbose:
        log_level = logging.DEBUG

    if colors is None:
        colors = sys.stderr.isatty()
    _force_colors = colors

    root_logger = logging.getLogger()
    root_logger.handlers = []

    stderr_handler = _SafeStreamHandler(sys.stderr)
    stderr_handler.setFormatter(logging.Formatter("%(message)s"))
    root_logger.addHandler(stderr_handler)
    root_logger.setLevel(log_level)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            format_log,
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    # The MCP SDK logs every request at INFO.
    logging.getLogger("mcp").setLevel(logging.WARNING if log_level > logging.DEBUG else log_level)

    _configured = True


def get_logger(name: str = "rules_enforcer") -> structlog.stdlib.BoundLogger:
    """Get a logger instance.

    Args:
        name: Logger name (usually the dotted module path)
    """
    return structlog.get_logger(name)


__all__ = [
    "Colors",
    "configure_logging",
    "format_log",
    "get_logger",
]
