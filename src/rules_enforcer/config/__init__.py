"""
rules_enforcer.config - Settings and logging.

Usage:
    from rules_enforcer.config import RulesSettings, configure_logging, get_logger
"""

from .logging import configure_logging, get_logger
from .settings import (
    DEFAULT_SERVER_NAME,
    RULES_FILENAME,
    SERVER_VERSION,
    RulesSettings,
    parse_auto_inject,
    resolve_rules_path,
)

__all__ = [
    "DEFAULT_SERVER_NAME",
    "RULES_FILENAME",
    "SERVER_VERSION",
    "RulesSettings",
    "configure_logging",
    "get_logger",
    "parse_auto_inject",
    "resolve_rules_path",
]
