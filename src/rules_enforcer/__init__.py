"""
rules_enforcer - Zero-tool MCP server for markdown rules

Loads a rules document from disk and serves it to AI agent sessions as the
``rules://current`` resource and a set of injection prompts.

Modules:
    config: Environment settings and structured logging
    store: Cached rules document with mtime staleness check
    formatting: Display and injection wrappers
    mcp_server: MCP handlers, server registration, stdio runner
    cli: Typer command line
"""

from .config.settings import RulesSettings
from .store import FailureReason, RulesLoaded, RulesLoadFailure, RulesStore

__all__ = [
    "FailureReason",
    "RulesLoadFailure",
    "RulesLoaded",
    "RulesSettings",
    "RulesStore",
]

__version__ = "1.0.0"
