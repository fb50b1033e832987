"""
rules_enforcer/mcp_server/
 MCP Server Module

Submodules:
- handlers.py: Resource and prompt handlers (transport-independent)
- server.py: Registration on the MCP SDK server
- stdio.py: STDIO transport runner

Usage:
    from rules_enforcer.mcp_server import run_stdio

    exit_code = run_stdio(RulesSettings.from_env())
"""

from __future__ import annotations

from .handlers import (
    AUTO_INJECT_PROMPT,
    AUTO_INJECT_SYSTEM_PROMPT,
    MANUAL_INJECT_PROMPT,
    RULES_URI,
    RulesHandlers,
)
from .server import RulesMCPServer
from .stdio import run_stdio

__all__ = [
    "AUTO_INJECT_PROMPT",
    "AUTO_INJECT_SYSTEM_PROMPT",
    "MANUAL_INJECT_PROMPT",
    "RULES_URI",
    "RulesHandlers",
    "RulesMCPServer",
    "run_stdio",
]
