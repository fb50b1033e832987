"""
MCP request handlers for the rules document.

Transport-independent: each handler reads the store, formats the result
and returns plain MCP result objects. No handler raises; load failures are
either shown (resource, manual prompt) or swallowed into an empty prompt
(gated auto-inject prompt).
"""

from __future__ import annotations

from typing import Any

from mcp.types import GetPromptResult, PromptMessage, TextContent

from rules_enforcer.config.logging import get_logger
from rules_enforcer.config.settings import RulesSettings
from rules_enforcer.formatting import (
    ENFORCEMENT_LABEL,
    MANUAL_LABEL,
    format_for_display,
    format_for_injection,
    label,
)
from rules_enforcer.store import RulesStore, contains_failure_marker

logger = get_logger("rules_enforcer.mcp_server.handlers")

RULES_URI = "rules://current"
RULES_RESOURCE_NAME = "rules"
RULES_MIME_TYPE = "text/markdown"

AUTO_INJECT_SYSTEM_PROMPT = "__auto_inject_system_rules__"
AUTO_INJECT_PROMPT = "auto_inject_rules"
MANUAL_INJECT_PROMPT = "inject_rules_manual"

PROMPT_DESCRIPTIONS: dict[str, str] = {
    AUTO_INJECT_SYSTEM_PROMPT: "SYSTEM: Automatically enforces mandatory rules in all AI conversations",
    AUTO_INJECT_PROMPT: "Automatically injects mandatory rules into AI agent conversations",
    MANUAL_INJECT_PROMPT: "Manually inject rules into conversation when needed",
}

SYSTEM_META: dict[str, Any] = {"auto_inject": True, "priority": "system", "enforce_always": True}
DEFAULT_META: dict[str, Any] = {"auto_inject": True, "priority": "highest"}


def _user_message(text: str) -> PromptMessage:
    return PromptMessage(role="user", content=TextContent(type="text", text=text))


class RulesHandlers:
    """Resource and prompt handlers bound to one store and one settings object."""

    def __init__(self, store: RulesStore, settings: RulesSettings) -> None:
        self._store = store
        self._settings = settings

    @property
    def store(self) -> RulesStore:
        return self._store

    def read_rules(self) -> str:
        """Body of ``rules://current``; failures are wrapped and shown, not raised."""
        result = self._store.get()
        return format_for_display(
            result.text,
            self._store.path,
            loaded_at=result.document.loaded_at if result.ok else None,
        )

    def auto_inject_system_rules(self) -> GetPromptResult:
        """Gated auto-inject prompt; returns no messages when disabled or on failure."""
        description = PROMPT_DESCRIPTIONS[AUTO_INJECT_SYSTEM_PROMPT]
        if not self._settings.auto_inject:
            return GetPromptResult(description=description, messages=[])

        result = self._store.get()
        # Rules text that happens to contain a marker is suppressed as well.
        if not result.ok or contains_failure_marker(result.text):
            logger.debug("Auto-inject suppressed", reason=getattr(result, "reason", "marker"))
            return GetPromptResult(description=description, messages=[])

        system_message = format_for_injection(result.text)
        return GetPromptResult(
            description=description,
            messages=[_user_message(label(ENFORCEMENT_LABEL, system_message))],
            _meta=dict(SYSTEM_META),
        )

    def auto_inject_rules(self) -> GetPromptResult:
        """Always-on injection prompt; failure text is injected as-is."""
        result = self._store.get()
        return GetPromptResult(
            description=PROMPT_DESCRIPTIONS[AUTO_INJECT_PROMPT],
            messages=[_user_message(format_for_injection(result.text))],
            _meta=dict(DEFAULT_META),
        )

    def inject_rules_manual(self) -> GetPromptResult:
        """On-demand prompt carrying the display-formatted rules."""
        body = self.read_rules()
        return GetPromptResult(
            description=PROMPT_DESCRIPTIONS[MANUAL_INJECT_PROMPT],
            messages=[_user_message(label(MANUAL_LABEL, body))],
            _meta=dict(DEFAULT_META),
        )

    def get_prompt(self, name: str) -> GetPromptResult:
        """Dispatch a prompt by name.

        Raises:
            ValueError: If ``name`` is not a registered prompt.
        """
        handlers = {
            AUTO_INJECT_SYSTEM_PROMPT: self.auto_inject_system_rules,
            AUTO_INJECT_PROMPT: self.auto_inject_rules,
            MANUAL_INJECT_PROMPT: self.inject_rules_manual,
        }
        if name not in handlers:
            raise ValueError(f"Prompt not found: {name}")
        return handlers[name]()


__all__ = [
    "AUTO_INJECT_PROMPT",
    "AUTO_INJECT_SYSTEM_PROMPT",
    "DEFAULT_META",
    "MANUAL_INJECT_PROMPT",
    "PROMPT_DESCRIPTIONS",
    "RULES_MIME_TYPE",
    "RULES_RESOURCE_NAME",
    "RULES_URI",
    "RulesHandlers",
    "SYSTEM_META",
]
