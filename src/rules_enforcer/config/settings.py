"""
Runtime settings resolved from the process environment.

Variables:
    RULE_ROOT                 Rules file (``*.md``) or a directory holding ``rules.md``
    MCP_SERVER_NAME           Server identity reported to MCP clients
    AUTO_INJECT               Auto-inject toggle, on unless explicitly falsy
    RULES_ENFORCER_LOG_LEVEL  Diagnostic log level
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path

RULES_FILENAME = "rules.md"
RULES_EXTENSION = ".md"
DEFAULT_SERVER_NAME = "Rules Enforcer Zero"
SERVER_VERSION = "1.0.0"

_FALSY = ("false", "0", "no", "off")


def resolve_rules_path(rule_root: str | None, cwd: Path | None = None) -> Path:
    """Turn a RULE_ROOT value into the absolute rules file path.

    A value ending in ``.md`` is the file itself; anything else is treated
    as a directory and ``rules.md`` is appended. An empty or missing value
    falls back to ``rules.md`` in the working directory.
    """
    base = cwd if cwd is not None else Path.cwd()
    if not rule_root:
        return (base / RULES_FILENAME).absolute()

    candidate = Path(rule_root).expanduser()
    if rule_root.endswith(RULES_EXTENSION):
        path = candidate
    else:
        path = candidate / RULES_FILENAME
    if not path.is_absolute():
        path = base / path
    return path.absolute()


def parse_auto_inject(value: str | None) -> bool:
    """Auto-inject stays enabled unless the value is an explicit falsy string."""
    if value is None:
        return True
    return value.strip().lower() not in _FALSY


@dataclass(frozen=True)
class RulesSettings:
    """Immutable configuration for one server process."""

    rules_path: Path
    server_name: str = DEFAULT_SERVER_NAME
    auto_inject: bool = True
    rule_root: str | None = None
    log_level: str = "INFO"

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        cwd: Path | None = None,
    ) -> RulesSettings:
        env = os.environ if environ is None else environ
        rule_root = env.get("RULE_ROOT") or None
        return cls(
            rules_path=resolve_rules_path(rule_root, cwd),
            server_name=env.get("MCP_SERVER_NAME") or DEFAULT_SERVER_NAME,
            auto_inject=parse_auto_inject(env.get("AUTO_INJECT")),
            rule_root=rule_root,
            log_level=(env.get("RULES_ENFORCER_LOG_LEVEL") or "INFO").upper(),
        )

    def with_overrides(
        self,
        *,
        rule_root: str | None = None,
        server_name: str | None = None,
        auto_inject: bool | None = None,
        cwd: Path | None = None,
    ) -> RulesSettings:
        """Return a copy with CLI-provided values applied; ``None`` keeps the current value."""
        updated = self
        if rule_root:
            updated = replace(
                updated, rule_root=rule_root, rules_path=resolve_rules_path(rule_root, cwd)
            )
        if server_name:
            updated = replace(updated, server_name=server_name)
        if auto_inject is not None:
            updated = replace(updated, auto_inject=auto_inject)
        return updated


__all__ = [
    "DEFAULT_SERVER_NAME",
    "RULES_FILENAME",
    "SERVER_VERSION",
    "RulesSettings",
    "parse_auto_inject",
    "resolve_rules_path",
]
