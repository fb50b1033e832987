"""
conftest.py - Shared fixtures for rules enforcer tests.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from rules_enforcer.config.settings import RulesSettings
from rules_enforcer.store import RulesStore

FRENCH_RULE = "Always answer in French."


@pytest.fixture
def rules_file(tmp_path: Path) -> Path:
    """A rules.md containing a single rule."""
    path = tmp_path / "rules.md"
    path.write_text(FRENCH_RULE, encoding="utf-8")
    return path


@pytest.fixture
def missing_rules_file(tmp_path: Path) -> Path:
    return tmp_path / "absent" / "rules.md"


@pytest.fixture
def settings(rules_file: Path) -> RulesSettings:
    return RulesSettings(rules_path=rules_file)


@pytest.fixture
def store(rules_file: Path) -> RulesStore:
    return RulesStore(rules_file)
