"""Unit tests for the cached rules store."""

from __future__ import annotations

import os
from pathlib import Path
from unittest.mock import patch

from rules_enforcer.store import (
    FailureReason,
    RulesLoaded,
    RulesLoadFailure,
    RulesStore,
    contains_failure_marker,
)


def _set_mtime_ns(path: Path, mtime_ns: int) -> None:
    os.utime(path, ns=(mtime_ns, mtime_ns))


def test_get_returns_exact_file_content(tmp_path: Path) -> None:
    path = tmp_path / "rules.md"
    content = "# Rules\r\n\r\n- Répondez en français.\n- Use `snake_case`.\n\n"
    path.write_bytes(content.encode("utf-8"))

    result = RulesStore(path).get()

    assert isinstance(result, RulesLoaded)
    assert result.ok
    assert result.content == content
    assert result.text == content


def test_get_missing_file_returns_not_found(missing_rules_file: Path) -> None:
    store = RulesStore(missing_rules_file)

    result = store.get()

    assert isinstance(result, RulesLoadFailure)
    assert not result.ok
    assert result.reason is FailureReason.NOT_FOUND
    assert "RULES FILE NOT FOUND" in result.text
    assert str(missing_rules_file) in result.text
    assert store.document is None


def test_missing_file_does_not_clear_cache(rules_file: Path) -> None:
    store = RulesStore(rules_file)
    store.get()
    cached = store.document

    rules_file.unlink()
    result = store.get()

    assert result.reason is FailureReason.NOT_FOUND
    assert store.document is cached


def test_unchanged_file_is_not_reread(rules_file: Path) -> None:
    store = RulesStore(rules_file)
    first = store.get()

    with patch.object(Path, "read_bytes", side_effect=AssertionError("re-read")) as read:
        second = store.get()

    read.assert_not_called()
    assert second.content == first.content
    assert second.document is first.document


def test_equal_mtime_is_not_stale(rules_file: Path) -> None:
    _set_mtime_ns(rules_file, 1_700_000_000_000_000_000)
    store = RulesStore(rules_file)
    assert store.get().content == "Always answer in French."

    rules_file.write_text("Always answer in German.", encoding="utf-8")
    _set_mtime_ns(rules_file, 1_700_000_000_000_000_000)

    assert store.get().content == "Always answer in French."


def test_newer_mtime_triggers_reload(rules_file: Path) -> None:
    _set_mtime_ns(rules_file, 1_700_000_000_000_000_000)
    store = RulesStore(rules_file)
    store.get()

    rules_file.write_text("Always answer in German.", encoding="utf-8")
    _set_mtime_ns(rules_file, 1_700_000_001_000_000_000)

    result = store.get()
    assert result.content == "Always answer in German."
    assert store.document.last_modified_ns == 1_700_000_001_000_000_000


def test_invalidate_forces_reread(rules_file: Path) -> None:
    _set_mtime_ns(rules_file, 1_700_000_000_000_000_000)
    store = RulesStore(rules_file)
    store.get()

    rules_file.write_text("Changed in place.", encoding="utf-8")
    _set_mtime_ns(rules_file, 1_700_000_000_000_000_000)
    store.invalidate()

    assert store.document is None
    assert store.get().content == "Changed in place."


def test_read_error_is_converted(rules_file: Path) -> None:
    store = RulesStore(rules_file)

    with patch.object(Path, "read_bytes", side_effect=PermissionError("Permission denied")):
        result = store.get()

    assert isinstance(result, RulesLoadFailure)
    assert result.reason is FailureReason.READ_ERROR
    assert result.text == "❌ ERROR LOADING RULES: Permission denied"
    assert store.document is None


def test_stat_error_is_converted(rules_file: Path) -> None:
    store = RulesStore(rules_file)

    with patch.object(Path, "stat", side_effect=FileNotFoundError("vanished")):
        result = store.get()

    assert result.reason is FailureReason.READ_ERROR
    assert "vanished" in result.text


def test_invalid_utf8_is_a_read_error(tmp_path: Path) -> None:
    path = tmp_path / "rules.md"
    path.write_bytes(b"\xff\xfe not utf-8 \xc3")

    result = RulesStore(path).get()

    assert result.reason is FailureReason.READ_ERROR


def test_failed_reload_keeps_previous_document(rules_file: Path) -> None:
    _set_mtime_ns(rules_file, 1_700_000_000_000_000_000)
    store = RulesStore(rules_file)
    store.get()
    cached = store.document

    _set_mtime_ns(rules_file, 1_700_000_005_000_000_000)
    with patch.object(Path, "read_bytes", side_effect=OSError("I/O error")):
        result = store.get()

    assert result.reason is FailureReason.READ_ERROR
    assert store.document is cached


def test_contains_failure_marker() -> None:
    assert contains_failure_marker("❌ ERROR LOADING RULES: boom")
    assert contains_failure_marker("⚠️ RULES FILE NOT FOUND: /x")
    assert not contains_failure_marker("Always answer in French.")
