"""
Rules store - cached rules document with mtime staleness check.

The store owns the only mutable state in the server: the last successfully
read ``RulesDocument``. Every ``get()`` stats the file and re-reads it only
when its modification time is strictly newer than the cached one. Load
failures come back as ``RulesLoadFailure`` values; ``get()`` never raises.

Usage:
    store = RulesStore(settings.rules_path)
    result = store.get()
    if result.ok:
        print(result.content)
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from pathlib import Path

from rules_enforcer.config.logging import get_logger

logger = get_logger("rules_enforcer.store")

# Substrings present in every failure placeholder.
FAILURE_MARKERS = ("ERROR", "NOT FOUND")


class FailureReason(Enum):
    """Why the rules document could not be served."""

    NOT_FOUND = "not_found"
    READ_ERROR = "read_error"


@dataclass(frozen=True)
class RulesDocument:
    """One captured state of the rules file."""

    path: Path
    content: str
    last_modified_ns: int
    loaded_at: datetime


@dataclass(frozen=True)
class RulesLoaded:
    """Successful load; ``content`` is the exact file text."""

    document: RulesDocument

    ok = True

    @property
    def content(self) -> str:
        return self.document.content

    @property
    def text(self) -> str:
        return self.document.content


@dataclass(frozen=True)
class RulesLoadFailure:
    """Failed load, carrying a displayable placeholder via ``text``."""

    reason: FailureReason
    path: Path
    message: str = ""

    ok = False

    @property
    def text(self) -> str:
        if self.reason is FailureReason.NOT_FOUND:
            return (
                f"⚠️ RULES FILE NOT FOUND: {self.path}\n\n"
                "Please set the RULE_ROOT environment variable to point directly to your rules file."
            )
        return f"❌ ERROR LOADING RULES: {self.message}"


LoadResult = RulesLoaded | RulesLoadFailure


def contains_failure_marker(text: str) -> bool:
    """True if ``text`` carries one of the failure placeholder markers."""
    return any(marker in text for marker in FAILURE_MARKERS)


class RulesStore:
    """Lazily refreshed cache of a single rules file."""

    def __init__(self, path: Path) -> None:
        self._path = Path(path)
        self._document: RulesDocument | None = None

    @property
    def path(self) -> Path:
        return self._path

    @property
    def document(self) -> RulesDocument | None:
        """The cached document, or None before the first successful load."""
        return self._document

    def invalidate(self) -> None:
        """Forget the cached document so the next ``get()`` re-reads the file."""
        self._document = None

    def get(self) -> LoadResult:
        """Return the current rules content, re-reading the file only if it changed."""
        try:
            if not self._path.exists():
                logger.debug("Rules file not found", path=str(self._path))
                return RulesLoadFailure(FailureReason.NOT_FOUND, self._path)

            mtime_ns = self._path.stat().st_mtime_ns
            cached = self._document
            if cached is not None and mtime_ns <= cached.last_modified_ns:
                return RulesLoaded(cached)

            # Decode bytes directly so line endings survive unchanged.
            content = self._path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            logger.error("Error loading rules", path=str(self._path), error=str(e))
            return RulesLoadFailure(FailureReason.READ_ERROR, self._path, str(e))

        self._document = RulesDocument(
            path=self._path,
            content=content,
            last_modified_ns=mtime_ns,
            loaded_at=datetime.now(timezone.utc),
        )
        logger.info("📋 Rules loaded", path=str(self._path), length=len(content))
        return RulesLoaded(self._document)


__all__ = [
    "FAILURE_MARKERS",
    "FailureReason",
    "LoadResult",
    "RulesDocument",
    "RulesLoadFailure",
    "RulesLoaded",
    "RulesStore",
    "contains_failure_marker",
]
