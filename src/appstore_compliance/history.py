"""Local persistence of completed analyses."""

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from pydantic import ValidationError

from appstore_compliance.models import AnalysisResult, HistoryEntry

logger = logging.getLogger(__name__)


def new_history_entry(
    result: AnalysisResult,
    app_name: str,
    now: Optional[datetime] = None,
) -> HistoryEntry:
    """Build the entry recorded for one successful analysis."""
    now = now or datetime.now(timezone.utc)
    return HistoryEntry(
        id=f"hist-{int(now.timestamp() * 1000)}",
        date=now.isoformat(),
        app_name=app_name,
        compliance_score=result.compliance_score,
        high_count=result.risk_summary.high,
        medium_count=result.risk_summary.medium,
        low_count=result.risk_summary.low,
        result=result,
    )


class HistoryStore:
    """Newest-first list of history entries, mirrored to one JSON file.

    The file is read once on :meth:`load` and rewritten whole on every
    mutation. Read and write failures never propagate; the store degrades
    to in-memory only.
    """

    def __init__(self, path: Path) -> None:
        self.path = path
        self._entries: list[HistoryEntry] = []

    @property
    def entries(self) -> list[HistoryEntry]:
        return list(self._entries)

    def load(self) -> list[HistoryEntry]:
        self._entries = self._read()
        return self.entries

    def _read(self) -> list[HistoryEntry]:
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, ValueError):
            logger.warning("Ignoring unreadable history file %s", self.path, exc_info=True)
            return []
        if not isinstance(raw, list):
            return []
        try:
            return [HistoryEntry.model_validate(item) for item in raw]
        except ValidationError:
            logger.warning("Ignoring malformed history file %s", self.path, exc_info=True)
            return []

    def save(self) -> None:
        data = [e.model_dump(mode="json", by_alias=True) for e in self._entries]
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2), encoding="utf-8")
        except OSError:
            logger.warning("Could not write history file %s", self.path, exc_info=True)

    def add(self, entry: HistoryEntry) -> None:
        """Prepend ``entry`` and persist."""
        self._entries = [entry, *self._entries]
        self.save()

    def replace(self, entries: list[HistoryEntry]) -> None:
        self._entries = list(entries)
        self.save()

    def clear(self) -> None:
        self.replace([])
