"""Optimization history for english_optimizer.

History is a JSON array on disk, newest entry first, capped in length.
Storage: ~/.english-optimizer/history.json
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
import json
import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any
import uuid

if TYPE_CHECKING:
    from english_optimizer.optimizer import OptimizationResult

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 100


@dataclass
class HistoryEntry:
    """A recorded optimization."""

    id: str
    original: str
    optimized: str
    mode: str
    timestamp: str  # ISO format
    provider: str
    model: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> HistoryEntry:
        return cls(
            id=data["id"],
            original=data["original"],
            optimized=data["optimized"],
            mode=data.get("mode", "professional"),
            timestamp=data.get("timestamp", ""),
            provider=data.get("provider", ""),
            model=data.get("model", ""),
        )


class HistoryLogger:
    """Manages the history file."""

    def __init__(self, path: str | Path, limit: int = DEFAULT_LIMIT):
        self.path = Path(path).expanduser()
        self.limit = limit

        # Ensure the file exists
        self.path.parent.mkdir(parents=True, exist_ok=True)
        if not self.path.exists():
            self._write([])

    def add_entry(self, result: OptimizationResult) -> HistoryEntry:
        """Record a result and return the stored entry."""
        entry = HistoryEntry(
            id=uuid.uuid4().hex,
            original=result.original,
            optimized=result.optimized,
            mode=result.mode.value,
            timestamp=result.timestamp.isoformat(),
            provider=result.provider,
            model=result.model,
        )
        history = self.get_history()
        history.insert(0, entry)
        self._write(history[: self.limit])
        return entry

    def get_history(self) -> list[HistoryEntry]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
            return [HistoryEntry.from_dict(item) for item in data]
        except (OSError, json.JSONDecodeError, KeyError, TypeError) as e:
            logger.warning("Cannot read history from %s: %s", self.path, e)
            return []

    def get_recent_entries(self, count: int = 10) -> list[HistoryEntry]:
        """Most recent entries, newest first."""
        return self.get_history()[:count]

    def get_entry_by_id(self, entry_id: str) -> HistoryEntry | None:
        for entry in self.get_history():
            if entry.id == entry_id:
                return entry
        return None

    def clear_history(self) -> None:
        self._write([])

    def _write(self, entries: list[HistoryEntry]) -> None:
        self.path.write_text(
            json.dumps([e.to_dict() for e in entries], indent=2, ensure_ascii=False),
            encoding="utf-8",
        )
