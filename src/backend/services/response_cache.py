"""
Local response cache.

Remembers which polls this client has answered and what it answered, so a
client can show results and personalized insights without asking the store
again. Entries live in memory and are optionally mirrored to a JSON file.

The aggregation engine never reads this cache; callers pass the cached
value in explicitly.
"""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Optional

import structlog

from core.config import settings

logger = structlog.get_logger(__name__)


@dataclass
class CachedResponse:
    """A remembered answer."""

    value: Any
    timestamp: datetime

    def to_dict(self) -> dict:
        return {"value": self.value, "timestamp": self.timestamp.isoformat()}

    @classmethod
    def from_dict(cls, data: dict) -> "CachedResponse":
        return cls(value=data["value"], timestamp=datetime.fromisoformat(data["timestamp"]))


class LocalResponseCache:
    """Explicit read/write cache of this client's own poll answers."""

    def __init__(self, path: Optional[str | Path] = None):
        self.path = Path(path) if path else None
        self._entries: dict[str, CachedResponse] = {}
        if self.path is not None and self.path.exists():
            self._load()

    @classmethod
    def from_settings(cls) -> "LocalResponseCache":
        return cls(settings.RESPONSE_CACHE_PATH)

    def save_response(self, poll_id: str, value: Any) -> CachedResponse:
        entry = CachedResponse(value=value, timestamp=datetime.now(timezone.utc))
        self._entries[poll_id] = entry
        self._persist()
        return entry

    def get_response(self, poll_id: str) -> Optional[CachedResponse]:
        return self._entries.get(poll_id)

    def get_responses(self) -> dict[str, CachedResponse]:
        """All remembered answers keyed by poll id."""
        return dict(self._entries)

    def has_responded(self, poll_id: str) -> bool:
        return poll_id in self._entries

    def clear(self) -> None:
        """Forget every remembered answer."""
        self._entries.clear()
        if self.path is not None and self.path.exists():
            self.path.unlink()

    def _load(self) -> None:
        # A corrupt cache file is treated as empty; the store remains the source of truth
        try:
            raw = json.loads(self.path.read_text(encoding="utf-8"))
            self._entries = {poll_id: CachedResponse.from_dict(entry) for poll_id, entry in raw.items()}
        except (OSError, ValueError, KeyError, TypeError) as e:
            logger.warning("response_cache_load_failed", path=str(self.path), error=str(e))
            self._entries = {}

    def _persist(self) -> None:
        if self.path is None:
            return
        payload = {poll_id: entry.to_dict() for poll_id, entry in self._entries.items()}
        self.path.write_text(json.dumps(payload), encoding="utf-8")
