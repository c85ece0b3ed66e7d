"""
Roast history (best-effort convenience state).

The history is a newest-first JSON array of HistoryRecord objects kept under a
single key of a key-value store. The pipeline receives the store as a
collaborator, so tests can use MemoryKeyValueStore and the app a SQLite file.

Notes:
- Writes are last-writer-wins; several processes sharing one SQLite file are
  not coordinated beyond SQLite's own file locking.
- An unreadable stored value (or a failing store) reads as an empty history.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Protocol

logger = logging.getLogger(__name__)

HISTORY_KEY = "gitroast_history"
HISTORY_LIMIT = 10


class KeyValueStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def delete(self, key: str) -> None: ...


class MemoryKeyValueStore:
    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)


class SqliteKeyValueStore:
    """Single-table SQLite key-value store (WAL, autocommit short transactions)."""

    def __init__(self, path: str, busy_timeout_ms: int = 500) -> None:
        self._path = str(path)
        Path(self._path).parent.mkdir(parents=True, exist_ok=True)
        self._busy_timeout_ms = max(1, min(int(busy_timeout_ms), 60_000))
        self._init_db()

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(
            self._path,
            timeout=max(0.001, float(self._busy_timeout_ms) / 1000.0),
            isolation_level=None,  # autocommit (short transactions)
        )
        conn.execute("PRAGMA journal_mode=WAL;")
        conn.execute(f"PRAGMA busy_timeout={int(self._busy_timeout_ms)};")
        return conn

    def _init_db(self) -> None:
        conn = self._connect()
        try:
            conn.execute(
                "CREATE TABLE IF NOT EXISTS kv ("
                "  key TEXT PRIMARY KEY,"
                "  value TEXT NOT NULL,"
                "  updated_at_s INTEGER NOT NULL"
                ");"
            )
        finally:
            conn.close()

    def get(self, key: str) -> Optional[str]:
        conn = self._connect()
        try:
            row = conn.execute("SELECT value FROM kv WHERE key = ?;", (key,)).fetchone()
        finally:
            conn.close()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        conn = self._connect()
        try:
            conn.execute(
                "INSERT INTO kv(key, value, updated_at_s) VALUES(?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at_s=excluded.updated_at_s;",
                (key, value, int(time.time())),
            )
        finally:
            conn.close()

    def delete(self, key: str) -> None:
        conn = self._connect()
        try:
            conn.execute("DELETE FROM kv WHERE key = ?;", (key,))
        finally:
            conn.close()


@dataclass(frozen=True)
class HistoryRecord:
    username: str
    avatar_url: str
    score: int
    timestamp: int  # epoch millis

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryRecord":
        return cls(
            username=str(data["username"]),
            avatar_url=str(data.get("avatar_url") or ""),
            score=int(data.get("score") or 0),
            timestamp=int(data.get("timestamp") or 0),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "username": self.username,
            "avatar_url": self.avatar_url,
            "score": self.score,
            "timestamp": self.timestamp,
        }


class HistoryStore:
    """Newest-first, de-duplicated, capped list of past roasts."""

    def __init__(self, store: KeyValueStore, key: str = HISTORY_KEY, limit: int = HISTORY_LIMIT) -> None:
        self.store = store
        self.key = key
        self.limit = max(1, int(limit))

    def read(self) -> List[HistoryRecord]:
        try:
            raw = self.store.get(self.key)
        except (sqlite3.Error, OSError) as e:
            logger.warning(f"Could not read history under '{self.key}': {e}")
            return []
        if not raw:
            return []
        try:
            items = json.loads(raw)
            if not isinstance(items, list):
                raise ValueError("history is not a JSON array")
            return [HistoryRecord.from_dict(item) for item in items][: self.limit]
        except (KeyError, TypeError, ValueError, OverflowError) as e:
            logger.warning(f"Ignoring unreadable history under '{self.key}': {e}")
            return []

    def append(self, record: HistoryRecord) -> List[HistoryRecord]:
        """Drop any entry for the same user, prepend `record`, keep the newest `limit`."""
        existing = [item for item in self.read() if item.username != record.username]
        history = [record, *existing][: self.limit]
        self._write(history)
        return history

    def clear(self) -> None:
        self.store.delete(self.key)

    def _write(self, history: List[HistoryRecord]) -> None:
        payload = json.dumps([item.to_dict() for item in history], ensure_ascii=False, separators=(",", ":"))
        self.store.set(self.key, payload)
