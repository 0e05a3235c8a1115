"""
core/event_log/logic/event_logger.py
====================================

Thread-safe event log with SQLite backend.

Stores workflow transitions, permission denials, stale resize redraws and
exports of the signature pad so an operator can audit who did what. The
engine treats it as an optional collaborator with a ``log(feature, event,
...)`` method.
"""

from __future__ import annotations

import os
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from pathlib import Path
from typing import Iterator, List, Optional

from core.config.config_service import LoggingConfig
from core.event_log.models.log_entry import LogEntry


def create_sqlite_connection(db_path: Path, *, check_same_thread: bool = False) -> sqlite3.Connection:
    """Create a sqlite3 connection with row access by column name."""
    conn = sqlite3.connect(str(db_path), check_same_thread=check_same_thread)
    conn.row_factory = sqlite3.Row
    return conn


class EventLogger:
    """SQLite-backed event log; one instance per database file."""

    def __init__(self, db_path: Path | str) -> None:
        self._lock = threading.Lock()
        self._db_path = Path(db_path)
        self._ensure_db()

    @property
    def db_path(self) -> Path:
        return self._db_path

    @contextmanager
    def connect(self) -> Iterator[sqlite3.Connection]:
        conn = create_sqlite_connection(self._db_path)
        try:
            yield conn
            conn.commit()
        finally:
            conn.close()

    # ------------------------------------------------------------------ #
    #  Public API: log                                                   #
    # ------------------------------------------------------------------ #
    def log(
        self,
        feature: str,
        event: str,
        *,
        role: Optional[str] = None,
        level: str = "INFO",
        message: Optional[str] = None,
    ) -> LogEntry:
        """Persist one entry and return it (with its row id)."""
        entry = LogEntry(
            id=None,
            timestamp=datetime.now(timezone.utc),
            log_level=level,
            role=role,
            feature=feature,
            event=event,
            message=message,
        )
        entry.id = self._insert_log(entry)
        return entry

    # ------------------------------------------------------------------ #
    #  Fetch                                                             #
    # ------------------------------------------------------------------ #
    def fetch_logs(self, limit: int = 100) -> List[LogEntry]:
        """Newest entries first."""
        with self.connect() as conn:
            rows = conn.execute(
                "SELECT * FROM logs ORDER BY id DESC LIMIT ?", (limit,)
            ).fetchall()
        return [LogEntry.from_dict(dict(row)) for row in rows]

    # ------------------------------------------------------------------ #
    #  Internal helpers                                                  #
    # ------------------------------------------------------------------ #
    def _ensure_db(self) -> None:
        os.makedirs(self._db_path.parent, exist_ok=True)
        with self.connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS logs (
                    id INTEGER PRIMARY KEY AUTOINCREMENT,
                    timestamp TEXT NOT NULL,
                    role TEXT,
                    feature TEXT NOT NULL,
                    event TEXT NOT NULL,
                    message TEXT,
                    log_level TEXT NOT NULL DEFAULT 'INFO'
                )
                """
            )

    def _insert_log(self, entry: LogEntry) -> int:
        with self._lock, self.connect() as conn:
            cur = conn.execute(
                """
                INSERT INTO logs
                    (timestamp, role, feature, event, message, log_level)
                VALUES (?, ?, ?, ?, ?, ?)
                """,
                (
                    entry.timestamp.isoformat(),
                    entry.role,
                    entry.feature,
                    entry.event,
                    entry.message,
                    entry.log_level,
                ),
            )
            return int(cur.lastrowid)


def event_logger_from_config(cfg: LoggingConfig) -> EventLogger | None:
    """Return an EventLogger when the event log is enabled, else None."""
    if not cfg.event_log_enabled:
        return None
    return EventLogger(cfg.event_log_db)
