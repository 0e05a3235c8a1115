"""
log_entry.py

Dataclass for one row of the signature pad event log.

Rows are built with from_dict() from a sqlite3.Row mapping.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class LogEntry:
    id: Optional[int]
    timestamp: datetime          # always UTC
    log_level: str
    role: Optional[str]
    feature: str
    event: str
    message: Optional[str]

    # -------------------- Factory ------------------------------------ #
    @classmethod
    def from_dict(cls, data: dict) -> "LogEntry":
        ts = data["timestamp"]
        if isinstance(ts, str):
            ts = datetime.fromisoformat(ts)
        return cls(
            id=data.get("id"),
            timestamp=ts,
            log_level=data.get("log_level", "INFO"),
            role=data.get("role"),
            feature=data.get("feature", ""),
            event=data.get("event", ""),
            message=data.get("message"),
        )

