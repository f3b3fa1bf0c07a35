"""Persistence for daily summary records."""

from __future__ import annotations

import logging
import os
import sqlite3
from abc import ABC, abstractmethod
from datetime import date
from pathlib import Path

from memoir.exceptions import PersistenceError
from memoir.summary.models import DailySummaryRecord

logger = logging.getLogger(__name__)

DEFAULT_DB_PATH = Path(
    os.environ.get("MEMOIR_DB_PATH", str(Path.home() / ".memoir" / "summaries.db"))
)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS daily_summary (
    date TEXT PRIMARY KEY,
    top_keywords_json TEXT NOT NULL,
    timeline_json TEXT NOT NULL,
    summary_text_json TEXT NOT NULL,
    total_usage_minutes INTEGER NOT NULL,
    category_percentages_json TEXT NOT NULL
)
"""

_COLUMNS = (
    "date, top_keywords_json, timeline_json, summary_text_json, "
    "total_usage_minutes, category_percentages_json"
)


class BaseSummaryStore(ABC):
    """Abstract interface for daily summary storage."""

    @abstractmethod
    def save(self, record: DailySummaryRecord) -> None:
        """Insert or overwrite the record for ``record.date``."""
        ...

    @abstractmethod
    def find_by_date(self, day: date) -> DailySummaryRecord | None:
        """Return the record for ``day``, if any."""
        ...

    @abstractmethod
    def find_all_in_range(self, start: date, end: date) -> list[DailySummaryRecord]:
        """Records with ``start <= date <= end``, ordered by date."""
        ...


class SQLiteSummaryStore(BaseSummaryStore):
    """SQLite-backed store with one row per date.

    Each call opens its own connection; SQLite serializes concurrent writers
    and the last write for a date wins.
    """

    def __init__(self, db_path: Path | str | None = None, timeout: float = 10.0):
        self.db_path = Path(db_path) if db_path else DEFAULT_DB_PATH
        self.timeout = timeout
        self._initialized = False

    def _connect(self) -> sqlite3.Connection:
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self.db_path), timeout=self.timeout)
        except (sqlite3.Error, OSError) as e:
            raise PersistenceError(f"Cannot open summary database {self.db_path}: {e}") from e
        conn.row_factory = sqlite3.Row
        if not self._initialized:
            try:
                conn.execute(_SCHEMA)
                conn.commit()
            except sqlite3.Error as e:
                conn.close()
                raise PersistenceError(f"Cannot create summary table: {e}") from e
            self._initialized = True
        return conn

    def save(self, record: DailySummaryRecord) -> None:
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    f"""
                    INSERT INTO daily_summary ({_COLUMNS})
                    VALUES (?, ?, ?, ?, ?, ?)
                    ON CONFLICT(date) DO UPDATE SET
                        top_keywords_json = excluded.top_keywords_json,
                        timeline_json = excluded.timeline_json,
                        summary_text_json = excluded.summary_text_json,
                        total_usage_minutes = excluded.total_usage_minutes,
                        category_percentages_json = excluded.category_percentages_json
                    """,
                    (
                        record.date.isoformat(),
                        record.top_keywords_json,
                        record.timeline_json,
                        record.summary_text_json,
                        record.total_usage_minutes,
                        record.category_percentages_json,
                    ),
                )
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed to save summary for {record.date}: {e}") from e
        finally:
            conn.close()
        logger.debug("Saved summary for %s", record.date)

    def find_by_date(self, day: date) -> DailySummaryRecord | None:
        rows = self._query(
            f"SELECT {_COLUMNS} FROM daily_summary WHERE date = ?",
            (day.isoformat(),),
        )
        return rows[0] if rows else None

    def find_all_in_range(self, start: date, end: date) -> list[DailySummaryRecord]:
        return self._query(
            f"SELECT {_COLUMNS} FROM daily_summary WHERE date BETWEEN ? AND ? ORDER BY date",
            (start.isoformat(), end.isoformat()),
        )

    def _query(self, sql: str, params: tuple) -> list[DailySummaryRecord]:
        conn = self._connect()
        try:
            rows = conn.execute(sql, params).fetchall()
        except sqlite3.Error as e:
            raise PersistenceError(f"Failed querying summaries: {e}") from e
        finally:
            conn.close()
        return [_row_to_record(row) for row in rows]


def _row_to_record(row: sqlite3.Row) -> DailySummaryRecord:
    return DailySummaryRecord(
        date=date.fromisoformat(row["date"]),
        top_keywords_json=row["top_keywords_json"],
        timeline_json=row["timeline_json"],
        summary_text_json=row["summary_text_json"],
        total_usage_minutes=int(row["total_usage_minutes"]),
        category_percentages_json=row["category_percentages_json"],
    )
