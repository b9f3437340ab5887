"""SQLite-based rewrite tracker with thread safety and auto-pruning."""

import contextlib
import os
import sqlite3
import threading
import time
import uuid

_SCHEMA = """
    CREATE TABLE IF NOT EXISTS rewrites (
        id INTEGER PRIMARY KEY AUTOINCREMENT,
        timestamp REAL NOT NULL,
        session_id TEXT NOT NULL,
        tool TEXT NOT NULL,
        prefix TEXT NOT NULL DEFAULT '',
        original TEXT NOT NULL,
        rewritten TEXT NOT NULL,
        read_only INTEGER NOT NULL DEFAULT 0
    );
    CREATE INDEX IF NOT EXISTS idx_rewrites_session ON rewrites(session_id);
    CREATE INDEX IF NOT EXISTS idx_rewrites_timestamp ON rewrites(timestamp);
"""

# Period expressions over the local calendar date of each rewrite
_DAY = "date(timestamp, 'unixepoch', 'localtime')"
_WEEK_START = "date(timestamp, 'unixepoch', 'localtime', 'weekday 0', '-6 days')"
_MONTH = "strftime('%Y-%m', timestamp, 'unixepoch', 'localtime')"


def _period_row(row, key: str) -> dict:
    count = row["commands"]
    read_only = row["read_only"]
    return {
        key: row["period"],
        "commands": count,
        "read_only": read_only,
        "read_only_pct": round(read_only / count * 100, 1) if count else 0.0,
    }


class RewriteTracker:
    """Track command rewrites in a local SQLite database.

    Thread-safe via a reentrant lock on all DB operations.
    Automatically prunes old records on startup.
    """

    @staticmethod
    def _default_db_dir():
        from rtk_hooks import data_dir  # noqa: PLC0415

        return data_dir()

    _lock = threading.RLock()

    def __init__(self, session_id: str | None = None, prune_days: int = 90, db_path: str | None = None):
        self.session_id = session_id or os.environ.get("RTK_HOOKS_SESSION", str(uuid.uuid4())[:12])
        self.prune_days = prune_days
        self.db_path = db_path or os.path.join(self._default_db_dir(), "rewrites.db")
        os.makedirs(os.path.dirname(self.db_path) or ".", exist_ok=True)
        self._open_connection()
        self._init_db()
        self._maybe_prune()

    def _connect(self):
        self.conn = sqlite3.connect(self.db_path, timeout=10, check_same_thread=False)
        self.conn.row_factory = sqlite3.Row
        self.conn.execute("PRAGMA journal_mode=WAL")

    def _open_connection(self):
        """Open SQLite connection, handling corrupted DB files."""
        try:
            self._connect()
        except sqlite3.DatabaseError:
            with contextlib.suppress(OSError):
                os.remove(self.db_path)
            self._connect()

    def _init_db(self):
        with self._lock:
            try:
                self.conn.executescript(_SCHEMA)
            except sqlite3.DatabaseError:
                # Corrupted DB, recreate
                self.conn.close()
                with contextlib.suppress(OSError):
                    os.remove(self.db_path)
                self._connect()
                self.conn.executescript(_SCHEMA)

    def _maybe_prune(self):
        """Drop records older than prune_days."""
        try:
            with self._lock:
                cutoff = time.time() - (self.prune_days * 86400)
                self.conn.execute("DELETE FROM rewrites WHERE timestamp < ?", (cutoff,))
                self.conn.commit()
        except sqlite3.Error:
            pass

    def record_rewrite(
        self,
        tool: str,
        original: str,
        rewritten: str,
        prefix: str = "",
        read_only: bool = False,
        timestamp: float | None = None,
    ):
        """Record a single rewrite event."""
        with self._lock:
            try:
                self.conn.execute(
                    "INSERT INTO rewrites (timestamp, session_id, tool, prefix, original, "
                    "rewritten, read_only) VALUES (?, ?, ?, ?, ?, ?, ?)",
                    (
                        timestamp if timestamp is not None else time.time(),
                        self.session_id,
                        tool,
                        prefix,
                        original[:500],
                        rewritten[:500],
                        int(read_only),
                    ),
                )
                self.conn.commit()
            except sqlite3.Error:
                with contextlib.suppress(sqlite3.Error):
                    self.conn.rollback()

    def get_summary(self) -> dict:
        """Aggregate stats across all recorded rewrites."""
        with self._lock:
            row = self.conn.execute("""
                SELECT
                    COUNT(*) AS total,
                    COALESCE(SUM(read_only), 0) AS read_only,
                    COALESCE(SUM(prefix != ''), 0) AS launcher_stripped,
                    COUNT(DISTINCT session_id) AS sessions
                FROM rewrites
            """).fetchone()
        total = row["total"]
        return {
            "total_commands": total,
            "read_only": row["read_only"],
            "launcher_stripped": row["launcher_stripped"],
            "sessions": row["sessions"],
            "read_only_pct": round(row["read_only"] / total * 100, 1) if total else 0.0,
        }

    def get_by_command(self, limit: int = 10) -> list[dict]:
        """Most frequently rewritten commands, as `<binary> <tool>`."""
        with self._lock:
            rows = self.conn.execute(
                """
                SELECT tool,
                       COUNT(*) AS count,
                       SUM(read_only) AS read_only,
                       SUM(prefix != '') AS launcher_stripped
                FROM rewrites
                GROUP BY tool
                ORDER BY count DESC, tool ASC
                LIMIT ?
            """,
                (limit,),
            ).fetchall()
        return [
            {
                "tool": r["tool"],
                "count": r["count"],
                "read_only": r["read_only"],
                "launcher_stripped": r["launcher_stripped"],
            }
            for r in rows
        ]

    def _by_period(self, expr: str, key: str, limit: int | None = None) -> list[dict]:
        sql = (
            f"SELECT {expr} AS period, COUNT(*) AS commands, "  # noqa: S608
            "COALESCE(SUM(read_only), 0) AS read_only "
            "FROM rewrites GROUP BY period ORDER BY period DESC"
        )
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT ?"
            params = (limit,)
        with self._lock:
            rows = self.conn.execute(sql, params).fetchall()
        return [_period_row(r, key) for r in reversed(rows)]

    def get_by_day(self, limit: int | None = None) -> list[dict]:
        """Per-day counts, oldest first."""
        return self._by_period(_DAY, "date", limit)

    def get_by_week(self) -> list[dict]:
        """Per-week counts (weeks start on Monday), oldest first."""
        weeks = self._by_period(_WEEK_START, "week_start")
        with self._lock:
            for week in weeks:
                week["week_end"] = self.conn.execute(
                    "SELECT date(?, '+6 days')", (week["week_start"],)
                ).fetchone()[0]
        return weeks

    def get_by_month(self) -> list[dict]:
        """Per-month counts, oldest first."""
        return self._by_period(_MONTH, "month")

    def get_recent(self, limit: int = 10) -> list[dict]:
        """Most recent rewrites, newest first."""
        with self._lock:
            rows = self.conn.execute(
                "SELECT timestamp, tool, prefix, original, rewritten, read_only "
                "FROM rewrites ORDER BY timestamp DESC, id DESC LIMIT ?",
                (limit,),
            ).fetchall()
        return [
            {
                "timestamp": r["timestamp"],
                "tool": r["tool"],
                "prefix": r["prefix"],
                "original": r["original"],
                "rewritten": r["rewritten"],
                "read_only": bool(r["read_only"]),
            }
            for r in rows
        ]

    def close(self):
        with self._lock, contextlib.suppress(sqlite3.Error):
            self.conn.close()
