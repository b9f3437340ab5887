"""Tests for the stats report."""

import datetime
import json
import os
import sys

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rtk_hooks import stats
from rtk_hooks.tracker import RewriteTracker


def _ts(year, month, day):
    return datetime.datetime(year, month, day, 12).timestamp()


class TestStatsReport:
    def _seed(self, monkeypatch):
        monkeypatch.setenv("RTK_HOOKS_DB_PRUNE_DAYS", "100000")
        from rtk_hooks import config

        config.reload()
        tracker = RewriteTracker(session_id="seed", prune_days=100000)
        tracker.record_rewrite("git", "git status", "rtk git status", read_only=True, timestamp=_ts(2026, 3, 2))
        tracker.record_rewrite("git", "git push", "rtk git push", timestamp=_ts(2026, 3, 3))
        tracker.record_rewrite("vitest", "npx vitest", "rtk vitest", prefix="npx", timestamp=_ts(2026, 4, 1))
        tracker.close()

    def test_empty_summary(self, capsys):
        stats.main([])
        out = capsys.readouterr().out
        assert "rtk-hooks Rewrite Statistics" in out
        assert "No rewrites recorded yet." in out

    def test_summary(self, capsys, monkeypatch):
        self._seed(monkeypatch)
        stats.main(["--graph", "--history"])
        out = capsys.readouterr().out
        assert "Rewrites:             3" in out
        assert "Launchers stripped:   1" in out
        assert "rtk git" in out
        assert "Daily Rewrites (last 30 days)" in out
        assert "Recent Rewrites" in out
        assert "rtk vitest" in out

    def test_period_tables(self, capsys, monkeypatch):
        self._seed(monkeypatch)
        stats.main(["--all"])
        out = capsys.readouterr().out
        assert "Daily Rewrites" in out
        assert "Weekly Rewrites" in out
        assert "Monthly Rewrites" in out
        assert "2026-03-02 .. 03-08" in out
        assert "2026-04" in out

    def test_json_export(self, capsys, monkeypatch):
        self._seed(monkeypatch)
        stats.main(["--format", "json", "--monthly"])
        data = json.loads(capsys.readouterr().out)
        assert data["summary"]["total_commands"] == 3
        assert [m["month"] for m in data["monthly"]] == ["2026-03", "2026-04"]
        assert "daily" not in data
        assert data["by_command"][0]["tool"] == "git"

    def test_csv_export(self, capsys, monkeypatch):
        self._seed(monkeypatch)
        stats.main(["--format", "csv", "--daily", "--weekly"])
        lines = capsys.readouterr().out.splitlines()
        assert lines[0] == "# Daily Data"
        assert lines[1] == "date,commands,read_only,read_only_pct"
        assert lines[2] == "2026-03-02,1,1,100.00"
        assert "# Weekly Data" in lines
        assert "week_start,week_end,commands,read_only,read_only_pct" in lines
        assert "# Monthly Data" not in lines


class TestAsciiGraph:
    def test_bars_scaled_to_max(self):
        import io

        out = io.StringIO()
        stats.print_ascii_graph(
            [{"date": "2026-03-01", "commands": 2}, {"date": "2026-03-02", "commands": 4}], out
        )
        first, second = out.getvalue().splitlines()
        assert first.startswith("03-01 |" + "#" * 20 + " ")
        assert second.startswith("03-02 |" + "#" * 40)
        assert second.endswith(" 4")
