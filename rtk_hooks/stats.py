#!/usr/bin/env python3
"""Display rtk-hooks rewrite statistics.

Usage:
    python3 -m rtk_hooks.stats                    # Summary
    python3 -m rtk_hooks.stats --graph --history  # Summary with daily graph and recent rewrites
    python3 -m rtk_hooks.stats --all              # Daily, weekly and monthly tables
    python3 -m rtk_hooks.stats --format json      # JSON export for scripting
    python3 -m rtk_hooks.stats --format csv --daily
"""

import argparse
import csv
import datetime
import json
import sys

from rtk_hooks import config
from rtk_hooks.tracker import RewriteTracker

RULE = "-" * 40
GRAPH_WIDTH = 40


def build_parser(parser: argparse.ArgumentParser | None = None) -> argparse.ArgumentParser:
    parser = parser or argparse.ArgumentParser(prog="rtk-hooks stats", description="Show rewrite statistics")
    parser.add_argument("--graph", action="store_true", help="Daily rewrite graph (last 30 days)")
    parser.add_argument("--history", action="store_true", help="Show the 10 most recent rewrites")
    parser.add_argument("--daily", action="store_true", help="Per-day table")
    parser.add_argument("--weekly", action="store_true", help="Per-week table")
    parser.add_argument("--monthly", action="store_true", help="Per-month table")
    parser.add_argument("--all", action="store_true", help="Daily, weekly and monthly tables")
    parser.add_argument("--format", choices=["text", "json", "csv"], default="text", help="Output format")
    return parser


def _open_tracker() -> RewriteTracker:
    return RewriteTracker(prune_days=config.get("db_prune_days"))


def _wants(args, period: str) -> bool:
    return args.all or getattr(args, period)


def print_ascii_graph(days: list[dict], out=None):
    """One bar per day, scaled to the busiest day."""
    out = out or sys.stdout
    if not days:
        return
    max_val = max(d["commands"] for d in days) or 1
    for day in days:
        bar_len = int(day["commands"] / max_val * GRAPH_WIDTH)
        bar = "#" * bar_len + " " * (GRAPH_WIDTH - bar_len)
        out.write(f"{day['date'][5:10]} |{bar} {day['commands']}\n")


def print_period_table(rows: list[dict], key: str, title: str, out=None):
    out = out or sys.stdout
    out.write(f"\n{title}\n{RULE}\n")
    if not rows:
        out.write("  No rewrites recorded.\n")
        return
    out.write(f"  {'Period':<24s} {'Rewrites':>8s} {'Read-only':>10s} {'%':>6s}\n")
    for row in rows:
        label = row[key]
        if key == "week_start":
            label = f"{row['week_start']} .. {row['week_end'][5:]}"
        out.write(f"  {label:<24s} {row['commands']:>8d} {row['read_only']:>10d} {row['read_only_pct']:>5.1f}%\n")


def export_json(tracker: RewriteTracker, args, out=None):
    out = out or sys.stdout
    data = {"summary": tracker.get_summary(), "by_command": tracker.get_by_command()}
    if _wants(args, "daily"):
        data["daily"] = tracker.get_by_day()
    if _wants(args, "weekly"):
        data["weekly"] = tracker.get_by_week()
    if _wants(args, "monthly"):
        data["monthly"] = tracker.get_by_month()
    json.dump(data, out, indent=2)
    out.write("\n")


def export_csv(tracker: RewriteTracker, args, out=None):
    out = out or sys.stdout
    sections = [
        ("daily", "# Daily Data", ["date"], tracker.get_by_day),
        ("weekly", "# Weekly Data", ["week_start", "week_end"], tracker.get_by_week),
        ("monthly", "# Monthly Data", ["month"], tracker.get_by_month),
    ]
    wanted = [s for s in sections if _wants(args, s[0])] or sections[:1]
    for i, (_period, title, keys, fetch) in enumerate(wanted):
        out.write(f"{title}\n")
        writer = csv.writer(out, lineterminator="\n")
        writer.writerow([*keys, "commands", "read_only", "read_only_pct"])
        for row in fetch():
            writer.writerow([*(row[k] for k in keys), row["commands"], row["read_only"], f"{row['read_only_pct']:.2f}"])
        if i < len(wanted) - 1:
            out.write("\n")


def print_summary(tracker: RewriteTracker, args, out=None):
    out = out or sys.stdout
    summary = tracker.get_summary()
    binary = config.get("binary")

    out.write("rtk-hooks Rewrite Statistics\n")
    out.write("=" * 40 + "\n")

    if summary["total_commands"] == 0:
        out.write("\nNo rewrites recorded yet.\n")
        out.write(f"Commands rewritten to `{binary} ...` will show up here.\n")
        return

    out.write(f"\n  Rewrites:             {summary['total_commands']}\n")
    out.write(f"  Read-only:            {summary['read_only']} ({summary['read_only_pct']}%)\n")
    out.write(f"  Launchers stripped:   {summary['launcher_stripped']}\n")
    out.write(f"  Sessions:             {summary['sessions']}\n")

    by_command = tracker.get_by_command()
    if by_command:
        out.write(f"\nBy Command\n{RULE}\n")
        for entry in by_command:
            name = f"{binary} {entry['tool']}"
            if len(name) > 20:
                name = name[:17] + "..."
            out.write(f"  {name:<20s} {entry['count']:>6d} rewrites, {entry['read_only']:>5d} read-only\n")

    if args.graph:
        days = tracker.get_by_day(limit=30)
        if days:
            out.write(f"\nDaily Rewrites (last 30 days)\n{RULE}\n")
            print_ascii_graph(days, out)

    if args.history:
        recent = tracker.get_recent(10)
        if recent:
            out.write(f"\nRecent Rewrites\n{RULE}\n")
            for rec in recent:
                when = datetime.datetime.fromtimestamp(rec["timestamp"]).strftime("%m-%d %H:%M")
                cmd = rec["rewritten"]
                if len(cmd) > 40:
                    cmd = cmd[:37] + "..."
                marker = "ro" if rec["read_only"] else "  "
                out.write(f"  {when} {marker} {cmd}\n")


def main(argv=None):
    args = build_parser().parse_args(argv)

    tracker = _open_tracker()
    try:
        if args.format == "json":
            export_json(tracker, args)
            return
        if args.format == "csv":
            export_csv(tracker, args)
            return

        if not (args.daily or args.weekly or args.monthly or args.all):
            print_summary(tracker, args)
            return

        if _wants(args, "daily"):
            print_period_table(tracker.get_by_day(), "date", "Daily Rewrites")
        if _wants(args, "weekly"):
            print_period_table(tracker.get_by_week(), "week_start", "Weekly Rewrites")
        if _wants(args, "monthly"):
            print_period_table(tracker.get_by_month(), "month", "Monthly Rewrites")
    finally:
        tracker.close()


if __name__ == "__main__":
    main()
