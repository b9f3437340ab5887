"""CLI entry point for rtk-hooks: version, stats, check, migrate-permissions."""

import argparse
import json
import shutil
import sys

from rtk_hooks import __version__, config


def cmd_version(_args):
    """Print current version."""
    print(f"rtk-hooks v{__version__}")


def cmd_stats(args):
    """Display rewrite statistics, delegating to rtk_hooks/stats.py."""
    from rtk_hooks.stats import main as stats_main  # noqa: PLC0415

    argv = ["--format", args.format]
    for flag in ("graph", "history", "daily", "weekly", "monthly", "all"):
        if getattr(args, flag):
            argv.append(f"--{flag}")
    stats_main(argv)


def cmd_check(args):
    """Show how the hook would treat a command."""
    from rtk_hooks.engine import RewriteEngine  # noqa: PLC0415

    engine = RewriteEngine()
    command = " ".join(args.cmd)
    result = engine.rewrite(command)

    if args.json:
        data = result.to_dict() if result else {"original": command, "command": None}
        data["binary_found"] = shutil.which(engine.binary) is not None
        json.dump(data, sys.stdout)
        sys.stdout.write("\n")
        return

    if result is None:
        print(f"pass through: {command}")
        return
    print(f"rewrite:  {result.command}")
    if result.prefix:
        print(f"launcher: {result.prefix} (stripped)")
    if result.read_only and config.get("auto_allow_read_only"):
        print("decision: allow (read-only)")
    elif result.read_only:
        print("decision: defer to permission rules (read-only, auto-allow disabled)")
    else:
        print("decision: defer to permission rules")


def cmd_migrate_permissions(args):
    """Add rtk-prefixed permission rules, delegating to rtk_hooks/permissions.py."""
    from rtk_hooks.permissions import main as permissions_main  # noqa: PLC0415

    argv = []
    if args.dry_run:
        argv.append("--dry-run")
    if args.settings:
        argv.extend(["--settings", args.settings])
    permissions_main(argv)


def build_parser() -> argparse.ArgumentParser:
    from rtk_hooks.permissions import build_parser as build_permissions_parser  # noqa: PLC0415
    from rtk_hooks.stats import build_parser as build_stats_parser  # noqa: PLC0415

    parser = argparse.ArgumentParser(
        prog="rtk-hooks",
        description="rtk-hooks: route AI assistant shell commands through rtk",
    )
    subparsers = parser.add_subparsers(dest="command")

    subparsers.add_parser("version", help="Show current version")

    build_stats_parser(subparsers.add_parser("stats", help="Show rewrite statistics"))

    check_parser = subparsers.add_parser("check", help="Show how a command would be rewritten")
    check_parser.add_argument("cmd", nargs="+", help="Command to check (quote it)")
    check_parser.add_argument("--json", action="store_true", help="Output as JSON")

    build_permissions_parser(
        subparsers.add_parser("migrate-permissions", help="Add rtk rules for existing Bash permission rules")
    )
    return parser


def main(argv=None):
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    commands = {
        "version": cmd_version,
        "stats": cmd_stats,
        "check": cmd_check,
        "migrate-permissions": cmd_migrate_permissions,
    }
    commands[args.command](args)


if __name__ == "__main__":
    main()
