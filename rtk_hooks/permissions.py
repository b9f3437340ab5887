#!/usr/bin/env python3
"""Add rewritten-form permission rules to Claude Code settings.

The hook turns `git status` into `rtk git status`, so a user's existing
`Bash(git status:*)` rule no longer matches what actually runs. For every
Bash rule covering a command the hook rewrites, this adds the equivalent
rule for the rewritten form: Bash(X:*) -> Bash(rtk X:*),
Bash(npx vitest:*) -> Bash(rtk vitest:*).

Usage:
    python3 -m rtk_hooks.permissions [--dry-run] [--settings PATH]
"""

import argparse
import json
import os
import shutil
import sys

from rtk_hooks.engine import RewriteEngine

# Rule lists migrated, in settings order. Deny and ask rules are carried
# over so a rewrite never turns a denied command into an unmatched one.
RULE_LISTS = ("allow", "ask", "deny")

_WILDCARD_SUFFIX = ":*"


class MigrationError(Exception):
    """Settings file missing or unreadable."""


def default_settings_path() -> str:
    return os.environ.get(
        "CLAUDE_SETTINGS_PATH", os.path.join(os.path.expanduser("~"), ".claude", "settings.json")
    )


def rewrite_rule(rule: str, engine: RewriteEngine) -> str | None:
    """Return the rewritten-form rule for a Bash rule, or None if not applicable."""
    if not isinstance(rule, str) or not rule.startswith("Bash(") or not rule.endswith(")"):
        return None
    inner = rule[len("Bash(") : -1]
    suffix = ""
    if inner.endswith(_WILDCARD_SUFFIX):
        inner, suffix = inner[: -len(_WILDCARD_SUFFIX)], _WILDCARD_SUFFIX
    rewritten = engine.rewrite_rule_command(inner)
    if rewritten is None:
        return None
    return f"Bash({rewritten}{suffix})"


def find_new_rules(settings: dict, engine: RewriteEngine | None = None) -> list[tuple[str, str]]:
    """Return (list name, rule) pairs to add, in settings order, without duplicates."""
    engine = engine or RewriteEngine()
    permissions = settings.get("permissions")
    if not isinstance(permissions, dict):
        return []
    new_rules = []
    for list_name in RULE_LISTS:
        existing = permissions.get(list_name) or []
        if not isinstance(existing, list):
            continue
        seen = {rule for rule in existing if isinstance(rule, str)}
        for rule in existing:
            new_rule = rewrite_rule(rule, engine)
            if new_rule is None or new_rule in seen:
                continue
            seen.add(new_rule)
            new_rules.append((list_name, new_rule))
    return new_rules


def load_settings(path: str) -> dict:
    if not os.path.isfile(path):
        raise MigrationError(f"{path} not found")
    try:
        with open(path) as f:
            settings = json.load(f)
    except json.JSONDecodeError as e:
        raise MigrationError(f"{path} is not valid JSON: {e}") from e
    if not isinstance(settings, dict):
        raise MigrationError(f"{path} does not contain a JSON object")
    return settings


def apply_rules(path: str, settings: dict, new_rules: list[tuple[str, str]]) -> str:
    """Append the rules, back up the original file, write atomically. Returns the backup path."""
    permissions = settings.setdefault("permissions", {})
    for list_name, rule in new_rules:
        permissions.setdefault(list_name, []).append(rule)

    backup = f"{path}.bak"
    shutil.copy2(path, backup)
    tmp = f"{path}.tmp"
    with open(tmp, "w") as f:
        json.dump(settings, f, indent=2)
        f.write("\n")
    os.replace(tmp, path)
    return backup


def migrate(path: str, dry_run: bool = False, out=None) -> int:
    """Run the migration, printing progress. Returns the number of rules added (or to add)."""
    out = out or sys.stdout
    settings = load_settings(path)
    new_rules = find_new_rules(settings)

    if not new_rules:
        out.write("No new rules needed — everything is already covered.\n")
        return 0

    out.write("Rules to add:\n")
    for list_name, rule in new_rules:
        tag = "" if list_name == "allow" else f" [{list_name}]"
        out.write(f"  + {rule}{tag}\n")

    if dry_run:
        out.write("\n(dry run — no changes made)\n")
        return len(new_rules)

    backup = apply_rules(path, settings, new_rules)
    out.write(f"\nAdded {len(new_rules)} rules to {path}\n")
    out.write(f"Backup at {backup}\n")
    return len(new_rules)


def build_parser(parser: argparse.ArgumentParser | None = None) -> argparse.ArgumentParser:
    parser = parser or argparse.ArgumentParser(
        prog="rtk-hooks migrate-permissions",
        description="Add rtk-prefixed permission rules for existing Bash rules",
    )
    parser.add_argument("--dry-run", action="store_true", help="Show the rules without changing anything")
    parser.add_argument("--settings", default=None, help="Settings file (default: $CLAUDE_SETTINGS_PATH or ~/.claude/settings.json)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    path = args.settings or default_settings_path()
    try:
        migrate(path, dry_run=args.dry_run)
    except (MigrationError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
