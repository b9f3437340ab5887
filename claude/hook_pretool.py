#!/usr/bin/env python3
"""PreToolUse hook for Claude Code.

Reads JSON from stdin and rewrites recognized Bash commands to run through
rtk. Runner prefixes (npx, pnpm-as-launcher, python -m, uv) are stripped
first. Read-only commands are auto-allowed; everything else keeps going
through the user's own permission rules.

Fails open: any problem with the input or environment produces no output.
"""

import json
import logging
import os
import shutil
import sys

# Ensure the extension root is importable (claude/ -> extension/)
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rtk_hooks import config, data_dir
from rtk_hooks.engine import rewrite
from rtk_hooks.hook_io import format_pretool_rewrite, get_command, get_tool_input, is_bash_event

# --- Debug logging (writes to ~/.rtk-hooks/hook.log when "debug" is set in
# config.json or RTK_HOOKS_DEBUG=true) ---
_log = logging.getLogger("rtk-hooks.hook_pretool")
_log.setLevel(logging.DEBUG)
if config.get("debug"):
    _log_dir = data_dir()
    os.makedirs(_log_dir, exist_ok=True)
    _handler = logging.FileHandler(os.path.join(_log_dir, "hook.log"))
    _handler.setFormatter(logging.Formatter("%(asctime)s [%(name)s] %(levelname)s: %(message)s"))
    _log.addHandler(_handler)
else:
    _log.addHandler(logging.NullHandler())


def _record(result, session_id):
    try:
        from rtk_hooks.tracker import RewriteTracker  # noqa: PLC0415

        tracker = RewriteTracker(session_id=session_id, prune_days=config.get("db_prune_days"))
        tracker.record_rewrite(
            tool=result.tool,
            original=result.original,
            rewritten=result.command,
            prefix=result.prefix,
            read_only=result.read_only,
        )
        tracker.close()
    except Exception:
        _log.exception("Tracking failed")


def handle(input_data: dict) -> dict | None:
    """Return the hook response for one PreToolUse event, or None to pass through."""
    if not config.get("enabled"):
        _log.debug("Disabled by config")
        return None

    if not is_bash_event(input_data):
        _log.debug("Skipping non-Bash tool: %s", input_data.get("tool_name"))
        return None

    command = get_command(input_data)
    if not command:
        return None

    result = rewrite(command)
    if result is None:
        _log.debug("No rewrite: %r", command[:200])
        return None
    _log.debug("Rewriting: %r -> %r (read_only=%s)", command, result.command, result.read_only)

    if config.get("tracking"):
        _record(result, input_data.get("session_id"))

    reason = None
    if result.read_only and config.get("auto_allow_read_only"):
        reason = f"rtk-hooks: read-only {result.tool} command"
    return format_pretool_rewrite(get_tool_input(input_data), result.command, reason)


def main():
    # Skip silently if the replacement binary is missing
    binary = config.get("binary")
    if config.get("require_binary") and shutil.which(binary) is None:
        _log.debug("%s not found on PATH", binary)
        sys.exit(0)

    try:
        raw_input = sys.stdin.read()
        _log.debug("stdin: %s", raw_input[:500])
        input_data = json.loads(raw_input)
    except (json.JSONDecodeError, ValueError) as exc:
        _log.debug("Invalid JSON input: %s", exc)
        sys.exit(0)

    if not isinstance(input_data, dict):
        sys.exit(0)

    result = handle(input_data)
    if result is not None:
        json.dump(result, sys.stdout)
    sys.exit(0)


if __name__ == "__main__":
    main()
