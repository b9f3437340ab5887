"""Claude Code specific installer logic for rtk-hooks."""

import json
import os

from .common import (
    HOOK_MARKER,
    IS_WINDOWS,
    PACKAGE_FILES,
    home,
    install_files,
    python_cmd,
    uninstall_dir,
)

CLAUDE_FILES = [
    *PACKAGE_FILES,
    "claude/hook_pretool.py",
]


def _settings_dir():
    """Return Claude Code settings directory."""
    if IS_WINDOWS:
        appdata = os.environ.get("APPDATA", os.path.join(home(), "AppData", "Roaming"))
        return os.path.join(appdata, "claude")
    return os.path.join(home(), ".claude")


def _plugin_dir():
    """Return where we install the plugin files for Claude Code."""
    return os.path.join(_settings_dir(), "plugins", "rtk-hooks")


def settings_path():
    """Return path to Claude Code settings.json."""
    return os.path.join(_settings_dir(), "settings.json")


def _hook_belongs_to_us(hook_entry):
    """Check if a PreToolUse hook entry belongs to rtk-hooks."""
    if not isinstance(hook_entry, dict):
        return False
    for h in hook_entry.get("hooks", []):
        cmd = h.get("command", "") if isinstance(h, dict) else ""
        if HOOK_MARKER in cmd:
            return True
    return HOOK_MARKER in str(hook_entry.get("command", ""))


def _load_settings(path):
    if not os.path.exists(path):
        return {}
    with open(path) as f:
        return json.load(f)


def _write_settings(path, settings):
    os.makedirs(os.path.dirname(path), exist_ok=True)
    with open(path, "w") as f:
        json.dump(settings, f, indent=2)
        f.write("\n")


def _register_hooks(target_dir):
    """Register the PreToolUse hook in Claude Code's settings.json."""
    path = settings_path()
    hook_command = f"{python_cmd()} {target_dir}/claude/hook_pretool.py"

    # On Windows, use backslashes in paths
    if IS_WINDOWS:
        hook_command = hook_command.replace("/", "\\")

    settings = _load_settings(path)
    hooks = settings.setdefault("hooks", {})
    pretool_list = hooks.setdefault("PreToolUse", [])

    # Replace any previous rtk-hooks entry
    pretool_list[:] = [entry for entry in pretool_list if not _hook_belongs_to_us(entry)]
    pretool_list.append(
        {
            "matcher": "Bash",
            "hooks": [
                {
                    "type": "command",
                    "command": hook_command,
                    "timeout": 5000,
                }
            ],
        }
    )

    _write_settings(path, settings)
    print("  REGISTERED PreToolUse hook in settings.json")


def _unregister_hooks():
    """Remove rtk-hooks entries from Claude Code settings.json."""
    path = settings_path()
    if not os.path.exists(path):
        print("  settings.json not found, nothing to clean")
        return

    settings = _load_settings(path)
    hooks = settings.get("hooks", {})
    changed = False

    if "PreToolUse" in hooks:
        original_len = len(hooks["PreToolUse"])
        hooks["PreToolUse"] = [e for e in hooks["PreToolUse"] if not _hook_belongs_to_us(e)]
        changed = len(hooks["PreToolUse"]) != original_len
        if not hooks["PreToolUse"]:
            del hooks["PreToolUse"]

    if not hooks:
        settings.pop("hooks", None)

    if changed:
        _write_settings(path, settings)
        print("  REMOVED hooks from settings.json")
    else:
        print("  No rtk-hooks hooks found in settings.json")


def install(use_symlink=False):
    """Install rtk-hooks for Claude Code."""
    target_dir = _plugin_dir()
    print(f"\n--- Claude Code ({target_dir}) ---")
    install_files(target_dir, CLAUDE_FILES, use_symlink)
    _register_hooks(target_dir)


def uninstall():
    """Uninstall rtk-hooks from Claude Code."""
    print("\n--- Claude Code ---")
    _unregister_hooks()
    uninstall_dir(_plugin_dir())
