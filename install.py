#!/usr/bin/env python3
"""Installer / Uninstaller for the rtk-hooks Claude Code hook.

Cross-platform: macOS, Linux, Windows.

Usage:
    python3 install.py                         # Install for Claude Code
    python3 install.py --link                  # Use symlinks (development mode)
    python3 install.py --migrate-permissions   # Install, then add rtk permission rules
    python3 install.py --uninstall             # Remove hook, plugin files and data
    python3 install.py --uninstall --keep-data # Remove but keep rewrite history and config
"""

import argparse
import platform
import shutil

from installers import claude
from installers.common import uninstall_data_dir


def main():
    parser = argparse.ArgumentParser(
        description="Install or uninstall the rtk-hooks Claude Code hook",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python3 install.py                          Install for Claude Code
  python3 install.py --link                   Dev mode (symlinks)
  python3 install.py --migrate-permissions    Install and migrate permission rules
  python3 install.py --uninstall              Uninstall everything
  python3 install.py --uninstall --keep-data  Uninstall but keep rewrite history
""",
    )
    parser.add_argument(
        "--link",
        action="store_true",
        help="Use symlinks instead of copies (development mode)",
    )
    parser.add_argument(
        "--migrate-permissions",
        action="store_true",
        help="Add rtk-prefixed rules for existing Bash permission rules after installing",
    )
    parser.add_argument(
        "--uninstall",
        action="store_true",
        help="Remove the hook completely",
    )
    parser.add_argument(
        "--keep-data",
        action="store_true",
        help="When uninstalling, keep the ~/.rtk-hooks data directory (history, config)",
    )
    args = parser.parse_args()

    if args.uninstall:
        print("Uninstalling rtk-hooks")
        claude.uninstall()
        if not args.keep_data:
            print("\n--- Data ---")
            uninstall_data_dir()
        print("\nUninstallation complete.")
        return

    print("Installing rtk-hooks for Claude Code")
    print(f"Platform: {platform.system()}")
    print(f"Mode: {'symlink' if args.link else 'copy'}")

    claude.install(use_symlink=args.link)

    if args.migrate_permissions:
        from rtk_hooks.permissions import MigrationError, migrate  # noqa: PLC0415

        print("\n--- Permissions ---")
        try:
            migrate(claude.settings_path())
        except MigrationError as e:
            print(f"  Skipped: {e}")

    if shutil.which("rtk") is None:
        print("\n  NOTE: rtk is not on your PATH; the hook stays inactive until it is.")

    print("\nInstallation complete.")


if __name__ == "__main__":
    main()
