"""Shared constants, file lists, and utility functions for rtk-hooks installers."""

import os
import platform
import shutil

EXTENSION_DIR = os.path.dirname(os.path.dirname(os.path.abspath(__file__)))
IS_WINDOWS = platform.system() == "Windows"
HOOK_MARKER = "rtk-hooks"

PACKAGE_FILES = [
    "rtk_hooks/__init__.py",
    "rtk_hooks/config.py",
    "rtk_hooks/engine.py",
    "rtk_hooks/rules.py",
    "rtk_hooks/hook_io.py",
    "rtk_hooks/tracker.py",
    "rtk_hooks/stats.py",
    "rtk_hooks/permissions.py",
    "rtk_hooks/cli.py",
    "rtk_hooks/classifiers/__init__.py",
    "rtk_hooks/classifiers/base.py",
    "rtk_hooks/classifiers/files.py",
    "rtk_hooks/classifiers/git.py",
    "rtk_hooks/classifiers/gh.py",
    "rtk_hooks/classifiers/containers.py",
    "rtk_hooks/classifiers/packages.py",
    "rtk_hooks/classifiers/lint.py",
    "rtk_hooks/classifiers/runners.py",
    "rtk_hooks/classifiers/network.py",
]


def home():
    """Return user home directory, works on all platforms."""
    return os.path.expanduser("~")


def python_cmd():
    """Return python command appropriate for the platform."""
    if IS_WINDOWS:
        return "python"
    return "python3"


def rtk_hooks_data_dir():
    """Return path to ~/.rtk-hooks (or platform equivalent) for DB, config and logs."""
    override = os.environ.get("RTK_HOOKS_DATA_DIR")
    if override:
        return override
    if IS_WINDOWS:
        appdata = os.environ.get("APPDATA", os.path.join(home(), "AppData", "Roaming"))
        return os.path.join(appdata, "rtk-hooks")
    return os.path.join(home(), ".rtk-hooks")


def install_files(target_dir, file_list, use_symlink=False):
    """Copy or symlink extension files to the target directory."""
    os.makedirs(target_dir, exist_ok=True)

    for rel_path in file_list:
        src = os.path.join(EXTENSION_DIR, rel_path)
        dst = os.path.join(target_dir, rel_path)

        if not os.path.exists(src):
            print(f"  WARNING: Source file missing: {src}")
            continue

        os.makedirs(os.path.dirname(dst), exist_ok=True)

        if use_symlink:
            if os.path.exists(dst) or os.path.islink(dst):
                os.remove(dst)
            os.symlink(src, dst)
            print(f"  LINK {rel_path}")
        else:
            shutil.copy2(src, dst)
            print(f"  COPY {rel_path}")


def uninstall_dir(target_dir):
    """Remove installed plugin directory."""
    if os.path.exists(target_dir):
        shutil.rmtree(target_dir)
        print(f"  REMOVED {target_dir}")
    else:
        print(f"  NOT FOUND {target_dir} (already removed)")


def uninstall_data_dir():
    """Remove the rtk-hooks data directory (~/.rtk-hooks) with DB, config and logs."""
    data_dir = rtk_hooks_data_dir()
    if os.path.exists(data_dir):
        shutil.rmtree(data_dir)
        print(f"  REMOVED {data_dir}")
    else:
        print(f"  NOT FOUND {data_dir} (already removed)")
