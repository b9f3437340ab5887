import os

__version__ = "0.4.0"


def data_dir() -> str:
    """Return the rtk-hooks data directory (for DB, config, logs).

    RTK_HOOKS_DATA_DIR wins when set. Otherwise uses %APPDATA%/rtk-hooks
    on Windows, ~/.rtk-hooks on Unix.
    """
    override = os.environ.get("RTK_HOOKS_DATA_DIR")
    if override:
        return override
    if os.name == "nt":
        appdata = os.environ.get(
            "APPDATA", os.path.join(os.path.expanduser("~"), "AppData", "Roaming")
        )
        return os.path.join(appdata, "rtk-hooks")
    return os.path.join(os.path.expanduser("~"), ".rtk-hooks")
