"""Configuration system for rtk-hooks.

All settings can be overridden via environment variables
or a JSON config file at ~/.rtk-hooks/config.json.
"""

import contextlib
import json
import os

_DEFAULTS = {
    "enabled": True,
    "binary": "rtk",
    "require_binary": True,
    "auto_allow_read_only": True,
    "tracking": True,
    "db_prune_days": 90,
    "debug": False,
}

ENV_PREFIX = "RTK_HOOKS_"

_config: dict | None = None


def _load_config() -> dict:
    """Load config from file, then overlay env vars."""
    config = dict(_DEFAULTS)

    from rtk_hooks import data_dir  # noqa: PLC0415

    config_path = os.path.join(data_dir(), "config.json")
    if os.path.exists(config_path):
        try:
            with open(config_path) as f:
                user_config = json.load(f)
            if isinstance(user_config, dict):
                config.update(user_config)
        except (json.JSONDecodeError, OSError):
            pass

    # Environment variable overrides
    for key, default_val in _DEFAULTS.items():
        env_key = ENV_PREFIX + key.upper()
        env_val = os.environ.get(env_key)
        if env_val is not None:
            if isinstance(default_val, bool):
                config[key] = env_val.lower() in ("1", "true", "yes")
            elif isinstance(default_val, int):
                with contextlib.suppress(ValueError):
                    config[key] = int(env_val)
            else:
                config[key] = env_val

    return config


def get(key: str):
    """Get a config value."""
    global _config  # noqa: PLW0603
    if _config is None:
        _config = _load_config()
    return _config.get(key, _DEFAULTS.get(key))


def reload():
    """Force reload of configuration."""
    global _config  # noqa: PLW0603
    _config = None
