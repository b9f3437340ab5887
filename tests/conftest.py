import os
import sys

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from rtk_hooks import config


@pytest.fixture(autouse=True)
def isolated_data_dir(tmp_path, monkeypatch):
    """Keep config.json, the rewrite DB and logs out of the real home directory."""
    data = tmp_path / "rtk-hooks-data"
    monkeypatch.setenv("RTK_HOOKS_DATA_DIR", str(data))
    for key in list(os.environ):
        if key.startswith("RTK_HOOKS_") and key != "RTK_HOOKS_DATA_DIR":
            monkeypatch.delenv(key)
    config.reload()
    yield data
    config.reload()
