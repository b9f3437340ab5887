"""Tests for the Claude Code installer."""

import json
import os
import shutil
import sys
import tempfile
from unittest import mock

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from installers import claude
from installers.common import EXTENSION_DIR, PACKAGE_FILES, install_files, uninstall_data_dir


class TestPackageFiles:
    def test_every_listed_file_exists(self):
        for rel_path in claude.CLAUDE_FILES:
            assert os.path.exists(os.path.join(EXTENSION_DIR, rel_path)), rel_path

    def test_every_module_is_listed(self):
        pkg_root = os.path.join(EXTENSION_DIR, "rtk_hooks")
        for dirpath, _dirs, files in os.walk(pkg_root):
            for name in files:
                if name.endswith(".py"):
                    rel = os.path.relpath(os.path.join(dirpath, name), EXTENSION_DIR).replace(os.sep, "/")
                    assert rel in PACKAGE_FILES, rel


class TestInstallFiles:
    def setup_method(self):
        self.tmp_dir = tempfile.mkdtemp()

    def teardown_method(self):
        shutil.rmtree(self.tmp_dir, ignore_errors=True)

    def test_copies_files(self):
        install_files(self.tmp_dir, ["rtk_hooks/__init__.py", "claude/hook_pretool.py"])
        assert os.path.isfile(os.path.join(self.tmp_dir, "rtk_hooks", "__init__.py"))
        assert not os.path.islink(os.path.join(self.tmp_dir, "claude", "hook_pretool.py"))

    def test_symlinks_files(self):
        install_files(self.tmp_dir, ["rtk_hooks/engine.py"], use_symlink=True)
        assert os.path.islink(os.path.join(self.tmp_dir, "rtk_hooks", "engine.py"))

    def test_missing_source_warns(self, capsys):
        install_files(self.tmp_dir, ["rtk_hooks/missing.py"])
        assert "WARNING" in capsys.readouterr().out


class TestClaudeInstaller:
    def setup_method(self):
        self.tmp_home = tempfile.mkdtemp()
        self.settings_path = os.path.join(self.tmp_home, ".claude", "settings.json")
        self._patch = mock.patch("installers.claude.home", return_value=self.tmp_home)
        self._patch.start()

    def teardown_method(self):
        self._patch.stop()
        shutil.rmtree(self.tmp_home, ignore_errors=True)

    def _settings(self):
        with open(self.settings_path) as f:
            return json.load(f)

    def test_install_registers_pretool_hook(self):
        claude.install()
        entries = self._settings()["hooks"]["PreToolUse"]
        assert len(entries) == 1
        assert entries[0]["matcher"] == "Bash"
        command = entries[0]["hooks"][0]["command"]
        assert "rtk-hooks" in command
        assert command.endswith("hook_pretool.py")
        plugin_dir = os.path.join(self.tmp_home, ".claude", "plugins", "rtk-hooks")
        assert os.path.isfile(os.path.join(plugin_dir, "claude", "hook_pretool.py"))
        assert os.path.isfile(os.path.join(plugin_dir, "rtk_hooks", "classifiers", "git.py"))

    def test_reinstall_replaces_entry_and_keeps_others(self):
        os.makedirs(os.path.dirname(self.settings_path))
        other = {"matcher": "Bash", "hooks": [{"type": "command", "command": "python3 /opt/guard.py"}]}
        with open(self.settings_path, "w") as f:
            json.dump({"permissions": {"allow": ["Bash(ls:*)"]}, "hooks": {"PreToolUse": [other]}}, f)

        claude.install()
        claude.install()

        settings = self._settings()
        entries = settings["hooks"]["PreToolUse"]
        assert len(entries) == 2
        assert entries[0] == other
        assert settings["permissions"]["allow"] == ["Bash(ls:*)"]

    def test_uninstall_removes_hook_and_plugin(self):
        claude.install()
        claude.uninstall()
        assert "hooks" not in self._settings()
        assert not os.path.exists(os.path.join(self.tmp_home, ".claude", "plugins", "rtk-hooks"))

    def test_uninstall_without_settings(self, capsys):
        claude.uninstall()
        assert "nothing to clean" in capsys.readouterr().out


class TestUninstallDataDir:
    def test_removes_data_dir(self, isolated_data_dir):
        os.makedirs(isolated_data_dir)
        (isolated_data_dir / "rewrites.db").write_text("")
        uninstall_data_dir()
        assert not os.path.exists(isolated_data_dir)
