"""Tests for configuration loading."""

from __future__ import annotations

import os
import tempfile
import tomllib
import unittest
from pathlib import Path
from unittest import mock

from bare_worktree.config import (
    DEFAULT_CONFIG_CONTENT,
    DEFAULT_POST_CLONE_COMMANDS,
    config_path,
    ensure_config_file,
    load_repo_settings,
    load_settings,
)
from bare_worktree.exceptions import ConfigError, MissingConfigError
from bare_worktree.models import CloneMethod, RepoSettings


class ConfigTestCase(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.dir = Path(tmp.name)
        env = mock.patch.dict(os.environ, {}, clear=False)
        env.start()
        self.addCleanup(env.stop)
        for var in ("BW_CONFIG", "BW_ROOT", "XDG_CONFIG_HOME"):
            os.environ.pop(var, None)

    def write(self, name: str, content: str) -> Path:
        path = self.dir / name
        path.write_text(content, encoding="utf-8")
        return path


class ConfigPathTests(ConfigTestCase):
    def test_env_override(self) -> None:
        os.environ["BW_CONFIG"] = str(self.dir / "custom.toml")
        self.assertEqual(config_path(), self.dir / "custom.toml")

    def test_xdg_config_home(self) -> None:
        os.environ["XDG_CONFIG_HOME"] = str(self.dir)
        self.assertEqual(config_path(), self.dir / "bw" / "config.toml")

    def test_home_fallback(self) -> None:
        self.assertEqual(config_path(), Path.home() / ".config" / "bw" / "config.toml")


class LoadSettingsTests(ConfigTestCase):
    def test_full_file(self) -> None:
        path = self.write(
            "config.toml",
            'root = "~/repos"\nclone_method = "https"\nsuffix = ".work"\n'
            'base_branch = "develop"\npost_clone_commands = "echo hi"\n',
        )
        settings = load_settings(path)
        self.assertEqual(settings.root, Path.home() / "repos")
        self.assertIs(settings.clone_method, CloneMethod.HTTPS)
        self.assertEqual(settings.suffix, ".work")
        self.assertEqual(settings.base_branch, "develop")
        self.assertEqual(settings.post_clone_commands, "echo hi")

    def test_defaults(self) -> None:
        settings = load_settings(self.write("config.toml", 'root = "/repos"\n'))
        self.assertIs(settings.clone_method, CloneMethod.SSH)
        self.assertIsNone(settings.suffix)
        self.assertIsNone(settings.base_branch)
        self.assertEqual(settings.post_clone_commands, DEFAULT_POST_CLONE_COMMANDS)

    def test_root_env_override(self) -> None:
        os.environ["BW_ROOT"] = "/elsewhere"
        settings = load_settings(self.write("config.toml", 'root = "/repos"\n'))
        self.assertEqual(settings.root, Path("/elsewhere"))

    def test_missing_file(self) -> None:
        with self.assertRaises(MissingConfigError):
            load_settings(self.dir / "absent.toml")

    def test_invalid_values(self) -> None:
        for content in (
            'clone_method = "ssh"\n',
            'root = "/repos"\nclone_method = "ftp"\n',
            'root = 3\n',
            'root = "/repos"\nsuffix = [1]\n',
            'root = "/repos\n',
        ):
            with self.subTest(content=content):
                with self.assertRaises(ConfigError):
                    load_settings(self.write("config.toml", content))

    def test_default_content_is_valid(self) -> None:
        data = tomllib.loads(DEFAULT_CONFIG_CONTENT)
        self.assertEqual(data["root"], "~/repos")
        self.assertEqual(data["post_clone_commands"], DEFAULT_POST_CLONE_COMMANDS)

    def test_ensure_config_file_keeps_existing(self) -> None:
        path = self.dir / "nested" / "config.toml"
        ensure_config_file(path)
        self.assertEqual(path.read_text(encoding="utf-8"), DEFAULT_CONFIG_CONTENT)
        path.write_text('root = "/mine"\n', encoding="utf-8")
        ensure_config_file(path)
        self.assertEqual(path.read_text(encoding="utf-8"), 'root = "/mine"\n')


class RepoSettingsTests(ConfigTestCase):
    def test_missing_file_gives_defaults(self) -> None:
        self.assertEqual(load_repo_settings(self.dir), RepoSettings())

    def test_reads_overrides(self) -> None:
        self.write("bw.toml", 'base_branch = "develop"\npost_add_commands = """\nnpm ci\n"""\n')
        settings = load_repo_settings(self.dir)
        self.assertEqual(settings.base_branch, "develop")
        self.assertEqual(settings.post_add_commands, "npm ci\n")


if __name__ == "__main__":
    unittest.main()
