"""Tests for locating the repository root."""

from __future__ import annotations

import os
import tempfile
import unittest
from pathlib import Path

from bare_worktree.exceptions import NoBareStoreError, NotFoundError
from bare_worktree.locator import locate_repo_root


class LocateRepoRootTests(unittest.TestCase):
    def setUp(self) -> None:
        tmp = tempfile.TemporaryDirectory()
        self.addCleanup(tmp.cleanup)
        self.base = Path(tmp.name).resolve()
        self.root = self.base / "github.com" / "acme" / "widgets"
        (self.root / ".bare").mkdir(parents=True)

    def test_finds_root_from_itself(self) -> None:
        self.assertEqual(locate_repo_root(self.root), self.root)

    def test_finds_root_from_nested_directory(self) -> None:
        nested = self.root / "feature-login" / "src" / "pkg"
        nested.mkdir(parents=True)
        self.assertEqual(locate_repo_root(nested), self.root)

    def test_bare_file_is_not_a_store(self) -> None:
        other = self.base / "other"
        other.mkdir()
        (other / ".bare").write_text("", encoding="utf-8")
        with self.assertRaises(NoBareStoreError):
            locate_repo_root(other)

    def test_missing_store_raises_not_found(self) -> None:
        lonely = self.base / "lonely"
        lonely.mkdir()
        with self.assertRaises(NotFoundError) as ctx:
            locate_repo_root(lonely)
        self.assertEqual(ctx.exception.start, lonely)

    def test_symlink_cycle_terminates(self) -> None:
        loop_dir = self.base / "loop"
        loop_dir.mkdir()
        os.symlink(loop_dir, loop_dir / "self")
        with self.assertRaises(NoBareStoreError):
            locate_repo_root(loop_dir / "self" / "self")

    def test_symlinked_start_resolves_to_real_root(self) -> None:
        link = self.base / "link"
        os.symlink(self.root, link)
        self.assertEqual(locate_repo_root(link), self.root)


if __name__ == "__main__":
    unittest.main()
