"""Tests for the branch to directory name mapping."""

from __future__ import annotations

import unittest
from datetime import datetime

from bare_worktree.exceptions import ValidationError
from bare_worktree.naming import (
    from_dir_name,
    generate_wip_branch_name,
    to_dir_name,
    validate_dir_name,
)


class DirNameTests(unittest.TestCase):
    def test_to_dir_name(self) -> None:
        self.assertEqual(to_dir_name("feature/000"), "feature-000")
        self.assertEqual(to_dir_name("fix/bug-123"), "fix-bug-123")
        self.assertEqual(to_dir_name("main"), "main")
        self.assertEqual(to_dir_name("feature/sub/deep"), "feature-sub-deep")

    def test_output_never_contains_separator(self) -> None:
        for branch in ("a/b", "/a//b/", "x", "feature/login"):
            with self.subTest(branch=branch):
                self.assertNotIn("/", to_dir_name(branch))

    def test_mapping_is_not_injective(self) -> None:
        self.assertEqual(to_dir_name("a/b"), to_dir_name("a-b"))

    def test_from_dir_name_is_best_effort(self) -> None:
        self.assertEqual(from_dir_name("feature-login"), "feature/login")
        self.assertEqual(from_dir_name("main"), "main")

    def test_validate_rejects_unsafe_names(self) -> None:
        for branch in ("", "  ", ".", "..", ".bare", ".git", "a\0b", "a\\b"):
            with self.subTest(branch=branch):
                with self.assertRaises(ValidationError):
                    validate_dir_name(branch)
        self.assertEqual(validate_dir_name("feature/login"), "feature-login")


class WipBranchTests(unittest.TestCase):
    def test_format(self) -> None:
        name = generate_wip_branch_name(datetime(2024, 3, 7, 9, 5, 2))
        self.assertEqual(name, "wip/0307-090502")

    def test_defaults_to_now(self) -> None:
        month_day, clock = generate_wip_branch_name().removeprefix("wip/").split("-")
        self.assertEqual(len(month_day), 4)
        self.assertEqual(len(clock), 6)


if __name__ == "__main__":
    unittest.main()
