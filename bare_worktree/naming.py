"""Branch name to worktree directory name mapping."""

from __future__ import annotations

from datetime import datetime

from .exceptions import ValidationError
from .layout import BARE_DIR_NAME, GIT_LINK_NAME

RESERVED_DIR_NAMES = frozenset({".", "..", BARE_DIR_NAME, GIT_LINK_NAME})


def to_dir_name(branch: str) -> str:
    """Replace every '/' in ``branch`` with '-'.

    Not injective: ``a/b`` and ``a-b`` share a directory name.
    """

    return branch.replace("/", "-")


def from_dir_name(dir_name: str) -> str:
    """Best-effort inverse of :func:`to_dir_name`, for display only."""

    return dir_name.replace("-", "/")


def validate_dir_name(branch: str) -> str:
    if not branch.strip():
        raise ValidationError("Branch name cannot be empty.")
    if "\0" in branch or "\\" in branch:
        raise ValidationError(f"Branch name cannot contain NUL or backslash characters: {branch!r}")
    dir_name = to_dir_name(branch)
    if dir_name in RESERVED_DIR_NAMES:
        raise ValidationError(f"Branch {branch!r} maps to reserved directory name {dir_name!r}.")
    return dir_name


def generate_wip_branch_name(now: datetime | None = None) -> str:
    stamp = (now or datetime.now()).strftime("%m%d-%H%M%S")
    return f"wip/{stamp}"


__all__ = ["to_dir_name", "from_dir_name", "validate_dir_name", "generate_wip_branch_name"]
