"""Protocols for the collaborators the core calls out to."""

from __future__ import annotations

from pathlib import Path
from typing import Protocol, Sequence

from .models import HookResult, WorktreeEntry


class VcsBackend(Protocol):
    """Capability interface over the version control tool.

    ``root`` is always the repository root, the directory holding ``.bare``.
    Implementations raise :class:`~bare_worktree.exceptions.BackendError`
    on failure.
    """

    def clone_bare(self, url: str, dest: Path) -> None:
        ...

    def list_branches(self, root: Path) -> list[str]:
        ...

    def branch_exists(self, root: Path, name: str) -> bool:
        ...

    def list_worktrees(self, root: Path) -> list[WorktreeEntry]:
        """Return registered worktrees in registry order, main entry first."""
        ...

    def add_worktree(
        self,
        root: Path,
        path: Path,
        branch: str,
        *,
        new_branch: bool,
        base: str | None = None,
    ) -> None:
        ...

    def remove_worktree(self, root: Path, path: Path, *, force: bool = False) -> None:
        ...

    def prune_worktrees(self, root: Path) -> None:
        ...


class CommandRunner(Protocol):
    def run(self, script: str, cwd: Path) -> HookResult:
        """Run ``script`` with ``cwd`` as working directory and wait for it."""
        ...


class Picker(Protocol):
    def choose(self, options: Sequence[str], *, prompt: str = "") -> str | None:
        """Return the selected option, or None when nothing was picked."""
        ...


__all__ = ["VcsBackend", "CommandRunner", "Picker"]
