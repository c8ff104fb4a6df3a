"""High-level orchestration for worktree operations."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Sequence

from .backend import CommandRunner, Picker, VcsBackend
from .config import load_repo_settings
from .exceptions import (
    AlreadyExistsError,
    AmbiguousSelectorError,
    ValidationError,
    WorktreeNotFoundError,
)
from .hooks import run_hook
from .locator import locate_repo_root
from .models import AddResult, RepoSettings, Settings, WorktreeEntry
from .naming import from_dir_name, generate_wip_branch_name, to_dir_name, validate_dir_name
from .reconcile import reconcile

logger = logging.getLogger(__name__)

FALLBACK_BASE_BRANCH = "main"


@dataclass
class WorktreeService:
    """Add, list and remove worktrees that live beside a repository's ``.bare``."""

    root: Path
    backend: VcsBackend
    runner: CommandRunner
    repo_settings: RepoSettings = field(default_factory=RepoSettings)
    default_base: str | None = None

    @classmethod
    def discover(
        cls,
        backend: VcsBackend,
        runner: CommandRunner,
        *,
        start: Path | None = None,
        settings: Settings | None = None,
    ) -> WorktreeService:
        root = locate_repo_root(start)
        return cls(
            root=root,
            backend=backend,
            runner=runner,
            repo_settings=load_repo_settings(root),
            default_base=settings.base_branch if settings else None,
        )

    def resolve_base(self, override: str | None = None) -> str:
        return (
            override
            or self.repo_settings.base_branch
            or self.default_base
            or FALLBACK_BASE_BRANCH
        )

    def add_worktree(self, branch: str | None = None, base: str | None = None) -> AddResult:
        if not branch:
            branch = generate_wip_branch_name()
            logger.info("Auto-generated branch name: %s", branch)
        dir_name = validate_dir_name(branch)
        target = self.root / dir_name

        live = reconcile(self.root, self.backend).live
        for entry in live:
            if entry.path == target:
                raise AlreadyExistsError(
                    target, f"Registered as a worktree for {entry.branch or 'a detached HEAD'}."
                )
            if entry.branch and entry.branch != branch and to_dir_name(entry.branch) == dir_name:
                raise AlreadyExistsError(
                    target, f"Branch {entry.branch!r} already uses directory name {dir_name!r}."
                )
        if target.exists():
            raise AlreadyExistsError(target, "Directory exists on disk.")

        if self.backend.branch_exists(self.root, branch):
            logger.info("Creating worktree %s for existing branch %s", dir_name, branch)
            self.backend.add_worktree(self.root, target, branch, new_branch=False)
            created, base_branch = False, None
        else:
            base_branch = self.resolve_base(base)
            logger.info("Creating worktree %s (branch: %s, base: %s)", dir_name, branch, base_branch)
            self.backend.add_worktree(self.root, target, branch, new_branch=True, base=base_branch)
            created = True

        hook_error = run_hook(self.runner, self.repo_settings.post_add_commands, target, "post-add")
        return AddResult(
            entry=WorktreeEntry(path=target, branch=branch),
            created_branch=created,
            base_branch=base_branch,
            hook_error=hook_error,
        )

    def list_worktrees(self) -> list[WorktreeEntry]:
        """Reconcile, then return the checked-out worktrees in registry order."""

        return [entry for entry in reconcile(self.root, self.backend).live if not entry.is_bare]

    def select_worktree(self, picker: Picker) -> WorktreeEntry | None:
        return _pick(picker, self.list_worktrees(), "worktree")

    def removable_worktrees(self) -> list[WorktreeEntry]:
        """Registered worktrees still on disk, read without pruning the registry."""

        return [
            entry
            for entry in self.backend.list_worktrees(self.root)
            if not entry.is_bare and not entry.is_main and entry.path.exists()
        ]

    def select_removable(self, picker: Picker) -> WorktreeEntry | None:
        return _pick(picker, self.removable_worktrees(), "remove")

    def resolve_selector(self, selector: str) -> WorktreeEntry:
        return resolve_selector(selector, self.removable_worktrees())

    def remove_worktree(self, selector: str | WorktreeEntry, *, force: bool = False) -> WorktreeEntry:
        entry = selector if isinstance(selector, WorktreeEntry) else self.resolve_selector(selector)
        logger.info("Removing worktree %s", entry.path)
        self.backend.remove_worktree(self.root, entry.path, force=force)
        return entry


def resolve_selector(selector: str, entries: Sequence[WorktreeEntry]) -> WorktreeEntry:
    """Match ``selector`` against directory names first, then branch names.

    ``feature-login``, ``feature/login`` and the absolute worktree path all
    select the worktree in ``<root>/feature-login``.
    """

    literal = [e for e in entries if selector in (e.name, str(e.path))]
    matches = literal or [
        e
        for e in entries
        if selector == e.branch
        or selector == from_dir_name(e.name)
        or to_dir_name(selector) == e.name
    ]
    if not matches:
        raise WorktreeNotFoundError(selector)
    if len(matches) > 1:
        raise AmbiguousSelectorError(selector, [e.path for e in matches])
    return matches[0]


def _pick(picker: Picker, entries: list[WorktreeEntry], prompt: str) -> WorktreeEntry | None:
    lookup = {str(entry.path): entry for entry in entries}
    if not lookup:
        return None
    selection = picker.choose(list(lookup), prompt=prompt)
    if selection is None:
        return None
    try:
        return lookup[selection]
    except KeyError as exc:
        raise ValidationError(f"Selected worktree could not be resolved: {selection}") from exc


__all__ = ["WorktreeService", "resolve_selector"]
