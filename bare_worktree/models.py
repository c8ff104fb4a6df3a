"""Dataclasses shared across modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from .exceptions import HookError, ParseError


class CloneMethod(str, Enum):
    SSH = "ssh"
    HTTPS = "https"


@dataclass(frozen=True)
class RepoAddress:
    """Canonical host/owner/name triple parsed from a repository identifier."""

    host: str
    owner: str
    name: str

    def __post_init__(self) -> None:
        for part in (self.host, self.owner, self.name):
            if (
                part in ("", ".", "..")
                or "/" in part
                or "\\" in part
                or any(ch.isspace() for ch in part)
            ):
                raise ParseError(f"{self.host}/{self.owner}/{self.name}", "invalid path segment")

    @property
    def ssh_url(self) -> str:
        return f"git@{self.host}:{self.owner}/{self.name}.git"

    @property
    def https_url(self) -> str:
        return f"https://{self.host}/{self.owner}/{self.name}.git"

    @property
    def local_path(self) -> str:
        return f"{self.host}/{self.owner}/{self.name}"

    def clone_url(self, method: CloneMethod) -> str:
        if method is CloneMethod.HTTPS:
            return self.https_url
        return self.ssh_url


@dataclass(frozen=True)
class CanonicalLayout:
    """Filesystem locations for a bare clone and its worktrees."""

    project_dir: Path
    bare_dir: Path
    git_link_path: Path
    git_link_content: str


@dataclass(frozen=True)
class Settings:
    """Global settings loaded from the user's config file."""

    root: Path
    clone_method: CloneMethod = CloneMethod.SSH
    suffix: str | None = None
    base_branch: str | None = None
    post_clone_commands: str = ""


@dataclass(frozen=True)
class RepoSettings:
    """Per-repository overrides read from bw.toml at the repository root."""

    base_branch: str | None = None
    post_add_commands: str = ""


@dataclass(frozen=True)
class WorktreeEntry:
    """Represents a single worktree registered with git."""

    path: Path
    branch: str | None
    is_main: bool = False
    is_bare: bool = False
    is_locked: bool = False

    @property
    def name(self) -> str:
        return self.path.name

    @property
    def status(self) -> str:
        if self.is_bare:
            return "bare"
        if self.is_locked:
            return "locked"
        return "active"


@dataclass(frozen=True)
class ReconcileResult:
    live: list[WorktreeEntry] = field(default_factory=list)
    pruned: list[WorktreeEntry] = field(default_factory=list)


@dataclass(frozen=True)
class HookResult:
    returncode: int

    @property
    def ok(self) -> bool:
        return self.returncode == 0


@dataclass(frozen=True)
class AddResult:
    entry: WorktreeEntry
    created_branch: bool
    base_branch: str | None
    hook_error: HookError | None = None


@dataclass(frozen=True)
class CloneResult:
    address: RepoAddress
    clone_url: str
    layout: CanonicalLayout
    hook_error: HookError | None = None


__all__ = [
    "CloneMethod",
    "RepoAddress",
    "CanonicalLayout",
    "Settings",
    "RepoSettings",
    "WorktreeEntry",
    "ReconcileResult",
    "HookResult",
    "AddResult",
    "CloneResult",
]
