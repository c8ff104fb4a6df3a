"""Custom error hierarchy for bare-worktree."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence


class WorktreeError(RuntimeError):
    """Base error for the CLI."""


class ParseError(WorktreeError):
    """Raised when a repository identifier has no recognized form."""

    def __init__(self, value: str, reason: str | None = None):
        self.input = value
        message = f"Unrecognized repository identifier: {value!r}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class ConfigError(WorktreeError):
    """Raised when a configuration file is invalid."""


class MissingConfigError(ConfigError):
    """Raised when the global configuration file does not exist."""


class NotFoundError(WorktreeError):
    """Raised when a repository root or worktree cannot be found."""


class NoBareStoreError(NotFoundError):
    def __init__(self, start: Path):
        self.start = start
        super().__init__(f"No .bare directory found in {start} or any parent directory.")


class WorktreeNotFoundError(NotFoundError):
    def __init__(self, selector: str):
        self.selector = selector
        super().__init__(f"Worktree not found: {selector}")


class AlreadyExistsError(WorktreeError):
    """Raised when a target path is taken by another worktree or directory."""

    def __init__(self, path: Path, detail: str | None = None):
        self.path = path
        message = f"Already exists: {path}"
        if detail:
            message = f"{message}. {detail}"
        super().__init__(message)


class AmbiguousSelectorError(WorktreeError):
    """Raised when a removal selector matches more than one worktree."""

    def __init__(self, selector: str, candidates: Sequence[Path]):
        self.selector = selector
        self.candidates = list(candidates)
        listing = "\n".join(f"  {path}" for path in self.candidates)
        super().__init__(f"Selector {selector!r} matches several worktrees:\n{listing}")


class BackendError(WorktreeError):
    """Raised when a VCS backend operation fails."""

    def __init__(self, operation: str, detail: str | None = None):
        self.operation = operation
        message = f"{operation} failed"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class GitCommandError(BackendError):
    """Raised when an underlying git command fails."""

    def __init__(
        self,
        command: list[str],
        returncode: int,
        *,
        stdout: str | None = None,
        stderr: str | None = None,
    ):
        self.command = command
        self.returncode = returncode
        self.stdout = stdout or ""
        self.stderr = stderr or ""
        detail = f"exit {returncode}"
        output = "\n".join(
            section
            for section in (self.stdout.strip(), self.stderr.strip())
            if section
        )
        if output:
            detail = f"{detail}\n{output}"
        super().__init__(" ".join(command), detail)


class HookError(WorktreeError):
    """Reported when a post-clone or post-add hook exits non-zero."""

    def __init__(self, cwd: Path, returncode: int, detail: str | None = None):
        self.cwd = cwd
        self.returncode = returncode
        message = f"Hook in {cwd} exited with status {returncode}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)


class ValidationError(WorktreeError):
    """Raised when user input fails validation."""


class UserAbort(WorktreeError):
    """Raised when the user cancels an interactive flow."""


__all__ = [
    "WorktreeError",
    "ParseError",
    "ConfigError",
    "MissingConfigError",
    "NotFoundError",
    "NoBareStoreError",
    "WorktreeNotFoundError",
    "AlreadyExistsError",
    "AmbiguousSelectorError",
    "BackendError",
    "GitCommandError",
    "HookError",
    "ValidationError",
    "UserAbort",
]
