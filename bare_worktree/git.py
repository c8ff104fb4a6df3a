"""Git CLI implementation of the VCS backend."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path
from typing import Sequence

from .exceptions import BackendError, GitCommandError
from .models import WorktreeEntry

logger = logging.getLogger(__name__)

ORIGIN_FETCH_REFSPEC = "+refs/heads/*:refs/remotes/origin/*"


def run_git(
    args: Sequence[str],
    *,
    cwd: Path | None = None,
    check: bool = True,
) -> subprocess.CompletedProcess[str]:
    command = ["git", *args]
    logger.debug("Running: %s (cwd=%s)", " ".join(command), cwd or ".")
    try:
        result = subprocess.run(
            command,
            cwd=str(cwd) if cwd else None,
            text=True,
            capture_output=True,
        )
    except OSError as exc:
        raise BackendError(" ".join(command), str(exc)) from exc
    if check and result.returncode != 0:
        raise GitCommandError(command, result.returncode, stdout=result.stdout, stderr=result.stderr)
    return result


class GitBackend:
    """Runs git with the repository root as working directory.

    The root's ``.git`` file points git at the ``.bare`` store.
    """

    def clone_bare(self, url: str, dest: Path) -> None:
        run_git(["clone", "--bare", url, str(dest)], cwd=dest.parent)
        # git clone --bare leaves origin without a fetch refspec.
        run_git(
            ["--git-dir", str(dest), "config", "remote.origin.fetch", ORIGIN_FETCH_REFSPEC],
            cwd=dest.parent,
        )

    def list_branches(self, root: Path) -> list[str]:
        output = run_git(["branch", "--format=%(refname:short)"], cwd=root)
        return [line.strip() for line in output.stdout.splitlines() if line.strip()]

    def branch_exists(self, root: Path, name: str) -> bool:
        result = run_git(
            ["show-ref", "--verify", "--quiet", f"refs/heads/{name}"],
            cwd=root,
            check=False,
        )
        return result.returncode == 0

    def list_worktrees(self, root: Path) -> list[WorktreeEntry]:
        output = run_git(["worktree", "list", "--porcelain"], cwd=root)
        return parse_worktree_porcelain(output.stdout)

    def add_worktree(
        self,
        root: Path,
        path: Path,
        branch: str,
        *,
        new_branch: bool,
        base: str | None = None,
    ) -> None:
        if new_branch:
            args = ["worktree", "add", "-b", branch, str(path)]
            if base:
                args.append(base)
        else:
            args = ["worktree", "add", str(path), branch]
        run_git(args, cwd=root)

    def remove_worktree(self, root: Path, path: Path, *, force: bool = False) -> None:
        args = ["worktree", "remove"]
        if force:
            args.append("--force")
        args.append(str(path))
        run_git(args, cwd=root)

    def prune_worktrees(self, root: Path) -> None:
        run_git(["worktree", "prune"], cwd=root)


def parse_worktree_porcelain(text: str) -> list[WorktreeEntry]:
    entries: list[WorktreeEntry] = []
    current: dict[str, str | bool] = {}
    for line in text.splitlines() + [""]:
        if not line.strip():
            if current.get("worktree"):
                branch_value = current.get("branch")
                entries.append(
                    WorktreeEntry(
                        path=Path(str(current["worktree"])),
                        branch=_sanitize_branch(str(branch_value)) if branch_value else None,
                        is_main=not entries,
                        is_bare=bool(current.get("bare")),
                        is_locked=bool(current.get("locked")),
                    )
                )
            current = {}
            continue
        key, _, value = line.partition(" ")
        if key in {"bare", "locked", "prunable", "detached"}:
            current[key] = True
        else:
            current[key] = value.strip()
    return entries


def _sanitize_branch(value: str) -> str:
    stripped = value.strip()
    prefix = "refs/heads/"
    if stripped.startswith(prefix):
        return stripped[len(prefix) :]
    return stripped


__all__ = ["GitBackend", "run_git", "parse_worktree_porcelain"]
