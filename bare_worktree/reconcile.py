"""Bring git's worktree registry in line with the filesystem."""

from __future__ import annotations

import logging
from pathlib import Path

from .backend import VcsBackend
from .models import ReconcileResult

logger = logging.getLogger(__name__)


def reconcile(root: Path, backend: VcsBackend) -> ReconcileResult:
    """Prune registrations whose directory is gone and return what remains.

    Entries that exist on disk are always kept. Missing entries are pruned
    unless git has them locked, in which case they stay in ``live``. Prune
    is only requested when something is stale, so a repeated call with no
    filesystem changes does nothing.
    """

    live = []
    stale = []
    for entry in backend.list_worktrees(root):
        if entry.is_bare or entry.path.exists() or entry.is_locked:
            live.append(entry)
        else:
            stale.append(entry)
    if stale:
        logger.info(
            "Pruning stale worktree entries: %s",
            ", ".join(str(entry.path) for entry in stale),
        )
        backend.prune_worktrees(root)
    return ReconcileResult(live=live, pruned=stale)


__all__ = ["reconcile"]
