"""Locate the repository root that holds the .bare store."""

from __future__ import annotations

import logging
from pathlib import Path

from .exceptions import NoBareStoreError
from .layout import BARE_DIR_NAME

logger = logging.getLogger(__name__)


def locate_repo_root(start: Path | None = None) -> Path:
    """Walk up from ``start`` (default: cwd) to the directory containing ``.bare``.

    The start path is resolved once, so the ascent visits at most one
    directory per path component even when symlinks form a cycle.
    """

    origin = (start or Path.cwd()).expanduser().resolve()
    for candidate in (origin, *origin.parents):
        if (candidate / BARE_DIR_NAME).is_dir():
            logger.debug("Repository root: %s", candidate)
            return candidate
    raise NoBareStoreError(origin)


__all__ = ["locate_repo_root"]
