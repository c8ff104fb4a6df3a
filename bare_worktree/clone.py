"""Bare-clone a repository into its canonical location."""

from __future__ import annotations

import logging
import shutil

from .address import parse_address
from .backend import CommandRunner, VcsBackend
from .exceptions import AlreadyExistsError, BackendError
from .hooks import run_hook
from .layout import build_layout, ensure_directory, write_git_link
from .models import CloneMethod, CloneResult, Settings

logger = logging.getLogger(__name__)

ENVRC_NAME = ".envrc"


def get_repository(
    identifier: str,
    settings: Settings,
    backend: VcsBackend,
    runner: CommandRunner,
    *,
    clone_method: CloneMethod | None = None,
    suffix: str | None = None,
) -> CloneResult:
    """Clone ``identifier`` to ``<root>/<host>/<owner>/<name>[suffix]/.bare``.

    ``clone_method`` and ``suffix`` override the configured values. After
    the clone the project directory gets a ``.git`` file pointing at
    ``.bare``, the post-clone hook runs inside it, and an empty ``.envrc``
    is created. A failed hook is returned on the result, not raised. A
    failed clone removes the project directory before re-raising.
    """

    address = parse_address(identifier)
    method = clone_method or settings.clone_method
    url = address.clone_url(method)
    layout = build_layout(address, settings.root, suffix if suffix is not None else settings.suffix)
    if layout.project_dir.exists():
        raise AlreadyExistsError(layout.project_dir, "Repository already cloned.")

    ensure_directory(layout.project_dir)
    logger.info("Cloning %s into %s", url, layout.bare_dir)
    try:
        backend.clone_bare(url, layout.bare_dir)
    except BackendError:
        logger.debug("Clone failed; removing %s", layout.project_dir)
        shutil.rmtree(layout.project_dir, ignore_errors=True)
        raise
    write_git_link(layout)

    hook_error = run_hook(runner, settings.post_clone_commands, layout.project_dir, "post-clone")
    (layout.project_dir / ENVRC_NAME).touch()
    return CloneResult(address=address, clone_url=url, layout=layout, hook_error=hook_error)


__all__ = ["get_repository"]
