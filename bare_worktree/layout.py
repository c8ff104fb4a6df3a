"""Filesystem layout helpers for bare clones."""

from __future__ import annotations

from pathlib import Path

from .models import CanonicalLayout, RepoAddress

BARE_DIR_NAME = ".bare"
GIT_LINK_NAME = ".git"
GIT_LINK_CONTENT = f"gitdir: {BARE_DIR_NAME}\n"


def build_layout(address: RepoAddress, root: Path, suffix: str | None = None) -> CanonicalLayout:
    """Map an address to ``root/host/owner/name[suffix]`` and its ``.bare`` store.

    Pure: nothing is created on disk.
    """

    project_dir = root / address.host / address.owner / f"{address.name}{suffix or ''}"
    return CanonicalLayout(
        project_dir=project_dir,
        bare_dir=project_dir / BARE_DIR_NAME,
        git_link_path=project_dir / GIT_LINK_NAME,
        git_link_content=GIT_LINK_CONTENT,
    )


def write_git_link(layout: CanonicalLayout) -> None:
    layout.git_link_path.write_text(layout.git_link_content, encoding="utf-8")


def ensure_directory(path: Path) -> None:
    path.mkdir(parents=True, exist_ok=True)


__all__ = ["BARE_DIR_NAME", "GIT_LINK_NAME", "build_layout", "write_git_link", "ensure_directory"]
