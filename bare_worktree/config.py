"""Load global and per-repository configuration."""

from __future__ import annotations

import os
import tomllib
from pathlib import Path
from typing import Any, Mapping

from .exceptions import ConfigError, MissingConfigError
from .models import CloneMethod, RepoSettings, Settings

APP_NAME = "bw"
REPO_CONFIG_NAME = "bw.toml"

DEFAULT_POST_CLONE_COMMANDS = """\
git fetch origin
HEAD_BRANCH=$(git symbolic-ref refs/remotes/origin/HEAD 2>/dev/null | sed 's@^refs/remotes/origin/@@'); [ -n "$HEAD_BRANCH" ] && git worktree add "$HEAD_BRANCH" "$HEAD_BRANCH"
"""

DEFAULT_CONFIG_CONTENT = f"""\
# bw configuration file

# Repository root directory (required)
root = "~/repos"

# Default clone method: "ssh" or "https"
clone_method = "ssh"

# Base branch for new worktrees when bw.toml does not set one
# base_branch = "main"

# Commands run in the project directory after the bare clone
post_clone_commands = '''
{DEFAULT_POST_CLONE_COMMANDS}'''

# Optional: suffix for cloned directory (e.g., ".work" -> repo.work)
# suffix = ".work"
"""


def config_path() -> Path:
    override = os.environ.get("BW_CONFIG")
    if override:
        return Path(override).expanduser()
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = Path(xdg).expanduser() if xdg else Path.home() / ".config"
    return base / APP_NAME / "config.toml"


def load_settings(path: Path | None = None) -> Settings:
    path = path or config_path()
    if not path.exists():
        raise MissingConfigError(f"Config file not found: {path}\nRun 'bw config' to create it.")
    data = _read_toml(path)
    root = os.environ.get("BW_ROOT") or _optional_str(data, "root", path)
    if not root:
        raise ConfigError(f"'root' is required in {path}")
    method = data.get("clone_method", CloneMethod.SSH.value)
    try:
        clone_method = CloneMethod(method)
    except ValueError as exc:
        raise ConfigError(f"Invalid clone_method {method!r} in {path}; use 'ssh' or 'https'.") from exc
    post_clone = _optional_str(data, "post_clone_commands", path)
    if post_clone is None:
        post_clone = DEFAULT_POST_CLONE_COMMANDS
    return Settings(
        root=Path(root).expanduser(),
        clone_method=clone_method,
        suffix=_optional_str(data, "suffix", path),
        base_branch=_optional_str(data, "base_branch", path),
        post_clone_commands=post_clone,
    )


def load_repo_settings(repo_root: Path) -> RepoSettings:
    path = repo_root / REPO_CONFIG_NAME
    if not path.exists():
        return RepoSettings()
    data = _read_toml(path)
    return RepoSettings(
        base_branch=_optional_str(data, "base_branch", path),
        post_add_commands=_optional_str(data, "post_add_commands", path) or "",
    )


def ensure_config_file(path: Path | None = None) -> Path:
    path = path or config_path()
    if not path.exists():
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(DEFAULT_CONFIG_CONTENT, encoding="utf-8")
    return path


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with path.open("rb") as fh:
            return tomllib.load(fh)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse {path}: {exc}") from exc


def _optional_str(data: Mapping[str, Any], key: str, path: Path) -> str | None:
    value = data.get(key)
    if value is None:
        return None
    if not isinstance(value, str):
        raise ConfigError(f"'{key}' in {path} must be a string.")
    return value


__all__ = [
    "REPO_CONFIG_NAME",
    "DEFAULT_CONFIG_CONTENT",
    "config_path",
    "load_settings",
    "load_repo_settings",
    "ensure_config_file",
]
