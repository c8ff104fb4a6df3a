"""Typer CLI entrypoint for bare-worktree."""

from __future__ import annotations

import json
import logging
from contextlib import contextmanager
from typing import Iterator, Optional

import typer
from rich.console import Console
from rich.table import Table

from . import __version__
from .clone import get_repository
from .config import ensure_config_file, load_settings
from .exceptions import MissingConfigError, ValidationError, WorktreeError
from .git import GitBackend
from .hooks import ShellRunner
from .interactive import default_picker
from .models import CloneMethod, Settings, WorktreeEntry
from .worktrees import WorktreeService

app = typer.Typer(
    add_completion=False,
    no_args_is_help=True,
    help="A worktree management tool based on bare clones.",
)
console = Console(stderr=True, soft_wrap=True)


def configure_logging(verbose: bool) -> None:
    level = logging.DEBUG if verbose else logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"bw {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging."),
    version: bool = typer.Option(
        False,
        "--version",
        "-V",
        callback=_version_callback,
        is_eager=True,
        help="Show the bw version and exit.",
    ),
) -> None:
    _ = version  # handled via callback
    configure_logging(verbose)


@app.command(help="Clone a repository as bare with a worktree-friendly layout.")
def get(
    repo: str = typer.Argument(
        ..., help="Repository URL or path (e.g. github.com/user/repo, git@github.com:user/repo.git)."
    ),
    ssh: bool = typer.Option(False, "--ssh", help="Clone over SSH."),
    https: bool = typer.Option(False, "--https", help="Clone over HTTPS."),
    suffix: Optional[str] = typer.Option(
        None, "--suffix", "-s", help="Suffix for the directory name (e.g. .work -> repo.work)."
    ),
) -> None:
    with _errors_to_exit():
        method = _clone_method(ssh, https)
        settings = load_settings()
        result = get_repository(
            repo,
            settings,
            GitBackend(),
            ShellRunner(),
            clone_method=method,
            suffix=suffix,
        )
    address = result.address
    console.print(f"Repository: {address.host}/{address.owner}/{address.name}")
    console.print(f"Clone URL: {result.clone_url}")
    if result.hook_error:
        console.print(f"[yellow]Warning:[/yellow] {result.hook_error}")
    console.print(f"[green]Done! Repository cloned to: {result.layout.project_dir}[/green]")


@app.command(help="Open the config file in $EDITOR, creating it first if needed.")
def config() -> None:
    with _errors_to_exit():
        path = ensure_config_file()
    console.print(f"Config file: {path}")
    typer.edit(filename=str(path))


@app.command(help="Add a worktree for a branch, creating the branch if it does not exist.")
def add(
    branch: Optional[str] = typer.Argument(
        None, help="Branch name (e.g. feature/000). Defaults to wip/MMDD-HHMMSS."
    ),
    base: Optional[str] = typer.Option(
        None, "--base", "-b", help="Base branch for a new branch (overrides bw.toml)."
    ),
) -> None:
    with _errors_to_exit():
        service = _build_service()
        console.print(f"Repository root: {service.root}")
        result = service.add_worktree(branch, base)
    if result.hook_error:
        console.print(f"[yellow]Warning:[/yellow] {result.hook_error}")
    console.print(f"[green]Done! Worktree created at: {result.entry.path}[/green]")


@app.command(help="List worktrees and print the one picked with fzf.")
def ls(
    plain: bool = typer.Option(False, "--plain", help="Print every worktree path without a picker."),
    table: bool = typer.Option(False, "--table", help="Show a table instead of a picker."),
    json_: bool = typer.Option(False, "--json", help="Output JSON for scripting."),
) -> None:
    with _errors_to_exit():
        service = _build_service()
        if plain or table or json_:
            entries = service.list_worktrees()
            selected = None
        else:
            entries = []
            selected = service.select_worktree(default_picker())
    if json_:
        typer.echo(json.dumps([_entry_payload(entry) for entry in entries], indent=2))
    elif table:
        _render_table(entries)
    elif plain:
        for entry in entries:
            typer.echo(str(entry.path))
    elif selected is not None:
        typer.echo(str(selected.path))


@app.command(help="Remove a worktree by directory name, branch name or path.")
def rm(
    name: Optional[str] = typer.Argument(
        None, help="Worktree directory or branch name. If omitted, a picker is shown."
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Force removal even if the worktree is dirty."),
) -> None:
    with _errors_to_exit():
        service = _build_service()
        target: str | WorktreeEntry | None = name
        if target is None:
            target = service.select_removable(default_picker())
            if target is None:
                console.print("Selection cancelled.")
                return
        removed = service.remove_worktree(target, force=force)
    console.print(f"[green]Done! Worktree removed: {removed.path}[/green]")


app.command(name="list", hidden=True)(ls)
app.command(name="remove", hidden=True)(rm)


def _build_service() -> WorktreeService:
    return WorktreeService.discover(GitBackend(), ShellRunner(), settings=_optional_settings())


def _optional_settings() -> Settings | None:
    try:
        return load_settings()
    except MissingConfigError:
        return None


def _clone_method(ssh: bool, https: bool) -> CloneMethod | None:
    if ssh and https:
        raise ValidationError("Cannot specify both --ssh and --https.")
    if ssh:
        return CloneMethod.SSH
    if https:
        return CloneMethod.HTTPS
    return None


def _entry_payload(entry: WorktreeEntry) -> dict[str, str | None]:
    return {
        "name": entry.name,
        "branch": entry.branch,
        "path": str(entry.path),
        "status": entry.status,
    }


def _render_table(entries: list[WorktreeEntry]) -> None:
    if not entries:
        console.print("No worktrees found.")
        return
    table = Table(show_header=True, header_style="bold")
    table.add_column("Name", no_wrap=True)
    table.add_column("Branch", no_wrap=True)
    table.add_column("Status", no_wrap=True)
    table.add_column("Path")
    for entry in entries:
        table.add_row(entry.name, entry.branch or "(detached)", entry.status, str(entry.path))
    Console().print(table)


@contextmanager
def _errors_to_exit() -> Iterator[None]:
    try:
        yield
    except WorktreeError as err:
        _fail(str(err))


def _fail(message: str, code: int = 1) -> None:
    typer.secho(f"Error: {message}", err=True, fg=typer.colors.RED)
    raise typer.Exit(code)


if __name__ == "__main__":
    app()
