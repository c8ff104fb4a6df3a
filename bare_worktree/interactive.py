"""Interactive pickers built on fzf and InquirerPy."""

from __future__ import annotations

import shutil
import subprocess
import sys
from typing import Sequence

from InquirerPy import inquirer

from .backend import Picker
from .exceptions import UserAbort

# fzf exits 1 when nothing matched and 130 when the user pressed Esc/Ctrl-C.
_FZF_NO_SELECTION = {1, 130}


def _ensure_tty() -> None:
    if not sys.stdin.isatty():
        raise UserAbort(
            "Interactive mode requires a TTY. Provide the missing arguments to run non-interactively."
        )


class FzfPicker:
    def __init__(self, binary: str = "fzf"):
        self.binary = binary

    def choose(self, options: Sequence[str], *, prompt: str = "") -> str | None:
        if not options:
            return None
        command = [self.binary]
        if prompt:
            command.extend(["--prompt", f"{prompt}> "])
        try:
            result = subprocess.run(
                command,
                input="\n".join(options),
                text=True,
                stdout=subprocess.PIPE,
                check=False,
            )
        except OSError as exc:
            raise UserAbort(f"Failed to start {self.binary}: {exc}") from exc
        if result.returncode in _FZF_NO_SELECTION:
            return None
        if result.returncode != 0:
            raise UserAbort(f"{self.binary} exited with status {result.returncode}")
        selected = result.stdout.strip()
        return selected or None


class InquirerPicker:
    def choose(self, options: Sequence[str], *, prompt: str = "") -> str | None:
        if not options:
            return None
        _ensure_tty()
        try:
            selection = inquirer.fuzzy(
                message=prompt or "Select",
                choices=list(options),
                mandatory=False,
            ).execute()
        except KeyboardInterrupt:
            return None
        return str(selection) if selection else None


def default_picker() -> Picker:
    """Use fzf when it is on PATH, InquirerPy otherwise."""

    if shutil.which("fzf"):
        return FzfPicker()
    return InquirerPicker()


__all__ = ["FzfPicker", "InquirerPicker", "default_picker"]
