"""Run user-configured hook scripts."""

from __future__ import annotations

import logging
import subprocess
from pathlib import Path

from .backend import CommandRunner
from .exceptions import HookError
from .models import HookResult

logger = logging.getLogger(__name__)


class ShellRunner:
    """Runs a hook script with ``sh -c``.

    The script is handed to the shell as a single argument and output is
    streamed straight to the terminal. No timeout is applied.
    """

    def __init__(self, shell: str = "sh"):
        self.shell = shell

    def run(self, script: str, cwd: Path) -> HookResult:
        logger.debug("Running hook in %s:\n%s", cwd, script)
        try:
            proc = subprocess.run([self.shell, "-c", script], cwd=str(cwd), check=False)
        except OSError as exc:
            raise HookError(cwd, 127, str(exc)) from exc
        return HookResult(returncode=proc.returncode)


def run_hook(runner: CommandRunner, script: str, cwd: Path, label: str) -> HookError | None:
    """Run ``script`` if it is non-empty and return the failure, if any.

    Failures are logged and returned, never raised.
    """

    if not script.strip():
        return None
    logger.info("Running %s commands in %s", label, cwd)
    try:
        result = runner.run(script, cwd)
    except HookError as exc:
        error = exc
    else:
        if result.ok:
            return None
        error = HookError(cwd, result.returncode, f"{label} commands failed")
    logger.warning("%s", error)
    return error


__all__ = ["ShellRunner", "run_hook"]
