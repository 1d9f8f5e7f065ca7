"""Shell resolution and the terminal handoff into a worktree."""

import os
import subprocess
from typing import Optional

from rich.console import Console

from git_worktree_manager.config import Config, DEFAULT_SHELL
from git_worktree_manager.exceptions import ShellLaunchError
from git_worktree_manager.logging_config import get_logger

logger = get_logger(__name__)


def resolve_shell(config: Optional[Config] = None) -> str:
    """Pick the shell to start: configured, then $SHELL, then /bin/bash."""
    if config is not None and config.shell:
        return config.shell
    shell = os.environ.get("SHELL")
    if shell:
        return shell
    return DEFAULT_SHELL


def spawn_shell(shell: str, path: str, console: Optional[Console] = None) -> int:
    """Run ``shell`` interactively inside ``path`` and wait for it to exit.

    The child inherits stdin, stdout and stderr, so call this only after
    the TUI has released the terminal.

    Returns:
        The shell's exit status

    Raises:
        ShellLaunchError: if the shell could not be started
    """
    console = console or Console()
    console.print(f"\nSwitching to {path}...", style="dim", markup=False)
    logger.info(f"Starting {shell} in {path}")

    try:
        completed = subprocess.run([shell], cwd=path, check=False)
    except OSError as e:
        logger.error(f"Could not start {shell} in {path}: {e}")
        raise ShellLaunchError(shell, path, str(e)) from e

    logger.info(f"{shell} exited with status {completed.returncode}")
    return completed.returncode
