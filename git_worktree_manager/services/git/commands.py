"""Thin wrapper around GitPython's command runner."""

import os
from dataclasses import dataclass

import git

from git_worktree_manager.exceptions import GitOperationError
from git_worktree_manager.logging_config import get_logger

logger = get_logger(__name__)


@dataclass
class GitResult:
    """Exit status and output of one git invocation."""

    status: int
    stdout: str
    stderr: str

    @property
    def ok(self) -> bool:
        return self.status == 0

    @property
    def output(self) -> str:
        """Combined stdout and stderr, as a user would see it in a terminal."""
        return "\n".join(part for part in (self.stdout, self.stderr) if part)


def run_git(working_dir: str, *args: str) -> GitResult:
    """Run ``git <args>`` in ``working_dir`` without raising on a non-zero exit.

    Raises:
        GitOperationError: if git itself could not be started (missing binary
            or missing working directory)
    """
    # GitPython silently falls back to the process cwd for a missing directory
    if not os.path.isdir(working_dir):
        raise GitOperationError(
            args[0] if args else "git",
            message=f"could not run git in {working_dir}: no such directory",
        )

    try:
        status, stdout, stderr = git.Git(working_dir).execute(
            ["git", *args],
            with_extended_output=True,
            with_exceptions=False,
        )
    except git.exc.GitCommandNotFound as e:
        raise GitOperationError(
            args[0] if args else "git",
            message=f"could not run git in {working_dir}: {e}",
        ) from e

    logger.debug(f"git {' '.join(args)} (in {working_dir}) -> {status}")
    return GitResult(status=status, stdout=stdout or "", stderr=stderr or "")
