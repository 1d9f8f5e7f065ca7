"""Worktree listing service for git-worktree-manager."""

import os
from datetime import datetime
from typing import Optional

from git_worktree_manager.exceptions import GitOperationError, NotARepositoryError
from git_worktree_manager.models.worktree import CommitInfo, Worktree
from git_worktree_manager.services.git.commands import run_git
from git_worktree_manager.logging_config import get_logger

logger = get_logger(__name__)

COMMIT_FIELD_SEPARATOR = "\x1f"
COMMIT_LOG_FORMAT = "--pretty=format:%H%x1f%ai%x1f%an%x1f%s"
COMMIT_DATE_FORMAT = "%Y-%m-%d %H:%M:%S %z"
SHORT_HASH_LENGTH = 7


def get_repo_root(path: Optional[str] = None) -> str:
    """Return the top-level directory of the repository containing ``path``.

    Raises:
        NotARepositoryError: if ``path`` is not inside a git work tree
    """
    path = path or os.getcwd()
    try:
        result = run_git(path, "rev-parse", "--show-toplevel")
    except GitOperationError as e:
        raise NotARepositoryError(path) from e

    root = result.stdout.strip()
    if not result.ok or not root:
        logger.debug(f"rev-parse failed in {path}: {result.output}")
        raise NotARepositoryError(path)
    return root


def parse_worktree_porcelain(output: str) -> list[Worktree]:
    """Parse ``git worktree list --porcelain`` output.

    Format:
        worktree /path/to/worktree
        HEAD commit_sha
        branch refs/heads/branch-name   (or "detached")
        (blank line between worktrees)

    A record ends at a blank line or at the next ``worktree`` line. The first
    record is the main working tree.
    """
    worktrees: list[Worktree] = []
    current: Optional[Worktree] = None

    def flush():
        if current is not None and current.path:
            current.is_main = not worktrees
            worktrees.append(current)

    for line in output.split("\n"):
        line = line.rstrip("\r")
        if line.startswith("worktree "):
            flush()
            current = Worktree(path=line[len("worktree "):])
        elif current is None:
            continue
        elif line.startswith("HEAD "):
            current.head = line[len("HEAD "):]
        elif line.startswith("branch "):
            branch_ref = line[len("branch "):]
            if branch_ref.startswith("refs/heads/"):
                branch_ref = branch_ref[len("refs/heads/"):]
            current.branch = branch_ref
        elif not line:
            flush()
            current = None

    flush()
    return worktrees


def parse_commit_line(output: str) -> Optional[CommitInfo]:
    """Parse one log line in ``COMMIT_LOG_FORMAT``.

    Fields are hash, author date, author name and subject, separated by the
    ASCII unit separator. The subject comes last so it is taken whole. An
    unparseable date leaves ``date`` as None rather than failing.
    """
    parts = output.strip("\n").split(COMMIT_FIELD_SEPARATOR, 3)
    if len(parts) < 4:
        return None

    commit_hash, date_text, author, message = parts
    try:
        date = datetime.strptime(date_text, COMMIT_DATE_FORMAT)
    except ValueError:
        logger.debug(f"Could not parse commit date {date_text!r}")
        date = None

    return CommitInfo(
        hash=commit_hash[:SHORT_HASH_LENGTH],
        message=message,
        date=date,
        author=author,
    )


class WorktreeService:
    """Reads the worktrees of a repository. Never mutates anything."""

    def __init__(self, repo_root: str):
        """Initialize the worktree service.

        Args:
            repo_root: Top-level directory of the repository
        """
        self.repo_root = repo_root

    def list_worktrees(self, cwd: Optional[str] = None) -> list[Worktree]:
        """Get all worktrees with dirty state and last-commit metadata.

        Args:
            cwd: Directory used to flag the current worktree (defaults to the
                process working directory)

        Returns:
            Worktrees in ``git worktree list`` order

        Raises:
            GitOperationError: if the worktree listing itself fails
        """
        result = run_git(self.repo_root, "worktree", "list", "--porcelain")
        if not result.ok:
            raise GitOperationError(
                "worktree list",
                message=f"failed to list worktrees: {result.output}",
            )

        worktrees = parse_worktree_porcelain(result.stdout)

        if cwd is None:
            try:
                cwd = os.getcwd()
            except OSError:
                cwd = ""

        for worktree in worktrees:
            # Plain prefix test: /repo/feature also matches /repo/feature-2
            worktree.is_current = bool(cwd) and cwd.startswith(worktree.path)
            worktree.is_dirty = self._is_dirty(worktree.path)
            commit = self._last_commit(worktree.path)
            if commit is not None:
                worktree.last_commit = commit

        logger.debug(f"Found {len(worktrees)} worktrees")
        for wt in worktrees:
            logger.debug(f"  {wt}")
        return worktrees

    def _is_dirty(self, path: str) -> bool:
        """Return True if ``git status`` reports anything; False if it can't run."""
        try:
            result = run_git(path, "status", "--porcelain")
        except GitOperationError as e:
            logger.debug(f"Could not check status of {path}: {e}")
            return False
        if not result.ok:
            logger.debug(f"git status failed in {path}: {result.output}")
            return False
        return bool(result.stdout.strip())

    def _last_commit(self, path: str) -> Optional[CommitInfo]:
        """Return the last commit of the worktree, or None if it can't be read."""
        try:
            result = run_git(path, "log", "-1", COMMIT_LOG_FORMAT)
        except GitOperationError as e:
            logger.debug(f"Could not read last commit of {path}: {e}")
            return None
        if not result.ok or not result.stdout:
            logger.debug(f"git log failed in {path}: {result.output}")
            return None
        return parse_commit_line(result.stdout)
