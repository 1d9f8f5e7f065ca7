"""Worktree mutations: create from a branch, force-remove."""

import os
from enum import Enum
from typing import Optional

from git_worktree_manager.config import Config, DEFAULT_WORKTREE_DIR
from git_worktree_manager.constants import REMOTE_NAME
from git_worktree_manager.exceptions import GitOperationError
from git_worktree_manager.services.git.commands import run_git
from git_worktree_manager.services.gitignore_service import ensure_gitignore_entry
from git_worktree_manager.logging_config import get_logger

logger = get_logger(__name__)


class BranchSource(Enum):
    """Where the branch for a new worktree comes from."""
    LOCAL = "local"
    REMOTE = "remote"
    NEW = "new"


def worktree_dir_name(branch: str) -> str:
    """Directory name for a branch's worktree (slashes become dashes)."""
    return branch.replace("/", "-")


class WorktreeOperations:
    """Creates and removes worktrees through git."""

    def __init__(self, repo_root: str):
        """Initialize the service.

        Args:
            repo_root: Top-level directory of the repository
        """
        self.repo_root = repo_root
        self.remote_name = REMOTE_NAME

    def storage_dir(self, config: Optional[Config] = None) -> str:
        """Resolve the directory new worktrees are created in."""
        worktree_dir = DEFAULT_WORKTREE_DIR
        if config is not None and config.worktree_dir:
            worktree_dir = os.path.expanduser(config.worktree_dir)

        if not os.path.isabs(worktree_dir):
            worktree_dir = os.path.join(self.repo_root, worktree_dir)
        return os.path.normpath(worktree_dir)

    def _relative_to_repo(self, path: str) -> Optional[str]:
        """Path relative to the repo root, or None if it lies outside it."""
        if not path.startswith(self.repo_root):
            return None
        rel_path = os.path.relpath(path, self.repo_root)
        if rel_path == "." or rel_path.startswith(".."):
            return None
        return rel_path

    def resolve_branch_source(self, branch: str) -> BranchSource:
        """Decide whether ``branch`` exists locally, only on the remote, or not at all."""
        if run_git(self.repo_root, "rev-parse", "--verify", branch).ok:
            return BranchSource.LOCAL

        remote = run_git(self.repo_root, "ls-remote", "--heads", self.remote_name, branch)
        if remote.ok and remote.stdout.strip():
            return BranchSource.REMOTE

        return BranchSource.NEW

    def create_worktree(self, branch: str, config: Optional[Config] = None) -> str:
        """Create a worktree for ``branch`` in the storage directory.

        Attaches to the local branch if it exists, otherwise to the remote
        branch of the same name, otherwise creates a new branch.

        Args:
            branch: Branch name
            config: User configuration (storage directory)

        Returns:
            Path of the new worktree

        Raises:
            GitOperationError: if ``git worktree add`` fails; the message
                carries git's output
            OSError: if the storage directory can't be created
        """
        worktree_dir = self.storage_dir(config)
        os.makedirs(worktree_dir, exist_ok=True)

        rel_path = self._relative_to_repo(worktree_dir)
        if rel_path is not None:
            try:
                ensure_gitignore_entry(self.repo_root, rel_path)
            except OSError as e:
                # Creation goes ahead without the ignore entry
                logger.warning(f"Could not update .gitignore: {e}")

        worktree_path = os.path.join(worktree_dir, worktree_dir_name(branch))

        source = self.resolve_branch_source(branch)
        if source is BranchSource.LOCAL:
            args = ["worktree", "add", worktree_path, branch]
        elif source is BranchSource.REMOTE:
            args = [
                "worktree", "add", "--track", "-b", branch,
                worktree_path, f"{self.remote_name}/{branch}",
            ]
        else:
            args = ["worktree", "add", "-b", branch, worktree_path]

        logger.debug(f"Creating worktree for {branch} ({source.value}) at {worktree_path}")
        result = run_git(self.repo_root, *args)
        if not result.ok:
            logger.error(f"Failed to create worktree for {branch}: {result.output}")
            raise GitOperationError(
                "worktree add",
                message=f"failed to create worktree: {result.output}",
            )

        logger.info(f"Created worktree for {branch} at {worktree_path}")
        return worktree_path

    def delete_worktree(self, path: str) -> None:
        """Force-remove the worktree at ``path``.

        The caller is responsible for never passing the main worktree.

        Raises:
            GitOperationError: if ``git worktree remove`` fails
        """
        result = run_git(self.repo_root, "worktree", "remove", path, "--force")
        if not result.ok:
            logger.error(f"Failed to remove worktree at {path}: {result.output}")
            raise GitOperationError(
                "worktree remove",
                message=f"failed to remove worktree: {result.output}",
            )
        logger.info(f"Removed worktree at {path}")
