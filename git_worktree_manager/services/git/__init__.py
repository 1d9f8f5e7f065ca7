"""Git-related services for git-worktree-manager."""

from .commands import GitResult, run_git
from .operations import BranchSource, WorktreeOperations
from .worktrees import WorktreeService, get_repo_root

__all__ = [
    "GitResult",
    "run_git",
    "BranchSource",
    "WorktreeOperations",
    "WorktreeService",
    "get_repo_root",
]
