"""Core session logic for git-worktree-manager."""

from .session import WorktreeSession

__all__ = ["WorktreeSession"]
