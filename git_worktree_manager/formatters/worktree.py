"""Worktree row formatting utilities."""

from git_worktree_manager.constants import (
    MAX_COMMIT_MESSAGE_LENGTH,
    SYMBOL_CLEAN,
    SYMBOL_CURRENT_WORKTREE,
    SYMBOL_DIRTY,
)
from git_worktree_manager.models.worktree import Worktree


def format_branch_label(worktree: Worktree) -> str:
    """
    Format the branch column, marking the worktree the shell is in.

    Args:
        worktree: Worktree to describe

    Returns:
        Branch name (or "(detached)"), prefixed with "● " if current
    """
    label = worktree.display_branch
    return SYMBOL_CURRENT_WORKTREE + label if worktree.is_current else label


def format_dirty_indicator(is_dirty: bool) -> str:
    """Return the dirty/clean glyph."""
    return SYMBOL_DIRTY if is_dirty else SYMBOL_CLEAN


def truncate_message(message: str, limit: int = MAX_COMMIT_MESSAGE_LENGTH) -> str:
    """Cut a commit subject to ``limit`` characters, adding an ellipsis."""
    if len(message) > limit:
        return message[:limit] + "..."
    return message
