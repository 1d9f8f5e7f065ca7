"""Search filtering over the worktree list."""

from typing import List

from git_worktree_manager.models.worktree import Worktree


def matches(worktree: Worktree, term: str) -> bool:
    """Return True if ``term`` (lower-cased) occurs in the branch, subject or path."""
    return (
        term in worktree.branch.lower()
        or term in worktree.last_commit.message.lower()
        or term in worktree.path.lower()
    )


def filter_worktrees(worktrees: List[Worktree], term: str) -> List[Worktree]:
    """
    Filter worktrees by a case-insensitive substring.

    Args:
        worktrees: Worktrees in display order
        term: Search text; empty means no filtering

    Returns:
        The input list itself for an empty term, otherwise the matching
        worktrees in their original order
    """
    if not term:
        return worktrees

    term = term.lower()
    return [wt for wt in worktrees if matches(wt, term)]
