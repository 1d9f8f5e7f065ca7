"""Formatting utilities for git-worktree-manager.

- date: relative commit times
- worktree: row labels and glyphs
"""

from .date import format_relative_time
from .worktree import format_branch_label, format_dirty_indicator, truncate_message

__all__ = [
    "format_relative_time",
    "format_branch_label",
    "format_dirty_indicator",
    "truncate_message",
]
