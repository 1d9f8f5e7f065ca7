"""Worktree data models."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

DETACHED_LABEL = "(detached)"


@dataclass
class CommitInfo:
    """Summary of the last commit in a worktree."""

    hash: str = ""  # Abbreviated to 7 characters
    message: str = ""  # Subject line
    date: Optional[datetime] = None  # None = unknown or unparseable
    author: str = ""


@dataclass
class Worktree:
    """A checked-out working copy of the repository."""

    path: str
    branch: str = ""  # Empty = detached HEAD
    head: str = ""
    is_dirty: bool = False
    last_commit: CommitInfo = field(default_factory=CommitInfo)
    is_current: bool = False  # Process cwd lies inside this worktree
    is_main: bool = False  # First entry of `git worktree list`

    @property
    def display_branch(self) -> str:
        """Branch name, or a placeholder for a detached HEAD."""
        return self.branch or DETACHED_LABEL

    def __str__(self) -> str:
        """String representation of worktree."""
        main_marker = " (main)" if self.is_main else ""
        status = "dirty" if self.is_dirty else "clean"
        return f"{self.display_branch} @ {self.path}{main_marker} [{status}]"
