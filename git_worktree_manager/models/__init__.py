"""Data models for git-worktree-manager."""

from .worktree import CommitInfo, Worktree, DETACHED_LABEL
from .state import (
    ConfirmDelete,
    CreateBranch,
    InputMode,
    Normal,
    Quit,
    Search,
    SessionExit,
    SessionState,
    StatusMessage,
    SwitchWorktree,
)

__all__ = [
    "CommitInfo",
    "Worktree",
    "DETACHED_LABEL",
    "ConfirmDelete",
    "CreateBranch",
    "InputMode",
    "Normal",
    "Quit",
    "Search",
    "SessionExit",
    "SessionState",
    "StatusMessage",
    "SwitchWorktree",
]
