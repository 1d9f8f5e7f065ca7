"""Session state models for the interactive picker."""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional, Union

from git_worktree_manager.models.worktree import Worktree


@dataclass(frozen=True)
class Normal:
    """Browsing the list."""


@dataclass(frozen=True)
class Search:
    """Typing a search term; the list is filtered on every keystroke."""

    buffer: str = ""


@dataclass(frozen=True)
class CreateBranch:
    """Typing the name of the branch to create a worktree for."""

    buffer: str = ""


@dataclass(frozen=True)
class ConfirmDelete:
    """Waiting for y/n before removing ``target``."""

    target: Worktree


InputMode = Union[Normal, Search, CreateBranch, ConfirmDelete]


@dataclass(frozen=True)
class StatusMessage:
    """A transient message that disappears once ``expires_at`` passes."""

    text: str
    expires_at: datetime

    @classmethod
    def for_seconds(cls, text: str, seconds: float, now: Optional[datetime] = None) -> "StatusMessage":
        now = now or datetime.now()
        return cls(text=text, expires_at=now + timedelta(seconds=seconds))

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at


@dataclass(frozen=True)
class Quit:
    """The user asked to leave."""


@dataclass(frozen=True)
class SwitchWorktree:
    """Hand the terminal to ``shell`` running inside ``path``."""

    path: str
    shell: str
    branch: str = ""


SessionExit = Union[Quit, SwitchWorktree]


@dataclass
class SessionState:
    """The single mutable model behind the picker."""

    repo_root: str = ""
    worktrees: List[Worktree] = field(default_factory=list)
    filtered: List[Worktree] = field(default_factory=list)
    cursor: int = 0
    scroll_offset: int = 0
    width: int = 0
    height: int = 0
    mode: InputMode = field(default_factory=Normal)
    search_term: str = ""  # Committed term, kept after leaving search mode
    status: Optional[StatusMessage] = None
    error: Optional[str] = None  # Recoverable, shown alongside the list
    fatal_error: Optional[str] = None  # Replaces the whole view
    finished: bool = False

    @property
    def active_search_term(self) -> str:
        """The term currently driving the filter."""
        if isinstance(self.mode, Search):
            return self.mode.buffer
        return self.search_term

    @property
    def selected(self) -> Optional[Worktree]:
        """The highlighted worktree, if any."""
        if 0 <= self.cursor < len(self.filtered):
            return self.filtered[self.cursor]
        return None
