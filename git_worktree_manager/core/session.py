"""Interactive session state machine for the worktree picker.

The session owns a :class:`SessionState` and changes it in response to
discrete events: key presses, timer ticks and terminal resizes. Every call
runs to completion, including any git commands it triggers, before the next
event is handled.

Keys are plain names: ``up``, ``down``, ``enter``, ``esc``, ``backspace``,
``ctrl+c``, or a single printable character.
"""

from datetime import datetime
from typing import Callable, List, Optional

from git_worktree_manager.config import Config
from git_worktree_manager.constants import MUTATION_STATUS_SECONDS, REFRESH_STATUS_SECONDS
from git_worktree_manager.exceptions import WorktreeManagerError
from git_worktree_manager.logging_config import get_logger
from git_worktree_manager.models.state import (
    ConfirmDelete,
    CreateBranch,
    Normal,
    Quit,
    Search,
    SessionExit,
    SessionState,
    StatusMessage,
    SwitchWorktree,
)
from git_worktree_manager.models.worktree import Worktree
from git_worktree_manager.services.filter_service import filter_worktrees
from git_worktree_manager.services.git.operations import WorktreeOperations
from git_worktree_manager.services.git.worktrees import WorktreeService, get_repo_root
from git_worktree_manager.services.shell_service import resolve_shell
from git_worktree_manager.ui.render import scroll_offset_for, viewport_height

logger = get_logger(__name__)

QUIT_KEYS = {"q", "ctrl+c"}
CANCEL_KEYS = {"esc", "ctrl+c"}
UP_KEYS = {"up", "k"}
DOWN_KEYS = {"down", "j"}
CONFIRM_KEYS = {"y", "Y"}
DENY_KEYS = {"n", "N", "esc", "ctrl+c"}

MAIN_WORKTREE_ERROR = "cannot delete main worktree"


def is_text_key(key: str) -> bool:
    """True for a single printable character."""
    return len(key) == 1 and key.isprintable()


def is_branch_name_key(key: str) -> bool:
    """True for characters accepted while typing a branch name."""
    return is_text_key(key) and not key.isspace()


class WorktreeSession:
    """Modal key handling over the worktree list."""

    def __init__(
        self,
        state: SessionState,
        reader: Optional[WorktreeService] = None,
        operations: Optional[WorktreeOperations] = None,
        config: Optional[Config] = None,
        cwd: Optional[str] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.state = state
        self.reader = reader
        self.operations = operations
        self.config = config or Config()
        self.cwd = cwd
        self.clock = clock

    @classmethod
    def start(
        cls,
        cwd: Optional[str] = None,
        config: Optional[Config] = None,
        clock: Callable[[], datetime] = datetime.now,
    ) -> "WorktreeSession":
        """Open a session for the repository containing ``cwd``.

        If the repository root can't be found or the worktrees can't be
        listed, the session starts in the fatal error state, where the
        only accepted input is quit.
        """
        try:
            repo_root = get_repo_root(cwd)
            reader = WorktreeService(repo_root)
            worktrees = reader.list_worktrees(cwd)
        except (WorktreeManagerError, OSError) as e:
            logger.error(f"Could not start session: {e}")
            return cls(SessionState(fatal_error=str(e)), config=config, cwd=cwd, clock=clock)

        logger.info(f"Session started in {repo_root} with {len(worktrees)} worktrees")
        state = SessionState(repo_root=repo_root, worktrees=worktrees, filtered=worktrees)
        return cls(
            state,
            reader=reader,
            operations=WorktreeOperations(repo_root),
            config=config,
            cwd=cwd,
            clock=clock,
        )

    # Events

    def handle_key(self, key: str) -> Optional[SessionExit]:
        """Apply one key press.

        Returns:
            Quit or SwitchWorktree when the session ends, otherwise None
        """
        state = self.state
        if state.finished:
            return None

        if state.fatal_error is not None:
            result = self._handle_fatal_key(key)
        else:
            mode = state.mode
            if isinstance(mode, ConfirmDelete):
                result = self._handle_confirm_delete_key(mode, key)
            elif isinstance(mode, Search):
                result = self._handle_search_key(mode, key)
            elif isinstance(mode, CreateBranch):
                result = self._handle_create_branch_key(mode, key)
            else:
                result = self._handle_normal_key(key)

        self._sync_scroll()
        return result

    def tick(self, now: Optional[datetime] = None) -> bool:
        """Clear the status message once it has expired.

        Returns:
            True if the state changed
        """
        status = self.state.status
        if status is None:
            return False
        if status.is_expired(now or self.clock()):
            self.state.status = None
            return True
        return False

    def resize(self, width: int, height: int) -> None:
        """Record the terminal size and keep the cursor in view."""
        self.state.width = width
        self.state.height = height
        self._sync_scroll()

    # Mode handlers

    def _handle_fatal_key(self, key: str) -> Optional[SessionExit]:
        if key in QUIT_KEYS:
            return self._finish(Quit())
        return None

    def _handle_confirm_delete_key(self, mode: ConfirmDelete, key: str) -> Optional[SessionExit]:
        if key in CONFIRM_KEYS:
            self.state.mode = Normal()
            self._delete(mode.target)
        elif key in DENY_KEYS:
            self.state.mode = Normal()
        return None

    def _handle_search_key(self, mode: Search, key: str) -> Optional[SessionExit]:
        state = self.state
        if key in CANCEL_KEYS:
            state.mode = Normal()
            state.search_term = ""
            self._apply_filter()
        elif key == "enter":
            state.search_term = mode.buffer
            state.mode = Normal()
        elif key == "backspace":
            if mode.buffer:
                state.mode = Search(mode.buffer[:-1])
                self._apply_filter()
        elif is_text_key(key):
            state.mode = Search(mode.buffer + key)
            self._apply_filter()
        return None

    def _handle_create_branch_key(self, mode: CreateBranch, key: str) -> Optional[SessionExit]:
        state = self.state
        if key in CANCEL_KEYS:
            state.mode = Normal()
        elif key == "enter":
            state.mode = Normal()
            if mode.buffer:
                self._create(mode.buffer)
        elif key == "backspace":
            if mode.buffer:
                state.mode = CreateBranch(mode.buffer[:-1])
        elif is_branch_name_key(key):
            state.mode = CreateBranch(mode.buffer + key)
        return None

    def _handle_normal_key(self, key: str) -> Optional[SessionExit]:
        state = self.state
        if key in QUIT_KEYS:
            return self._finish(Quit())

        if key in UP_KEYS:
            if state.cursor > 0:
                state.cursor -= 1
        elif key in DOWN_KEYS:
            if state.cursor < len(state.filtered) - 1:
                state.cursor += 1
        elif key == "/":
            state.search_term = ""
            state.mode = Search()
            self._apply_filter()
        elif key == "n":
            state.mode = CreateBranch()
        elif key == "d":
            self._arm_delete()
        elif key == "r":
            self._refresh()
        elif key == "enter":
            return self._switch()
        elif key == "esc":
            state.error = None
        return None

    # Actions

    def _arm_delete(self) -> None:
        target = self.state.selected
        if target is None:
            return
        if self.is_main_worktree(target):
            self.state.error = MAIN_WORKTREE_ERROR
            return
        self.state.mode = ConfirmDelete(target)

    def is_main_worktree(self, worktree: Worktree) -> bool:
        """The repository root itself, or the first listed worktree."""
        return worktree.is_main or self.state.repo_root.endswith(worktree.path)

    def _delete(self, target: Worktree) -> None:
        try:
            self.operations.delete_worktree(target.path)
        except (WorktreeManagerError, OSError) as e:
            self.state.error = str(e)
            return
        self._set_status(f"Deleted worktree: {target.display_branch}", MUTATION_STATUS_SECONDS)
        self._reload_after_mutation()

    def _create(self, branch: str) -> None:
        try:
            self.operations.create_worktree(branch, self.config)
        except (WorktreeManagerError, OSError) as e:
            self.state.error = str(e)
            return
        self._set_status(f"Created worktree: {branch}", MUTATION_STATUS_SECONDS)
        self._reload_after_mutation()

    def _refresh(self) -> None:
        try:
            self._reload()
        except (WorktreeManagerError, OSError) as e:
            logger.error(f"Refresh failed: {e}")
            self.state.error = str(e)
            return
        self.state.error = None
        self._set_status("Refreshed", REFRESH_STATUS_SECONDS)

    def _reload_after_mutation(self) -> None:
        self.state.error = None
        try:
            self._reload()
        except (WorktreeManagerError, OSError) as e:
            logger.error(f"Refresh after change failed: {e}")
            self.state.error = str(e)

    def _switch(self) -> Optional[SessionExit]:
        target = self.state.selected
        if target is None:
            return None
        shell = resolve_shell(self.config)
        logger.info(f"Switching to {target.path} with {shell}")
        return self._finish(SwitchWorktree(path=target.path, shell=shell, branch=target.branch))

    def _finish(self, result: SessionExit) -> SessionExit:
        self.state.finished = True
        return result

    # Helpers

    def _reload(self) -> None:
        self._set_worktrees(self.reader.list_worktrees(self.cwd))

    def _set_worktrees(self, worktrees: List[Worktree]) -> None:
        self.state.worktrees = worktrees
        self._apply_filter()

    def _apply_filter(self) -> None:
        state = self.state
        state.filtered = filter_worktrees(state.worktrees, state.active_search_term)
        self._clamp_cursor()

    def _clamp_cursor(self) -> None:
        state = self.state
        if not state.filtered:
            state.cursor = 0
        elif state.cursor >= len(state.filtered):
            state.cursor = len(state.filtered) - 1
        elif state.cursor < 0:
            state.cursor = 0

    def _sync_scroll(self) -> None:
        state = self.state
        viewport = viewport_height(state.height)
        state.scroll_offset = scroll_offset_for(state.cursor, state.scroll_offset, viewport)

    def _set_status(self, text: str, seconds: float) -> None:
        self.state.status = StatusMessage.for_seconds(text, seconds, self.clock())
