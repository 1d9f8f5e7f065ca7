"""Builds the picker's text frame from the session state."""

from datetime import datetime
from typing import Optional

from rich.text import Text

from git_worktree_manager.constants import (
    BRANCH_COLUMN_WIDTH,
    CHROME_HEIGHT,
    DEFAULT_THEME,
    HELP_INPUT,
    HELP_NORMAL,
    MIN_VIEWPORT_HEIGHT,
    SYMBOL_CARET,
    SYMBOL_CURSOR,
    SYMBOL_NO_CURSOR,
    Theme,
)
from git_worktree_manager.formatters import (
    format_branch_label,
    format_dirty_indicator,
    format_relative_time,
    truncate_message,
)
from git_worktree_manager.models.state import (
    ConfirmDelete,
    CreateBranch,
    Normal,
    Search,
    SessionState,
)
from git_worktree_manager.models.worktree import Worktree


def viewport_height(height: int) -> int:
    """Number of list rows that fit in a terminal ``height`` lines tall."""
    return max(height - CHROME_HEIGHT, MIN_VIEWPORT_HEIGHT)


def scroll_offset_for(cursor: int, offset: int, viewport: int) -> int:
    """Smallest change to ``offset`` that keeps ``cursor`` visible."""
    if cursor >= offset + viewport:
        return cursor - viewport + 1
    if cursor < offset:
        return max(cursor, 0)
    return offset


def render_row(
    worktree: Worktree,
    selected: bool,
    theme: Theme = DEFAULT_THEME,
    now: Optional[datetime] = None,
) -> Text:
    """Render one list row."""
    line = Text()
    line.append(SYMBOL_CURSOR if selected else SYMBOL_NO_CURSOR)

    label = format_branch_label(worktree).ljust(BRANCH_COLUMN_WIDTH)
    line.append(label, style=theme.current if worktree.is_current else theme.branch)
    line.append(" ")
    line.append(
        format_dirty_indicator(worktree.is_dirty),
        style=theme.dirty if worktree.is_dirty else "",
    )
    line.append("  ")

    commit = truncate_message(worktree.last_commit.message)
    relative = format_relative_time(worktree.last_commit.date, now)
    details = f"{commit} ({relative})" if relative else commit
    line.append(details, style=theme.dim)

    if selected:
        line.stylize(theme.selected)
    return line


def _render_prompt(state: SessionState, theme: Theme) -> Text:
    prompt = Text()
    mode = state.mode
    if isinstance(mode, Search):
        prompt.append("Search: ", style=theme.search)
        prompt.append(mode.buffer + SYMBOL_CARET + "\n\n")
    elif isinstance(mode, CreateBranch):
        prompt.append("New branch name: ", style=theme.search)
        prompt.append(mode.buffer + SYMBOL_CARET + "\n\n")
    elif state.search_term:
        prompt.append("Search: ", style=theme.search)
        prompt.append(state.search_term, style=theme.dim)
        prompt.append("\n\n")
    else:
        prompt.append("\n")
    return prompt


def render_frame(
    state: SessionState,
    theme: Theme = DEFAULT_THEME,
    now: Optional[datetime] = None,
) -> Text:
    """Render the whole screen for ``state``.

    Pure: the scroll offset is recomputed here from the cursor, but the
    state is never modified.
    """
    if state.fatal_error is not None:
        return Text(f"Error: {state.fatal_error}\n\nPress q to quit.", style=theme.error)

    frame = Text()
    frame.append(f"Git Worktrees - {state.repo_root}", style=theme.title)
    frame.append("\n")
    frame.append_text(_render_prompt(state, theme))

    if isinstance(state.mode, ConfirmDelete):
        target = state.mode.target
        frame.append(f"\nDelete worktree '{target.display_branch}'? [y/N] ", style=theme.error)
        return frame

    if not state.filtered:
        frame.append("  No worktrees found\n", style=theme.dim)
    else:
        viewport = viewport_height(state.height)
        offset = scroll_offset_for(state.cursor, state.scroll_offset, viewport)
        for i, worktree in enumerate(state.filtered[offset:offset + viewport], start=offset):
            frame.append_text(render_row(worktree, i == state.cursor, theme, now))
            frame.append("\n")

    if state.error:
        frame.append("\n")
        frame.append(f"Error: {state.error}", style=theme.error)
        frame.append("\n")

    if state.status is not None:
        frame.append("\n")
        frame.append(state.status.text, style=theme.success)
        frame.append("\n")

    frame.append("\n")
    help_text = HELP_NORMAL if isinstance(state.mode, Normal) else HELP_INPUT
    frame.append(help_text, style=theme.help)
    return frame
