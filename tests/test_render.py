"""Tests for frame rendering"""
from datetime import datetime, timedelta

import pytest

from git_worktree_manager.constants import HELP_INPUT, HELP_NORMAL
from git_worktree_manager.models.state import (
    ConfirmDelete,
    CreateBranch,
    Search,
    SessionState,
    StatusMessage,
)
from git_worktree_manager.models.worktree import CommitInfo, Worktree
from git_worktree_manager.ui.render import (
    render_frame,
    render_row,
    scroll_offset_for,
    viewport_height,
)

NOW = datetime(2024, 6, 1, 12, 0, 0)


@pytest.fixture
def state(sample_worktrees):
    """State showing the sample worktrees in a 24-line terminal."""
    return SessionState(
        repo_root="/home/dev/project",
        worktrees=sample_worktrees,
        filtered=sample_worktrees,
        height=24,
    )


class TestViewport:
    """Test viewport and scroll arithmetic."""

    @pytest.mark.parametrize("height,expected", [(24, 16), (13, 5), (10, 5), (0, 5)])
    def test_viewport_height(self, height, expected):
        """Test the list gets the terminal minus chrome, never under 5 rows."""
        assert viewport_height(height) == expected

    def test_offset_unchanged_when_visible(self):
        """Test a visible cursor doesn't scroll."""
        assert scroll_offset_for(cursor=3, offset=2, viewport=5) == 2

    def test_offset_follows_cursor_down(self):
        """Test the window slides so the cursor is the last visible row."""
        assert scroll_offset_for(cursor=7, offset=0, viewport=5) == 3

    def test_offset_follows_cursor_up(self):
        """Test the window slides so the cursor is the first visible row."""
        assert scroll_offset_for(cursor=1, offset=4, viewport=5) == 1


class TestRenderRow:
    """Test single row rendering."""

    def test_current_clean_row(self, sample_worktrees):
        """Test the current worktree is marked and shows a clean glyph."""
        row = render_row(sample_worktrees[0], selected=True, now=NOW)
        assert row.plain == "▸ ● main" + " " * 14 + " ✓  Initial commit (3 days ago)"

    def test_dirty_row(self, sample_worktrees):
        """Test a dirty, unselected row."""
        row = render_row(sample_worktrees[1], selected=False, now=NOW)
        assert row.plain == "  feature/x" + " " * 11 + " ●  fix bug (2 hours ago)"

    def test_long_branch_is_not_cut(self):
        """Test branch names longer than the column push the row right."""
        worktree = Worktree(path="/p", branch="a" * 25)
        row = render_row(worktree, selected=False, now=NOW)
        assert row.plain.startswith("  " + "a" * 25 + " ✓")

    def test_long_message_is_truncated(self):
        """Test commit subjects are cut at 40 characters."""
        worktree = Worktree(
            path="/p",
            branch="b",
            last_commit=CommitInfo(message="x" * 50, date=NOW - timedelta(minutes=5)),
        )
        row = render_row(worktree, selected=False, now=NOW)
        assert row.plain.endswith("x" * 40 + "... (5 minutes ago)")

    def test_unknown_date(self):
        """Test a missing date drops the parenthesised time."""
        worktree = Worktree(path="/p", branch="b", last_commit=CommitInfo(message="msg"))
        row = render_row(worktree, selected=False, now=NOW)
        assert row.plain.endswith("  msg")

    def test_detached_row(self):
        """Test a detached worktree shows a placeholder branch."""
        row = render_row(Worktree(path="/p"), selected=False, now=NOW)
        assert "(detached)" in row.plain


class TestRenderFrame:
    """Test whole-frame rendering per mode."""

    def test_normal_mode(self, state):
        """Test the title, rows and key help in normal mode."""
        text = render_frame(state, now=NOW).plain
        lines = text.split("\n")

        assert lines[0] == "Git Worktrees - /home/dev/project"
        assert lines[1] == ""
        assert lines[2].startswith("▸ ● main")
        assert "▸ ● main" in text
        assert "  feature/x" in text
        assert lines[-1] == HELP_NORMAL

    def test_search_prompt(self, state):
        """Test the live search prompt shows a caret."""
        state.mode = Search("feat")
        text = render_frame(state, now=NOW).plain

        assert "Search: feat█" in text
        assert text.endswith(HELP_INPUT)

    def test_committed_search_shown(self, state):
        """Test a committed search term stays visible in normal mode."""
        state.search_term = "feat"
        text = render_frame(state, now=NOW).plain

        assert "Search: feat\n" in text
        assert "█" not in text

    def test_create_prompt(self, state):
        """Test the new branch prompt."""
        state.mode = CreateBranch("my-feat")
        text = render_frame(state, now=NOW).plain

        assert "New branch name: my-feat█" in text
        assert text.endswith(HELP_INPUT)

    def test_confirm_delete_hides_list(self, state, sample_worktrees):
        """Test the delete prompt replaces the list and help."""
        state.mode = ConfirmDelete(sample_worktrees[1])
        text = render_frame(state, now=NOW).plain

        assert text.endswith("Delete worktree 'feature/x'? [y/N] ")
        assert "fix bug" not in text
        assert HELP_NORMAL not in text

    def test_empty_list(self, state):
        """Test the placeholder when nothing matches."""
        state.filtered = []
        text = render_frame(state, now=NOW).plain
        assert "  No worktrees found" in text

    def test_error_and_status(self, state):
        """Test recoverable errors and statuses appear under the list."""
        state.error = "cannot delete main worktree"
        state.status = StatusMessage.for_seconds("Refreshed", 2, NOW)
        text = render_frame(state, now=NOW).plain

        assert "Error: cannot delete main worktree" in text
        assert "Refreshed" in text
        assert text.index("Error:") < text.index("Refreshed") < text.index(HELP_NORMAL)

    def test_fatal_error(self, state):
        """Test the fatal screen replaces everything."""
        state.fatal_error = "not in a git repository"
        text = render_frame(state, now=NOW).plain
        assert text == "Error: not in a git repository\n\nPress q to quit."

    def test_rows_limited_to_viewport(self):
        """Test only the visible window of rows is drawn."""
        worktrees = [Worktree(path=f"/p/{i}", branch=f"branch-{i:02d}") for i in range(30)]
        state = SessionState(
            repo_root="/p", worktrees=worktrees, filtered=worktrees,
            height=13, cursor=10, scroll_offset=6,
        )
        text = render_frame(state, now=NOW).plain

        assert "branch-05" not in text
        assert "branch-06" in text
        assert "▸ branch-10" in text
        assert "branch-11" not in text

    def test_render_does_not_mutate(self, state):
        """Test rendering leaves the state untouched."""
        state.cursor = 1
        state.scroll_offset = 0
        state.height = 0
        render_frame(state, now=NOW)
        assert state.scroll_offset == 0
        assert state.cursor == 1
