"""Custom widgets for git-worktree-manager TUI."""

from textual.widgets import Static


class FrameView(Static):
    """Focusable widget holding the rendered picker frame.

    It takes focus so key presses are delivered to it and bubble up to the
    app, which owns the session.
    """

    can_focus = True
