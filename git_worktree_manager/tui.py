"""Interactive TUI for git-worktree-manager using Textual."""

import asyncio
from typing import Optional

from textual import events
from textual.app import App, ComposeResult
from textual.binding import Binding

from .constants import DEFAULT_THEME, Theme
from .core.session import WorktreeSession
from .models.state import SessionExit
from .ui.render import render_frame
from .ui.widgets import FrameView
from .logging_config import get_logger

logger = get_logger(__name__)

TICK_INTERVAL = 1.0

KEY_ALIASES = {
    "escape": "esc",
}


def normalize_key(event: events.Key) -> Optional[str]:
    """Map a Textual key event to the session's key names.

    Printable keys become their character (so ``/``, ``-`` and ``Y`` come
    through as typed); everything else keeps Textual's name.
    """
    if event.is_printable and event.character:
        return event.character
    if not event.key:
        return None
    return KEY_ALIASES.get(event.key, event.key)


class WorktreeManagerApp(App[Optional[SessionExit]]):
    """Single-screen worktree picker.

    Exits with the session's result: Quit, SwitchWorktree, or None if the
    app was closed some other way.
    """

    TITLE = "Git Worktrees"
    ENABLE_COMMAND_PALETTE = False

    CSS = """
    Screen {
        background: $surface;
    }

    #frame {
        width: 100%;
        height: auto;
        padding: 0 1;
    }
    """

    BINDINGS = [
        # ctrl+c belongs to the session (cancel input, or quit)
        Binding("ctrl+c", "session_key('ctrl+c')", "Quit", show=False, priority=True),
    ]

    def __init__(self, session: WorktreeSession, frame_theme: Theme = DEFAULT_THEME):
        super().__init__()
        self.session = session
        self.frame_theme = frame_theme

    def compose(self) -> ComposeResult:
        """Create child widgets."""
        yield FrameView(id="frame")

    def on_mount(self) -> None:
        """Size the session, draw the first frame and start the status timer."""
        self.session.resize(self.size.width, self.size.height)
        self.query_one(FrameView).focus()
        self._redraw()
        self.set_interval(TICK_INTERVAL, self._on_tick)

    def on_resize(self, event: events.Resize) -> None:
        """Keep the viewport in sync with the terminal size."""
        self.session.resize(event.size.width, event.size.height)
        self._redraw()

    async def on_key(self, event: events.Key) -> None:
        """Feed key presses to the session."""
        event.stop()
        event.prevent_default()
        key = normalize_key(event)
        if key is not None:
            await self._dispatch_key(key)

    async def action_session_key(self, key: str) -> None:
        """Route a bound key to the session."""
        await self._dispatch_key(key)

    async def _dispatch_key(self, key: str) -> None:
        # git runs in a worker thread so the screen keeps painting; the next
        # event is not handled until this call returns
        result = await asyncio.to_thread(self.session.handle_key, key)
        self._redraw()
        if result is not None:
            logger.debug(f"Session finished: {result}")
            self.exit(result)

    def _on_tick(self) -> None:
        if self.session.tick():
            self._redraw()

    def _redraw(self) -> None:
        frame = render_frame(self.session.state, self.frame_theme)
        self.query_one(FrameView).update(frame)
