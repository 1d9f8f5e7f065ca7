"""Rendering and widgets for the worktree picker."""

from .render import render_frame, render_row, scroll_offset_for, viewport_height

__all__ = ["render_frame", "render_row", "scroll_offset_for", "viewport_height"]
