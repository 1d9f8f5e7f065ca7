"""Shared constants for git-worktree-manager."""

from dataclasses import dataclass


# Symbol constants
SYMBOL_CURSOR = "▸ "
SYMBOL_NO_CURSOR = "  "
SYMBOL_CURRENT_WORKTREE = "● "
SYMBOL_DIRTY = "●"
SYMBOL_CLEAN = "✓"
SYMBOL_CARET = "█"

# Layout
BRANCH_COLUMN_WIDTH = 20
MAX_COMMIT_MESSAGE_LENGTH = 40
CHROME_HEIGHT = 8  # Title, prompt, status and help lines around the list
MIN_VIEWPORT_HEIGHT = 5

# Status message lifetimes (seconds)
REFRESH_STATUS_SECONDS = 2
MUTATION_STATUS_SECONDS = 3

# Git
REMOTE_NAME = "origin"
GITIGNORE_FILE = ".gitignore"
GITIGNORE_HEADER = "# Git worktrees"


HELP_NORMAL = "[n]ew  [d]elete  [enter] switch  [/] search  [r]efresh  [q]uit"
HELP_INPUT = "[enter] confirm  [esc] cancel"


@dataclass(frozen=True)
class Theme:
    """Rich style strings used by the renderer."""

    title: str = "bold color(220)"
    search: str = "bold color(86)"
    dim: str = "color(240)"
    selected: str = "bold on color(236)"
    current: str = "bold color(82)"
    dirty: str = "color(214)"
    branch: str = "bold color(141)"
    help: str = "color(240)"
    error: str = "bold color(196)"
    success: str = "color(82)"


DEFAULT_THEME = Theme()
