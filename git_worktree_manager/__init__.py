"""
git-worktree-manager - An interactive picker for git worktrees
"""

from .__version__ import __version__
from .core import WorktreeSession
from .cli.main import main

__all__ = ["WorktreeSession", "main", "__version__"]
