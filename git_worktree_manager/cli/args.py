"""Command-line argument parsing for git-worktree-manager."""

import argparse
from git_worktree_manager.__version__ import __version__


def parse_args(argv=None):
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(
        prog="git-worktree-manager",
        description="Interactive picker for the worktrees of the current git repository",
        epilog="Keys: [n]ew  [d]elete  [enter] switch  [/] search  [r]efresh  [q]uit",
    )
    parser.add_argument("--version", action="version", version=f"git-worktree-manager {__version__}")
    parser.add_argument(
        "--debug", action="store_true", help="Write debug logs to ~/.git-worktree-manager/"
    )

    return parser.parse_args(argv)
