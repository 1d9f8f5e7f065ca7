"""Keeps the worktree storage directory out of version control."""

import os

from git_worktree_manager.constants import GITIGNORE_FILE, GITIGNORE_HEADER
from git_worktree_manager.logging_config import get_logger

logger = get_logger(__name__)


def ensure_gitignore_entry(repo_root: str, entry: str) -> bool:
    """Append ``entry`` to the repository's .gitignore unless already present.

    The entry is written in directory form (trailing ``/``). An existing line
    matches with or without the trailing slash. The first managed entry is
    preceded by a ``# Git worktrees`` header.

    Args:
        repo_root: Top-level directory of the repository
        entry: Path relative to the repository root

    Returns:
        True if the file was changed, False if the entry was already there

    Raises:
        OSError: if .gitignore can't be read or written
    """
    gitignore_path = os.path.join(repo_root, GITIGNORE_FILE)

    if not entry.endswith("/"):
        entry = entry + "/"

    try:
        with open(gitignore_path, "r", encoding="utf-8") as f:
            content = f.read()
    except FileNotFoundError:
        content = ""

    lines = content.split("\n")
    bare_entry = entry.rstrip("/")
    for line in lines:
        trimmed = line.strip()
        if trimmed == entry or trimmed == bare_entry:
            return False

    new_content = content
    if content and not new_content.endswith("\n"):
        new_content += "\n"

    has_header = any("Git worktrees" in line for line in lines)
    if not content:
        new_content = GITIGNORE_HEADER + "\n"
    elif not has_header:
        new_content += "\n" + GITIGNORE_HEADER + "\n"

    new_content += entry + "\n"

    with open(gitignore_path, "w", encoding="utf-8") as f:
        f.write(new_content)

    logger.info(f"Added {entry} to {gitignore_path}")
    return True
