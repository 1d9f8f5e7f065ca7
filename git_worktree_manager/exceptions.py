"""Custom exceptions for git-worktree-manager"""

from typing import Optional


class WorktreeManagerError(Exception):
    """Base exception for all git-worktree-manager errors."""
    pass


class GitOperationError(WorktreeManagerError):
    """Exception raised when a git command fails."""

    def __init__(self, operation: str, message: Optional[str] = None):
        self.operation = operation
        self.message = message

        super().__init__(message or f"Git operation '{operation}' failed")


class NotARepositoryError(WorktreeManagerError):
    """Exception raised when the working directory is not inside a git repository."""

    def __init__(self, path: Optional[str] = None):
        self.path = path
        super().__init__("not in a git repository")


class ShellLaunchError(WorktreeManagerError):
    """Exception raised when the shell for a worktree cannot be started."""

    def __init__(self, shell: str, path: str, reason: str):
        self.shell = shell
        self.path = path
        self.reason = reason
        super().__init__(f"could not start {shell} in {path}: {reason}")
