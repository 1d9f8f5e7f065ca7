"""Logging configuration for git-worktree-manager"""
import logging
from pathlib import Path

LOG_DIR_NAME = ".git-worktree-manager"
LOG_FILE_NAME = "worktree-manager.log"


def get_log_file() -> Path:
    """Return the path of the session log file."""
    return Path.home() / LOG_DIR_NAME / LOG_FILE_NAME


def setup_logging(debug: bool = False) -> None:
    """
    Configure logging for the application.

    The terminal belongs to Textual while the picker is open, so records
    only go to the log file, which is replaced on every run.

    Args:
        debug: If True, write DEBUG level messages as well
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Remove existing handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()

    log_file = get_log_file()
    try:
        log_file.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file, mode='w')  # Overwrite each run
    except OSError:
        return

    file_handler.setLevel(logging.DEBUG if debug else logging.INFO)
    file_handler.setFormatter(logging.Formatter(
        fmt='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    ))
    root_logger.addHandler(file_handler)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Args:
        name: Name of the module (typically __name__)

    Returns:
        Logger instance
    """
    # Strip the package prefix for cleaner log names
    if name.startswith('git_worktree_manager.'):
        name = name[len('git_worktree_manager.'):]

    return logging.getLogger(name)
