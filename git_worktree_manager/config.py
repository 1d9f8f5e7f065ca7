"""Configuration handling for git-worktree-manager"""

import json
import os
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from git_worktree_manager.logging_config import get_logger

logger = get_logger(__name__)

CONFIG_DIR_NAME = "worktree-manager"
CONFIG_FILE_NAME = "config.json"
DEFAULT_WORKTREE_DIR = ".worktrees"
DEFAULT_SHELL = "/bin/bash"


@dataclass
class Config:
    """User configuration, read once at startup.

    Both fields are optional; ``None`` means "use the default".
    """

    worktree_dir: Optional[str] = None  # Relative paths resolve against the repo root
    shell: Optional[str] = None  # Falls back to $SHELL, then /bin/bash

    def __post_init__(self):
        """Validate configuration after initialization."""
        self.worktree_dir = self._clean_optional("worktree_dir", self.worktree_dir)
        self.shell = self._clean_optional("shell", self.shell)

    @staticmethod
    def _clean_optional(name: str, value) -> Optional[str]:
        """Strip string values and turn blank ones into None."""
        if value is None:
            return None
        if not isinstance(value, str):
            raise ValueError(f"{name} must be a string, got {type(value).__name__}")
        value = value.strip()
        return value or None

    def to_dict(self) -> dict:
        """Convert config to dictionary, omitting unset fields."""
        data = {}
        if self.worktree_dir:
            data["worktree_dir"] = self.worktree_dir
        if self.shell:
            data["shell"] = self.shell
        return data

    @classmethod
    def from_dict(cls, config_dict: dict) -> "Config":
        """Create Config from dictionary."""
        known_fields = {"worktree_dir", "shell"}
        filtered = {k: v for k, v in config_dict.items() if k in known_fields}
        return cls(**filtered)


def config_dir() -> Path:
    """Get the platform-specific configuration directory."""
    if sys.platform.startswith("win"):
        base = os.environ.get("APPDATA") or str(Path.home() / "AppData" / "Roaming")
        return Path(base) / CONFIG_DIR_NAME
    elif sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support" / CONFIG_DIR_NAME
    else:
        base = os.environ.get("XDG_CONFIG_HOME") or str(Path.home() / ".config")
        return Path(base) / CONFIG_DIR_NAME


def config_path() -> Path:
    """Get the configuration file path."""
    return config_dir() / CONFIG_FILE_NAME


def load_config(path: Optional[Path] = None) -> Config:
    """Load configuration from file.

    A missing, unreadable or malformed file yields an empty Config.
    """
    path = path or config_path()
    try:
        with path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        return Config()
    except (OSError, ValueError) as e:
        logger.debug(f"Ignoring unreadable config {path}: {e}")
        return Config()

    if not isinstance(data, dict):
        logger.debug(f"Ignoring config {path}: expected a JSON object")
        return Config()

    try:
        return Config.from_dict(data)
    except ValueError as e:
        logger.debug(f"Ignoring invalid config {path}: {e}")
        return Config()


def save_config(config: Config, path: Optional[Path] = None) -> None:
    """Write configuration to file, creating its directory."""
    path = path or config_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
    logger.debug(f"Saved config to {path}")
