"""Tests for shell resolution and the terminal handoff"""
import io
import shutil

import pytest
from rich.console import Console

from git_worktree_manager.config import Config
from git_worktree_manager.exceptions import ShellLaunchError
from git_worktree_manager.services.shell_service import resolve_shell, spawn_shell


class TestResolveShell:
    """Test shell selection order."""

    def test_configured_shell_wins(self, monkeypatch):
        """Test the configured shell beats $SHELL."""
        monkeypatch.setenv("SHELL", "/bin/zsh")
        assert resolve_shell(Config(shell="/usr/bin/fish")) == "/usr/bin/fish"

    def test_env_shell(self, monkeypatch):
        """Test $SHELL is used when nothing is configured."""
        monkeypatch.setenv("SHELL", "/bin/zsh")
        assert resolve_shell(Config()) == "/bin/zsh"
        assert resolve_shell() == "/bin/zsh"

    def test_fallback(self, monkeypatch):
        """Test /bin/bash is the last resort."""
        monkeypatch.delenv("SHELL", raising=False)
        assert resolve_shell(Config()) == "/bin/bash"


class TestSpawnShell:
    """Test running a shell inside a worktree."""

    @pytest.fixture
    def console(self):
        return Console(file=io.StringIO(), force_terminal=False, width=200)

    def test_announces_and_returns_status(self, temp_dir, console):
        """Test the switch line is printed and the exit status returned."""
        true_bin = shutil.which("true")
        if true_bin is None:
            pytest.skip("true(1) not available")

        status = spawn_shell(true_bin, str(temp_dir), console=console)

        assert status == 0
        assert f"Switching to {temp_dir}..." in console.file.getvalue()

    def test_non_zero_status(self, temp_dir, console):
        """Test the shell's failure status is passed through."""
        false_bin = shutil.which("false")
        if false_bin is None:
            pytest.skip("false(1) not available")

        assert spawn_shell(false_bin, str(temp_dir), console=console) != 0

    def test_missing_shell(self, temp_dir, console):
        """Test a shell that can't be started raises."""
        with pytest.raises(ShellLaunchError) as exc_info:
            spawn_shell(str(temp_dir / "no-such-shell"), str(temp_dir), console=console)

        assert exc_info.value.path == str(temp_dir)

    def test_missing_directory(self, temp_dir, console):
        """Test a vanished worktree directory raises."""
        with pytest.raises(ShellLaunchError):
            spawn_shell("/bin/sh", str(temp_dir / "gone"), console=console)
