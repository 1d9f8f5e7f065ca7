"""Command-line interface for git-worktree-manager"""

import sys
from rich.console import Console

from git_worktree_manager.cli.args import parse_args
from git_worktree_manager.config import load_config
from git_worktree_manager.core.session import WorktreeSession
from git_worktree_manager.exceptions import ShellLaunchError
from git_worktree_manager.logging_config import setup_logging, get_logger
from git_worktree_manager.models.state import SwitchWorktree
from git_worktree_manager.services.shell_service import spawn_shell

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)


def main(argv=None) -> int:
    """Main entry point for the application."""
    parsed_args = parse_args(argv)

    # The TUI owns the terminal, so logs only go to the log file
    setup_logging(debug=parsed_args.debug)

    config = load_config()
    session = WorktreeSession.start(config=config)

    from git_worktree_manager.tui import WorktreeManagerApp
    app = WorktreeManagerApp(session)

    try:
        result = app.run()
    except KeyboardInterrupt:
        return 0
    except Exception as e:
        logger.error(f"TUI failed: {e}", exc_info=True)
        err_console.print(f"Error: {e}", style="red", markup=False)
        return 1

    if app.return_code:
        err_console.print("Error: the terminal UI exited abnormally", style="red", markup=False)
        return 1

    if isinstance(result, SwitchWorktree):
        try:
            spawn_shell(result.shell, result.path, console=console)
        except ShellLaunchError as e:
            err_console.print(f"Error: {e}", style="red", markup=False)
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
