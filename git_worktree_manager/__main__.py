import sys

from git_worktree_manager.cli.main import main

sys.exit(main())
