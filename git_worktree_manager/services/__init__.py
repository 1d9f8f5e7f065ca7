"""Services for git-worktree-manager."""
