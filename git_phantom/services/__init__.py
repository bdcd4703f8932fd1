"""Services used by the worktree lifecycle manager and the CLI."""
