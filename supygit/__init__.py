"""supygit - git commit, rollback and branch tools for coding agents."""

__version__ = "0.1.0"
