"""Command-line interface for supygit."""
