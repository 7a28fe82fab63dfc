"""Command-line interface for vidshare."""
