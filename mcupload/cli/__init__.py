"""Command-line interface for mcupload."""
