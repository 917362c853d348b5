"""Command-line client for the Wren semantic layer server."""

__version__ = "0.1.0"
