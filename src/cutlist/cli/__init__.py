"""Command line interface for cutlist."""

from cutlist.cli.main import app

__all__ = ["app"]
