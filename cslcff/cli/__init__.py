"""Command-line interface (``csl2cff``)."""

from cslcff.cli.main import app, cli_main

__all__ = ["app", "cli_main"]
