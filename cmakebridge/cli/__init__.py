"""Command line interface for cmakebridge."""

from cmakebridge.cli.app import app, main
from cmakebridge.cli.commands import register_all_commands


register_all_commands(app)

__all__ = ["app", "main"]
