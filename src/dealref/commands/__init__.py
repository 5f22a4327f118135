"""Subcommand modules for dealref.

Provides register_commands(), which imports command modules lazily so
``dealref --help`` stays fast.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import click


def register_commands(cli: click.Group) -> None:
    """Register all standalone commands on the root CLI group."""
    from dealref.commands.report import report
    from dealref.commands.resolve import resolve

    cli.add_command(report)
    cli.add_command(resolve)
