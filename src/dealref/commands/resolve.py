"""Command: show the initial referrer of a single name."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dealref.commands._base import DealrefCommand

if TYPE_CHECKING:
    from dealref.commands._context import AppContext


@click.command(
    cls=DealrefCommand,
    examples="""\
  dealref resolve deals.json Carol
  dealref -q resolve deals.json Carol
  dealref --json resolve deals.json Carol""",
)
@click.argument("source", metavar="PATH")
@click.argument("name")
@click.pass_obj
def resolve(app: AppContext, source: str, name: str) -> None:
    """Print NAME's initial referrer and the referral chain leading to it."""
    from dealref.services.report import ReportService

    app.emit(ReportService(app.settings).resolve(source, name))
