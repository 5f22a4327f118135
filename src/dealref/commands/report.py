"""Command: monthly breakdown of referred deals by initial referrer."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from dealref.commands._base import DealrefCommand

if TYPE_CHECKING:
    from dealref.commands._context import AppContext


@click.command(
    cls=DealrefCommand,
    examples="""\
  dealref report deals.json
  dealref report deals.jsonl --style table
  dealref report deals.json --no-sort
  cat deals.json | dealref report -
  dealref --json report deals.json""",
)
@click.argument("source", metavar="PATH")
@click.option(
    "--style",
    type=click.Choice(["plain", "table"]),
    default=None,
    help="Report layout (default from [report] style).",
)
@click.option(
    "--sort/--no-sort",
    default=None,
    help="Order months and referrers ascending (default from [report] sort).",
)
@click.pass_obj
def report(app: AppContext, source: str, style: str | None, sort: bool | None) -> None:
    """Count closed deals per month, credited to each chain's initial referrer.

    PATH is a JSON array or JSON Lines file of deal records; use - for stdin.
    """
    from dealref.services.report import ReportService

    app.emit(ReportService(app.settings).monthly_breakdown(source, sort=sort), style=style)
