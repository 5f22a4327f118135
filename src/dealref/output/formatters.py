"""Pick the output mode for a ServiceResult.

``--json`` serializes the whole result, ``--quiet`` prints the minimum,
and everything else goes through the op-specific renderers.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from pydantic import BaseModel

from dealref.output.renderers import render_quiet, render_result

if TYPE_CHECKING:
    from dealref.services.result import ServiceResult


class OutputSettings(BaseModel):
    """Output flags resolved from DealrefSettings."""

    model_config = {"frozen": True}

    json_output: bool = False
    quiet: bool = False
    verbose: bool = False
    style: Literal["plain", "table"] = "plain"


def format_result(result: ServiceResult, *, settings: OutputSettings | None = None) -> str:
    """Format a ServiceResult for display. JSON wins over quiet."""
    settings = settings or OutputSettings()
    if settings.json_output:
        return result.model_dump_json(indent=2)
    if settings.quiet:
        return render_quiet(result)
    return render_result(result, verbose=settings.verbose, style=settings.style)
