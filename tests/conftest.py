"""Shared pytest fixtures and test helpers for dealref tests."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from click.testing import CliRunner

from dealref.domain.deals import Deal


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def _isolated_cwd(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Run from an empty temp directory with no DEALREF_* environment.

    Keeps config discovery from picking up a ``dealref.toml`` outside the
    test. Use via ``@pytest.mark.usefixtures("_isolated_cwd")``.
    """
    monkeypatch.chdir(tmp_path)
    for var in ("DEALREF_CONFIG", "DEALREF_REPORT__SORT", "DEALREF_REPORT__STYLE"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def write_deals(tmp_path: Path) -> Callable[..., Path]:
    """Write records to a JSON array file and return its path."""

    def _write(records: list[dict[str, Any]], name: str = "deals.json") -> Path:
        path = tmp_path / name
        path.write_text(json.dumps(records), encoding="utf-8")
        return path

    return _write


# ---------------------------------------------------------------------------
# Shared test helpers
# ---------------------------------------------------------------------------


def make_deal(name: str, close_date: str, referred_by: str | None = None) -> Deal:
    """Build a Deal from an ``MM-DD-YYYY`` date string."""
    return Deal.model_validate(
        {"name": name, "close_date": close_date, "referred_by": referred_by}
    )


# A (Jan, no referrer) -> B (Feb) -> C (Feb); D referred by A (Mar).
CROSS_MONTH_RECORDS: list[dict[str, Any]] = [
    {"name": "A", "close_date": "01-03-2024"},
    {"name": "B", "close_date": "02-05-2024", "referred_by": "A"},
    {"name": "C", "close_date": "02-10-2024", "referred_by": "B"},
    {"name": "D", "close_date": "03-12-2024", "referred_by": "A"},
]
