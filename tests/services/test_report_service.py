"""Tests for ReportService."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from dealref.config.models import DecodeConfig, ReportConfig
from dealref.config.settings import DealrefSettings
from dealref.services.report import ReportService
from tests.conftest import CROSS_MONTH_RECORDS


@pytest.fixture
def service(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> ReportService:
    monkeypatch.delenv("DEALREF_CONFIG", raising=False)
    return ReportService(DealrefSettings.from_cli(start=tmp_path))


class TestMonthlyBreakdown:
    def test_success(self, service: ReportService, write_deals: Callable[..., Path]) -> None:
        result = service.monthly_breakdown(write_deals(CROSS_MONTH_RECORDS))
        assert result.ok
        assert result.op == "monthly_breakdown"
        assert result.data["breakdown"] == {"2024-02": {"A": 2}, "2024-03": {"A": 1}}
        assert result.data["total"] == 3
        assert result.meta == {"deals": 4, "referred": 3, "roots": 1}
        assert result.warnings == []

    def test_sorted_by_default(
        self, service: ReportService, write_deals: Callable[..., Path]
    ) -> None:
        path = write_deals(
            [
                {"name": "Y", "close_date": "05-01-2024", "referred_by": "X"},
                {"name": "B", "close_date": "05-02-2024", "referred_by": "A"},
                {"name": "C", "close_date": "04-02-2024", "referred_by": "A"},
            ]
        )
        breakdown = service.monthly_breakdown(path).data["breakdown"]
        assert list(breakdown) == ["2024-04", "2024-05"]
        assert list(breakdown["2024-05"]) == ["A", "X"]

    def test_unsorted_keeps_first_occurrence(
        self, service: ReportService, write_deals: Callable[..., Path]
    ) -> None:
        path = write_deals(
            [
                {"name": "Y", "close_date": "05-01-2024", "referred_by": "X"},
                {"name": "B", "close_date": "05-02-2024", "referred_by": "A"},
                {"name": "C", "close_date": "04-02-2024", "referred_by": "A"},
            ]
        )
        breakdown = service.monthly_breakdown(path, sort=False).data["breakdown"]
        assert list(breakdown) == ["2024-05", "2024-04"]
        assert list(breakdown["2024-05"]) == ["X", "A"]

    def test_sort_setting(self, write_deals: Callable[..., Path]) -> None:
        settings = DealrefSettings(report=ReportConfig(sort=False))
        path = write_deals(
            [
                {"name": "B", "close_date": "05-02-2024", "referred_by": "A"},
                {"name": "C", "close_date": "04-02-2024", "referred_by": "A"},
            ]
        )
        breakdown = ReportService(settings).monthly_breakdown(path).data["breakdown"]
        assert list(breakdown) == ["2024-05", "2024-04"]

    def test_date_format_setting(self, write_deals: Callable[..., Path]) -> None:
        settings = DealrefSettings(decode=DecodeConfig(date_format="%Y-%m-%d"))
        path = write_deals([{"name": "B", "close_date": "2024-08-30", "referred_by": "A"}])
        result = ReportService(settings).monthly_breakdown(path)
        assert result.data["breakdown"] == {"2024-08": {"A": 1}}

    def test_no_referred_deals_warns(
        self, service: ReportService, write_deals: Callable[..., Path]
    ) -> None:
        result = service.monthly_breakdown(write_deals([{"name": "A", "close_date": "06-01-2024"}]))
        assert result.ok
        assert result.data["breakdown"] == {}
        assert result.warnings == ["No referred deals found in input"]

    def test_decode_error(self, service: ReportService, tmp_path: Path) -> None:
        result = service.monthly_breakdown(tmp_path / "missing.json")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "DECODE_ERROR"
        assert result.error.detail["source"] == str(tmp_path / "missing.json")
        assert result.data == {}

    def test_cycle_error(self, service: ReportService, write_deals: Callable[..., Path]) -> None:
        path = write_deals(
            [
                {"name": "A", "close_date": "01-01-2024", "referred_by": "B"},
                {"name": "B", "close_date": "01-02-2024", "referred_by": "A"},
            ]
        )
        result = service.monthly_breakdown(path)
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "REFERRAL_CYCLE"
        assert result.error.detail["cycle"][0] == result.error.detail["cycle"][-1]


class TestResolve:
    def test_resolves_chain(self, service: ReportService, write_deals: Callable[..., Path]) -> None:
        result = service.resolve(write_deals(CROSS_MONTH_RECORDS), "C")
        assert result.ok
        assert result.op == "resolve_root"
        assert result.data == {"name": "C", "root": "A", "chain": ["C", "B", "A"]}
        assert result.warnings == []

    def test_root_resolves_to_itself(
        self, service: ReportService, write_deals: Callable[..., Path]
    ) -> None:
        result = service.resolve(write_deals(CROSS_MONTH_RECORDS), "A")
        assert result.data["root"] == "A"
        assert result.data["chain"] == ["A"]

    def test_unknown_name_warns(
        self, service: ReportService, write_deals: Callable[..., Path]
    ) -> None:
        result = service.resolve(write_deals(CROSS_MONTH_RECORDS), "Nobody")
        assert result.ok
        assert result.data["root"] == "Nobody"
        assert result.warnings == ["'Nobody' does not appear in the input"]

    def test_decode_error(self, service: ReportService, tmp_path: Path) -> None:
        bad = tmp_path / "bad.json"
        bad.write_text("[{]")
        result = service.resolve(bad, "A")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "DECODE_ERROR"
