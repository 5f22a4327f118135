"""ReportService — decode deals and build the referral breakdown.

Decoding always completes before aggregation starts, so a malformed input
yields an error result and never a partial breakdown.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from dealref.domain.breakdown import aggregate, sort_breakdown, total_credited
from dealref.domain.errors import DealrefError, DecodeError, ReferralCycleError
from dealref.domain.referrals import ReferralResolver
from dealref.infrastructure.decoder import decode_deals
from dealref.services.result import ServiceResult

if TYPE_CHECKING:
    from dealref.config.settings import DealrefSettings
    from dealref.domain.deals import Deal

logger = structlog.get_logger(__name__)


class ReportService:
    """Builds referral reports from a deal record source."""

    def __init__(self, settings: DealrefSettings) -> None:
        self._settings = settings

    def _load(self, source: str | Path) -> list[Deal]:
        decode = self._settings.decode
        return decode_deals(source, date_format=decode.date_format, encoding=decode.encoding)

    @staticmethod
    def _error(op: str, exc: DealrefError) -> ServiceResult:
        detail: dict[str, object] = {}
        if isinstance(exc, DecodeError):
            detail = {"source": exc.source, "position": exc.position}
        elif isinstance(exc, ReferralCycleError):
            detail = {"cycle": exc.cycle}
        logger.debug("report_failed", op=op, code=exc.code, error=str(exc))
        return ServiceResult.failure(op, exc.code, str(exc), **detail)

    def monthly_breakdown(self, source: str | Path, *, sort: bool | None = None) -> ServiceResult:
        """Count referred deals per month, credited to each chain's root.

        Args:
            source: Path to the record file, or ``"-"`` for stdin.
            sort: Order months and referrers ascending. Defaults to the
                ``[report] sort`` setting.
        """
        op = "monthly_breakdown"
        try:
            deals = self._load(source)
            breakdown = aggregate(deals)
        except DealrefError as exc:
            return self._error(op, exc)

        if sort is None:
            sort = self._settings.report.sort
        if sort:
            breakdown = sort_breakdown(breakdown)

        total = total_credited(breakdown)
        roots = {root for per_root in breakdown.values() for root in per_root}
        warnings: list[str] = []
        if total == 0:
            warnings.append("No referred deals found in input")

        logger.debug("breakdown_built", deals=len(deals), referred=total, months=len(breakdown))
        return ServiceResult(
            ok=True,
            op=op,
            data={"breakdown": breakdown, "total": total},
            warnings=warnings,
            meta={"deals": len(deals), "referred": total, "roots": len(roots)},
        )

    def resolve(self, source: str | Path, name: str) -> ServiceResult:
        """Find the initial referrer of *name* and the chain leading to it.

        A name with no recorded referrer, including one absent from the
        input, is its own root.
        """
        op = "resolve_root"
        try:
            deals = self._load(source)
            resolver = ReferralResolver.from_deals(deals)
            chain = resolver.chain(name)
            root = resolver.find_root(name)
        except DealrefError as exc:
            return self._error(op, exc)

        warnings: list[str] = []
        known = {d.name for d in deals} | {d.referred_by for d in deals if d.referred_by}
        if name not in known:
            warnings.append(f"'{name}' does not appear in the input")

        return ServiceResult(
            ok=True,
            op=op,
            data={"name": name, "root": root, "chain": chain},
            warnings=warnings,
        )
