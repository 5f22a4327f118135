"""Monthly aggregation of referred deals by initial referrer.

A Breakdown maps ``YYYY-MM`` to ``{root referrer: count}``. Only deals with
a referrer are counted, and a (month, referrer) pair exists only when at
least one deal was credited to it.
"""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable

from dealref.domain.deals import Deal
from dealref.domain.referrals import ReferralResolver

type Breakdown = dict[str, dict[str, int]]


def aggregate(deals: Iterable[Deal], referrals: dict[str, str] | None = None) -> Breakdown:
    """Count referred deals per close month, credited to each chain's root.

    Args:
        deals: Decoded deals, in input order.
        referrals: Optional map to populate and compress in place. Pass one
            in to inspect the referral links afterwards.

    Raises:
        ReferralCycleError: If the referral links contain a loop.
    """
    referred = [d for d in deals if d.referred_by is not None]
    resolver = ReferralResolver.from_deals(referred, referrals)

    counts: defaultdict[str, defaultdict[str, int]] = defaultdict(lambda: defaultdict(int))
    for deal in referred:
        # Resolving the deal itself also compresses its own link.
        root = resolver.find_root(deal.name)
        counts[deal.month][root] += 1

    return {month: dict(per_root) for month, per_root in counts.items()}


def sort_breakdown(breakdown: Breakdown) -> Breakdown:
    """Copy of *breakdown* with months and referrers in ascending order."""
    return {month: dict(sorted(breakdown[month].items())) for month in sorted(breakdown)}


def total_credited(breakdown: Breakdown) -> int:
    """Sum of all counts — equals the number of referred deals."""
    return sum(sum(per_root.values()) for per_root in breakdown.values())
