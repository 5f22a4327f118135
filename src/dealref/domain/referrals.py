"""Referral chain resolution with path compression.

The referral map records ``name -> referrer`` for every deal that has one.
Resolving a name walks parent links until it reaches a name that is not a
key (the initial referrer), then rewrites every visited key to point
straight at that root. Later lookups along the same chain take one step.

This is the *find* half of union-find: the parent relation comes from the
input, so there is no union step.

INVARIANT: after ``find_root(k)`` returns ``r`` for a key ``k``,
``referrals[k] == r`` and ``r`` is not a key.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Mapping

from dealref.domain.deals import Deal
from dealref.domain.errors import ReferralCycleError


class ReferralResolver:
    """Resolves initial referrers over a caller-owned referral map.

    The map is mutated in place by :meth:`find_root`. Not safe for
    concurrent use.
    """

    def __init__(self, referrals: dict[str, str] | None = None) -> None:
        self._referrals: dict[str, str] = referrals if referrals is not None else {}

    @classmethod
    def from_deals(
        cls,
        deals: Iterable[Deal],
        referrals: dict[str, str] | None = None,
    ) -> ReferralResolver:
        """Build a resolver from every deal that has a referrer."""
        resolver = cls(referrals)
        for deal in deals:
            if deal.referred_by is not None:
                resolver.add(deal.name, deal.referred_by)
        return resolver

    @property
    def referrals(self) -> Mapping[str, str]:
        """Read-only view of the current parent links."""
        return self._referrals

    def add(self, name: str, referred_by: str) -> None:
        self._referrals[name] = referred_by

    def __contains__(self, name: object) -> bool:
        return name in self._referrals

    def __len__(self) -> int:
        return len(self._referrals)

    def find_root(self, name: str) -> str:
        """Return the initial referrer of *name*, compressing the path.

        A name with no recorded referrer is its own root.

        Raises:
            ReferralCycleError: If the walk revisits a name.
        """
        path = list(self._walk(name))
        root = path[-1]
        for node in path[:-1]:
            self._referrals[node] = root
        return root

    def chain(self, name: str) -> list[str]:
        """Return the names from *name* up to its root as currently linked.

        Does not compress. After a ``find_root`` call on the same chain the
        result has at most two entries.
        """
        return list(self._walk(name))

    def _walk(self, name: str) -> Iterator[str]:
        seen: dict[str, int] = {}
        current = name
        while current in self._referrals:
            if current in seen:
                loop = list(seen)[seen[current] :]
                raise ReferralCycleError([*loop, current])
            seen[current] = len(seen)
            yield current
            current = self._referrals[current]
        yield current
