"""Exceptions raised by the domain and infrastructure layers.

The service layer catches these and converts them into a failed
ServiceResult; they never reach the CLI directly.
"""

from __future__ import annotations


class DealrefError(Exception):
    """Base class for all dealref failures."""

    code = "DEALREF_ERROR"


class DecodeError(DealrefError):
    """The record stream is unreadable or malformed.

    Attributes:
        source: Name of the stream being decoded (path or ``<stdin>``).
        position: 1-based record (or line) number, when known.
    """

    code = "DECODE_ERROR"

    def __init__(self, message: str, *, source: str, position: int | None = None) -> None:
        self.source = source
        self.position = position
        where = f"{source}:{position}" if position is not None else source
        super().__init__(f"{where}: {message}")
        self.reason = message


class ReferralCycleError(DealrefError):
    """Following referrer links revisited a name.

    Attributes:
        cycle: Names on the loop, starting and ending with the revisited name.
    """

    code = "REFERRAL_CYCLE"

    def __init__(self, cycle: list[str]) -> None:
        self.cycle = cycle
        super().__init__("Referral cycle detected: " + " -> ".join(cycle))
