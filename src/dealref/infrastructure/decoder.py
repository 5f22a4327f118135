"""Record decoder — turns a deal record stream into Deal models.

Two layouts are accepted, detected from the first non-blank character:

- a JSON array of record objects (``[{...}, {...}]``)
- JSON Lines, one record object per non-blank line

Every failure surfaces as :class:`DecodeError`; callers never see a
partially decoded list.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path

from pydantic import TypeAdapter, ValidationError

from dealref.domain.deals import DEFAULT_DATE_FORMAT, Deal
from dealref.domain.errors import DecodeError

logger = logging.getLogger(__name__)

STDIN_SOURCE = "-"

_DEAL_LIST = TypeAdapter(list[Deal])


def read_source(source: str | Path) -> tuple[bytes, str]:
    """Read the raw bytes of *source*; ``"-"`` means stdin.

    Returns ``(raw, source_name)``.
    """
    if str(source) == STDIN_SOURCE:
        return sys.stdin.buffer.read(), "<stdin>"
    path = Path(source)
    try:
        return path.read_bytes(), str(path)
    except OSError as exc:
        raise DecodeError(f"unable to read file ({exc.strerror or exc})", source=str(path)) from exc


def decode_deals(
    source: str | Path,
    *,
    date_format: str = DEFAULT_DATE_FORMAT,
    encoding: str = "utf-8",
) -> list[Deal]:
    """Read and decode all deals from a file path (or stdin for ``"-"``)."""
    raw, name = read_source(source)
    return decode_bytes(raw, source_name=name, date_format=date_format, encoding=encoding)


def decode_bytes(
    raw: bytes,
    *,
    source_name: str = "<bytes>",
    date_format: str = DEFAULT_DATE_FORMAT,
    encoding: str = "utf-8",
) -> list[Deal]:
    """Decode an in-memory record payload."""
    try:
        text = raw.decode(encoding)
    except (UnicodeDecodeError, LookupError) as exc:
        raise DecodeError(f"cannot decode input as {encoding}: {exc}", source=source_name) from exc
    text = text.removeprefix("\ufeff")

    context = {"date_format": date_format}
    if text.lstrip().startswith("["):
        deals = _decode_array(text, source_name, context)
        positions = list(range(1, len(deals) + 1))
        layout = "json"
    else:
        numbered = _decode_lines(text, source_name, context)
        positions = [lineno for lineno, _ in numbered]
        deals = [deal for _, deal in numbered]
        layout = "jsonl"

    _check_unique_names(deals, positions, source_name)
    logger.debug("Decoded %d deals from %s (%s)", len(deals), source_name, layout)
    return deals


def _decode_array(text: str, source_name: str, context: dict[str, str]) -> list[Deal]:
    try:
        return _DEAL_LIST.validate_json(text, context=context)
    except ValidationError as exc:
        raise _to_decode_error(exc, source_name) from exc


def _decode_lines(
    text: str, source_name: str, context: dict[str, str]
) -> list[tuple[int, Deal]]:
    """Decode one record per non-blank line, paired with its line number."""
    deals: list[tuple[int, Deal]] = []
    for lineno, line in enumerate(text.splitlines(), start=1):
        if not line.strip():
            continue
        try:
            deals.append((lineno, Deal.model_validate_json(line, context=context)))
        except ValidationError as exc:
            raise _to_decode_error(exc, source_name, position=lineno) from exc
    return deals


def _to_decode_error(
    exc: ValidationError,
    source_name: str,
    *,
    position: int | None = None,
) -> DecodeError:
    """Summarize the first validation error with its record position."""
    first = exc.errors()[0]
    loc = list(first.get("loc", ()))
    if position is None and loc and isinstance(loc[0], int):
        position = loc.pop(0) + 1
    field = ".".join(str(part) for part in loc)
    message = first.get("msg", "invalid record")
    if field:
        message = f"{field}: {message}"
    return DecodeError(message, source=source_name, position=position)


def _check_unique_names(deals: list[Deal], positions: list[int], source_name: str) -> None:
    seen: set[str] = set()
    for position, deal in zip(positions, deals, strict=True):
        if deal.name in seen:
            raise DecodeError(
                f"duplicate deal name {deal.name!r}", source=source_name, position=position
            )
        seen.add(deal.name)
