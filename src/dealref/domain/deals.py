"""Deal record model.

A Deal is decoded once from the input stream and never mutated. The close
date is parsed at decode time using the ``date_format`` passed in the
Pydantic validation context (default ``MM-DD-YYYY``).
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from pydantic import BaseModel, Field, ValidationInfo, field_validator

DEFAULT_DATE_FORMAT = "%m-%d-%Y"
MONTH_FORMAT = "%Y-%m"


class Deal(BaseModel):
    """A closed deal with an optional referrer."""

    model_config = {"frozen": True, "extra": "ignore"}

    name: str = Field(min_length=1)
    close_date: date
    referred_by: str | None = None

    @field_validator("name")
    @classmethod
    def _strip_name(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("name must not be blank")
        return stripped

    @field_validator("close_date", mode="before")
    @classmethod
    def _parse_close_date(cls, value: Any, info: ValidationInfo) -> Any:
        if not isinstance(value, str):
            raise ValueError(f"close_date must be a string, got {type(value).__name__}")
        fmt = DEFAULT_DATE_FORMAT
        if info.context:
            fmt = info.context.get("date_format", fmt)
        raw = value.strip()
        try:
            parsed = datetime.strptime(raw, fmt).date()
        except ValueError as exc:
            raise ValueError(f"close_date {value!r} does not match format {fmt!r}") from exc
        # strptime accepts unpadded fields; the format requires fixed width.
        if parsed.strftime(fmt) != raw:
            raise ValueError(f"close_date {value!r} does not match format {fmt!r}")
        return parsed

    @field_validator("referred_by", mode="before")
    @classmethod
    def _blank_referrer_is_none(cls, value: Any) -> Any:
        if isinstance(value, str):
            return value.strip() or None
        return value

    @property
    def month(self) -> str:
        """Close month as ``YYYY-MM``."""
        return self.close_date.strftime(MONTH_FORMAT)
