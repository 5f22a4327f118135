"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults live here, ``dealref.toml`` only holds
overrides.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from dealref.domain.deals import DEFAULT_DATE_FORMAT


class DecodeConfig(BaseModel):
    """[decode] section."""

    model_config = {"frozen": True}

    date_format: str = DEFAULT_DATE_FORMAT
    encoding: str = "utf-8"


class ReportConfig(BaseModel):
    """[report] section."""

    model_config = {"frozen": True}

    sort: bool = True
    style: Literal["plain", "table"] = "plain"
