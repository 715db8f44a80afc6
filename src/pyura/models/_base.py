"""Base model and enum for URA records.

Every URA record model inherits from :class:`UraBaseModel`, a frozen
pydantic model: records are built once from a decoded wire line and are
never mutated afterwards.

State enums inherit from :class:`UraEnum` which adds an ``UNKNOWN``
member at ``-1`` and a ``_missing_`` hook that returns ``UNKNOWN``
for any value without a mapped member.
"""

from __future__ import annotations

import enum
from datetime import UTC, datetime

from pydantic import BaseModel, ConfigDict


def epoch_ms_to_datetime(value: int) -> datetime:
    """Convert a URA epoch timestamp in milliseconds to a UTC datetime."""
    return datetime.fromtimestamp(value / 1000, tz=UTC)


class UraEnum(enum.IntEnum):
    """Base for URA state enums.

    Every subclass **must** define ``UNKNOWN = -1``.
    Values the API sends that have no mapped member resolve to
    ``UNKNOWN`` instead of raising ``ValueError``.
    """

    @classmethod
    def _missing_(cls, value: object) -> UraEnum:
        if hasattr(cls, "UNKNOWN"):
            unknown: UraEnum = cls.UNKNOWN  # type: ignore[attr-defined]
            return unknown
        return next(iter(cls))


class UraBaseModel(BaseModel):
    """Base for URA record models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        strict=True,
    )
