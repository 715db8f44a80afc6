"""Stream version marker."""

from __future__ import annotations

from pyura.models._base import UraBaseModel


class VersionMarker(UraBaseModel):
    """API schema version announced on the wire.

    Only consumed by the schema resolver, never handed to consumers.
    """

    version: str
