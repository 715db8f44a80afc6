"""Trip (prediction) model."""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from pyura.models._base import UraBaseModel, epoch_ms_to_datetime
from pyura.models.stop import Stop


class Trip(UraBaseModel):
    """A prediction for one vehicle visit at one stop.

    Each trip carries its own copy of the stop it was observed at.
    """

    stop: Stop
    visit_id: int
    line_id: str
    """Internal line identifier."""
    line_name: str
    """Public-facing line name."""
    direction_id: int = Field(ge=0, le=2)
    destination_name: str
    destination_text: str
    """Abbreviated destination as shown on displays."""
    vehicle_id: str | None = None
    """Vehicle identifier; absent on feeds that omit it."""
    id: str
    """Trip identifier."""
    estimated_time: int
    """Estimated arrival time in epoch milliseconds."""

    @property
    def estimated_datetime(self) -> datetime:
        """Estimated arrival time as a UTC datetime."""
        return epoch_ms_to_datetime(self.estimated_time)
