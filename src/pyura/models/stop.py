"""Stop model."""

from __future__ import annotations

from pyura.models._base import UraBaseModel, UraEnum


class StopState(UraEnum):
    """Operational state of a stop point."""

    UNKNOWN = -1
    OPEN = 0
    TEMPORARILY_CLOSED = 1
    CLOSED = 2
    SUSPENDED = 3


class Stop(UraBaseModel):
    """A single stop point.

    Parameters
    ----------
    id : str
        Stop identifier.
    name : str
        Display name.
    indicator : str or None
        Platform or bay label. Some feeds send ``null``.
    state : int
        Raw operational state as sent on the wire. Use :attr:`stop_state`
        for the enum view.
    latitude : float
        WGS84 latitude.
    longitude : float
        WGS84 longitude.
    """

    id: str
    name: str
    indicator: str | None = None
    state: int
    latitude: float
    longitude: float

    @property
    def stop_state(self) -> StopState:
        """Operational state, ``UNKNOWN`` for unmapped wire values."""
        return StopState(self.state)
