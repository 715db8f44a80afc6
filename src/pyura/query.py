"""Immutable query filters for the instant and stream endpoints."""

from __future__ import annotations

from collections.abc import Iterable

from pydantic import BaseModel, ConfigDict

from pyura._constants import (
    PAR_CIRCLE,
    PAR_DEST_NAME,
    PAR_DIR_ID,
    PAR_LINE_ID,
    PAR_LINE_NAME,
    PAR_RETURN_LIST,
    PAR_STOP_ID,
    PAR_STOP_NAME,
    PAR_TOWARDS,
)


class Query(BaseModel):
    """Filter set sent along with a URA request.

    Every ``for_*`` method returns a new query; the original is unchanged::

        query = Query().for_stops("100000").for_lines("25", "35")
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    stop_ids: tuple[str, ...] = ()
    stop_names: tuple[str, ...] = ()
    line_ids: tuple[str, ...] = ()
    line_names: tuple[str, ...] = ()
    direction: int | None = None
    destination_names: tuple[str, ...] = ()
    towards_names: tuple[str, ...] = ()
    circle: tuple[float, float, int] | None = None

    def for_stops(self, *stop_ids: str) -> Query:
        return self.model_copy(update={"stop_ids": tuple(stop_ids)})

    def for_stops_by_name(self, *stop_names: str) -> Query:
        return self.model_copy(update={"stop_names": tuple(stop_names)})

    def for_lines(self, *line_ids: str) -> Query:
        return self.model_copy(update={"line_ids": tuple(line_ids)})

    def for_lines_by_name(self, *line_names: str) -> Query:
        return self.model_copy(update={"line_names": tuple(line_names)})

    def for_direction(self, direction: int) -> Query:
        if not 0 <= direction <= 2:
            raise ValueError(f"direction must be between 0 and 2, got {direction}")
        return self.model_copy(update={"direction": direction})

    def for_destination_names(self, *names: str) -> Query:
        return self.model_copy(update={"destination_names": tuple(names)})

    def towards(self, *names: str) -> Query:
        """Trips passing any of the named stops later on their route."""
        return self.model_copy(update={"towards_names": tuple(names)})

    def for_position(self, latitude: float, longitude: float, radius: int) -> Query:
        """Restrict to stops within *radius* meters around a point."""
        if radius <= 0:
            raise ValueError(f"radius must be positive, got {radius}")
        return self.model_copy(update={"circle": (float(latitude), float(longitude), int(radius))})

    def to_params(self, return_list: Iterable[str]) -> dict[str, str]:
        """Build the query-string parameters for a request returning *return_list*."""
        params: dict[str, str] = {PAR_RETURN_LIST: ",".join(return_list)}
        for key, values in (
            (PAR_STOP_ID, self.stop_ids),
            (PAR_STOP_NAME, self.stop_names),
            (PAR_LINE_ID, self.line_ids),
            (PAR_LINE_NAME, self.line_names),
            (PAR_DEST_NAME, self.destination_names),
            (PAR_TOWARDS, self.towards_names),
        ):
            if values:
                params[key] = ",".join(values)
        if self.direction is not None:
            params[PAR_DIR_ID] = str(self.direction)
        if self.circle is not None:
            lat, lon, radius = self.circle
            params[PAR_CIRCLE] = f"{lat},{lon},{radius}"
        return params
