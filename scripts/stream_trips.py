#!/usr/bin/env python3
"""Print live predictions from a URA stream endpoint.

Usage
-----
Set the base URL and run::

    export URA_BASE_URL="http://ivu.aseag.de"
    python scripts/stream_trips.py --stop 100000 --duration 60

Options::

    --stop ID           Only trips at this stop (repeatable)
    --line ID           Only trips of this line (repeatable)
    --instant           Fetch one instant snapshot instead of streaming
    --duration SECONDS  Stream for this long, then close (default: until Ctrl+C)
    --json              One JSON object per trip
"""

from __future__ import annotations

import argparse
import asyncio
import json
import logging

from pyura import Query, Trip, UraClient, UraConfig


def _format_trip(trip: Trip, json_mode: bool) -> str:
    if json_mode:
        return json.dumps(trip.model_dump(mode="json"), ensure_ascii=False)
    eta = trip.estimated_datetime.astimezone().strftime("%H:%M:%S")
    return f"{eta}  {trip.line_name:>6}  {trip.destination_name:<30}  stop={trip.stop.name} trip={trip.id}"


async def main() -> None:
    parser = argparse.ArgumentParser(description="Print URA predictions as they arrive.")
    parser.add_argument("--stop", action="append", default=[], help="Stop id filter (repeatable)")
    parser.add_argument("--line", action="append", default=[], help="Line id filter (repeatable)")
    parser.add_argument("--instant", action="store_true", help="Fetch one snapshot from the instant endpoint")
    parser.add_argument("--duration", type=float, default=None, help="Seconds to stream before closing")
    parser.add_argument("--json", action="store_true", dest="json_mode", help="Output machine-readable JSON")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    args = parser.parse_args()

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")
    else:
        logging.basicConfig(level=logging.WARNING)

    query = Query()
    if args.stop:
        query = query.for_stops(*args.stop)
    if args.line:
        query = query.for_lines(*args.line)

    config = UraConfig.from_env()

    async with UraClient(config) as client:
        if args.instant:
            for trip in await client.get_trips(query):
                print(_format_trip(trip, args.json_mode))
            return

        reader = client.trip_stream(query, consumers=lambda trip: print(_format_trip(trip, args.json_mode)))
        async with reader:
            if args.duration is None:
                await reader.join()
            else:
                try:
                    await asyncio.wait_for(reader.join(), timeout=args.duration)
                except TimeoutError:
                    pass


if __name__ == "__main__":
    try:
        asyncio.run(main())
    except KeyboardInterrupt:
        pass
