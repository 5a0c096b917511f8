"""Search, filter and ordering of the live flight list.

All functions are pure: they never mutate the source collection and are
cheap enough to recompute on every render.
"""

from typing import Iterable, List

from ubicair.models import TelemetryRecord


def filter_flights(flights: Iterable[TelemetryRecord], query: str) -> List[TelemetryRecord]:
    """Case-insensitive substring match on flight id, origin and destination."""
    flights = list(flights)
    term = (query or "").strip().lower()
    if not term:
        return flights
    return [
        f for f in flights
        if term in f.flight_id.lower()
        or term in f.origin.lower()
        or term in f.destination.lower()
    ]


def sort_by_progress(flights: Iterable[TelemetryRecord]) -> List[TelemetryRecord]:
    return sorted(flights, key=lambda f: f.progress, reverse=True)


def visible_flights(flights: Iterable[TelemetryRecord], query: str) -> List[TelemetryRecord]:
    return sort_by_progress(filter_flights(flights, query))


def results_label(count: int) -> str:
    return f"{count} flight{'s' if count != 1 else ''} found"
