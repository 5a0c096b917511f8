"""Favorite schedule records for the signed-in user."""

import logging
from typing import List, Optional

from ubicair.errors import ApiError
from ubicair.models import ScheduleRecord

logger = logging.getLogger(__name__)


def same_favorite(a: ScheduleRecord, b: ScheduleRecord) -> bool:
    """Origin, destination, airline and calendar day must all match.

    Departure and arrival times are ignored, so two departures of the same
    route on the same day count as one favorite.
    """
    if a is None or b is None:
        return False
    return a.favorite_key() == b.favorite_key()


class FavoritesStore:
    def __init__(self, client):
        self._client = client
        self.favorites: List[ScheduleRecord] = []
        self.loading = False
        self.pending_removal: Optional[ScheduleRecord] = None

    def _signed_in(self) -> bool:
        sessions = self._client.sessions
        return sessions is not None and sessions.load() is not None

    def load(self) -> List[ScheduleRecord]:
        if not self._signed_in():
            self.favorites = []
            return self.favorites

        self.loading = True
        try:
            self.favorites = self._client.list_favorites()
        except ApiError as e:
            logger.warning("could not load favorites: %s", e)
            self.favorites = []
        finally:
            self.loading = False
        return self.favorites

    def is_favorite(self, flight: ScheduleRecord) -> bool:
        return any(same_favorite(fav, flight) for fav in self.favorites)

    def add(self, flight: ScheduleRecord) -> bool:
        if not self._signed_in():
            return False
        try:
            self._client.add_favorite(flight)
        except ApiError as e:
            logger.warning("could not add favorite %s -> %s: %s", flight.origin, flight.dest, e)
            return False
        self.load()
        return True

    def remove(self, flight: ScheduleRecord, skip_confirmation: bool = False) -> bool:
        """Remove ``flight``.

        Without ``skip_confirmation`` the flight is parked in
        ``pending_removal`` and nothing is sent until ``confirm_removal``.
        """
        if not skip_confirmation:
            self.pending_removal = flight
            return False
        if not self._signed_in():
            return False
        try:
            self._client.remove_favorite(flight)
        except ApiError as e:
            logger.warning("could not remove favorite %s -> %s: %s", flight.origin, flight.dest, e)
            return False
        self.favorites = [fav for fav in self.favorites if not same_favorite(fav, flight)]
        if same_favorite(self.pending_removal, flight):
            self.pending_removal = None
        return True

    def confirm_removal(self) -> bool:
        flight = self.pending_removal
        if flight is None:
            return False
        self.pending_removal = None
        return self.remove(flight, skip_confirmation=True)

    def cancel_removal(self) -> None:
        self.pending_removal = None

    def toggle(self, flight: ScheduleRecord) -> bool:
        """Quick add/remove from a results list; removal is not confirmed."""
        if self.is_favorite(flight):
            return self.remove(flight, skip_confirmation=True)
        return self.add(flight)

    def clear(self) -> None:
        self.favorites = []
        self.pending_removal = None
