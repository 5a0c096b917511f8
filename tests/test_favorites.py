import pytest

from conftest import make_schedule
from ubicair.errors import HttpError, NetworkError
from ubicair.favorites import FavoritesStore, same_favorite
from ubicair.session import SessionStore


class FakeClient:
    """Backend double that keeps favorites in a list."""

    def __init__(self, sessions, favorites=None):
        self.sessions = sessions
        self.server = list(favorites or [])
        self.calls = []
        self.fail = None

    def _maybe_fail(self):
        if self.fail is not None:
            raise self.fail

    def list_favorites(self):
        self.calls.append("list")
        self._maybe_fail()
        return list(self.server)

    def add_favorite(self, flight):
        self.calls.append("add")
        self._maybe_fail()
        self.server.append(flight)

    def remove_favorite(self, flight):
        self.calls.append("remove")
        self._maybe_fail()
        self.server = [f for f in self.server if not same_favorite(f, flight)]


# =========================
# EQUALITY
# =========================
def test_same_day_different_time_is_same_favorite():
    a = make_schedule(fl_date="2024-01-05T10:00:00Z", dep_time=10.0)
    b = make_schedule(fl_date="2024-01-05T18:30:00Z", dep_time=18.5)
    assert same_favorite(a, b)


def test_date_only_and_timestamp_match():
    assert same_favorite(
        make_schedule(fl_date="2024-01-05"),
        make_schedule(fl_date="2024-01-05T23:59:00Z"),
    )


def test_different_day_is_different_favorite():
    assert not same_favorite(
        make_schedule(fl_date="2024-01-05T10:00:00Z"),
        make_schedule(fl_date="2024-01-06T10:00:00Z"),
    )


@pytest.mark.parametrize("field, value", [
    ("origin", "BCN"),
    ("dest", "LHR"),
    ("airline", "Air Europa"),
])
def test_route_and_airline_must_match(field, value):
    assert not same_favorite(make_schedule(), make_schedule(**{field: value}))


def test_none_never_matches():
    assert not same_favorite(None, make_schedule())
    assert not same_favorite(make_schedule(), None)


# =========================
# STORE
# =========================
@pytest.fixture
def fake(signed_in):
    return FakeClient(signed_in, [make_schedule(origin="BCN", dest="LHR", airline="Vueling")])


@pytest.fixture
def store(fake):
    s = FavoritesStore(fake)
    s.load()
    return s


def test_load_without_session_is_empty():
    fake = FakeClient(SessionStore({}), [make_schedule()])
    store = FavoritesStore(fake)
    assert store.load() == []
    assert fake.calls == []


def test_load_failure_degrades_to_empty(fake):
    fake.fail = NetworkError("down")
    store = FavoritesStore(fake)
    assert store.load() == []
    assert store.loading is False


def test_add_refetches_list(store, fake):
    flight = make_schedule()
    assert not store.is_favorite(flight)
    assert store.add(flight) is True
    assert fake.calls[-2:] == ["add", "list"]
    assert store.is_favorite(flight)
    assert len(store.favorites) == 2


def test_add_failure_leaves_list_alone(store, fake):
    fake.fail = HttpError("nope", status_code=500)
    assert store.add(make_schedule()) is False
    assert len(store.favorites) == 1


def test_remove_waits_for_confirmation(store, fake):
    flight = store.favorites[0]
    assert store.remove(flight) is False
    assert store.pending_removal == flight
    assert "remove" not in fake.calls
    assert store.is_favorite(flight)


def test_confirm_removal_filters_locally(store, fake):
    flight = store.favorites[0]
    store.remove(flight)
    calls_before = len(fake.calls)
    assert store.confirm_removal() is True
    assert store.favorites == []
    assert store.pending_removal is None
    # no re-fetch after removal
    assert fake.calls[calls_before:] == ["remove"]


def test_cancel_removal_keeps_favorite(store, fake):
    flight = store.favorites[0]
    store.remove(flight)
    store.cancel_removal()
    assert store.pending_removal is None
    assert store.is_favorite(flight)
    assert "remove" not in fake.calls


def test_confirm_without_pending_is_noop(store):
    assert store.confirm_removal() is False


def test_failed_removal_keeps_favorite(store, fake):
    flight = store.favorites[0]
    fake.fail = NetworkError("down")
    assert store.remove(flight, skip_confirmation=True) is False
    assert store.is_favorite(flight)


def test_remove_matches_same_day_copy(store):
    copy = make_schedule(origin="BCN", dest="LHR", airline="Vueling", fl_date="2024-01-05T22:00:00Z")
    assert store.remove(copy, skip_confirmation=True) is True
    assert store.favorites == []


def test_toggle_adds_then_removes_without_confirmation(store):
    flight = make_schedule(origin="MAD", dest="FCO", airline="ITA")
    assert store.toggle(flight) is True
    assert store.is_favorite(flight)
    assert store.toggle(flight) is True
    assert not store.is_favorite(flight)
    assert store.pending_removal is None


def test_clear_on_logout(store, signed_in):
    signed_in.on_end(store.clear)
    store.remove(store.favorites[0])
    signed_in.end()
    assert store.favorites == []
    assert store.pending_removal is None
