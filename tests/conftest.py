import json
import os

import pytest

# Use test env
os.environ.setdefault("UBICAIR_API_URL", "http://backend.test")
os.environ.setdefault("UBICAIR_LOG_LEVEL", "WARNING")

from ubicair.api import UbicAirClient
from ubicair.models import ScheduleRecord, TelemetryRecord
from ubicair.session import Session, SessionStore


class DummyResp:
    def __init__(self, status_code=200, payload=None, text=None):
        self.status_code = status_code
        self._payload = payload
        self.text = text if text is not None else json.dumps(payload)

    def json(self):
        if self._payload is None:
            raise ValueError("No JSON object could be decoded")
        return self._payload


@pytest.fixture
def storage():
    return {}


@pytest.fixture
def sessions(storage):
    return SessionStore(storage)


@pytest.fixture
def signed_in(sessions):
    sessions.begin(Session(token="tok-123", user_id="u1"))
    return sessions


@pytest.fixture
def client(signed_in):
    return UbicAirClient(signed_in, base_url="http://backend.test", timeout=5)


def make_flight(flight_id="IB3170", origin="MAD", destination="JFK", progress=50.0, **kw):
    fields = dict(latitude=40.0, longitude=-20.0, altitude=35000, speed=850, fuel=42000)
    fields.update(kw)
    return TelemetryRecord(
        flight_id=flight_id, origin=origin, destination=destination, progress=progress, **fields
    )


def make_schedule(origin="MAD", dest="JFK", airline="Iberia", fl_date="2024-01-05T10:00:00Z", **kw):
    return ScheduleRecord(origin=origin, dest=dest, airline=airline, fl_date=fl_date, **kw)
