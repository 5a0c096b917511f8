import pytest
import requests
from unittest.mock import patch

from conftest import DummyResp, make_schedule
from ubicair.api import UbicAirClient
from ubicair.errors import (
    HttpError,
    MalformedResponseError,
    NetworkError,
    NotAuthenticatedError,
)


def test_login_returns_session_without_sending_token(sessions):
    calls = []

    def fake_request(method, url, headers=None, json=None, params=None, timeout=None):
        calls.append((method, url, headers, json))
        return DummyResp(200, {"success": True, "data": {"token": "abc", "userId": 7}})

    client = UbicAirClient(sessions, base_url="http://backend.test")
    with patch("ubicair.api.requests.request", new=fake_request):
        session = client.login("ana@example.com", "secret1")

    assert session.token == "abc"
    assert session.user_id == "7"
    method, url, headers, body = calls[0]
    assert method == "POST"
    assert url == "http://backend.test/api/users/login"
    assert "Authorization" not in headers
    assert body == {"email": "ana@example.com", "password": "secret1"}


def test_login_accepts_nested_user_id(sessions):
    payload = {"success": True, "data": {"token": "abc", "user": {"_id": "650f"}}}
    client = UbicAirClient(sessions, base_url="http://backend.test")
    with patch("ubicair.api.requests.request", return_value=DummyResp(200, payload)):
        assert client.login("a@b.co", "x").user_id == "650f"


def test_wrong_password_surfaces_server_message(sessions):
    client = UbicAirClient(sessions, base_url="http://backend.test")
    with patch("ubicair.api.requests.request",
               return_value=DummyResp(401, {"error": "Invalid credentials"})):
        with pytest.raises(HttpError) as e:
            client.login("ana@example.com", "wrong")

    assert e.value.message == "Invalid credentials"
    assert e.value.status_code == 401
    assert sessions.load() is None


def test_http_error_without_body_has_generic_message(client):
    with patch("ubicair.api.requests.request", return_value=DummyResp(500, None, text="boom")):
        with pytest.raises(HttpError) as e:
            client.statistics()
    assert "500" in e.value.message


def test_network_failure_is_network_error(client):
    with patch("ubicair.api.requests.request", side_effect=requests.ConnectionError("refused")):
        with pytest.raises(NetworkError):
            client.active_flights()


def test_success_flag_must_be_true(client):
    with patch("ubicair.api.requests.request",
               return_value=DummyResp(200, {"success": False, "error": "Simulator offline"})):
        with pytest.raises(MalformedResponseError) as e:
            client.active_flights()
    assert e.value.message == "Simulator offline"


def test_non_json_body_is_malformed(client):
    with patch("ubicair.api.requests.request", return_value=DummyResp(200, None, text="<html>")):
        with pytest.raises(MalformedResponseError):
            client.statistics()


def test_authenticated_call_sends_bearer_token(client):
    seen = {}

    def fake_request(method, url, headers=None, json=None, params=None, timeout=None):
        seen.update(method=method, url=url, headers=headers, params=params)
        return DummyResp(200, {"success": True, "data": {"vuelos": [
            {"ORIGIN": "MAD", "DEST": "BCN", "AIRLINE": "Vueling", "FL_DATE": "2024-03-01"},
        ]}})

    with patch("ubicair.api.requests.request", new=fake_request):
        flights = client.search_flights("MAD")

    assert seen["headers"]["Authorization"] == "Bearer tok-123"
    assert seen["params"] == {"search": "MAD"}
    assert seen["url"] == "http://backend.test/api/vuelos"
    assert [(f.origin, f.dest, f.airline) for f in flights] == [("MAD", "BCN", "Vueling")]


def test_authenticated_call_without_session_raises(sessions):
    client = UbicAirClient(sessions, base_url="http://backend.test")
    with patch("ubicair.api.requests.request") as fake:
        with pytest.raises(NotAuthenticatedError):
            client.list_favorites()
    fake.assert_not_called()


def test_add_favorite_posts_full_snapshot(client):
    seen = {}

    def fake_request(method, url, headers=None, json=None, params=None, timeout=None):
        seen.update(method=method, url=url, json=json)
        return DummyResp(201, {"success": True, "data": {}})

    flight = make_schedule(dep_time=10.5, arr_time=13.25, air_time=420, distance=5800,
                           dep_delay=3, arr_delay=-5)
    with patch("ubicair.api.requests.request", new=fake_request):
        client.add_favorite(flight)

    assert seen["method"] == "POST"
    assert seen["url"] == "http://backend.test/api/users/u1/favorites"
    assert seen["json"] == {"flight": {
        "ORIGIN": "MAD", "DEST": "JFK", "AIRLINE": "Iberia", "FL_DATE": "2024-01-05T10:00:00Z",
        "DEP_TIME": 10.5, "ARR_TIME": 13.25, "AIR_TIME": 420, "DISTANCE": 5800,
        "DEP_DELAY": 3, "ARR_DELAY": -5,
    }}


def test_active_flights_parses_telemetry(client):
    payload = {"success": True, "data": [
        {"_id": "x1", "flightId": "IB3170", "origin": "MAD", "destination": "JFK",
         "latitude": 41.2, "longitude": -30.5, "altitude": 36000, "speed": 870,
         "fuel": 40000, "progress": 37.5, "timestamp": "2024-06-01T12:00:00Z"},
    ]}
    with patch("ubicair.api.requests.request", return_value=DummyResp(200, payload)):
        flights = client.active_flights()

    assert len(flights) == 1
    f = flights[0]
    assert (f.flight_id, f.progress, f.record_id) == ("IB3170", 37.5, "x1")
    assert f.timestamp.year == 2024


def test_telemetry_record_missing_position_is_malformed(client):
    payload = {"success": True, "data": [{"flightId": "IB1", "origin": "MAD", "destination": "BCN"}]}
    with patch("ubicair.api.requests.request", return_value=DummyResp(200, payload)):
        with pytest.raises(MalformedResponseError):
            client.active_flights()


def test_telemetry_stats_read_from_stats_key(client):
    payload = {"success": True, "stats": {"vuelosActivos": 4, "completados": 9}}
    with patch("ubicair.api.requests.request", return_value=DummyResp(200, payload)):
        stats = client.telemetry_stats()
    assert stats.active_flights == 4
    assert stats.extra == {"completados": 9}


def test_update_user_sends_only_changes(client):
    seen = {}

    def fake_request(method, url, headers=None, json=None, params=None, timeout=None):
        seen.update(method=method, url=url, json=json)
        return DummyResp(200, {"success": True, "data": {"nombre": "Ana", "email": "new@example.com"}})

    with patch("ubicair.api.requests.request", new=fake_request):
        profile = client.update_user({"email": "new@example.com"})

    assert seen["method"] == "PUT"
    assert seen["url"] == "http://backend.test/api/users/u1"
    assert seen["json"] == {"email": "new@example.com"}
    assert profile.email == "new@example.com"
