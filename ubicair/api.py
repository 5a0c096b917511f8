"""HTTP client for the UbicAir backend.

Every response must be a 2xx AND a JSON object carrying ``success: true``
before its payload is trusted. Failures are raised as ``ApiError``
subclasses; callers decide how to recover.
"""

import logging
from typing import Any, Dict, List, Optional

import requests

from ubicair import config
from ubicair.errors import (
    HttpError,
    MalformedResponseError,
    NetworkError,
    NotAuthenticatedError,
)
from ubicair.models import ScheduleRecord, TelemetryRecord, TelemetryStats, UserProfile
from ubicair.session import Session, SessionStore

logger = logging.getLogger(__name__)


def _error_message(resp) -> str:
    try:
        body = resp.json()
    except ValueError:
        body = None
    if isinstance(body, dict):
        message = body.get("error") or body.get("message")
        if message:
            return str(message)
    return f"Request failed with status {resp.status_code}"


class UbicAirClient:
    """Thin wrapper over the backend REST API."""

    def __init__(self, sessions: Optional[SessionStore] = None, base_url: str = config.API_URL,
                 timeout: float = config.REQUEST_TIMEOUT_S):
        self.sessions = sessions
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    # ======================================================
    # Transport
    # ======================================================
    def _session(self) -> Session:
        session = self.sessions.load() if self.sessions else None
        if session is None:
            raise NotAuthenticatedError("No active session")
        return session

    def _request(self, method: str, path: str, auth: bool = True,
                 json: Any = None, params: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        headers = {}
        if auth:
            headers.update(self._session().auth_header)
        if json is not None:
            headers["Content-Type"] = "application/json"

        url = f"{self.base_url}{path}"
        try:
            resp = requests.request(
                method, url, headers=headers, json=json, params=params, timeout=self.timeout
            )
        except requests.RequestException as e:
            logger.warning("%s %s failed: %s", method, path, e)
            raise NetworkError(f"Could not reach the server: {e}")

        if not 200 <= resp.status_code < 300:
            message = _error_message(resp)
            logger.warning("%s %s -> %s %s", method, path, resp.status_code, message)
            raise HttpError(message, status_code=resp.status_code)

        try:
            body = resp.json()
        except ValueError:
            raise MalformedResponseError(f"{path} did not return JSON", resp.status_code)

        if not isinstance(body, dict) or body.get("success") is not True:
            message = body.get("error") or body.get("message") if isinstance(body, dict) else None
            raise MalformedResponseError(
                message or f"{path} did not report success", resp.status_code
            )
        return body

    @staticmethod
    def _data(body: Dict[str, Any]):
        return body.get("data")

    # ======================================================
    # Users
    # ======================================================
    def _open_session(self, body: Dict[str, Any]) -> Session:
        data = self._data(body)
        if not isinstance(data, dict):
            data = {}
        user = data.get("user") or {}
        token = data.get("token") or body.get("token")
        user_id = (
            data.get("userId")
            or user.get("_id")
            or user.get("id")
            or body.get("userId")
        )
        if not token or not user_id:
            raise MalformedResponseError("Authentication response had no token or user id")
        return Session(token=token, user_id=str(user_id))

    def login(self, email: str, password: str) -> Session:
        body = self._request(
            "POST", "/api/users/login", auth=False,
            json={"email": email, "password": password},
        )
        return self._open_session(body)

    def register(self, name: str, email: str, password: str) -> Session:
        body = self._request(
            "POST", "/api/users/register", auth=False,
            json={"nombre": name, "email": email, "password": password},
        )
        return self._open_session(body)

    def get_user(self) -> UserProfile:
        session = self._session()
        body = self._request("GET", f"/api/users/{session.user_id}")
        return UserProfile.from_api(self._data(body) or {})

    def update_user(self, changes: Dict[str, Any]) -> UserProfile:
        """PUT only the changed fields (nombre, email, password, foto)."""
        session = self._session()
        body = self._request("PUT", f"/api/users/{session.user_id}", json=changes)
        return UserProfile.from_api(self._data(body) or {})

    # ======================================================
    # Favorites
    # ======================================================
    def list_favorites(self) -> List[ScheduleRecord]:
        session = self._session()
        body = self._request("GET", f"/api/users/{session.user_id}/favorites")
        data = self._data(body) or {}
        raw = data.get("favorites", []) if isinstance(data, dict) else data
        return [ScheduleRecord.from_api(r) for r in raw or []]

    def add_favorite(self, flight: ScheduleRecord) -> None:
        session = self._session()
        self._request(
            "POST", f"/api/users/{session.user_id}/favorites",
            json={"flight": flight.to_payload()},
        )

    def remove_favorite(self, flight: ScheduleRecord) -> None:
        session = self._session()
        self._request(
            "DELETE", f"/api/users/{session.user_id}/favorites",
            json={"flight": flight.to_payload()},
        )

    # ======================================================
    # Schedules & statistics
    # ======================================================
    def search_flights(self, term: str) -> List[ScheduleRecord]:
        body = self._request("GET", "/api/vuelos", params={"search": term})
        data = self._data(body)
        raw = data.get("vuelos", []) if isinstance(data, dict) else data
        return [ScheduleRecord.from_api(r) for r in raw or []]

    def statistics(self) -> Dict[str, Any]:
        return self._data(self._request("GET", "/api/vuelos/estadisticas")) or {}

    def delay_analysis(self) -> Dict[str, Any]:
        return self._data(self._request("GET", "/api/vuelos/analisis-retrasos")) or {}

    def airline_comparison(self):
        return self._data(self._request("GET", "/api/vuelos/comparacion-aerolineas")) or []

    # ======================================================
    # Live telemetry
    # ======================================================
    def active_flights(self) -> List[TelemetryRecord]:
        body = self._request("GET", "/api/telemetry/active", auth=False)
        raw = self._data(body)
        if not isinstance(raw, list):
            raise MalformedResponseError("telemetry payload is not a list")
        return [TelemetryRecord.from_api(r) for r in raw]

    def telemetry_stats(self) -> TelemetryStats:
        body = self._request("GET", "/api/telemetry/stats", auth=False)
        return TelemetryStats.from_api(body.get("stats") or self._data(body))
