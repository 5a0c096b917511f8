"""Records exchanged with the UbicAir backend."""

from dataclasses import dataclass, field
from datetime import date, datetime, timezone
from typing import Any, Dict, Optional

from dateutil import parser

from ubicair.errors import MalformedResponseError


def parse_datetime(value) -> Optional[datetime]:
    """Parse an API timestamp. Naive values are taken to be UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        dt = value
    elif isinstance(value, date):
        dt = datetime(value.year, value.month, value.day)
    else:
        try:
            dt = parser.isoparse(str(value))
        except ValueError:
            dt = parser.parse(str(value))
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def calendar_day(value) -> Optional[date]:
    """UTC calendar day of a date-like value, or None if it can't be read."""
    try:
        dt = parse_datetime(value)
    except (ValueError, OverflowError):
        return None
    return dt.date() if dt else None


def _number(raw: Dict[str, Any], key: str, default=0.0) -> float:
    value = raw.get(key)
    if value is None:
        return default
    try:
        return float(value)
    except (TypeError, ValueError):
        raise MalformedResponseError(f"'{key}' is not a number: {value!r}")


def _optional_number(raw: Dict[str, Any], key: str) -> Optional[float]:
    if raw.get(key) in (None, ""):
        return None
    return _number(raw, key)


# ======================================================
# Live telemetry
# ======================================================
@dataclass(frozen=True)
class TelemetryRecord:
    flight_id: str
    origin: str
    destination: str
    latitude: float
    longitude: float
    altitude: float = 0.0
    speed: float = 0.0
    fuel: float = 0.0
    progress: float = 0.0
    timestamp: Optional[datetime] = None
    record_id: Optional[str] = None

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "TelemetryRecord":
        if not isinstance(raw, dict):
            raise MalformedResponseError(f"telemetry record is not an object: {raw!r}")
        missing = [k for k in ("flightId", "origin", "destination", "latitude", "longitude") if raw.get(k) is None]
        if missing:
            raise MalformedResponseError(f"telemetry record missing {', '.join(missing)}")
        try:
            timestamp = parse_datetime(raw.get("timestamp"))
        except (ValueError, OverflowError):
            timestamp = None
        return cls(
            flight_id=str(raw["flightId"]),
            origin=str(raw["origin"]),
            destination=str(raw["destination"]),
            latitude=_number(raw, "latitude"),
            longitude=_number(raw, "longitude"),
            altitude=_number(raw, "altitude"),
            speed=_number(raw, "speed"),
            fuel=_number(raw, "fuel"),
            progress=_number(raw, "progress"),
            timestamp=timestamp,
            record_id=raw.get("_id"),
        )


@dataclass(frozen=True)
class TelemetryStats:
    active_flights: int = 0
    extra: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_api(cls, raw: Optional[Dict[str, Any]]) -> "TelemetryStats":
        raw = dict(raw or {})
        active = raw.pop("vuelosActivos", 0) or 0
        try:
            active = int(float(active))
        except (TypeError, ValueError, OverflowError):
            raise MalformedResponseError(f"'vuelosActivos' is not a number: {active!r}")
        return cls(active_flights=active, extra=raw)


# ======================================================
# Schedule records (search results and favorites)
# ======================================================
@dataclass(frozen=True)
class ScheduleRecord:
    origin: str
    dest: str
    airline: str
    fl_date: Optional[str] = None
    dep_time: Optional[float] = None
    arr_time: Optional[float] = None
    air_time: Optional[float] = None
    distance: Optional[float] = None
    dep_delay: Optional[float] = None
    arr_delay: Optional[float] = None

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "ScheduleRecord":
        if not isinstance(raw, dict):
            raise MalformedResponseError(f"flight record is not an object: {raw!r}")
        return cls(
            origin=raw.get("ORIGIN") or "",
            dest=raw.get("DEST") or "",
            airline=raw.get("AIRLINE") or "",
            fl_date=raw.get("FL_DATE"),
            dep_time=_optional_number(raw, "DEP_TIME"),
            arr_time=_optional_number(raw, "ARR_TIME"),
            air_time=_optional_number(raw, "AIR_TIME"),
            distance=_optional_number(raw, "DISTANCE"),
            dep_delay=_optional_number(raw, "DEP_DELAY"),
            arr_delay=_optional_number(raw, "ARR_DELAY"),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "ORIGIN": self.origin,
            "DEST": self.dest,
            "AIRLINE": self.airline,
            "FL_DATE": self.fl_date,
            "DEP_TIME": self.dep_time,
            "ARR_TIME": self.arr_time,
            "AIR_TIME": self.air_time,
            "DISTANCE": self.distance,
            "DEP_DELAY": self.dep_delay,
            "ARR_DELAY": self.arr_delay,
        }

    def favorite_key(self):
        # Time of day is ignored: a favorite is a schedule, not one departure.
        return (self.origin, self.dest, self.airline, calendar_day(self.fl_date))


# ======================================================
# Users
# ======================================================
@dataclass(frozen=True)
class UserProfile:
    name: str = ""
    email: str = ""
    photo: Optional[str] = None

    @classmethod
    def from_api(cls, raw: Dict[str, Any]) -> "UserProfile":
        raw = raw or {}
        return cls(
            name=raw.get("nombre") or "",
            email=raw.get("email") or "",
            photo=raw.get("fotoPerfil") or None,
        )

    @property
    def initials(self) -> str:
        return self.name[:1].upper() if self.name else "?"
