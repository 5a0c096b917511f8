"""Display formatting for flight cards, popups and schedule details."""

import math
from datetime import datetime

from ubicair.models import parse_datetime

GREEN = "delay-green"
YELLOW = "delay-yellow"
RED = "delay-red"

DELAY_COLORS = {GREEN: "#2e7d32", YELLOW: "#f9a825", RED: "#c62828"}


def format_number(value) -> str:
    """Thousands separators, at most three decimals, no trailing zeros."""
    if value is None:
        return "N/A"
    value = float(value)
    if value.is_integer():
        return f"{int(value):,}"
    return f"{value:,.3f}".rstrip("0").rstrip(".")


def format_position(lat: float, lon: float) -> str:
    return f"{lat:.4f}°, {lon:.4f}°"


def format_timestamp(timestamp: datetime) -> str:
    if timestamp is None:
        return ""
    return timestamp.astimezone().strftime("%H:%M:%S")


def format_hour(value) -> str:
    """Decimal hours (e.g. 13.5) as HH:MM. Missing or zero reads N/A."""
    if not value:
        return "N/A"
    hours = math.floor(value)
    minutes = round((value - hours) * 60)
    if minutes == 60:
        hours, minutes = hours + 1, 0
    return f"{hours:02d}:{minutes:02d}"


def format_date(value) -> str:
    try:
        dt = parse_datetime(value)
    except (ValueError, OverflowError):
        return str(value)
    if dt is None:
        return "N/A"
    return f"{dt:%B} {dt.day}, {dt.year}"


def delay_class(delay) -> str:
    if delay <= 0:
        return GREEN
    if 5 <= delay <= 15:
        return YELLOW
    if delay > 15:
        return RED
    return GREEN


def delay_label(delay) -> str:
    if delay is None:
        return ""
    if delay <= 0:
        return "On time"
    return f"Delay: +{format_number(delay)} min"
