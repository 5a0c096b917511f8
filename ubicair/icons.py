"""Plane marker geometry and styling: heading, size, colour and flight phase."""

import math
from dataclasses import dataclass

import folium

from ubicair import config
from ubicair.airports import AIRPORTS

PLANE_SVG_PATH = (
    "M21,16v-2l-8-5V3.5C13,2.67,12.33,2,11.5,2S10,2.67,10,3.5V9l-8,5v2l8-2.5V19"
    "l-2,1.5V22l3.5-1l3.5,1v-1.5L13,19v-5.5L21,16z"
)


def bearing(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Planar heading in degrees [0, 360) from point 1 towards point 2.

    Not a great-circle bearing; the simulator moves planes along straight
    interpolated lines so the flat approximation matches what is drawn.
    """
    angle = math.degrees(math.atan2(lon2 - lon1, lat2 - lat1))
    return (angle + 360) % 360


def flight_bearing(flight, airports=AIRPORTS) -> float:
    dest = airports.get((flight.destination or "").strip().upper())
    if dest is None:
        return 0
    return bearing(flight.latitude, flight.longitude, dest[0], dest[1])


def icon_size(zoom) -> int:
    if zoom <= 4:
        return config.ICON_SMALL_SIZE
    if zoom >= 8:
        return config.ICON_LARGE_SIZE
    return config.ICON_BASE_SIZE


def progress_color(progress) -> str:
    departing, mid_route, arriving = config.PROGRESS_COLORS
    if progress < 30:
        return departing
    if progress < 70:
        return mid_route
    if progress <= 100:
        return arriving
    # > 100 and NaN land here
    return departing


@dataclass(frozen=True)
class FlightPhase:
    key: str
    label: str
    emoji: str


TAKEOFF = FlightPhase("takeoff", "Takeoff", "🛫")
CRUISE = FlightPhase("cruise", "Cruise", "✈️")
APPROACH = FlightPhase("approach", "Approach", "🛬")


def flight_phase(progress) -> FlightPhase:
    # NaN reads as departing, same as progress_color
    if math.isnan(progress) or progress < 10:
        return TAKEOFF
    if progress < 90:
        return CRUISE
    return APPROACH


def plane_icon_html(rotation: float, color: str, size: int) -> str:
    return (
        f'<div style="width: {size}px; height: {size}px; display: flex; '
        f'align-items: center; justify-content: center;">'
        f'<svg width="{size}" height="{size}" viewBox="0 0 24 24" fill="{color}" '
        f'xmlns="http://www.w3.org/2000/svg" '
        f'style="transform: rotate({rotation:.1f}deg); transform-origin: center;">'
        f'<path d="{PLANE_SVG_PATH}"/>'
        f'</svg></div>'
    )


def plane_icon(rotation: float = 0, color: str = config.PROGRESS_COLORS[0],
               zoom: int = config.MAP_ZOOM) -> folium.DivIcon:
    size = icon_size(zoom)
    anchor = size // 2
    return folium.DivIcon(
        html=plane_icon_html(rotation, color, size),
        icon_size=(size, size),
        icon_anchor=(anchor, anchor),
        popup_anchor=(0, -anchor),
        class_name="plane-icon",
    )
