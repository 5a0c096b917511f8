"""Folium map of the live flights."""

from dataclasses import dataclass
from typing import Iterable, Tuple

import folium

from ubicair import config
from ubicair.formatting import format_number, format_position
from ubicair.icons import flight_bearing, plane_icon, progress_color
from ubicair.models import TelemetryRecord


@dataclass
class MapViewport:
    """Where the map is looking, and whether it has been auto-fitted yet.

    The auto-fit happens once, on the first non-empty flight list. Later
    polls keep whatever centre and zoom the user has moved to.
    """
    center: Tuple[float, float] = config.MAP_CENTER
    zoom: int = config.MAP_ZOOM
    fitted: bool = False

    def report(self, zoom=None, center=None) -> bool:
        """Record the viewport reported by the map widget. True if zoom changed."""
        if center:
            if isinstance(center, dict):
                center = (center.get("lat"), center.get("lng"))
            if None not in center:
                self.center = (float(center[0]), float(center[1]))
        if zoom is None or zoom == self.zoom:
            return False
        self.zoom = zoom
        return True


def popup_html(flight: TelemetryRecord) -> str:
    color = progress_color(flight.progress)
    return (
        f'<div class="flight-popup">'
        f'<h4>✈️ {flight.flight_id}</h4>'
        f'<p><strong>{flight.origin} → {flight.destination}</strong></p>'
        f'<hr/>'
        f'<p>📍 Position: {format_position(flight.latitude, flight.longitude)}</p>'
        f'<p>📏 Altitude: {format_number(flight.altitude)} ft</p>'
        f'<p>⚡ Speed: {format_number(flight.speed)} km/h</p>'
        f'<p>⛽ Fuel: {format_number(flight.fuel)} L</p>'
        f'<p>📊 Progress: {format_number(flight.progress)}%</p>'
        f'<div style="background: #e0e0e0; border-radius: 4px; height: 6px;">'
        f'<div style="width: {max(0, min(flight.progress, 100))}%; height: 6px; '
        f'border-radius: 4px; background-color: {color};"></div>'
        f'</div></div>'
    )


def flight_marker(flight: TelemetryRecord, zoom: int) -> folium.Marker:
    return folium.Marker(
        location=[flight.latitude, flight.longitude],
        icon=plane_icon(flight_bearing(flight), progress_color(flight.progress), zoom),
        popup=folium.Popup(popup_html(flight), max_width=260),
        tooltip=flight.flight_id,
    )


def build_radar_map(flights: Iterable[TelemetryRecord], viewport: MapViewport) -> folium.Map:
    flights = list(flights)
    m = folium.Map(
        location=list(viewport.center),
        zoom_start=viewport.zoom,
        tiles=config.TILES_URL,
        attr=config.TILES_ATTRIBUTION,
    )

    if flights and not viewport.fitted:
        bounds = [[f.latitude, f.longitude] for f in flights]
        m.fit_bounds(
            bounds,
            padding=(config.FIT_PADDING_PX, config.FIT_PADDING_PX),
            max_zoom=config.FIT_MAX_ZOOM,
        )
        viewport.fitted = True

    for flight in flights:
        flight_marker(flight, viewport.zoom).add_to(m)
    return m
