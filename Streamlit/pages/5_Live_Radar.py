import streamlit as st
from streamlit_folium import st_folium

from ubicair import config, ui
from ubicair.formatting import format_number, format_position, format_timestamp
from ubicair.icons import flight_phase, progress_color
from ubicair.pipeline import results_label, visible_flights
from ubicair.radar_map import MapViewport, build_radar_map

# ============================
# CONFIG
# ============================
st.set_page_config(page_title="Live Radar", page_icon="🛰️", layout="wide")

ui.require_session()
ui.account_sidebar()

source = ui.get_live_source()
source.start()

if "_radar_viewport" not in st.session_state:
    st.session_state["_radar_viewport"] = MapViewport()
viewport = st.session_state["_radar_viewport"]

st.title("🛰️ Live Flight Radar")


# ============================
# FLIGHT CARDS
# ============================
def flight_card(flight):
    color = progress_color(flight.progress)
    phase = flight_phase(flight.progress)
    progress = max(0, min(flight.progress, 100))

    with st.container(border=True):
        st.markdown(
            f'<div style="border-left: 5px solid {color}; padding-left: 10px;">'
            f'<strong>✈️ {flight.flight_id}</strong> '
            f'<span style="float: right; color: #888;">{format_timestamp(flight.timestamp)}</span><br/>'
            f'<span style="font-size: 1.2em;">{flight.origin} → {flight.destination}</span>'
            f'<div style="background: #e0e0e0; border-radius: 4px; height: 8px; margin: 6px 0;">'
            f'<div style="width: {progress}%; height: 8px; border-radius: 4px; background-color: {color};"></div>'
            f'</div>'
            f'<small>{format_number(flight.progress)}%</small>'
            f'</div>',
            unsafe_allow_html=True,
        )
        st.markdown(
            f"📍 **Position:** {format_position(flight.latitude, flight.longitude)}  \n"
            f"📏 **Altitude:** {format_number(flight.altitude)} ft  \n"
            f"⚡ **Speed:** {format_number(flight.speed)} km/h  \n"
            f"⛽ **Fuel:** {format_number(flight.fuel)} L"
        )
        st.markdown(f"`{phase.emoji} {phase.label}`")


# ============================
# LIVE VIEW
# ============================
@st.fragment(run_every=config.FLIGHTS_POLL_INTERVAL_S)
def live_view():
    snapshot = source.snapshot

    if snapshot.loading and not snapshot.flights:
        st.info("Loading live flight data...")
        return

    if snapshot.error:
        st.error(snapshot.error)
        if st.button("Retry"):
            source.refresh()
            st.rerun()
        return

    if snapshot.stats is not None:
        st.metric("Active flights", snapshot.stats.active_flights)

    flights = snapshot.flights
    if not flights:
        st.info("No active flights right now.")
        st.caption("Start the flight simulator to see live traffic.")
        return

    query = st.text_input(
        "Search flights",
        placeholder="Search by origin, destination or flight number...",
        key="radar_search",
    )
    shown = visible_flights(flights.values(), query)
    if query.strip():
        st.caption(results_label(len(shown)))

    result = st_folium(
        build_radar_map(shown, viewport),
        height=config.MAP_HEIGHT_PX,
        use_container_width=True,
        key="radar_map",
        returned_objects=["zoom", "center"],
    )
    if result:
        # icons pick up the new zoom on the next refresh
        viewport.report(result.get("zoom"), result.get("center"))

    st.subheader("Flight information")
    if not shown:
        st.info("No flights match your search.")

    columns = st.columns(3)
    for i, flight in enumerate(shown):
        with columns[i % 3]:
            flight_card(flight)

    st.caption(f"🔴 Live updates every {config.FLIGHTS_POLL_INTERVAL_S} seconds")


live_view()
