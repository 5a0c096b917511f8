import logging

import streamlit as st

from ubicair import charts, stats, ui
from ubicair.errors import ApiError

logger = logging.getLogger("ubicair.pages.dashboard")

# ============================
# CONFIG
# ============================
st.set_page_config(
    page_title="Flight Statistics",
    page_icon="📊",
    layout="wide"
)

ui.require_session()
ui.account_sidebar()
client = ui.get_client()


# ============================
# LOAD DATA
# ============================
@st.cache_data(ttl=300, show_spinner="Loading statistics...")
def load_statistics(_client):
    return _client.statistics()


@st.cache_data(ttl=300, show_spinner="Loading delay analysis...")
def load_delays(_client):
    return _client.delay_analysis()


@st.cache_data(ttl=300, show_spinner="Loading airline comparison...")
def load_airlines(_client):
    return _client.airline_comparison()


def fetch(loader, what, key):
    try:
        return loader(client)
    except ApiError as e:
        logger.warning("could not load %s: %s", what, e)
        st.error(f"Could not load {what}: {e.message}")
        if st.button("Retry", key=f"retry_{key}"):
            loader.clear()
            st.rerun()
        return None


st.title("📊 Flight Statistics")
st.caption("Aggregated flight data: delays, airlines, routes and busy hours")

tab_stats, tab_delays, tab_airlines, tab_routes, tab_time = st.tabs(
    ["Overview", "Delays", "Airlines", "Routes", "Time"]
)

# ============================
# SECTION 1 — OVERVIEW
# ============================
with tab_stats:
    payload = fetch(load_statistics, "statistics", "overview")
    if payload is not None:
        summary = stats.summary(payload)

        col1, col2, col3 = st.columns(3)
        col1.metric("Total flights", f"{int(summary['total_flights']):,}")
        col2.metric("Avg departure delay (min)", round(summary["avg_dep_delay"], 1))
        col3.metric("Avg arrival delay (min)", round(summary["avg_arr_delay"], 1))

        col4, col5, col6 = st.columns(3)
        col4.metric("Avg air time (min)", round(summary["avg_air_time"], 1))
        col5.metric("Avg distance (km)", round(summary["avg_distance"], 1))
        col6.metric("On-time flights (%)", f"{summary['on_time_pct']}%")

        st.plotly_chart(charts.average_delays(summary), use_container_width=True)

# ============================
# SECTION 2 — DELAYS
# ============================
with tab_delays:
    payload = fetch(load_delays, "delay analysis", "delays")
    if payload is not None:
        monthly, distribution = stats.delay_frames(payload)

        if monthly.empty:
            st.info("No monthly delay data available.")
        else:
            st.plotly_chart(charts.monthly_delays(monthly), use_container_width=True)

        if distribution.empty:
            st.info("No delay distribution available.")
        else:
            st.plotly_chart(charts.delay_distribution(distribution), use_container_width=True)

# ============================
# SECTION 3 — AIRLINES
# ============================
with tab_airlines:
    payload = fetch(load_airlines, "airline comparison", "airlines")
    if payload is not None:
        airlines, performance = stats.airline_frames(payload)

        if airlines.empty:
            st.info("No airline data available.")
        else:
            col1, col2 = st.columns(2)
            with col1:
                st.plotly_chart(charts.airline_punctuality(airlines), use_container_width=True)
            with col2:
                st.plotly_chart(charts.airline_performance(performance), use_container_width=True)

            table = airlines.rename(columns={
                "airline": "Airline",
                "flights": "Flights",
                "on_time": "On-time (%)",
                "avg_delay": "Avg delay (min)",
                "avg_distance": "Avg distance (km)",
            })
            st.dataframe(table, use_container_width=True, hide_index=True)

# ============================
# SECTION 4 — ROUTES
# ============================
with tab_routes:
    payload = fetch(load_statistics, "statistics", "routes")
    if payload is not None:
        top_routes, categories = stats.route_frames(payload)

        if top_routes.empty:
            st.info("No route data available.")
        else:
            col1, col2 = st.columns([3, 2])
            with col1:
                st.plotly_chart(charts.top_routes(top_routes), use_container_width=True)
            with col2:
                if not categories.empty:
                    st.plotly_chart(charts.distance_categories(categories), use_container_width=True)

            table = top_routes.rename(columns={
                "route": "Route",
                "flights": "Flights",
                "avg_delay": "Avg delay (min)",
                "distance": "Distance (km)",
                "on_time_rate": "On-time (%)",
            })
            st.dataframe(table, use_container_width=True, hide_index=True)

# ============================
# SECTION 5 — TIME
# ============================
with tab_time:
    payload = fetch(load_statistics, "statistics", "time")
    if payload is not None:
        hourly, weekly, peaks = stats.time_frames(payload)

        if hourly.empty and weekly.empty:
            st.info("No time analysis available.")
        else:
            col1, col2 = st.columns(2)
            col1.metric("Peak departure hour", peaks["departure"] or "N/A")
            col2.metric("Peak arrival hour", peaks["arrival"] or "N/A")

            if not hourly.empty:
                st.plotly_chart(charts.hourly_traffic(hourly), use_container_width=True)
            if not weekly.empty:
                st.plotly_chart(charts.weekly_traffic(weekly), use_container_width=True)
