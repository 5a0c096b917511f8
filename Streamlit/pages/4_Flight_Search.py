import streamlit as st

from ubicair import config, ui
from ubicair.errors import ApiError
from ubicair.formatting import (
    DELAY_COLORS,
    delay_class,
    delay_label,
    format_date,
    format_hour,
    format_number,
)
from ubicair.pipeline import results_label

# ============================
# CONFIG
# ============================
st.set_page_config(page_title="Flight Search", page_icon="🔎", layout="wide")

ui.require_session()
ui.account_sidebar()
client = ui.get_client()
favorites = ui.get_favorites()


def flight_key(flight):
    origin, dest, airline, day = flight.favorite_key()
    return f"{origin}-{dest}-{airline}-{day}"


def delay_badge(delay):
    if delay is None:
        return
    color = DELAY_COLORS[delay_class(delay)]
    st.markdown(
        f'<span style="color: {color}; font-weight: 600;">{delay_label(delay)}</span>',
        unsafe_allow_html=True,
    )


def flight_details(flight):
    st.markdown(f"**{flight.origin} → {flight.dest}** · {flight.airline}")
    st.caption(f"📅 {format_date(flight.fl_date)}")

    col1, col2 = st.columns(2)
    with col1:
        st.markdown(f"🛫 **Departure** {format_hour(flight.dep_time)}")
        delay_badge(flight.dep_delay)
    with col2:
        st.markdown(f"🛬 **Arrival** {format_hour(flight.arr_time)}")
        delay_badge(flight.arr_delay)

    col3, col4 = st.columns(2)
    col3.markdown(f"⏱ Air time: {format_number(flight.air_time)} min")
    col4.markdown(f"📏 Distance: {format_number(flight.distance)} km")


# ============================
# FAVORITES
# ============================
st.title("🔎 Flight Search")

pending = favorites.pending_removal
if pending is not None:
    st.warning(
        f"Remove this flight from your favorites?\n\n"
        f"{pending.origin} → {pending.dest} ({pending.airline})"
    )
    col1, col2, _ = st.columns([1, 1, 4])
    if col1.button("Remove", type="primary"):
        if not favorites.confirm_removal():
            st.error("Could not remove the favorite. Please try again.")
        else:
            st.rerun()
    if col2.button("Cancel"):
        favorites.cancel_removal()
        st.rerun()

if favorites.favorites:
    st.subheader("⭐ Favorite flights")
    for i, flight in enumerate(favorites.favorites):
        with st.expander(f"{flight.origin} → {flight.dest} · {flight.airline} · {format_date(flight.fl_date)}"):
            flight_details(flight)
            if st.button("Remove from favorites", key=f"fav_remove_{i}_{flight_key(flight)}"):
                favorites.remove(flight)
                st.rerun()
    st.divider()


# ============================
# SEARCH
# ============================
@st.cache_data(ttl=60, show_spinner="Searching flights...")
def search(_client, term):
    return _client.search_flights(term)


term = st.text_input(
    "Search by airport code",
    placeholder="e.g. MAD, JFK, BCN",
).strip()

if len(term) >= config.SEARCH_MIN_CHARS:
    try:
        results = search(client, term)
    except ApiError as e:
        st.error(f"Search failed: {e.message}")
        results = None

    if results is not None:
        st.caption(results_label(len(results)))
        if not results:
            st.info(f"No flights found for '{term}'.")

        for i, flight in enumerate(results):
            key = flight_key(flight)
            starred = favorites.is_favorite(flight)
            with st.container(border=True):
                col1, col2 = st.columns([6, 1])
                with col1:
                    flight_details(flight)
                with col2:
                    label = "★ Saved" if starred else "☆ Save"
                    if st.button(label, key=f"toggle_{i}_{key}"):
                        if favorites.toggle(flight):
                            st.rerun()
                        st.error("Could not update favorites.")
elif term:
    st.caption(f"Type at least {config.SEARCH_MIN_CHARS} characters to search.")
