"""Streamlit wiring shared by every page.

Objects that must survive reruns (session store, client, favorites, live
source) are created once per browser session and kept in
``st.session_state``.
"""

import streamlit as st

from ubicair.api import UbicAirClient
from ubicair.favorites import FavoritesStore
from ubicair.poller import LiveFlightSource
from ubicair.session import SessionStore

LOGIN_PAGE = "pages/1_Login.py"
HOME_PAGE = "pages/3_Dashboard.py"


def _singleton(key, factory):
    if key not in st.session_state:
        st.session_state[key] = factory()
    return st.session_state[key]


def get_sessions() -> SessionStore:
    return _singleton("_sessions", lambda: SessionStore(st.session_state))


def get_client() -> UbicAirClient:
    return _singleton("_client", lambda: UbicAirClient(get_sessions()))


def get_favorites() -> FavoritesStore:
    def create():
        store = FavoritesStore(get_client())
        store.load()
        get_sessions().on_end(store.clear)
        return store
    return _singleton("_favorites", create)


def get_live_source() -> LiveFlightSource:
    def create():
        source = LiveFlightSource(get_client())
        get_sessions().on_end(source.stop)
        return source
    return _singleton("_live_source", create)


def require_session():
    """Stop the page unless someone is signed in."""
    session = get_sessions().load()
    if session is None:
        st.warning("Please log in to continue.")
        st.page_link(LOGIN_PAGE, label="Go to login", icon="🔑")
        st.stop()
    return session


def sign_in(session, user=None):
    get_sessions().begin(session, user=user)
    # favorites and profile belong to whoever was signed in before
    for key in ("_favorites", "_profile"):
        st.session_state.pop(key, None)


def logout():
    get_sessions().end()
    for key in ("_favorites", "_live_source", "_profile"):
        st.session_state.pop(key, None)
    st.switch_page(LOGIN_PAGE)


def account_sidebar():
    sessions = get_sessions()
    with st.sidebar:
        if sessions.load() is None:
            return
        user = sessions.user or {}
        st.caption(f"Signed in as **{user.get('email', 'user')}**" if isinstance(user, dict) else "Signed in")
        if st.button("Log out", key="sidebar_logout", use_container_width=True):
            logout()


def field_errors(errors):
    for message in errors.values():
        st.error(message)
