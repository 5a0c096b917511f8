import streamlit as st

from ubicair import ui

st.set_page_config(
    page_title="UbicAir",
    page_icon="✈️",
    layout="wide"
)

ui.account_sidebar()

st.title("✈️ UbicAir Flight Dashboard")

st.markdown("""
Welcome to UbicAir.

Use the menu on the left to explore:
- Flight statistics: delays, airlines, popular routes and busy hours
- Flight search and your favorite flights
- Live radar of simulated flights in the air
""")

if ui.get_sessions().load() is None:
    col1, col2 = st.columns(2)
    col1.page_link("pages/1_Login.py", label="Log in", icon="🔑")
    col2.page_link("pages/2_Sign_Up.py", label="Create an account", icon="📝")
else:
    col1, col2, col3 = st.columns(3)
    col1.page_link("pages/3_Dashboard.py", label="Dashboard", icon="📊")
    col2.page_link("pages/4_Flight_Search.py", label="Flight search", icon="🔎")
    col3.page_link("pages/5_Live_Radar.py", label="Live radar", icon="🛰️")
