import streamlit as st

from ubicair import ui
from ubicair.errors import ApiError
from ubicair.validation import validate_login

st.set_page_config(page_title="Log in", page_icon="🔑", layout="centered")

client = ui.get_client()

if ui.get_sessions().load() is not None:
    st.switch_page(ui.HOME_PAGE)

st.title("🔑 Log in")

with st.form("login"):
    email = st.text_input("Email")
    password = st.text_input("Password", type="password")
    submitted = st.form_submit_button("Log in", use_container_width=True)

if submitted:
    errors = validate_login(email, password)
    if errors:
        ui.field_errors(errors)
    else:
        try:
            with st.spinner("Signing in..."):
                session = client.login(email.strip(), password)
        except ApiError as e:
            st.error(e.message)
        else:
            ui.sign_in(session, user={"email": email.strip()})
            st.switch_page(ui.HOME_PAGE)

st.markdown("Don't have an account?")
st.page_link("pages/2_Sign_Up.py", label="Sign up", icon="📝")
