import streamlit as st

from ubicair import ui
from ubicair.errors import ApiError
from ubicair.validation import validate_signup

st.set_page_config(page_title="Sign up", page_icon="📝", layout="centered")

client = ui.get_client()

st.title("📝 Create your account")

with st.form("signup"):
    name = st.text_input("Name")
    email = st.text_input("Email")
    password = st.text_input("Password", type="password")
    confirm_password = st.text_input("Confirm password", type="password")
    submitted = st.form_submit_button("Sign up", use_container_width=True)

if submitted:
    errors = validate_signup(name, email, password, confirm_password)
    if errors:
        ui.field_errors(errors)
    else:
        try:
            with st.spinner("Creating account..."):
                session = client.register(name.strip(), email.strip(), password)
        except ApiError as e:
            st.error(e.message)
        else:
            ui.sign_in(session, user={"email": email.strip(), "nombre": name.strip()})
            st.switch_page(ui.HOME_PAGE)

st.markdown("Already have an account?")
st.page_link("pages/1_Login.py", label="Log in", icon="🔑")
