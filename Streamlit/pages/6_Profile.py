import streamlit as st

from ubicair import ui
from ubicair.errors import ApiError
from ubicair.models import UserProfile
from ubicair.validation import (
    photo_data_uri,
    profile_changes,
    validate_photo,
    validate_profile,
)

st.set_page_config(page_title="Profile", page_icon="👤", layout="centered")

ui.require_session()
ui.account_sidebar()
client = ui.get_client()

# ============================
# LOAD PROFILE
# ============================
if "_profile" not in st.session_state:
    try:
        st.session_state["_profile"] = client.get_user()
    except ApiError as e:
        st.error(f"Could not load your profile: {e.message}")
        st.session_state["_profile"] = UserProfile()

profile = st.session_state["_profile"]

st.title("👤 Profile")

col1, col2 = st.columns([1, 3])
with col1:
    if profile.photo:
        st.image(profile.photo, width=96)
    else:
        st.markdown(
            f'<div style="width: 96px; height: 96px; border-radius: 50%; background: #667eea; '
            f'color: white; font-size: 40px; display: flex; align-items: center; '
            f'justify-content: center;">{profile.initials}</div>',
            unsafe_allow_html=True,
        )
with col2:
    st.subheader(profile.name or "Unnamed user")
    st.caption(profile.email)

st.divider()

# ============================
# EDIT FORM
# ============================
change_password = st.toggle("Change password")

with st.form("profile"):
    name = st.text_input("Name", value=profile.name)
    email = st.text_input("Email", value=profile.email)
    photo = st.file_uploader("Profile photo", type=["png", "jpg", "jpeg", "gif", "webp"])
    new_password = confirm_password = ""
    if change_password:
        new_password = st.text_input("New password", type="password")
        confirm_password = st.text_input("Confirm new password", type="password")
    submitted = st.form_submit_button("Save changes", use_container_width=True)

if submitted:
    errors = validate_profile(name, email, change_password, new_password, confirm_password)
    photo_uri = None
    if photo is not None:
        errors.update(validate_photo(photo.size, photo.type))
        if not errors:
            photo_uri = photo_data_uri(photo.getvalue(), photo.type)

    if errors:
        ui.field_errors(errors)
    else:
        changes = profile_changes(profile, name.strip(), email.strip(), photo_uri, new_password if change_password else None)
        if not changes:
            st.info("Nothing to save.")
        else:
            try:
                updated = client.update_user(changes)
            except ApiError as e:
                st.error(e.message)
            else:
                st.session_state["_profile"] = UserProfile(
                    name=updated.name or name.strip(),
                    email=updated.email or email.strip(),
                    photo=updated.photo or photo_uri or profile.photo,
                )
                st.toast("Profile updated.")
                st.rerun()

st.divider()
if st.button("Log out", type="primary"):
    ui.logout()
