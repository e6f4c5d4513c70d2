# app/main.py

import streamlit as st
from dotenv import load_dotenv
from app.services.api import get_current_user
from app.ui.login import login_page, logout


load_dotenv()


def main_page():
    me = get_current_user(st.session_state["access_token"])
    if me.get("status") == 401:
        # expired or rejected token: start over at the login form
        logout()
        st.session_state.clear()
        st.rerun()
    if me.get("error"):
        st.error(f"❌ {me['error']}")
        st.stop()

    st.title(f"Welcome, {me['username']}!")

    if st.sidebar.button("🔓 Log out"):
        logout()
        st.session_state.clear()
        st.rerun()


if "access_token" not in st.session_state:
    login_page()
else:
    main_page()
