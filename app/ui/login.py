# app/ui/login.py

import os
import streamlit as st
from dotenv import load_dotenv
from streamlit_cookies_manager import EncryptedCookieManager
from app.services.api import login_user, register_user
from app.ui.validation import validate_registration

load_dotenv()

COOKIE_PASSWORD = os.getenv("COOKIE_PASSWORD", "change-me")

cookies = EncryptedCookieManager(prefix="auth/", password=COOKIE_PASSWORD)
if not cookies.ready():
    st.stop()


def remember(username, token):
    # the token is kept opaque; nothing on this side reads its claims
    st.session_state["access_token"] = token
    st.session_state["username"] = username
    cookies["access_token"] = token
    cookies["username"] = username
    cookies.save()


def logout():
    for key in ("access_token", "username"):
        if key in cookies:
            del cookies[key]
    cookies.save()


def login_page():
    if "access_token" not in st.session_state:
        if cookies.get("access_token"):
            st.session_state["access_token"] = cookies["access_token"]
            st.session_state["username"] = cookies.get("username", "")
            st.rerun()

    if "show_register" not in st.session_state:
        st.session_state["show_register"] = False

    if st.session_state["show_register"]:
        show_register_form()
    else:
        show_login_form()


def show_login_form():
    st.title("🔐 Sign in")

    with st.form("login_form"):
        username = st.text_input("Username")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")

    if submitted:
        with st.spinner("Signing in..."):
            result = login_user(username, password)
        if result.get("error"):
            st.error(f"❌ {result['error']}")
        else:
            remember(username, result["token"])
            st.success("✅ Signed in!")
            st.rerun()

    if st.button("Create an account"):
        st.session_state["show_register"] = True
        st.rerun()


def show_register_form():
    st.title("📝 Create Account")

    with st.form("register_form"):
        username = st.text_input("Username", placeholder="Choose a username")
        password = st.text_input("Password", type="password")
        confirm_password = st.text_input("Confirm Password", type="password")
        agreed = st.checkbox("I agree to the terms and conditions")
        submitted = st.form_submit_button("Sign Up")

    if submitted:
        errors = validate_registration(username, password, confirm_password, agreed)
        if errors:
            for message in errors.values():
                st.error(message)
        else:
            with st.spinner("Creating account..."):
                result = register_user(username, password)
            if result.get("error"):
                st.error(f"❌ {result['error']}")
            else:
                remember(username, result["token"])
                st.session_state["show_register"] = False
                st.success(f"✅ {result['message']}")
                st.rerun()

    if st.button("← Already have an account? Sign in"):
        st.session_state["show_register"] = False
        st.rerun()
