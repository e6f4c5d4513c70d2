"""Streamlit page tests for sign-in, sign-up and the home page.

The backend client is patched out and the encrypted cookie manager is
replaced by a dict, so the pages run headless under AppTest.
"""

import sys
from pathlib import Path
from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest
from streamlit.testing.v1 import AppTest

MAIN_SCRIPT = str(Path(__file__).resolve().parents[1] / "app" / "main.py")


class FakeCookieManager(dict):
    instances = []

    def __init__(self, prefix="", password=None):
        super().__init__()
        FakeCookieManager.instances.append(self)

    def ready(self):
        return True

    def save(self):
        pass


@pytest.fixture
def backend(monkeypatch):
    FakeCookieManager.instances = []
    monkeypatch.setattr("streamlit_cookies_manager.EncryptedCookieManager", FakeCookieManager)
    # re-import the login page so it binds the fakes below
    monkeypatch.delitem(sys.modules, "app.ui.login", raising=False)

    fakes = SimpleNamespace(
        login_user=MagicMock(),
        register_user=MagicMock(),
        get_current_user=MagicMock(return_value={"id": "1", "username": "alice"}),
    )
    monkeypatch.setattr("app.services.api.login_user", fakes.login_user)
    monkeypatch.setattr("app.services.api.register_user", fakes.register_user)
    monkeypatch.setattr("app.services.api.get_current_user", fakes.get_current_user)
    return fakes


def cookie_jar():
    return FakeCookieManager.instances[-1]


def by_label(elements, label):
    return next(element for element in elements if element.label == label)


def start(**session):
    at = AppTest.from_file(MAIN_SCRIPT, default_timeout=10)
    for key, value in session.items():
        at.session_state[key] = value
    return at.run()


class TestSignIn:
    def test_token_is_kept_on_success(self, backend):
        backend.login_user.return_value = {"token": "tok-123"}
        at = start()

        by_label(at.text_input, "Username").input("alice")
        by_label(at.text_input, "Password").input("pw123")
        by_label(at.button, "Sign in").click().run()

        backend.login_user.assert_called_once_with("alice", "pw123")
        assert at.session_state["access_token"] == "tok-123"
        assert at.session_state["username"] == "alice"
        assert cookie_jar()["access_token"] == "tok-123"

    def test_server_message_is_shown_on_failure(self, backend):
        backend.login_user.return_value = {"error": "Invalid password", "status": 400}
        at = start()

        by_label(at.text_input, "Username").input("alice")
        by_label(at.text_input, "Password").input("wrong")
        by_label(at.button, "Sign in").click().run()

        assert [e.value for e in at.error] == ["❌ Invalid password"]
        assert "access_token" not in at.session_state
        assert "access_token" not in cookie_jar()


class TestSignUp:
    def fill(self, at, username="alice", password="pw123", confirm="pw123", agree=True):
        by_label(at.text_input, "Username").input(username)
        by_label(at.text_input, "Password").input(password)
        by_label(at.text_input, "Confirm Password").input(confirm)
        if agree:
            at.checkbox[0].check()
        by_label(at.button, "Sign Up").click().run()

    def test_token_is_kept_on_success(self, backend):
        backend.register_user.return_value = {
            "message": "User registered successfully",
            "userId": "1",
            "token": "tok-9",
        }
        at = start(show_register=True)

        self.fill(at)

        backend.register_user.assert_called_once_with("alice", "pw123")
        assert at.session_state["access_token"] == "tok-9"
        assert cookie_jar()["access_token"] == "tok-9"

    def test_server_message_is_shown_on_failure(self, backend):
        backend.register_user.return_value = {"error": "Username already taken", "status": 400}
        at = start(show_register=True)

        self.fill(at)

        assert [e.value for e in at.error] == ["❌ Username already taken"]
        assert "access_token" not in at.session_state

    def test_form_errors_block_the_request(self, backend):
        at = start(show_register=True)

        self.fill(at, confirm="pw124", agree=False)

        messages = [e.value for e in at.error]
        assert "Passwords do not match" in messages
        assert "You must agree to the terms and conditions" in messages
        backend.register_user.assert_not_called()


class TestHomePage:
    def test_greets_current_user(self, backend):
        at = start(access_token="tok", username="alice")

        backend.get_current_user.assert_called_with("tok")
        assert at.title[0].value == "Welcome, alice!"

    def test_rejected_token_signs_out(self, backend):
        backend.get_current_user.return_value = {
            "error": "Could not validate credentials",
            "status": 401,
        }

        at = start(access_token="tok", username="alice")

        assert "access_token" not in at.session_state

    def test_unreachable_server_keeps_session(self, backend):
        backend.get_current_user.return_value = {"error": "Could not reach server: refused"}

        at = start(access_token="tok", username="alice")

        assert at.session_state["access_token"] == "tok"
        assert [e.value for e in at.error] == ["❌ Could not reach server: refused"]

    def test_log_out(self, backend):
        at = start(access_token="tok", username="alice")

        at.sidebar.button[0].click().run()

        assert "access_token" not in at.session_state
        assert "access_token" not in cookie_jar()
