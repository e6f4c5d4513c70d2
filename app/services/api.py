# app/services/api.py

import os
import requests
from dotenv import load_dotenv

load_dotenv()

# Base URL of the auth backend, including the /api prefix
API_URL = os.getenv("API_URL", "http://localhost:5000/api")
REQUEST_TIMEOUT = 10


# -------------------------------
# Authentication-related functions
# -------------------------------

def _error_from(response):
    try:
        data = response.json()
    except ValueError:
        data = {}
    message = data.get("message") if isinstance(data, dict) else None
    return {
        "error": message or f"Request failed with status {response.status_code}",
        "status": response.status_code,
    }


def _post_credentials(path, username, password):
    try:
        res = requests.post(
            f"{API_URL}{path}",
            json={"username": username, "password": password},
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        return {"error": f"Could not reach server: {e}"}

    if not res.ok:
        return _error_from(res)
    return res.json()


def register_user(username, password):
    """
    Registers a new user.
    Returns {message, userId, token} on success, {"error": ...} otherwise.
    """
    return _post_credentials("/register", username, password)


def login_user(username, password):
    """
    Logs in a user.
    Returns {token} on success, {"error": ...} otherwise.
    """
    return _post_credentials("/login", username, password)


def get_current_user(token):
    """
    Retrieves the user identity behind an access token.
    """
    try:
        res = requests.get(
            f"{API_URL}/me",
            headers={"Authorization": f"Bearer {token}"},
            timeout=REQUEST_TIMEOUT,
        )
    except requests.RequestException as e:
        return {"error": f"Could not reach server: {e}"}

    if not res.ok:
        return _error_from(res)
    return res.json()
