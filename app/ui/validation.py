# app/ui/validation.py


def validate_registration(username, password, confirm_password, agreed):
    """
    Client-side checks for the register form.
    Returns a dict of field -> error message; empty when the form is valid.
    """
    errors = {}

    if not (username or "").strip():
        errors["username"] = "Username is required"

    if not password:
        errors["password"] = "Password is required"

    if not confirm_password:
        errors["confirm_password"] = "Please confirm your password"
    elif password and password != confirm_password:
        errors["confirm_password"] = "Passwords do not match"

    if not agreed:
        errors["terms"] = "You must agree to the terms and conditions"

    return errors
