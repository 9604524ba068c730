import re
from typing import Tuple, Optional

from flask import current_app
from flask_jwt_extended import get_jwt_identity, verify_jwt_in_request

EMAIL_REGEX = re.compile(r"^[\w\.-]+@[\w\.-]+\.\w+$")


def validate_email(email: str) -> Tuple[bool, Optional[str]]:
    """Simple email validation.

    Returns (is_valid, error_message)."""
    if not email:
        return False, "Email is required"
    if not EMAIL_REGEX.match(email):
        return False, "Invalid email format"
    return True, None


def validate_password(password: str) -> Tuple[bool, Optional[str]]:
    """Ensure password meets minimum requirements.

    Requirements:
    * At least 8 characters
    * Contains a letter and a digit
    """
    if not password:
        return False, "Password is required"
    if len(password) < 8:
        return False, "Password must be at least 8 characters long"
    if not re.search(r"[A-Za-z]", password):
        return False, "Password must contain a letter"
    if not re.search(r"\d", password):
        return False, "Password must contain a digit"
    return True, None


def current_user_id() -> int:
    """Return the id of the user the current request acts for.

    A valid bearer token wins. Without one the request runs as the demo
    user, unless AUTH_REQUIRED is set, in which case the JWT extension
    answers 401.
    """
    if current_app.config.get('AUTH_REQUIRED'):
        verify_jwt_in_request()
        return int(get_jwt_identity())

    if verify_jwt_in_request(optional=True):
        return int(get_jwt_identity())
    return current_app.config['DEMO_USER_ID']
