"""Request body validation shared by the API blueprints.

Validators collect every problem in a payload before failing, so clients
get one structured 400 response listing each bad field.
"""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from flask import request


class ValidationError(Exception):
    """Request data failed validation. Rendered as a 400 response."""

    def __init__(self, details: List[Dict[str, str]], message: str = 'Invalid input'):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self):
        return {'error': self.message, 'details': self.details}


class Validator:
    """Accumulates field errors while pulling typed values out of a dict."""

    def __init__(self, data: Dict[str, Any]):
        self.data = data
        self.errors: List[Dict[str, str]] = []

    def error(self, field: str, message: str):
        self.errors.append({'field': field, 'message': message})

    def string(self, field: str, required: bool = False, max_length: Optional[int] = None):
        value = self.data.get(field)
        if value is None:
            if required:
                self.error(field, f'{field} is required')
            return None
        if not isinstance(value, str):
            self.error(field, f'{field} must be a string')
            return None
        if required and not value.strip():
            self.error(field, f'{field} must not be empty')
            return None
        if max_length is not None and len(value) > max_length:
            self.error(field, f'{field} must be at most {max_length} characters')
            return None
        return value

    def integer(self, field: str, required: bool = False):
        value = self.data.get(field)
        if value is None:
            if required:
                self.error(field, f'{field} is required')
            return None
        # bool is an int subclass; reject it explicitly
        if isinstance(value, bool) or not isinstance(value, int) or value < 1:
            self.error(field, f'{field} must be a positive integer')
            return None
        return value

    def boolean(self, field: str):
        value = self.data.get(field)
        if value is not None and not isinstance(value, bool):
            self.error(field, f'{field} must be a boolean')
            return None
        return value

    def choice(self, field: str, choices, required: bool = False):
        value = self.data.get(field)
        if value is None:
            if required:
                self.error(field, f'{field} is required')
            return None
        if value not in choices:
            self.error(field, f"{field} must be one of: {', '.join(choices)}")
            return None
        return value

    def timestamp(self, field: str, required: bool = False):
        value = self.data.get(field)
        if value is None:
            if required:
                self.error(field, f'{field} is required')
            return None
        parsed = parse_datetime(value) if isinstance(value, str) else None
        if parsed is None:
            self.error(field, f'{field} must be an ISO 8601 date-time')
        return parsed

    def only(self, allowed):
        """Reject keys outside *allowed*."""
        for field in sorted(set(self.data) - set(allowed)):
            self.error(field, f'{field} cannot be set')

    def check(self):
        if self.errors:
            raise ValidationError(self.errors)


def parse_datetime(value: str) -> Optional[datetime]:
    """Parse an ISO 8601 string into a naive UTC datetime."""
    text = value.strip()
    if text.endswith(('Z', 'z')):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def parse_id(value) -> int:
    """Parse a path id, raising ValidationError for anything but a positive int."""
    try:
        record_id = int(value)
    except (TypeError, ValueError):
        record_id = 0
    if record_id < 1:
        raise ValidationError([{'field': 'id', 'message': 'Invalid ID'}], message='Invalid ID')
    return record_id


def get_json_body() -> Dict[str, Any]:
    """Return the request's JSON object body."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError([{'field': 'body', 'message': 'Request body must be a JSON object'}])
    return data
