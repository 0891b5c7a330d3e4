"""
Request Parsing Helpers
"""

from datetime import datetime, timezone

from flask import request

from vegmarket.errors import ValidationError


def get_payload():
    """Return the request body as a dict, from JSON or form data."""
    if request.is_json:
        data = request.get_json(silent=True)
        if data is None:
            raise ValidationError('Request body must be valid JSON')
        if not isinstance(data, dict):
            raise ValidationError('Request body must be a JSON object')
        return data
    return request.form.to_dict()


def get_text(data, field):
    """Return a string field from a payload ('' when absent or null); non-strings are rejected."""
    value = data.get(field)
    if value is None:
        return ''
    if not isinstance(value, str):
        raise ValidationError(f'{field} must be a string')
    return value


def parse_flag(value):
    """Interpret a JSON boolean or a form checkbox value."""
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ('1', 'true', 'on', 'yes')


def parse_number(value, field, integer=False):
    """Convert a JSON or form value to float (or int).

    Booleans are rejected even though they are ints in Python.
    """
    if value is None or value == '' or isinstance(value, bool):
        raise ValidationError(f'{field} must be a number')
    try:
        number = int(value) if integer else float(value)
    except (TypeError, ValueError):
        raise ValidationError(f'{field} must be a number')
    if number != number or number in (float('inf'), float('-inf')):
        raise ValidationError(f'{field} must be a number')
    return number


def parse_positive(value, field, integer=False):
    number = parse_number(value, field, integer=integer)
    if number <= 0:
        raise ValidationError(f'{field} must be greater than 0')
    return number


def parse_datetime(value, field):
    """Parse an ISO-8601 timestamp into a naive UTC datetime."""
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f'{field} must be an ISO-8601 date/time')
    text = value.strip()
    if text.endswith('Z'):
        text = text[:-1] + '+00:00'
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        raise ValidationError(f'{field} must be an ISO-8601 date/time')
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
