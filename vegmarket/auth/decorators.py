"""
Role Decorators

Marketplace roles are enforced on top of Flask-Login sessions.
"""

from functools import wraps

from flask import jsonify
from flask_login import current_user


def role_required(*roles):
    """Decorator restricting a view to authenticated users with one of `roles`.

    Unauthenticated requests get 401, authenticated users with another
    role get 403.
    """
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            if not current_user.is_authenticated:
                return jsonify({'error': 'Unauthorized'}), 401
            if current_user.role not in roles:
                return jsonify({'error': 'Forbidden'}), 403
            return f(*args, **kwargs)
        return wrapper
    return decorator
