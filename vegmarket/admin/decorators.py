"""
Admin Decorator

Admin authentication is session-based and separate from marketplace user
authentication.
"""

from functools import wraps

from flask import jsonify, session


def admin_required(f):
    """Decorator to ensure the request is from an authenticated admin.

    Uses ONLY session['is_admin'], set by /admin/login. A logged-in
    farmer, broker or retailer cannot reach admin routes.
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not session.get('is_admin'):
            return jsonify({'error': 'Admin login required'}), 401
        return f(*args, **kwargs)
    return wrapper
