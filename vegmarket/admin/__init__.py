"""
Admin Blueprint

Admin authentication is session-based and separate from marketplace user
authentication: the admin is configured, not stored in the users table.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from vegmarket.admin import routes  # noqa: E402, F401
