"""
Auth Blueprint

Registration, email verification, login and profile for marketplace users.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from vegmarket.auth import routes  # noqa: E402, F401
