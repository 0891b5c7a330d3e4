"""
Flask Extensions

Admin authentication is session-based and separate from user
authentication; Flask-Login only manages marketplace users.
"""

from flask_sqlalchemy import SQLAlchemy
from flask_login import LoginManager

# Database instance
db = SQLAlchemy()

# Login manager for farmers, brokers and retailers (NOT for admin)
login_manager = LoginManager()
