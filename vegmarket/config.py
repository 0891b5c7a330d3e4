"""
Configuration settings for the Vegetable Marketplace
"""
import os

from werkzeug.security import generate_password_hash


class Config:
    """Flask application configuration"""

    # Flask secret key for sessions
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'dev-secret-key-change-in-production-12345'

    # Database configuration
    basedir = os.path.abspath(os.path.dirname(os.path.dirname(__file__)))
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or \
        'sqlite:///' + os.path.join(basedir, 'instance', 'vegmarket.db')
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    LOG_LEVEL = os.environ.get('LOG_LEVEL') or 'INFO'

    # Insert the default vegetable catalogue on startup when it is empty
    SEED_DEFAULT_DATA = (os.environ.get('SEED_DEFAULT_DATA') or '1') == '1'

    # Auction settings
    BID_INCREMENT = float(os.environ.get('BID_INCREMENT') or 10.0)

    # Email verification (Resend HTTP API). Without an API key emails are
    # logged and skipped, and unverified accounts may still log in.
    EMAIL_VERIFICATION_HOURS = 24
    RESEND_API_KEY = os.environ.get('RESEND_API_KEY')
    RESEND_API_URL = 'https://api.resend.com/emails'
    MAIL_FROM = os.environ.get('RESEND_FROM_EMAIL') or 'onboarding@resend.dev'
    APP_BASE_URL = os.environ.get('APP_BASE_URL') or 'http://localhost:5000'

    # Admin credentials (session-based, separate from user auth).
    # ADMIN_PASSWORD_HASH is a werkzeug password hash.
    ADMIN_EMAIL = os.environ.get('ADMIN_EMAIL') or 'admin@vegmarket.local'
    ADMIN_PASSWORD_HASH = os.environ.get('ADMIN_PASSWORD_HASH')


class TestConfig(Config):
    """Testing configuration"""
    TESTING = True
    SQLALCHEMY_DATABASE_URI = 'sqlite:///:memory:'
    SEED_DEFAULT_DATA = False
    RESEND_API_KEY = None
    ADMIN_EMAIL = 'admin@test.local'
    ADMIN_PASSWORD_HASH = generate_password_hash('admin-pass')
