"""
Vegetable Marketplace - Application Factory

This module provides the Flask application factory pattern for creating
and configuring the application instance.
"""

import logging
import os

from flask import Flask, jsonify

from vegmarket.config import Config
from vegmarket.extensions import db, login_manager

logger = logging.getLogger(__name__)


def create_app(config_class=Config):
    """Create and configure the Flask application.

    Args:
        config_class: Configuration class to use (default: Config)

    Returns:
        Configured Flask application instance
    """
    app = Flask(__name__)
    app.config.from_object(config_class)

    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=app.config.get('LOG_LEVEL', 'INFO'),
            format='%(asctime)s %(levelname)s %(name)s: %(message)s'
        )

    # Initialize extensions
    db.init_app(app)
    login_manager.init_app(app)

    # Register blueprints
    from vegmarket.auth import auth_bp
    from vegmarket.admin import admin_bp
    from vegmarket.vegetables import vegetables_bp
    from vegmarket.orders import orders_bp
    from vegmarket.auctions import auctions_bp
    from vegmarket.dashboard import dashboard_bp
    from vegmarket.broker import broker_bp

    app.register_blueprint(auth_bp)
    app.register_blueprint(admin_bp, url_prefix='/admin')
    app.register_blueprint(vegetables_bp)
    app.register_blueprint(orders_bp)
    app.register_blueprint(auctions_bp)
    app.register_blueprint(dashboard_bp)
    app.register_blueprint(broker_bp)

    from vegmarket.errors import register_error_handlers
    register_error_handlers(app)

    from vegmarket.cli import register_commands
    register_commands(app)

    # User loader for Flask-Login
    @login_manager.user_loader
    def load_user(user_id):
        from vegmarket.models import User
        user = db.session.get(User, int(user_id))
        # Deactivated accounts lose their session on the next request
        return user if user is not None and user.is_active else None

    # JSON API: answer 401 instead of redirecting to a login page
    @login_manager.unauthorized_handler
    def unauthorized():
        return jsonify({'error': 'Unauthorized'}), 401

    # Create database tables
    with app.app_context():
        if app.config['SQLALCHEMY_DATABASE_URI'].startswith('sqlite:///') \
                and ':memory:' not in app.config['SQLALCHEMY_DATABASE_URI']:
            os.makedirs(os.path.join(Config.basedir, 'instance'), exist_ok=True)
        db.create_all()
        if app.config.get('SEED_DEFAULT_DATA'):
            _ensure_default_data()

    return app


def _ensure_default_data():
    """Ensure the default vegetable catalogue exists."""
    from vegmarket.services import seed_default_vegetables

    try:
        seed_default_vegetables()
    except Exception as e:
        db.session.rollback()
        logger.warning('Could not seed default vegetables: %s', e)
