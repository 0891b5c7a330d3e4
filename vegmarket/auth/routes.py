"""
Auth Routes

User authentication routes using Flask-Login.
"""

import logging
import re
import secrets
from datetime import datetime, timedelta

from flask import current_app, jsonify, request, session
from flask_login import current_user, login_required, login_user, logout_user
from werkzeug.security import check_password_hash, generate_password_hash

from vegmarket.auth import auth_bp
from vegmarket.extensions import db
from vegmarket.models import DEFAULT_ROLE, ROLES, User
from vegmarket.services import (
    EmailDeliveryError, email_delivery_enabled, send_verification_email, send_welcome_email
)
from vegmarket.utils import get_payload, get_text, parse_flag

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r'^[^\s@]+@[^\s@]+\.[^\s@]+$')
MIN_PASSWORD_LENGTH = 8


@auth_bp.route('/register', methods=['POST'])
def register():
    """Create an account and send the verification email"""
    data = get_payload()
    email = get_text(data, 'email').strip().lower()
    password = get_text(data, 'password')
    name = get_text(data, 'name').strip() or None
    role = data.get('role')

    if not email or not password:
        return jsonify({'error': 'Email and password are required'}), 400

    if role not in ROLES:
        role = DEFAULT_ROLE

    if not EMAIL_RE.match(email):
        return jsonify({'error': 'Invalid email format'}), 400

    if len(password) < MIN_PASSWORD_LENGTH:
        return jsonify({'error': f'Password must be at least {MIN_PASSWORD_LENGTH} characters long'}), 400

    if User.query.filter_by(email=email).first():
        return jsonify({'error': 'User with this email already exists'}), 400

    hours = current_app.config['EMAIL_VERIFICATION_HOURS']
    token = secrets.token_hex(32)
    new_user = User(
        email=email,
        password_hash=generate_password_hash(password),
        name=name,
        role=role,
        email_verification_token=token,
        email_verification_expires=datetime.utcnow() + timedelta(hours=hours),
    )

    try:
        db.session.add(new_user)
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Registration failed for %s', email)
        return jsonify({'error': 'An error occurred during signup'}), 500

    logger.info('Registered %s as %s', email, role)

    try:
        send_verification_email(email, token)
    except EmailDeliveryError as e:
        logger.warning('Failed to send verification email to %s: %s', email, e)

    return jsonify({
        'message': 'Account created successfully. Please check your email to verify your account.',
        'userId': new_user.id
    }), 201


@auth_bp.route('/verify-email', methods=['GET'])
def verify_email():
    """Mark the account owning `token` as verified"""
    token = request.args.get('token')
    if not token:
        return jsonify({'error': 'Verification token is required'}), 400

    user = User.query.filter(
        User.email_verification_token == token,
        User.email_verification_expires > datetime.utcnow()
    ).first()
    if not user:
        return jsonify({'error': 'Invalid or expired verification token'}), 400

    user.email_verified = True
    user.email_verification_token = None
    user.email_verification_expires = None
    db.session.commit()

    send_welcome_email(user.email, user.name)
    return jsonify({'message': 'Email verified successfully'}), 200


@auth_bp.route('/login', methods=['POST'])
def login():
    """User login route"""
    data = get_payload()
    email = get_text(data, 'email').strip().lower()
    password = get_text(data, 'password')
    remember = parse_flag(data.get('remember', False))

    if not email or not password:
        return jsonify({'error': 'Email and password required'}), 400

    user = User.query.filter_by(email=email).first()
    if not user or not check_password_hash(user.password_hash, password):
        logger.info('Failed login for %s', email)
        return jsonify({'error': 'Invalid email or password'}), 401

    if not user.is_active:
        return jsonify({'error': 'This account has been deactivated'}), 403

    if email_delivery_enabled() and not user.email_verified:
        return jsonify({
            'error': 'Please verify your email first. Check your inbox for the verification link.'
        }), 403

    login_user(user, remember=remember)
    # A marketplace login never carries admin rights
    session.pop('is_admin', None)
    return jsonify({'message': 'Login successful', 'user': user.to_dict()}), 200


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """User logout route"""
    logout_user()
    return jsonify({'message': 'Logged out'}), 200


@auth_bp.route('/me', methods=['GET'])
@login_required
def me():
    return jsonify(current_user.to_dict())


@auth_bp.route('/profile', methods=['GET', 'PUT'])
@login_required
def profile():
    """Read or update the current user's profile.

    Changing the password requires `currentPassword` and a `newPassword`
    of at least eight characters.
    """
    if request.method == 'GET':
        return jsonify(current_user.to_dict())

    data = get_payload()
    updates = {
        field: get_text(data, field).strip() or None
        for field in ('name', 'phone', 'image') if field in data
    }
    new_password = get_text(data, 'newPassword')
    if new_password:
        if not check_password_hash(current_user.password_hash, get_text(data, 'currentPassword')):
            return jsonify({'error': 'Current password is incorrect'}), 400
        if len(new_password) < MIN_PASSWORD_LENGTH:
            return jsonify({'error': f'Password must be at least {MIN_PASSWORD_LENGTH} characters long'}), 400
        current_user.password_hash = generate_password_hash(new_password)

    for field, value in updates.items():
        setattr(current_user, field, value)

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Profile update failed for user %s', current_user.id)
        return jsonify({'error': 'Update failed'}), 500

    return jsonify({'message': 'Profile updated successfully', 'user': current_user.to_dict()})
