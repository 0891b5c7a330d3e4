"""
Admin Routes

Admin authentication is session-based and separate from marketplace user
authentication.
"""

import logging

from flask import current_app, jsonify, session
from flask_login import logout_user
from werkzeug.security import check_password_hash

from vegmarket.admin import admin_bp
from vegmarket.admin.decorators import admin_required
from vegmarket.extensions import db
from vegmarket.models import AUCTION_STATUSES, ROLES, Auction, Bid, Order, User, Vegetable
from vegmarket.utils import get_payload, get_text

logger = logging.getLogger(__name__)


@admin_bp.route('/login', methods=['POST'])
def admin_login():
    """Admin login against ADMIN_EMAIL / ADMIN_PASSWORD_HASH, not the users table."""
    if session.get('is_admin'):
        return jsonify({'message': 'Already logged in', 'admin': session.get('admin_email')})

    data = get_payload()
    email = get_text(data, 'email').strip().lower()
    password = get_text(data, 'password')

    if not email or not password:
        return jsonify({'error': 'Please enter both email and password.'}), 400

    password_hash = current_app.config.get('ADMIN_PASSWORD_HASH')
    if password_hash and email == current_app.config['ADMIN_EMAIL'].lower() \
            and check_password_hash(password_hash, password):
        logout_user()
        session.clear()
        session['is_admin'] = True
        session['admin_email'] = email
        return jsonify({'message': 'Welcome, Administrator!'})

    logger.warning('Failed admin login for %s', email)
    return jsonify({'error': 'Invalid administrator credentials.'}), 401


@admin_bp.route('/logout', methods=['POST'])
def admin_logout():
    """Admin logout - clears entire session."""
    session.clear()
    return jsonify({'message': 'You have been logged out of the admin panel.'})


@admin_bp.route('/dashboard')
@admin_required
def admin_dashboard():
    """System overview."""
    users_by_role = {role: User.query.filter_by(role=role).count() for role in ROLES}
    auctions_by_status = {
        status: Auction.query.filter_by(status=status).count() for status in AUCTION_STATUSES
    }
    return jsonify({
        'admin': session.get('admin_email'),
        'totalUsers': User.query.count(),
        'usersByRole': users_by_role,
        'totalVegetables': Vegetable.query.count(),
        'totalOrders': Order.query.count(),
        'totalAuctions': Auction.query.count(),
        'auctionsByStatus': auctions_by_status,
        'totalBids': Bid.query.count()
    })


@admin_bp.route('/users')
@admin_required
def list_users():
    users = User.query.order_by(User.created_at.desc(), User.id.desc()).all()
    return jsonify([u.to_dict() for u in users])


@admin_bp.route('/users/<int:user_id>/role', methods=['PUT'])
@admin_required
def change_role(user_id):
    user = db.get_or_404(User, user_id, description='User not found')
    role = get_payload().get('role')
    if role not in ROLES:
        return jsonify({'error': f"Role must be one of: {', '.join(ROLES)}"}), 400

    user.role = role
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Could not change role of user %s', user_id)
        return jsonify({'error': 'Could not update user.'}), 500

    logger.info('Admin %s set role of %s to %s', session.get('admin_email'), user.email, role)
    return jsonify(user.to_dict())
