"""
Broker Routes
"""

import logging

from flask import jsonify, request

from vegmarket.auth.decorators import role_required
from vegmarket.broker import broker_bp
from vegmarket.errors import ValidationError
from vegmarket.extensions import db
from vegmarket.models import User
from vegmarket.orders.services import order_with_items

logger = logging.getLogger(__name__)

MANAGED_ROLES = ('farmer', 'retailer')


def _users_with_role(role):
    """Users of `role`, optionally narrowed by ?status=active|inactive"""
    query = User.query.filter_by(role=role)
    status = request.args.get('status')
    if status == 'active':
        query = query.filter_by(is_active=True)
    elif status == 'inactive':
        query = query.filter_by(is_active=False)
    elif status not in (None, '', 'all'):
        raise ValidationError('status must be active, inactive or all')
    return query.order_by(User.created_at.desc(), User.id.desc()).all()


@broker_bp.route('/api/broker/farmers')
@role_required('broker')
def farmers():
    result = []
    for farmer in _users_with_role('farmer'):
        entry = farmer.to_dict()
        entry['vegetables'] = [v.to_dict() for v in farmer.vegetables]
        entry['totalVegetables'] = len(farmer.vegetables)
        result.append(entry)
    return jsonify(result)


@broker_bp.route('/api/broker/retailers')
@role_required('broker')
def retailers():
    result = []
    for retailer in _users_with_role('retailer'):
        entry = retailer.to_dict()
        entry['orders'] = [order_with_items(o) for o in retailer.orders]
        entry['totalOrders'] = len(retailer.orders)
        entry['totalSpent'] = round(
            sum(o.total_price for o in retailer.orders if o.status != 'cancelled'), 2
        )
        result.append(entry)
    return jsonify(result)


@broker_bp.route('/api/broker/users/<int:user_id>/toggle-active', methods=['POST'])
@role_required('broker')
def toggle_active(user_id):
    """Activate or deactivate a farmer or retailer account"""
    user = db.session.get(User, user_id)
    if user is None or user.role not in MANAGED_ROLES:
        return jsonify({'error': 'User not found'}), 404

    user.is_active = not user.is_active
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Could not toggle user %s', user_id)
        return jsonify({'error': 'Failed to update user'}), 500

    logger.info('User %s is now %s', user.email, 'active' if user.is_active else 'inactive')
    return jsonify(user.to_dict())
