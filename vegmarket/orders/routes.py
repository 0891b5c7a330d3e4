"""
Order Routes

Brokers and farmers see every order; retailers see and place their own.
"""

import logging

from flask import jsonify
from flask_login import current_user

from vegmarket.auth.decorators import role_required
from vegmarket.errors import MarketError, PermissionDenied, ValidationError
from vegmarket.extensions import db
from vegmarket.models import ORDER_STATUSES, Order
from vegmarket.orders import orders_bp
from vegmarket.orders.services import create_order, order_with_items
from vegmarket.utils import get_payload

logger = logging.getLogger(__name__)

# Roles allowed to see every order
OVERSIGHT_ROLES = ('broker', 'farmer')


@orders_bp.route('/api/orders', methods=['GET'])
@role_required('broker', 'farmer', 'retailer')
def list_orders():
    query = Order.query
    if current_user.role not in OVERSIGHT_ROLES:
        query = query.filter_by(user_id=current_user.id)
    orders = query.order_by(Order.created_at.desc(), Order.id.desc()).all()
    return jsonify([order_with_items(o) for o in orders])


@orders_bp.route('/api/orders/<int:order_id>', methods=['GET'])
@role_required('broker', 'farmer', 'retailer')
def get_order(order_id):
    order = db.get_or_404(Order, order_id, description='Order not found')
    if current_user.role not in OVERSIGHT_ROLES and order.user_id != current_user.id:
        raise PermissionDenied('Unauthorized')
    return jsonify(order_with_items(order, full_vegetable=True))


@orders_bp.route('/api/orders', methods=['POST'])
@role_required('retailer')
def place_order():
    """Submit the retailer's cart as an order"""
    data = get_payload()
    try:
        order = create_order(current_user, data.get('date'), data.get('name'), data.get('items'))
    except MarketError:
        raise
    except Exception:
        logger.exception('Error creating order for user %s', current_user.id)
        return jsonify({'error': 'Failed to create order'}), 500
    return jsonify(order_with_items(order)), 201


@orders_bp.route('/api/orders/<int:order_id>/status', methods=['PATCH', 'PUT'])
@role_required('broker', 'retailer')
def update_order_status(order_id):
    """Brokers set any status; a retailer may only cancel its own pending order"""
    order = db.get_or_404(Order, order_id, description='Order not found')
    status = get_payload().get('status')
    if status not in ORDER_STATUSES:
        raise ValidationError(f"Status must be one of: {', '.join(ORDER_STATUSES)}")

    if current_user.role == 'retailer':
        if order.user_id != current_user.id:
            raise PermissionDenied('Unauthorized')
        if status != 'cancelled' or order.status != 'pending':
            raise ValidationError('Only pending orders can be cancelled')

    order.status = status
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Could not update status of order %s', order_id)
        return jsonify({'error': 'Failed to update order'}), 500

    return jsonify(order.to_dict())
