"""
Vegetable Routes

Anyone may browse the catalogue; brokers and farmers maintain it. A farmer
owns the vegetables they list and may not touch another farmer's entries.
"""

import logging

from flask import jsonify, request
from flask_login import current_user

from vegmarket.auth.decorators import role_required
from vegmarket.errors import Conflict, PermissionDenied, ValidationError
from vegmarket.extensions import db
from vegmarket.models import Auction, OrderItem, Vegetable
from vegmarket.services import seed_default_vegetables
from vegmarket.utils import get_payload, get_text, parse_number, parse_positive
from vegmarket.vegetables import vegetables_bp

logger = logging.getLogger(__name__)

EDITABLE_TEXT_FIELDS = ('name', 'unit', 'image', 'description')
# Text columns that may not be cleared
REQUIRED_TEXT_FIELDS = ('name', 'unit')


def _check_can_modify(vegetable):
    if current_user.role == 'farmer' and vegetable.farmer_id not in (None, current_user.id):
        raise PermissionDenied('You can only modify your own vegetables')


def _parse_quantity(value):
    quantity = parse_number(value, 'Quantity')
    if quantity < 0:
        raise ValidationError('Quantity cannot be negative')
    return quantity


@vegetables_bp.route('/api/vegetables', methods=['GET'])
def list_vegetables():
    """Catalogue, newest first; `farmerId` narrows to one farmer's listings"""
    query = Vegetable.query
    farmer_id = request.args.get('farmerId', type=int)
    if farmer_id is not None:
        query = query.filter_by(farmer_id=farmer_id)
    vegetables = query.order_by(Vegetable.created_at.desc(), Vegetable.id.desc()).all()
    return jsonify([v.to_dict() for v in vegetables])


@vegetables_bp.route('/api/vegetables/<int:vegetable_id>', methods=['GET'])
def get_vegetable(vegetable_id):
    vegetable = db.get_or_404(Vegetable, vegetable_id, description='Vegetable not found')
    return jsonify(vegetable.to_dict())


@vegetables_bp.route('/api/vegetables', methods=['POST'])
@role_required('broker', 'farmer')
def create_vegetable():
    data = get_payload()
    name = get_text(data, 'name').strip()
    if not name or data.get('price') in (None, ''):
        return jsonify({'error': 'Name and price are required'}), 400

    vegetable = Vegetable(
        name=name,
        price=parse_positive(data.get('price'), 'Price'),
        quantity=_parse_quantity(data['quantity']) if data.get('quantity') not in (None, '') else 0,
        unit=get_text(data, 'unit').strip() or 'kg',
        image=get_text(data, 'image').strip() or None,
        description=get_text(data, 'description').strip() or None,
        farmer_id=current_user.id if current_user.role == 'farmer' else None,
    )

    try:
        db.session.add(vegetable)
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Could not create vegetable %s', name)
        return jsonify({'error': 'Failed to create vegetable'}), 500

    return jsonify(vegetable.to_dict()), 201


@vegetables_bp.route('/api/vegetables/<int:vegetable_id>', methods=['PUT', 'PATCH'])
@role_required('broker', 'farmer')
def update_vegetable(vegetable_id):
    vegetable = db.get_or_404(Vegetable, vegetable_id, description='Vegetable not found')
    _check_can_modify(vegetable)
    data = get_payload()

    # Validate everything before touching the row
    updates = {}
    if 'price' in data:
        updates['price'] = parse_positive(data['price'], 'Price')
    if 'quantity' in data:
        updates['quantity'] = _parse_quantity(data['quantity'])
    for field in EDITABLE_TEXT_FIELDS:
        if field in data:
            updates[field] = get_text(data, field).strip() or None
    for field in REQUIRED_TEXT_FIELDS:
        if field in updates and updates[field] is None:
            raise ValidationError(f'{field.capitalize()} cannot be empty')

    for field, value in updates.items():
        setattr(vegetable, field, value)

    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Could not update vegetable %s', vegetable_id)
        return jsonify({'error': 'Failed to update vegetable'}), 500

    return jsonify(vegetable.to_dict())


@vegetables_bp.route('/api/vegetables/<int:vegetable_id>', methods=['DELETE'])
@role_required('broker', 'farmer')
def delete_vegetable(vegetable_id):
    """Delete a vegetable; order history keeps its lines with the vegetable cleared"""
    vegetable = db.get_or_404(Vegetable, vegetable_id, description='Vegetable not found')
    _check_can_modify(vegetable)

    if Auction.query.filter_by(vegetable_id=vegetable_id).first():
        raise Conflict('Vegetable is referenced by auctions and cannot be deleted')

    try:
        OrderItem.query.filter_by(vegetable_id=vegetable_id).update({'vegetable_id': None})
        db.session.delete(vegetable)
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Could not delete vegetable %s', vegetable_id)
        return jsonify({'error': 'Failed to delete vegetable'}), 500

    return jsonify({'message': 'Vegetable deleted successfully'})


@vegetables_bp.route('/api/vegetables/init', methods=['POST'])
@role_required('broker', 'farmer')
def init_vegetables():
    """Seed the default catalogue when it is empty"""
    existing = Vegetable.query.count()
    if existing:
        return jsonify({'message': 'Vegetables already initialized', 'count': existing})

    created = seed_default_vegetables()
    return jsonify({
        'message': 'Vegetables initialized successfully',
        'count': len(created),
        'vegetables': [v.to_dict() for v in created]
    })
