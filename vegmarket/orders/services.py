"""
Order Services

Order creation and serialization helpers shared by the order routes and
the dashboard.
"""

import logging

from vegmarket.errors import NotFound, ValidationError
from vegmarket.extensions import db
from vegmarket.models import Order, OrderItem, Vegetable
from vegmarket.utils import parse_number, parse_positive

logger = logging.getLogger(__name__)


def order_with_items(order, full_vegetable=False):
    """Serialize an order with its items.

    List views carry `vegetableName`/`image` per item; the detail view
    carries the whole vegetable (or None once it has been deleted).
    """
    data = order.to_dict()
    items = []
    for item in order.items:
        entry = item.to_dict()
        vegetable = item.vegetable
        if full_vegetable:
            entry['vegetable'] = vegetable.to_dict() if vegetable else None
        else:
            entry['vegetableName'] = vegetable.name if vegetable else 'Unknown'
            entry['image'] = vegetable.image if vegetable else None
        items.append(entry)
    data['items'] = items
    return data


def create_order(user, date, name, items):
    """Create a pending order for `user` from cart `items`.

    Each item needs an existing `vegetableId` and a positive `quantity`.
    Its unit price is the supplied `price` when positive, otherwise the
    catalogue price. Order quantity and total are computed here from the
    items; the order and its lines are committed together.

    Raises:
        ValidationError: missing fields or bad item values
        NotFound: an item references an unknown vegetable
    """
    if not date or not name or not items or not isinstance(items, list):
        raise ValidationError('Missing required fields')

    order = Order(user_id=user.id, date=str(date), name=str(name).strip(), status='pending')
    total_quantity = 0
    total_price = 0.0

    for raw in items:
        if not isinstance(raw, dict) or raw.get('vegetableId') in (None, ''):
            raise ValidationError('Each item needs a vegetableId')
        vegetable = db.session.get(Vegetable, _parse_id(raw['vegetableId']))
        if vegetable is None:
            raise NotFound(f"Vegetable {raw['vegetableId']} not found")

        quantity = parse_positive(raw.get('quantity'), 'Item quantity')
        price = vegetable.price
        if raw.get('price') not in (None, ''):
            offered = parse_number(raw['price'], 'Item price')
            if offered > 0:
                price = offered

        order.items.append(OrderItem(vegetable_id=vegetable.id, quantity=quantity, price=price))
        total_quantity += quantity
        total_price += quantity * price

    order.quantity = total_quantity
    order.total_price = round(total_price, 2)

    try:
        db.session.add(order)
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    logger.info('Order %s created by user %s: %d items, total %.2f',
                order.id, user.id, len(order.items), order.total_price)
    return order


def _parse_id(value):
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f'Invalid vegetableId: {value}')
