"""
Order and Order Item Models
"""

from datetime import datetime

from vegmarket.extensions import db

ORDER_STATUSES = ('pending', 'completed', 'cancelled')


class Order(db.Model):
    """Retailer order; quantity and total_price are sums over its items"""
    __tablename__ = 'orders'

    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    date = db.Column(db.String(32), nullable=False)
    name = db.Column(db.String(120), nullable=False)
    quantity = db.Column(db.Float, nullable=False, default=0)
    total_price = db.Column(db.Float, nullable=False, default=0)
    status = db.Column(db.String(20), nullable=False, default='pending')
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    items = db.relationship('OrderItem', backref='order', lazy=True,
                            cascade='all, delete-orphan')

    def to_dict(self):
        return {
            'id': self.id,
            'userId': self.user_id,
            'date': self.date,
            'name': self.name,
            'quantity': self.quantity,
            'totalPrice': self.total_price,
            'status': self.status,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Order {self.id} {self.status} total:{self.total_price}>'


class OrderItem(db.Model):
    """Order line; vegetable_id is cleared if the vegetable is deleted"""
    __tablename__ = 'order_items'

    id = db.Column(db.Integer, primary_key=True)
    order_id = db.Column(db.Integer, db.ForeignKey('orders.id'), nullable=False, index=True)
    vegetable_id = db.Column(db.Integer, db.ForeignKey('vegetables.id'), index=True)
    quantity = db.Column(db.Float, nullable=False)
    price = db.Column(db.Float, nullable=False)

    vegetable = db.relationship('Vegetable', lazy='joined')

    @property
    def line_total(self):
        return self.price * self.quantity

    def to_dict(self):
        return {
            'id': self.id,
            'orderId': self.order_id,
            'vegetableId': self.vegetable_id,
            'quantity': self.quantity,
            'price': self.price,
        }

    def __repr__(self):
        return f'<OrderItem order:{self.order_id} veg:{self.vegetable_id} x{self.quantity}>'
