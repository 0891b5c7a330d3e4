"""
User Model
"""

from datetime import datetime

from flask_login import UserMixin

from vegmarket.extensions import db

ROLES = ('farmer', 'broker', 'retailer')
DEFAULT_ROLE = 'retailer'


class User(UserMixin, db.Model):
    """Marketplace account: farmer, broker or retailer"""
    __tablename__ = 'users'

    id = db.Column(db.Integer, primary_key=True)
    email = db.Column(db.String(120), unique=True, nullable=False, index=True)
    password_hash = db.Column(db.String(255), nullable=False)
    name = db.Column(db.String(120))
    image = db.Column(db.String(255))
    phone = db.Column(db.String(40))
    role = db.Column(db.String(20), nullable=False, default=DEFAULT_ROLE, index=True)
    # Shadows UserMixin.is_active so Flask-Login refuses deactivated accounts
    is_active = db.Column(db.Boolean, nullable=False, default=True)
    email_verified = db.Column(db.Boolean, nullable=False, default=False)
    email_verification_token = db.Column(db.String(64), index=True)
    email_verification_expires = db.Column(db.DateTime)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    vegetables = db.relationship('Vegetable', backref='farmer', lazy=True)
    orders = db.relationship('Order', backref='user', lazy=True,
                             order_by='Order.created_at.desc()')

    def to_dict(self):
        return {
            'id': self.id,
            'email': self.email,
            'name': self.name,
            'image': self.image,
            'phone': self.phone,
            'role': self.role,
            'isActive': self.is_active,
            'emailVerified': self.email_verified,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<User {self.email} ({self.role})>'
