"""
Vegetable Model
"""

from datetime import datetime

from vegmarket.extensions import db


class Vegetable(db.Model):
    """Catalogue entry a retailer can order or a farmer can auction"""
    __tablename__ = 'vegetables'

    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    price = db.Column(db.Float, nullable=False)
    quantity = db.Column(db.Float, nullable=False, default=0)
    unit = db.Column(db.String(20), nullable=False, default='kg')
    image = db.Column(db.String(255))
    description = db.Column(db.String(500))
    farmer_id = db.Column(db.Integer, db.ForeignKey('users.id'), index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    def to_dict(self):
        return {
            'id': self.id,
            'name': self.name,
            'price': self.price,
            'quantity': self.quantity,
            'unit': self.unit,
            'image': self.image,
            'description': self.description,
            'farmerId': self.farmer_id,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Vegetable {self.name} @ {self.price}>'
