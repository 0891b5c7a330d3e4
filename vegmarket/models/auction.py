"""
Auction and Bid Models
"""

from datetime import datetime

from vegmarket.extensions import db

AUCTION_STATUSES = ('active', 'completed', 'cancelled')


class Auction(db.Model):
    """Time-boxed listing of a vegetable quantity open to retailer bids"""
    __tablename__ = 'auctions'

    id = db.Column(db.Integer, primary_key=True)
    farmer_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    vegetable_id = db.Column(db.Integer, db.ForeignKey('vegetables.id'), nullable=False, index=True)
    quantity = db.Column(db.Float, nullable=False)
    base_price = db.Column(db.Float, nullable=False)
    current_bid = db.Column(db.Float)
    highest_bidder_id = db.Column(db.Integer, db.ForeignKey('users.id'))
    start_time = db.Column(db.DateTime, nullable=False, default=datetime.utcnow)
    end_time = db.Column(db.DateTime, nullable=False, index=True)
    status = db.Column(db.String(20), nullable=False, default='active', index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow, index=True)

    vegetable = db.relationship('Vegetable', lazy='joined')
    farmer = db.relationship('User', foreign_keys=[farmer_id])
    highest_bidder = db.relationship('User', foreign_keys=[highest_bidder_id])
    bids = db.relationship('Bid', backref='auction', lazy=True,
                           cascade='all, delete-orphan',
                           order_by='Bid.amount.desc()')

    def is_open(self, now=None):
        now = now or datetime.utcnow()
        return self.status == 'active' and self.end_time > now

    def to_dict(self):
        return {
            'id': self.id,
            'farmerId': self.farmer_id,
            'farmerName': self.farmer.name if self.farmer else None,
            'vegetableId': self.vegetable_id,
            'vegetableName': self.vegetable.name if self.vegetable else None,
            'quantity': self.quantity,
            'basePrice': self.base_price,
            'currentBid': self.current_bid,
            'highestBidderId': self.highest_bidder_id,
            'startTime': self.start_time.isoformat() if self.start_time else None,
            'endTime': self.end_time.isoformat() if self.end_time else None,
            'status': self.status,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Auction {self.id} {self.status} bid:{self.current_bid}>'


class Bid(db.Model):
    """Retailer offer against an auction"""
    __tablename__ = 'bids'

    id = db.Column(db.Integer, primary_key=True)
    auction_id = db.Column(db.Integer, db.ForeignKey('auctions.id'), nullable=False, index=True)
    bidder_id = db.Column(db.Integer, db.ForeignKey('users.id'), nullable=False, index=True)
    amount = db.Column(db.Float, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    bidder = db.relationship('User')

    def to_dict(self):
        return {
            'id': self.id,
            'auctionId': self.auction_id,
            'bidderId': self.bidder_id,
            'bidderName': self.bidder.name if self.bidder else None,
            'amount': self.amount,
            'createdAt': self.created_at.isoformat() if self.created_at else None,
        }

    def __repr__(self):
        return f'<Bid auction:{self.auction_id} amount:{self.amount}>'
