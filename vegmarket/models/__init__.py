"""
Models Package

Exports all models for easy importing.
"""

from vegmarket.models.user import User, ROLES, DEFAULT_ROLE
from vegmarket.models.vegetable import Vegetable
from vegmarket.models.order import Order, OrderItem, ORDER_STATUSES
from vegmarket.models.auction import Auction, Bid, AUCTION_STATUSES

__all__ = [
    'User', 'Vegetable', 'Order', 'OrderItem', 'Auction', 'Bid',
    'ROLES', 'DEFAULT_ROLE', 'ORDER_STATUSES', 'AUCTION_STATUSES',
]
