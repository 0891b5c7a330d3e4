"""
Auction Services

Auction creation, bid placement and settlement.

Bidding rules:
- only an `active` auction whose end time is still in the future accepts bids
- the first bid must be at least the base price
- every later bid must be at least the current bid plus BID_INCREMENT
- the new bid and the auction's highest-bid fields commit together

Expired auctions are settled lazily: listings call close_expired_auctions()
before reading, and the `flask close-auctions` command does the same.
"""

import logging
from datetime import datetime

from flask import current_app

from vegmarket.errors import NotFound, PermissionDenied, ValidationError
from vegmarket.extensions import db
from vegmarket.models import Auction, Bid, Vegetable
from vegmarket.utils import parse_datetime, parse_number, parse_positive

logger = logging.getLogger(__name__)


def _commit():
    try:
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise


def get_auction(auction_id):
    auction = db.session.get(Auction, auction_id)
    if auction is None:
        raise NotFound('Auction not found')
    return auction


def create_auction(farmer, vegetable_id, quantity, base_price, end_time, now=None):
    """Open an auction for `farmer`.

    Raises:
        ValidationError: missing or invalid fields, end time not in the future
        NotFound: unknown vegetable
    """
    if any(v in (None, '') for v in (vegetable_id, quantity, base_price, end_time)):
        raise ValidationError('Missing required fields')

    quantity = parse_number(quantity, 'Quantity')
    if quantity <= 0:
        raise ValidationError('Quantity must be greater than 0')
    base_price = parse_number(base_price, 'Base price')
    if base_price <= 0:
        raise ValidationError('Base price must be greater than 0')

    now = now or datetime.utcnow()
    end = parse_datetime(end_time, 'End time')
    if end <= now:
        raise ValidationError('End time must be in the future')

    vegetable = db.session.get(Vegetable, parse_number(vegetable_id, 'Vegetable id', integer=True))
    if vegetable is None:
        raise NotFound('Vegetable not found')

    auction = Auction(
        farmer_id=farmer.id,
        vegetable_id=vegetable.id,
        quantity=quantity,
        base_price=base_price,
        start_time=now,
        end_time=end,
        status='active',
    )
    db.session.add(auction)
    _commit()
    logger.info('Farmer %s opened auction %s for %s (base %.2f, ends %s)',
                farmer.id, auction.id, vegetable.name, base_price, end.isoformat())
    return auction


def minimum_bid(auction):
    """Lowest acceptable next bid for `auction`."""
    if auction.current_bid is not None:
        return auction.current_bid + current_app.config['BID_INCREMENT']
    return auction.base_price


def place_bid(auction_id, bidder, amount, now=None):
    """Place a bid and make it the auction's highest bid.

    Returns:
        (bid, auction) with the auction refreshed after the commit

    Raises:
        NotFound: unknown auction
        ValidationError: auction closed or ended, bad amount, bid too low
    """
    auction = get_auction(auction_id)
    now = now or datetime.utcnow()

    if auction.status != 'active':
        raise ValidationError('Auction is not active')
    if auction.end_time <= now:
        raise ValidationError('Auction has ended')

    try:
        bid_amount = parse_positive(amount, 'Bid amount')
    except ValidationError:
        raise ValidationError('Invalid bid amount')

    minimum = minimum_bid(auction)
    if bid_amount < minimum:
        raise ValidationError(f'Bid must be at least ₹{format_amount(minimum)}')

    bid = Bid(auction_id=auction.id, bidder_id=bidder.id, amount=bid_amount, created_at=now)
    db.session.add(bid)
    auction.current_bid = bid_amount
    auction.highest_bidder_id = bidder.id
    _commit()
    db.session.refresh(auction)

    logger.info('Bid %.2f by user %s on auction %s', bid_amount, bidder.id, auction.id)
    return bid, auction


def _check_owner(auction, farmer):
    if auction.farmer_id != farmer.id:
        raise PermissionDenied('You can only manage your own auctions')


def close_auction(auction_id, farmer):
    """End an active auction early; the highest bidder (if any) wins."""
    auction = get_auction(auction_id)
    _check_owner(auction, farmer)
    if auction.status != 'active':
        raise ValidationError('Auction is not active')

    auction.status = 'completed'
    _commit()
    logger.info('Auction %s closed by farmer %s, winner %s at %s',
                auction.id, farmer.id, auction.highest_bidder_id, auction.current_bid)
    return auction


def cancel_auction(auction_id, farmer):
    """Cancel an active auction that has not received any bids."""
    auction = get_auction(auction_id)
    _check_owner(auction, farmer)
    if auction.status != 'active':
        raise ValidationError('Auction is not active')
    if auction.current_bid is not None or auction.bids:
        raise ValidationError('Auctions with bids cannot be cancelled')

    auction.status = 'cancelled'
    _commit()
    logger.info('Auction %s cancelled by farmer %s', auction.id, farmer.id)
    return auction


def close_expired_auctions(now=None):
    """Mark every active auction whose end time has passed as completed.

    Returns:
        Number of auctions closed
    """
    now = now or datetime.utcnow()
    expired = Auction.query.filter(Auction.status == 'active', Auction.end_time <= now).all()
    if not expired:
        return 0

    for auction in expired:
        auction.status = 'completed'
    _commit()
    logger.info('Closed %d expired auctions', len(expired))
    return len(expired)


def active_auctions(now=None):
    now = now or datetime.utcnow()
    close_expired_auctions(now)
    return Auction.query.filter(Auction.status == 'active', Auction.end_time > now)\
        .order_by(Auction.end_time.asc()).all()


def format_amount(value):
    """Render an amount without trailing zeros: 110.0 -> '110', 45.5 -> '45.5'."""
    return f'{value:.2f}'.rstrip('0').rstrip('.')
