"""
Auction Routes

Farmers open and manage auctions, retailers bid on them, anyone may browse.
"""

from flask import jsonify
from flask_login import current_user, login_required

from vegmarket.auctions import auctions_bp
from vegmarket.auctions.services import (
    active_auctions, cancel_auction, close_auction, close_expired_auctions,
    create_auction, get_auction, place_bid
)
from vegmarket.models import Auction, Bid
from vegmarket.utils import get_payload


@auctions_bp.route('/api/auctions', methods=['GET'])
def list_auctions():
    close_expired_auctions()
    auctions = Auction.query.order_by(Auction.created_at.desc(), Auction.id.desc()).all()
    return jsonify([a.to_dict() for a in auctions])


@auctions_bp.route('/api/auctions/active', methods=['GET'])
def list_active_auctions():
    """Open auctions, soonest ending first"""
    return jsonify([a.to_dict() for a in active_auctions()])


@auctions_bp.route('/api/auctions/mine', methods=['GET'])
@auctions_bp.route('/api/auctions/my-auctions', methods=['GET'])
@login_required
def my_auctions():
    """Farmer: own auctions. Retailer: own bids with their auction."""
    close_expired_auctions()
    if current_user.role == 'farmer':
        auctions = Auction.query.filter_by(farmer_id=current_user.id)\
            .order_by(Auction.created_at.desc(), Auction.id.desc()).all()
        return jsonify([a.to_dict() for a in auctions])

    if current_user.role == 'retailer':
        bids = Bid.query.filter_by(bidder_id=current_user.id)\
            .order_by(Bid.created_at.desc(), Bid.id.desc()).all()
        result = []
        for bid in bids:
            entry = bid.to_dict()
            entry['auction'] = bid.auction.to_dict()
            entry['isHighest'] = bid.auction.highest_bidder_id == current_user.id \
                and bid.auction.current_bid == bid.amount
            result.append(entry)
        return jsonify(result)

    return jsonify([])


@auctions_bp.route('/api/auctions/<int:auction_id>', methods=['GET'])
def get_auction_detail(auction_id):
    return jsonify(get_auction(auction_id).to_dict())


@auctions_bp.route('/api/auctions/<int:auction_id>/bids', methods=['GET'])
def list_bids(auction_id):
    """Bids on an auction, highest first"""
    auction = get_auction(auction_id)
    return jsonify([b.to_dict() for b in auction.bids])


@auctions_bp.route('/api/auctions', methods=['POST'])
@login_required
def open_auction():
    if current_user.role != 'farmer':
        return jsonify({'error': 'Only farmers can create auctions'}), 403

    data = get_payload()
    auction = create_auction(
        current_user,
        data.get('vegetableId'),
        data.get('quantity'),
        data.get('basePrice'),
        data.get('endTime'),
    )
    return jsonify(auction.to_dict()), 201


@auctions_bp.route('/api/auctions/<int:auction_id>/bids', methods=['POST'])
@auctions_bp.route('/api/auctions/<int:auction_id>', methods=['POST'])
@login_required
def bid(auction_id):
    """Place a bid as the current retailer"""
    if current_user.role != 'retailer':
        return jsonify({'error': 'Only retailers can place bids'}), 403

    data = get_payload()
    new_bid, auction = place_bid(auction_id, current_user, data.get('amount'))
    return jsonify({'bid': new_bid.to_dict(), 'auction': auction.to_dict()}), 201


@auctions_bp.route('/api/auctions/<int:auction_id>/close', methods=['POST'])
@login_required
def close(auction_id):
    if current_user.role != 'farmer':
        return jsonify({'error': 'Only farmers can close auctions'}), 403
    return jsonify(close_auction(auction_id, current_user).to_dict())


@auctions_bp.route('/api/auctions/<int:auction_id>/cancel', methods=['POST'])
@login_required
def cancel(auction_id):
    if current_user.role != 'farmer':
        return jsonify({'error': 'Only farmers can cancel auctions'}), 403
    return jsonify(cancel_auction(auction_id, current_user).to_dict())
