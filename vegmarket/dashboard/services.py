"""
Dashboard Services

Aggregation over orders, order items and the catalogue for the role
dashboards. Everything is computed in memory from the ORM rows.
"""

from datetime import datetime, timedelta

from vegmarket.models import Auction, Bid, Order, User, Vegetable

UNKNOWN_VEGETABLE = 'Unknown'


def _item_name(item):
    return item.vegetable.name if item.vegetable else UNKNOWN_VEGETABLE


def compute_demand(orders):
    """Rank vegetables by total ordered quantity.

    Returns:
        List of {vegetableName, totalOrders, totalQuantity, image} sorted by
        totalQuantity descending; totalOrders counts order lines.
    """
    demand = {}
    for order in orders:
        for item in order.items:
            name = _item_name(item)
            entry = demand.setdefault(name, {
                'vegetableName': name,
                'totalOrders': 0,
                'totalQuantity': 0,
                'image': item.vegetable.image if item.vegetable else None
            })
            entry['totalOrders'] += 1
            entry['totalQuantity'] += item.quantity

    return sorted(demand.values(), key=lambda d: d['totalQuantity'], reverse=True)


def compute_sales(orders):
    """Sales per vegetable sorted by revenue, plus overall totals."""
    sales = {}
    total_revenue = 0.0
    total_quantity = 0

    for order in orders:
        for item in order.items:
            name = _item_name(item)
            entry = sales.setdefault(name, {
                'vegetableName': name,
                'totalSold': 0,
                'totalRevenue': 0.0,
                'image': item.vegetable.image if item.vegetable else None
            })
            revenue = item.line_total
            entry['totalSold'] += item.quantity
            entry['totalRevenue'] += revenue
            total_revenue += revenue
            total_quantity += item.quantity

    for entry in sales.values():
        entry['totalRevenue'] = round(entry['totalRevenue'], 2)

    return {
        'sales': sorted(sales.values(), key=lambda s: s['totalRevenue'], reverse=True),
        'totalRevenue': round(total_revenue, 2),
        'totalQuantitySold': total_quantity
    }


def price_statistics(prices):
    if not prices:
        return {'highestPrice': 0, 'lowestPrice': 0, 'averagePrice': 0}
    return {
        'highestPrice': max(prices),
        'lowestPrice': min(prices),
        'averagePrice': round(sum(prices) / len(prices), 2)
    }


def broker_overview(now=None):
    """Everything the broker dashboard shows in one payload."""
    now = now or datetime.utcnow()
    start_of_day = datetime(now.year, now.month, now.day)
    end_of_day = start_of_day + timedelta(days=1)

    orders = Order.query.order_by(Order.created_at.desc(), Order.id.desc()).all()
    vegetables = Vegetable.query.order_by(Vegetable.created_at.desc()).all()
    counted = [o for o in orders if o.status != 'cancelled']

    todays_collection = sum(
        o.quantity for o in counted
        if o.created_at and start_of_day <= o.created_at < end_of_day
    )
    demand = compute_demand(counted)
    top = demand[0] if demand else None

    recent_lines = []
    for order in orders[:10]:
        for item in order.items:
            recent_lines.append({
                'id': order.id,
                'retailerId': order.user_id,
                'retailerName': order.name,
                'vegetableName': _item_name(item),
                'price': item.price,
                'quantity': item.quantity,
                'totalPrice': round(item.line_total, 2),
                'status': order.status
            })

    overview = {
        'todaysCollection': todays_collection,
        'totalFarmers': User.query.filter_by(role='farmer').count(),
        'totalRetailers': User.query.filter_by(role='retailer').count(),
        'totalRevenue': round(sum(o.total_price for o in counted), 2),
        'highestDemandVegetable': top['vegetableName'] if top else 'N/A',
        'highestDemandQuantity': top['totalQuantity'] if top else 0,
        'recentOrders': recent_lines[:10],
        'todaysVegetables': [
            {'name': v.name, 'description': v.description or 'Fresh vegetable', 'price': v.price}
            for v in vegetables
        ]
    }
    overview.update(price_statistics([v.price for v in vegetables]))
    return overview


def stats_for(user, now=None):
    """Role-specific dashboard counters for `user`."""
    now = now or datetime.utcnow()

    if user.role == 'broker':
        return {
            'totalFarmers': User.query.filter_by(role='farmer').count(),
            'totalRetailers': User.query.filter_by(role='retailer').count(),
            'totalOrders': Order.query.count(),
            'totalVegetables': Vegetable.query.count()
        }

    if user.role == 'retailer':
        orders = Order.query.filter_by(user_id=user.id).all()
        open_auction_ids = {
            bid.auction_id for bid in Bid.query.filter_by(bidder_id=user.id).all()
            if bid.auction.is_open(now)
        }
        return {
            'totalOrders': len(orders),
            'totalSpent': round(sum(o.total_price for o in orders if o.status != 'cancelled'), 2),
            'pendingOrders': sum(1 for o in orders if o.status == 'pending'),
            'activeBids': len(open_auction_ids)
        }

    if user.role == 'farmer':
        orders = Order.query.all()
        return {
            'totalVegetables': Vegetable.query.count(),
            'myVegetables': Vegetable.query.filter_by(farmer_id=user.id).count(),
            'totalOrders': len(orders),
            'totalRevenue': round(sum(o.total_price for o in orders if o.status != 'cancelled'), 2),
            'activeAuctions': Auction.query.filter(
                Auction.farmer_id == user.id,
                Auction.status == 'active',
                Auction.end_time > now
            ).count()
        }

    return {}
