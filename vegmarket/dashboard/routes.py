"""
Dashboard Routes
"""

from flask import jsonify, url_for
from flask_login import current_user, login_required

from vegmarket.auth.decorators import role_required
from vegmarket.dashboard import dashboard_bp
from vegmarket.dashboard.services import broker_overview, compute_demand, compute_sales, stats_for
from vegmarket.models import Order

# Landing endpoint per role after login
ROLE_HOME = {
    'broker': 'dashboard.broker_dashboard',
    'farmer': 'dashboard.demand',
    'retailer': 'vegetables.list_vegetables',
}


def _counted_orders():
    """Orders that count towards demand and sales (cancelled ones do not)"""
    return Order.query.filter(Order.status != 'cancelled').all()


@dashboard_bp.route('/')
def index():
    """Where the current session should land"""
    if not current_user.is_authenticated:
        return jsonify({'authenticated': False, 'login': url_for('auth.login')})
    return jsonify({
        'authenticated': True,
        'role': current_user.role,
        'home': url_for(ROLE_HOME[current_user.role]) if current_user.role in ROLE_HOME else None
    })


@dashboard_bp.route('/api/stats')
@login_required
def stats():
    return jsonify(stats_for(current_user))


@dashboard_bp.route('/api/demand')
@role_required('farmer', 'broker')
def demand():
    """Vegetables ranked by ordered quantity"""
    return jsonify(compute_demand(_counted_orders()))


@dashboard_bp.route('/api/sales')
@role_required('farmer', 'broker')
def sales():
    """Revenue per vegetable with overall totals"""
    return jsonify(compute_sales(_counted_orders()))


@dashboard_bp.route('/api/dashboard')
@role_required('broker')
def broker_dashboard():
    return jsonify(broker_overview())
