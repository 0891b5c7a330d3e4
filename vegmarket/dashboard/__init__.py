"""
Dashboard Blueprint

Role dashboards and sales/demand analytics.
"""

from flask import Blueprint

dashboard_bp = Blueprint('dashboard', __name__)

from vegmarket.dashboard import routes  # noqa: E402, F401
