"""
Broker Blueprint

Farmer and retailer account oversight for brokers.
"""

from flask import Blueprint

broker_bp = Blueprint('broker', __name__)

from vegmarket.broker import routes  # noqa: E402, F401
