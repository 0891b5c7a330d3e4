"""
Auctions Blueprint
"""

from flask import Blueprint

auctions_bp = Blueprint('auctions', __name__)

from vegmarket.auctions import routes  # noqa: E402, F401
