"""
Vegetables Blueprint

Catalogue CRUD.
"""

from flask import Blueprint

vegetables_bp = Blueprint('vegetables', __name__)

from vegmarket.vegetables import routes  # noqa: E402, F401
