"""
Default Catalogue

Vegetables inserted when the catalogue is empty, either on startup or via
POST /api/vegetables/init.
"""

import logging

from vegmarket.extensions import db
from vegmarket.models import Vegetable

logger = logging.getLogger(__name__)

DEFAULT_VEGETABLES = [
    {'name': 'Tomato',   'price': 45.50, 'quantity': 100, 'image': '/vegetables/tomato.svg',
     'description': 'Fresh red tomatoes, perfect for salads and cooking'},
    {'name': 'Potato',   'price': 30.00, 'quantity': 200, 'image': '/vegetables/potato.svg',
     'description': 'Fresh potatoes, versatile for all kinds of dishes'},
    {'name': 'Onion',    'price': 35.75, 'quantity': 150, 'image': '/vegetables/onion.svg',
     'description': 'Fresh onions, essential for Indian cuisine'},
    {'name': 'Carrot',   'price': 40.00, 'quantity': 120, 'image': '/vegetables/carrot.svg',
     'description': 'Fresh carrots, rich in vitamins and minerals'},
    {'name': 'Cabbage',  'price': 25.50, 'quantity': 80,  'image': '/vegetables/cabbage.svg',
     'description': 'Fresh green cabbage, great for salads and stir-fry'},
    {'name': 'Cucumber', 'price': 35.00, 'quantity': 100, 'image': '/vegetables/cucumber.svg',
     'description': 'Fresh cucumbers, crisp and refreshing'},
]


def seed_default_vegetables():
    """Insert the default catalogue if no vegetables exist.

    Returns:
        List of created Vegetable rows (empty when the catalogue was not empty)
    """
    if Vegetable.query.first() is not None:
        return []

    created = [Vegetable(**veg) for veg in DEFAULT_VEGETABLES]
    db.session.add_all(created)
    db.session.commit()
    logger.info('Seeded %d default vegetables', len(created))
    return created
