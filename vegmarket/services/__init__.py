"""
Services Package

Exports all services for easy importing.
"""

from vegmarket.services.email import (
    EmailDeliveryError, email_delivery_enabled, send_verification_email, send_welcome_email
)
from vegmarket.services.seed import DEFAULT_VEGETABLES, seed_default_vegetables

__all__ = [
    'EmailDeliveryError',
    'email_delivery_enabled',
    'send_verification_email',
    'send_welcome_email',
    'DEFAULT_VEGETABLES',
    'seed_default_vegetables'
]
