"""
Email Delivery Service

Sends transactional email through the Resend HTTP API. Without an API key
the message is logged and skipped so local development needs no mail setup.
"""

import logging

import requests
from flask import current_app

logger = logging.getLogger(__name__)


class EmailDeliveryError(Exception):
    """Raised when the mail provider rejects or cannot receive a message."""


def email_delivery_enabled():
    return bool(current_app.config.get('RESEND_API_KEY'))


def _send(to, subject, html):
    config = current_app.config
    if not email_delivery_enabled():
        logger.info('Email delivery disabled, skipping "%s" to %s', subject, to)
        return False

    try:
        resp = requests.post(
            config['RESEND_API_URL'],
            json={'from': config['MAIL_FROM'], 'to': to, 'subject': subject, 'html': html},
            headers={'Authorization': f"Bearer {config['RESEND_API_KEY']}"},
            timeout=10,
        )
    except requests.exceptions.RequestException as e:
        raise EmailDeliveryError(f'Could not reach mail provider: {e}') from e

    if resp.status_code >= 400:
        raise EmailDeliveryError(f'Mail provider error {resp.status_code}: {resp.text[:200]}')
    return True


def send_verification_email(email, token):
    """Send the account verification link. Raises EmailDeliveryError."""
    verification_url = f"{current_app.config['APP_BASE_URL']}/verify-email?token={token}"
    hours = current_app.config['EMAIL_VERIFICATION_HOURS']
    html = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <h1 style="color: #333;">Verify your email address</h1>
          <p>Thank you for signing up! Please click the link below to verify your email address:</p>
          <a href="{verification_url}">Verify Email</a>
          <p style="color: #666; word-break: break-all;">{verification_url}</p>
          <p style="color: #999; font-size: 12px;">
            This link will expire in {hours} hours. If you didn't create an account, you can ignore this email.
          </p>
        </div>
    """
    return _send(email, 'Verify your email address', html)


def send_welcome_email(email, name=None):
    """Send the welcome message. Failures are logged, never raised."""
    greeting = f'Welcome, {name}!' if name else 'Welcome!'
    login_url = f"{current_app.config['APP_BASE_URL']}/login"
    html = f"""
        <div style="font-family: Arial, sans-serif; max-width: 600px; margin: 0 auto;">
          <h1 style="color: #333;">{greeting}</h1>
          <p>Your email has been verified and your account is now active.</p>
          <a href="{login_url}">Log In</a>
        </div>
    """
    try:
        return _send(email, 'Welcome!', html)
    except EmailDeliveryError as e:
        logger.warning('Failed to send welcome email to %s: %s', email, e)
        return False
