"""
Flask CLI Commands

    flask --app app close-auctions
    flask --app app create-user broker@example.com secret123 --role broker
"""

import click
from flask.cli import with_appcontext
from werkzeug.security import generate_password_hash

from vegmarket.auctions.services import close_expired_auctions
from vegmarket.extensions import db
from vegmarket.models import ROLES, User


@click.command('close-auctions')
@with_appcontext
def close_auctions_command():
    """Mark active auctions past their end time as completed."""
    closed = close_expired_auctions()
    click.echo(f'Closed {closed} expired auction(s)')


@click.command('create-user')
@click.argument('email')
@click.argument('password')
@click.option('--role', type=click.Choice(ROLES), default='broker', show_default=True)
@click.option('--name', default=None)
@with_appcontext
def create_user_command(email, password, role, name):
    """Create a verified account, or update the role of an existing one."""
    email = email.strip().lower()
    user = User.query.filter_by(email=email).first()
    if user:
        user.role = role
        click.echo(f'Existing user {email} set to {role}')
    else:
        user = User(
            email=email,
            password_hash=generate_password_hash(password),
            name=name,
            role=role,
            email_verified=True,
        )
        db.session.add(user)
        click.echo(f'Created {role} {email}')
    db.session.commit()


def register_commands(app):
    app.cli.add_command(close_auctions_command)
    app.cli.add_command(create_user_command)
