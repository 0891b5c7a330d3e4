from datetime import datetime, timedelta

import pytest
from werkzeug.security import generate_password_hash

from vegmarket import create_app
from vegmarket.config import TestConfig
from vegmarket.extensions import db
from vegmarket.models import Auction, User, Vegetable

PASSWORD = 'password123'
# Matches the admin hash in TestConfig
ADMIN_PASSWORD = 'admin-pass'


# Requests push their own app context; DB work in tests happens inside short
# `with app.app_context()` blocks so Flask-Login's per-context user cache
# never leaks between clients.


@pytest.fixture()
def app():
    app = create_app(TestConfig)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def make_user(app):
    def _make(role, email, password=PASSWORD, name=None, verified=True, active=True):
        with app.app_context():
            user = User(
                email=email,
                password_hash=generate_password_hash(password),
                name=name or email.split('@')[0].title(),
                role=role,
                email_verified=verified,
                is_active=active,
            )
            db.session.add(user)
            db.session.commit()
            return user.id
    return _make


def login(client, email, password=PASSWORD):
    return client.post('/login', json={'email': email, 'password': password})


@pytest.fixture()
def login_as(app, make_user):
    """Return a fresh test client logged in as a new user of `role`."""
    def _login_as(role, email=None, **kwargs):
        email = email or f'{role}@test.com'
        user_id = make_user(role, email, **kwargs)
        c = app.test_client()
        r = login(c, email)
        assert r.status_code == 200, r.get_json()
        c.user_id = user_id
        return c
    return _login_as


@pytest.fixture()
def broker_client(login_as):
    return login_as('broker')


@pytest.fixture()
def farmer_client(login_as):
    return login_as('farmer')


@pytest.fixture()
def retailer_client(login_as):
    return login_as('retailer')


@pytest.fixture()
def add_vegetable(app):
    def _add(name='Tomato', price=45.5, quantity=100, farmer_id=None, image=None):
        with app.app_context():
            veg = Vegetable(name=name, price=price, quantity=quantity,
                            farmer_id=farmer_id, image=image)
            db.session.add(veg)
            db.session.commit()
            return veg.id
    return _add


@pytest.fixture()
def add_auction(app):
    """Insert an auction directly, e.g. one that has already ended."""
    def _add(farmer_id, vegetable_id, base_price=100.0, quantity=50,
             ends_in=timedelta(hours=1), status='active'):
        now = datetime.utcnow()
        with app.app_context():
            auction = Auction(farmer_id=farmer_id, vegetable_id=vegetable_id,
                              quantity=quantity, base_price=base_price,
                              start_time=now, end_time=now + ends_in, status=status)
            db.session.add(auction)
            db.session.commit()
            return auction.id
    return _add


def future(hours=1):
    return (datetime.utcnow() + timedelta(hours=hours)).isoformat()
