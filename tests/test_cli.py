from datetime import timedelta

from vegmarket.extensions import db
from vegmarket.models import Auction, User


def test_create_user_command(app):
    runner = app.test_cli_runner()
    result = runner.invoke(args=['create-user', 'Boss@Test.com', 'secret123', '--role', 'broker'])
    assert result.exit_code == 0
    assert 'Created broker boss@test.com' in result.output

    result = runner.invoke(args=['create-user', 'boss@test.com', 'ignored', '--role', 'farmer'])
    assert 'set to farmer' in result.output

    with app.app_context():
        user = User.query.filter_by(email='boss@test.com').one()
        assert user.role == 'farmer'
        assert user.email_verified is True


def test_close_auctions_command(app, make_user, add_vegetable, add_auction):
    farmer_id = make_user('farmer', 'grower@test.com')
    veg_id = add_vegetable()
    expired = add_auction(farmer_id, veg_id, ends_in=timedelta(minutes=-1))

    result = app.test_cli_runner().invoke(args=['close-auctions'])
    assert result.exit_code == 0
    assert 'Closed 1 expired auction(s)' in result.output

    with app.app_context():
        assert db.session.get(Auction, expired).status == 'completed'
