import pytest


@pytest.fixture()
def catalogue(add_vegetable):
    return {
        'tomato': add_vegetable('Tomato', 45.5, 100, image='/vegetables/tomato.svg'),
        'potato': add_vegetable('Potato', 30.0, 200),
    }


def _order(client, items, name='Corner Store', date='2026-10-19'):
    return client.post('/api/orders', json={'date': date, 'name': name, 'items': items})


def test_place_order_computes_totals(retailer_client, catalogue):
    r = _order(retailer_client, [
        {'vegetableId': catalogue['tomato'], 'quantity': 2},
        {'vegetableId': catalogue['potato'], 'quantity': 3, 'price': 28},
    ])
    assert r.status_code == 201
    body = r.get_json()
    assert body['status'] == 'pending'
    assert body['quantity'] == 5
    assert body['totalPrice'] == 175.0
    assert body['userId'] == retailer_client.user_id
    assert [i['price'] for i in body['items']] == [45.5, 28]
    assert body['items'][0]['vegetableName'] == 'Tomato'
    assert body['items'][0]['image'] == '/vegetables/tomato.svg'


def test_client_supplied_total_is_ignored(retailer_client, catalogue):
    r = retailer_client.post('/api/orders', json={
        'date': '2026-10-19', 'name': 'Shop', 'totalPrice': 1, 'quantity': 99,
        'items': [{'vegetableId': catalogue['potato'], 'quantity': 1}],
    })
    assert r.get_json()['totalPrice'] == 30.0
    assert r.get_json()['quantity'] == 1


def test_place_order_validation(retailer_client, catalogue):
    r = retailer_client.post('/api/orders', json={'date': '2026-10-19', 'name': 'Shop'})
    assert r.status_code == 400
    assert r.get_json()['error'] == 'Missing required fields'

    assert _order(retailer_client, []).status_code == 400
    assert _order(retailer_client, [{'quantity': 1}]).status_code == 400
    assert _order(retailer_client, [{'vegetableId': catalogue['tomato'], 'quantity': 0}]).status_code == 400
    assert _order(retailer_client, [{'vegetableId': 'abc', 'quantity': 1}]).status_code == 400
    assert _order(retailer_client, [{'vegetableId': 999, 'quantity': 1}]).status_code == 404

    # Nothing half-written
    assert retailer_client.get('/api/orders').get_json() == []


def test_only_retailers_place_orders(client, broker_client, farmer_client, catalogue):
    items = [{'vegetableId': catalogue['tomato'], 'quantity': 1}]
    assert _order(client, items).status_code == 401
    assert _order(broker_client, items).status_code == 403
    assert _order(farmer_client, items).status_code == 403


def test_order_visibility(login_as, broker_client, farmer_client, catalogue):
    alice = login_as('retailer', 'alice@test.com')
    bob = login_as('retailer', 'bob@test.com')
    alice_order = _order(alice, [{'vegetableId': catalogue['tomato'], 'quantity': 1}]).get_json()
    _order(bob, [{'vegetableId': catalogue['potato'], 'quantity': 1}])

    assert len(alice.get('/api/orders').get_json()) == 1
    assert len(broker_client.get('/api/orders').get_json()) == 2
    assert len(farmer_client.get('/api/orders').get_json()) == 2

    r = alice.get(f"/api/orders/{alice_order['id']}")
    assert r.status_code == 200
    assert r.get_json()['items'][0]['vegetable']['name'] == 'Tomato'

    assert bob.get(f"/api/orders/{alice_order['id']}").status_code == 403
    assert broker_client.get(f"/api/orders/{alice_order['id']}").status_code == 200
    assert broker_client.get('/api/orders/999').status_code == 404


def test_broker_updates_status(broker_client, retailer_client, catalogue):
    order = _order(retailer_client, [{'vegetableId': catalogue['tomato'], 'quantity': 1}]).get_json()

    r = broker_client.patch(f"/api/orders/{order['id']}/status", json={'status': 'shipped'})
    assert r.status_code == 400

    r = broker_client.patch(f"/api/orders/{order['id']}/status", json={'status': 'completed'})
    assert r.status_code == 200
    assert r.get_json()['status'] == 'completed'


def test_retailer_can_only_cancel_own_pending_order(login_as, broker_client, catalogue):
    alice = login_as('retailer', 'alice@test.com')
    bob = login_as('retailer', 'bob@test.com')
    order = _order(alice, [{'vegetableId': catalogue['tomato'], 'quantity': 1}]).get_json()
    url = f"/api/orders/{order['id']}/status"

    assert bob.patch(url, json={'status': 'cancelled'}).status_code == 403
    assert alice.patch(url, json={'status': 'completed'}).status_code == 400

    r = alice.patch(url, json={'status': 'cancelled'})
    assert r.status_code == 200
    assert r.get_json()['status'] == 'cancelled'

    # Already cancelled
    assert alice.patch(url, json={'status': 'cancelled'}).status_code == 400


def test_non_positive_item_price_uses_catalogue_price(retailer_client, catalogue):
    r = _order(retailer_client, [
        {'vegetableId': catalogue['tomato'], 'quantity': 2, 'price': 0},
        {'vegetableId': catalogue['potato'], 'quantity': 1, 'price': -5},
    ])
    assert r.status_code == 201
    body = r.get_json()
    assert [i['price'] for i in body['items']] == [45.5, 30.0]
    assert body['totalPrice'] == 121.0

    r = _order(retailer_client, [{'vegetableId': catalogue['tomato'], 'quantity': 1, 'price': 'cheap'}])
    assert r.status_code == 400
