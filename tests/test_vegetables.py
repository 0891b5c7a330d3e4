from vegmarket.extensions import db
from vegmarket.models import OrderItem, Vegetable
from vegmarket.services import DEFAULT_VEGETABLES


def test_catalogue_is_public(client, add_vegetable):
    veg_id = add_vegetable('Carrot', 40.0)
    r = client.get('/api/vegetables')
    assert r.status_code == 200
    assert [v['name'] for v in r.get_json()] == ['Carrot']

    r = client.get(f'/api/vegetables/{veg_id}')
    assert r.get_json()['price'] == 40.0
    assert client.get('/api/vegetables/999').status_code == 404


def test_broker_creates_vegetable(broker_client):
    r = broker_client.post('/api/vegetables', json={
        'name': 'Okra', 'price': '60.5', 'description': 'Tender okra'
    })
    assert r.status_code == 201
    body = r.get_json()
    assert body['price'] == 60.5
    assert body['quantity'] == 0
    assert body['unit'] == 'kg'
    assert body['farmerId'] is None


def test_farmer_owns_created_vegetable(farmer_client):
    r = farmer_client.post('/api/vegetables', json={'name': 'Beans', 'price': 55, 'quantity': 20})
    assert r.status_code == 201
    assert r.get_json()['farmerId'] == farmer_client.user_id

    r = farmer_client.get(f'/api/vegetables?farmerId={farmer_client.user_id}')
    assert len(r.get_json()) == 1


def test_create_vegetable_validation(broker_client):
    r = broker_client.post('/api/vegetables', json={'name': 'Okra'})
    assert r.status_code == 400
    assert r.get_json()['error'] == 'Name and price are required'

    r = broker_client.post('/api/vegetables', json={'name': 'Okra', 'price': -1})
    assert r.status_code == 400

    r = broker_client.post('/api/vegetables', json={'name': 'Okra', 'price': 'abc'})
    assert r.status_code == 400

    r = broker_client.post('/api/vegetables', json={'name': 'Okra', 'price': 5, 'quantity': -3})
    assert r.status_code == 400


def test_retailer_cannot_modify_catalogue(client, retailer_client, add_vegetable):
    veg_id = add_vegetable()
    assert client.post('/api/vegetables', json={'name': 'X', 'price': 1}).status_code == 401
    assert retailer_client.post('/api/vegetables', json={'name': 'X', 'price': 1}).status_code == 403
    assert retailer_client.put(f'/api/vegetables/{veg_id}', json={'price': 1}).status_code == 403
    assert retailer_client.delete(f'/api/vegetables/{veg_id}').status_code == 403


def test_update_vegetable_partial(broker_client, add_vegetable):
    veg_id = add_vegetable('Tomato', 45.5, 100)
    r = broker_client.put(f'/api/vegetables/{veg_id}', json={'price': 50, 'description': 'Ripe'})
    assert r.status_code == 200
    body = r.get_json()
    assert body['price'] == 50
    assert body['description'] == 'Ripe'
    assert body['name'] == 'Tomato'
    assert body['quantity'] == 100

    r = broker_client.put(f'/api/vegetables/{veg_id}', json={'price': 0, 'name': 'Changed'})
    assert r.status_code == 400
    assert broker_client.get(f'/api/vegetables/{veg_id}').get_json()['name'] == 'Tomato'


def test_farmer_cannot_edit_other_farmers_vegetable(login_as, add_vegetable, make_user):
    other_id = make_user('farmer', 'other@test.com')
    veg_id = add_vegetable(farmer_id=other_id)
    farmer = login_as('farmer')
    assert farmer.put(f'/api/vegetables/{veg_id}', json={'price': 1}).status_code == 403
    assert farmer.delete(f'/api/vegetables/{veg_id}').status_code == 403


def test_delete_keeps_order_history(app, broker_client, retailer_client, add_vegetable):
    veg_id = add_vegetable('Onion', 35.75)
    r = retailer_client.post('/api/orders', json={
        'date': '2026-10-19', 'name': 'Shop', 'items': [{'vegetableId': veg_id, 'quantity': 2}]
    })
    assert r.status_code == 201

    r = broker_client.delete(f'/api/vegetables/{veg_id}')
    assert r.status_code == 200

    with app.app_context():
        assert db.session.get(Vegetable, veg_id) is None
        item = OrderItem.query.one()
        assert item.vegetable_id is None

    orders = broker_client.get('/api/orders').get_json()
    assert orders[0]['items'][0]['vegetableName'] == 'Unknown'


def test_delete_refused_while_auctioned(broker_client, farmer_client, add_vegetable, add_auction):
    veg_id = add_vegetable()
    add_auction(farmer_client.user_id, veg_id)
    r = broker_client.delete(f'/api/vegetables/{veg_id}')
    assert r.status_code == 409


def test_init_seeds_once(broker_client):
    r = broker_client.post('/api/vegetables/init')
    assert r.status_code == 200
    assert r.get_json()['count'] == len(DEFAULT_VEGETABLES)

    r = broker_client.post('/api/vegetables/init')
    assert r.get_json() == {'message': 'Vegetables already initialized', 'count': len(DEFAULT_VEGETABLES)}


def test_update_rejects_cleared_or_non_text_fields(broker_client, add_vegetable):
    veg_id = add_vegetable('Tomato', 45.5, 100)
    url = f'/api/vegetables/{veg_id}'

    r = broker_client.put(url, json={'unit': None})
    assert r.status_code == 400
    assert r.get_json()['error'] == 'Unit cannot be empty'
    assert broker_client.put(url, json={'unit': '  '}).status_code == 400
    assert broker_client.put(url, json={'name': None}).status_code == 400
    assert broker_client.put(url, json={'description': 42}).status_code == 400

    r = broker_client.put(url, json={'unit': ' crate ', 'image': None})
    assert r.status_code == 200
    assert r.get_json()['unit'] == 'crate'
    assert r.get_json()['image'] is None


def test_create_rejects_non_text_fields(broker_client):
    r = broker_client.post('/api/vegetables', json={'name': ['Okra'], 'price': 10})
    assert r.status_code == 400
    r = broker_client.post('/api/vegetables', json={'name': 'Okra', 'price': 10, 'unit': 5})
    assert r.status_code == 400
