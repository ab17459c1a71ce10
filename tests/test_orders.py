from datetime import datetime
import pytest
from models import db, new_id
from models.order import Order
from app.version import API_PREFIX

ORDERS_URL = f"{API_PREFIX}/orders"


def order_payload(**overrides):
    payload = {
        'retailerId': new_id(),
        'products': [{'productId': new_id(), 'name': 'Onion', 'quantity': 50, 'unit': 'kg', 'price': 22.5}],
        'deliveryAddress': {'line1': 'Shop 9, Main Market', 'city': 'Delhi', 'pincode': '110006'},
        'orderTotal': 1125.0,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def wholesaler(auth_headers):
    return auth_headers('9000000001', 'Wholesaler')


def create(client, headers, **overrides):
    resp = client.post(ORDERS_URL, json=order_payload(**overrides), headers=headers)
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()['data']['order']


def set_created_at(order_id, when):
    order = db.session.get(Order, order_id)
    order.created_at = when
    db.session.commit()


def test_requires_token(client, app):
    resp = client.get(ORDERS_URL)
    assert resp.status_code == 401
    assert resp.get_json() == {'statusCode': 401, 'success': False, 'message': 'Auth header missing'}


def test_garbage_token(client, app):
    resp = client.get(ORDERS_URL, headers={'Authorization': 'Bearer nope'})
    assert resp.status_code == 401
    assert resp.get_json()['message'] == 'invalid token'


def test_retailer_is_forbidden(client, app, auth_headers):
    resp = client.get(ORDERS_URL, headers=auth_headers('9000000002', 'Retailer'))
    assert resp.status_code == 403
    assert resp.get_json()['message'] == 'Forbidden'


def test_empty_list_is_not_found(client, app, wholesaler):
    resp = client.get(ORDERS_URL, headers=wholesaler)
    assert resp.status_code == 404
    assert resp.get_json()['message'] == 'No orders found for this wholesaler'


def test_create_order_defaults(client, app, login_stub, wholesaler):
    me = login_stub('9000000001')['id']
    order = create(client, wholesaler)
    assert order['status'] == 'pending'
    assert order['paymentMethod'] == 'cod'
    assert order['wholesalerId'] == me
    assert order['orderTotal'] == 1125.0
    assert order['deliveryDate'] is None
    assert order['retailer'] is None
    assert order['products'][0]['name'] == 'Onion'


def test_create_order_optional_fields(client, app, wholesaler):
    order = create(
        client, wholesaler,
        paymentMethod='upi', notes='Leave at gate', vehicleNumber='DL01AB1234',
        deliveryDate='2026-11-02T06:30:00+05:30', deliveryAddress='Shop 9, Main Market, Delhi',
    )
    assert order['paymentMethod'] == 'upi'
    assert order['notes'] == 'Leave at gate'
    assert order['vehicleNumber'] == 'DL01AB1234'
    assert order['deliveryDate'] == '2026-11-02T01:00:00'
    assert order['deliveryAddress'] == 'Shop 9, Main Market, Delhi'


@pytest.mark.parametrize('missing', ['retailerId', 'products', 'deliveryAddress', 'orderTotal'])
def test_create_order_missing_fields(client, app, wholesaler, missing):
    payload = order_payload()
    payload.pop(missing)
    resp = client.post(ORDERS_URL, json=payload, headers=wholesaler)
    assert resp.status_code == 400
    assert resp.get_json()['message'] == 'Missing required fields'
    assert Order.query.count() == 0


def test_create_order_empty_products(client, app, wholesaler):
    resp = client.post(ORDERS_URL, json=order_payload(products=[]), headers=wholesaler)
    assert resp.status_code == 400
    assert resp.get_json()['message'] == 'Missing required fields'


def test_create_order_rejects_non_positive_total(client, app, wholesaler):
    resp = client.post(ORDERS_URL, json=order_payload(orderTotal=-5), headers=wholesaler)
    assert resp.status_code == 400
    assert Order.query.count() == 0


def test_list_newest_first(client, app, wholesaler):
    first = create(client, wholesaler)
    second = create(client, wholesaler)
    set_created_at(first['id'], datetime(2026, 1, 1, 10, 0))
    set_created_at(second['id'], datetime(2026, 1, 2, 10, 0))

    resp = client.get(ORDERS_URL, headers=wholesaler)
    assert resp.status_code == 200
    ids = [o['id'] for o in resp.get_json()['data']['orders']]
    assert ids == [second['id'], first['id']]


def test_orders_are_scoped_to_owner(client, app, wholesaler, auth_headers):
    other = auth_headers('9000000003', 'Wholesaler')
    mine = create(client, wholesaler)

    assert client.get(ORDERS_URL, headers=other).status_code == 404
    resp = client.get(f"{ORDERS_URL}/{mine['id']}", headers=other)
    assert resp.status_code == 404
    assert resp.get_json()['message'] == 'Order not found'
    assert client.delete(f"{ORDERS_URL}/{mine['id']}", headers=other).status_code == 404
    resp = client.patch(f"{ORDERS_URL}/{mine['id']}/status", json={'status': 'confirmed'}, headers=other)
    assert resp.status_code == 404
    assert db.session.get(Order, mine['id']).status.value == 'pending'


def test_get_order(client, app, wholesaler):
    order = create(client, wholesaler)
    resp = client.get(f"{ORDERS_URL}/{order['id']}", headers=wholesaler)
    assert resp.status_code == 200
    assert resp.get_json()['data']['order']['id'] == order['id']


@pytest.mark.parametrize('order_id', ['123', 'zz' * 16])
def test_malformed_order_id_is_not_found(client, app, wholesaler, order_id):
    resp = client.get(f"{ORDERS_URL}/{order_id}", headers=wholesaler)
    assert resp.status_code == 404
    assert resp.get_json()['message'] == 'Order not found'


def test_retailer_summary_is_populated(client, app, wholesaler):
    resp = client.post('/__retailers/dummy', json={'name': 'Sharma Kirana', 'phoneNumber': '9811111111'})
    retailer = resp.get_json()['data']['retailer']

    order = create(client, wholesaler, retailerId=retailer['id'])
    assert order['retailer'] == retailer
    fetched = client.get(f"{ORDERS_URL}/{order['id']}", headers=wholesaler).get_json()['data']['order']
    assert fetched['retailer']['name'] == 'Sharma Kirana'


def test_update_status_with_reason_and_notes(client, app, wholesaler):
    order = create(client, wholesaler, notes='original')
    resp = client.patch(
        f"{ORDERS_URL}/{order['id']}/status",
        json={'status': 'cancelled', 'cancellationReason': 'Out of stock'},
        headers=wholesaler,
    )
    assert resp.status_code == 200
    updated = resp.get_json()['data']['order']
    assert updated['status'] == 'cancelled'
    assert updated['cancellationReason'] == 'Out of stock'
    assert updated['notes'] == 'original'


def test_any_settable_status_can_follow_any_other(client, app, wholesaler):
    order = create(client, wholesaler)
    url = f"{ORDERS_URL}/{order['id']}/status"
    for status in ('delivered', 'confirmed', 'rejected', 'dispatched'):
        resp = client.patch(url, json={'status': status}, headers=wholesaler)
        assert resp.status_code == 200
        assert resp.get_json()['data']['order']['status'] == status


@pytest.mark.parametrize('body', [{'status': 'pending'}, {'status': 'shipped'}, {}])
def test_invalid_status_update(client, app, wholesaler, body):
    order = create(client, wholesaler)
    resp = client.patch(f"{ORDERS_URL}/{order['id']}/status", json=body, headers=wholesaler)
    assert resp.status_code == 400
    assert resp.get_json()['message'] == 'Invalid status update'


def test_delete_order(client, app, wholesaler):
    order = create(client, wholesaler)
    resp = client.delete(f"{ORDERS_URL}/{order['id']}", headers=wholesaler)
    assert resp.status_code == 200
    assert resp.get_json()['message'] == 'Order deleted successfully'
    assert client.get(f"{ORDERS_URL}/{order['id']}", headers=wholesaler).status_code == 404
    assert client.delete(f"{ORDERS_URL}/{order['id']}", headers=wholesaler).status_code == 404


def search(client, headers, **params):
    resp = client.get(f"{ORDERS_URL}/search/filter", query_string=params, headers=headers)
    return resp


def test_search_without_matches_is_empty(client, app, wholesaler):
    resp = search(client, wholesaler, status='delivered')
    assert resp.status_code == 200
    assert resp.get_json()['data']['orders'] == []


def test_search_total_range_is_inclusive(client, app, wholesaler):
    low = create(client, wholesaler, orderTotal=100)
    mid = create(client, wholesaler, orderTotal=250)
    create(client, wholesaler, orderTotal=400)

    resp = search(client, wholesaler, minTotal='100', maxTotal='250')
    ids = {o['id'] for o in resp.get_json()['data']['orders']}
    assert ids == {low['id'], mid['id']}


def test_search_date_range_is_inclusive(client, app, wholesaler):
    early = create(client, wholesaler)
    late = create(client, wholesaler)
    set_created_at(early['id'], datetime(2026, 3, 1, 9, 0))
    set_created_at(late['id'], datetime(2026, 3, 5, 9, 0))

    resp = search(client, wholesaler, fromDate='2026-03-01T09:00:00', toDate='2026-03-04T00:00:00')
    assert [o['id'] for o in resp.get_json()['data']['orders']] == [early['id']]

    resp = search(client, wholesaler, fromDate='2026-03-01')
    assert [o['id'] for o in resp.get_json()['data']['orders']] == [late['id'], early['id']]


def test_search_filters_are_conjunctive(client, app, wholesaler):
    retailer = new_id()
    match = create(client, wholesaler, retailerId=retailer, paymentMethod='upi', vehicleNumber='DL01AB1234')
    create(client, wholesaler, retailerId=retailer, paymentMethod='cod', vehicleNumber='DL01AB1234')
    create(client, wholesaler, paymentMethod='upi', vehicleNumber='DL01AB1234')
    other = create(client, wholesaler, retailerId=retailer, paymentMethod='upi')
    client.patch(f"{ORDERS_URL}/{other['id']}/status", json={'status': 'confirmed'}, headers=wholesaler)

    resp = search(
        client, wholesaler,
        retailerId=retailer, paymentMethod='upi', vehicleNumber='DL01AB1234', status='pending',
    )
    assert [o['id'] for o in resp.get_json()['data']['orders']] == [match['id']]


def test_search_blank_params_are_ignored(client, app, wholesaler):
    create(client, wholesaler)
    resp = search(client, wholesaler, status='', minTotal='')
    assert resp.status_code == 200
    assert len(resp.get_json()['data']['orders']) == 1


def test_search_is_scoped(client, app, wholesaler, auth_headers):
    create(client, wholesaler)
    resp = search(client, auth_headers('9000000003', 'Wholesaler'))
    assert resp.get_json()['data']['orders'] == []


@pytest.mark.parametrize('params,message', [
    ({'status': 'shipped'}, 'Invalid status filter'),
    ({'fromDate': 'yesterday'}, 'Invalid date filter'),
    ({'toDate': '2026-13-01'}, 'Invalid date filter'),
    ({'minTotal': 'cheap'}, 'Invalid order total filter'),
    ({'maxTotal': 'lots'}, 'Invalid order total filter'),
])
def test_search_rejects_malformed_filters(client, app, wholesaler, params, message):
    resp = search(client, wholesaler, **params)
    assert resp.status_code == 400
    assert resp.get_json()['message'] == message
