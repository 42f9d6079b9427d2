from farmsouk import db
from farmsouk.models import Order

from conftest import register_farmer, admin_headers, submit_product, approve, reject


def customer(**overrides):
    data = {
        'customer_name': 'Youssef', 'phone': '0611223344',
        'city': 'Rabat', 'address': '12 rue des Orangers'
    }
    data.update(overrides)
    return data


def place(client, items, **overrides):
    return client.post('/api/orders', json=dict(customer(**overrides), items=items))


def test_subtotal_uses_catalog_prices(client, make_seed_product):
    make_seed_product('a', price_mad=100)
    make_seed_product('b', price_mad=50)

    resp = place(client, [
        {'slug': 'a', 'qty': 2, 'price_mad': 1},
        {'slug': 'b', 'qty': 1, 'price_mad': 1, 'title_fr': 'Gratuit'},
    ])
    assert resp.status_code == 201
    order_id = resp.get_json()['id']
    assert order_id.startswith('ord_')

    order = db.session.get(Order, order_id)
    assert order.subtotal_mad == 250
    assert order.status == 'new'
    assert order.items == [
        {'slug': 'a', 'title_fr': 'Produit a', 'title_ar': 'منتج a', 'price_mad': 100, 'qty': 2},
        {'slug': 'b', 'title_fr': 'Produit b', 'title_ar': 'منتج b', 'price_mad': 50, 'qty': 1},
    ]


def test_missing_qty_defaults_to_one(client, make_seed_product):
    make_seed_product('a', price_mad=100)
    order_id = place(client, [{'slug': 'a'}]).get_json()['id']
    assert db.session.get(Order, order_id).subtotal_mad == 100


def test_out_of_range_and_malformed_lines_are_dropped(client, make_seed_product):
    make_seed_product('a', price_mad=100)
    make_seed_product('b', price_mad=50)

    resp = place(client, [
        {'slug': 'a', 'qty': 3},
        {'slug': 'b', 'qty': 0},
        {'slug': 'b', 'qty': 11},
        {'slug': 'b', 'qty': 'two'},
        {'slug': 'b', 'qty': 1.5},
        {'qty': 1},
        'b',
    ])
    assert resp.status_code == 201
    order = db.session.get(Order, resp.get_json()['id'])
    assert order.subtotal_mad == 300
    assert [line['slug'] for line in order.items] == ['a']


def test_only_publicly_visible_products_can_be_ordered(client, make_seed_product):
    token, _ = register_farmer(client)
    pending = submit_product(client, token)
    rejected = submit_product(client, token)
    reject(client, rejected)
    make_seed_product('hidden', is_active=False)

    resp = place(client, [
        {'slug': pending, 'qty': 1},
        {'slug': rejected, 'qty': 1},
        {'slug': 'hidden', 'qty': 1},
        {'slug': 'unknown', 'qty': 1},
    ])
    assert resp.status_code == 400
    assert resp.get_json()['success'] is False
    assert Order.query.count() == 0


def test_invalid_lines_are_skipped_next_to_valid_ones(client, make_seed_product):
    token, _ = register_farmer(client)
    live = submit_product(client, token, price_mad=3500)
    approve(client, live)
    pending = submit_product(client, token)

    resp = place(client, [{'slug': live, 'qty': 1}, {'slug': pending, 'qty': 1}])
    order = db.session.get(Order, resp.get_json()['id'])
    assert order.subtotal_mad == 3500
    assert [line['slug'] for line in order.items] == [live]


def test_empty_cart_is_rejected(client):
    for items in ([], None, 'a'):
        resp = place(client, items)
        assert resp.status_code == 400
    assert Order.query.count() == 0


def test_customer_fields_are_required(client, make_seed_product):
    make_seed_product('a')
    for field in ('customer_name', 'phone', 'city', 'address'):
        resp = place(client, [{'slug': 'a', 'qty': 1}], **{field: '  '})
        assert resp.status_code == 400, field
        assert field in resp.get_json()['error']
    assert Order.query.count() == 0


def test_order_snapshot_survives_price_changes(client, make_seed_product):
    product = make_seed_product('a', price_mad=100)
    order_id = place(client, [{'slug': 'a', 'qty': 2}], notes='Livraison le matin').get_json()['id']

    product.price_mad = 999
    product.title_fr = 'Nouveau titre'
    db.session.commit()

    db.session.expire_all()
    order = db.session.get(Order, order_id)
    assert order.subtotal_mad == 200
    assert order.items[0]['price_mad'] == 100
    assert order.items[0]['title_fr'] == 'Produit a'
    assert order.notes == 'Livraison le matin'


def test_admin_lists_orders_with_items(client, make_seed_product):
    make_seed_product('a', price_mad=100)
    order_id = place(client, [{'slug': 'a', 'qty': 1}]).get_json()['id']

    resp = client.get('/api/admin/orders', headers=admin_headers())
    assert resp.status_code == 200
    orders = resp.get_json()
    assert [o['id'] for o in orders] == [order_id]
    assert orders[0]['items'][0]['slug'] == 'a'
    assert orders[0]['subtotal_mad'] == 100
    assert orders[0]['customer_name'] == 'Youssef'


def test_non_object_body_is_rejected(client):
    resp = client.post('/api/orders', json=[{'slug': 'a'}])
    assert resp.status_code == 400


def test_oversized_qty_is_dropped_not_fatal(client, make_seed_product):
    make_seed_product('a', price_mad=100)
    make_seed_product('b', price_mad=50)

    resp = place(client, [{'slug': 'a', 'qty': 1}, {'slug': 'b', 'qty': '9' * 5000}])
    assert resp.status_code == 201
    order = db.session.get(Order, resp.get_json()['id'])
    assert order.subtotal_mad == 100
    assert [line['slug'] for line in order.items] == ['a']


def test_admin_order_list_is_capped(client, app, make_seed_product):
    app.config['ADMIN_ORDER_LIST_LIMIT'] = 2
    make_seed_product('a')
    for _ in range(3):
        assert place(client, [{'slug': 'a', 'qty': 1}]).status_code == 201

    orders = client.get('/api/admin/orders', headers=admin_headers()).get_json()
    assert len(orders) == 2
