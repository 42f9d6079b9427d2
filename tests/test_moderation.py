from farmsouk.models import ProductStatusEnum

from conftest import (
    register_farmer, auth_headers, admin_headers, submit_product, approve, reject,
    public_slugs, fresh_product
)


def test_seller_submission_goes_live_after_approval(client):
    token, farmer = register_farmer(client, phone='0600000001', name='Ali', city='Fès', password='secret1')
    slug = submit_product(client, token, title_fr='Mouton Sardi', price_mad=3500)

    mine = client.get('/api/farmers/products', headers=auth_headers(token)).get_json()
    assert [(p['slug'], p['status']) for p in mine] == [(slug, 'pending')]
    assert slug not in public_slugs(client)

    resp = approve(client, slug)
    assert resp.status_code == 200
    assert resp.get_json() == {'ok': True}

    assert slug in public_slugs(client)
    detail = client.get(f'/api/products/{slug}').get_json()
    assert detail['slug'] == slug
    assert detail['farmer_id'] == farmer['id']
    assert detail['price_mad'] == 3500


def test_admin_endpoints_require_the_shared_secret(client):
    token, _ = register_farmer(client)
    slug = submit_product(client, token)

    for headers in ({}, admin_headers('wrong-secret'), admin_headers('')):
        assert client.get('/api/admin/pending-products', headers=headers).status_code == 401
        assert client.get('/api/admin/orders', headers=headers).status_code == 401
        assert client.post(f'/api/admin/products/{slug}/approve', headers=headers).status_code == 401
        assert client.post(f'/api/admin/products/{slug}/reject', headers=headers).status_code == 401
    assert fresh_product(slug).status == ProductStatusEnum.PENDING


def test_admin_gate_closed_when_no_secret_configured(client, app):
    app.config['ADMIN_PASSWORD'] = ''
    assert client.get('/api/admin/pending-products', headers=admin_headers('')).status_code == 401


def test_pending_queue_includes_seller_contact(client):
    token, farmer = register_farmer(client, name='Fatima', city='Agadir')
    slug = submit_product(client, token)
    approved = submit_product(client, token)
    approve(client, approved)

    resp = client.get('/api/admin/pending-products', headers=admin_headers())
    assert resp.status_code == 200
    queue = resp.get_json()
    assert [p['slug'] for p in queue] == [slug]
    assert queue[0]['farmer_name'] == 'Fatima'
    assert queue[0]['farmer_phone'] == farmer['phone']


def test_seed_rows_are_exempt_from_moderation(client, make_seed_product):
    make_seed_product('seed-sardi')
    assert approve(client, 'seed-sardi').status_code == 404
    assert reject(client, 'seed-sardi').status_code == 404
    assert approve(client, 'does-not-exist').status_code == 404
    assert 'seed-sardi' in public_slugs(client)


def test_rejected_product_is_terminal(client):
    token, _ = register_farmer(client)
    slug = submit_product(client, token)

    assert reject(client, slug).status_code == 200
    product = fresh_product(slug)
    assert product.status == ProductStatusEnum.REJECTED
    assert product.is_active is False

    resp = approve(client, slug)
    assert resp.status_code == 409
    assert resp.get_json()['success'] is False
    assert slug not in public_slugs(client)
    assert client.get(f'/api/products/{slug}').status_code == 404


def test_approving_twice_is_an_invalid_transition(client):
    token, _ = register_farmer(client)
    slug = submit_product(client, token)
    assert approve(client, slug).status_code == 200
    assert approve(client, slug).status_code == 409
    assert reject(client, slug).status_code == 409
    assert fresh_product(slug).status == ProductStatusEnum.APPROVED


def test_seller_can_delete_own_listing(client):
    token, _ = register_farmer(client)
    live = submit_product(client, token)
    approve(client, live)
    pending = submit_product(client, token)

    for slug in (live, pending):
        resp = client.delete(f'/api/farmers/products/{slug}', headers=auth_headers(token))
        assert resp.status_code == 200
        product = fresh_product(slug)
        assert product.status == ProductStatusEnum.DELETED
        assert product.is_active is False
    assert live not in public_slugs(client)

    # deleted is terminal
    assert client.delete(f'/api/farmers/products/{live}', headers=auth_headers(token)).status_code == 409
    assert approve(client, pending).status_code == 409


def test_seller_cannot_delete_someone_elses_listing(client, make_seed_product):
    owner_token, _ = register_farmer(client)
    intruder_token, _ = register_farmer(client)
    slug = submit_product(client, owner_token)
    approve(client, slug)
    make_seed_product('seed-veau')

    assert client.delete(f'/api/farmers/products/{slug}', headers=auth_headers(intruder_token)).status_code == 403
    assert client.delete('/api/farmers/products/seed-veau', headers=auth_headers(intruder_token)).status_code == 403

    product = fresh_product(slug)
    assert product.status == ProductStatusEnum.APPROVED
    assert product.is_active is True
    assert {slug, 'seed-veau'} <= set(public_slugs(client))


def test_deleting_a_rejected_or_unknown_listing(client):
    token, _ = register_farmer(client)
    slug = submit_product(client, token)
    reject(client, slug)
    assert client.delete(f'/api/farmers/products/{slug}', headers=auth_headers(token)).status_code == 409
    assert client.delete('/api/farmers/products/nope', headers=auth_headers(token)).status_code == 404
    assert client.delete(f'/api/farmers/products/{slug}').status_code == 401
