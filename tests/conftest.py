import itertools

import pytest

from farmsouk import create_app, db
from farmsouk.models import Product, ProductStatusEnum, ProductSourceEnum, new_public_id

ADMIN_SECRET = 'test-admin-secret'
_phones = itertools.count(1)


@pytest.fixture
def app():
    app = create_app('testing')
    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture
def client(app):
    return app.test_client()


def auth_headers(token):
    return {'Authorization': f'Bearer {token}'}


def admin_headers(secret=ADMIN_SECRET):
    return {'X-Admin-Password': secret}


def next_phone():
    return f"06{next(_phones):08d}"


def register_farmer(client, phone=None, name='Ali', city='Fès', password='secret1'):
    resp = client.post('/api/farmers/register', json={
        'name': name, 'phone': phone or next_phone(), 'city': city, 'password': password
    })
    assert resp.status_code == 201, resp.get_json()
    body = resp.get_json()
    return body['token'], body['farmer']


def product_payload(**overrides):
    payload = {
        'title_fr': 'Mouton Sardi', 'title_ar': 'خروف سردي',
        'category': 'moutons', 'city': 'Fès',
        'price_mad': 3500,
        'weight_kg': 50, 'age_months': 12, 'gender': 'male',
        'certified': True, 'delivery': True,
        'images': ['https://cdn.example.com/mouton.jpg'],
        'description_fr': 'Beau mouton élevé au grain.',
        'description_ar': 'خروف جميل مربى على الحبوب.'
    }
    payload.update(overrides)
    return payload


def submit_product(client, token, **overrides):
    resp = client.post('/api/farmers/products', json=product_payload(**overrides), headers=auth_headers(token))
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()['slug']


def approve(client, slug):
    return client.post(f'/api/admin/products/{slug}/approve', headers=admin_headers())


def reject(client, slug):
    return client.post(f'/api/admin/products/{slug}/reject', headers=admin_headers())


def public_slugs(client, **params):
    resp = client.get('/api/products', query_string=params)
    assert resp.status_code == 200
    return [p['slug'] for p in resp.get_json()]


def fresh_product(slug):
    db.session.expire_all()
    return Product.query.filter_by(slug=slug).first()


@pytest.fixture
def make_seed_product(app):
    """Inserts an approved catalog row with no seller attached."""
    def _make(slug, price_mad=100, status=ProductStatusEnum.APPROVED, **fields):
        data = dict(
            id=new_public_id('prd'), slug=slug,
            title_fr=f'Produit {slug}', title_ar=f'منتج {slug}',
            category='moutons', city='Fès', price_mad=price_mad,
            images=['https://cdn.example.com/seed.jpg'],
            description_fr='Produit du catalogue.', description_ar='منتج من الكتالوج.',
            is_active=True, farmer_id=None, status=status, source=ProductSourceEnum.SEED
        )
        data.update(fields)
        product = Product(**data)
        db.session.add(product)
        db.session.commit()
        return product
    return _make
