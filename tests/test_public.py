from padoo import _ensure_default_data, create_app
from padoo.config import TestConfig
from padoo.extensions import db
from padoo.models import Category


def test_index_redirects_to_dashboard(client):
    r = client.get('/')
    assert r.status_code in (301, 302)
    assert r.headers['Location'].endswith('/dashboard/')


def test_dashboard_shell_has_containers(client):
    r = client.get('/dashboard/')
    assert r.status_code == 200
    body = r.get_data(as_text=True)
    for container in ('total-users', 'shops-grid', 'categories-grid', 'logs-table-body'):
        assert f'id="{container}"' in body


def test_health(client):
    r = client.get('/api/health')
    assert r.status_code == 200
    body = r.get_json()
    assert body['success'] is True
    assert body['message'] == 'API is working'


def test_api_errors_keep_envelope(client):
    r = client.get('/api/does-not-exist')
    assert r.status_code == 404
    assert r.get_json()['success'] is False

    r = client.post('/api/health')
    assert r.status_code == 405
    assert r.get_json()['success'] is False


def test_non_api_errors_are_not_json(client):
    r = client.get('/no-such-page')
    assert r.status_code == 404
    assert r.get_json(silent=True) is None


def test_unexpected_error_returns_generic_500(app, client):
    @app.route('/api/boom')
    def boom():
        raise RuntimeError('database exploded')

    r = client.get('/api/boom')
    assert r.status_code == 500
    assert r.get_json() == {'success': False, 'message': 'Internal server error'}


def test_default_categories_seeded_once():
    class SeedConfig(TestConfig):
        SEED_DEFAULT_CATEGORIES = True

    app = create_app(SeedConfig)
    with app.app_context():
        _ensure_default_data(app)
        names = sorted(c.name for c in Category.query.all())
        db.session.remove()
        db.drop_all()
    assert names == ['Cafe', 'Grocery', 'Pharmacy', 'Restaurant']
