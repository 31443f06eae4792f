from padoo.extensions import db
from padoo.models import User
from tests.factories import make_driver, make_shop


def test_users_require_admin_session(client):
    r = client.get('/api/admin/users')
    assert r.status_code == 401
    assert r.get_json() == {'success': False, 'message': 'Admin authentication required'}


def test_list_users_newest_first(admin_client):
    make_driver('old@example.com')
    make_driver('new@example.com')

    r = admin_client.get('/api/admin/users')
    assert r.status_code == 200
    emails = [u['email'] for u in r.get_json()['users']]
    assert emails == ['new@example.com', 'old@example.com']
    assert 'password_hash' not in r.get_json()['users'][0]


def test_create_user(admin_client):
    r = admin_client.post('/api/admin/users', json={
        'email': ' Alice@Example.com', 'password': 'secret1', 'user_type': 'driver',
    })
    assert r.status_code == 201
    user = r.get_json()['user']
    assert user['email'] == 'alice@example.com'
    assert user['name'] == 'Alice'
    assert user['user_type'] == 'driver'

    stored = db.session.get(User, user['id'])
    assert stored.password_hash != 'secret1'


def test_create_user_validation(admin_client):
    r = admin_client.post('/api/admin/users', json={'email': 'a@example.com'})
    assert r.status_code == 400

    r = admin_client.post('/api/admin/users', json={
        'email': 'a@example.com', 'password': 'secret1', 'user_type': 'admin',
    })
    assert r.status_code == 400
    assert r.get_json()['message'] == 'Unsupported user type'

    r = admin_client.post('/api/admin/users', json={
        'email': 'a@example.com', 'password': '123', 'user_type': 'driver',
    })
    assert r.status_code == 400
    assert 'at least 6 characters' in r.get_json()['message']


def test_create_user_rejects_email_used_by_driver_or_shop(admin_client, category):
    make_driver('taken@example.com')
    make_shop(category, email='shop@example.com')

    for email in ('taken@example.com', 'SHOP@example.com'):
        r = admin_client.post('/api/admin/users', json={
            'email': email, 'password': 'secret1', 'user_type': 'driver',
        })
        assert r.status_code == 400
        assert r.get_json()['message'] == 'Email already exists'


def test_update_user(admin_client):
    user = make_driver('driver@example.com')

    r = admin_client.put(f'/api/admin/users/{user.id}', json={'email': 'renamed@example.com'})
    assert r.status_code == 200
    assert r.get_json()['user']['email'] == 'renamed@example.com'

    r = admin_client.put(f'/api/admin/users/{user.id}', json={'email': 'renamed@example.com'})
    assert r.get_json()['message'] == 'No changes needed'


def test_update_user_conflict_leaves_user_unchanged(admin_client):
    user = make_driver('driver@example.com')
    make_driver('other@example.com')

    r = admin_client.put(f'/api/admin/users/{user.id}', json={
        'email': 'other@example.com', 'user_type': 'shop',
    })
    assert r.status_code == 400

    db.session.refresh(user)
    assert user.email == 'driver@example.com'
    assert user.user_type == 'driver'


def test_update_and_delete_missing_user(admin_client):
    r = admin_client.put('/api/admin/users/999', json={'email': 'x@example.com'})
    assert r.status_code == 404
    assert r.get_json() == {'success': False, 'message': 'User not found'}

    r = admin_client.delete('/api/admin/users/999')
    assert r.status_code == 404


def test_delete_user(admin_client):
    user = make_driver('driver@example.com')
    user_id = user.id

    r = admin_client.delete(f'/api/admin/users/{user_id}')
    assert r.status_code == 200
    assert db.session.get(User, user_id) is None


def test_change_user_password(admin_client, client):
    user = make_driver('driver@example.com', 'oldpass')

    r = admin_client.put(f'/api/admin/users/{user.id}/password', json={'password': '12'})
    assert r.status_code == 400

    r = admin_client.put(f'/api/admin/users/{user.id}/password', json={'password': 'newpass'})
    assert r.status_code == 200

    r = client.post('/api/auth/login', json={
        'email': 'driver@example.com', 'password': 'newpass', 'loginType': 'driver',
    })
    assert r.status_code == 200
