from tests.factories import make_driver, make_shop


def _login(client, email, password, login_type):
    return client.post('/api/auth/login', json={
        'email': email, 'password': password, 'loginType': login_type,
    })


def test_driver_login_returns_token_and_redirect(client):
    make_driver('driver@example.com', 'driverpass')

    r = _login(client, 'Driver@Example.com ', 'driverpass', 'driver')
    assert r.status_code == 200
    body = r.get_json()
    assert body['success'] is True
    assert body['userType'] == 'driver'
    assert body['redirectUrl'] == '/app'
    assert body['user']['email'] == 'driver@example.com'
    assert body['sessionToken']
    assert body['replacedSession'] is False


def test_shop_login_redirects_to_shop(client, category):
    make_shop(category, email='deli@example.com', password='shoppass')

    r = _login(client, 'deli@example.com', 'shoppass', 'shop')
    assert r.status_code == 200
    assert r.get_json()['redirectUrl'] == '/shop'


def test_login_validation(client):
    r = client.post('/api/auth/login', json={'email': 'a@b.c', 'password': 'x'})
    assert r.status_code == 400
    assert r.get_json()['success'] is False

    r = _login(client, 'a@b.c', 'secret', 'admin')
    assert r.status_code == 400
    assert 'Invalid login type' in r.get_json()['message']


def test_login_rejects_bad_credentials(client, category):
    make_driver('driver@example.com', 'driverpass')
    make_shop(category, email='deli@example.com')

    r = _login(client, 'driver@example.com', 'wrongpass', 'driver')
    assert r.status_code == 401
    assert r.get_json()['message'] == 'Invalid email or password'

    # a driver cannot log in through the shop form
    r = _login(client, 'driver@example.com', 'driverpass', 'shop')
    assert r.status_code == 401


def test_bearer_token_grants_access_to_categories(client, category):
    make_driver('driver@example.com', 'driverpass')
    token = _login(client, 'driver@example.com', 'driverpass', 'driver').get_json()['sessionToken']

    r = client.get('/api/categories')
    assert r.status_code == 401
    assert r.get_json()['code'] == 'SESSION_EXPIRED'

    r = client.get('/api/categories', headers={'Authorization': f'Bearer {token}'})
    assert r.status_code == 200
    assert [c['name'] for c in r.get_json()['categories']] == ['Restaurant']


def test_second_login_evicts_first_session(client):
    make_driver('driver@example.com', 'driverpass')
    first = _login(client, 'driver@example.com', 'driverpass', 'driver').get_json()
    second = _login(client, 'driver@example.com', 'driverpass', 'driver').get_json()

    assert second['replacedSession'] is True
    assert first['sessionToken'] != second['sessionToken']

    r = client.get('/api/categories', headers={'Authorization': f'Bearer {first["sessionToken"]}'})
    assert r.status_code == 401
    r = client.get('/api/categories', headers={'Authorization': f'Bearer {second["sessionToken"]}'})
    assert r.status_code == 200


def test_logout_ends_session(client):
    make_driver('driver@example.com', 'driverpass')
    token = _login(client, 'driver@example.com', 'driverpass', 'driver').get_json()['sessionToken']
    headers = {'Authorization': f'Bearer {token}'}

    r = client.post('/api/auth/logout', headers=headers)
    assert r.status_code == 200
    assert r.get_json()['message'] == 'Logged out successfully'

    r = client.post('/api/auth/logout', headers=headers)
    assert r.status_code == 401


def test_driver_token_does_not_grant_admin_access(client):
    make_driver('driver@example.com', 'driverpass')
    token = _login(client, 'driver@example.com', 'driverpass', 'driver').get_json()['sessionToken']

    r = client.get('/api/admin/users', headers={'Authorization': f'Bearer {token}'})
    assert r.status_code == 401
    assert r.get_json()['message'] == 'Admin authentication required'
