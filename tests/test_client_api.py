from datetime import datetime

import pytest
import requests
from requests.adapters import BaseAdapter

from padoo.client import AdminApiClient, ApiError
from tests.factories import make_driver, make_order, make_shop


class RaisingAdapter(BaseAdapter):

    def __init__(self, error):
        super().__init__()
        self.error = error

    def send(self, request, **kwargs):
        raise self.error

    def close(self):
        pass


@pytest.fixture()
def api(http_session):
    return AdminApiClient('http://padoo.test/', session=http_session)


@pytest.fixture()
def admin_api(api):
    api.admin_login('admin', 'admin123')
    return api


def test_health(api):
    assert api.health()['message'] == 'API is working'


def test_admin_calls_need_login(api):
    with pytest.raises(ApiError) as excinfo:
        api.list_users()
    assert excinfo.value.status == 401
    assert excinfo.value.message == 'Admin authentication required'
    assert str(excinfo.value) == 'HTTP 401: Admin authentication required'


def test_bad_admin_login(api):
    with pytest.raises(ApiError) as excinfo:
        api.admin_login('admin', 'nope')
    assert excinfo.value.status == 401
    assert excinfo.value.payload['success'] is False


def test_user_crud(admin_api):
    user = admin_api.create_user(email='carol@example.com', password='secret1', user_type='driver')
    assert [u['email'] for u in admin_api.list_users()] == ['carol@example.com']

    updated = admin_api.update_user(user['id'], email='caroline@example.com')
    assert updated['email'] == 'caroline@example.com'

    admin_api.change_user_password(user['id'], 'another1')
    admin_api.delete_user(user['id'])
    assert admin_api.list_users() == []

    with pytest.raises(ApiError) as excinfo:
        admin_api.delete_user(user['id'])
    assert excinfo.value.status == 404


def test_duplicate_email_raises(admin_api):
    admin_api.create_user(email='dup@example.com', password='secret1', user_type='driver')
    with pytest.raises(ApiError) as excinfo:
        admin_api.create_user(email='dup@example.com', password='secret1', user_type='driver')
    assert excinfo.value.status == 400
    assert excinfo.value.message == 'Email already exists'


def test_shops_categories_and_orders(admin_api):
    category = admin_api.create_category(name='Bakery')
    shop = admin_api.create_shop(email='bread@example.com', password='shoppass', shop_name='Bread Co',
                                 afm='999999999', category_id=category['id'])
    admin_api.update_shop(shop['id'], driver_earning_per_order=3)

    [listed] = admin_api.list_shops()
    assert listed['driver_earning_per_order'] == 3.0
    assert admin_api.list_categories()[0]['shop_count'] == 1

    with pytest.raises(ApiError) as excinfo:
        admin_api.delete_category(category['id'])
    assert 'Bread Co' in excinfo.value.message

    admin_api.delete_shop(shop['id'])
    admin_api.delete_category(category['id'])
    assert admin_api.list_categories() == []
    assert admin_api.list_orders() == []


def test_driver_stats_and_logs(admin_api, category):
    driver = make_driver()
    make_order(driver, make_shop(category), earnings=2.5)

    assert admin_api.driver_stats(driver.id) == {
        'totalShops': 1, 'totalOrders': 1, 'totalEarnings': 2.5,
    }

    admin_api.log_activity('logout', 'manual')
    body = admin_api.list_logs('success', search='admin')
    assert [log['action'] for log in body['logs']] == ['logout', 'login']
    assert body['stats']['successfulLogins'] == 1


def test_driver_details_and_shop_analytics(admin_api, category):
    driver = make_driver()
    shop = make_shop(category)
    make_order(driver, shop, price=6.0, created_at=datetime(2024, 5, 2, 8))
    make_order(driver, shop, price=4.0, created_at=datetime(2024, 5, 2, 9))

    details = admin_api.driver_details(driver.id)
    assert [s['shop_name'] for s in details['recentShops']] == ['Corner Deli']
    assert len(details['recentOrders']) == 2

    summary = admin_api.shop_monthly_analytics(shop.id, '2024-05')
    assert summary['total_revenue'] == 10.0
    assert summary['peak_day'] == '2024-05-02'
    assert summary['top_driver']['delivered'] == 2

    with pytest.raises(ApiError) as excinfo:
        admin_api.shop_monthly_analytics(shop.id, '05/2024')
    assert excinfo.value.status == 400

    with pytest.raises(ApiError) as excinfo:
        admin_api.driver_details(999)
    assert excinfo.value.status == 404


def test_non_json_response(api):
    with pytest.raises(ApiError) as excinfo:
        api._request('GET', '/dashboard/')
    assert excinfo.value.status == 200


@pytest.mark.parametrize('error, message', [
    (requests.exceptions.ConnectionError('connection refused'), 'connection refused'),
    (requests.exceptions.ConnectTimeout('slow'), 'Request timed out'),
])
def test_network_failures(error, message):
    session = requests.Session()
    session.mount('http://offline.test', RaisingAdapter(error))
    api = AdminApiClient('http://offline.test', session=session)

    with pytest.raises(ApiError) as excinfo:
        api.health()
    assert excinfo.value.status is None
    assert excinfo.value.message == message
