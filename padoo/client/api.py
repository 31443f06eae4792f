"""
Admin API client

Thin wrapper over the ``/api/admin/*`` REST surface. Every call checks
the ``{success, ...}`` envelope and raises ``ApiError`` when the request
fails or the envelope reports failure. Nothing is retried.
"""

import logging

import requests

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """A failed API call. ``status`` is None when no response arrived."""

    def __init__(self, message, status=None, payload=None):
        super().__init__(message)
        self.message = message
        self.status = status
        self.payload = payload or {}

    def __str__(self):
        if self.status is None:
            return self.message
        return f'HTTP {self.status}: {self.message}'


class AdminApiClient:
    """HTTP data-access layer used by the dashboard."""

    def __init__(self, base_url='http://localhost:5000', timeout=10.0, session=None):
        self.base_url = base_url.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method, path, json=None, params=None):
        url = f'{self.base_url}{path}'
        try:
            resp = self.session.request(method, url, json=json, params=params, timeout=self.timeout)
        except requests.exceptions.Timeout:
            raise ApiError('Request timed out')
        except requests.exceptions.RequestException as e:
            raise ApiError(str(e))

        try:
            body = resp.json()
        except ValueError:
            raise ApiError(resp.reason or 'Invalid response', resp.status_code)

        if not isinstance(body, dict):
            raise ApiError('Invalid response envelope', resp.status_code)

        if resp.status_code >= 400 or not body.get('success'):
            message = body.get('message') or body.get('error') or resp.reason or 'Request failed'
            logger.debug('%s %s failed: %s %s', method, path, resp.status_code, message)
            raise ApiError(message, resp.status_code, body)
        return body

    # Admin session

    def admin_login(self, username, password):
        return self._request('POST', '/api/admin/login',
                             json={'username': username, 'password': password})

    def admin_logout(self):
        return self._request('POST', '/api/admin/logout')

    def log_activity(self, action, details=None, username=None):
        payload = {'action': action, 'details': details}
        if username:
            payload['username'] = username
        return self._request('POST', '/api/admin/activity', json=payload)

    def list_logs(self, log_filter='all', search=None):
        params = {'filter': log_filter}
        if search:
            params['search'] = search
        return self._request('GET', '/api/admin/logs', params=params)

    # Users

    def list_users(self):
        return self._request('GET', '/api/admin/users').get('users', [])

    def create_user(self, **fields):
        return self._request('POST', '/api/admin/users', json=fields)['user']

    def update_user(self, user_id, **fields):
        return self._request('PUT', f'/api/admin/users/{user_id}', json=fields)['user']

    def delete_user(self, user_id):
        return self._request('DELETE', f'/api/admin/users/{user_id}')

    def change_user_password(self, user_id, password):
        return self._request('PUT', f'/api/admin/users/{user_id}/password',
                             json={'password': password})

    def driver_stats(self, user_id):
        return self._request('GET', f'/api/admin/driver-stats/{user_id}')['stats']

    def driver_details(self, user_id):
        return self._request('GET', f'/api/admin/driver-details/{user_id}')['details']

    # Shop accounts

    def list_shops(self):
        return self._request('GET', '/api/admin/shop-accounts').get('shopAccounts', [])

    def create_shop(self, **fields):
        return self._request('POST', '/api/admin/shop-accounts', json=fields)['shop']

    def update_shop(self, shop_id, **fields):
        return self._request('PUT', f'/api/admin/shop-accounts/{shop_id}', json=fields)['shop']

    def delete_shop(self, shop_id):
        return self._request('DELETE', f'/api/admin/shop-accounts/{shop_id}')

    def change_shop_password(self, shop_id, password):
        return self._request('PUT', f'/api/admin/shop-accounts/{shop_id}/password',
                             json={'password': password})

    def shop_monthly_analytics(self, shop_id, month=None):
        params = {'month': month} if month else None
        return self._request('GET', f'/api/admin/shop/{shop_id}/analytics/monthly',
                             params=params)['summary']

    # Orders and categories

    def list_orders(self):
        return self._request('GET', '/api/admin/orders').get('orders', [])

    def list_categories(self):
        return self._request('GET', '/api/admin/categories').get('categories', [])

    def create_category(self, **fields):
        return self._request('POST', '/api/admin/categories', json=fields)['category']

    def update_category(self, category_id, **fields):
        return self._request('PUT', f'/api/admin/categories/{category_id}', json=fields)['category']

    def delete_category(self, category_id):
        return self._request('DELETE', f'/api/admin/categories/{category_id}')

    def health(self):
        return self._request('GET', '/api/health')
