import itertools
import threading
from urllib.parse import urlsplit

import pytest
import requests
from flask import g
from requests.adapters import BaseAdapter
from requests.structures import CaseInsensitiveDict

from padoo import create_app
from padoo.config import TestConfig
from padoo.extensions import db, session_store
from padoo.models import Category


@pytest.fixture()
def app():
    session_store.clear()
    app = create_app(TestConfig)

    # Test requests share this app context, so drop the user Flask-Login caches on g
    @app.teardown_request
    def forget_loaded_user(exc):
        g.pop('_login_user', None)

    with app.app_context():
        yield app
        db.session.remove()
        db.drop_all()
    session_store.clear()


@pytest.fixture()
def client(app):
    return app.test_client()


@pytest.fixture()
def admin_client(app):
    c = app.test_client()
    r = c.post('/api/admin/login', json={'username': 'admin', 'password': 'admin123'})
    assert r.status_code == 200
    return c


@pytest.fixture()
def category(app):
    c = Category(name='Restaurant', description='Full meals')
    db.session.add(c)
    db.session.commit()
    return c


class FlaskTransportAdapter(BaseAdapter):
    """Sends ``requests`` traffic to a Flask test client instead of the network."""

    def __init__(self, flask_client):
        super().__init__()
        self.flask_client = flask_client
        self._lock = threading.Lock()

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        url = urlsplit(request.url)
        headers = {k: v for k, v in request.headers.items() if k.lower() != 'content-length'}
        with self._lock:
            resp = self.flask_client.open(
                url.path,
                method=request.method,
                query_string=url.query,
                data=request.body,
                headers=headers,
            )
            content = resp.get_data()

        response = requests.Response()
        response.status_code = resp.status_code
        response.reason = resp.status.split(' ', 1)[1] if ' ' in resp.status else ''
        response.headers = CaseInsensitiveDict(resp.headers)
        response._content = content
        response.encoding = 'utf-8'
        response.url = request.url
        response.request = request
        return response

    def close(self):
        pass


@pytest.fixture()
def http_session(client):
    session = requests.Session()
    session.mount('http://padoo.test', FlaskTransportAdapter(client))
    return session


class ManualClock:

    def __init__(self, start=1_700_000_000.0):
        self.now = start

    def __call__(self):
        return self.now


class ManualScheduler:
    """Deterministic scheduler: callbacks run only when time is advanced."""

    def __init__(self, clock):
        self.clock = clock
        self.pending = {}
        self._seq = itertools.count()

    def call_later(self, delay, callback):
        handle = object()
        self.pending[handle] = (self.clock.now + delay, next(self._seq), callback, None)
        return handle

    def call_every(self, interval, callback):
        handle = object()
        self.pending[handle] = (self.clock.now + interval, next(self._seq), callback, interval)
        return handle

    def cancel(self, handle):
        self.pending.pop(handle, None)

    def advance(self, seconds):
        target = self.clock.now + seconds
        while True:
            due = [(when, seq, handle) for handle, (when, seq, _, _) in self.pending.items()
                   if when <= target]
            if not due:
                break
            when, _, handle = min(due, key=lambda item: (item[0], item[1]))
            _, _, callback, interval = self.pending.pop(handle)
            self.clock.now = when
            if interval is not None:
                self.pending[handle] = (when + interval, next(self._seq), callback, interval)
            callback()
        self.clock.now = target


@pytest.fixture()
def clock():
    return ManualClock()


@pytest.fixture()
def scheduler(clock):
    return ManualScheduler(clock)
