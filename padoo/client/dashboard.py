"""
Admin dashboard client

Wires the API client, loader, view, dialog flows and session tracker
together the way the browser dashboard does.
"""

import logging
import threading
import time

from padoo.client.api import AdminApiClient, ApiError
from padoo.client.dialogs import DashboardActions
from padoo.client.loader import load_dashboard_data, DashboardData
from padoo.client.notices import Notifier
from padoo.client.rendering import DashboardView
from padoo.client.session import SessionTracker, MANUAL
from padoo.client.settings import ClientSettings
from padoo.client.storage import (
    MemoryStorage, SESSION_EXPIRY_KEY, SESSION_TOKEN_KEY, USERNAME_KEY,
)

logger = logging.getLogger(__name__)


class Dashboard:

    def __init__(self, settings=None, storage=None, api=None, scheduler=None, notifier=None,
                 navigate=None, clock=time.time, confirm=None, audit_in_background=True):
        self.settings = settings or ClientSettings()
        self.storage = storage if storage is not None else MemoryStorage()
        self.api = api or AdminApiClient(self.settings.base_url, self.settings.request_timeout)
        self.notifier = notifier or Notifier()
        self.view = DashboardView(self.settings.shops_page_size, self.settings.logs_page_size)
        self.data = DashboardData()
        self.logs = []
        self.location = None
        self.audit_in_background = audit_in_background

        self.tracker = SessionTracker(
            self.storage,
            scheduler=scheduler,
            clock=clock,
            navigate=navigate or self._navigate,
            notify=self.notifier,
            audit=self._audit,
            timeout=self.settings.session_timeout,
            check_interval=self.settings.session_check_interval,
            redirect_delay=self.settings.redirect_delay,
            login_route=self.settings.login_route,
        )
        self.actions = DashboardActions(self.api, self.notifier, refresh=self.refresh, confirm=confirm)

    def _navigate(self, url):
        logger.info('Redirecting to %s', url)
        self.location = url

    def login(self, username, password):
        """Log in as admin, persist the session and start tracking."""
        try:
            body = self.api.admin_login(username, password)
        except ApiError as e:
            self.notifier.error(f'Login failed: {e.message}')
            return False
        self.storage.set(SESSION_TOKEN_KEY, body['sessionToken'])
        self.storage.set(SESSION_EXPIRY_KEY, str(body['expiresAt']))
        self.storage.set(USERNAME_KEY, body.get('username') or username)
        self.location = None
        self.tracker.init()
        self.notifier.success(body.get('message') or 'Welcome, Administrator!')
        return True

    def resume(self):
        """Pick up a session persisted by an earlier run, if still valid."""
        if not self.tracker.is_authenticated():
            return False
        self.tracker.init()
        return True

    def logout(self):
        self.tracker.logout_user(MANUAL)

    def refresh(self):
        """Reload every collection in parallel, then render."""
        self.data = load_dashboard_data(self.api, notify=self.notifier,
                                        max_workers=self.settings.max_workers)
        self.view.render(self.data)
        return self.data

    def load_logs(self, log_filter='all', search=None, page=1):
        try:
            body = self.api.list_logs(log_filter, search)
        except ApiError as e:
            self.notifier.error(f'Failed to load logs: {e.message}')
            self.logs = []
        else:
            self.logs = body.get('logs', [])
        return self.view.render_logs(self.logs, page)

    def show_more_shops(self):
        return self.view.show_more_shops(self.data.shops, self.data.orders)

    def _audit(self, action, details, username):
        if self.audit_in_background:
            threading.Thread(target=self._send_audit, args=(action, details, username),
                             daemon=True).start()
        else:
            self._send_audit(action, details, username)

    def _send_audit(self, action, details, username):
        try:
            self.api.log_activity(action, details, username)
        except ApiError as e:
            logger.warning('Error logging admin activity: %s', e)
        try:
            self.api.admin_logout()
        except ApiError as e:
            logger.warning('Error closing admin session: %s', e)
