"""
Admin session lifecycle tracker

Keeps the dashboard's admin session alive while the admin is active and
forces a logout after a fixed idle period, when the persisted expiry
passes, or when the window is closed.

Timestamps in storage are milliseconds since the epoch, stored as
strings. Storage, clock, scheduler, navigation, notices and the audit
call are all injected.
"""

import logging
import threading
import time

from padoo.client.scheduler import ThreadingScheduler
from padoo.client.storage import SESSION_EXPIRY_KEY, SESSION_TOKEN_KEY, USERNAME_KEY

logger = logging.getLogger(__name__)

ACTIVITY_EVENTS = ('mousedown', 'mousemove', 'keypress', 'scroll', 'click')

INACTIVITY = 'inactivity'
EXPIRED = 'expired'
CLOSED = 'closed'
MANUAL = 'manual'


def should_logout(now, expiry, session_start, timeout_ms):
    """Decide whether a session must end.

    Args:
        now: current time in ms
        expiry: persisted expiry in ms
        session_start: time the current activity window began, in ms
        timeout_ms: idle timeout in ms

    Returns:
        True when the persisted expiry has passed or the session has been
        running for at least ``timeout_ms`` since ``session_start``.
    """
    if now > expiry:
        return True
    return now - session_start >= timeout_ms


def _parse_ms(value):
    try:
        return int(float(value))
    except (TypeError, ValueError):
        return None


class SessionTracker:
    """Browser-style idle/expiry tracking for the admin dashboard."""

    def __init__(self, storage, scheduler=None, clock=time.time, navigate=None, notify=None,
                 audit=None, timeout=15 * 60, check_interval=60, redirect_delay=2,
                 login_route='/dashboard/'):
        self.storage = storage
        self.scheduler = scheduler or ThreadingScheduler()
        self.clock = clock
        self.navigate = navigate
        self.notify = notify
        self.audit = audit
        self.timeout = timeout
        self.check_interval = check_interval
        self.redirect_delay = redirect_delay
        self.login_route = login_route

        self.active = False
        self.session_start = None
        self.listening = frozenset()
        self.last_logout_reason = None

        self._lock = threading.RLock()
        self._idle_handle = None
        self._check_handle = None
        self._idle_generation = 0

    @property
    def timeout_ms(self):
        return int(self.timeout * 1000)

    def now_ms(self):
        return int(self.clock() * 1000)

    def init(self):
        """Start tracking. Calling it again while active does nothing."""
        with self._lock:
            if self.active:
                logger.debug('Session tracking already active')
                return False
            self.active = True
            self.session_start = self.now_ms()
            self._check_handle = self.scheduler.call_every(self.check_interval, self.check_validity)
            self.reset_idle_timer()
            self.listening = frozenset(ACTIVITY_EVENTS)
        logger.info('Session tracking started')
        return True

    def on_activity(self, event='click'):
        """Any tracked input event pushes the idle deadline out again."""
        if event not in self.listening:
            return False
        return self.reset_idle_timer()

    def reset_idle_timer(self):
        with self._lock:
            if not self.active:
                return False
            now = self.now_ms()
            self.scheduler.cancel(self._idle_handle)
            self.session_start = now
            self.storage.set(SESSION_EXPIRY_KEY, str(now + self.timeout_ms))
            self._idle_generation += 1
            generation = self._idle_generation
            self._idle_handle = self.scheduler.call_later(
                self.timeout, lambda: self._on_idle(generation))
            return True

    def _on_idle(self, generation):
        with self._lock:
            if not self.active or generation != self._idle_generation:
                return
        self.logout_user(INACTIVITY)

    def check_validity(self):
        """Periodic check against the persisted session.

        Returns the logout reason when the check ended the session,
        otherwise None.
        """
        with self._lock:
            if not self.active or self.session_start is None:
                return None
            token = self.storage.get(SESSION_TOKEN_KEY)
            raw_expiry = self.storage.get(SESSION_EXPIRY_KEY)
            if not token or not raw_expiry:
                logger.info('Session keys missing from storage, stopping tracking')
                self.stop()
                return None
            expiry = _parse_ms(raw_expiry)
            if expiry is None:
                expiry = 0
            expired = should_logout(self.now_ms(), expiry, self.session_start, self.timeout_ms)
        if expired:
            self.logout_user(EXPIRED)
            return EXPIRED
        return None

    def on_visibility_change(self, visible):
        """Re-check as soon as the page is shown again."""
        if not visible or not self.active:
            return
        if self.check_validity() is None:
            self.reset_idle_timer()

    def on_before_unload(self, x=None, y=None):
        """Best-effort close detection before the page unloads.

        Pointer coordinates at the origin are read as a close and log out
        right away; anything else is read as a refresh. Browsers give no
        reliable signal here, so this is a heuristic.
        """
        if not self.active:
            return False
        if (x or 0) == 0 and (y or 0) == 0:
            self.logout_user(CLOSED)
            return True
        return False

    def stop(self):
        with self._lock:
            if not self.active:
                return False
            self.active = False
            self.session_start = None
            self.listening = frozenset()
            self.scheduler.cancel(self._check_handle)
            self.scheduler.cancel(self._idle_handle)
            self._check_handle = None
            self._idle_handle = None
            self._idle_generation += 1
        logger.info('Session tracking stopped')
        return True

    def logout_user(self, reason):
        """End the session: clear storage, audit, notify, then redirect.

        Automatic logouts only run while tracking is active, so a timer and a
        visibility check that fire together produce a single logout. Returns
        False when the call was ignored.
        """
        was_active = self.stop()
        if not was_active and reason != MANUAL:
            logger.debug('Logout (%s) ignored, tracking already stopped', reason)
            return False
        logger.info('Logging out admin: %s', reason)
        self.last_logout_reason = reason

        had_session = was_active or self.storage.get(SESSION_TOKEN_KEY) is not None
        username = self.storage.get(USERNAME_KEY) or 'Unknown'
        for key in (SESSION_TOKEN_KEY, SESSION_EXPIRY_KEY, USERNAME_KEY):
            self.storage.remove(key)

        if self.audit is not None and had_session:
            try:
                self.audit('logout', reason, username)
            except Exception:
                logger.warning('Could not record logout for %s', username, exc_info=True)

        if self.notify is not None:
            if reason == MANUAL:
                self.notify('You have been logged out.', 'info')
            else:
                self.notify('Session expired. Please login again.', 'error')

        if self.navigate is not None:
            self.scheduler.call_later(self.redirect_delay, lambda: self.navigate(self.login_route))
        return True

    def is_authenticated(self):
        token = self.storage.get(SESSION_TOKEN_KEY)
        expiry = _parse_ms(self.storage.get(SESSION_EXPIRY_KEY))
        if not token or expiry is None:
            return False
        return self.now_ms() <= expiry
