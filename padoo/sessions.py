"""
Session Store

In-memory bearer-token sessions for drivers and shops. Each account holds
at most one session: logging in again evicts the previous token.
"""

import logging
import secrets
import threading
from dataclasses import dataclass, field
from datetime import datetime, timedelta

logger = logging.getLogger(__name__)


@dataclass
class SessionData:
    account_id: int
    account_type: str
    token: str
    created_at: datetime = field(default_factory=datetime.utcnow)
    last_activity: datetime = field(default_factory=datetime.utcnow)
    user_agent: str = None
    ip_address: str = None

    @property
    def key(self):
        return (self.account_type, self.account_id)


class SessionStore:
    """Token -> session map guarded by a lock."""

    def __init__(self, max_age=timedelta(days=7)):
        self.max_age = max_age
        self._lock = threading.Lock()
        self._by_account = {}
        self._by_token = {}

    def init_app(self, app):
        days = app.config.get('USER_SESSION_MAX_AGE_DAYS', 7)
        self.max_age = timedelta(days=days)
        app.extensions['padoo_sessions'] = self

    def create(self, account_id, account_type, user_agent=None, ip_address=None):
        """Open a session, replacing any session the account already had.

        Returns a ``(session, replaced)`` tuple where ``replaced`` is the
        evicted session or None.
        """
        token = secrets.token_urlsafe(32)
        session = SessionData(account_id=account_id, account_type=account_type, token=token,
                              user_agent=user_agent, ip_address=ip_address)
        with self._lock:
            replaced = self._remove_locked(session.key)
            self._by_account[session.key] = session
            self._by_token[token] = session
        if replaced:
            logger.info('Session for %s %s replaced by a new login', account_type, account_id)
        logger.info('Session created for %s %s', account_type, account_id)
        self.purge_expired()
        return session, replaced

    def validate(self, token, now=None):
        """Return the live session for ``token`` and touch it, or None."""
        if not token:
            return None
        now = now or datetime.utcnow()
        with self._lock:
            session = self._by_token.get(token)
            if session is None:
                return None
            if now - session.last_activity > self.max_age:
                self._remove_locked(session.key)
                logger.info('Session for %s %s expired', session.account_type, session.account_id)
                return None
            session.last_activity = now
            return session

    def remove(self, account_id, account_type):
        with self._lock:
            return self._remove_locked((account_type, account_id))

    def is_logged_in(self, account_id, account_type):
        with self._lock:
            return (account_type, account_id) in self._by_account

    def purge_expired(self, now=None):
        now = now or datetime.utcnow()
        with self._lock:
            stale = [key for key, s in self._by_account.items()
                     if now - s.last_activity > self.max_age]
            for key in stale:
                self._remove_locked(key)
        for account_type, account_id in stale:
            logger.info('Cleaned up expired session for %s %s', account_type, account_id)
        return len(stale)

    def clear(self):
        with self._lock:
            self._by_account.clear()
            self._by_token.clear()

    def __len__(self):
        with self._lock:
            return len(self._by_account)

    def _remove_locked(self, key):
        existing = self._by_account.pop(key, None)
        if existing is not None:
            self._by_token.pop(existing.token, None)
        return existing
