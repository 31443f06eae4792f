"""
Client-local key/value storage

The dashboard keeps its admin session in a small string-to-string store.
Anything with ``get``/``set``/``remove`` works; these two cover memory and
a JSON file on disk.
"""

import json
import logging
import os
import tempfile
import threading

logger = logging.getLogger(__name__)

SESSION_TOKEN_KEY = 'admin_session_token'
SESSION_EXPIRY_KEY = 'admin_session_expiry'
USERNAME_KEY = 'admin_username'


class MemoryStorage:
    """Process-local store, the default for tests and short-lived clients."""

    def __init__(self, initial=None):
        self._data = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key):
        with self._lock:
            return self._data.get(key)

    def set(self, key, value):
        with self._lock:
            self._data[key] = str(value)

    def remove(self, key):
        with self._lock:
            self._data.pop(key, None)

    def __contains__(self, key):
        with self._lock:
            return key in self._data


class JsonFileStorage(MemoryStorage):
    """Store persisted to a JSON file, rewritten on every change.

    A missing or unreadable file starts empty, which the session tracker
    reads as a logged-out session.
    """

    def __init__(self, path):
        self.path = path
        super().__init__(self._read())

    def _read(self):
        try:
            with open(self.path, encoding='utf-8') as fh:
                data = json.load(fh)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError):
            logger.warning('Ignoring unreadable storage file %s', self.path)
            return {}
        if not isinstance(data, dict):
            return {}
        return {str(k): str(v) for k, v in data.items()}

    def _write(self):
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=directory, suffix='.tmp')
        try:
            with os.fdopen(fd, 'w', encoding='utf-8') as fh:
                json.dump(self._data, fh)
            os.replace(tmp_path, self.path)
        except OSError:
            os.unlink(tmp_path)
            raise

    def set(self, key, value):
        with self._lock:
            self._data[key] = str(value)
            self._write()

    def remove(self, key):
        with self._lock:
            if self._data.pop(key, None) is not None:
                self._write()
