"""
Timer scheduling for the session tracker

``ThreadingScheduler`` runs callbacks on daemon ``threading.Timer``
threads. Anything exposing ``call_later``, ``call_every`` and ``cancel``
can stand in for it.
"""

import logging
import threading

logger = logging.getLogger(__name__)


class _Repeating:
    """Re-arms a ``threading.Timer`` after every run until cancelled."""

    def __init__(self, interval, callback):
        self.interval = interval
        self.callback = callback
        self.cancelled = False
        self._timer = None
        self._lock = threading.Lock()

    def start(self):
        with self._lock:
            if self.cancelled:
                return
            self._timer = threading.Timer(self.interval, self._run)
            self._timer.daemon = True
            self._timer.start()

    def _run(self):
        if self.cancelled:
            return
        try:
            self.callback()
        except Exception:
            logger.exception('Periodic callback failed')
        self.start()

    def cancel(self):
        with self._lock:
            self.cancelled = True
            if self._timer is not None:
                self._timer.cancel()


class ThreadingScheduler:

    def call_later(self, delay, callback):
        timer = threading.Timer(delay, callback)
        timer.daemon = True
        timer.start()
        return timer

    def call_every(self, interval, callback):
        repeating = _Repeating(interval, callback)
        repeating.start()
        return repeating

    def cancel(self, handle):
        if handle is not None:
            handle.cancel()
