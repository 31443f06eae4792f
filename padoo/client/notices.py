"""
Transient notices ("toasts") shown to the admin.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime

logger = logging.getLogger(__name__)

LEVELS = {
    'success': logging.INFO,
    'info': logging.INFO,
    'warning': logging.WARNING,
    'error': logging.ERROR,
}


@dataclass
class Notice:
    message: str
    level: str = 'info'
    created_at: datetime = field(default_factory=datetime.utcnow)


class Notifier:
    """Keeps the recent notices and mirrors them to the log."""

    def __init__(self, limit=50):
        self.limit = limit
        self.notices = []

    def __call__(self, message, level='info'):
        return self.show(message, level)

    def show(self, message, level='info'):
        notice = Notice(message, level)
        self.notices.append(notice)
        del self.notices[:-self.limit]
        logger.log(LEVELS.get(level, logging.INFO), '[%s] %s', level, message)
        return notice

    def success(self, message):
        return self.show(message, 'success')

    def error(self, message):
        return self.show(message, 'error')

    @property
    def last(self):
        return self.notices[-1] if self.notices else None
