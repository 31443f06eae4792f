"""
Concurrent dashboard loading

All sources are fetched in parallel and joined before anything is
rendered. A failing source leaves an empty collection behind and an
error notice; the others still render.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, wait
from dataclasses import dataclass, field

from padoo.client.api import ApiError

logger = logging.getLogger(__name__)

SOURCES = {
    'users': 'list_users',
    'shops': 'list_shops',
    'orders': 'list_orders',
    'categories': 'list_categories',
}


@dataclass
class DashboardData:
    users: list = field(default_factory=list)
    shops: list = field(default_factory=list)
    orders: list = field(default_factory=list)
    categories: list = field(default_factory=list)
    errors: dict = field(default_factory=dict)

    @property
    def complete(self):
        return not self.errors


def load_dashboard_data(api, sources=None, notify=None, max_workers=4):
    """Fetch every source concurrently and wait for all of them.

    Args:
        api: an ``AdminApiClient``
        sources: names from ``SOURCES`` to load (default: all)
        notify: optional ``notify(message, level)`` callable
        max_workers: thread pool size

    Returns:
        DashboardData with one attribute per loaded source
    """
    names = list(sources or SOURCES)
    data = DashboardData()

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = {name: pool.submit(getattr(api, SOURCES[name])) for name in names}
        wait(futures.values())

    for name, future in futures.items():
        try:
            setattr(data, name, future.result())
        except ApiError as e:
            data.errors[name] = e.message
            logger.warning('Failed to load %s: %s', name, e)
            if notify is not None:
                notify(f'Failed to load {name}: {e.message}', 'error')

    logger.info('Dashboard data loaded: %s', ', '.join(
        f'{name}={len(getattr(data, name))}' for name in names))
    return data
