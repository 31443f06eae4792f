"""
Headless admin dashboard client

Data access, rendering, dialog flows and the admin session tracker.
"""

from padoo.client.api import AdminApiClient, ApiError
from padoo.client.dashboard import Dashboard
from padoo.client.loader import DashboardData, load_dashboard_data
from padoo.client.session import SessionTracker, should_logout
from padoo.client.settings import ClientSettings
from padoo.client.storage import MemoryStorage, JsonFileStorage

__all__ = [
    'AdminApiClient',
    'ApiError',
    'Dashboard',
    'DashboardData',
    'load_dashboard_data',
    'SessionTracker',
    'should_logout',
    'ClientSettings',
    'MemoryStorage',
    'JsonFileStorage',
]
