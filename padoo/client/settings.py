"""
Dashboard client settings
"""
import os
from dataclasses import dataclass


@dataclass
class ClientSettings:
    """Where the dashboard talks to and how its admin session behaves."""
    base_url: str = os.environ.get('PADOO_BASE_URL') or 'http://localhost:5000'
    request_timeout: float = 10.0
    # Idle timeout and validation period, in seconds
    session_timeout: float = 15 * 60
    session_check_interval: float = 60
    redirect_delay: float = 2
    login_route: str = '/dashboard/'
    shops_page_size: int = 12
    logs_page_size: int = 25
    max_workers: int = 4
