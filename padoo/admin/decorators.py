"""
Admin Decorator

Admin authentication is intentionally session-based and fully separated
from driver/shop authentication.
"""

from functools import wraps
from flask import session

from padoo.services import fail


def admin_required(f):
    """Decorator to ensure the request is from an authenticated admin.
    
    Security:
    - Uses ONLY session['is_admin'] for validation
    - Does NOT use Flask-Login (login_user, current_user)
    - Admin must login via /api/admin/login to set the session flag
    - Driver and shop bearer tokens never grant admin access
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        if not session.get('is_admin'):
            return fail('Admin authentication required', 401)
        return f(*args, **kwargs)
    return wrapper
