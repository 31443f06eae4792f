"""
Admin Blueprint

Admin authentication is intentionally session-based and fully separated
from driver/shop authentication.
"""

from flask import Blueprint

admin_bp = Blueprint('admin', __name__)

from padoo.admin import routes, users, shops, categories, orders  # noqa: E402, F401
