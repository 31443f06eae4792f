"""
Auth Blueprint

Driver and shop login through bearer session tokens.
"""

from flask import Blueprint

auth_bp = Blueprint('auth', __name__)

from padoo.auth import routes  # noqa: E402, F401
