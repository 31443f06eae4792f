"""
Public Blueprint

Health check, the dashboard shell page and token-authenticated lookups.
"""

from flask import Blueprint

public_bp = Blueprint('public', __name__)

from padoo.public import routes  # noqa: E402, F401
