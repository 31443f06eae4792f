"""
Services Package

Exports all services for easy importing.
"""

from padoo.services.accounts import (
    normalize_email, hash_password, verify_password, email_in_use, password_problem,
)
from padoo.services.responses import ok, fail

__all__ = [
    'normalize_email',
    'hash_password',
    'verify_password',
    'email_in_use',
    'password_problem',
    'ok',
    'fail',
]
