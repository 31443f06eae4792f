"""
Account Services

Credential and uniqueness helpers shared by the auth and admin routes.
"""

import logging

from flask import current_app
from werkzeug.security import generate_password_hash, check_password_hash

from padoo.models import User, ShopAccount

logger = logging.getLogger(__name__)

# Werkzeug hash prefixes
WERKZEUG_PREFIXES = ('pbkdf2:', 'scrypt:')
# Imported bcrypt hashes; Werkzeug cannot check these
BCRYPT_PREFIXES = ('$2a$', '$2b$', '$2y$')


def normalize_email(email):
    return (email or '').strip().lower()


def hash_password(password):
    return generate_password_hash(password, method='pbkdf2:sha256')


def verify_password(account, password):
    if account is None or not account.password_hash:
        return False
    if account.password_hash.startswith(BCRYPT_PREFIXES):
        logger.warning('Password for %s is a bcrypt hash and must be reset', account.email)
        return False
    return check_password_hash(account.password_hash, password)


def email_in_use(email, exclude=None):
    """True when a driver or a shop already owns ``email``.

    ``exclude`` is the account being edited, so it does not conflict with itself.
    """
    email = normalize_email(email)
    user = User.query.filter(User.email == email).first()
    if user is not None and user is not exclude:
        return True
    shop = ShopAccount.query.filter(ShopAccount.email == email).first()
    if shop is not None and shop is not exclude:
        return True
    return False


def password_problem(password):
    """Return a validation message for ``password`` or None if it is acceptable."""
    if not password:
        return 'Password is required'
    min_length = current_app.config.get('MIN_PASSWORD_LENGTH', 6)
    if len(password) < min_length:
        return f'Password must be at least {min_length} characters long'
    return None
