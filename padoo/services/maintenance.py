"""
Maintenance Services

Database housekeeping used by the scripts in ``scripts/``.
"""

import logging

from padoo.extensions import db
from padoo.models import AdminAccessLog, Category, Order, ShopAccount, User
from padoo.services.accounts import BCRYPT_PREFIXES, WERKZEUG_PREFIXES, hash_password

logger = logging.getLogger(__name__)

# Anything else is a legacy plaintext password
HASH_PREFIXES = WERKZEUG_PREFIXES + BCRYPT_PREFIXES

# Dependent tables first
CLEANUP_ORDER = (Order, AdminAccessLog, ShopAccount, User, Category)


def is_hashed(value):
    return bool(value) and value.startswith(HASH_PREFIXES)


def rehash_plaintext_passwords():
    """Hash any shop or driver password still stored as plaintext.

    Returns the number of accounts updated.
    """
    updated = 0
    for model in (ShopAccount, User):
        for account in model.query.all():
            if is_hashed(account.password_hash):
                continue
            account.password_hash = hash_password(account.password_hash or '')
            updated += 1
            logger.info('Hashed password for %s', account.email)
    db.session.commit()
    return updated


def clear_database(keep_categories=True):
    """Delete all rows, dependents first. Returns rows removed per table."""
    removed = {}
    for model in CLEANUP_ORDER:
        if keep_categories and model is Category:
            continue
        removed[model.__tablename__] = model.query.delete()
        logger.info('Cleared %s (%d rows)', model.__tablename__, removed[model.__tablename__])
    db.session.commit()
    return removed
