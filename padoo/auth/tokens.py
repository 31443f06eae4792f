"""
Bearer token helpers used by the Flask-Login request loader.
"""

from padoo.extensions import db, session_store
from padoo.models import User, ShopAccount

ACCOUNT_MODELS = {
    'driver': User,
    'shop': ShopAccount,
}


def bearer_token(req):
    header = req.headers.get('Authorization', '')
    if header.startswith('Bearer '):
        return header[len('Bearer '):].strip() or None
    return None


def account_for_token(token):
    """Resolve a session token to its User or ShopAccount, or None."""
    session = session_store.validate(token)
    if session is None:
        return None
    model = ACCOUNT_MODELS.get(session.account_type)
    if model is None:
        return None
    return db.session.get(model, session.account_id)
