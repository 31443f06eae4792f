"""
Auth Routes

Driver/shop login and logout. Login returns a bearer session token; the
Flask-Login request loader resolves it on later requests.
"""

import logging

from flask import request
from flask_login import login_required, current_user

from padoo.auth import auth_bp
from padoo.extensions import session_store
from padoo.models import User, ShopAccount
from padoo.services import ok, fail, normalize_email, verify_password

logger = logging.getLogger(__name__)

LOGIN_TARGETS = {
    'driver': (User, '/app'),
    'shop': (ShopAccount, '/shop'),
}


@auth_bp.route('/login', methods=['POST'])
def login():
    """Authenticate a driver or a shop and open a session."""
    data = request.get_json(silent=True) or {}
    email = normalize_email(data.get('email'))
    password = data.get('password') or ''
    login_type = data.get('loginType')
    
    if not email or not password or not login_type:
        return fail('Email, password, and login type are required', 400)
    
    if login_type not in LOGIN_TARGETS:
        return fail('Invalid login type. Must be "driver" or "shop"', 400)
    
    model, redirect_url = LOGIN_TARGETS[login_type]
    account = model.query.filter_by(email=email).first()
    
    if not verify_password(account, password):
        logger.info('Failed %s login for %s', login_type, email)
        return fail('Invalid email or password', 401)
    
    session, replaced = session_store.create(
        account.id, login_type,
        user_agent=request.headers.get('User-Agent'),
        ip_address=request.remote_addr,
    )
    logger.info('Login successful: %s -> %s', email, redirect_url)
    
    return ok(
        message='Login successful',
        user=account.to_dict(),
        userType=login_type,
        sessionToken=session.token,
        redirectUrl=redirect_url,
        sessionCreated=session.created_at.isoformat(),
        replacedSession=replaced is not None,
    )


@auth_bp.route('/logout', methods=['POST'])
@login_required
def logout():
    """Close the caller's session."""
    removed = session_store.remove(current_user.id, current_user.account_type)
    if removed:
        logger.info('Session removed for %s %s', current_user.account_type, current_user.id)
        return ok(message='Logged out successfully')
    return ok(message='No active session found')
