"""
Admin Routes

Admin login/logout, session activity auditing, access logs and driver
statistics.
"""

import json
import logging
import secrets
import time
from datetime import datetime, timedelta

from flask import current_app, request, session
from sqlalchemy import func, or_

from padoo.admin import admin_bp
from padoo.admin.decorators import admin_required
from padoo.extensions import db
from padoo.models import AdminAccessLog, Order, ShopAccount, User
from padoo.services import ok, fail

logger = logging.getLogger(__name__)

LOG_FILTERS = ('all', 'success', 'failed', 'today', 'week')

# Activity the dashboard may record after its admin session has lapsed
ANONYMOUS_ACTIONS = ('logout',)

RECENT_DETAILS_LIMIT = 10


def _record_access(username, action, successful, failure_reason=None, details=None):
    """Store an access log row. Failures here never break the caller."""
    entry = AdminAccessLog(
        username=username or 'Unknown',
        action=action,
        login_successful=successful,
        failure_reason=failure_reason,
        ip_address=request.remote_addr,
        user_agent=request.headers.get('User-Agent'),
        details=json.dumps(details) if details is not None else None,
    )
    try:
        db.session.add(entry)
        db.session.commit()
    except Exception:
        db.session.rollback()
        logger.exception('Could not record admin %s for %s', action, username)
        return None
    return entry


@admin_bp.route('/login', methods=['POST'])
def admin_login():
    """Dedicated admin login - completely independent of driver/shop login."""
    data = request.get_json(silent=True) or {}
    username = (data.get('username') or '').strip()
    password = data.get('password') or ''

    if not username or not password:
        return fail('Please enter both username and password.', 400)

    config = current_app.config
    if username != config['ADMIN_USERNAME'] or password != config['ADMIN_PASSWORD']:
        _record_access(username, 'login', False, failure_reason='Invalid credentials')
        logger.info('Rejected admin login for %s', username)
        return fail('Invalid administrator credentials.', 401)

    token = secrets.token_urlsafe(32)
    session.clear()
    session.permanent = True
    session['is_admin'] = True
    session['admin_username'] = username
    session['admin_session_token'] = token
    _record_access(username, 'login', True)

    timeout = timedelta(minutes=config['ADMIN_SESSION_TIMEOUT_MINUTES'])
    expires_at = int(time.time() * 1000) + int(timeout.total_seconds() * 1000)
    logger.info('Admin %s logged in', username)
    return ok(message='Welcome, Administrator!', sessionToken=token,
              username=username, expiresAt=expires_at)


@admin_bp.route('/logout', methods=['POST'])
def admin_logout():
    """Admin logout - clears entire session."""
    username = session.get('admin_username')
    session.clear()
    if username:
        logger.info('Admin %s logged out', username)
    return ok(message='You have been logged out of the admin panel.')


@admin_bp.route('/activity', methods=['POST'])
def admin_activity():
    """Audit hook used by the dashboard session tracker.

    Logouts are accepted without an admin session so that a logout caused
    by an expired session can still be recorded. Anything else needs the
    session, and login rows are only ever written by ``admin_login``.
    """
    data = request.get_json(silent=True) or {}
    action = (data.get('action') or '').strip().lower()
    if not action:
        return fail('Action is required', 400)
    if action == 'login':
        return fail('Login activity is recorded by the login endpoint', 400)
    if not session.get('is_admin') and action not in ANONYMOUS_ACTIONS:
        return fail(f'Only {", ".join(ANONYMOUS_ACTIONS)} can be recorded without an admin session', 400)

    username = session.get('admin_username') or data.get('username') or 'Unknown'
    details = data.get('details')
    entry = _record_access(username, action, True, details={'reason': details} if details else None)
    if entry is None:
        return fail('Could not record activity', 500)
    return ok(201, log=entry.to_dict())


@admin_bp.route('/logs', methods=['GET'])
@admin_required
def admin_logs():
    """Access log listing with the dashboard's filters and summary stats."""
    log_filter = request.args.get('filter', 'all')
    if log_filter not in LOG_FILTERS:
        return fail(f'Unknown filter "{log_filter}"', 400)
    search = (request.args.get('search') or '').strip().lower()

    query = AdminAccessLog.query
    now = datetime.utcnow()
    if log_filter == 'success':
        query = query.filter(AdminAccessLog.login_successful.is_(True))
    elif log_filter == 'failed':
        query = query.filter(AdminAccessLog.login_successful.is_(False))
    elif log_filter == 'today':
        start_of_day = now.replace(hour=0, minute=0, second=0, microsecond=0)
        query = query.filter(AdminAccessLog.created_at >= start_of_day)
    elif log_filter == 'week':
        query = query.filter(AdminAccessLog.created_at >= now - timedelta(days=7))

    if search:
        pattern = f'%{search}%'
        query = query.filter(or_(
            func.lower(AdminAccessLog.username).like(pattern),
            func.lower(AdminAccessLog.ip_address).like(pattern),
            func.lower(AdminAccessLog.failure_reason).like(pattern),
        ))

    logs = query.order_by(AdminAccessLog.created_at.desc(), AdminAccessLog.id.desc()).all()
    return ok(logs=[entry.to_dict() for entry in logs], stats=_log_stats())


def _log_stats():
    logins = AdminAccessLog.query.filter_by(action='login')
    last_success = logins.filter_by(login_successful=True)\
        .order_by(AdminAccessLog.created_at.desc(), AdminAccessLog.id.desc()).first()
    unique_ips = db.session.query(func.count(func.distinct(AdminAccessLog.ip_address))).scalar()
    return {
        'successfulLogins': logins.filter_by(login_successful=True).count(),
        'failedLogins': logins.filter_by(login_successful=False).count(),
        'uniqueIps': unique_ips or 0,
        'lastSuccessfulLogin': last_success.created_at.isoformat() if last_success else None,
    }


@admin_bp.route('/driver-stats/<int:driver_id>', methods=['GET'])
@admin_required
def driver_stats(driver_id):
    """Order totals and earnings for one driver."""
    db.get_or_404(User, driver_id, description='User not found')

    total_orders, total_earnings, total_shops = db.session.query(
        func.count(Order.id),
        func.coalesce(func.sum(Order.earnings), 0.0),
        func.count(func.distinct(Order.shop_id)),
    ).filter(Order.user_id == driver_id).one()

    return ok(stats={
        'totalShops': total_shops,
        'totalOrders': total_orders,
        'totalEarnings': round(float(total_earnings), 2),
    })


@admin_bp.route('/driver-details/<int:driver_id>', methods=['GET'])
@admin_required
def driver_details(driver_id):
    """The shops a driver delivered for most recently and their latest orders."""
    db.get_or_404(User, driver_id, description='User not found')

    last_order = func.max(Order.created_at)
    shop_rows = db.session.query(
        ShopAccount, func.count(Order.id), last_order,
    ).join(Order, Order.shop_id == ShopAccount.id).filter(
        Order.user_id == driver_id,
    ).group_by(ShopAccount.id).order_by(
        last_order.desc(), ShopAccount.id.desc(),
    ).limit(RECENT_DETAILS_LIMIT).all()

    orders = Order.query.filter_by(user_id=driver_id).order_by(
        Order.created_at.desc(), Order.id.desc(),
    ).limit(RECENT_DETAILS_LIMIT).all()

    return ok(details={
        'recentShops': [{
            'id': shop.id,
            'shop_name': shop.shop_name,
            'orders': count,
            'last_order_at': latest.isoformat() if latest else None,
        } for shop, count, latest in shop_rows],
        'recentOrders': [o.to_dict() for o in orders],
    })
