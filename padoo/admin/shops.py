"""
Admin Shop Account Routes
"""

import logging
from collections import Counter
from datetime import datetime

from flask import request

from padoo.admin import admin_bp
from padoo.admin.decorators import admin_required
from padoo.extensions import db
from padoo.models import Category, Order, ShopAccount, User, SHOP_STATUSES
from padoo.services import (
    ok, fail, normalize_email, hash_password, email_in_use, password_problem,
)

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ('shop_name', 'contact_person', 'phone', 'address', 'afm')


def _parse_category(value):
    """Return ``(category, error_message)``."""
    try:
        category_id = int(value)
    except (TypeError, ValueError):
        return None, 'Category must be a valid id'
    category = db.session.get(Category, category_id)
    if category is None:
        return None, 'Category not found'
    return category, None


def _parse_earning(value):
    """Return ``(earning, error_message)``; blank values leave the field unset."""
    if value is None or value == '':
        return None, None
    try:
        earning = float(value)
    except (TypeError, ValueError):
        return None, 'Driver earning per order must be a number'
    if earning < 0:
        return None, 'Driver earning per order cannot be negative'
    return earning, None


@admin_bp.route('/shop-accounts', methods=['GET'])
@admin_required
def list_shop_accounts():
    shops = ShopAccount.query.order_by(ShopAccount.created_at.desc(), ShopAccount.id.desc()).all()
    return ok(shopAccounts=[s.to_dict() for s in shops])


@admin_bp.route('/shop-accounts', methods=['POST'])
@admin_required
def create_shop_account():
    data = request.get_json(silent=True) or {}
    email = normalize_email(data.get('email'))
    password = data.get('password') or ''
    shop_name = (data.get('shop_name') or '').strip()
    afm = (str(data.get('afm') or '')).strip()

    if not email or not password or not shop_name or not afm or not data.get('category_id'):
        return fail('Email, password, shop name, AFM, and category are required', 400)

    problem = password_problem(password)
    if problem:
        return fail(problem, 400)

    category, error = _parse_category(data.get('category_id'))
    if error:
        return fail(error, 400)

    status = data.get('status') or 'active'
    if status not in SHOP_STATUSES:
        return fail(f'Status must be one of: {", ".join(SHOP_STATUSES)}', 400)

    if email_in_use(email):
        return fail('Email already exists', 400)

    shop = ShopAccount(
        email=email,
        password_hash=hash_password(password),
        shop_name=shop_name,
        contact_person=data.get('contact_person'),
        phone=data.get('phone'),
        address=data.get('address'),
        afm=afm,
        category_id=category.id,
        status=status,
    )
    db.session.add(shop)
    db.session.commit()

    logger.info('Shop account created: %s (%s)', shop.id, shop.shop_name)
    return ok(201, shop=shop.to_dict())


@admin_bp.route('/shop-accounts/<int:shop_id>', methods=['PUT'])
@admin_required
def update_shop_account(shop_id):
    shop = db.get_or_404(ShopAccount, shop_id, description='Shop not found')
    data = request.get_json(silent=True) or {}

    updates = {}
    for name in EDITABLE_FIELDS:
        value = data.get(name)
        if value is not None:
            updates[name] = value.strip() if isinstance(value, str) else value

    if updates.get('shop_name', shop.shop_name) in ('', None) or updates.get('afm', shop.afm) in ('', None):
        return fail('Shop name and AFM cannot be empty', 400)

    if data.get('category_id') not in (None, ''):
        category, error = _parse_category(data['category_id'])
        if error:
            return fail(error, 400)
        updates['category_id'] = category.id

    status = data.get('status')
    if status:
        if status not in SHOP_STATUSES:
            return fail(f'Status must be one of: {", ".join(SHOP_STATUSES)}', 400)
        updates['status'] = status

    earning, error = _parse_earning(data.get('driver_earning_per_order'))
    if error:
        return fail(error, 400)
    if earning is not None:
        updates['driver_earning_per_order'] = earning

    for name, value in updates.items():
        setattr(shop, name, value)
    db.session.commit()
    logger.info('Shop account updated: %s', shop.id)
    return ok(shop=shop.to_dict())


@admin_bp.route('/shop-accounts/<int:shop_id>', methods=['DELETE'])
@admin_required
def delete_shop_account(shop_id):
    shop = db.get_or_404(ShopAccount, shop_id, description='Shop not found')
    db.session.delete(shop)
    db.session.commit()
    logger.info('Shop account deleted: %s', shop_id)
    return ok(message='Shop account deleted successfully')


@admin_bp.route('/shop-accounts/<int:shop_id>/password', methods=['PUT'])
@admin_required
def change_shop_password(shop_id):
    data = request.get_json(silent=True) or {}
    password = data.get('password') or ''
    problem = password_problem(password)
    if problem:
        return fail(problem, 400)

    shop = db.get_or_404(ShopAccount, shop_id, description='Shop not found')
    shop.password_hash = hash_password(password)
    db.session.commit()
    logger.info('Password updated for shop %s', shop.shop_name)
    return ok(message='Password updated successfully')


def _month_bounds(value):
    """Return ``(start, end)`` for a ``YYYY-MM`` month, or ``None`` when malformed."""
    try:
        start = datetime.strptime(value, '%Y-%m')
    except (TypeError, ValueError):
        return None
    if start.month == 12:
        return start, start.replace(year=start.year + 1, month=1)
    return start, start.replace(month=start.month + 1)


@admin_bp.route('/shop/<int:shop_id>/analytics/monthly', methods=['GET'])
@admin_required
def shop_monthly_analytics(shop_id):
    """Order volume, revenue, busiest day and busiest driver for one month."""
    shop = db.get_or_404(ShopAccount, shop_id, description='Shop not found')

    bounds = _month_bounds(request.args.get('month') or datetime.utcnow().strftime('%Y-%m'))
    if bounds is None:
        return fail('Month must be in YYYY-MM format', 400)
    start, end = bounds

    orders = Order.query.filter(
        Order.shop_id == shop.id,
        Order.created_at >= start,
        Order.created_at < end,
    ).order_by(Order.created_at, Order.id).all()

    # ties go to the earliest day / first driver seen
    per_day = Counter(o.created_at.strftime('%Y-%m-%d') for o in orders)
    per_driver = Counter(o.user_id for o in orders)
    peak_day, peak_day_count = per_day.most_common(1)[0] if per_day else (None, 0)

    top_driver = None
    if per_driver:
        driver_id, delivered = per_driver.most_common(1)[0]
        driver = db.session.get(User, driver_id)
        if driver is not None:
            top_driver = {
                'id': driver.id,
                'name': driver.name or driver.email,
                'email': driver.email,
                'delivered': delivered,
            }

    return ok(summary={
        'month': start.strftime('%Y-%m'),
        'total_orders': len(orders),
        'total_revenue': round(sum(o.price or 0.0 for o in orders), 2),
        'peak_day': peak_day,
        'peak_day_count': peak_day_count,
        'top_driver': top_driver,
    })
