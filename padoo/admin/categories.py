"""
Admin Category Routes
"""

import logging

from flask import current_app, request
from sqlalchemy import func

from padoo.admin import admin_bp
from padoo.admin.decorators import admin_required
from padoo.extensions import db
from padoo.models import Category, ShopAccount
from padoo.services import ok, fail

logger = logging.getLogger(__name__)

# Shops named in the "category in use" message
IN_USE_PREVIEW = 5


def _name_taken(name, exclude_id=None):
    query = Category.query.filter(func.lower(Category.name) == name.lower())
    if exclude_id is not None:
        query = query.filter(Category.id != exclude_id)
    return query.first() is not None


def _apply_fields(category, data):
    config = current_app.config
    description = data.get('description')
    if isinstance(description, str):
        description = description.strip()
    category.description = description or None
    category.color = data.get('color') or config['DEFAULT_CATEGORY_COLOR']
    category.icon = data.get('icon') or config['DEFAULT_CATEGORY_ICON']
    is_active = data.get('is_active')
    category.is_active = bool(is_active) if is_active is not None else True


@admin_bp.route('/categories', methods=['GET'])
@admin_required
def list_categories():
    """Categories with the number of shop accounts using each one."""
    counts = dict(
        db.session.query(ShopAccount.category_id, func.count(ShopAccount.id))
        .group_by(ShopAccount.category_id)
        .all()
    )
    categories = []
    for category in Category.query.order_by(Category.name).all():
        item = category.to_dict()
        item['shop_count'] = counts.get(category.id, 0)
        categories.append(item)
    return ok(categories=categories)


@admin_bp.route('/categories', methods=['POST'])
@admin_required
def create_category():
    data = request.get_json(silent=True) or {}
    name = (data.get('name') or '').strip()
    if not name:
        return fail('Category name is required', 400)

    if _name_taken(name):
        return fail('A category with this name already exists', 400)

    category = Category(name=name)
    _apply_fields(category, data)
    db.session.add(category)
    db.session.commit()

    logger.info('Category created: %s', category.name)
    return ok(201, category=category.to_dict(), message='Category created successfully')


@admin_bp.route('/categories/<int:category_id>', methods=['PUT'])
@admin_required
def update_category(category_id):
    data = request.get_json(silent=True) or {}
    name = (data.get('name') or '').strip()
    if not name:
        return fail('Category name is required', 400)

    category = db.get_or_404(Category, category_id, description='Category not found')
    if _name_taken(name, exclude_id=category.id):
        return fail('A category with this name already exists', 400)

    category.name = name
    _apply_fields(category, data)
    db.session.commit()

    logger.info('Category updated: %s', category.name)
    return ok(category=category.to_dict(), message='Category updated successfully')


@admin_bp.route('/categories/<int:category_id>', methods=['DELETE'])
@admin_required
def delete_category(category_id):
    """Delete a category unless shop accounts still reference it."""
    category = db.get_or_404(Category, category_id, description='Category not found')

    in_use = ShopAccount.query.filter_by(category_id=category.id)\
        .order_by(ShopAccount.id).limit(IN_USE_PREVIEW).all()
    if in_use:
        names = ', '.join(shop.shop_name for shop in in_use)
        more = ' and others' if len(in_use) == IN_USE_PREVIEW else ''
        return fail(
            f'Cannot delete category "{category.name}" because it is being used by '
            f'{len(in_use)} shop account(s): {names}{more}. '
            'Please reassign these shops to a different category first.',
            400,
        )

    db.session.delete(category)
    db.session.commit()
    logger.info('Category deleted: %s', category.name)
    return ok(message='Category deleted successfully')
