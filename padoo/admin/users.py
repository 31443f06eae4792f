"""
Admin User Routes

CRUD over driver accounts.
"""

import logging

from flask import request

from padoo.admin import admin_bp
from padoo.admin.decorators import admin_required
from padoo.extensions import db
from padoo.models import User, USER_TYPES
from padoo.services import (
    ok, fail, normalize_email, hash_password, email_in_use, password_problem,
)

logger = logging.getLogger(__name__)


def _default_name(email):
    local = email.split('@')[0]
    return local[:1].upper() + local[1:]


@admin_bp.route('/users', methods=['GET'])
@admin_required
def list_users():
    users = User.query.order_by(User.created_at.desc(), User.id.desc()).all()
    return ok(users=[u.to_dict() for u in users])


@admin_bp.route('/users', methods=['POST'])
@admin_required
def create_user():
    """Create a user; the email must be free across drivers and shops."""
    data = request.get_json(silent=True) or {}
    email = normalize_email(data.get('email'))
    password = data.get('password') or ''
    user_type = data.get('user_type')

    if not email or not password or not user_type:
        return fail('Email, password, and user type are required', 400)

    if user_type not in USER_TYPES:
        return fail('Unsupported user type', 400)

    problem = password_problem(password)
    if problem:
        return fail(problem, 400)

    if email_in_use(email):
        return fail('Email already exists', 400)

    name = (str(data.get('name') or '')).strip() or _default_name(email)
    user = User(email=email, name=name, password_hash=hash_password(password), user_type=user_type)
    db.session.add(user)
    db.session.commit()

    logger.info('User created: %s (%s)', user.id, user_type)
    return ok(201, user=user.to_dict())


@admin_bp.route('/users/<int:user_id>', methods=['PUT'])
@admin_required
def update_user(user_id):
    user = db.get_or_404(User, user_id, description='User not found')
    data = request.get_json(silent=True) or {}

    email = normalize_email(data.get('email'))
    user_type = data.get('user_type')

    if user_type and user_type not in USER_TYPES:
        return fail('Unsupported user type', 400)

    changed = False
    if email and email != user.email:
        if email_in_use(email, exclude=user):
            return fail('Email already exists', 400)
        user.email = email
        changed = True

    if user_type and user_type != user.user_type:
        user.user_type = user_type
        changed = True

    if not changed:
        return ok(message='No changes needed', user=user.to_dict())

    db.session.commit()
    logger.info('User updated: %s', user.id)
    return ok(user=user.to_dict())


@admin_bp.route('/users/<int:user_id>', methods=['DELETE'])
@admin_required
def delete_user(user_id):
    user = db.get_or_404(User, user_id, description='User not found')
    db.session.delete(user)
    db.session.commit()
    logger.info('User deleted: %s', user_id)
    return ok(message='User deleted successfully')


@admin_bp.route('/users/<int:user_id>/password', methods=['PUT'])
@admin_required
def change_user_password(user_id):
    data = request.get_json(silent=True) or {}
    password = data.get('password') or ''
    problem = password_problem(password)
    if problem:
        return fail(problem, 400)

    user = db.get_or_404(User, user_id, description='User not found')
    user.password_hash = hash_password(password)
    db.session.commit()
    logger.info('Password updated for user %s', user.id)
    return ok(message='Password updated successfully')
