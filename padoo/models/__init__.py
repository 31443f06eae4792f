"""
Models Package

Exports all models for easy importing.
"""

from padoo.models.user import User, USER_TYPES
from padoo.models.shop import ShopAccount, SHOP_STATUSES
from padoo.models.category import Category
from padoo.models.order import Order
from padoo.models.access_log import AdminAccessLog

__all__ = [
    'User',
    'USER_TYPES',
    'ShopAccount',
    'SHOP_STATUSES',
    'Category',
    'Order',
    'AdminAccessLog',
]
