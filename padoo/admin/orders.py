"""
Admin Order Routes
"""

from flask import request

from padoo.admin import admin_bp
from padoo.admin.decorators import admin_required
from padoo.models import Order
from padoo.services import ok


@admin_bp.route('/orders', methods=['GET'])
@admin_required
def list_orders():
    """All orders, newest first. ``?shop_id=`` narrows to one shop."""
    query = Order.query
    shop_id = request.args.get('shop_id', type=int)
    if shop_id is not None:
        query = query.filter_by(shop_id=shop_id)
    orders = query.order_by(Order.created_at.desc(), Order.id.desc()).all()
    return ok(orders=[o.to_dict() for o in orders])
