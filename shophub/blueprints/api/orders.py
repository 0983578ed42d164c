from flask import Response
from flask_login import current_user, login_required

import shophub.processor as processors
from shophub.models import storage
from shophub.utils.exceptions import AuthorizationError

from . import admin_required, bp
from .schemas import OrderOut, OrderRequest, OrderStatusIn, dump, dump_many, load


@bp.route("/orders")
@login_required
def list_orders() -> Response:
    # Admins see every order, customers only their own
    user_id = None if current_user.is_admin else current_user.id
    return dump_many(OrderOut, storage.get_orders(user_id=user_id))


@bp.route("/orders/<int:order_id>")
@login_required
def get_order(order_id: int):
    order = storage.get_order(order_id)
    if order.user_id != current_user.id and not current_user.is_admin:
        raise AuthorizationError("Access denied")
    return dump(OrderOut, order)


@bp.route("/orders", methods=["POST"])
@login_required
def create_order():
    data = load(OrderRequest)
    order = processors.place_order(current_user.id, data.details(), data.lines())
    return dump(OrderOut, order, 201)


@bp.route("/orders/<int:order_id>/status", methods=["PUT"])
@admin_required
def update_order_status(order_id: int):
    data = load(OrderStatusIn)
    return dump(OrderOut, storage.update_order_status(order_id, data.status))
