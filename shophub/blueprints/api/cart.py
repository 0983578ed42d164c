from flask import Response
from flask_login import current_user, login_required

import shophub.processor as processors
from shophub.models import storage

from . import bp
from .schemas import CartItemIn, CartItemOut, CartItemUpdate, WishlistItemIn, WishlistItemOut, dump, dump_many, load


# ----------------------------------------------------------------------
# Cart
# ----------------------------------------------------------------------
@bp.route("/cart")
@login_required
def get_cart() -> Response:
    return dump_many(CartItemOut, storage.get_cart(current_user.id))


@bp.route("/cart", methods=["POST"])
@login_required
def add_to_cart():
    data = load(CartItemIn)
    item = processors.add_to_cart(current_user.id, data.product_id, data.quantity)
    return dump(CartItemOut, item, 201)


@bp.route("/cart/<int:item_id>", methods=["PUT"])
@login_required
def update_cart_item(item_id: int):
    data = load(CartItemUpdate)
    item = processors.update_cart_item(current_user.id, item_id, data.quantity)
    return dump(CartItemOut, item)


@bp.route("/cart/<int:item_id>", methods=["DELETE"])
@login_required
def remove_from_cart(item_id: int):
    processors.remove_from_cart(current_user.id, item_id)
    return "", 204


@bp.route("/cart", methods=["DELETE"])
@login_required
def clear_cart():
    processors.clear_cart(current_user.id)
    return "", 204


# ----------------------------------------------------------------------
# Wishlist
# ----------------------------------------------------------------------
@bp.route("/wishlist")
@login_required
def get_wishlist() -> Response:
    return dump_many(WishlistItemOut, storage.get_wishlist(current_user.id))


@bp.route("/wishlist", methods=["POST"])
@login_required
def add_to_wishlist():
    data = load(WishlistItemIn)
    item, created = storage.add_to_wishlist(current_user.id, data.product_id)
    return dump(WishlistItemOut, item, 201 if created else 200)


@bp.route("/wishlist/<int:item_id>", methods=["DELETE"])
@login_required
def remove_from_wishlist(item_id: int):
    storage.remove_from_wishlist(current_user.id, item_id)
    return "", 204
