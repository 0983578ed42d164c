from flask import (
    abort,
    flash,
    redirect,
    render_template,
    request,
    url_for,
    Response,
)
from flask_login import current_user, login_required

from . import bp
from . import forms
import shophub.processor as processors
from shophub.models import storage


def _back(default: str) -> str:
    target = request.form.get("next") or request.referrer
    if target and (target.startswith("/") or target.startswith(request.host_url)):
        return target
    return default


def _form_errors(form) -> None:
    for field, errors in form.errors.items():
        for error in errors:
            flash(f"{getattr(form, field).label.text}: {error}", "danger")


# ----------------------------------------------------------------------
# Cart
# ----------------------------------------------------------------------
@bp.route("/cart")
@login_required
def cart() -> str:
    items = storage.get_cart(current_user.id)
    totals = processors.cart_totals(current_user.id)
    quantity_forms = {item.id: forms.CartQuantityForm(prefix=f"item-{item.id}", quantity=item.quantity) for item in items}
    return render_template(
        "user/cart.html",
        items=items,
        totals=totals,
        free_shipping_gap=processors.free_shipping_gap(totals.subtotal),
        quantity_forms=quantity_forms,
        action_form=forms.ActionForm(),
    )


@bp.route("/cart/add", methods=["POST"])
@login_required
def add_to_cart() -> Response:
    form = forms.AddToCartForm()
    if form.validate_on_submit():
        item = processors.add_to_cart(current_user.id, form.product_id.data, form.quantity.data)
        flash(f"{item.product.name} added to your cart", "success")
    else:
        _form_errors(form)
    return redirect(_back(url_for("user.cart")))


@bp.route("/cart/<int:item_id>/update", methods=["POST"])
@login_required
def update_cart_item(item_id: int) -> Response:
    item = storage.get_cart_item(current_user.id, item_id)
    form = forms.CartQuantityForm(prefix=f"item-{item.id}")
    if form.validate_on_submit():
        if form.quantity.data > item.product.stock:
            flash(f"Only {item.product.stock} of {item.product.name} in stock", "warning")
        else:
            processors.update_cart_item(current_user.id, item_id, form.quantity.data)
    else:
        _form_errors(form)
    return redirect(url_for("user.cart"))


@bp.route("/cart/<int:item_id>/remove", methods=["POST"])
@login_required
def remove_from_cart(item_id: int) -> Response:
    if forms.ActionForm().validate_on_submit():
        processors.remove_from_cart(current_user.id, item_id)
        flash("Item removed from cart", "success")
    return redirect(url_for("user.cart"))


@bp.route("/cart/clear", methods=["POST"])
@login_required
def clear_cart() -> Response:
    if forms.ActionForm().validate_on_submit():
        processors.clear_cart(current_user.id)
        flash("Cart cleared", "success")
    return redirect(url_for("user.cart"))


# ----------------------------------------------------------------------
# Checkout & orders
# ----------------------------------------------------------------------
@bp.route("/checkout", methods=["GET", "POST"])
@login_required
def checkout() -> str | Response:
    items = storage.get_cart(current_user.id)
    if not items:
        flash("Your cart is empty", "warning")
        return redirect(url_for("user.cart"))
    form = forms.CheckoutForm()
    if form.validate_on_submit():
        order = processors.place_order(current_user.id, form.details())
        flash(f"Order {order.order_number} placed", "success")
        return redirect(url_for("user.order", order_id=order.id))
    return render_template(
        "user/checkout.html",
        form=form,
        items=items,
        totals=processors.cart_totals(current_user.id, with_tax=True),
    )


@bp.route("/orders")
@login_required
def orders() -> str:
    return render_template("user/orders.html", orders=storage.get_orders(user_id=current_user.id))


@bp.route("/orders/<int:order_id>")
@login_required
def order(order_id: int) -> str:
    order = storage.get_order(order_id)
    if order.user_id != current_user.id and not current_user.is_admin:
        abort(403)
    return render_template("user/order.html", order=order)


# ----------------------------------------------------------------------
# Favorites
# ----------------------------------------------------------------------
@bp.route("/favorites")
@login_required
def favorites() -> str:
    return render_template(
        "user/favorites.html",
        items=storage.get_wishlist(current_user.id),
        action_form=forms.ActionForm(),
    )


@bp.route("/favorites/add", methods=["POST"])
@login_required
def add_favorite() -> Response:
    form = forms.FavoriteForm()
    if form.validate_on_submit():
        item, _ = storage.add_to_wishlist(current_user.id, form.product_id.data)
        flash(f"{item.product.name} saved to favorites", "success")
    return redirect(_back(url_for("user.favorites")))


@bp.route("/favorites/<int:item_id>/remove", methods=["POST"])
@login_required
def remove_favorite(item_id: int) -> Response:
    if forms.ActionForm().validate_on_submit():
        storage.remove_from_wishlist(current_user.id, item_id)
        flash("Removed from favorites", "success")
    return redirect(url_for("user.favorites"))


# ----------------------------------------------------------------------
# Reviews
# ----------------------------------------------------------------------
@bp.route("/reviews/<int:product_id>", methods=["POST"])
@login_required
def add_review(product_id: int) -> Response:
    product = storage.get_product(product_id)
    form = forms.ReviewForm()
    if form.validate_on_submit():
        storage.create_review(
            product.id,
            current_user.id,
            {"rating": form.rating.data, "title": form.title.data or None, "comment": form.comment.data or None},
        )
        flash("Thanks for your review!", "success")
    else:
        _form_errors(form)
    return redirect(url_for("main.product", slug=product.slug))
