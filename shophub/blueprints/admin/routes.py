from datetime import datetime, time, timezone
from functools import wraps
from typing import Any, Callable

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
from shophub.models import ORDER_STATUSES, storage
from shophub.utils.logging import get_logger

log = get_logger(__name__)


def admin_required(f: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(f)
    @login_required
    def decorated_view(*args: Any, **kwargs: Any) -> Any:
        if not current_user.is_admin:
            abort(403)
        return f(*args, **kwargs)
    return decorated_view


@bp.route("/")
@admin_required
def index() -> str:
    status = request.args.get("status") or None
    if status not in ORDER_STATUSES:
        status = None
    orders = storage.get_orders(status=status)
    status_forms = {order.id: forms.OrderStatusForm(prefix=f"order-{order.id}", status=order.status) for order in orders}
    return render_template(
        "admin/index.html",
        stats=storage.get_dashboard_stats(),
        orders=orders,
        status=status,
        statuses=ORDER_STATUSES,
        status_forms=status_forms,
    )


@bp.route("/orders/<int:order_id>/status", methods=["POST"])
@admin_required
def set_order_status(order_id: int) -> Response:
    form = forms.OrderStatusForm(prefix=f"order-{order_id}")
    if form.validate_on_submit():
        order = storage.update_order_status(order_id, form.status.data)
        flash(f"Order {order.order_number} is now {order.status}", "success")
    else:
        flash("Invalid order status", "danger")
    return redirect(request.referrer or url_for("admin.index"))


# ----------------------------------------------------------------------
# Products
# ----------------------------------------------------------------------
@bp.route("/products")
@admin_required
def products() -> str:
    return render_template(
        "admin/products.html",
        products=storage.get_products(include_inactive=True),
        action_form=forms.ActionForm(),
    )


@bp.route("/products/new", methods=["GET", "POST"])
@admin_required
def new_product() -> str | Response:
    form = forms.ProductForm().set_categories(storage.get_categories())
    if form.validate_on_submit():
        product = storage.create_product(form.values())
        flash(f"{product.name} created", "success")
        return redirect(url_for("admin.products"))
    return render_template("admin/product.html", form=form, product=None)


@bp.route("/products/<int:product_id>", methods=["GET", "POST"])
@admin_required
def product(product_id: int) -> str | Response:
    product = storage.get_product(product_id, include_inactive=True)
    form = forms.ProductForm().set_categories(storage.get_categories())
    if form.validate_on_submit():
        storage.update_product(product_id, form.values())
        flash(f"{product.name} updated", "success")
        return redirect(url_for("admin.product", product_id=product_id))
    if request.method == "GET":
        form.fill(product)
    return render_template("admin/product.html", form=form, product=product)


@bp.route("/products/<int:product_id>/delete", methods=["POST"])
@admin_required
def delete_product(product_id: int) -> Response:
    if forms.ActionForm().validate_on_submit():
        storage.delete_product(product_id)
        flash("Product deleted", "success")
    return redirect(url_for("admin.products"))


# ----------------------------------------------------------------------
# Categories
# ----------------------------------------------------------------------
@bp.route("/categories", methods=["GET", "POST"])
@admin_required
def categories() -> str | Response:
    form = forms.CategoryForm()
    if form.validate_on_submit():
        category = storage.create_category(form.values())
        flash(f"Category {category.name} created", "success")
        return redirect(url_for("admin.categories"))
    return render_template(
        "admin/categories.html",
        categories=storage.get_categories(),
        form=form,
        action_form=forms.ActionForm(),
    )


@bp.route("/categories/<int:category_id>/delete", methods=["POST"])
@admin_required
def delete_category(category_id: int) -> Response:
    if forms.ActionForm().validate_on_submit():
        storage.delete_category(category_id)
        flash("Category deleted", "success")
    return redirect(url_for("admin.categories"))


# ----------------------------------------------------------------------
# Coupons
# ----------------------------------------------------------------------
@bp.route("/coupons", methods=["GET", "POST"])
@admin_required
def coupons() -> str | Response:
    form = forms.CouponForm()
    if form.validate_on_submit():
        expires_at = None
        if form.expires_at.data:
            expires_at = datetime.combine(form.expires_at.data, time.max, tzinfo=timezone.utc)
        coupon = storage.create_coupon({
            "code": form.code.data.strip(),
            "description": form.description.data or None,
            "discount_type": form.discount_type.data,
            "discount_value": form.discount_value.data,
            "min_order_amount": form.min_order_amount.data,
            "max_uses": form.max_uses.data,
            "expires_at": expires_at,
            "is_active": form.is_active.data,
        })
        flash(f"Coupon {coupon.code} created", "success")
        return redirect(url_for("admin.coupons"))
    return render_template("admin/coupons.html", coupons=storage.get_coupons(), form=form)


# ----------------------------------------------------------------------
# Users
# ----------------------------------------------------------------------
@bp.route("/users")
@admin_required
def users() -> str:
    data = storage.get_users()
    return render_template(
        "admin/users.html",
        users=[user for user in data if not user.is_admin],
        admins=[user for user in data if user.is_admin],
        action_form=forms.ActionForm(),
    )


@bp.route("/set-user/<user_id>/<direction>", methods=["POST"])
@admin_required
def set_user_role(user_id: str, direction: str) -> Response:
    if not forms.ActionForm().validate_on_submit():
        abort(400)
    if direction not in ("ADD", "REMOVE"):
        flash("Invalid operation!", "danger")
        return redirect(url_for("admin.users"))
    if direction == "REMOVE" and user_id == current_user.id:
        flash("You cannot remove your own admin access", "warning")
        return redirect(url_for("admin.users"))
    user = storage.set_admin(user_id, direction == "ADD")
    if user.is_admin:
        flash(f"{user.display_name} is now an Admin", "success")
    else:
        flash(f"{user.display_name} has been removed as Admin", "success")
    log.info("Admin %s set %s admin=%s", current_user.id, user_id, user.is_admin)
    return redirect(url_for("admin.users"))
