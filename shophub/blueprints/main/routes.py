from flask import render_template, request
from flask_login import current_user

from . import bp
from shophub.blueprints.user import forms
from shophub.models import storage
from shophub.utils.exceptions import NotFoundError


@bp.route("/index")
@bp.route("/")
def index() -> str:
    search = request.args.get("q", "").strip() or None
    category_slug = request.args.get("category") or None
    category = None
    if category_slug:
        try:
            category = storage.get_category_by_slug(category_slug)
        except NotFoundError:
            category = None
    filtered = bool(search or category)
    products = storage.get_products(category_id=category.id if category else None, search=search)
    featured = [] if filtered else storage.get_products(featured=True, limit=8)
    return render_template(
        "main/index.html",
        products=products,
        featured=featured,
        categories=storage.get_categories(),
        category=category,
        search=search or "",
        cart_form=forms.AddToCartForm(),
    )


@bp.route("/category/<slug>")
def category(slug: str) -> str:
    category = storage.get_category_by_slug(slug)
    return render_template(
        "main/category.html",
        category=category,
        products=storage.get_products(category_id=category.id),
        categories=storage.get_categories(),
        cart_form=forms.AddToCartForm(),
    )


@bp.route("/product/<slug>")
def product(slug: str) -> str:
    is_admin = current_user.is_authenticated and current_user.is_admin
    product = storage.get_product_by_slug(slug, include_inactive=is_admin)
    return render_template(
        "main/product.html",
        product=product,
        reviews=product.reviews,
        cart_form=forms.AddToCartForm(product_id=product.id),
        favorite_form=forms.FavoriteForm(product_id=product.id),
        review_form=forms.ReviewForm(),
    )
