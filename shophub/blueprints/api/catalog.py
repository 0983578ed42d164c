from flask import Response, request
from flask_login import current_user, login_required

from shophub.models import storage
from shophub.utils.exceptions import AuthorizationError
from shophub.utils.logging import get_logger

from . import admin_required, bp
from .schemas import (
    CategoryIn,
    CategoryOut,
    CategoryUpdate,
    ProductIn,
    ProductOut,
    ProductQuery,
    ProductUpdate,
    ReviewIn,
    ReviewOut,
    dump,
    dump_many,
    load,
)

log = get_logger(__name__)


def _is_admin() -> bool:
    return current_user.is_authenticated and current_user.is_admin


# ----------------------------------------------------------------------
# Categories
# ----------------------------------------------------------------------
@bp.route("/categories")
def list_categories() -> Response:
    return dump_many(CategoryOut, storage.get_categories())


@bp.route("/categories/slug/<slug>")
def category_by_slug(slug: str):
    return dump(CategoryOut, storage.get_category_by_slug(slug))


@bp.route("/categories", methods=["POST"])
@admin_required
def create_category():
    data = load(CategoryIn)
    category = storage.create_category(data.model_dump())
    log.info("Category %s created by %s", category.slug, current_user.id)
    return dump(CategoryOut, category, 201)


@bp.route("/categories/<int:category_id>", methods=["PUT"])
@admin_required
def update_category(category_id: int):
    data = load(CategoryUpdate)
    category = storage.update_category(category_id, data.model_dump(exclude_unset=True))
    return dump(CategoryOut, category)


@bp.route("/categories/<int:category_id>", methods=["DELETE"])
@admin_required
def delete_category(category_id: int):
    storage.delete_category(category_id)
    log.info("Category %s deleted by %s", category_id, current_user.id)
    return "", 204


# ----------------------------------------------------------------------
# Products
# ----------------------------------------------------------------------
@bp.route("/products")
def list_products() -> Response:
    query = load(ProductQuery, request.args.to_dict())
    products = storage.get_products(**query.model_dump())
    return dump_many(ProductOut, products)


@bp.route("/products/<int:product_id>")
def get_product(product_id: int):
    return dump(ProductOut, storage.get_product(product_id, include_inactive=_is_admin()))


@bp.route("/products/slug/<slug>")
def get_product_by_slug(slug: str):
    return dump(ProductOut, storage.get_product_by_slug(slug, include_inactive=_is_admin()))


@bp.route("/products", methods=["POST"])
@admin_required
def create_product():
    data = load(ProductIn)
    product = storage.create_product(data.model_dump())
    return dump(ProductOut, product, 201)


@bp.route("/products/<int:product_id>", methods=["PUT"])
@admin_required
def update_product(product_id: int):
    data = load(ProductUpdate)
    product = storage.update_product(product_id, data.model_dump(exclude_unset=True))
    log.info("Product %s updated by %s", product_id, current_user.id)
    return dump(ProductOut, product)


@bp.route("/products/<int:product_id>", methods=["DELETE"])
@admin_required
def delete_product(product_id: int):
    storage.delete_product(product_id)
    return "", 204


# ----------------------------------------------------------------------
# Reviews
# ----------------------------------------------------------------------
@bp.route("/products/<int:product_id>/reviews")
def list_reviews(product_id: int) -> Response:
    return dump_many(ReviewOut, storage.get_reviews(product_id))


@bp.route("/products/<int:product_id>/reviews", methods=["POST"])
@login_required
def create_review(product_id: int):
    data = load(ReviewIn)
    review = storage.create_review(product_id, current_user.id, data.model_dump())
    return dump(ReviewOut, review, 201)


@bp.route("/reviews/<int:review_id>", methods=["DELETE"])
@login_required
def delete_review(review_id: int):
    review = storage.get_review(review_id)
    if review.user_id != current_user.id and not current_user.is_admin:
        raise AuthorizationError("You can only delete your own reviews")
    storage.delete_review(review_id)
    return "", 204
