"""
Data-access layer: CRUD plus the handful of joined / aggregated reads the
storefront needs. Every function commits its own unit of work and raises
``shophub.utils.exceptions`` errors instead of returning sentinels.
"""
from typing import Any, Dict, List, Optional, Tuple

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import selectinload

from shophub.database import db, is_duplicate
from shophub.utils.exceptions import ConflictError, NotFoundError
from shophub.utils.helpers import slugify, to_cents
from shophub.utils.logging import get_logger

from .models import (
    CartItem,
    Category,
    Coupon,
    Order,
    OrderItem,
    Product,
    Review,
    User,
    WishlistItem,
)

log = get_logger(__name__)


def commit(conflict_message: str) -> None:
    """Commit the session, turning constraint violations into ConflictError."""
    try:
        db.session.commit()
    except IntegrityError as e:
        db.session.rollback()
        log.info(f"Integrity Error during DB operation: {e.orig}")
        if is_duplicate(e):
            raise ConflictError(conflict_message, reason="duplicate") from e
        raise ConflictError(conflict_message) from e


# ----------------------------------------------------------------------
# Users
# ----------------------------------------------------------------------
def get_user(user_id: str) -> Optional[User]:
    return db.session.get(User, user_id)


def upsert_user(claims: Dict[str, Any]) -> User:
    """Create or refresh the user row from identity-provider claims."""
    user_id = str(claims["sub"])
    user = db.session.get(User, user_id)
    if user is None:
        user = User(id=user_id)
        db.session.add(user)
        log.info("Creating user %s on first login", user_id)
    user.email = claims.get("email") or user.email
    user.first_name = claims.get("given_name", claims.get("first_name", user.first_name))
    user.last_name = claims.get("family_name", claims.get("last_name", user.last_name))
    user.profile_image_url = claims.get("picture", claims.get("profile_image_url", user.profile_image_url))
    commit("A user with this email already exists")
    return user


def get_users() -> List[User]:
    return User.query.order_by(User.created_at.desc(), User.id).all()


def set_admin(user_id: str, is_admin: bool) -> User:
    user = db.session.get(User, user_id)
    if user is None:
        raise NotFoundError("User not found")
    user.is_admin = is_admin
    db.session.commit()
    log.info("User %s admin flag set to %s", user_id, is_admin)
    return user


# ----------------------------------------------------------------------
# Categories
# ----------------------------------------------------------------------
def get_categories() -> List[Category]:
    return Category.query.order_by(Category.name).all()


def get_category(category_id: int) -> Category:
    category = db.session.get(Category, category_id)
    if category is None:
        raise NotFoundError("Category not found")
    return category


def get_category_by_slug(slug: str) -> Category:
    category = Category.query.filter_by(slug=slug).first()
    if category is None:
        raise NotFoundError("Category not found")
    return category


def create_category(data: Dict[str, Any]) -> Category:
    data = dict(data)
    if not data.get("slug"):
        data["slug"] = slugify(data["name"])
    category = Category(**data)
    db.session.add(category)
    commit("A category with this slug already exists")
    return category


def update_category(category_id: int, data: Dict[str, Any]) -> Category:
    category = get_category(category_id)
    for key, value in data.items():
        setattr(category, key, value)
    commit("A category with this slug already exists")
    return category


def delete_category(category_id: int) -> None:
    category = get_category(category_id)
    db.session.delete(category)
    db.session.commit()


# ----------------------------------------------------------------------
# Products
# ----------------------------------------------------------------------
def _product_query():
    return Product.query.options(
        selectinload(Product.category),
        selectinload(Product.reviews),
    )


def get_products(
    category_id: Optional[int] = None,
    search: Optional[str] = None,
    featured: bool = False,
    limit: Optional[int] = None,
    offset: Optional[int] = None,
    include_inactive: bool = False,
) -> List[Product]:
    """Products with their category and reviews, newest first."""
    query = _product_query()
    if not include_inactive:
        query = query.filter(Product.is_active.is_(True))
    if category_id:
        query = query.filter(Product.category_id == category_id)
    if search:
        query = query.filter(Product.name.ilike(f"%{search}%"))
    if featured:
        query = query.filter(Product.is_featured.is_(True))
    query = query.order_by(Product.created_at.desc(), Product.id.desc())
    if limit:
        query = query.limit(limit)
    if offset:
        query = query.offset(offset)
    return query.all()


def get_product(product_id: int, include_inactive: bool = False) -> Product:
    product = _product_query().filter(Product.id == product_id).first()
    if product is None or (not product.is_active and not include_inactive):
        raise NotFoundError("Product not found")
    return product


def get_product_by_slug(slug: str, include_inactive: bool = False) -> Product:
    product = _product_query().filter(Product.slug == slug).first()
    if product is None or (not product.is_active and not include_inactive):
        raise NotFoundError("Product not found")
    return product


def _check_category(data: Dict[str, Any]) -> None:
    if data.get("category_id") is not None:
        get_category(data["category_id"])


def create_product(data: Dict[str, Any]) -> Product:
    data = dict(data)
    _check_category(data)
    if not data.get("slug"):
        data["slug"] = slugify(data["name"])
    product = Product(**data)
    db.session.add(product)
    commit("A product with this slug or SKU already exists")
    log.info("Product %s created (%s)", product.id, product.slug)
    return product


def update_product(product_id: int, data: Dict[str, Any]) -> Product:
    product = get_product(product_id, include_inactive=True)
    _check_category(data)
    for key, value in data.items():
        setattr(product, key, value)
    commit("A product with this slug or SKU already exists")
    return product


def delete_product(product_id: int) -> None:
    product = get_product(product_id, include_inactive=True)
    db.session.delete(product)
    commit("Product is part of existing orders; deactivate it instead")
    log.info("Product %s deleted", product_id)


# ----------------------------------------------------------------------
# Reviews
# ----------------------------------------------------------------------
def get_reviews(product_id: int) -> List[Review]:
    return (
        Review.query.filter_by(product_id=product_id)
        .order_by(Review.created_at.desc(), Review.id.desc())
        .all()
    )


def create_review(product_id: int, user_id: str, data: Dict[str, Any]) -> Review:
    get_product(product_id)
    review = Review(product_id=product_id, user_id=user_id, **data)
    db.session.add(review)
    db.session.commit()
    return review


def get_review(review_id: int) -> Review:
    review = db.session.get(Review, review_id)
    if review is None:
        raise NotFoundError("Review not found")
    return review


def delete_review(review_id: int) -> None:
    review = get_review(review_id)
    db.session.delete(review)
    db.session.commit()


# ----------------------------------------------------------------------
# Cart / wishlist reads
# ----------------------------------------------------------------------
def get_cart(user_id: str) -> List[CartItem]:
    return (
        CartItem.query.filter_by(user_id=user_id)
        .order_by(CartItem.created_at.desc(), CartItem.id.desc())
        .all()
    )


def get_cart_item(user_id: str, item_id: int) -> CartItem:
    item = CartItem.query.filter_by(id=item_id, user_id=user_id).first()
    if item is None:
        raise NotFoundError("Cart item not found")
    return item


def get_wishlist(user_id: str) -> List[WishlistItem]:
    return (
        WishlistItem.query.filter_by(user_id=user_id)
        .order_by(WishlistItem.created_at.desc(), WishlistItem.id.desc())
        .all()
    )


def add_to_wishlist(user_id: str, product_id: int) -> Tuple[WishlistItem, bool]:
    """Returns the wishlist row and whether it was created by this call."""
    get_product(product_id)
    existing = WishlistItem.query.filter_by(user_id=user_id, product_id=product_id).first()
    if existing:
        return existing, False
    item = WishlistItem(user_id=user_id, product_id=product_id)
    db.session.add(item)
    commit("Product is already on the wishlist")
    return item, True


def remove_from_wishlist(user_id: str, item_id: int) -> None:
    item = WishlistItem.query.filter_by(id=item_id, user_id=user_id).first()
    if item is None:
        raise NotFoundError("Wishlist item not found")
    db.session.delete(item)
    db.session.commit()


# ----------------------------------------------------------------------
# Orders
# ----------------------------------------------------------------------
def _order_query():
    return Order.query.options(selectinload(Order.items).joinedload(OrderItem.product))


def get_orders(user_id: Optional[str] = None, status: Optional[str] = None) -> List[Order]:
    """Orders with their items, newest first. ``user_id=None`` means every user."""
    query = _order_query()
    if user_id is not None:
        query = query.filter(Order.user_id == user_id)
    if status:
        query = query.filter(Order.status == status)
    return query.order_by(Order.created_at.desc(), Order.id.desc()).all()


def get_order(order_id: int) -> Order:
    order = _order_query().filter(Order.id == order_id).first()
    if order is None:
        raise NotFoundError("Order not found")
    return order


def update_order_status(order_id: int, status: str) -> Order:
    order = get_order(order_id)
    order.status = status
    db.session.commit()
    log.info("Order %s status → %s", order.order_number, status)
    return order


# ----------------------------------------------------------------------
# Coupons
# ----------------------------------------------------------------------
def get_coupon_by_code(code: str) -> Optional[Coupon]:
    return Coupon.query.filter_by(code=code.upper(), is_active=True).first()


def get_coupons() -> List[Coupon]:
    return Coupon.query.order_by(Coupon.created_at.desc(), Coupon.id.desc()).all()


def create_coupon(data: Dict[str, Any]) -> Coupon:
    data = dict(data)
    data["code"] = data["code"].upper()
    coupon = Coupon(**data)
    db.session.add(coupon)
    commit("A coupon with this code already exists")
    return coupon


# ----------------------------------------------------------------------
# Dashboard
# ----------------------------------------------------------------------
def get_dashboard_stats() -> Dict[str, Any]:
    revenue = db.session.scalar(
        db.select(func.coalesce(func.sum(Order.total_amount), 0)).where(Order.payment_status == "completed")
    )
    order_count = db.session.scalar(db.select(func.count(Order.id)))
    product_count = db.session.scalar(db.select(func.count(Product.id)).where(Product.is_active.is_(True)))
    user_count = db.session.scalar(db.select(func.count(User.id)))
    return {
        "total_revenue": float(to_cents(revenue or 0)),
        "total_orders": int(order_count or 0),
        "total_products": int(product_count or 0),
        "total_users": int(user_count or 0),
    }
