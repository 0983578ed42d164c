from datetime import timedelta
from typing import Any, Dict, List

from shophub.database import db
from shophub.utils.helpers import utcnow
from shophub.utils.logging import get_logger

from . import models
from .models import (
    DISCOUNT_TYPES,
    ORDER_STATUSES,
    PAYMENT_STATUSES,
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

CLASSES = {
    "USER": User,
    "CATEGORY": Category,
    "PRODUCT": Product,
    "COUPON": Coupon,
    "REVIEW": Review,
}


def _resolve(object_name: str, data: Dict[str, Any]) -> Dict[str, Any]:
    """Turn slug references and relative dates of a default entry into columns."""
    data = dict(data)
    if object_name == "PRODUCT" and "category" in data:
        category = Category.query.filter_by(slug=data.pop("category")).first()
        data["category_id"] = category.id if category else None
    if object_name == "REVIEW":
        product = Product.query.filter_by(slug=data.pop("product")).first()
        if product is None:
            return {}
        data["product_id"] = product.id
    if object_name == "COUPON" and "expires_in_days" in data:
        days = data.pop("expires_in_days")
        data["expires_at"] = utcnow() + timedelta(days=days) if days is not None else None
    return data


def set_defaults(default_list: List[Dict[str, Any]]) -> int:
    """Create every default entry that is not in the database yet.

    Returns the number of rows created.
    """
    created = 0
    try:
        for entry in default_list:
            cls_ = CLASSES[entry["object_name"]]
            value = entry["value"]
            if entry["key"] == "code":
                value = value.upper()
            exists = cls_.query.filter(getattr(cls_, entry["key"]) == value).first()
            if exists:
                continue
            object_data = _resolve(entry["object_name"], entry["data"])
            if not object_data:
                log.warning(f"Skipping default {entry['object_name']} {value}: missing reference")
                continue
            object_data[entry["key"]] = value
            db.session.add(cls_(**object_data))
            # Flush so later entries can reference this row by slug
            db.session.flush()
            created += 1
            log.info(f"Default {entry['object_name']} created: {value}")
        db.session.commit()
    except Exception as e:
        db.session.rollback()
        log.error(f"Failed loading defaults, {e}")
        raise ValueError(f"Failed loading defaults, {e}") from e
    return created


__all__ = [
    "models",
    "set_defaults",
    "ORDER_STATUSES",
    "PAYMENT_STATUSES",
    "DISCOUNT_TYPES",
    "User",
    "Category",
    "Product",
    "Review",
    "CartItem",
    "WishlistItem",
    "Order",
    "OrderItem",
    "Coupon",
]
