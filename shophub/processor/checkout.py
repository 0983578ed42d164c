"""
Checkout pricing and order placement.

Prices always come from the catalog at the moment the order is placed; the
amounts a client sends along are only checked against them.
"""
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple
import secrets
import string
import time

from flask import current_app, has_app_context
from sqlalchemy.exc import IntegrityError

from shophub import config as defaults
from shophub.database import db
from shophub.models import Order, OrderItem, Product
from shophub.models import storage
from shophub.utils.exceptions import ConflictError, ValidationError
from shophub.utils.helpers import to_cents
from shophub.utils.logging import get_logger

from .cart import clear_cart

log = get_logger(__name__)

BASE36 = string.digits + string.ascii_lowercase


def _setting(name: str) -> Decimal:
    fallback = getattr(defaults, f"DEFAULT_{name}")
    if has_app_context():
        return Decimal(str(current_app.config.get(name, fallback)))
    return fallback


@dataclass(frozen=True)
class Totals:
    subtotal: Decimal
    shipping: Decimal
    tax: Decimal
    total: Decimal


def subtotal_of(lines: Iterable[Tuple[Any, int]]) -> Decimal:
    """Sum of unit price × quantity over ``(price, quantity)`` pairs."""
    return to_cents(sum((Decimal(str(price)) * quantity for price, quantity in lines), Decimal("0")))


def shipping_for(subtotal: Decimal) -> Decimal:
    if subtotal > _setting("FREE_SHIPPING_THRESHOLD"):
        return Decimal("0.00")
    return to_cents(_setting("FLAT_SHIPPING_RATE"))


def tax_for(subtotal: Decimal) -> Decimal:
    return to_cents(subtotal * _setting("TAX_RATE"))


def free_shipping_gap(subtotal: Decimal) -> Decimal:
    """How much more has to go in the cart before shipping is free."""
    threshold = _setting("FREE_SHIPPING_THRESHOLD")
    if subtotal > threshold:
        return Decimal("0.00")
    return to_cents(threshold - subtotal)


def order_totals(subtotal: Any, with_tax: bool = True) -> Totals:
    subtotal = to_cents(subtotal)
    shipping = shipping_for(subtotal)
    tax = tax_for(subtotal) if with_tax else Decimal("0.00")
    return Totals(subtotal, shipping, tax, to_cents(subtotal + shipping + tax))


def cart_totals(user_id: str, with_tax: bool = False) -> Totals:
    items = storage.get_cart(user_id)
    return order_totals(subtotal_of((item.product.price, item.quantity) for item in items), with_tax=with_tax)


def generate_order_number() -> str:
    suffix = "".join(secrets.choice(BASE36) for _ in range(9))
    return f"ORD-{int(time.time() * 1000)}-{suffix}"


def _within_tolerance(submitted: Any, expected: Decimal) -> bool:
    tolerance = _setting("ORDER_TOTAL_TOLERANCE")
    return abs(Decimal(str(submitted)) - expected) <= tolerance


def _order_lines(user_id: str, items: Optional[List[Dict[str, Any]]]) -> List[Dict[str, Any]]:
    if items:
        return [dict(item) for item in items]
    return [
        {"product_id": item.product_id, "quantity": item.quantity}
        for item in storage.get_cart(user_id)
    ]


def _price_lines(lines: List[Dict[str, Any]]) -> List[Tuple[Product, int, Decimal]]:
    priced = []
    for line in lines:
        product = db.session.get(Product, line["product_id"])
        if product is None or not product.is_active:
            raise ValidationError(f"Product {line['product_id']} is not available", product_id=line["product_id"])
        quantity = line["quantity"]
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
            raise ValidationError("Quantity must be a whole number of at least 1", product_id=product.id)
        submitted_price = line.get("price")
        if submitted_price is not None and not _within_tolerance(submitted_price, product.price):
            raise ValidationError(
                f"Price of {product.name} has changed",
                product_id=product.id,
                price=str(product.price),
            )
        priced.append((product, quantity, to_cents(product.price)))
    return priced


def place_order(user_id: str, details: Dict[str, Any], items: Optional[List[Dict[str, Any]]] = None) -> Order:
    """Write an order, its items and the emptied cart in one transaction.

    ``details`` carries the addresses, payment method/status and optionally the
    ``total_amount`` the client showed. ``items`` defaults to the user's cart.
    """
    lines = _order_lines(user_id, items)
    if not lines:
        raise ValidationError("Order must contain at least one item")
    priced = _price_lines(lines)
    totals = order_totals(subtotal_of((price, quantity) for _, quantity, price in priced))

    submitted_total = details.get("total_amount")
    if submitted_total is not None and not _within_tolerance(submitted_total, totals.total):
        raise ValidationError(
            "Order total does not match current prices",
            expected=str(totals.total),
            submitted=str(submitted_total),
        )

    order = Order(
        user_id=user_id,
        order_number=generate_order_number(),
        total_amount=totals.total,
        shipping_address=details.get("shipping_address") or {},
        billing_address=details.get("billing_address") or {},
        payment_method=details.get("payment_method") or "card",
        payment_status=details.get("payment_status") or "pending",
    )
    try:
        db.session.add(order)
        db.session.flush()
        for product, quantity, price in priced:
            db.session.add(OrderItem(order_id=order.id, product_id=product.id, quantity=quantity, price=price))
        clear_cart(user_id, commit=False)
        storage.commit("Order could not be recorded")
    except IntegrityError as e:
        # raised by the flush, e.g. a clashing order number
        db.session.rollback()
        log.warning(f"Order for {user_id} rejected by the database: {e.orig}")
        raise ConflictError("Order could not be recorded") from e
    except Exception as e:
        log.error(f"Exception during place_order: {e}")
        db.session.rollback()
        raise

    log.info("Order %s placed by %s: %s items, total %s", order.order_number, user_id, len(priced), totals.total)
    return storage.get_order(order.id)
