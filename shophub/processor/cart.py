from typing import Any, List

from sqlalchemy.dialects.mysql import insert as mysql_insert
from sqlalchemy.dialects.postgresql import insert as pg_insert
from sqlalchemy.dialects.sqlite import insert as sqlite_insert

from shophub.database import Backend, db, get_backend
from shophub.models import CartItem
from shophub.models import storage
from shophub.utils.exceptions import ValidationError
from shophub.utils.helpers import utcnow
from shophub.utils.logging import get_logger

log = get_logger(__name__)


def _check_quantity(quantity: Any) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity < 1:
        raise ValidationError("Quantity must be a whole number of at least 1")
    return quantity


def _merge_statement(user_id: str, product_id: int, quantity: int) -> Any:
    """INSERT of one cart row that adds to the quantity when the row exists."""
    values = {
        "user_id": user_id,
        "product_id": product_id,
        "quantity": quantity,
        "created_at": utcnow(),
    }
    table = CartItem.__table__
    backend = get_backend()
    if backend == Backend.MYSQL:
        stmt = mysql_insert(table).values(**values)
        return stmt.on_duplicate_key_update(quantity=table.c.quantity + stmt.inserted.quantity)
    insert = pg_insert if backend == Backend.POSTGRESQL else sqlite_insert
    stmt = insert(table).values(**values)
    return stmt.on_conflict_do_update(
        index_elements=[table.c.user_id, table.c.product_id],
        set_={"quantity": table.c.quantity + stmt.excluded.quantity},
    )


def add_to_cart(user_id: str, product_id: int, quantity: int = 1) -> CartItem:
    """Put ``quantity`` of a product in the cart, merging with an existing row."""
    quantity = _check_quantity(quantity)
    storage.get_product(product_id)
    try:
        db.session.execute(_merge_statement(user_id, product_id, quantity))
        db.session.commit()
    except Exception as e:
        log.error(f"Exception during add_to_cart: {e}")
        db.session.rollback()
        raise
    item = db.session.execute(
        db.select(CartItem)
        .filter_by(user_id=user_id, product_id=product_id)
        .execution_options(populate_existing=True)
    ).scalar_one()
    log.info("Cart of %s: product %s now x%s", user_id, product_id, item.quantity)
    return item


def update_cart_item(user_id: str, item_id: int, quantity: Any) -> CartItem:
    quantity = _check_quantity(quantity)
    item = storage.get_cart_item(user_id, item_id)
    item.quantity = quantity
    db.session.commit()
    return item


def remove_from_cart(user_id: str, item_id: int) -> None:
    item = storage.get_cart_item(user_id, item_id)
    db.session.delete(item)
    db.session.commit()


def clear_cart(user_id: str, commit: bool = True) -> int:
    """Delete every cart row of the user; returns how many went away."""
    deleted = db.session.execute(db.delete(CartItem).where(CartItem.user_id == user_id)).rowcount
    if commit:
        db.session.commit()
    return deleted


def cart_quantity(user_id: str) -> int:
    items: List[CartItem] = storage.get_cart(user_id)
    return sum(item.quantity for item in items)
