from datetime import timedelta
from decimal import Decimal

import pytest
from flask_login import FlaskLoginClient

from shophub import create_app
from shophub.database import db
from shophub.models import Category, Coupon, Product, User
from shophub.utils.extensions import identity_provider
from shophub.utils.helpers import utcnow

DISCOVERY = {
    "issuer": "https://id.example.test",
    "authorization_endpoint": "https://id.example.test/authorize",
    "token_endpoint": "https://id.example.test/token",
    "userinfo_endpoint": "https://id.example.test/userinfo",
    "end_session_endpoint": "https://id.example.test/logout",
}


@pytest.fixture
def app():
    app = create_app("testing")
    app.test_client_class = FlaskLoginClient
    identity_provider._metadata = dict(DISCOVERY)
    yield app
    with app.app_context():
        db.session.remove()
        db.drop_all()
        db.engine.dispose()


@pytest.fixture
def data(app):
    """A small catalog and three users; returns the ids tests need."""
    with app.app_context():
        customer = User(id="user-1", email="ann@example.com", first_name="Ann", last_name="Buyer")
        other = User(id="user-2", email="bob@example.com", first_name="Bob", last_name="Other")
        admin = User(id="admin-1", email="root@example.com", first_name="Ada", last_name="Admin", is_admin=True)
        electronics = Category(name="Electronics", slug="electronics")
        books = Category(name="Books", slug="books")
        db.session.add_all([customer, other, admin, electronics, books])
        db.session.flush()

        now = utcnow()
        cable = Product(
            name="USB Cable", slug="usb-cable", sku="CABLE-1", price=Decimal("10.00"),
            original_price=Decimal("12.00"), stock=10, category_id=electronics.id,
            images=["https://img.example.test/cable.jpg"], tags=["usb"], created_at=now - timedelta(days=3),
        )
        sticker = Product(
            name="Laptop Sticker", slug="laptop-sticker", sku="STICKER-1", price=Decimal("5.00"),
            stock=100, category_id=electronics.id, created_at=now - timedelta(days=2),
        )
        novel = Product(
            name="Big Novel", slug="big-novel", sku="NOVEL-1", price=Decimal("100.00"),
            stock=5, category_id=books.id, is_featured=True, created_at=now - timedelta(days=1),
        )
        retired = Product(
            name="Retired Gadget", slug="retired-gadget", sku="OLD-1", price=Decimal("20.00"),
            stock=0, category_id=electronics.id, is_active=False, created_at=now,
        )
        db.session.add_all([cable, sticker, novel, retired])
        db.session.commit()

        return {
            "customer": customer.id,
            "other": other.id,
            "admin": admin.id,
            "electronics": electronics.id,
            "books": books.id,
            "cable": cable.id,
            "sticker": sticker.id,
            "novel": novel.id,
            "retired": retired.id,
        }


def login(app, user_id):
    with app.app_context():
        user = db.session.get(User, user_id)
        return app.test_client(user=user)


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def customer_client(app, data):
    return login(app, data["customer"])


@pytest.fixture
def other_client(app, data):
    return login(app, data["other"])


@pytest.fixture
def admin_client(app, data):
    return login(app, data["admin"])


@pytest.fixture
def make_coupon(app):
    def _make(**kwargs):
        values = {
            "code": "TEST10",
            "discount_type": "percentage",
            "discount_value": Decimal("10.00"),
            "min_order_amount": Decimal("0.00"),
        }
        values.update(kwargs)
        with app.app_context():
            coupon = Coupon(**values)
            db.session.add(coupon)
            db.session.commit()
            return coupon.id
    return _make


@pytest.fixture
def order_for(app):
    """Place a one-line order directly through the checkout processor."""
    from shophub.processor import place_order

    def _order(user_id, product_id, quantity=1, **details):
        details.setdefault("shipping_address", {"street": "1 Main St", "city": "Springfield", "state": "IL", "zipCode": "62701", "country": "US"})
        with app.app_context():
            order = place_order(user_id, details, [{"product_id": product_id, "quantity": quantity}])
            return order.id
    return _order
