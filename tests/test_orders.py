from decimal import Decimal

import pytest

from shophub.database import db
from shophub.models import CartItem, Order, OrderItem, Product
from shophub.processor import add_to_cart, checkout, place_order
from shophub.utils.exceptions import ValidationError

ADDRESS = {"street": "1 Main St", "city": "Springfield", "state": "IL", "zipCode": "62701", "country": "US"}


def order_body(items=None, **order):
    body = {"order": {"shippingAddress": ADDRESS, **order}}
    if items is not None:
        body["items"] = items
    return body


def test_order_is_written_with_captured_prices_and_cart_emptied(customer_client, app, data):
    customer_client.post("/api/cart", json={"productId": data["novel"], "quantity": 1})

    response = customer_client.post(
        "/api/orders",
        json=order_body(
            items=[{"productId": data["novel"], "quantity": 1, "price": "100.00"}],
            totalAmount="108.00",
        ),
    )
    assert response.status_code == 201
    order = response.get_json()
    assert order["orderNumber"].startswith("ORD-")
    assert order["totalAmount"] == "108.00"
    assert order["status"] == "pending"
    assert order["paymentStatus"] == "pending"
    assert order["shippingAddress"] == ADDRESS
    assert order["billingAddress"] == ADDRESS
    assert len(order["items"]) == 1
    assert order["items"][0]["productId"] == data["novel"]
    assert order["items"][0]["price"] == "100.00"

    with app.app_context():
        assert Order.query.count() == 1
        assert OrderItem.query.count() == 1
        assert CartItem.query.filter_by(user_id=data["customer"]).count() == 0

    assert customer_client.get("/api/cart").get_json() == []


def test_order_built_from_cart_when_no_items_sent(customer_client, data):
    customer_client.post("/api/cart", json={"productId": data["cable"], "quantity": 2})
    customer_client.post("/api/cart", json={"productId": data["sticker"], "quantity": 1})

    response = customer_client.post("/api/orders", json=order_body())
    assert response.status_code == 201
    order = response.get_json()
    # 25.00 + 9.99 shipping + 2.00 tax
    assert order["totalAmount"] == "36.99"
    assert sorted((i["productId"], i["quantity"]) for i in order["items"]) == sorted(
        [(data["cable"], 2), (data["sticker"], 1)]
    )


def test_captured_price_survives_price_change(customer_client, admin_client, data):
    customer_client.post("/api/cart", json={"productId": data["cable"], "quantity": 1})
    order = customer_client.post("/api/orders", json=order_body()).get_json()

    admin_client.put(f"/api/products/{data['cable']}", json={"price": "15.00"})
    again = customer_client.get(f"/api/orders/{order['id']}").get_json()
    assert again["items"][0]["price"] == "10.00"


def test_total_mismatch_is_rejected(customer_client, app, data):
    customer_client.post("/api/cart", json={"productId": data["novel"], "quantity": 1})
    response = customer_client.post("/api/orders", json=order_body(totalAmount="1.00"))
    assert response.status_code == 400
    body = response.get_json()
    assert body["message"] == "Order total does not match current prices"
    assert body["expected"] == "108.00"

    with app.app_context():
        assert Order.query.count() == 0
        assert CartItem.query.count() == 1


def test_total_within_a_cent_is_accepted(customer_client, data):
    customer_client.post("/api/cart", json={"productId": data["novel"], "quantity": 1})
    response = customer_client.post("/api/orders", json=order_body(totalAmount="108.01"))
    assert response.status_code == 201
    assert response.get_json()["totalAmount"] == "108.00"


def test_float_total_computed_by_client_is_accepted(customer_client, app, data):
    with app.app_context():
        db.session.get(Product, data["cable"]).price = Decimal("19.99")
        db.session.commit()

    price = 19.99
    total = price + 9.99 + price * 0.08  # 31.5792 with float noise
    response = customer_client.post(
        "/api/orders",
        json=order_body(items=[{"productId": data["cable"], "quantity": 1, "price": price}], totalAmount=total),
    )
    assert response.status_code == 201
    assert response.get_json()["totalAmount"] == "31.58"


def test_clashing_order_number_is_a_conflict(customer_client, app, data, monkeypatch):
    monkeypatch.setattr(checkout, "generate_order_number", lambda: "ORD-1700000000000-abcdefghi")
    first = customer_client.post("/api/orders", json=order_body(items=[{"productId": data["cable"], "quantity": 1}]))
    assert first.status_code == 201

    customer_client.post("/api/cart", json={"productId": data["sticker"], "quantity": 2})
    second = customer_client.post("/api/orders", json=order_body())
    assert second.status_code == 409

    with app.app_context():
        assert Order.query.count() == 1
        assert OrderItem.query.count() == 1
        assert CartItem.query.filter_by(user_id=data["customer"]).count() == 1


def test_stale_item_price_is_rejected(customer_client, data):
    response = customer_client.post(
        "/api/orders",
        json=order_body(items=[{"productId": data["cable"], "quantity": 1, "price": "8.00"}]),
    )
    assert response.status_code == 400
    assert response.get_json()["price"] == "10.00"


def test_empty_order_is_rejected(customer_client, data):
    response = customer_client.post("/api/orders", json=order_body())
    assert response.status_code == 400
    assert response.get_json()["message"] == "Order must contain at least one item"


def test_inactive_product_cannot_be_ordered(customer_client, data):
    response = customer_client.post(
        "/api/orders", json=order_body(items=[{"productId": data["retired"], "quantity": 1}])
    )
    assert response.status_code == 400


def test_missing_address_is_a_validation_error(customer_client, data):
    response = customer_client.post(
        "/api/orders", json={"order": {}, "items": [{"productId": data["cable"], "quantity": 1}]}
    )
    assert response.status_code == 400
    locs = [error["loc"] for error in response.get_json()["errors"]]
    assert ["order", "shippingAddress"] in locs


def test_failed_write_rolls_everything_back(app, data, monkeypatch):
    def broken_clear(user_id, commit=True):
        raise RuntimeError("disk full")

    monkeypatch.setattr(checkout, "clear_cart", broken_clear)
    with app.app_context():
        add_to_cart(data["customer"], data["cable"], 1)
        with pytest.raises(RuntimeError):
            place_order(data["customer"], {"shipping_address": ADDRESS})

    with app.app_context():
        assert Order.query.count() == 0
        assert OrderItem.query.count() == 0
        assert CartItem.query.count() == 1


def test_place_order_direct(app, data):
    with app.app_context():
        order = place_order(
            data["customer"],
            {"shipping_address": ADDRESS, "payment_status": "completed"},
            [{"product_id": data["novel"], "quantity": 1}],
        )
        assert order.total_amount == Decimal("108.00")
        assert order.payment_status == "completed"
        assert order.items[0].price == Decimal("100.00")
        assert db.session.get(Product, data["novel"]).stock == 5

        with pytest.raises(ValidationError):
            place_order(data["customer"], {"shipping_address": ADDRESS}, [])


def _order_for(client, product_id):
    client.post("/api/cart", json={"productId": product_id, "quantity": 1})
    return client.post("/api/orders", json=order_body()).get_json()


def test_admin_sees_all_orders_customers_only_their_own(customer_client, other_client, admin_client, data):
    mine = _order_for(customer_client, data["cable"])
    theirs = _order_for(other_client, data["sticker"])

    assert [o["id"] for o in customer_client.get("/api/orders").get_json()] == [mine["id"]]
    assert [o["id"] for o in other_client.get("/api/orders").get_json()] == [theirs["id"]]
    assert {o["id"] for o in admin_client.get("/api/orders").get_json()} == {mine["id"], theirs["id"]}


def test_single_order_access(customer_client, other_client, admin_client, data):
    order = _order_for(customer_client, data["cable"])
    assert customer_client.get(f"/api/orders/{order['id']}").status_code == 200
    assert other_client.get(f"/api/orders/{order['id']}").status_code == 403
    assert admin_client.get(f"/api/orders/{order['id']}").status_code == 200
    assert admin_client.get("/api/orders/9999").status_code == 404


def test_status_update(customer_client, admin_client, data):
    order = _order_for(customer_client, data["cable"])
    url = f"/api/orders/{order['id']}/status"

    assert customer_client.put(url, json={"status": "shipped"}).status_code == 403

    response = admin_client.put(url, json={"status": "shipped"})
    assert response.status_code == 200
    assert response.get_json()["status"] == "shipped"

    assert admin_client.put(url, json={"status": "lost"}).status_code == 400
    assert admin_client.put("/api/orders/9999/status", json={"status": "shipped"}).status_code == 404
