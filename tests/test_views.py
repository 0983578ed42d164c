from shophub.database import db
from shophub.models import CartItem, Order, Product, User

CHECKOUT_FORM = {
    "shipping_street": "1 Main St",
    "shipping_city": "Springfield",
    "shipping_state": "IL",
    "shipping_zip_code": "62701",
    "shipping_country": "United States",
    "same_as_shipping": "y",
    "card_number": "4242424242424242",
    "expiry_date": "12/30",
    "cvv": "123",
    "cardholder_name": "Ann Buyer",
}


def test_storefront_pages(client, data):
    home = client.get("/")
    assert home.status_code == 200
    assert b"USB Cable" in home.data
    assert b"Retired Gadget" not in home.data

    searched = client.get("/?q=novel")
    assert b"Big Novel" in searched.data
    assert b"Laptop Sticker" not in searched.data

    category = client.get("/category/books")
    assert category.status_code == 200
    assert b"Big Novel" in category.data
    assert b"USB Cable" not in category.data

    product = client.get("/product/usb-cable")
    assert product.status_code == 200
    assert b"$10.00" in product.data


def test_unknown_pages_are_404(client, data):
    assert client.get("/category/nothing").status_code == 404
    response = client.get("/product/retired-gadget")
    assert response.status_code == 404
    assert b"Page not found" in response.data


def test_add_to_cart_form(customer_client, app, data):
    response = customer_client.post("/user/cart/add", data={"product_id": data["cable"], "quantity": "2"})
    assert response.status_code == 302
    with app.app_context():
        item = CartItem.query.filter_by(user_id=data["customer"]).one()
        assert item.quantity == 2

    cart = customer_client.get("/user/cart")
    assert cart.status_code == 200
    assert b"USB Cable" in cart.data
    assert b"$20.00" in cart.data


def test_cart_quantity_cannot_exceed_stock(customer_client, app, data):
    customer_client.post("/user/cart/add", data={"product_id": data["novel"], "quantity": "1"})
    with app.app_context():
        item_id = CartItem.query.filter_by(user_id=data["customer"]).one().id
    customer_client.post(f"/user/cart/{item_id}/update", data={f"item-{item_id}-quantity": "50"})
    with app.app_context():
        assert db.session.get(CartItem, item_id).quantity == 1


def test_checkout_places_order(customer_client, app, data):
    customer_client.post("/user/cart/add", data={"product_id": data["cable"], "quantity": "1"})
    assert customer_client.get("/user/checkout").status_code == 200

    response = customer_client.post("/user/checkout", data=CHECKOUT_FORM)
    assert response.status_code == 302
    with app.app_context():
        order = Order.query.filter_by(user_id=data["customer"]).one()
        assert response.headers["Location"].endswith(f"/user/orders/{order.id}")
        assert order.shipping_address["zipCode"] == "62701"
        assert order.billing_address == order.shipping_address
        assert CartItem.query.filter_by(user_id=data["customer"]).count() == 0

    page = customer_client.get(response.headers["Location"])
    assert page.status_code == 200
    assert b"USB Cable" in page.data


def test_checkout_rejects_short_card_number(customer_client, app, data):
    customer_client.post("/user/cart/add", data={"product_id": data["cable"], "quantity": "1"})
    response = customer_client.post("/user/checkout", data=dict(CHECKOUT_FORM, card_number="4242"))
    assert response.status_code == 200
    assert b"Card number must be at least 16 digits" in response.data
    with app.app_context():
        assert Order.query.count() == 0


def test_checkout_needs_billing_when_different(customer_client, app, data):
    customer_client.post("/user/cart/add", data={"product_id": data["cable"], "quantity": "1"})
    form = dict(CHECKOUT_FORM)
    del form["same_as_shipping"]
    response = customer_client.post("/user/checkout", data=form)
    assert response.status_code == 200
    with app.app_context():
        assert Order.query.count() == 0


def test_empty_cart_checkout_redirects(customer_client, data):
    response = customer_client.get("/user/checkout")
    assert response.status_code == 302
    assert response.headers["Location"].endswith("/user/cart")


def test_order_page_is_private(other_client, admin_client, data, order_for):
    order_id = order_for(data["customer"], data["cable"])
    assert other_client.get(f"/user/orders/{order_id}").status_code == 403
    assert admin_client.get(f"/user/orders/{order_id}").status_code == 200


def test_favorites_form(customer_client, data):
    customer_client.post("/user/favorites/add", data={"product_id": data["novel"]})
    page = customer_client.get("/user/favorites")
    assert b"Big Novel" in page.data


# ----------------------------------------------------------------------
# Admin console
# ----------------------------------------------------------------------
def test_admin_creates_product_from_form(admin_client, app, data):
    response = admin_client.post(
        "/admin/products/new",
        data={
            "name": "Desk Lamp",
            "price": "15.00",
            "sku": "LAMP-1",
            "category_id": str(data["electronics"]),
            "stock": "4",
            "images": "https://img.example.test/lamp.jpg\n\n",
            "tags": "home, light",
            "is_active": "y",
        },
    )
    assert response.status_code == 302
    with app.app_context():
        lamp = Product.query.filter_by(sku="LAMP-1").one()
        assert lamp.slug == "desk-lamp"
        assert lamp.images == ["https://img.example.test/lamp.jpg"]
        assert lamp.tags == ["home", "light"]
        assert lamp.is_featured is False


def test_admin_lists_inactive_products(admin_client, data):
    page = admin_client.get("/admin/products")
    assert page.status_code == 200
    assert b"Retired Gadget" in page.data


def test_admin_grants_and_revokes_role(admin_client, app, data):
    admin_client.post(f"/admin/set-user/{data['customer']}/ADD")
    with app.app_context():
        assert db.session.get(User, data["customer"]).is_admin is True

    admin_client.post(f"/admin/set-user/{data['customer']}/REMOVE")
    with app.app_context():
        assert db.session.get(User, data["customer"]).is_admin is False


def test_admin_cannot_demote_self(admin_client, app, data):
    admin_client.post(f"/admin/set-user/{data['admin']}/REMOVE")
    with app.app_context():
        assert db.session.get(User, data["admin"]).is_admin is True
