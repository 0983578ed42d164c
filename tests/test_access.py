from urllib.parse import parse_qs, urlsplit

import pytest

ADMIN_MUTATIONS = [
    ("post", "/api/categories"),
    ("put", "/api/categories/1"),
    ("delete", "/api/categories/1"),
    ("post", "/api/products"),
    ("put", "/api/products/1"),
    ("delete", "/api/products/1"),
    ("put", "/api/orders/1/status"),
    ("post", "/api/coupons"),
    ("get", "/api/dashboard/stats"),
]


@pytest.mark.parametrize("method, url", ADMIN_MUTATIONS)
@pytest.mark.parametrize("body", [{}, {"name": "ok", "price": "1.00", "sku": "S", "status": "shipped"}, None])
def test_non_admin_is_forbidden_whatever_the_payload(customer_client, method, url, body):
    kwargs = {"json": body} if body is not None else {"data": "not json"}
    response = getattr(customer_client, method)(url, **kwargs)
    assert response.status_code == 403
    assert response.get_json() == {"message": "Admin access required"}


@pytest.mark.parametrize("method, url", ADMIN_MUTATIONS)
def test_anonymous_gets_401(client, data, method, url):
    response = getattr(client, method)(url, json={})
    assert response.status_code == 401
    assert response.get_json() == {"message": "Unauthorized"}


def test_admin_flag_is_read_fresh_on_every_request(app, customer_client, data):
    from shophub.database import db
    from shophub.models import User

    assert customer_client.get("/api/dashboard/stats").status_code == 403
    with app.app_context():
        db.session.get(User, data["customer"]).is_admin = True
        db.session.commit()
    assert customer_client.get("/api/dashboard/stats").status_code == 200


def test_inactive_product_only_visible_to_admins(client, customer_client, admin_client, data):
    url = f"/api/products/{data['retired']}"
    assert client.get(url).status_code == 404
    assert customer_client.get(url).status_code == 404
    response = admin_client.get(url)
    assert response.status_code == 200
    assert response.get_json()["isActive"] is False


def test_html_pages_redirect_to_login(client, data):
    response = client.get("/user/cart")
    assert response.status_code == 302
    location = urlsplit(response.headers["Location"])
    assert location.path == "/api/login"
    assert parse_qs(location.query)["next"] == ["/user/cart"]


def test_admin_pages_forbidden_for_customers(customer_client):
    response = customer_client.get("/admin/")
    assert response.status_code == 403
    assert b"Access denied" in response.data


def test_admin_pages_open_for_admins(admin_client):
    assert admin_client.get("/admin/").status_code == 200


def test_unknown_api_route_is_json(client):
    response = client.get("/api/does-not-exist")
    assert response.status_code == 404
    assert "message" in response.get_json()


def test_unexpected_failure_is_a_generic_500(admin_client, monkeypatch):
    from shophub.models import storage

    def broken():
        raise RuntimeError("connection reset")

    monkeypatch.setattr(storage, "get_dashboard_stats", broken)
    response = admin_client.get("/api/dashboard/stats")
    assert response.status_code == 500
    assert response.get_json() == {"message": "Internal server error"}


def test_unexpected_failure_on_a_page_renders_error_template(admin_client, monkeypatch):
    from shophub.models import storage

    def broken(**kwargs):
        raise RuntimeError("connection reset")

    monkeypatch.setattr(storage, "get_orders", broken)
    response = admin_client.get("/admin/")
    assert response.status_code == 500
    assert b"Something went wrong" in response.data
    assert b"connection reset" not in response.data
