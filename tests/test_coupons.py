from datetime import timedelta

import pytest

from shophub.database import db
from shophub.models import Coupon
from shophub.processor import validate_coupon
from shophub.utils.exceptions import NotFoundError, ValidationError
from shophub.utils.helpers import utcnow


def test_valid_coupon_lookup_is_case_insensitive(client, make_coupon):
    make_coupon(code="WELCOME10", expires_at=utcnow() + timedelta(days=5), max_uses=10, used_count=3)
    response = client.get("/api/coupons/welcome10")
    assert response.status_code == 200
    body = response.get_json()
    assert body["code"] == "WELCOME10"
    assert body["discountType"] == "percentage"
    assert body["discountValue"] == "10.00"
    assert body["usedCount"] == 3


def test_expired_coupon_fails_even_when_active_and_under_limit(client, make_coupon):
    make_coupon(code="OLD", expires_at=utcnow() - timedelta(days=1), max_uses=10, used_count=0, is_active=True)
    response = client.get("/api/coupons/OLD")
    assert response.status_code == 400
    assert response.get_json()["message"] == "Coupon has expired"


def test_usage_limit_reached(client, make_coupon):
    make_coupon(code="FIVE", max_uses=5, used_count=5)
    response = client.get("/api/coupons/FIVE")
    assert response.status_code == 400
    assert response.get_json()["message"] == "Coupon usage limit reached"


def test_unlimited_coupon(app, make_coupon):
    make_coupon(code="FREESHIP", discount_type="shipping", max_uses=None, used_count=1000)
    with app.app_context():
        assert validate_coupon("freeship").code == "FREESHIP"


@pytest.mark.parametrize("code, kwargs", [("NOPE", None), ("HIDDEN", {"is_active": False})])
def test_missing_or_inactive_coupon(client, make_coupon, code, kwargs):
    if kwargs is not None:
        make_coupon(code=code, **kwargs)
    response = client.get(f"/api/coupons/{code}")
    assert response.status_code == 404
    assert response.get_json()["message"] == "Coupon not found"


def test_validation_does_not_consume_the_coupon(app, client, make_coupon):
    coupon_id = make_coupon(code="ONCE", max_uses=1, used_count=0)
    assert client.get("/api/coupons/ONCE").status_code == 200
    assert client.get("/api/coupons/ONCE").status_code == 200
    with app.app_context():
        assert db.session.get(Coupon, coupon_id).used_count == 0


def test_processor_errors(app, make_coupon):
    make_coupon(code="GONE", expires_at=utcnow() - timedelta(minutes=1))
    with app.app_context():
        with pytest.raises(ValidationError):
            validate_coupon("GONE")
        with pytest.raises(NotFoundError):
            validate_coupon("UNKNOWN")


def test_admin_creates_upper_cased_coupon(admin_client, app, data):
    response = admin_client.post(
        "/api/coupons",
        json={"code": "spring5", "discountType": "fixed", "discountValue": "5.00", "maxUses": 20},
    )
    assert response.status_code == 201
    body = response.get_json()
    assert body["code"] == "SPRING5"
    assert body["usedCount"] == 0
    assert body["minOrderAmount"] == "0.00"

    duplicate = admin_client.post(
        "/api/coupons", json={"code": "SPRING5", "discountType": "fixed", "discountValue": "1.00"}
    )
    assert duplicate.status_code == 409


@pytest.mark.parametrize(
    "payload",
    [
        {"code": "X", "discountType": "bogus", "discountValue": "5.00"},
        {"code": "X", "discountType": "fixed", "discountValue": "-1"},
        {"code": "X", "discountType": "fixed", "discountValue": "1", "maxUses": 0},
    ],
)
def test_coupon_payload_validation(admin_client, payload):
    assert admin_client.post("/api/coupons", json=payload).status_code == 400


def test_customer_cannot_create_coupon(customer_client):
    response = customer_client.post("/api/coupons", json={"code": "FREE100"})
    assert response.status_code == 403
    assert response.get_json()["message"] == "Admin access required"
