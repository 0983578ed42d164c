from flask_login import current_user

import shophub.processor as processors
from shophub.models import storage
from shophub.utils.logging import get_logger

from . import admin_required, bp
from .schemas import CouponIn, CouponOut, dump, load

log = get_logger(__name__)


@bp.route("/coupons/<code>")
def get_coupon(code: str):
    return dump(CouponOut, processors.validate_coupon(code))


@bp.route("/coupons", methods=["POST"])
@admin_required
def create_coupon():
    data = load(CouponIn)
    coupon = storage.create_coupon(data.model_dump())
    log.info("Coupon %s created by %s", coupon.code, current_user.id)
    return dump(CouponOut, coupon, 201)
