from shophub.models import Coupon
from shophub.models import storage
from shophub.utils.exceptions import NotFoundError, ValidationError
from shophub.utils.helpers import as_utc, utcnow
from shophub.utils.logging import get_logger

log = get_logger(__name__)


def validate_coupon(code: str) -> Coupon:
    """Return the coupon for ``code`` if it can be used right now.

    Only a preview: the usage counter is left alone and no discount is applied.
    """
    coupon = storage.get_coupon_by_code(code.strip())
    if coupon is None:
        raise NotFoundError("Coupon not found")

    expires_at = as_utc(coupon.expires_at)
    if expires_at is not None and expires_at < utcnow():
        log.info("Rejected expired coupon %s", coupon.code)
        raise ValidationError("Coupon has expired")

    if coupon.max_uses is not None and coupon.used_count >= coupon.max_uses:
        log.info("Rejected exhausted coupon %s", coupon.code)
        raise ValidationError("Coupon usage limit reached")

    return coupon
