from functools import wraps
from typing import Any, Callable

from flask import Blueprint
from flask_login import current_user, login_required

from shophub.blueprints import register_blueprint
from shophub.utils.exceptions import AuthorizationError
from shophub.utils.logging import get_logger

log = get_logger(__name__)

bp = Blueprint("api", __name__)


def admin_required(f: Callable[..., Any]) -> Callable[..., Any]:
    """Reject non-admins before the request body is looked at."""
    @wraps(f)
    @login_required
    def decorated_view(*args: Any, **kwargs: Any) -> Any:
        if not current_user.is_admin:
            log.warning("Non-admin %s tried %s", current_user.id, f.__name__)
            raise AuthorizationError("Admin access required")
        return f(*args, **kwargs)
    return decorated_view


from . import auth, cart, catalog, coupons, dashboard, orders  # noqa: E402,F401

register_blueprint(bp, url_prefix="/api")
