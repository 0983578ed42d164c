"""
Blueprint registry.

Each blueprint package calls ``register_blueprint`` when imported; the app
factory then calls ``init_blueprints`` once. The JSON API lives under
``/api``, the storefront at the root, customer pages under ``/user`` and the
admin console under ``/admin``.
"""
from typing import List, Optional, Tuple

from flask import Blueprint, Flask

from shophub.utils.logging import get_logger

log = get_logger(__name__)

BLUEPRINTS: List[Tuple[Blueprint, Optional[str]]] = []


def register_blueprint(bp: Blueprint, *, url_prefix: Optional[str] = None) -> None:
    if any(known.name == bp.name for known, _ in BLUEPRINTS):
        raise ValueError(f"Blueprint {bp.name!r} registered twice")
    BLUEPRINTS.append((bp, url_prefix))


def init_blueprints(app: Flask) -> None:
    for bp, prefix in BLUEPRINTS:
        app.register_blueprint(bp, url_prefix=prefix)
        log.debug("Blueprint %s mounted at %s", bp.name, prefix or "/")
    log.info("Mounted blueprints: %s", ", ".join(bp.name for bp, _ in BLUEPRINTS))


from .api import bp as api_bp  # noqa: E402
from .main import bp as main_bp  # noqa: E402
from .user import bp as user_bp  # noqa: E402
from .admin import bp as admin_bp  # noqa: E402
