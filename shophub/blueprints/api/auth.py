import secrets
from urllib.parse import urlparse

from flask import Response, abort, redirect, request, session, url_for
from flask_login import current_user, login_required, login_user, logout_user

from shophub.models import storage
from shophub.utils.exceptions import AuthenticationError, IdentityProviderError
from shophub.utils.extensions import identity_provider
from shophub.utils.logging import get_logger

from . import bp
from .schemas import UserOut, dump

log = get_logger(__name__)

STATE_KEY = "oidc_state"
NEXT_KEY = "oidc_next"


def _safe_next(target: str | None) -> str:
    """Only relative, same-site redirects are honoured after login."""
    if not target:
        return "/"
    parsed = urlparse(target)
    if parsed.scheme or parsed.netloc or not target.startswith("/") or target.startswith("//"):
        return "/"
    return target


@bp.route("/login")
def login() -> Response:
    if current_user.is_authenticated:
        return redirect(_safe_next(request.args.get("next")))
    if not identity_provider.configured:
        log.error("Login attempted but no identity provider is configured")
        abort(503)
    state = secrets.token_urlsafe(24)
    session[STATE_KEY] = state
    session[NEXT_KEY] = _safe_next(request.args.get("next"))
    redirect_uri = url_for("api.callback", _external=True)
    return redirect(identity_provider.authorization_url(redirect_uri, state))


@bp.route("/callback")
def callback() -> Response:
    expected = session.pop(STATE_KEY, None)
    target = session.pop(NEXT_KEY, "/")
    if request.args.get("error"):
        log.warning("Identity provider returned error: %s", request.args.get("error"))
        raise AuthenticationError("Login was cancelled or refused")
    if not expected or not secrets.compare_digest(expected, request.args.get("state", "")):
        log.warning("Login callback with mismatched state")
        raise AuthenticationError("Login session expired, please try again")
    code = request.args.get("code")
    if not code:
        raise AuthenticationError("Missing authorization code")

    claims = identity_provider.fetch_claims(code, url_for("api.callback", _external=True))
    user = storage.upsert_user(claims)
    login_user(user)
    session.permanent = True
    log.info("User %s logged in", user.id)
    return redirect(_safe_next(target))


@bp.route("/logout")
def logout() -> Response:
    if current_user.is_authenticated:
        log.info("User %s logged out", current_user.id)
    logout_user()
    home = url_for("main.index", _external=True)
    if identity_provider.configured:
        try:
            end_session = identity_provider.logout_url(home)
        except IdentityProviderError:
            log.warning("Skipping provider logout, discovery failed")
            end_session = None
        if end_session:
            return redirect(end_session)
    return redirect(home)


@bp.route("/auth/user")
@login_required
def auth_user():
    return dump(UserOut, current_user)
