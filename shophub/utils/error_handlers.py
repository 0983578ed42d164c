"""
Centralized Flask error handlers.
Keeps route modules clean and guarantees consistent JSON/HTML responses.
"""
from flask import Flask, Response, flash, jsonify, redirect, render_template, request
from werkzeug.exceptions import HTTPException

from shophub.utils.exceptions import ShopHubError
from shophub.utils.helpers import wants_json
from shophub.utils.logging import get_logger

log = get_logger(__name__)


def _back() -> str:
    target = request.referrer or "/"
    return target if target.startswith(request.host_url) or target.startswith("/") else "/"


def register_error_handlers(app: Flask) -> None:
    @app.errorhandler(ShopHubError)
    def handle_shophub_error(error: ShopHubError):
        if error.status_code >= 500:
            log.error("%s: %s | payload=%s", type(error).__name__, error.message, error.payload)
        else:
            log.warning("%s: %s | payload=%s", type(error).__name__, error.message, error.payload)
        if wants_json():
            return jsonify(message=error.message, **error.payload), error.status_code
        if error.status_code in (403, 404):
            return render_template(f"errors/{error.status_code}.html", message=error.message), error.status_code
        flash(error.message, "danger")
        return redirect(_back())

    @app.errorhandler(HTTPException)
    def handle_http_error(error: HTTPException):
        if wants_json():
            return jsonify(message=error.description or error.name), error.code
        if error.code in (403, 404):
            return render_template(f"errors/{error.code}.html", message=error.description), error.code
        return error

    @app.errorhandler(Exception)
    def internal_error(error: Exception) -> tuple[Response, int] | tuple[str, int]:
        log.exception("Unhandled exception")
        if wants_json():
            return jsonify(message="Internal server error"), 500
        return render_template("errors/500.html"), 500

    log.info("Error handlers registered")
