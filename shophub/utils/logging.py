"""
Logging setup for the shop.

``setup_logging(app)`` runs once per process; later apps (tests create one per
case) only get the already built handlers copied onto their own logger.
Every record is tagged with the request path and the logged-in user so order
and admin actions can be traced from the log alone.
"""
import logging
import logging.handlers
import os
from typing import List, Optional

from flask import Flask, current_app, has_app_context, has_request_context, request, session

from shophub.config import DEFAULT_LOG_DATEFMT, DEFAULT_LOG_FORMAT, DEFAULT_LOG_LEVEL

ROOT_LOGGER = "shophub"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024
LOG_FILE_BACKUPS = 7

_handlers: List[logging.Handler] = []


class UTF8Filter(logging.Filter):
    """Decode byte messages, identity provider claims sometimes arrive raw."""
    def filter(self, record: logging.LogRecord) -> bool:
        if isinstance(record.msg, bytes):
            record.msg = record.msg.decode("utf-8", errors="replace")
        return True


class RequestFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.path = "-"
        record.user = "-"
        if has_request_context():
            record.path = f"{request.method} {request.path}"
            record.user = session.get("_user_id") or "-"
        return True


def _level(app: Flask) -> int:
    if app.debug:
        return logging.DEBUG
    name = str(app.config.get("LOG_LEVEL") or DEFAULT_LOG_LEVEL).upper()
    return getattr(logging, name, logging.INFO)


def _build_handlers(app: Flask) -> List[logging.Handler]:
    formatter = logging.Formatter(
        app.config.get("LOG_FORMAT", DEFAULT_LOG_FORMAT),
        datefmt=app.config.get("LOG_DATEFMT", DEFAULT_LOG_DATEFMT),
    )
    handlers: List[logging.Handler] = [logging.StreamHandler()]

    log_file = app.config.get("LOG_FILE")
    if log_file:
        try:
            os.makedirs(os.path.dirname(log_file) or ".", exist_ok=True)
            handlers.append(logging.handlers.RotatingFileHandler(
                log_file,
                maxBytes=LOG_FILE_MAX_BYTES,
                backupCount=LOG_FILE_BACKUPS,
                encoding="utf-8",
            ))
        except OSError as exc:
            app.logger.warning(f"File logging disabled, cannot open {log_file}: {exc}")

    for handler in handlers:
        handler.setFormatter(formatter)
        handler.addFilter(UTF8Filter())
        handler.addFilter(RequestFilter())
    return handlers


def setup_logging(app: Flask) -> None:
    level = _level(app)
    if not _handlers:
        _handlers.extend(_build_handlers(app))

    for logger in (logging.getLogger(ROOT_LOGGER), app.logger):
        logger.handlers = _handlers[:]
        logger.setLevel(level)
        logger.propagate = False

    app.logger.info(f"Logging ready at {logging.getLevelName(level)}")


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """
    ``log = get_logger(__name__)`` at module level.

    Module loggers live under the ``shophub`` logger, so they share its
    handlers whether or not an app is running.
    """
    if not name or name == "__main__":
        if has_app_context():
            return current_app.logger
        return logging.getLogger(ROOT_LOGGER)
    if name == ROOT_LOGGER or name.startswith(ROOT_LOGGER + "."):
        return logging.getLogger(name)
    return logging.getLogger(ROOT_LOGGER).getChild(name)
