"""
Configuration classes, picked by name in ``create_app``.

Values come from the environment (a ``.env`` next to the project is loaded
first). Pricing settings are Decimals; the ``DEFAULT_*`` constants are also
what the checkout code falls back to outside an app context.
"""
import os
from datetime import timedelta
from decimal import Decimal
from pathlib import Path
from typing import Type

from dotenv import load_dotenv
from flask import Flask

PROJECT_DIR = Path(__file__).resolve().parent.parent
load_dotenv(dotenv_path=PROJECT_DIR / ".env")

DEFAULT_LOG_LEVEL = "INFO"
DEFAULT_LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(path)s | user=%(user)s | %(message)s"
DEFAULT_LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"

DEFAULT_FREE_SHIPPING_THRESHOLD = Decimal("50.00")
DEFAULT_FLAT_SHIPPING_RATE = Decimal("9.99")
DEFAULT_TAX_RATE = Decimal("0.08")
DEFAULT_ORDER_TOTAL_TOLERANCE = Decimal("0.01")

MIN_SECRET_LENGTH = 32


def _decimal_env(name: str, default: Decimal) -> Decimal:
    value = os.getenv(name)
    return Decimal(value) if value else default


class Config:
    """Shared settings. Use one of the subclasses."""
    SECRET_KEY = os.getenv("APP_SECRET", "")
    STORE_NAME = os.getenv("STORE_NAME", "ShopHub")

    # The identity provider redirects back cross-site, Strict would drop the cookie
    SESSION_COOKIE_SAMESITE = "Lax"
    SESSION_COOKIE_HTTPONLY = True
    SESSION_COOKIE_SECURE = False
    PERMANENT_SESSION_LIFETIME = timedelta(days=7)
    REMEMBER_COOKIE_DURATION = timedelta(days=14)

    # sqlite paths are relative to the instance folder
    SQLALCHEMY_DATABASE_URI = os.getenv("DATABASE_URL", "sqlite:///shophub.db")
    SQLALCHEMY_ENGINE_OPTIONS = {"pool_pre_ping": True}

    OIDC_ISSUER_URL = os.getenv("OIDC_ISSUER_URL", "")
    OIDC_CLIENT_ID = os.getenv("OIDC_CLIENT_ID", "")
    OIDC_CLIENT_SECRET = os.getenv("OIDC_CLIENT_SECRET", "")
    OIDC_SCOPES = os.getenv("OIDC_SCOPES", "openid email profile")
    OIDC_TIMEOUT = float(os.getenv("OIDC_TIMEOUT", 10))

    FREE_SHIPPING_THRESHOLD = _decimal_env("FREE_SHIPPING_THRESHOLD", DEFAULT_FREE_SHIPPING_THRESHOLD)
    FLAT_SHIPPING_RATE = _decimal_env("FLAT_SHIPPING_RATE", DEFAULT_FLAT_SHIPPING_RATE)
    TAX_RATE = _decimal_env("TAX_RATE", DEFAULT_TAX_RATE)
    ORDER_TOTAL_TOLERANCE = DEFAULT_ORDER_TOTAL_TOLERANCE

    LOG_LEVEL = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL)
    LOG_FORMAT = os.getenv("LOG_FORMAT", DEFAULT_LOG_FORMAT)
    LOG_DATEFMT = DEFAULT_LOG_DATEFMT
    LOG_FILE = os.getenv("LOG_FILE") or None

    HOST = os.getenv("HOST", "127.0.0.1")
    PORT = int(os.getenv("PORT", 5000))

    @staticmethod
    def init_app(app: Flask) -> None:
        pass


class DevelopmentConfig(Config):
    DEBUG = True
    HOST = "0.0.0.0"

    @staticmethod
    def init_app(app: Flask) -> None:
        if not app.secret_key:
            app.secret_key = "shophub-development-only"
            print("\033[93mWARNING: APP_SECRET is not set, using a throwaway development key.\033[0m")
        if not app.config["OIDC_ISSUER_URL"]:
            print("\033[93mWARNING: OIDC_ISSUER_URL is not set, logging in is disabled.\033[0m")


class ProductionConfig(Config):
    SESSION_COOKIE_SECURE = True
    HOST = "0.0.0.0"

    @staticmethod
    def init_app(app: Flask) -> None:
        if len(app.secret_key or "") < MIN_SECRET_LENGTH:
            raise ValueError(f"APP_SECRET must be at least {MIN_SECRET_LENGTH} characters in production.")
        if not (app.config["OIDC_ISSUER_URL"] and app.config["OIDC_CLIENT_ID"]):
            raise ValueError("OIDC_ISSUER_URL and OIDC_CLIENT_ID must be set in production.")


class TestingConfig(Config):
    TESTING = True
    SECRET_KEY = "shophub-testing-secret"
    WTF_CSRF_ENABLED = False
    SQLALCHEMY_DATABASE_URI = "sqlite:///:memory:"
    SQLALCHEMY_ENGINE_OPTIONS: dict = {}
    LOG_FILE = None
    OIDC_ISSUER_URL = "https://id.example.test"
    OIDC_CLIENT_ID = "shophub-test"
    OIDC_CLIENT_SECRET = "shophub-test-secret"
    FREE_SHIPPING_THRESHOLD = DEFAULT_FREE_SHIPPING_THRESHOLD
    FLAT_SHIPPING_RATE = DEFAULT_FLAT_SHIPPING_RATE
    TAX_RATE = DEFAULT_TAX_RATE


config_by_name: dict[str, Type[Config]] = {
    "development": DevelopmentConfig,
    "production": ProductionConfig,
    "testing": TestingConfig,
    "default": DevelopmentConfig,
}
