import os
from typing import Optional

import click
from flask import Flask, jsonify, redirect, request, url_for

from .config import config_by_name
from .utils.logging import setup_logging
from .utils.extensions import login_manager, identity_provider
from .utils.helpers import format_money, wants_json
from .database import db


def create_app(config_name: Optional[str] = None) -> Flask:
    """
    Application factory.
    Keeps startup side-effects isolated and testable.
    """
    config_name = config_name or os.getenv("FLASK_ENV", "default")
    app = Flask(
        __name__,
        instance_relative_config=True,
        static_folder="static",
        template_folder="templates",
    )

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------
    app.config.from_object(config_by_name[config_name])
    config_by_name[config_name].init_app(app)
    app.config.from_envvar("SHOPHUB_SETTINGS", silent=True)

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------
    setup_logging(app)

    # ------------------------------------------------------------------
    # Extensions
    # ------------------------------------------------------------------
    login_manager.init_app(app)
    login_manager.login_message_category = "warning"

    identity_provider.init_app(app)

    # ------------------------------------------------------------------
    # SQLAlchemy Database
    # ------------------------------------------------------------------
    os.makedirs(app.instance_path, exist_ok=True)
    db.init_app(app)

    from .models import models, set_defaults
    from .database import default_list

    with app.app_context():
        # Create SQLAlchemy tables from models
        db.create_all()

    @login_manager.user_loader
    def load_user(user_id: str) -> models.User | None:
        return db.session.get(models.User, user_id)

    @login_manager.unauthorized_handler
    def unauthorized():
        if wants_json():
            return jsonify(message="Unauthorized"), 401
        return redirect(url_for("api.login", next=request.full_path.rstrip("?")))

    # ------------------------------------------------------------------
    # Blueprints, errors, templates
    # ------------------------------------------------------------------
    from .blueprints import init_blueprints
    init_blueprints(app)
    from .utils.error_handlers import register_error_handlers
    register_error_handlers(app)

    app.add_template_filter(format_money, "money")

    @app.context_processor
    def inject_store() -> dict:
        from flask_login import current_user
        from .processor import cart_quantity

        count = cart_quantity(current_user.id) if current_user.is_authenticated else 0
        return {"store_name": app.config["STORE_NAME"], "cart_count": count}

    # ------------------------------------------------------------------
    # CLI
    # ------------------------------------------------------------------
    @app.cli.command("seed")
    def seed() -> None:
        """Insert the sample catalog, coupons and reviews."""
        created = set_defaults(default_list=default_list)
        click.echo(f"Seeded {created} new rows")

    @app.cli.command("make-admin")
    @click.argument("user_id")
    def make_admin(user_id: str) -> None:
        """Grant admin access to a user who has logged in once."""
        from .models import storage
        from .utils.exceptions import NotFoundError

        try:
            user = storage.set_admin(user_id, True)
        except NotFoundError as e:
            raise click.ClickException(f"{e.message}: {user_id}") from e
        click.echo(f"{user.display_name} is now an admin")

    app.logger.info("ShopHub %s server ready", config_name)
    return app
