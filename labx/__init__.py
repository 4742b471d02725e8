"""Application factory for the LabX shop."""
from __future__ import annotations

from flask import Flask, redirect, url_for

from .config import Config
from .extensions import db
from .logging_service import log_manager


def create_app(config_class: type[Config] = Config) -> Flask:
    """Create and configure the Flask application."""
    app = Flask(__name__, static_folder="static", template_folder="templates")
    app.config.from_object(config_class)

    db.init_app(app)
    log_manager.init_app(app)

    from .catalog import bp as catalog_bp
    from .cart import bp as cart_bp
    from .logging import bp as logs_bp
    from .catalog.repository import ensure_catalog_defaults

    app.register_blueprint(catalog_bp, url_prefix="/catalog")
    app.register_blueprint(cart_bp, url_prefix="/cart")
    app.register_blueprint(logs_bp, url_prefix="/logs")

    for component in ("Catalog", "Product", "Cart", "Logging"):
        log_manager.register_component(component)

    with app.app_context():
        db.create_all()
        if app.config.get("SEED_CATALOG"):
            ensure_catalog_defaults()

    @app.route("/")
    def index():
        return redirect(url_for("catalog.catalog"))

    @app.context_processor
    def inject_globals() -> dict[str, object]:
        """Inject shared template variables."""
        return {"environment": app.config.get("ENVIRONMENT", "development")}

    return app
