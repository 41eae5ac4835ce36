import logging

from flask import Flask, jsonify
from .extensions import db, migrate, login_manager, jwt, cors
from .config import Config
from .errors import register_error_handlers
from .log import setup_logging
from .services import Services

from .blueprints.auth.routes import auth_bp
from .blueprints.categories.routes import categories_bp
from .blueprints.expenses.routes import expenses_bp

logger = logging.getLogger(__name__)


def create_app(config_object=Config):
    app = Flask(__name__)
    app.config.from_object(config_object)
    setup_logging(app.config["LOG_LEVEL"])

    # Initialize extensions
    db.init_app(app)
    migrate.init_app(app, db)
    login_manager.init_app(app)
    jwt.init_app(app)
    origins = [o.strip() for o in app.config["CORS_ORIGINS"].split(",") if o.strip()]
    cors.init_app(app, resources={r"/api/*": {"origins": origins}})

    # Bearer-token request loader for login_required
    from . import gate  # noqa: F401

    # Ensure tables exist for a smooth first run
    with app.app_context():
        try:
            db.create_all()
            logger.info("Store ready at %s", db.engine.url.render_as_string(hide_password=True))
        except Exception:
            # Keep serving; requests will fail until the store is reachable
            logger.exception("Store initialization failed")

    Services(db.session, hash_method=app.config["PASSWORD_HASH_METHOD"]).init_app(app)

    # Register blueprints
    app.register_blueprint(auth_bp)
    app.register_blueprint(categories_bp)
    app.register_blueprint(expenses_bp)
    register_error_handlers(app)

    @app.route("/api/health")
    def health():
        return jsonify({"status": "ok"})

    return app
