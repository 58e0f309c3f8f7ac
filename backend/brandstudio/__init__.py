from flask import Flask

from .config import config_by_name, validate_config
from .extensions import db, migrate, jwt
from .api import api_bp
from .api.content import register_content_blueprints
from .api.docs import register_docs
from .api.layouts import layouts_bp
from .errors import register_error_handlers, register_jwt_callbacks
from .middleware.cors import setup_cors
from .utils.logging_config import configure_logging


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    validate_config(app)
    configure_logging(app)

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)
    migrate.init_app(app, db)
    jwt.init_app(app)
    register_jwt_callbacks(jwt)

    setup_cors(app)

    # -------------------------------------------------
    # Routes: dashboard, combined layouts, one blueprint per content family
    # -------------------------------------------------
    app.register_blueprint(api_bp)
    app.register_blueprint(layouts_bp)
    register_content_blueprints(app)
    register_docs(app)

    register_error_handlers(app)

    app.logger.info("brandstudio started with %s config", config_name)
    return app
