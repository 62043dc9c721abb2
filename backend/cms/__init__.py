from flask import Flask

from .config import config_by_name
from .errors import register_error_handlers
from .extensions import db


def create_app(config_name: str = "development") -> Flask:
    app = Flask(__name__)
    app.config.from_object(config_by_name[config_name])

    # -------------------------------------------------
    # Logging
    # -------------------------------------------------
    app.logger.setLevel(app.config.get("CMS_LOG_LEVEL", "INFO"))

    # -------------------------------------------------
    # Extensions
    # -------------------------------------------------
    db.init_app(app)

    # -------------------------------------------------
    # Errors and listeners
    # -------------------------------------------------
    register_error_handlers(app)

    from .application.cms.audit import connect_audit_listener
    connect_audit_listener()

    return app
