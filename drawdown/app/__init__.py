"""Application factory and app-wide configuration."""

import logging
from typing import Any, Mapping, Optional

from flask import Flask
from flask_cors import CORS

from drawdown.app.api.routes import api_bp
from drawdown.config import DEFAULT_SETTINGS


def create_app(overrides: Optional[Mapping[str, Any]] = None) -> Flask:
    """Build the Flask app instance.

    Settings come from DEFAULT_SETTINGS, then DRAWDOWN_* environment
    variables, then ``overrides``.
    """
    app = Flask(__name__)
    app.config.from_mapping(DEFAULT_SETTINGS)
    app.config.from_prefixed_env("DRAWDOWN")
    if overrides:
        app.config.from_mapping(overrides)

    level = app.config["LOG_LEVEL"]
    app.logger.setLevel(level)
    logging.getLogger("drawdown").setLevel(level)

    CORS(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ORIGINS"]}},
        supports_credentials=True,
    )

    app.register_blueprint(api_bp, url_prefix="/api")
    return app
