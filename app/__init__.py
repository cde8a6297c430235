import logging
import os
from datetime import timedelta

from flask import Flask, jsonify, request
from marshmallow import ValidationError
from werkzeug.exceptions import HTTPException

from app.config import Config
from app.db import db
from app.exceptions import ServiceError
from app.extensions.extensions import cors, jwt, ma
from app.extensions.file_store import BLOG_MEDIA_FOLDER

API_PREFIX = "/api/v1"

logger = logging.getLogger(__name__)


def _configure_logging(app):
    logging.basicConfig(
        level=app.config["LOG_LEVEL"],
        format="%(asctime)s %(levelname)s %(name)s - %(message)s",
        handlers=[logging.StreamHandler()],
    )
    app.logger.setLevel(app.config["LOG_LEVEL"])


def _register_error_handlers(app):
    @app.errorhandler(ServiceError)
    def handle_service_error(error):
        return jsonify({"error": error.message}), error.status_code

    @app.errorhandler(ValidationError)
    def handle_validation_error(error):
        return jsonify({
            "error": "Validation failed",
            "details": error.messages,
        }), 400

    @app.errorhandler(HTTPException)
    def handle_http_error(error):
        return jsonify({"error": error.description}), error.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(error):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"error": "Internal server error"}), 500


def _register_blueprints(app):
    from app.routes.auth_routes import auth_bp
    from app.routes.blog_routes import blog_bp
    from app.routes.category_routes import category_bp
    from app.routes.feedback_routes import feedback_bp
    from app.routes.main_routes import main_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp, url_prefix=f"{API_PREFIX}/auth")
    app.register_blueprint(category_bp, url_prefix=f"{API_PREFIX}/category")
    app.register_blueprint(blog_bp, url_prefix=f"{API_PREFIX}/blog")
    app.register_blueprint(feedback_bp, url_prefix=f"{API_PREFIX}/feedback")


def create_app(test_config=None):
    app = Flask(__name__)
    app.config.from_object(Config)
    if test_config:
        app.config.update(test_config)

    app.config["JWT_ACCESS_TOKEN_EXPIRES"] = timedelta(
        minutes=app.config["JWT_ACCESS_TOKEN_MINUTES"]
    )
    app.config["JWT_REFRESH_TOKEN_EXPIRES"] = timedelta(
        days=app.config["JWT_REFRESH_TOKEN_DAYS"]
    )

    _configure_logging(app)

    db.init_app(app)
    ma.init_app(app)
    jwt.init_app(app)
    cors.init_app(
        app,
        resources={r"/api/*": {"origins": app.config["CORS_ALLOWED_ORIGINS"]}},
        supports_credentials=True,
    )

    _register_error_handlers(app)
    _register_blueprints(app)

    @app.after_request
    def log_request(response):
        logger.info("%s %s %s", request.method, request.path, response.status_code)
        return response

    os.makedirs(os.path.join(app.config["UPLOAD_ROOT"], BLOG_MEDIA_FOLDER), exist_ok=True)

    with app.app_context():
        from app import models  # noqa: F401
        from app.services import auth_service

        db.create_all()
        auth_service.ensure_super_admin(
            app.config["SUPER_ADMIN_USERNAME"],
            app.config["SUPER_ADMIN_PASSWORD"],
        )

    return app
