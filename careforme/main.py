"""Flask application factory."""
from typing import Optional

from flask import Flask, jsonify, request
from flask_cors import CORS

from careforme.api.deps import EXTENSION_KEY, AppServices
from careforme.api.routes import auth, dashboard, doctors, reports, settings
from careforme.core.config import Config, get_config
from careforme.core.exceptions import CareForMeException
from careforme.core.logging import get_logger, log_request, setup_logging
from careforme.services.auth_service import AuthService

logger = get_logger(__name__)

SERVICE_NAME = "careforme-admin"
VERSION = "1.0.0"


def create_app(
    config: Optional[Config] = None,
    doctor_store=None,
    settings_store=None,
    auth_service: Optional[AuthService] = None
) -> Flask:
    """Create and configure the Flask application.

    Collaborators that are not passed in are built from Firebase on first
    use.
    """
    app = Flask(__name__)

    config = config or get_config()

    setup_logging(config)

    app.config["DEBUG"] = config.debug
    app.config["TESTING"] = config.testing

    CORS(app,
         origins=config.cors_origins,
         allow_headers=["Content-Type", "Authorization"],
         allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
         expose_headers=["Content-Disposition"],
         supports_credentials=True)

    app.extensions[EXTENSION_KEY] = AppServices(
        config,
        doctor_store=doctor_store,
        settings_store=settings_store,
        auth_service=auth_service
    )

    register_error_handlers(app)

    app.register_blueprint(auth.bp, url_prefix="/api")
    app.register_blueprint(doctors.bp, url_prefix="/api")
    app.register_blueprint(dashboard.bp, url_prefix="/api")
    app.register_blueprint(reports.bp, url_prefix="/api")
    app.register_blueprint(settings.bp, url_prefix="/api")

    @app.route("/health", methods=["GET"])
    def health_check():
        """Health check endpoint."""
        return jsonify({
            "status": "healthy",
            "service": SERVICE_NAME,
            "version": VERSION
        }), 200

    logger.info("Application initialized successfully")

    return app


def register_error_handlers(app: Flask):
    """Register global error handlers."""

    @app.errorhandler(CareForMeException)
    def handle_careforme_exception(error: CareForMeException):
        """Handle application exceptions."""
        log = logger.warning if error.status_code < 500 else logger.error
        log(
            f"{error.__class__.__name__}: {error.message}",
            extra={"error_code": error.error_code, "details": error.details, **log_request(request)}
        )
        return jsonify(error.to_dict()), error.status_code

    @app.errorhandler(400)
    def handle_bad_request(error):
        return jsonify({
            "error": {
                "code": "BAD_REQUEST",
                "message": "The request could not be understood"
            }
        }), 400

    @app.errorhandler(404)
    def handle_not_found(error):
        """Handle 404 errors."""
        return jsonify({
            "error": {
                "code": "NOT_FOUND",
                "message": "The requested resource was not found"
            }
        }), 404

    @app.errorhandler(405)
    def handle_method_not_allowed(error):
        return jsonify({
            "error": {
                "code": "METHOD_NOT_ALLOWED",
                "message": "The method is not allowed for the requested URL"
            }
        }), 405

    @app.errorhandler(500)
    def handle_internal_error(error):
        """Handle 500 errors."""
        logger.exception("Internal server error")
        return jsonify({
            "error": {
                "code": "INTERNAL_ERROR",
                "message": "An internal server error occurred"
            }
        }), 500
