"""
TJM Tracker Web Application Factory

Flask app that registers the module blueprints and maps the error taxonomy
to JSON responses. Mirrors how cli/main.py assembles module CLIs.
"""

from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

import tjmtracker
from tjmtracker.core import TrackerError, get_config_value, get_logger, migrate_all

logger = get_logger("tjmtracker.api")


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(TrackerError)
    def handle_tracker_error(exc: TrackerError):
        if exc.status_code >= 500:
            logger.error("Tracker error: %s", exc)
        return jsonify({"error": str(exc)}), exc.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(exc: HTTPException):
        return jsonify({"error": exc.description}), exc.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(exc: Exception):
        logger.exception("Unhandled error")
        return jsonify({"error": "Internal server error", "details": str(exc)}), 500


def create_app(migrate: bool = True) -> Flask:
    """Create and configure the TJM Tracker Flask application.

    Args:
        migrate: Apply module schemas to the configured database on startup
    """
    from tjmtracker.core.config import TJM_PATHS

    app = Flask(
        __name__,
        template_folder=str(TJM_PATHS.frontend / "templates"),
        static_folder=str(TJM_PATHS.frontend / "static"),
    )
    app.json.sort_keys = False

    if migrate:
        migrate_all()

    # ── Branding context processor ───────────────────────────────────────
    app_name = get_config_value("app", "name", default="TJM Tracker")

    @app.context_processor
    def inject_app_name():
        return {"app_name": app_name}

    # ── Security headers ─────────────────────────────────────────────────
    @app.after_request
    def set_security_headers(response):
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        return response

    _register_error_handlers(app)

    # ── Register blueprints ──────────────────────────────────────────────
    from tjmtracker.api.projects import bp as projects_bp
    app.register_blueprint(projects_bp)

    from tjmtracker.api.collaborators import bp as collaborators_bp
    app.register_blueprint(collaborators_bp)

    from tjmtracker.api.tjm import bp as tjm_bp
    app.register_blueprint(tjm_bp)

    from tjmtracker.api.pages import bp as pages_bp
    app.register_blueprint(pages_bp)

    @app.route("/health", methods=["GET"])
    def health():
        return jsonify({
            "status": "healthy",
            "service": app_name,
            "version": tjmtracker.__version__,
        })

    return app
