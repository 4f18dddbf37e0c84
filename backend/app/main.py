import logging
import os

from dotenv import load_dotenv
from flask import Flask
from sqlalchemy import text

# Get logger for this module
logger = logging.getLogger(__name__)

# Only load from .env when DATABASE_URL is not already defined by the environment
if not os.getenv("DATABASE_URL"):
    load_dotenv()

from app.core.api_utils import api_response, error_response  # noqa: E402
from app.core.config import get_logging_settings, log_timezone_config  # noqa: E402
from app.core.exceptions import AppointmentError  # noqa: E402
from app.db.session import create_tables, get_engine  # noqa: E402


def check_database_connection() -> bool:
    """Test database connection"""
    try:
        with get_engine().connect() as connection:
            connection.execute(text("SELECT 1"))
            return True
    except Exception as e:
        logger.error(
            "Database connection failed",
            extra={"context": {"error": str(e)}},
            exc_info=True,
        )
        return False


def create_app() -> Flask:
    app = Flask(__name__)
    app.config["TESTING"] = os.getenv("TESTING", "").lower() in ("1", "true", "yes")
    app.json.sort_keys = False

    # Configure structured logging (after app creation so we can register hooks)
    from app.core.logging_config import setup_logging

    settings = get_logging_settings()
    if app.config["TESTING"]:
        settings["log_to_file"] = False
    setup_logging(app=app, **settings)
    log_timezone_config()

    create_tables()

    from app.controllers.appointment_controller import appointment_bp
    from app.controllers.statistics_controller import statistics_bp

    app.register_blueprint(appointment_bp)
    app.register_blueprint(statistics_bp)

    @app.errorhandler(AppointmentError)
    def handle_appointment_error(error: AppointmentError):
        if error.status_code >= 500:
            logger.error(
                "Appointment operation failed",
                extra={"context": {"code": error.code, "message": error.message}},
            )
        return error_response(error)

    @app.route("/health", methods=["GET"])
    def health_check():
        if check_database_connection():
            return api_response(True, "ok", {"database": "up"})
        return api_response(False, "database unavailable", {"database": "down"}, 503)

    logger.info(
        "Application created",
        extra={"context": {"blueprints": sorted(app.blueprints)}},
    )
    return app
