"""Loan ROI Planner Flask Application Factory."""

from typing import Optional

from flask import Flask

from loan_roi.config import configure_logging, get_global_settings


def create_app(config_name: Optional[str] = None) -> Flask:
    """Create and configure the Flask application.

    Args:
        config_name: Configuration name (development, testing, production)

    Returns:
        Flask: Configured Flask application instance
    """
    app = Flask(__name__)

    # Configuration from Pydantic Settings
    settings = get_global_settings()
    app.config["SECRET_KEY"] = settings.secret_key
    app.config["ENV"] = settings.flask_env
    app.config["DEBUG"] = settings.app_env == "development"
    app.config["TESTING"] = (config_name or settings.app_env) == "testing"
    app.config["SETTINGS"] = settings

    configure_logging(settings)

    # Register blueprints
    from loan_roi.blueprints.calculations import calculations_bp
    from loan_roi.blueprints.health import health_bp

    app.register_blueprint(health_bp)
    app.register_blueprint(calculations_bp)

    return app
