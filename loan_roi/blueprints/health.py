"""Health check blueprint."""

from flask import Blueprint, Response, jsonify

from loan_roi.models.loan import DEBT_RATIO_MAX

health_bp = Blueprint("health", __name__)


@health_bp.route("/healthz")
def health_check() -> Response:
    """Health check endpoint.

    Returns:
        JSON response with the service status and the active debt-ratio cap
    """
    return jsonify({"status": "ok", "debtRatioMax": DEBT_RATIO_MAX})
