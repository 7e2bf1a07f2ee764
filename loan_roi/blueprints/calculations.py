"""
Calculation blueprint exposing the loan models as JSON endpoints.

Request bodies are LoanInputs (or PortfolioInputs) in camelCase; responses
are the corresponding result records, also in camelCase.
"""

from typing import Any, Dict, List

from flask import Blueprint, current_app, jsonify, request
from pydantic import BaseModel, ValidationError
from werkzeug.exceptions import HTTPException

from loan_roi.models.amortization_engine import simulate
from loan_roi.models.loan import LoanInputs
from loan_roi.models.max_loan import calc_max_loan
from loan_roi.models.multi_scenario import calculate_multi_scenarios
from loan_roi.models.portfolio_projection import PortfolioInputs, calculate_portfolio
from loan_roi.models.recommendations import (
    build_analysis_summary,
    get_recommendations,
)
from loan_roi.models.strategy_optimizer import StrategyGrid, find_strategies
from loan_roi.services.text_generation import (
    TextGenerationClient,
    TextGenerationConfig,
    TextGenerationError,
)

calculations_bp = Blueprint("calculations", __name__, url_prefix="/api")


def _dump(model: BaseModel) -> Dict[str, Any]:
    return model.model_dump(by_alias=True)


def _dump_all(models: List[BaseModel]) -> List[Dict[str, Any]]:
    return [_dump(m) for m in models]


class RequestBodyError(ValueError):
    """Raised when the request body is not a JSON object."""


def _request_data() -> Dict[str, Any]:
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise RequestBodyError("Request body must be a JSON object")
    return dict(data)


def _loan_inputs(data: Dict[str, Any]) -> LoanInputs:
    return LoanInputs.model_validate(data)


def _invalid(e: ValidationError) -> Any:
    return (
        jsonify(
            {
                "error": "Invalid input",
                "details": e.errors(include_url=False, include_context=False),
            }
        ),
        400,
    )


@calculations_bp.errorhandler(ValidationError)
def handle_validation_error(e: ValidationError) -> Any:
    return _invalid(e)


@calculations_bp.errorhandler(RequestBodyError)
def handle_request_body_error(e: RequestBodyError) -> Any:
    return jsonify({"error": str(e)}), 400


@calculations_bp.errorhandler(Exception)
def handle_unexpected_error(e: Exception) -> Any:
    if isinstance(e, HTTPException):
        return e
    current_app.logger.error(
        f"Error handling {request.method} {request.path}: {str(e)}", exc_info=e
    )
    return jsonify({"error": "Internal server error"}), 500


@calculations_bp.route("/simulate", methods=["POST"])
def run_simulation() -> Any:
    """Simulate a loan plus rental scenario.

    Returns:
        JSON SimulationResult
    """
    inputs = _loan_inputs(_request_data())
    return jsonify(_dump(simulate(inputs))), 200


@calculations_bp.route("/max-loan", methods=["POST"])
def max_loan() -> Any:
    """Largest principal whose payment fits the debt-ratio ceiling."""
    inputs = _loan_inputs(_request_data())
    return jsonify({"maxLoan": calc_max_loan(inputs)}), 200


@calculations_bp.route("/scenarios", methods=["POST"])
def multi_scenarios() -> Any:
    """Compare the loan over the fixed list of durations."""
    inputs = _loan_inputs(_request_data())
    return jsonify({"scenarios": _dump_all(calculate_multi_scenarios(inputs))}), 200


@calculations_bp.route("/strategies", methods=["POST"])
def strategies() -> Any:
    """Search payoff strategies.

    The optional ``grid`` key selects ``"default"`` (21x21) or ``"coarse"``
    (11x11); every other key is a LoanInputs field.
    """
    data = _request_data()
    grid_name = data.pop("grid", "default")
    if grid_name not in ("default", "coarse"):
        return jsonify({"error": "grid must be 'default' or 'coarse'"}), 400

    grid = StrategyGrid.coarse() if grid_name == "coarse" else StrategyGrid()
    results = find_strategies(_loan_inputs(data), grid)
    return jsonify({"strategies": _dump_all(results)}), 200


@calculations_bp.route("/portfolio", methods=["POST"])
def portfolio() -> Any:
    """Project the two-property rent-vesting portfolio."""
    inputs = PortfolioInputs.model_validate(_request_data())
    return jsonify(_dump(calculate_portfolio(inputs))), 200


@calculations_bp.route("/recommendations", methods=["POST"])
def recommendations() -> Any:
    """Rule-based recommendations for a loan scenario."""
    inputs = _loan_inputs(_request_data())
    result = simulate(inputs)
    return jsonify({"recommendations": get_recommendations(inputs, result)}), 200


@calculations_bp.route("/analysis", methods=["POST"])
def analysis() -> Any:
    """Ask the text-generation service for a written report on the scenario.

    Returns:
        JSON with the generated report and the summary that was sent
    """
    inputs = _loan_inputs(_request_data())

    config = TextGenerationConfig.from_settings(current_app.config["SETTINGS"])
    if config is None:
        return jsonify({"error": "Text generation API key is not configured"}), 400

    result = simulate(inputs)
    summary = build_analysis_summary(
        inputs,
        result,
        scenarios=calculate_multi_scenarios(inputs),
        strategies=find_strategies(inputs),
    )

    try:
        with TextGenerationClient(config) as client:
            report = client.generate(summary)
    except TextGenerationError as e:
        current_app.logger.error(f"Error generating analysis: {str(e)}")
        return jsonify({"error": "Analysis unavailable", "message": str(e)}), 502

    return jsonify({"analysis": report, "summary": summary}), 200
