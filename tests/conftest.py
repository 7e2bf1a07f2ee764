"""
Pytest configuration and shared fixtures for the loan ROI planner tests.
"""

import os
from unittest.mock import patch

import pytest

from loan_roi import create_app
from loan_roi.config import reset_global_settings
from loan_roi.models.loan import LoanInputs, create_sample_loan_inputs
from loan_roi.models.portfolio_projection import PortfolioInputs


@pytest.fixture
def sample_inputs() -> LoanInputs:
    """The reference rental investment (250k property, 25 years at 3.7%)."""
    return create_sample_loan_inputs()


@pytest.fixture
def sample_payload(sample_inputs):
    """Reference investment as a camelCase JSON body."""
    return sample_inputs.model_dump(by_alias=True)


@pytest.fixture
def portfolio_inputs() -> PortfolioInputs:
    """Rent-vesting scenario: rent out the current home, buy a second one."""
    return PortfolioInputs(
        monthly_income=4000.0,
        current_home_value=300000.0,
        current_home_mortgage=1000.0,
        current_home_rent_income=1400.0,
        inv_price=200000.0,
        inv_down_payment=20000.0,
        inv_rate=3.8,
        inv_duration=20,
        inv_rent=1100.0,
        new_living_rent=1200.0,
    )


def _make_app(extra_env=None):
    env = {"SECRET_KEY": "test-secret-key-123", "APP_ENV": "testing"}
    env.update(extra_env or {})
    reset_global_settings()
    with patch.dict(os.environ, env, clear=True):
        app = create_app()
    reset_global_settings()
    return app


@pytest.fixture
def app():
    """Application without a text-generation key."""
    return _make_app()


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def analysis_client():
    """Client for an application with a text-generation key configured."""
    app = _make_app({"TEXTGEN_API_KEY": "test-api-key", "TEXTGEN_MODEL": "test-model"})
    return app.test_client()
