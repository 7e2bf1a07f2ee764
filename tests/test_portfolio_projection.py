"""
Tests for the two-property rent-vesting projection.
"""

import pytest

from loan_roi.models.payment import compute_monthly_payment
from loan_roi.models.portfolio_projection import (
    PROJECTION_YEARS,
    PortfolioProjector,
    PortfolioResult,
    calculate_portfolio,
)


class TestPortfolioSnapshot:
    """Test cases for the monthly cashflow and bank ratio."""

    def test_bank_ratio_weights_rents(self, portfolio_inputs):
        result = calculate_portfolio(portfolio_inputs)
        payment = compute_monthly_payment(180000, 3.8, 20)

        assert isinstance(result, PortfolioResult)
        assert result.bank_income == pytest.approx(4000 + 0.7 * 1400 + 0.7 * 1100)
        assert result.investment_monthly_payment == pytest.approx(payment)
        assert result.bank_debt_ratio == pytest.approx((1000 + payment) / 5750)

    def test_cashflow_uses_full_rents(self, portfolio_inputs):
        result = calculate_portfolio(portfolio_inputs)
        payment = compute_monthly_payment(180000, 3.8, 20)

        assert result.total_income == pytest.approx(6500)
        assert result.total_expenses == pytest.approx(1000 + payment + 1200)
        assert result.net_cashflow == pytest.approx(4300 - payment)

    def test_zero_bank_income(self, portfolio_inputs):
        inputs = portfolio_inputs.model_copy(
            update={
                "monthly_income": 0,
                "current_home_rent_income": 0,
                "inv_rent": 0,
            }
        )

        assert calculate_portfolio(inputs).bank_debt_ratio == 0.0


class TestNetWorthProjection:
    """Test cases for the yearly projection."""

    def test_twenty_one_yearly_points(self, portfolio_inputs):
        projection = calculate_portfolio(portfolio_inputs).net_worth_projection

        assert len(projection) == PROJECTION_YEARS + 1
        assert [p.year for p in projection] == list(range(21))

    def test_starting_position(self, portfolio_inputs):
        start = calculate_portfolio(portfolio_inputs).net_worth_projection[0]

        assert start.assets == pytest.approx(500000)
        assert start.investment_debt == pytest.approx(180000)
        # 15 years of the existing monthly payment
        assert start.existing_home_debt == pytest.approx(180000)
        assert start.equity == pytest.approx(500000 - 360000)

    def test_existing_debt_heuristic(self, portfolio_inputs):
        projection = calculate_portfolio(portfolio_inputs).net_worth_projection

        # 60% of 12 000 a year counts as principal
        assert projection[1].existing_home_debt == pytest.approx(172800)
        assert projection[20].existing_home_debt == pytest.approx(36000)

    def test_investment_debt_amortizes_yearly(self, portfolio_inputs):
        projection = calculate_portfolio(portfolio_inputs).net_worth_projection
        payment = compute_monthly_payment(180000, 3.8, 20)

        expected = 180000 - (payment * 12 - 180000 * 0.038)
        assert projection[1].investment_debt == pytest.approx(expected)
        debts = [p.investment_debt for p in projection]
        assert all(d2 <= d1 for d1, d2 in zip(debts, debts[1:]))
        assert all(d >= 0 for d in debts)

    def test_values_grow_two_percent(self, portfolio_inputs):
        end = calculate_portfolio(portfolio_inputs).net_worth_projection[-1]

        assert end.existing_home_value == pytest.approx(300000 * 1.02**20)
        assert end.investment_value == pytest.approx(200000 * 1.02**20)

    def test_equity_is_assets_minus_debt(self, portfolio_inputs):
        for point in calculate_portfolio(portfolio_inputs).net_worth_projection:
            assert point.debt == pytest.approx(
                point.existing_home_debt + point.investment_debt
            )
            assert point.equity == pytest.approx(point.assets - point.debt)

    def test_short_investment_loan_stays_retired(self, portfolio_inputs):
        inputs = portfolio_inputs.model_copy(update={"inv_duration": 5})
        projection = calculate_portfolio(inputs).net_worth_projection

        assert all(p.investment_debt == 0 for p in projection[6:])

    def test_custom_horizon(self, portfolio_inputs):
        result = PortfolioProjector(years=5).calculate(portfolio_inputs)

        assert len(result.net_worth_projection) == 6

    def test_projection_is_immutable(self, portfolio_inputs):
        result = calculate_portfolio(portfolio_inputs)

        assert isinstance(result.net_worth_projection, tuple)
        with pytest.raises(AttributeError):
            result.net_worth_projection.append(result.net_worth_projection[0])
        assert len(result.net_worth_projection) == 21
