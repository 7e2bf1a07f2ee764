"""
Tests for the payment formula and the shared amortization primitive.
"""

import pytest

from loan_roi.models.loan import BALANCE_TOLERANCE, MAX_MONTHS, LoanInputs
from loan_roi.models.payment import (
    PaymentBreakdown,
    PayoffSummary,
    amortize,
    compose_monthly_payment,
    compute_monthly_payment,
    iter_amortization,
    payoff_totals,
)


class TestComputeMonthlyPayment:
    """Test cases for the annuity formula."""

    def test_reference_loan(self):
        """100k over 20 years at 3.6%."""
        payment = compute_monthly_payment(100000, 3.6, 20)

        assert payment == pytest.approx(585.1115, abs=0.001)

    def test_standard_thirty_year(self):
        """300k over 30 years at 6% is the textbook 1798.65."""
        payment = compute_monthly_payment(300000, 6.0, 30)

        assert payment == pytest.approx(1798.65, abs=0.01)

    def test_zero_interest_is_straight_line(self):
        payment = compute_monthly_payment(120000, 0.0, 10)

        assert payment == pytest.approx(1000.0)

    def test_zero_principal(self):
        assert compute_monthly_payment(0, 3.5, 25) == 0.0

    @pytest.mark.parametrize("rate", [0.01, 1.0, 5.0, 20.0])
    @pytest.mark.parametrize("years", [1, 25, 50])
    def test_payment_retires_the_loan(self, rate, years):
        """The annuity pays off the principal in exactly the term."""
        payment = compute_monthly_payment(100000, rate, years)
        summary = amortize(100000, rate, payment)

        assert summary.months_to_payoff == years * 12
        assert summary.final_balance <= BALANCE_TOLERANCE

    def test_higher_rate_costs_more(self):
        low = compute_monthly_payment(200000, 2.0, 20)
        high = compute_monthly_payment(200000, 4.0, 20)

        assert high > low


class TestComposeMonthlyPayment:
    """Test cases for the full housing payment composition."""

    def test_reference_composition(self, sample_inputs):
        payment = compose_monthly_payment(225000, sample_inputs)

        assert isinstance(payment, PaymentBreakdown)
        assert payment.base_principal_interest == pytest.approx(1150.681, abs=0.001)
        assert payment.principal_interest == pytest.approx(
            payment.base_principal_interest * 1.1
        )
        assert payment.insurance == pytest.approx(56.25)
        assert payment.property_tax == 100.0
        assert payment.injection == 0.0
        assert payment.total == pytest.approx(1421.999, abs=0.001)

    def test_overrides_take_precedence(self, sample_inputs):
        payment = compose_monthly_payment(
            225000, sample_inputs, years=10, overdrive=0.0, injection=10.0
        )

        assert payment.base_principal_interest == pytest.approx(
            compute_monthly_payment(225000, 3.7, 10)
        )
        assert payment.principal_interest == payment.base_principal_interest
        assert payment.injection == pytest.approx(400.0)

    def test_amortizing_payment_excludes_insurance_and_tax(self, sample_inputs):
        payment = compose_monthly_payment(225000, sample_inputs, injection=5.0)

        assert payment.amortizing_payment == pytest.approx(
            payment.principal_interest + 200.0
        )
        assert payment.total == pytest.approx(
            payment.amortizing_payment + payment.insurance + payment.property_tax
        )

    def test_zero_rate_inputs(self):
        inputs = LoanInputs(
            property_price=120000, credit_years=10, interest_rate_single=0
        )
        payment = compose_monthly_payment(inputs.borrowed_principal, inputs)

        assert payment.total == pytest.approx(1000.0)


class TestAmortize:
    """Test cases for the shared amortization loop."""

    def test_amortization_identity(self):
        """Payment x months - principal equals the interest paid."""
        payment = compute_monthly_payment(100000, 3.6, 20)
        summary = amortize(100000, 3.6, payment)

        assert isinstance(summary, PayoffSummary)
        assert summary.months_to_payoff == 240
        assert summary.total_interest == pytest.approx(
            payment * 240 - 100000, rel=1e-6
        )
        assert summary.total_interest == pytest.approx(40426.75, abs=0.01)

    def test_extra_payment_shortens_the_loan(self):
        payment = compute_monthly_payment(100000, 5.0, 30)
        plain = amortize(100000, 5.0, payment)
        boosted = amortize(100000, 5.0, payment, injection=100)

        assert boosted.months_to_payoff < plain.months_to_payoff
        assert boosted.total_interest < plain.total_interest

    def test_zero_principal(self):
        summary = amortize(0, 3.0, 500)

        assert summary.months_to_payoff == 0
        assert summary.total_interest == 0.0
        assert summary.final_balance == 0.0

    def test_payment_below_interest_never_amortizes(self):
        """A payment that does not cover interest retires no principal."""
        summary = amortize(100000, 12.0, 500)

        assert summary.months_to_payoff == MAX_MONTHS
        assert summary.final_balance == pytest.approx(100000)
        assert summary.total_interest == pytest.approx(1000.0 * MAX_MONTHS)

    def test_custom_month_cap(self):
        summary = amortize(100000, 3.0, 100, max_months=24)

        assert summary.months_to_payoff == 24
        assert summary.final_balance > 0


class TestIterAmortization:
    """Test cases for the per-month amortization steps."""

    def test_last_payment_is_clamped_to_balance(self):
        steps = list(iter_amortization(2500, 0.0, 1000))

        assert [s[0] for s in steps] == [1, 2, 3]
        assert [s[2] for s in steps] == [1000, 1000, 500]
        assert steps[-1][3] == 0

    def test_balance_is_non_increasing(self):
        payment = compute_monthly_payment(250000, 4.2, 25)
        steps = list(iter_amortization(250000, 4.2, payment, injection=150))

        balances = [s[3] for s in steps]
        assert all(b2 <= b1 for b1, b2 in zip(balances, balances[1:]))
        assert balances[-1] <= BALANCE_TOLERANCE
        assert all(s[2] >= 0 for s in steps)

    def test_interest_is_charged_on_opening_balance(self):
        month, interest, principal_paid, balance = next(
            iter_amortization(120000, 6.0, 1000)
        )

        assert month == 1
        assert interest == pytest.approx(600.0)
        assert principal_paid == pytest.approx(400.0)
        assert balance == pytest.approx(119600.0)


class TestPayoffTotals:
    """Test cases for the float-only payoff loop."""

    @pytest.mark.parametrize(
        "principal,rate,payment,injection",
        [
            (225000, 3.6, 1150.68, 0.0),
            (225000, 3.6, 1323.28, 160.0),
            (2500, 0.0, 1000, 0.0),
            (100000, 12.0, 500, 0.0),
        ],
    )
    def test_matches_amortization_steps(self, principal, rate, payment, injection):
        steps = list(iter_amortization(principal, rate, payment, injection))
        months, total_interest, balance = payoff_totals(
            principal, rate, payment, injection
        )

        assert months == len(steps)
        assert total_interest == pytest.approx(sum(s[1] for s in steps))
        assert balance == pytest.approx(steps[-1][3])

    def test_zero_principal(self):
        assert payoff_totals(0, 3.6, 500) == (0, 0.0, 0)
