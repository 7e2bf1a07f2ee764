"""
Fixed-duration scenario comparison.

Runs the same loan over a fixed list of durations so the trade-off between
monthly payment and total interest can be read side by side.
"""

from typing import List, Sequence

from pydantic import Field

from .loan import DEBT_RATIO_MAX, FrozenRecord, LoanInputs
from .payment import compose_monthly_payment, iter_amortization

SCENARIO_DURATIONS = (10, 15, 20, 25)

# Month at which the equity snapshot is taken (10 years in).
EQUITY_SNAPSHOT_MONTH = 120


class MultiScenarioResult(FrozenRecord):
    """Outcome of the loan for one fixed duration."""

    duration: int = Field(..., ge=1, description="Loan duration in years")
    monthly_payment: float = Field(..., ge=0, description="Total monthly payment")
    total_interest: float = Field(..., ge=0)
    total_paid: float = Field(..., ge=0)
    debt_ratio: float = Field(..., ge=0)
    cashflow: float = Field(..., description="Year-1 net rental cashflow")
    is_viable: bool = Field(..., description="Whether the debt ratio is acceptable")
    equity_at_month_120: float = Field(
        ..., description="Property value minus balance after 10 years"
    )


class MultiScenarioComparator:
    """Compare one loan across several fixed durations."""

    def __init__(self, durations: Sequence[int] = SCENARIO_DURATIONS):
        self.durations = tuple(durations)

    def compare(self, inputs: LoanInputs) -> List[MultiScenarioResult]:
        """Evaluate every duration, in the configured order."""
        return [self._evaluate(inputs, years) for years in self.durations]

    @staticmethod
    def _evaluate(inputs: LoanInputs, years: int) -> MultiScenarioResult:
        principal = inputs.borrowed_principal
        payment = compose_monthly_payment(principal, inputs, years=years)

        months = 0
        total_interest = 0.0
        snapshot_balance = 0.0
        for month, interest, _, balance in iter_amortization(
            principal,
            inputs.interest_rate_single,
            payment.principal_interest,
            payment.injection,
        ):
            months = month
            total_interest += interest
            if month == EQUITY_SNAPSHOT_MONTH:
                snapshot_balance = balance

        appreciation_factor = 1 + inputs.property_appreciation_rate / 100 / 12
        value_at_snapshot = (
            inputs.property_price * appreciation_factor**EQUITY_SNAPSHOT_MONTH
        )

        total_paid = months * (
            payment.amortizing_payment + payment.insurance + inputs.property_tax
        )
        ratio = inputs.debt_ratio(payment.total)

        return MultiScenarioResult(
            duration=years,
            monthly_payment=payment.total,
            total_interest=total_interest,
            total_paid=total_paid,
            debt_ratio=ratio,
            cashflow=inputs.effective_rent - inputs.monthly_expenses - payment.total,
            is_viable=ratio <= DEBT_RATIO_MAX,
            equity_at_month_120=value_at_snapshot - snapshot_balance,
        )


def calculate_multi_scenarios(inputs: LoanInputs) -> List[MultiScenarioResult]:
    """Compare the loan over 10, 15, 20 and 25 years."""
    return MultiScenarioComparator().compare(inputs)
