"""
Two-property rent-vesting projection.

The investor rents out the home they own (property A), rents a new place to
live in, and finances a second investment property (property B). This module
computes the bank's view of the resulting debt ratio, the pocket-cash monthly
cashflow, and a yearly projection of combined assets, debt and equity.
"""

import logging
from typing import List, Tuple

from pydantic import Field

from .loan import FrozenRecord
from .payment import compute_monthly_payment

logger = logging.getLogger(__name__)

# Share of rental income a lender counts as income.
RENTAL_INCOME_WEIGHT = 0.7

PROJECTION_YEARS = 20
PROPERTY_GROWTH_RATE = 0.02

# Heuristic for the existing home's mortgage, whose balance is not an input:
# the remaining debt is taken as 15 years of payments and 60% of each year's
# payments are counted as principal. This is an approximation, not an
# amortization schedule.
EXISTING_DEBT_YEARS_OF_PAYMENTS = 15
EXISTING_DEBT_PRINCIPAL_SHARE = 0.6


class PortfolioInputs(FrozenRecord):
    """Parameters for the rent-vesting scenario."""

    monthly_income: float = Field(..., ge=0, description="Net monthly income")
    current_home_value: float = Field(..., ge=0, description="Value of property A")
    current_home_mortgage: float = Field(
        default=0, ge=0, description="Monthly payment on property A"
    )
    current_home_rent_income: float = Field(
        default=0, ge=0, description="Rent collected on property A"
    )
    inv_price: float = Field(..., ge=0, description="Price of property B")
    inv_down_payment: float = Field(default=0, ge=0)
    inv_rate: float = Field(..., ge=0, description="Annual rate on property B (%)")
    inv_duration: int = Field(..., ge=1, le=50, description="Years on property B")
    inv_rent: float = Field(default=0, ge=0, description="Rent collected on B")
    new_living_rent: float = Field(
        default=0, ge=0, description="Rent paid for the new residence"
    )


class PortfolioTimelinePoint(FrozenRecord):
    """Combined position at the end of a projection year."""

    year: int = Field(..., ge=0)
    existing_home_value: float = Field(..., ge=0)
    investment_value: float = Field(..., ge=0)
    existing_home_debt: float = Field(..., ge=0, description="Approximate")
    investment_debt: float = Field(..., ge=0)
    assets: float = Field(..., ge=0, description="Combined property value")
    debt: float = Field(..., ge=0, description="Combined debt")
    equity: float = Field(..., description="Assets minus debt")


class PortfolioResult(FrozenRecord):
    """Monthly snapshot and yearly net-worth projection for the portfolio."""

    total_income: float = Field(..., description="Income plus both full rents")
    total_expenses: float = Field(..., description="Both mortgages plus living rent")
    net_cashflow: float = Field(..., description="Pocket-cash monthly balance")
    bank_income: float = Field(..., description="Income with rents weighted at 70%")
    bank_debt_ratio: float = Field(..., ge=0)
    investment_monthly_payment: float = Field(..., ge=0)
    net_worth_projection: Tuple[PortfolioTimelinePoint, ...] = ()


class PortfolioProjector:
    """Projector for the two-property rent-vesting scenario."""

    def __init__(self, years: int = PROJECTION_YEARS):
        self.years = years

    def calculate(self, inputs: PortfolioInputs) -> PortfolioResult:
        """
        Compute the cashflow, bank ratio and net-worth projection.

        The ratio weights both rents at 70% as a lender would; the cashflow
        counts them in full.
        """
        bank_income = inputs.monthly_income + RENTAL_INCOME_WEIGHT * (
            inputs.current_home_rent_income + inputs.inv_rent
        )

        inv_principal = max(inputs.inv_price - inputs.inv_down_payment, 0.0)
        inv_payment = compute_monthly_payment(
            inv_principal, inputs.inv_rate, inputs.inv_duration
        )

        debt_payments = inputs.current_home_mortgage + inv_payment
        bank_ratio = debt_payments / bank_income if bank_income > 0 else 0.0

        total_in = (
            inputs.monthly_income + inputs.current_home_rent_income + inputs.inv_rent
        )
        total_out = debt_payments + inputs.new_living_rent

        return PortfolioResult(
            total_income=total_in,
            total_expenses=total_out,
            net_cashflow=total_in - total_out,
            bank_income=bank_income,
            bank_debt_ratio=bank_ratio,
            investment_monthly_payment=inv_payment,
            net_worth_projection=self._project(inputs, inv_principal, inv_payment),
        )

    def _project(
        self, inputs: PortfolioInputs, inv_principal: float, inv_payment: float
    ) -> Tuple[PortfolioTimelinePoint, ...]:
        value_a = inputs.current_home_value
        value_b = inputs.inv_price
        debt_b = inv_principal

        annual_payment_a = inputs.current_home_mortgage * 12
        debt_a = annual_payment_a * EXISTING_DEBT_YEARS_OF_PAYMENTS
        annual_payment_b = inv_payment * 12
        rate_b = inputs.inv_rate / 100

        projection: List[PortfolioTimelinePoint] = []
        for year in range(self.years + 1):
            if year > 0:
                interest_b = debt_b * rate_b
                debt_b = max(debt_b - (annual_payment_b - interest_b), 0.0)
                debt_a = max(
                    debt_a - annual_payment_a * EXISTING_DEBT_PRINCIPAL_SHARE, 0.0
                )
                value_a *= 1 + PROPERTY_GROWTH_RATE
                value_b *= 1 + PROPERTY_GROWTH_RATE

            assets = value_a + value_b
            debt = debt_a + debt_b
            projection.append(
                PortfolioTimelinePoint(
                    year=year,
                    existing_home_value=value_a,
                    investment_value=value_b,
                    existing_home_debt=debt_a,
                    investment_debt=debt_b,
                    assets=assets,
                    debt=debt,
                    equity=assets - debt,
                )
            )

        logger.debug(
            f"Projected portfolio over {self.years} years, "
            f"final equity {projection[-1].equity:.2f}"
        )
        return tuple(projection)


def calculate_portfolio(inputs: PortfolioInputs) -> PortfolioResult:
    """Project the rent-vesting portfolio over 20 years."""
    return PortfolioProjector().calculate(inputs)
