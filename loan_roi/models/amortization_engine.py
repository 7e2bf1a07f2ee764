"""
Month-by-month simulation of a financed rental property.

This module runs a single loan and rental scenario to payoff, tracking the
loan balance, property value, rental cashflow and the cash the investor has
put in, and aggregates the run into a SimulationResult.
"""

import logging
from typing import List, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray
from pydantic import Field

from .loan import FrozenRecord, LoanInputs
from .max_loan import calc_max_loan
from .payment import compose_monthly_payment, iter_amortization

logger = logging.getLogger(__name__)

CASHFLOW_NEVER = "Never"
EQUITY_BEYOND_TERM = "> Term"


class TimelinePoint(FrozenRecord):
    """Snapshot of the investment at the end of one month."""

    month: int = Field(..., ge=1, description="Month index (1-based)")
    year: int = Field(..., ge=1, description="Loan year the month belongs to")
    remaining_balance: float = Field(..., ge=0, description="Loan balance")
    paid_interest: float = Field(..., ge=0, description="Interest paid this month")
    paid_principal: float = Field(..., ge=0, description="Principal paid this month")
    property_value: float = Field(..., description="Appreciated property value")
    equity: float = Field(..., description="Property value minus loan balance")
    monthly_cashflow: float = Field(
        ..., description="Rent minus expenses minus housing payment"
    )
    cumulative_cashflow: float = Field(..., description="Sum of monthly cashflows")
    total_cash_invested_so_far: float = Field(
        ..., description="Initial cash plus absorbed negative cashflow"
    )
    net_result: float = Field(..., description="Equity minus cash invested so far")


class SimulationResult(FrozenRecord):
    """Aggregated outcome of a full simulation run."""

    borrowed_principal: float = Field(..., ge=0)
    final_monthly_payment: float = Field(..., ge=0)
    total_paid: float = Field(..., ge=0)
    total_interest: float = Field(..., ge=0)
    debt_ratio: float = Field(..., ge=0)
    timeline: Tuple[TimelinePoint, ...] = ()

    # Year-1 monthly snapshot
    rent_income: float = Field(..., ge=0, description="Effective monthly rent")
    net_rent_cashflow: float = Field(..., description="Cash in pocket per month")
    monthly_principal_paid: float = Field(
        ..., ge=0, description="Average principal paid per month in year 1"
    )
    monthly_appreciation: float = Field(
        ..., description="Average value gain per month in year 1"
    )
    total_monthly_economic_gain: float = Field(
        ..., description="Cashflow plus principal plus appreciation"
    )

    rent_roi: float = Field(..., description="Net cashflow over payment (%)")
    total_roi: float = Field(..., description="Annual economic gain over cash in (%)")

    break_even_years: Union[float, str] = Field(
        ..., description="Cashflow break-even in years or 'Never'"
    )
    equity_break_even_years: Union[float, str] = Field(
        ..., description="Net-worth break-even in years or '> Term'"
    )

    max_loan: float = Field(..., ge=0)
    final_property_value: float = Field(..., ge=0)
    notary_fees: float = Field(..., ge=0)
    monthly_insurance: float = Field(..., ge=0)
    total_cash_invested: float = Field(..., ge=0, description="Down payment + notary")

    @property
    def months_to_payoff(self) -> int:
        return len(self.timeline)

    def get_balances(self) -> NDArray[np.float64]:
        """Remaining balance per month, for charting."""
        return np.array([p.remaining_balance for p in self.timeline], dtype=np.float64)

    def get_equity(self) -> NDArray[np.float64]:
        """Equity per month, for charting."""
        return np.array([p.equity for p in self.timeline], dtype=np.float64)


class AmortizationEngine:
    """Simulator for a single loan plus rental scenario."""

    @staticmethod
    def simulate(inputs: LoanInputs) -> SimulationResult:
        """
        Simulate the investment month by month until the loan is retired.

        Args:
            inputs: Loan and rental parameters

        Returns:
            SimulationResult with the full timeline and summary metrics
        """
        notary_fees = inputs.notary_fees
        principal = inputs.borrowed_principal
        initial_cash_invested = inputs.initial_cash_invested

        payment = compose_monthly_payment(principal, inputs)
        initial_rent = inputs.effective_rent
        appreciation_factor = 1 + inputs.property_appreciation_rate / 100 / 12
        rent_factor = 1 + inputs.rent_indexation_rate / 100

        timeline: List[TimelinePoint] = []
        total_interest = 0.0
        property_value = inputs.property_price
        rent_index = 1.0
        cash_invested = initial_cash_invested
        equity_break_even_month = None

        for month, interest, principal_paid, balance in iter_amortization(
            principal,
            inputs.interest_rate_single,
            payment.principal_interest,
            payment.injection,
        ):
            total_interest += interest

            # Rent is re-indexed on the first month of every later year
            if month > 1 and month % 12 == 1:
                rent_index *= rent_factor

            property_value *= appreciation_factor

            # Expenses are indexed like the rent so their share of it stays constant
            current_rent = initial_rent * rent_index
            expenses = inputs.monthly_expenses * rent_index

            monthly_cashflow = current_rent - expenses - payment.total
            cash_invested -= monthly_cashflow

            equity = property_value - balance
            net_result = equity - cash_invested
            if equity_break_even_month is None and net_result > 0:
                equity_break_even_month = month

            timeline.append(
                TimelinePoint(
                    month=month,
                    year=(month + 11) // 12,
                    remaining_balance=max(balance, 0.0),
                    paid_interest=interest,
                    paid_principal=principal_paid,
                    property_value=property_value,
                    equity=equity,
                    monthly_cashflow=monthly_cashflow,
                    cumulative_cashflow=initial_cash_invested - cash_invested,
                    total_cash_invested_so_far=cash_invested,
                    net_result=net_result,
                )
            )

        months = len(timeline)
        logger.debug(f"Simulated {months} months for principal {principal:.2f}")

        total_paid = (
            months * payment.amortizing_payment
            + months * payment.insurance
            + months * inputs.property_tax
        )

        first_year = timeline[:12]
        if first_year:
            avg_principal = float(np.mean([p.paid_principal for p in first_year]))
            avg_appreciation = (
                first_year[-1].property_value - inputs.property_price
            ) / len(first_year)
        else:
            avg_principal = 0.0
            avg_appreciation = 0.0

        net_rent_cashflow = initial_rent - inputs.monthly_expenses - payment.total
        economic_gain = net_rent_cashflow + avg_principal + avg_appreciation

        rent_roi = (
            net_rent_cashflow / payment.total * 100 if payment.total > 0 else 0.0
        )
        total_roi = (
            economic_gain * 12 / initial_cash_invested * 100
            if initial_cash_invested > 0
            else 0.0
        )

        return SimulationResult(
            borrowed_principal=principal,
            final_monthly_payment=payment.total,
            total_paid=total_paid,
            total_interest=total_interest,
            debt_ratio=inputs.debt_ratio(payment.total),
            timeline=tuple(timeline),
            rent_income=initial_rent,
            net_rent_cashflow=net_rent_cashflow,
            monthly_principal_paid=avg_principal,
            monthly_appreciation=avg_appreciation,
            total_monthly_economic_gain=economic_gain,
            rent_roi=rent_roi,
            total_roi=total_roi,
            break_even_years=cashflow_break_even_years(timeline),
            equity_break_even_years=(
                round(equity_break_even_month / 12, 1)
                if equity_break_even_month is not None
                else EQUITY_BEYOND_TERM
            ),
            max_loan=calc_max_loan(inputs),
            final_property_value=(
                timeline[-1].property_value if timeline else inputs.property_price
            ),
            notary_fees=notary_fees,
            monthly_insurance=payment.insurance,
            total_cash_invested=initial_cash_invested,
        )


def cashflow_break_even_years(timeline: Sequence[TimelinePoint]) -> Union[float, str]:
    """Years until the first month with non-negative cashflow, or 'Never'."""
    for index, point in enumerate(timeline):
        if point.monthly_cashflow >= 0:
            return round(index / 12, 1)
    return CASHFLOW_NEVER


def simulate(inputs: LoanInputs) -> SimulationResult:
    """Simulate a loan plus rental scenario (see AmortizationEngine.simulate)."""
    return AmortizationEngine.simulate(inputs)
