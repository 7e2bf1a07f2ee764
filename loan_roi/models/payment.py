"""
Payment formula and the shared amortization primitive.

This module provides the fixed-rate annuity formula, the composition of the
full monthly housing payment (overdriven P&I, insurance, property tax and
income injection) and the month-by-month amortization loop that every
calculation in the planner reuses.
"""

import logging
from typing import Iterator, Optional, Tuple

from pydantic import Field

from .loan import BALANCE_TOLERANCE, MAX_MONTHS, FrozenRecord, LoanInputs

logger = logging.getLogger(__name__)

# (month, interest, principal paid, remaining balance)
AmortizationStep = Tuple[int, float, float, float]


class PaymentBreakdown(FrozenRecord):
    """Composition of the monthly housing payment."""

    base_principal_interest: float = Field(
        ..., ge=0, description="Annuity P&I payment before overdrive"
    )
    principal_interest: float = Field(
        ..., ge=0, description="P&I payment after the overdrive boost"
    )
    insurance: float = Field(..., ge=0, description="Monthly borrower insurance")
    property_tax: float = Field(..., ge=0, description="Monthly property tax")
    injection: float = Field(..., ge=0, description="Income injected each month")
    total: float = Field(..., ge=0, description="Total monthly housing payment")

    @property
    def amortizing_payment(self) -> float:
        """Part of the payment that services interest and principal."""
        return self.principal_interest + self.injection


class PayoffSummary(FrozenRecord):
    """Outcome of running a loan to payoff (or to the month cap)."""

    months_to_payoff: int = Field(..., ge=0, description="Months simulated")
    total_interest: float = Field(..., ge=0, description="Interest paid")
    final_balance: float = Field(..., ge=0, description="Balance left at the end")


def compute_monthly_payment(
    principal: float, annual_rate_pct: float, years: float
) -> float:
    """
    Calculate the fixed annuity payment that retires a loan.

    Args:
        principal: Loan principal amount
        annual_rate_pct: Annual interest rate in percent (3.6 for 3.6%)
        years: Loan term in years

    Returns:
        Monthly payment amount (unrounded)
    """
    monthly_rate = annual_rate_pct / 100 / 12
    num_payments = years * 12

    if monthly_rate == 0:
        return principal / num_payments

    return principal * monthly_rate / (1 - (1 + monthly_rate) ** -num_payments)


def compose_monthly_payment(
    principal: float,
    inputs: LoanInputs,
    years: Optional[int] = None,
    overdrive: Optional[float] = None,
    injection: Optional[float] = None,
) -> PaymentBreakdown:
    """
    Build the full monthly payment for a principal under the given inputs.

    ``years``, ``overdrive`` and ``injection`` override the corresponding
    fields of ``inputs`` so the solver, the comparator and the optimizer can
    vary one dimension at a time.
    """
    if years is None:
        years = inputs.credit_years
    if overdrive is None:
        overdrive = inputs.payment_overdrive
    if injection is None:
        injection = inputs.income_injection

    base = compute_monthly_payment(principal, inputs.interest_rate_single, years)
    principal_interest = base * (1 + overdrive / 100)
    insurance = principal * (inputs.insurance_yearly_rate / 100) / 12
    injection_amount = inputs.monthly_income * (injection / 100)

    return PaymentBreakdown(
        base_principal_interest=base,
        principal_interest=principal_interest,
        insurance=insurance,
        property_tax=inputs.property_tax,
        injection=injection_amount,
        total=principal_interest + insurance + inputs.property_tax + injection_amount,
    )


def iter_amortization(
    principal: float,
    annual_rate_pct: float,
    monthly_payment: float,
    injection: float = 0.0,
    max_months: int = MAX_MONTHS,
) -> Iterator[AmortizationStep]:
    """
    Yield one step per month until the loan is retired or the cap is reached.

    The principal paid each month is clamped into ``[0, balance]``: a payment
    that does not cover the interest retires nothing, and the last payment
    never overshoots the balance.
    """
    monthly_rate = annual_rate_pct / 100 / 12
    amortizing = monthly_payment + injection
    balance = principal
    month = 0

    while balance > 0 and month < max_months:
        month += 1
        interest = balance * monthly_rate
        principal_paid = min(max(amortizing - interest, 0.0), balance)
        balance -= principal_paid

        yield month, interest, principal_paid, balance

        if balance <= BALANCE_TOLERANCE:
            break


def payoff_totals(
    principal: float,
    annual_rate_pct: float,
    monthly_payment: float,
    injection: float = 0.0,
    max_months: int = MAX_MONTHS,
) -> Tuple[int, float, float]:
    """
    Run the same monthly steps as iter_amortization with plain floats.

    Returns:
        Tuple of (months simulated, total interest, remaining balance)
    """
    monthly_rate = annual_rate_pct / 100 / 12
    amortizing = monthly_payment + injection
    balance = principal
    month = 0
    total_interest = 0.0

    while balance > 0 and month < max_months:
        month += 1
        interest = balance * monthly_rate
        total_interest += interest
        balance -= min(max(amortizing - interest, 0.0), balance)
        if balance <= BALANCE_TOLERANCE:
            break

    return month, total_interest, balance


def amortize(
    principal: float,
    annual_rate_pct: float,
    monthly_payment: float,
    injection: float = 0.0,
    max_months: int = MAX_MONTHS,
) -> PayoffSummary:
    """
    Run a loan to payoff and summarise the months and interest it took.

    Args:
        principal: Starting balance
        annual_rate_pct: Annual interest rate in percent
        monthly_payment: P&I payment applied each month
        injection: Additional amount applied to the loan each month
        max_months: Hard cap on simulated months

    Returns:
        PayoffSummary with months to payoff, total interest and final balance
    """
    months, total_interest, balance = payoff_totals(
        principal, annual_rate_pct, monthly_payment, injection, max_months
    )

    if balance > BALANCE_TOLERANCE:
        logger.warning(
            f"Loan of {principal:.2f} not retired after {months} months, "
            f"{balance:.2f} left"
        )

    return PayoffSummary(
        months_to_payoff=months,
        total_interest=total_interest,
        final_balance=max(balance, 0.0),
    )
