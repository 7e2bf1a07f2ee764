"""
Loan parameter record shared by every calculation in the planner.

All rates are expressed in percent (``3.7`` means 3.7%), amounts in the
account currency and durations in years.
"""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

# Maximum share of monthly income a lender accepts for the housing payment.
DEBT_RATIO_MAX = 0.37

# Hard cap on simulated months (50 years).
MAX_MONTHS = 600

# Balance under which a loan is considered retired.
BALANCE_TOLERANCE = 0.1


class FrozenRecord(BaseModel):
    """Immutable record serialised with camelCase field names."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True,
        extra="forbid",
    )


class LoanInputs(FrozenRecord):
    """Parameters describing a single financed rental property."""

    property_price: float = Field(..., ge=0, description="Purchase price")
    manual_down_payment: float = Field(
        default=0, ge=0, description="Cash brought to the purchase"
    )
    notary_fees_rate: float = Field(
        default=0, ge=0, description="Notary fees (% of price)"
    )
    insurance_yearly_rate: float = Field(
        default=0, ge=0, description="Borrower insurance (% of principal per year)"
    )
    monthly_income: float = Field(default=0, ge=0, description="Net monthly income")
    credit_years: int = Field(..., ge=1, le=50, description="Loan duration in years")
    interest_rate_single: float = Field(
        ..., ge=0, description="Annual nominal interest rate (%)"
    )
    payment_overdrive: float = Field(
        default=0, ge=0, description="Boost applied to the P&I payment (%)"
    )
    income_injection: float = Field(
        default=0, ge=0, description="Share of income added to the payment (%)"
    )
    property_tax: float = Field(default=0, ge=0, description="Monthly property tax")
    monthly_rent: float = Field(default=0, ge=0, description="Gross monthly rent")
    monthly_expenses: float = Field(
        default=0, ge=0, description="Monthly landlord expenses"
    )
    occupancy_rate: float = Field(
        default=100, ge=0, description="Share of the time the unit is rented (%)"
    )
    rent_indexation_rate: float = Field(
        default=0, ge=0, description="Annual rent increase (%)"
    )
    property_appreciation_rate: float = Field(
        default=0, ge=0, description="Annual property value increase (%)"
    )

    @property
    def borrowed_principal(self) -> float:
        """Loan amount; a down payment above the price borrows nothing."""
        return max(self.property_price - self.manual_down_payment, 0.0)

    @property
    def notary_fees(self) -> float:
        return self.property_price * (self.notary_fees_rate / 100)

    @property
    def initial_cash_invested(self) -> float:
        """Down payment plus notary fees."""
        return self.manual_down_payment + self.notary_fees

    @property
    def effective_rent(self) -> float:
        """Gross rent scaled by the occupancy rate."""
        return self.monthly_rent * (self.occupancy_rate / 100)

    @property
    def income_injection_amount(self) -> float:
        return self.monthly_income * (self.income_injection / 100)

    def debt_ratio(self, monthly_payment: float) -> float:
        """Housing payment as a share of income (0 when there is no income)."""
        if self.monthly_income <= 0:
            return 0.0
        return monthly_payment / self.monthly_income


def create_sample_loan_inputs() -> LoanInputs:
    """Create a sample rental investment for testing purposes."""
    return LoanInputs(
        property_price=250000.0,
        manual_down_payment=25000.0,
        notary_fees_rate=8.0,
        insurance_yearly_rate=0.3,
        monthly_income=4000.0,
        credit_years=25,
        interest_rate_single=3.7,
        payment_overdrive=10.0,
        income_injection=0.0,
        property_tax=100.0,
        monthly_rent=1200.0,
        monthly_expenses=150.0,
        occupancy_rate=90.0,
        rent_indexation_rate=1.0,
        property_appreciation_rate=1.0,
    )
