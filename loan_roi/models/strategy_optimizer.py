"""
Payoff strategy search.

This module scans a grid of payment-overdrive and income-injection settings,
keeps the combinations whose payment fits the debt-ratio ceiling, and picks
the best candidate for each named strategy:

- Max Speed: highest monthly payment (fastest payoff the ratio allows)
- Balanced Approach: most interest saved among combinations that save at
  least five years while keeping the ratio under 33%
- Cashflow Positive: fastest payoff among combinations whose rent still
  covers the payment

Each bucket is chosen by reducing the full candidate list, which is ordered
by overdrive then injection; on equal scores the earlier candidate wins.
"""

import logging
from typing import Callable, List, Optional, Tuple

import numpy as np
from pydantic import Field, model_validator

from .loan import DEBT_RATIO_MAX, FrozenRecord, LoanInputs
from .payment import compose_monthly_payment, payoff_totals

logger = logging.getLogger(__name__)

DEBT_RATIO_TOLERANCE = 1e-9
BALANCED_MIN_YEARS_SAVED = 5.0
BALANCED_MAX_RATIO = 0.33

MAX_SPEED = "Max Speed"
BALANCED_APPROACH = "Balanced Approach"
CASHFLOW_POSITIVE = "Cashflow Positive"

STRATEGY_DESCRIPTIONS = {
    MAX_SPEED: "Uses the full debt capacity to retire the loan as fast as possible.",
    BALANCED_APPROACH: (
        "Saves the most interest while keeping the debt ratio under 33% "
        "and finishing at least 5 years early."
    ),
    CASHFLOW_POSITIVE: (
        "Fastest payoff that still keeps the rental cashflow positive."
    ),
}


class StrategyGrid(FrozenRecord):
    """Overdrive and injection values (in percent) scanned by the optimizer."""

    overdrive_max: float = Field(default=100.0, ge=0)
    overdrive_step: float = Field(default=5.0, gt=0)
    injection_max: float = Field(default=40.0, ge=0)
    injection_step: float = Field(default=2.0, gt=0)

    @model_validator(mode="after")
    def validate_grid_size(self) -> "StrategyGrid":
        points = (self.overdrive_max / self.overdrive_step + 1) * (
            self.injection_max / self.injection_step + 1
        )
        if points > 10_000:
            raise ValueError(f"Strategy grid too large: {int(points)} points")
        return self

    @classmethod
    def coarse(cls) -> "StrategyGrid":
        """Smaller 11x11 grid: overdrive 0-100 by 10, injection 0-50 by 5."""
        return cls(
            overdrive_max=100.0,
            overdrive_step=10.0,
            injection_max=50.0,
            injection_step=5.0,
        )

    def overdrive_values(self) -> List[float]:
        return _grid_values(self.overdrive_max, self.overdrive_step)

    def injection_values(self) -> List[float]:
        return _grid_values(self.injection_max, self.injection_step)


class StrategyResult(FrozenRecord):
    """A named overdrive/injection combination and its payoff outcome."""

    name: str = Field(default="", description="Strategy name")
    description: str = Field(default="", description="What the strategy favours")
    overdrive: float = Field(..., ge=0, description="Payment overdrive (%)")
    injection: float = Field(..., ge=0, description="Income injection (%)")
    monthly_payment: float = Field(..., ge=0, description="Total monthly payment")
    months_count: int = Field(..., ge=0, description="Months to payoff")
    total_interest: float = Field(..., ge=0)
    interest_saved: float = Field(..., ge=0, description="Versus the plain annuity")
    years_saved: float = Field(..., ge=0, description="Versus the nominal duration")
    net_rent_cashflow: float = Field(..., description="Year-1 net rental cashflow")
    debt_ratio: float = Field(..., ge=0)

    @property
    def parameters(self) -> Tuple[float, float]:
        return (self.overdrive, self.injection)


def _grid_values(maximum: float, step: float) -> List[float]:
    # Integer indices keep float steps from drifting past the maximum
    count = int(np.floor(maximum / step + 1e-9)) + 1
    return [float(v) for v in np.arange(count) * step]


def _select_best(
    candidates: List[StrategyResult],
    eligible: Callable[[StrategyResult], bool],
    score: Callable[[StrategyResult], float],
) -> Optional[StrategyResult]:
    """Highest-scoring eligible candidate; the first one wins on ties."""
    pool = [c for c in candidates if eligible(c)]
    if not pool:
        return None
    # max() keeps the first maximal element in iteration order
    return max(pool, key=score)


class StrategyOptimizer:
    """Exhaustive search over overdrive and injection settings."""

    def __init__(self, grid: Optional[StrategyGrid] = None):
        self.grid = grid or StrategyGrid()

    def evaluate_grid(self, inputs: LoanInputs) -> List[StrategyResult]:
        """
        Evaluate every feasible grid point.

        Returns:
            Unnamed candidates ordered by overdrive, then injection
        """
        principal = inputs.borrowed_principal
        rate = inputs.interest_rate_single

        baseline = compose_monthly_payment(
            principal, inputs, overdrive=0.0, injection=0.0
        )
        _, baseline_interest, _ = payoff_totals(
            principal, rate, baseline.principal_interest
        )
        rent_margin = inputs.effective_rent - inputs.monthly_expenses

        candidates: List[StrategyResult] = []
        for overdrive in self.grid.overdrive_values():
            principal_interest = baseline.base_principal_interest * (
                1 + overdrive / 100
            )
            for injection in self.grid.injection_values():
                injection_amount = inputs.monthly_income * (injection / 100)
                total = (
                    principal_interest
                    + baseline.insurance
                    + baseline.property_tax
                    + injection_amount
                )
                ratio = inputs.debt_ratio(total)
                if ratio > DEBT_RATIO_MAX + DEBT_RATIO_TOLERANCE:
                    # The ratio only grows with injection
                    break

                months, total_interest, _ = payoff_totals(
                    principal, rate, principal_interest, injection_amount
                )
                candidates.append(
                    StrategyResult(
                        overdrive=overdrive,
                        injection=injection,
                        monthly_payment=total,
                        months_count=months,
                        total_interest=total_interest,
                        interest_saved=max(baseline_interest - total_interest, 0.0),
                        years_saved=max(inputs.credit_years - months / 12, 0.0),
                        net_rent_cashflow=rent_margin - total,
                        debt_ratio=ratio,
                    )
                )

        logger.debug(f"Strategy grid produced {len(candidates)} feasible combinations")
        return candidates

    @staticmethod
    def classify(candidates: List[StrategyResult]) -> List[StrategyResult]:
        """Pick the best candidate per named strategy, without duplicates."""
        picks = [
            (
                MAX_SPEED,
                _select_best(candidates, lambda c: True, lambda c: c.monthly_payment),
            ),
            (
                BALANCED_APPROACH,
                _select_best(
                    candidates,
                    lambda c: c.years_saved >= BALANCED_MIN_YEARS_SAVED
                    and c.debt_ratio < BALANCED_MAX_RATIO,
                    lambda c: c.interest_saved,
                ),
            ),
            (
                CASHFLOW_POSITIVE,
                _select_best(
                    candidates,
                    lambda c: c.net_rent_cashflow >= 0,
                    lambda c: -c.months_count,
                ),
            ),
        ]

        strategies: List[StrategyResult] = []
        seen = set()
        for name, pick in picks:
            if pick is None or pick.parameters in seen:
                continue
            seen.add(pick.parameters)
            strategies.append(
                pick.model_copy(
                    update={"name": name, "description": STRATEGY_DESCRIPTIONS[name]}
                )
            )
        return strategies

    def find_strategies(self, inputs: LoanInputs) -> List[StrategyResult]:
        """
        Search the grid and return the named strategies.

        Args:
            inputs: Loan parameters (overdrive and injection are ignored)

        Returns:
            Up to three distinct strategies; empty when nothing fits the ratio
        """
        return self.classify(self.evaluate_grid(inputs))


def find_strategies(
    inputs: LoanInputs, grid: Optional[StrategyGrid] = None
) -> List[StrategyResult]:
    """Search payoff strategies on the given (or default 21x21) grid."""
    return StrategyOptimizer(grid).find_strategies(inputs)
