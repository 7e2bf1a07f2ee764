"""Maximum borrowable principal under the debt-ratio ceiling."""

import logging

from .loan import DEBT_RATIO_MAX, LoanInputs
from .payment import compose_monthly_payment

logger = logging.getLogger(__name__)

MAX_LOAN_UPPER_BOUND = 3_000_000.0
MAX_LOAN_ITERATIONS = 50


def calc_max_loan(inputs: LoanInputs) -> float:
    """
    Binary-search the largest principal whose payment fits the debt ratio.

    The payment for each candidate principal is composed exactly as the
    simulation composes it (overdrive, insurance, property tax, injection)
    and compared against ``monthly_income * DEBT_RATIO_MAX``. The search runs
    a fixed number of halvings over ``[0, MAX_LOAN_UPPER_BOUND]`` so results
    are reproducible.

    Args:
        inputs: Loan parameters (the principal fields are ignored)

    Returns:
        Last feasible principal found (0 when nothing is affordable)
    """
    max_payment = inputs.monthly_income * DEBT_RATIO_MAX
    low, high = 0.0, MAX_LOAN_UPPER_BOUND

    for _ in range(MAX_LOAN_ITERATIONS):
        mid = (low + high) / 2
        payment = compose_monthly_payment(mid, inputs)

        if payment.total > max_payment:
            high = mid
        else:
            low = mid

    logger.debug(f"Max loan for income {inputs.monthly_income:.2f}: {low:.2f}")
    return low
