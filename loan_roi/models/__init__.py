"""Financial models for loan simulation and payoff strategy search."""

from .loan import (
    DEBT_RATIO_MAX,
    MAX_MONTHS,
    LoanInputs,
    create_sample_loan_inputs,
)
from .payment import (
    PaymentBreakdown,
    PayoffSummary,
    amortize,
    compose_monthly_payment,
    compute_monthly_payment,
    iter_amortization,
    payoff_totals,
)
from .max_loan import calc_max_loan
from .amortization_engine import (
    AmortizationEngine,
    SimulationResult,
    TimelinePoint,
    simulate,
)
from .multi_scenario import (
    MultiScenarioComparator,
    MultiScenarioResult,
    calculate_multi_scenarios,
)
from .strategy_optimizer import (
    StrategyGrid,
    StrategyOptimizer,
    StrategyResult,
    find_strategies,
)
from .portfolio_projection import (
    PortfolioInputs,
    PortfolioProjector,
    PortfolioResult,
    PortfolioTimelinePoint,
    calculate_portfolio,
)
from .recommendations import build_analysis_summary, get_recommendations, k_format

__all__ = [
    "DEBT_RATIO_MAX",
    "MAX_MONTHS",
    "LoanInputs",
    "create_sample_loan_inputs",
    "PaymentBreakdown",
    "PayoffSummary",
    "amortize",
    "compose_monthly_payment",
    "compute_monthly_payment",
    "iter_amortization",
    "payoff_totals",
    "calc_max_loan",
    "AmortizationEngine",
    "SimulationResult",
    "TimelinePoint",
    "simulate",
    "MultiScenarioComparator",
    "MultiScenarioResult",
    "calculate_multi_scenarios",
    "StrategyGrid",
    "StrategyOptimizer",
    "StrategyResult",
    "find_strategies",
    "PortfolioInputs",
    "PortfolioProjector",
    "PortfolioResult",
    "PortfolioTimelinePoint",
    "calculate_portfolio",
    "build_analysis_summary",
    "get_recommendations",
    "k_format",
]
