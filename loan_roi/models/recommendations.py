"""
Plain-language advice and summaries built from a simulation result.

The recommendation rules are deliberately simple thresholds. The analysis
summary is the text handed to the text-generation collaborator; its labels
and units are kept stable so the generated reports stay consistent.
"""

from typing import List, Optional, Sequence

from .amortization_engine import SimulationResult
from .loan import DEBT_RATIO_MAX, LoanInputs
from .multi_scenario import MultiScenarioResult
from .strategy_optimizer import StrategyResult

LOW_DOWN_PAYMENT_SHARE = 0.1


def k_format(value: float) -> str:
    """Format an amount compactly in euros (``€1.25M``, ``€12.3k``, ``€12.50``)."""
    if abs(value) >= 1_000_000:
        return f"€{value / 1_000_000:.2f}M"
    if abs(value) >= 1000:
        return f"€{value / 1000:.1f}k"
    return f"€{value:.2f}"


def format_years(value) -> str:
    """Render a break-even value, passing sentinels like 'Never' through."""
    if isinstance(value, str):
        return value
    return f"{value:.1f}"


def get_recommendations(inputs: LoanInputs, result: SimulationResult) -> List[str]:
    """
    Derive short recommendations from a simulation.

    Args:
        inputs: Parameters the simulation ran with
        result: Simulation outcome

    Returns:
        Recommendation sentences, most pressing first
    """
    recs: List[str] = []

    if inputs.manual_down_payment < inputs.property_price * LOW_DOWN_PAYMENT_SHARE:
        recs.append(
            f"Down payment {k_format(inputs.manual_down_payment)} is low (<10%). "
            "Increasing it reduces risk and monthly payments."
        )

    if result.debt_ratio > DEBT_RATIO_MAX:
        recs.append(
            f"Debt Ratio Alert: {result.debt_ratio * 100:.1f}% > "
            f"{DEBT_RATIO_MAX * 100:.0f}%. "
            "You must lower the loan amount or increase income."
        )

    if result.net_rent_cashflow < 0:
        recs.append(
            f"Negative Cashflow: You pay {k_format(abs(result.net_rent_cashflow))} "
            "monthly from your pocket."
        )
        if result.total_monthly_economic_gain > 0:
            recs.append(
                f"HOWEVER: You are gaining "
                f"{k_format(result.total_monthly_economic_gain)} in total wealth "
                'monthly (Equity + Appreciation). This is a "forced savings" plan.'
            )
    else:
        recs.append(
            f"Positive Cashflow! You earn {k_format(result.net_rent_cashflow)} monthly."
        )

    recs.append(
        "Real Profit Break-Even: It takes "
        f"{format_years(result.equity_break_even_years)} years for your Net Worth "
        "to exceed your Total Cash Invested."
    )

    return recs


def build_analysis_summary(
    inputs: LoanInputs,
    result: SimulationResult,
    scenarios: Optional[Sequence[MultiScenarioResult]] = None,
    strategies: Optional[Sequence[StrategyResult]] = None,
) -> str:
    """Build the advisor prompt describing the investment and its outcome."""
    lines = [
        "Act as a senior financial advisor and real estate expert. Analyze the "
        "following real estate investment scenario and provide a concise, "
        "actionable report.",
        "",
        "**Investment Profile:**",
        f"- Property Price: {k_format(inputs.property_price)}",
        f"- Down Payment: {k_format(inputs.manual_down_payment)}",
        f"- Loan Duration: {inputs.credit_years} years",
        f"- Interest Rate: {inputs.interest_rate_single}%",
        f"- Monthly Income: {k_format(inputs.monthly_income)}",
        "",
        "**Simulation Results:**",
        f"- Monthly Mortgage Payment: {k_format(result.final_monthly_payment)}",
        f"- Debt Ratio: {result.debt_ratio * 100:.2f}% "
        f"(Limit: {DEBT_RATIO_MAX * 100:.0f}%)",
        f"- Monthly Cashflow: {k_format(result.net_rent_cashflow)}",
        f"- Total Economic Gain (Monthly): "
        f"{k_format(result.total_monthly_economic_gain)}",
        f"- Real Profit Break-Even: "
        f"{format_years(result.equity_break_even_years)} years",
        f"- Total ROI (Annualized): {result.total_roi:.2f}%",
    ]

    if scenarios:
        lines += ["", "**Duration Comparison:**"]
        for scenario in scenarios:
            lines.append(
                f"- {scenario.duration} years: payment "
                f"{k_format(scenario.monthly_payment)}, interest "
                f"{k_format(scenario.total_interest)}, ratio "
                f"{scenario.debt_ratio * 100:.1f}%"
                f"{'' if scenario.is_viable else ' (not viable)'}"
            )

    if strategies:
        lines += ["", "**Payoff Strategies:**"]
        for strategy in strategies:
            lines.append(
                f"- {strategy.name}: overdrive {strategy.overdrive:.0f}%, "
                f"injection {strategy.injection:.0f}%, payoff in "
                f"{strategy.months_count / 12:.1f} years, saves "
                f"{k_format(strategy.interest_saved)} in interest"
            )

    lines += [
        "",
        "**Task:**",
        "1. **Verdict**: Is this a good investment? (Yes/No/Caution)",
        "2. **Risk Analysis**: Highlight key risks (cashflow, debt ratio, market).",
        "3. **Strategy**: Suggest 1-2 specific moves to improve this.",
        "4. **Explanation**: Briefly explain why the cashflow might be negative "
        'but the investment is still "profitable" (Economic Gain).',
        "",
        "Keep it professional, encouraging, but realistic. Format with Markdown.",
    ]
    return "\n".join(lines)
