"""Cost, revenue, ROI and break-even formulas.

Each function is a pure calculation with no side effects. All monetary
values are in the same currency as the input. Degenerate divisions resolve
to 0, except break-even, which resolves to ``math.inf`` when recurring
revenue can never close the gap.
"""

from __future__ import annotations

import math

from costbenefit.engine.result import (
    CostResult,
    RevenueResult,
    ROIResult,
    ScenarioROI,
)
from costbenefit.models.enums import Scenario
from costbenefit.models.inputs import InputSet

# Occupation above this percentage inflates total costs.
OCCUPATION_PENALTY_THRESHOLD = 50

# Fixed 4-week month approximation.
WEEKS_PER_MONTH = 4

DEFAULT_MONTHS_PERIOD = 12


def occupation_multiplier(dev_occupation: float) -> float:
    """Multiplier = 1 + max(0, (occupation - 50) / 100), i.e. within [1, 1.5]."""
    return 1 + max(0.0, (dev_occupation - OCCUPATION_PENALTY_THRESHOLD) / 100)


def compute_costs(inputs: InputSet) -> CostResult:
    """Total_Costs = (direct + indirect) x occupation_multiplier"""
    multiplier = occupation_multiplier(inputs.dev_occupation)
    return CostResult(
        total_costs=inputs.base_costs * multiplier,
        occupation_multiplier=multiplier,
    )


def total_revenue(
    inputs: InputSet,
    users: float,
    months_period: int = DEFAULT_MONTHS_PERIOD,
) -> float:
    """Revenue = upfront + final + recurring x months_period x users"""
    return inputs.one_off_revenue + inputs.recurring_revenue * months_period * users


def compute_revenues(
    inputs: InputSet,
    months_period: int = DEFAULT_MONTHS_PERIOD,
) -> RevenueResult:
    """Direct, recurring and per-scenario revenue for one pass."""
    monthly = inputs.recurring_revenue * inputs.expected_users
    return RevenueResult(
        direct=inputs.one_off_revenue,
        monthly=monthly,
        yearly=monthly * months_period,
        scenarios={
            Scenario.BASE: total_revenue(inputs, inputs.expected_users, months_period),
            Scenario.OPTIMISTIC: total_revenue(
                inputs, inputs.optimistic_users, months_period
            ),
            Scenario.PESSIMISTIC: total_revenue(
                inputs, inputs.pessimistic_users, months_period
            ),
        },
    )


def user_scenarios(inputs: InputSet) -> dict[Scenario, float]:
    return {
        Scenario.BASE: inputs.expected_users,
        Scenario.OPTIMISTIC: inputs.optimistic_users,
        Scenario.PESSIMISTIC: inputs.pessimistic_users,
    }


def scenario_roi(revenue: float, total_costs: float) -> ScenarioROI:
    """ROI_% = (revenue / costs - 1) x 100; zero-cost projects report 0%."""
    percentage = ((revenue / total_costs) - 1) * 100 if total_costs > 0 else 0.0
    return ScenarioROI(value=revenue - total_costs, percentage=percentage)


def compute_roi(costs: CostResult, revenues: RevenueResult) -> ROIResult:
    return ROIResult(
        scenarios={
            scenario: scenario_roi(revenue, costs.total_costs)
            for scenario, revenue in revenues.scenarios.items()
        }
    )


def compute_breakeven(
    costs: CostResult,
    revenues: RevenueResult,
    inputs: InputSet,
) -> float:
    """Months until cumulative revenue covers total costs.

    One-off payments are netted against costs first. If they already cover
    everything, the project breaks even when development ends. Otherwise
    monthly recurring revenue closes the rest, or never does (``math.inf``).
    """
    dev_months = inputs.dev_weeks / WEEKS_PER_MONTH
    remaining_costs = costs.total_costs - inputs.upfront_payment - inputs.final_payment

    if remaining_costs <= 0:
        return dev_months

    if revenues.monthly <= 0:
        return math.inf

    return dev_months + remaining_costs / revenues.monthly


def is_unreachable(breakeven: float) -> bool:
    return math.isinf(breakeven)
