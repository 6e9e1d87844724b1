"""The six risk factors behind the composite risk score.

Each function is a pure calculation: it receives the InputSet, the
CostResult and the RiskFactorSettings and returns a RiskContribution. A
factor only adds narrative when its own risk crosses its own threshold.
"""

from __future__ import annotations

import math
import sys

from costbenefit.config.schema import RiskFactorSettings
from costbenefit.engine.result import CostResult, RiskContribution
from costbenefit.models.enums import BusinessModel
from costbenefit.models.inputs import InputSet
from costbenefit.numbers import clamp, round_half_up, safe_ratio
from costbenefit.risk.registry import register_factor

# exp() overflows just above 709.
_MAX_GROWTH_EXPONENT = 700.0


@register_factor(
    factor_id="occupation",
    label="Team Occupation",
    order=1,
    description=(
        "Saturation risk once occupation exceeds the baseline. "
        "Formula: max(0, (occupation - 50) / 50 x 25)."
    ),
)
def occupation_risk(
    inputs: InputSet, costs: CostResult, settings: RiskFactorSettings
) -> RiskContribution:
    baseline = settings.occupation_baseline
    factor = (inputs.dev_occupation - baseline) / baseline
    risk = max(0.0, factor * settings.occupation_max_risk)

    if risk > settings.occupation_narrative_threshold:
        return RiskContribution(
            risk,
            details=(
                f"High risk of team saturation ({inputs.dev_occupation:g}% occupation)",
            ),
            mitigations=("Consider adding resources to the team",),
        )
    return RiskContribution(risk)


@register_factor(
    factor_id="duration",
    label="Project Duration",
    order=2,
    description=(
        "Grows supralinearly with every block of weeks past the threshold. "
        "Formula: (weeks_over / 4) x 10 x 1.05^(weeks_over / 4)."
    ),
)
def duration_risk(
    inputs: InputSet, costs: CostResult, settings: RiskFactorSettings
) -> RiskContribution:
    weeks_over = max(0.0, inputs.dev_weeks - settings.duration_week_threshold)
    periods = weeks_over / settings.duration_week_threshold
    base_risk = periods * settings.duration_base_risk
    exponent = min(periods * math.log(settings.duration_growth_base), _MAX_GROWTH_EXPONENT)
    risk = base_risk * math.exp(exponent)
    if math.isinf(risk):
        # contribution must stay finite
        risk = sys.float_info.max

    weeks = f"{inputs.dev_weeks:g}"
    if risk > settings.duration_high_risk:
        return RiskContribution(
            risk,
            details=(f"Critical project duration ({weeks} weeks)",),
            mitigations=(
                "Split the project into independent phases",
                "Adopt an incremental approach with frequent releases",
                "Increase the frequency of reviews with the client",
            ),
        )
    if risk > settings.duration_medium_risk:
        return RiskContribution(
            risk,
            details=(f"Long project duration ({weeks} weeks)",),
            mitigations=(
                "Plan intermediate review milestones",
                "Define clear objectives for each phase",
            ),
        )
    return RiskContribution(risk)


def _recurring_risk(
    inputs: InputSet, costs: CostResult, settings: RiskFactorSettings
) -> tuple[float, float]:
    """Return (risk, months to recover costs from recurring revenue).

    No recurring revenue means the costs are never recovered: maximal risk.
    """
    monthly_revenue = inputs.recurring_revenue * inputs.expected_users
    if monthly_revenue <= 0:
        return settings.financial_max_risk, math.inf

    months = costs.total_costs / monthly_revenue
    risk = clamp(
        (months - settings.financial_target_breakeven_months)
        * settings.financial_risk_per_month,
        0.0,
        settings.financial_max_risk,
    )
    return risk, months


def _upfront_risk(
    inputs: InputSet, costs: CostResult, settings: RiskFactorSettings
) -> tuple[float, float]:
    """Return (risk, upfront payment / total costs)."""
    # Nothing to cover means nothing is exposed.
    ratio = safe_ratio(inputs.upfront_payment, costs.total_costs, default=1.0)
    risk = max(0.0, (1 - ratio) * settings.financial_max_risk)
    return risk, ratio


@register_factor(
    factor_id="financial",
    label="Financial Exposure",
    order=3,
    description=(
        "saas: payback beyond 12 months; commissioned: share of costs not "
        "covered upfront; mixed: 0.4 x upfront + 0.6 x recurring."
    ),
)
def financial_risk(
    inputs: InputSet, costs: CostResult, settings: RiskFactorSettings
) -> RiskContribution:
    threshold = settings.financial_narrative_threshold

    match inputs.business_model:
        case BusinessModel.SAAS:
            risk, months = _recurring_risk(inputs, costs, settings)
            if risk <= threshold:
                return RiskContribution(risk)
            if math.isinf(months):
                detail = "No recurring revenue to recover the investment"
            else:
                detail = f"Long payback period ({round_half_up(months)} months)"
            return RiskContribution(
                risk,
                details=(detail,),
                mitigations=(
                    "Consider more aggressive user acquisition strategies",
                    "Evaluate raising the price per user",
                ),
            )

        case BusinessModel.COMMISSIONED:
            risk, ratio = _upfront_risk(inputs, costs, settings)
            if risk <= threshold:
                return RiskContribution(risk)
            return RiskContribution(
                risk,
                details=(f"Low upfront payment relative to costs ({ratio * 100:.1f}%)",),
                mitigations=("Negotiate milestone-based intermediate payments",),
            )

        case BusinessModel.MIXED:
            upfront, _ = _upfront_risk(inputs, costs, settings)
            recurring, _ = _recurring_risk(inputs, costs, settings)
            risk = (
                upfront * settings.mixed_upfront_weight
                + recurring * settings.mixed_recurring_weight
            )
            if upfront <= threshold and recurring <= threshold:
                return RiskContribution(risk)
            return RiskContribution(
                risk,
                details=("Unbalanced revenue mix",),
                mitigations=("Consider a hybrid pricing model with a setup fee",),
            )

        case _:
            raise ValueError(f"Unsupported business model: {inputs.business_model!r}")


@register_factor(
    factor_id="margin",
    label="Project Margin",
    order=4,
    description=(
        "Tiered on the 12-month margin: loss -> 35, < 15% -> 25, < 30% -> 15."
    ),
)
def margin_risk(
    inputs: InputSet, costs: CostResult, settings: RiskFactorSettings
) -> RiskContribution:
    total_costs = costs.total_costs
    if total_costs <= 0:
        return RiskContribution()

    revenue = inputs.one_off_revenue + (
        inputs.recurring_revenue * inputs.expected_users * settings.margin_months
    )
    margin = revenue - total_costs
    margin_pct = margin / total_costs * 100

    if margin < 0:
        return RiskContribution(
            settings.margin_loss_risk,
            details=(f"Project operates at a loss ({margin_pct:.1f}% margin)",),
            mitigations=(
                "Urgently review costs and/or increase revenue",
                "Consider renegotiating the contract",
            ),
        )
    if margin_pct < settings.margin_low_pct:
        return RiskContribution(
            settings.margin_low_risk,
            details=(f"Very low margin ({margin_pct:.1f}%)",),
            mitigations=(
                "Identify cost optimisation opportunities",
                "Evaluate possible revenue increases",
            ),
        )
    if margin_pct < settings.margin_below_average_pct:
        return RiskContribution(
            settings.margin_below_average_risk,
            details=(f"Below-average margin ({margin_pct:.1f}%)",),
            mitigations=("Monitor costs closely during execution",),
        )
    return RiskContribution()


@register_factor(
    factor_id="user_variability",
    label="User Estimate Variability",
    order=5,
    description=(
        "Spread between the scenario user counts. Formula: "
        "min(20, max(|opt - exp|, |exp - pess|) / exp x 20), x1.2 for saas."
    ),
)
def user_variability_risk(
    inputs: InputSet, costs: CostResult, settings: RiskFactorSettings
) -> RiskContribution:
    deviation = max(
        abs(inputs.optimistic_users - inputs.expected_users),
        abs(inputs.expected_users - inputs.pessimistic_users),
    )
    variability = safe_ratio(deviation, inputs.expected_users)
    base_risk = min(
        settings.variability_max_risk, variability * settings.variability_factor
    )
    if inputs.business_model is BusinessModel.SAAS:
        risk = base_risk * settings.variability_saas_multiplier
    else:
        risk = base_risk

    if risk > settings.variability_narrative_threshold:
        return RiskContribution(
            risk,
            details=(f"High variability in user estimates (±{variability * 100:.1f}%)",),
            mitigations=("Run preliminary market tests",),
        )
    return RiskContribution(risk)


@register_factor(
    factor_id="user_base",
    label="User Base",
    order=6,
    description=(
        "Small initial user bases are fragile. Commissioned projects instead "
        "get a fixed penalty when they carry recurring revenue."
    ),
)
def user_base_risk(
    inputs: InputSet, costs: CostResult, settings: RiskFactorSettings
) -> RiskContribution:
    if inputs.business_model is BusinessModel.COMMISSIONED:
        if inputs.recurring_revenue > 0:
            return RiskContribution(
                settings.commissioned_recurring_risk,
                details=(
                    "The project is commissioned but includes recurring revenue. "
                    "Check whether this makes sense for this type of project",
                ),
                mitigations=(
                    "Consider a one-off payment model instead of recurring pricing",
                ),
            )
        return RiskContribution()

    if inputs.expected_users < settings.user_base_small_threshold:
        risk = settings.user_base_small_risk
    elif inputs.expected_users < settings.user_base_optimal_threshold:
        risk = settings.user_base_medium_risk
    else:
        risk = 0.0

    if risk > settings.user_base_narrative_threshold:
        return RiskContribution(
            risk,
            details=(
                "Initial user base below the optimal threshold of "
                f"{settings.user_base_optimal_threshold:g} users "
                f"({inputs.expected_users:g} users)",
            ),
        )
    return RiskContribution(risk)
