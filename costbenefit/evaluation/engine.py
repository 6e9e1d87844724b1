"""EvaluationEngine -- threshold-driven narrative for a calculation pass.

The narrative is an ordered list of independent segments (financial health,
timeline, resource allocation, payment structure). A segment is either
empty or one templated text block; empty segments are dropped and the rest
are joined with a blank line.
"""

from __future__ import annotations

import math
from typing import Optional

from costbenefit.config.loader import get_default_config
from costbenefit.config.schema import AnalysisConfig
from costbenefit.engine.result import ROIResult
from costbenefit.models.enums import BusinessModel, ROIRating
from costbenefit.models.inputs import InputSet
from costbenefit.numbers import safe_ratio

SEGMENT_SEPARATOR = "\n\n"

_ROI_HEADLINES = {
    ROIRating.EXCELLENT: "Excellent return on investment",
    ROIRating.GOOD: "Good return on investment",
    ROIRating.MODERATE: "Moderate return on investment",
    ROIRating.LOW: "Low return on investment",
    ROIRating.LOSS: "Loss-making investment",
}


class EvaluationEngine:
    """Maps ROI, break-even and inputs to qualitative feedback."""

    def __init__(self, config: Optional[AnalysisConfig] = None) -> None:
        self._config = config or get_default_config()

    def rate_roi(self, roi_percentage: float) -> ROIRating:
        thresholds = self._config.roi_thresholds
        if roi_percentage >= thresholds.excellent:
            return ROIRating.EXCELLENT
        if roi_percentage >= thresholds.good:
            return ROIRating.GOOD
        if roi_percentage >= thresholds.moderate:
            return ROIRating.MODERATE
        if roi_percentage >= thresholds.low:
            return ROIRating.LOW
        return ROIRating.LOSS

    @staticmethod
    def headline(rating: ROIRating) -> str:
        return _ROI_HEADLINES[rating]

    def evaluate(self, roi: ROIResult, breakeven: float, inputs: InputSet) -> str:
        segments = [
            self.evaluate_financials(roi, breakeven),
            self.evaluate_timeline(inputs),
            self.evaluate_resources(inputs),
            self.evaluate_business_model(inputs),
        ]
        return SEGMENT_SEPARATOR.join(s for s in segments if s)

    def evaluate_financials(self, roi: ROIResult, breakeven: float) -> str:
        percentage = roi.base.percentage

        if roi.base.value <= 0:
            return (
                "Warning: the project operates at a loss. "
                f"With a negative ROI of {percentage:.1f}%, review the cost "
                "structure or increase revenue."
            )

        # Only reachable on direct calls: in a full pass an unreachable
        # break-even always comes with a loss, handled above.
        if math.isinf(breakeven):
            return (
                "Warning: break-even is not reachable. "
                "Recurring revenue never recovers the remaining costs."
            )

        if breakeven > self._config.evaluation.breakeven_warning_months:
            return (
                "Warning: long break-even time. "
                f"The project will need {math.ceil(breakeven)} months to break even. "
                "Consider strategies to speed up the return on investment."
            )

        match self.rate_roi(percentage):
            case ROIRating.EXCELLENT:
                return (
                    "Excellent profitability. "
                    f"With an ROI of {percentage:.1f}% the project shows very "
                    "strong return prospects."
                )
            case ROIRating.GOOD:
                return (
                    "Good profitability. "
                    f"With an ROI of {percentage:.1f}% the project shows good "
                    "return prospects."
                )
            case ROIRating.MODERATE:
                return (
                    "Moderate profitability. "
                    f"An ROI of {percentage:.1f}% indicates fair return prospects."
                )
            case ROIRating.LOW:
                return (
                    "Warning: low profitability. "
                    f"An ROI of {percentage:.1f}% leaves limited margins. "
                    "Evaluate possible optimisations."
                )
            case _:
                return (
                    "Warning: critical profitability. "
                    f"An ROI of {percentage:.1f}% is very low. "
                    "Review the business model carefully."
                )

    def evaluate_timeline(self, inputs: InputSet) -> str:
        settings = self._config.evaluation
        weeks = f"{inputs.dev_weeks:g}"
        warnings: list[str] = []

        if inputs.dev_weeks > settings.long_timeline_weeks:
            warnings.append(
                f"The development time ({weeks} weeks) is significant. "
                "Plan the work carefully to avoid delays."
            )
        if inputs.dev_weeks < settings.short_timeline_weeks:
            warnings.append(
                f"The estimate of {weeks} weeks may be optimistic. "
                "Double-check the plan."
            )

        if not warnings:
            return ""
        return "Timeline:\n" + "\n".join(warnings)

    def evaluate_resources(self, inputs: InputSet) -> str:
        settings = self._config.evaluation
        occupation = f"{inputs.dev_occupation:g}"

        if inputs.dev_occupation > settings.high_occupation:
            return (
                "Warning: resource saturation risk. "
                f"An occupation of {occupation}% may cause delays and team stress. "
                "Consider adding resources or redistributing the load."
            )
        if inputs.dev_occupation < settings.low_occupation:
            return (
                "Warning: low allocation. "
                f"An occupation of {occupation}% may signal low priority "
                "or a risk of schedule slippage."
            )
        return ""

    def evaluate_business_model(self, inputs: InputSet) -> str:
        settings = self._config.evaluation

        if inputs.business_model is BusinessModel.COMMISSIONED:
            upfront_ratio = safe_ratio(inputs.upfront_payment, inputs.base_costs)
            if upfront_ratio < settings.min_upfront_ratio:
                return (
                    "Payment structure: the upfront payment is low "
                    f"({upfront_ratio * 100:.1f}%). Consider intermediate "
                    "milestones to improve cash flow."
                )
            return ""

        # No one-off payments: there is no mix to compare against.
        if inputs.one_off_revenue <= 0:
            return ""
        recurring = (
            inputs.recurring_revenue * inputs.expected_users * self._config.months_period
        )
        if recurring / inputs.one_off_revenue < settings.min_recurring_ratio:
            return (
                "Revenue mix: recurring revenue is low compared to one-off "
                "payments. Evaluate strategies to grow recurring value."
            )
        return ""
