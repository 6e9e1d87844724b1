"""Core calculation pipeline.

Takes one InputSet -> produces an AnalysisResult with costs, revenues, ROI,
break-even, evaluation narrative and risk report. The whole pipeline is
re-run on every call; nothing is cached between passes.
"""

from __future__ import annotations

import logging
from typing import Any, Mapping, Optional

from costbenefit.config.loader import get_default_config
from costbenefit.config.schema import AnalysisConfig
from costbenefit.engine.financials import (
    compute_breakeven,
    compute_costs,
    compute_revenues,
    compute_roi,
    user_scenarios,
)
from costbenefit.engine.result import AnalysisResult
from costbenefit.evaluation.engine import EvaluationEngine
from costbenefit.models.inputs import InputSet, normalize_inputs, validate_inputs
from costbenefit.risk.engine import RiskEngine

logger = logging.getLogger(__name__)


class CostBenefitAnalyzer:
    """Stateless orchestrator that runs the full cost-benefit analysis."""

    def __init__(self, config: Optional[AnalysisConfig] = None) -> None:
        self._config = config or get_default_config()
        self._risk_engine = RiskEngine(self._config)
        self._evaluation_engine = EvaluationEngine(self._config)

    @property
    def config(self) -> AnalysisConfig:
        return self._config

    def analyze(self, inputs: InputSet) -> AnalysisResult:
        """Validate ``inputs`` and run every model on them.

        Raises InputValidationError before any calculation when the inputs
        cannot be analysed.
        """
        validate_inputs(inputs, self._config)

        costs = compute_costs(inputs)
        revenues = compute_revenues(inputs, self._config.months_period)
        roi = compute_roi(costs, revenues)
        breakeven = compute_breakeven(costs, revenues, inputs)

        rating = self._evaluation_engine.rate_roi(roi.base.percentage)
        evaluation = self._evaluation_engine.evaluate(roi, breakeven, inputs)
        risk = self._risk_engine.analyze(inputs, costs)

        logger.info(
            f"Analysis ({inputs.business_model.value}): "
            f"ROI {roi.base.percentage:.1f}%, breakeven {breakeven:.1f} months, "
            f"risk {risk.score} ({risk.level.value})"
        )

        return AnalysisResult(
            inputs=inputs,
            costs=costs,
            revenues=revenues,
            user_scenarios=user_scenarios(inputs),
            roi=roi,
            breakeven=breakeven,
            roi_rating=rating,
            evaluation=evaluation,
            risk=risk,
        )

    def analyze_raw(self, raw: Mapping[str, Any]) -> AnalysisResult:
        """Normalize raw field values, then analyze them."""
        return self.analyze(normalize_inputs(raw, self._config))
