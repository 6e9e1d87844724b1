"""RiskEngine -- folds the registered risk factors into a RiskReport."""

from __future__ import annotations

import logging
from typing import Optional

# Ensure all factors are registered on import
import costbenefit.risk.factors  # noqa: F401
from costbenefit.config.loader import get_default_config
from costbenefit.config.schema import AnalysisConfig
from costbenefit.engine.result import CostResult, RiskFactorResult, RiskReport
from costbenefit.models.enums import RiskLevel
from costbenefit.models.inputs import InputSet
from costbenefit.numbers import clamp, round_half_up
from costbenefit.risk.registry import RiskFactorDefinition, get_all_factors

logger = logging.getLogger(__name__)


class RiskEngine:
    """Stateless engine that scores project risk.

    Every factor runs independently; the engine sums the contributions,
    clamps the total to [0, 100] and collects the narrative in factor order.
    """

    def __init__(self, config: Optional[AnalysisConfig] = None) -> None:
        self._config = config or get_default_config()

    def analyze(self, inputs: InputSet, costs: CostResult) -> RiskReport:
        factor_results = [
            self._run_factor(definition, inputs, costs)
            for definition in get_all_factors()
        ]

        total = clamp(sum(r.contribution for r in factor_results), 0.0, 100.0)

        return RiskReport(
            score=round_half_up(total),
            level=self.determine_level(total),
            details=[d for r in factor_results for d in r.details],
            mitigations=[m for r in factor_results for m in r.mitigations],
            factors=factor_results,
        )

    def determine_level(self, score: float) -> RiskLevel:
        """Map a score to a level, checking the highest threshold first."""
        thresholds = self._config.risk_thresholds
        if score > thresholds.very_high:
            return RiskLevel.VERY_HIGH
        if score > thresholds.high:
            return RiskLevel.HIGH
        if score > thresholds.medium:
            return RiskLevel.MEDIUM
        return RiskLevel.LOW

    def _run_factor(
        self,
        definition: RiskFactorDefinition,
        inputs: InputSet,
        costs: CostResult,
    ) -> RiskFactorResult:
        outcome = definition.factor_fn(inputs, costs, self._config.risk_factors)
        logger.debug(f"Risk factor {definition.id}: {outcome.contribution:.2f}")
        return RiskFactorResult(
            factor_id=definition.id,
            label=definition.label,
            contribution=outcome.contribution,
            details=outcome.details,
            mitigations=outcome.mitigations,
        )
