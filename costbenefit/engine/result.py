"""Immutable result structures produced by one calculation pass."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from costbenefit.models.enums import RiskLevel, ROIRating, Scenario
from costbenefit.models.inputs import InputSet


@dataclass(frozen=True)
class CostResult:
    """Total project cost after the occupation penalty."""

    total_costs: float
    occupation_multiplier: float


@dataclass(frozen=True)
class RevenueResult:
    """Revenue streams and the per-scenario 12-month revenue totals."""

    direct: float
    monthly: float
    yearly: float
    scenarios: dict[Scenario, float]


@dataclass(frozen=True)
class ScenarioROI:
    value: float
    percentage: float


@dataclass(frozen=True)
class ROIResult:
    """Absolute and percentage return for every scenario."""

    scenarios: dict[Scenario, ScenarioROI]

    @property
    def base(self) -> ScenarioROI:
        return self.scenarios[Scenario.BASE]

    @property
    def optimistic(self) -> ScenarioROI:
        return self.scenarios[Scenario.OPTIMISTIC]

    @property
    def pessimistic(self) -> ScenarioROI:
        return self.scenarios[Scenario.PESSIMISTIC]


@dataclass(frozen=True)
class RiskContribution:
    """What a single risk factor adds to the score, and why."""

    contribution: float = 0.0
    details: tuple[str, ...] = ()
    mitigations: tuple[str, ...] = ()


@dataclass(frozen=True)
class RiskFactorResult:
    """Audit entry for one risk factor in a RiskReport."""

    factor_id: str
    label: str
    contribution: float
    details: tuple[str, ...] = ()
    mitigations: tuple[str, ...] = ()


@dataclass(frozen=True)
class RiskReport:
    """Composite risk score with its narrative."""

    score: int
    level: RiskLevel
    details: list[str] = field(default_factory=list)
    mitigations: list[str] = field(default_factory=list)
    factors: list[RiskFactorResult] = field(default_factory=list)


@dataclass(frozen=True)
class AnalysisResult:
    """Top-level bundle returned by the orchestrator for one InputSet."""

    inputs: InputSet
    costs: CostResult
    revenues: RevenueResult
    user_scenarios: dict[Scenario, float]
    roi: ROIResult
    breakeven: float
    roi_rating: ROIRating
    evaluation: str
    risk: RiskReport

    @property
    def breakeven_reachable(self) -> bool:
        return not math.isinf(self.breakeven)
