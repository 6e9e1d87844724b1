"""Pydantic models for analysis thresholds and risk factor constants."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ROIThresholds(BaseModel):
    """ROI percentage cut-offs used to rate a project's return."""

    model_config = ConfigDict(frozen=True)

    excellent: float = Field(default=100, description="Excellent ROI (>= %)")
    good: float = Field(default=60, description="Good ROI (>= %)")
    moderate: float = Field(default=30, description="Moderate ROI (>= %)")
    low: float = Field(default=10, description="Low ROI (>= %)")

    @model_validator(mode="after")
    def excellent_ge_good_ge_moderate_ge_low(self) -> ROIThresholds:
        if not (self.excellent >= self.good >= self.moderate >= self.low):
            raise ValueError(
                f"ROI thresholds must be ordered: excellent ({self.excellent}) "
                f">= good ({self.good}) >= moderate ({self.moderate}) "
                f">= low ({self.low})"
            )
        return self


class RiskThresholds(BaseModel):
    """Risk score cut-offs (0-100) used to map a score to a RiskLevel."""

    model_config = ConfigDict(frozen=True)

    very_high: float = Field(default=60, ge=0, le=100)
    high: float = Field(default=40, ge=0, le=100)
    medium: float = Field(default=20, ge=0, le=100)
    low: float = Field(default=10, ge=0, le=100)

    @model_validator(mode="after")
    def very_high_ge_high_ge_medium_ge_low(self) -> RiskThresholds:
        if not (self.very_high >= self.high >= self.medium >= self.low):
            raise ValueError(
                f"Risk thresholds must be ordered: very_high ({self.very_high}) "
                f">= high ({self.high}) >= medium ({self.medium}) >= low ({self.low})"
            )
        return self


class RiskFactorSettings(BaseModel):
    """Caps, baselines and narrative thresholds for the six risk factors."""

    model_config = ConfigDict(frozen=True)

    # Team occupation
    occupation_baseline: float = Field(default=50, gt=0, le=100)
    occupation_max_risk: float = Field(default=25, ge=0)
    occupation_narrative_threshold: float = Field(default=15, ge=0)

    # Project duration
    duration_week_threshold: float = Field(default=4, gt=0)
    duration_base_risk: float = Field(default=10, ge=0)
    duration_growth_base: float = Field(default=1.05, ge=1)
    duration_high_risk: float = Field(default=20, ge=0)
    duration_medium_risk: float = Field(default=10, ge=0)

    # Financial exposure
    financial_target_breakeven_months: float = Field(default=12, ge=0)
    financial_risk_per_month: float = Field(default=2, ge=0)
    financial_max_risk: float = Field(default=25, ge=0)
    financial_narrative_threshold: float = Field(default=15, ge=0)
    mixed_upfront_weight: float = Field(default=0.4, ge=0, le=1)
    mixed_recurring_weight: float = Field(default=0.6, ge=0, le=1)

    # Margin
    margin_months: int = Field(default=12, gt=0)
    margin_loss_risk: float = Field(default=35, ge=0)
    margin_low_risk: float = Field(default=25, ge=0)
    margin_below_average_risk: float = Field(default=15, ge=0)
    margin_low_pct: float = 15
    margin_below_average_pct: float = 30

    # User estimate variability
    variability_factor: float = Field(default=20, ge=0)
    variability_max_risk: float = Field(default=20, ge=0)
    variability_saas_multiplier: float = Field(default=1.2, ge=0)
    variability_narrative_threshold: float = Field(default=10, ge=0)

    # User base size
    user_base_small_threshold: float = Field(default=50, ge=0)
    user_base_optimal_threshold: float = Field(default=200, ge=0)
    user_base_small_risk: float = Field(default=10, ge=0)
    user_base_medium_risk: float = Field(default=5, ge=0)
    user_base_narrative_threshold: float = Field(default=5, ge=0)
    commissioned_recurring_risk: float = Field(default=5, ge=0)

    @model_validator(mode="after")
    def mixed_weights_sum_to_one(self) -> RiskFactorSettings:
        total = self.mixed_upfront_weight + self.mixed_recurring_weight
        if abs(total - 1.0) > 0.01:
            raise ValueError(f"Mixed-model weights must sum to ~1.0, got {total:.3f}")
        return self

    @model_validator(mode="after")
    def tiers_ordered(self) -> RiskFactorSettings:
        if self.margin_low_pct > self.margin_below_average_pct:
            raise ValueError(
                f"Margin tiers must be ordered: margin_low_pct ({self.margin_low_pct}) "
                f"<= margin_below_average_pct ({self.margin_below_average_pct})"
            )
        if self.user_base_small_threshold > self.user_base_optimal_threshold:
            raise ValueError(
                "User base tiers must be ordered: user_base_small_threshold "
                f"({self.user_base_small_threshold}) <= user_base_optimal_threshold "
                f"({self.user_base_optimal_threshold})"
            )
        if self.duration_medium_risk > self.duration_high_risk:
            raise ValueError(
                "Duration tiers must be ordered: duration_medium_risk "
                f"({self.duration_medium_risk}) <= duration_high_risk "
                f"({self.duration_high_risk})"
            )
        return self


class EvaluationSettings(BaseModel):
    """Thresholds that select the narrative evaluation segments."""

    model_config = ConfigDict(frozen=True)

    breakeven_warning_months: float = Field(default=24, ge=0)
    long_timeline_weeks: float = Field(default=16, ge=0)
    short_timeline_weeks: float = Field(default=4, ge=0)
    high_occupation: float = Field(default=80, ge=0, le=100)
    low_occupation: float = Field(default=30, ge=0, le=100)
    min_upfront_ratio: float = Field(default=0.3, ge=0)
    min_recurring_ratio: float = Field(default=0.5, ge=0)


class AnalysisConfig(BaseModel):
    """Top-level configuration read (never owned) by the analysis core."""

    model_config = ConfigDict(frozen=True)

    id: str = "default"
    version: str = "1.0.0"
    months_period: int = Field(default=12, gt=0, description="Projection horizon in months")
    min_dev_weeks: float = Field(default=1, gt=0)
    default_dev_weeks: float = Field(default=4, gt=0)
    default_occupation: float = Field(default=25, ge=0, le=100)
    default_expected_users: float = Field(default=100, ge=0)
    default_optimistic_multiplier: float = Field(default=1.2, ge=1)
    default_pessimistic_multiplier: float = Field(default=0.8, ge=0, le=1)
    roi_thresholds: ROIThresholds = Field(default_factory=ROIThresholds)
    risk_thresholds: RiskThresholds = Field(default_factory=RiskThresholds)
    risk_factors: RiskFactorSettings = Field(default_factory=RiskFactorSettings)
    evaluation: EvaluationSettings = Field(default_factory=EvaluationSettings)

    @model_validator(mode="after")
    def default_weeks_not_below_minimum(self) -> AnalysisConfig:
        if self.default_dev_weeks < self.min_dev_weeks:
            raise ValueError(
                f"default_dev_weeks ({self.default_dev_weeks}) must be >= "
                f"min_dev_weeks ({self.min_dev_weeks})"
            )
        return self
