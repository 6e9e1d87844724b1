"""Tests for the composite risk score."""

import pytest

from costbenefit.config.schema import AnalysisConfig, RiskThresholds
from costbenefit.models.enums import BusinessModel, RiskLevel
from costbenefit.risk.engine import RiskEngine
from tests.conftest import make_costs, make_inputs


@pytest.fixture
def engine():
    return RiskEngine()


def analyze(engine, inputs):
    return engine.analyze(inputs, make_costs(inputs))


class TestRiskEngine:
    def test_saas_reference_project(self, engine, saas_project):
        report = analyze(engine, saas_project)
        # duration 10.5 + variability 4.8 + user base 5 = 20.3
        assert report.score == 20
        assert report.level == RiskLevel.MEDIUM
        assert report.details == ["Long project duration (8 weeks)"]
        assert report.mitigations == [
            "Plan intermediate review milestones",
            "Define clear objectives for each phase",
        ]

    def test_commissioned_reference_project(self, engine, commissioned_project):
        report = analyze(engine, commissioned_project)
        # financial 17.5 + user base 5 = 22.5, rounded half up
        assert report.score == 23
        assert report.level == RiskLevel.MEDIUM
        assert report.details[0] == "Low upfront payment relative to costs (30.0%)"
        assert "commissioned but includes recurring revenue" in report.details[1]

    def test_report_lists_every_factor(self, engine, saas_project):
        report = analyze(engine, saas_project)
        assert [f.factor_id for f in report.factors] == [
            "occupation",
            "duration",
            "financial",
            "margin",
            "user_variability",
            "user_base",
        ]
        contributions = {f.factor_id: f.contribution for f in report.factors}
        assert contributions["duration"] == pytest.approx(10.5)
        assert contributions["user_variability"] == pytest.approx(4.8)
        assert contributions["user_base"] == pytest.approx(5.0)

    def test_low_risk_project(self, engine):
        inputs = make_inputs(
            recurring_revenue=100,
            expected_users=250,
            optimistic_users=250,
            pessimistic_users=250,
        )
        report = analyze(engine, inputs)
        assert report.score == 0
        assert report.level == RiskLevel.LOW
        assert report.details == []
        assert report.mitigations == []

    def test_extreme_inputs_clamped_to_100(self, engine):
        inputs = make_inputs(
            dev_occupation=100,
            dev_weeks=1e9,
            recurring_revenue=0,
            expected_users=10,
            optimistic_users=1_000,
            pessimistic_users=0,
        )
        report = analyze(engine, inputs)
        assert report.score == 100
        assert report.level == RiskLevel.VERY_HIGH

    @pytest.mark.parametrize(
        "model", [BusinessModel.SAAS, BusinessModel.COMMISSIONED, BusinessModel.MIXED]
    )
    @pytest.mark.parametrize("weeks", [1, 8, 40])
    @pytest.mark.parametrize("occupation", [0, 75, 100])
    def test_score_always_within_bounds(self, engine, model, weeks, occupation):
        inputs = make_inputs(
            model,
            dev_weeks=weeks,
            dev_occupation=occupation,
            upfront_payment=1_000,
            recurring_revenue=5,
        )
        report = analyze(engine, inputs)
        assert 0 <= report.score <= 100
        assert isinstance(report.score, int)


class TestDetermineLevel:
    @pytest.mark.parametrize(
        "score, level",
        [
            (0, RiskLevel.LOW),
            (20, RiskLevel.LOW),
            (20.3, RiskLevel.MEDIUM),
            (40, RiskLevel.MEDIUM),
            (41, RiskLevel.HIGH),
            (60, RiskLevel.HIGH),
            (61, RiskLevel.VERY_HIGH),
            (100, RiskLevel.VERY_HIGH),
        ],
    )
    def test_thresholds_are_strict(self, engine, score, level):
        assert engine.determine_level(score) == level

    def test_thresholds_come_from_config(self, saas_project):
        config = AnalysisConfig(
            risk_thresholds=RiskThresholds(very_high=80, high=60, medium=30, low=10)
        )
        report = analyze(RiskEngine(config), saas_project)
        assert report.score == 20
        assert report.level == RiskLevel.LOW
