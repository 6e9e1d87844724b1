"""Tests for ROI rating and the narrative evaluation segments."""

import math

import pytest

from costbenefit.engine.result import ROIResult, ScenarioROI
from costbenefit.evaluation.engine import SEGMENT_SEPARATOR, EvaluationEngine
from costbenefit.models.enums import BusinessModel, ROIRating, Scenario
from tests.conftest import make_inputs


@pytest.fixture
def engine():
    return EvaluationEngine()


def make_roi(value: float, percentage: float) -> ROIResult:
    return ROIResult(scenarios={s: ScenarioROI(value, percentage) for s in Scenario})


class TestRateROI:
    @pytest.mark.parametrize(
        "percentage, rating",
        [
            (500, ROIRating.EXCELLENT),
            (100, ROIRating.EXCELLENT),
            (99.9, ROIRating.GOOD),
            (60, ROIRating.GOOD),
            (30, ROIRating.MODERATE),
            (10, ROIRating.LOW),
            (9.99, ROIRating.LOSS),
            (-100, ROIRating.LOSS),
        ],
    )
    def test_rating_thresholds(self, engine, percentage, rating):
        assert engine.rate_roi(percentage) == rating

    def test_headline(self):
        assert EvaluationEngine.headline(ROIRating.GOOD) == "Good return on investment"
        assert EvaluationEngine.headline(ROIRating.LOSS) == "Loss-making investment"


class TestFinancialSegment:
    def test_loss(self, engine):
        text = engine.evaluate_financials(make_roi(-10_000, -100.0), math.inf)
        assert text.startswith("Warning: the project operates at a loss.")
        assert "-100.0%" in text

    def test_unreachable_breakeven(self, engine):
        text = engine.evaluate_financials(make_roi(1_000, 10.0), math.inf)
        assert text.startswith("Warning: break-even is not reachable.")

    def test_long_breakeven_rounds_months_up(self, engine):
        text = engine.evaluate_financials(make_roi(5_000, 150.0), 30.2)
        assert text.startswith("Warning: long break-even time.")
        assert "31 months" in text

    @pytest.mark.parametrize(
        "percentage, prefix",
        [
            (150.0, "Excellent profitability."),
            (75.0, "Good profitability."),
            (45.0, "Moderate profitability."),
            (15.0, "Warning: low profitability."),
            (5.0, "Warning: critical profitability."),
        ],
    )
    def test_rating_segments(self, engine, percentage, prefix):
        text = engine.evaluate_financials(make_roi(1_000, percentage), 6.0)
        assert text.startswith(prefix)
        assert f"{percentage:.1f}%" in text


class TestTimelineSegment:
    def test_long_timeline(self, engine):
        text = engine.evaluate_timeline(make_inputs(dev_weeks=20))
        assert text.startswith("Timeline:\n")
        assert "(20 weeks) is significant" in text

    def test_short_timeline(self, engine):
        text = engine.evaluate_timeline(make_inputs(dev_weeks=2))
        assert "2 weeks may be optimistic" in text

    def test_normal_timeline_is_silent(self, engine):
        assert engine.evaluate_timeline(make_inputs(dev_weeks=8)) == ""


class TestResourceSegment:
    def test_saturation(self, engine):
        text = engine.evaluate_resources(make_inputs(dev_occupation=90))
        assert text.startswith("Warning: resource saturation risk.")
        assert "90%" in text

    def test_low_allocation(self, engine):
        text = engine.evaluate_resources(make_inputs(dev_occupation=20))
        assert text.startswith("Warning: low allocation.")

    def test_normal_allocation_is_silent(self, engine):
        assert engine.evaluate_resources(make_inputs(dev_occupation=50)) == ""


class TestBusinessModelSegment:
    def test_commissioned_low_upfront(self, engine):
        inputs = make_inputs(BusinessModel.COMMISSIONED, upfront_payment=2_000)
        text = engine.evaluate_business_model(inputs)
        assert text.startswith("Payment structure:")
        assert "(20.0%)" in text

    def test_commissioned_sufficient_upfront(self, engine, commissioned_project):
        assert engine.evaluate_business_model(commissioned_project) == ""

    def test_mixed_low_recurring_share(self, engine):
        inputs = make_inputs(BusinessModel.MIXED, upfront_payment=10_000, recurring_revenue=1)
        text = engine.evaluate_business_model(inputs)
        assert text.startswith("Revenue mix:")

    def test_mixed_healthy_recurring_share(self, engine, mixed_project):
        assert engine.evaluate_business_model(mixed_project) == ""

    def test_saas_without_one_off_revenue_is_silent(self, engine, saas_project):
        assert engine.evaluate_business_model(saas_project) == ""


class TestEvaluate:
    def test_single_segment(self, engine, saas_project):
        text = engine.evaluate(make_roi(50_000, 500.0), 4.0, saas_project)
        assert text.startswith("Excellent profitability.")
        assert SEGMENT_SEPARATOR not in text

    def test_segments_joined_in_order(self, engine):
        inputs = make_inputs(
            BusinessModel.COMMISSIONED,
            upfront_payment=2_000,
            final_payment=12_000,
            dev_weeks=20,
            dev_occupation=90,
        )
        text = engine.evaluate(make_roi(1_000, 15.0), 5.0, inputs)
        segments = text.split(SEGMENT_SEPARATOR)
        assert len(segments) == 4
        assert segments[0].startswith("Warning: low profitability.")
        assert segments[1].startswith("Timeline:")
        assert segments[2].startswith("Warning: resource saturation risk.")
        assert segments[3].startswith("Payment structure:")
