"""Tests for the analysis config schema, loader and runtime settings."""

import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from costbenefit.config.loader import get_default_config, load_config
from costbenefit.config.schema import (
    AnalysisConfig,
    RiskFactorSettings,
    RiskThresholds,
    ROIThresholds,
)
from costbenefit.config.settings import Settings


class TestLoader:
    def test_default_config_loads(self):
        config = get_default_config()
        assert config.id == "default"
        assert config.months_period == 12

    def test_bundled_values_match_model_defaults(self):
        assert get_default_config() == AnalysisConfig()

    def test_default_thresholds(self, default_config):
        assert default_config.roi_thresholds.excellent == 100
        assert default_config.roi_thresholds.low == 10
        assert default_config.risk_thresholds.very_high == 60
        assert default_config.risk_thresholds.medium == 20
        assert default_config.risk_factors.financial_max_risk == 25
        assert default_config.evaluation.breakeven_warning_months == 24

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.json")

    def test_custom_file(self, tmp_path):
        path: Path = tmp_path / "custom.json"
        path.write_text(
            json.dumps({"id": "custom", "months_period": 24, "roi_thresholds": {"excellent": 150}})
        )
        config = load_config(path)
        assert config.id == "custom"
        assert config.months_period == 24
        assert config.roi_thresholds.excellent == 150
        assert config.roi_thresholds.good == 60

    def test_invalid_file_rejected(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text(json.dumps({"months_period": 0}))
        with pytest.raises(ValidationError):
            load_config(path)


class TestSchema:
    def test_roi_thresholds_must_be_ordered(self):
        with pytest.raises(ValidationError, match="ROI thresholds must be ordered"):
            ROIThresholds(excellent=50, good=60)

    def test_risk_thresholds_must_be_ordered(self):
        with pytest.raises(ValidationError, match="Risk thresholds must be ordered"):
            RiskThresholds(very_high=30, high=40)

    def test_risk_thresholds_bounded(self):
        with pytest.raises(ValidationError):
            RiskThresholds(very_high=120)

    def test_mixed_weights_must_sum_to_one(self):
        with pytest.raises(ValidationError, match="must sum to"):
            RiskFactorSettings(mixed_upfront_weight=0.5, mixed_recurring_weight=0.6)

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"margin_low_pct": 40}, "Margin tiers must be ordered"),
            ({"user_base_small_threshold": 300}, "User base tiers must be ordered"),
            ({"duration_medium_risk": 25}, "Duration tiers must be ordered"),
        ],
    )
    def test_factor_tiers_must_be_ordered(self, overrides, message):
        with pytest.raises(ValidationError, match=message):
            RiskFactorSettings(**overrides)

    def test_equal_tiers_allowed(self):
        settings = RiskFactorSettings(margin_low_pct=30, duration_medium_risk=20)
        assert settings.margin_low_pct == settings.margin_below_average_pct

    def test_default_weeks_not_below_minimum(self):
        with pytest.raises(ValidationError):
            AnalysisConfig(min_dev_weeks=5, default_dev_weeks=4)

    def test_multiplier_bounds(self):
        with pytest.raises(ValidationError):
            AnalysisConfig(default_optimistic_multiplier=0.9)
        with pytest.raises(ValidationError):
            AnalysisConfig(default_pessimistic_multiplier=1.1)

    def test_config_is_frozen(self):
        config = AnalysisConfig()
        with pytest.raises(ValidationError):
            config.months_period = 6


class TestSettings:
    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("OPENAI_MODEL", raising=False)
        settings = Settings(_env_file=None)
        assert settings.perplexity_model == "sonar"
        assert settings.openai_model == "gpt-4o"
        assert settings.cors_origins == ["http://localhost:3000"]

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("OPENAI_API_KEY", "sk-test")
        monkeypatch.setenv("AI_TIMEOUT_SECONDS", "5")
        settings = Settings(_env_file=None)
        assert settings.openai_api_key == "sk-test"
        assert settings.ai_timeout_seconds == 5.0
