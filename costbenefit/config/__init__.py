from .loader import get_default_config, load_config
from .schema import (
    AnalysisConfig,
    EvaluationSettings,
    RiskFactorSettings,
    RiskThresholds,
    ROIThresholds,
)
from .settings import Settings

__all__ = [
    "AnalysisConfig",
    "EvaluationSettings",
    "RiskFactorSettings",
    "RiskThresholds",
    "ROIThresholds",
    "Settings",
    "get_default_config",
    "load_config",
]
