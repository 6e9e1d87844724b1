from .engine import RiskEngine
from .registry import RiskFactorDefinition, get_all_factors, get_factor, register_factor

__all__ = [
    "RiskEngine",
    "RiskFactorDefinition",
    "get_all_factors",
    "get_factor",
    "register_factor",
]
