from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Optional

from costbenefit.engine.result import RiskContribution

# Global registry -- maps factor_id -> RiskFactorDefinition
_REGISTRY: dict[str, RiskFactorDefinition] = {}


@dataclass(frozen=True)
class RiskFactorDefinition:
    """A risk factor the RiskEngine folds into the composite score."""

    id: str
    label: str
    order: int  # Position in the report; details follow this order
    description: str
    factor_fn: Callable[..., RiskContribution]


def register_factor(
    factor_id: str,
    label: str,
    order: int,
    description: str = "",
) -> Callable:
    """Decorator to register a function as a risk factor."""

    def decorator(fn: Callable[..., RiskContribution]) -> Callable[..., RiskContribution]:
        definition = RiskFactorDefinition(
            id=factor_id,
            label=label,
            order=order,
            description=description,
            factor_fn=fn,
        )
        _REGISTRY[factor_id] = definition
        return fn

    return decorator


def get_factor(factor_id: str) -> Optional[RiskFactorDefinition]:
    """Look up a risk factor definition by ID."""
    return _REGISTRY.get(factor_id)


def get_all_factors() -> list[RiskFactorDefinition]:
    """Return every registered factor in evaluation order."""
    return sorted(_REGISTRY.values(), key=lambda d: d.order)
