"""InputSet -- the immutable snapshot every calculation pass runs on.

Raw form values arrive as a flat mapping of field id to string (the same
shape the field store and bookmarks carry). ``normalize_inputs`` turns that
into an InputSet, substituting defaults for missing or non-numeric values;
``validate_inputs`` then decides whether the snapshot may enter the core.
"""

from __future__ import annotations

import logging
import math
from dataclasses import asdict, dataclass
from typing import Any, Mapping, Optional

from costbenefit.config.schema import AnalysisConfig
from costbenefit.errors import InputValidationError
from costbenefit.numbers import round_half_up

from .enums import BusinessModel

logger = logging.getLogger(__name__)

# Form field ids, in the kebab-case form used by the field store.
FIELD_IDS: tuple[str, ...] = (
    "business-model",
    "direct-costs",
    "indirect-costs",
    "upfront-payment",
    "final-payment",
    "recurring-revenue",
    "dev-weeks",
    "dev-occupation",
    "expected-users",
    "optimistic-users",
    "pessimistic-users",
    "optimistic-multiplier",
    "pessimistic-multiplier",
)

_MONEY_FIELDS = (
    "direct_costs",
    "indirect_costs",
    "upfront_payment",
    "final_payment",
    "recurring_revenue",
)
_USER_FIELDS = ("expected_users", "optimistic_users", "pessimistic_users")

# Largest occupation penalty the cost model can apply.
_MAX_OCCUPATION_MULTIPLIER = 1.5


@dataclass(frozen=True)
class InputSet:
    """Normalized project figures for one calculation pass.

    Under the commissioned model there is no user-scenario analysis, so all
    three user counts collapse to 1.
    """

    business_model: BusinessModel
    direct_costs: float = 0.0
    indirect_costs: float = 0.0
    upfront_payment: float = 0.0
    final_payment: float = 0.0
    recurring_revenue: float = 0.0
    dev_weeks: float = 4.0
    dev_occupation: float = 25.0
    expected_users: float = 0.0
    optimistic_users: float = 0.0
    pessimistic_users: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "business_model", BusinessModel(self.business_model))
        if self.business_model is BusinessModel.COMMISSIONED:
            for name in _USER_FIELDS:
                object.__setattr__(self, name, 1.0)

    @property
    def base_costs(self) -> float:
        """Direct plus indirect costs, before the occupation penalty."""
        return self.direct_costs + self.indirect_costs

    @property
    def one_off_revenue(self) -> float:
        return self.upfront_payment + self.final_payment

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["business_model"] = self.business_model.value
        return data


def _field_variants(field_id: str) -> tuple[str, str, str]:
    parts = field_id.split("-")
    camel = parts[0] + "".join(p.title() for p in parts[1:])
    snake = "_".join(parts)
    return field_id, camel, snake


def _lookup(raw: Mapping[str, Any], field_id: str) -> Any:
    """Find a raw value by kebab-case id, camelCase or snake_case name."""
    for key in _field_variants(field_id):
        if key in raw:
            return raw[key]
    return None


def _parse_number(value: Any) -> Optional[float]:
    """Parse a raw form value, returning None when it is not a finite number."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        value = value.strip()
        if not value:
            return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _number(raw: Mapping[str, Any], field_id: str, default: float) -> float:
    parsed = _parse_number(_lookup(raw, field_id))
    return default if parsed is None else parsed


def _parse_business_model(value: Any) -> BusinessModel:
    if isinstance(value, BusinessModel):
        return value
    if value is None or str(value).strip() == "":
        return BusinessModel.SAAS
    try:
        return BusinessModel(str(value).strip().lower())
    except ValueError:
        logger.warning(f"Unknown business model {value!r}, falling back to saas")
        return BusinessModel.SAAS


def normalize_inputs(
    raw: Mapping[str, Any],
    config: Optional[AnalysisConfig] = None,
) -> InputSet:
    """Build an InputSet from raw field values.

    Defaults for missing or non-numeric values:
    - money fields -> 0
    - dev weeks -> config.default_dev_weeks, floored at config.min_dev_weeks
    - occupation -> config.default_occupation, clamped to [0, 100]
    - expected users -> config.default_expected_users
    - optimistic/pessimistic users -> taken as given when present, otherwise
      expected users x multiplier (multiplier >= 1 / within [0, 1]).
    """
    config = config or AnalysisConfig()

    money = {
        name: max(0.0, _number(raw, name.replace("_", "-"), 0.0))
        for name in _MONEY_FIELDS
    }
    dev_weeks = max(
        config.min_dev_weeks, _number(raw, "dev-weeks", config.default_dev_weeks)
    )
    dev_occupation = min(
        100.0, max(0.0, _number(raw, "dev-occupation", config.default_occupation))
    )
    expected_users = max(
        0.0, _number(raw, "expected-users", config.default_expected_users)
    )

    optimistic_users = _parse_number(_lookup(raw, "optimistic-users"))
    if optimistic_users is None:
        multiplier = max(
            1.0,
            _number(raw, "optimistic-multiplier", config.default_optimistic_multiplier),
        )
        optimistic_users = round_half_up(expected_users * multiplier)

    pessimistic_users = _parse_number(_lookup(raw, "pessimistic-users"))
    if pessimistic_users is None:
        multiplier = min(
            1.0,
            max(
                0.0,
                _number(
                    raw, "pessimistic-multiplier", config.default_pessimistic_multiplier
                ),
            ),
        )
        pessimistic_users = round_half_up(expected_users * multiplier)

    return InputSet(
        business_model=_parse_business_model(_lookup(raw, "business-model")),
        dev_weeks=dev_weeks,
        dev_occupation=dev_occupation,
        expected_users=expected_users,
        optimistic_users=max(0.0, float(optimistic_users)),
        pessimistic_users=max(0.0, float(pessimistic_users)),
        **money,
    )


def _check_magnitudes(inputs: InputSet, config: AnalysisConfig) -> None:
    """Reject inputs whose derived totals or ratios overflow to inf.

    Every field may be finite while the cost, revenue and ratio figures
    built from them are not; those must never reach the results.
    """
    months = max(config.months_period, config.risk_factors.margin_months)
    max_users = max(
        inputs.expected_users, inputs.optimistic_users, inputs.pessimistic_users
    )
    total_costs = inputs.base_costs * _MAX_OCCUPATION_MULTIPLIER
    revenue = inputs.one_off_revenue + inputs.recurring_revenue * max_users * months
    monthly = inputs.recurring_revenue * inputs.expected_users

    if not math.isfinite(total_costs):
        raise InputValidationError("direct_costs", "Costs are too large to analyse")
    if not math.isfinite(revenue):
        raise InputValidationError(
            "recurring_revenue", "Revenue is too large to analyse"
        )
    if not math.isfinite(revenue / inputs.base_costs):
        raise InputValidationError(
            "direct_costs", "Costs are too small relative to revenue to analyse"
        )
    if monthly > 0 and not math.isfinite(total_costs / monthly):
        raise InputValidationError(
            "recurring_revenue",
            "Recurring revenue is too small relative to costs to analyse",
        )
    if inputs.expected_users > 0:
        deviation = max(
            abs(inputs.optimistic_users - inputs.expected_users),
            abs(inputs.expected_users - inputs.pessimistic_users),
        )
        if not math.isfinite(deviation / inputs.expected_users):
            raise InputValidationError(
                "expected_users", "User estimates are too far apart to analyse"
            )


def validate_inputs(
    inputs: InputSet,
    config: Optional[AnalysisConfig] = None,
    require_revenue: bool = False,
) -> None:
    """Raise InputValidationError if the core must not run on ``inputs``.

    ``require_revenue`` additionally demands some revenue and a non-zero
    expected user count; the AI analysis gate uses it.
    """
    config = config or AnalysisConfig()

    for name in _MONEY_FIELDS + _USER_FIELDS + ("dev_weeks", "dev_occupation"):
        value = getattr(inputs, name)
        if not math.isfinite(value):
            raise InputValidationError(name, f"{name} must be a finite number")
        if value < 0:
            raise InputValidationError(name, f"{name} cannot be negative")

    if inputs.base_costs == 0:
        raise InputValidationError(
            "direct_costs", "Enter at least one cost to run the analysis"
        )
    if inputs.dev_weeks < config.min_dev_weeks:
        raise InputValidationError(
            "dev_weeks",
            f"dev_weeks must be at least {config.min_dev_weeks:g}, got {inputs.dev_weeks:g}",
        )
    if inputs.dev_occupation > 100:
        raise InputValidationError(
            "dev_occupation",
            f"dev_occupation must be 0-100, got {inputs.dev_occupation:g}",
        )

    _check_magnitudes(inputs, config)

    if require_revenue:
        if inputs.one_off_revenue + inputs.recurring_revenue == 0:
            raise InputValidationError(
                "recurring_revenue", "Enter at least one revenue source"
            )
        if inputs.expected_users <= 0:
            raise InputValidationError(
                "expected_users", "expected_users must be greater than zero"
            )
