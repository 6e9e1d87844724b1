"""Build the categorised data snapshot sent to an AI provider.

The snapshot is taken from the InputSet independently of the core results;
nothing in it is derived from the calculation pass.
"""

from __future__ import annotations

from typing import Any

from costbenefit.models.enums import BusinessModel
from costbenefit.models.inputs import InputSet

# category -> [(InputSet attribute, description)]
SNAPSHOT_CATEGORIES: dict[str, list[tuple[str, str]]] = {
    "project": [
        ("business_model", "Business model (saas, commissioned or mixed)"),
    ],
    "costs": [
        ("direct_costs", "Direct costs"),
        ("indirect_costs", "Indirect costs"),
    ],
    "revenues": [
        ("upfront_payment", "Upfront payment"),
        ("final_payment", "Final payment"),
        ("recurring_revenue", "Monthly recurring revenue per user"),
    ],
    "timeline": [
        ("dev_weeks", "Development duration in weeks"),
        ("dev_occupation", "Team occupation percentage"),
    ],
    "users": [
        ("expected_users", "Expected users"),
        ("optimistic_users", "Optimistic user estimate"),
        ("pessimistic_users", "Pessimistic user estimate"),
    ],
}


def build_analysis_snapshot(inputs: InputSet) -> dict[str, dict[str, dict[str, Any]]]:
    """Group the input values by category, each with a human-readable label.

    Commissioned projects have no user-scenario analysis, so the users
    category is left out for them.
    """
    data = inputs.to_dict()
    snapshot: dict[str, dict[str, dict[str, Any]]] = {}

    for category, fields in SNAPSHOT_CATEGORIES.items():
        if category == "users" and inputs.business_model is BusinessModel.COMMISSIONED:
            continue
        snapshot[category] = {
            name: {"value": data[name], "description": description}
            for name, description in fields
        }

    return snapshot
