"""Shared test fixtures for the cost-benefit test suite."""

import pytest

from costbenefit.config.loader import get_default_config
from costbenefit.engine.financials import compute_costs
from costbenefit.models.enums import BusinessModel
from costbenefit.models.inputs import InputSet


def make_inputs(business_model=BusinessModel.SAAS, **overrides) -> InputSet:
    """Helper to create an InputSet with a single direct cost and sane defaults."""
    values = {
        "direct_costs": 10_000,
        "dev_weeks": 4,
        "dev_occupation": 50,
        "expected_users": 100,
        "optimistic_users": 120,
        "pessimistic_users": 80,
    }
    values.update(overrides)
    return InputSet(business_model=business_model, **values)


def make_costs(inputs: InputSet):
    return compute_costs(inputs)


@pytest.fixture
def default_config():
    return get_default_config()


@pytest.fixture
def risk_settings(default_config):
    return default_config.risk_factors


@pytest.fixture
def saas_project() -> InputSet:
    """SaaS reference project -- the first worked example.

    10k direct costs, 8 weeks at 50% occupation, 50/month per user,
    100 expected users (120 optimistic, 80 pessimistic).
    """
    return make_inputs(
        BusinessModel.SAAS,
        dev_weeks=8,
        recurring_revenue=50,
    )


@pytest.fixture
def commissioned_project() -> InputSet:
    """Commissioned reference project -- the second worked example.

    10k direct costs, 3k upfront, 9k on delivery, 500/month recurring.
    """
    return make_inputs(
        BusinessModel.COMMISSIONED,
        upfront_payment=3_000,
        final_payment=9_000,
        recurring_revenue=500,
    )


@pytest.fixture
def mixed_project() -> InputSet:
    return make_inputs(
        BusinessModel.MIXED,
        upfront_payment=2_000,
        final_payment=2_000,
        recurring_revenue=10,
    )


@pytest.fixture
def raw_saas_fields() -> dict:
    """The SaaS reference project as raw form strings (kebab-case ids)."""
    return {
        "business-model": "saas",
        "direct-costs": "10000",
        "indirect-costs": "",
        "recurring-revenue": "50",
        "dev-weeks": "8",
        "dev-occupation": "50",
        "expected-users": "100",
    }
