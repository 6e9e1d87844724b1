"""Exception types raised around the cost-benefit core."""

from __future__ import annotations


class CostBenefitError(Exception):
    """Base class for all cost-benefit errors."""


class InputValidationError(CostBenefitError, ValueError):
    """Raised when an InputSet cannot be analysed.

    Carries the offending field so the caller can point the user at it.
    """

    def __init__(self, field: str, message: str):
        super().__init__(message)
        self.field = field
        self.message = message


class AIProviderError(CostBenefitError, RuntimeError):
    """Raised when an AI provider is misconfigured or returns an unusable reply."""
