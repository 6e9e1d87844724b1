"""Run an AI assessment for a project, isolated from the calculation core.

Every failure (bad provider selection, missing key, invalid inputs,
transport or payload errors) comes back as an ``AIAnalysisResult`` with
``error`` set; nothing here raises to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

import httpx
from pydantic import BaseModel

from costbenefit.config.schema import AnalysisConfig
from costbenefit.config.settings import Settings
from costbenefit.errors import AIProviderError, InputValidationError
from costbenefit.models.enums import AIProvider
from costbenefit.models.inputs import InputSet, validate_inputs

from .base import AIProviderBase
from .openai_provider import OpenAIProvider
from .perplexity_provider import PerplexityProvider
from .snapshot import build_analysis_snapshot

logger = logging.getLogger(__name__)

_PROVIDERS: dict[AIProvider, type[AIProviderBase]] = {
    AIProvider.PERPLEXITY: PerplexityProvider,
    AIProvider.OPENAI: OpenAIProvider,
}


class AIAnalysisRequest(BaseModel):
    """Provider selection for one AI assessment.

    Empty ``model``/``api_key`` fall back to the values in Settings.
    """

    provider: Optional[str] = None
    model: str = ""
    api_key: str = ""


@dataclass(frozen=True)
class AIAnalysisResult:
    """Either free-text Markdown (``result``) or an ``error`` message."""

    result: Optional[str] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None


def get_provider(
    request: AIAnalysisRequest,
    settings: Optional[Settings] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> AIProviderBase:
    """Instantiate the provider named in ``request``.

    Raises AIProviderError for a missing or unknown provider, or when no
    key/model is configured for it.
    """
    settings = settings or Settings()
    if not request.provider:
        raise AIProviderError("AI provider not specified")
    try:
        provider = AIProvider(request.provider.lower())
    except ValueError:
        raise AIProviderError(f"Invalid AI provider: {request.provider}") from None

    if provider is AIProvider.PERPLEXITY:
        api_key = request.api_key or settings.perplexity_api_key
        model = request.model or settings.perplexity_model
    else:
        api_key = request.api_key or settings.openai_api_key
        model = request.model or settings.openai_model

    return _PROVIDERS[provider](
        api_key=api_key, model=model, settings=settings, client=client
    )


async def run_ai_analysis(
    request: AIAnalysisRequest,
    inputs: InputSet,
    settings: Optional[Settings] = None,
    config: Optional[AnalysisConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> AIAnalysisResult:
    """Ask the selected provider for a free-text project assessment."""
    try:
        validate_inputs(inputs, config, require_revenue=True)
    except InputValidationError as e:
        return AIAnalysisResult(error=e.message)

    try:
        provider = get_provider(request, settings=settings, client=client)
        text = await provider.analyze(build_analysis_snapshot(inputs))
    except AIProviderError as e:
        logger.error(f"AI analysis failed ({request.provider}): {e}")
        return AIAnalysisResult(error=str(e))

    logger.info(f"AI analysis completed via {request.provider} ({provider.model})")
    return AIAnalysisResult(result=text)
