from .base import AIProviderBase
from .openai_provider import OpenAIProvider
from .perplexity_provider import PerplexityProvider
from .service import AIAnalysisRequest, AIAnalysisResult, get_provider, run_ai_analysis
from .snapshot import build_analysis_snapshot

__all__ = [
    "AIProviderBase",
    "OpenAIProvider",
    "PerplexityProvider",
    "AIAnalysisRequest",
    "AIAnalysisResult",
    "get_provider",
    "run_ai_analysis",
    "build_analysis_snapshot",
]
