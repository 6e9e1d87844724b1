from enum import Enum


class BusinessModel(str, Enum):
    SAAS = "saas"
    COMMISSIONED = "commissioned"
    MIXED = "mixed"


class Scenario(str, Enum):
    BASE = "base"
    OPTIMISTIC = "optimistic"
    PESSIMISTIC = "pessimistic"


class RiskLevel(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    VERY_HIGH = "very-high"


class ROIRating(str, Enum):
    EXCELLENT = "excellent"
    GOOD = "good"
    MODERATE = "moderate"
    LOW = "low"
    LOSS = "loss"


class AIProvider(str, Enum):
    PERPLEXITY = "perplexity"
    OPENAI = "openai"
