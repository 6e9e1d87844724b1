from .engine import SEGMENT_SEPARATOR, EvaluationEngine

__all__ = ["EvaluationEngine", "SEGMENT_SEPARATOR"]
