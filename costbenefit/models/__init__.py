from .enums import AIProvider, BusinessModel, RiskLevel, ROIRating, Scenario

__all__ = ["AIProvider", "BusinessModel", "RiskLevel", "ROIRating", "Scenario"]
