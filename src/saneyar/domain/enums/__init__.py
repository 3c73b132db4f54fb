"""Domain enums package."""

from saneyar.domain.enums.crisis_enums import (
    ContextModifier,
    CrisisCategory,
    CrisisFrequency,
    PriorityLevel,
    RiskLevel,
    SeverityTier,
)

__all__ = [
    "ContextModifier",
    "CrisisCategory",
    "CrisisFrequency",
    "PriorityLevel",
    "RiskLevel",
    "SeverityTier",
]
