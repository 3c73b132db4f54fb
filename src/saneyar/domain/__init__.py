"""
SANEYAR Domain Layer

Crisis taxonomy, analysis results and escalation value objects.
These models are independent of detection logic and infrastructure.
"""

from saneyar.domain.enums.crisis_enums import (
    ContextModifier,
    CrisisCategory,
    CrisisFrequency,
    PriorityLevel,
    RiskLevel,
    SeverityTier,
)
from saneyar.domain.models.crisis_models import (
    CrisisAnalysisResult,
    RiskFactors,
    UserHistory,
)
from saneyar.domain.models.escalation_models import (
    EscalationDecision,
    SessionPriority,
    SessionProfile,
)

__all__ = [
    # Enums
    "ContextModifier",
    "CrisisCategory",
    "CrisisFrequency",
    "PriorityLevel",
    "RiskLevel",
    "SeverityTier",
    # Analysis
    "CrisisAnalysisResult",
    "RiskFactors",
    "UserHistory",
    # Escalation
    "EscalationDecision",
    "SessionPriority",
    "SessionProfile",
]
