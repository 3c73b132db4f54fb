"""Domain models package."""

from saneyar.domain.models.crisis_models import (
    CategoryScore,
    CategoryScores,
    ContextAssessment,
    ContextFactors,
    CrisisAnalysisResult,
    CrisisResource,
    MatchRecord,
    PhraseEntry,
    Recommendations,
    RiskFactors,
    ScoringResult,
    UserHistory,
    score_of,
)
from saneyar.domain.models.escalation_models import (
    CrisisAlertDraft,
    DispatchReceipt,
    EscalationDecision,
    NotificationStrategy,
    SessionPriority,
    SessionProfile,
)

__all__ = [
    # Crisis analysis
    "CategoryScore",
    "CategoryScores",
    "ContextAssessment",
    "ContextFactors",
    "CrisisAnalysisResult",
    "CrisisResource",
    "MatchRecord",
    "PhraseEntry",
    "Recommendations",
    "RiskFactors",
    "ScoringResult",
    "UserHistory",
    "score_of",
    # Escalation
    "CrisisAlertDraft",
    "DispatchReceipt",
    "EscalationDecision",
    "NotificationStrategy",
    "SessionPriority",
    "SessionProfile",
]
