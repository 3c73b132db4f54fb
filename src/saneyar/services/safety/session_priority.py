"""
Session Priority

Continuous 0-100 priority used to order escalation queues.

ARCHITECTURE: Risk level is too coarse for queue ordering.
Priority starts from a base keyed by risk level and adds
fixed bonuses for vulnerable profiles and dangerous
category combinations. It is a separate scale from risk level.

CLINICAL_VALIDATION_REQUIRED: Bonus weights need review.
"""

from typing import Optional

from saneyar.domain.enums.crisis_enums import PriorityLevel, RiskLevel
from saneyar.domain.models.crisis_models import CrisisAnalysisResult
from saneyar.domain.models.escalation_models import SessionPriority, SessionProfile


BASE_PRIORITY: dict[RiskLevel, int] = {
    RiskLevel.CRITICAL: 100,
    RiskLevel.HIGH: 80,
    RiskLevel.MEDIUM: 60,
    RiskLevel.LOW: 40,
    RiskLevel.MINIMAL: 20,
}

MINOR_BONUS = 20
HISTORY_BONUS = 10
PREVIOUS_ATTEMPTS_BONUS = 25
ISOLATION_BONUS = 15
SUICIDE_WITH_METHOD_BONUS = 30
SUICIDE_WITH_IMMEDIACY_BONUS = 25
VIOLENCE_WITH_IMMEDIACY_BONUS = 30

MAX_PRIORITY = 100

# (minimum score, level, estimated wait), highest first
PRIORITY_TIERS: tuple[tuple[int, PriorityLevel, str], ...] = (
    (90, PriorityLevel.EMERGENCY, "0 minutes"),
    (70, PriorityLevel.URGENT, "0-5 minutes"),
    (50, PriorityLevel.HIGH, "5-15 minutes"),
    (30, PriorityLevel.NORMAL, "15-30 minutes"),
)
LOWEST_TIER: tuple[PriorityLevel, str] = (PriorityLevel.LOW, "30+ minutes")


def priority_tier(score: int) -> tuple[PriorityLevel, str]:
    """Map a priority score to its level and wait-time bucket."""
    for minimum, level, wait in PRIORITY_TIERS:
        if score >= minimum:
            return level, wait
    return LOWEST_TIER


def classify_session_priority(
    analysis: CrisisAnalysisResult,
    profile: Optional[SessionProfile] = None,
) -> SessionPriority:
    """
    Compute session priority for an analysis.

    The history bonus applies once when the profile reports a
    history or the analysis carries a history-derived risk factor.

    Args:
        analysis: Crisis analysis for the message
        profile: Optional user profile attributes

    Returns:
        SessionPriority clamped to 0-100
    """
    profile = profile or SessionProfile()
    factors = analysis.risk_factors

    score = BASE_PRIORITY[analysis.risk_level]

    if profile.is_minor:
        score += MINOR_BONUS
    if profile.has_history or factors.has_history_signal:
        score += HISTORY_BONUS
    if profile.previous_attempts:
        score += PREVIOUS_ATTEMPTS_BONUS
    if profile.is_isolated:
        score += ISOLATION_BONUS

    if factors.suicide_with_method:
        score += SUICIDE_WITH_METHOD_BONUS
    if factors.suicide_with_immediacy:
        score += SUICIDE_WITH_IMMEDIACY_BONUS
    if factors.violence_with_immediacy:
        score += VIOLENCE_WITH_IMMEDIACY_BONUS

    score = min(score, MAX_PRIORITY)
    level, wait = priority_tier(score)

    return SessionPriority(score=score, level=level, estimated_wait_time=wait)
