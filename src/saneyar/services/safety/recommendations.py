"""
Recommendation Generator

Maps a risk level and category mix to responder action bundles.

SAFETY-CRITICAL: These recommendations are addressed to the
care team, not to the user. They NEVER instruct the user to
take specific medical actions.

LEGAL_REVIEW_REQUIRED: Crisis line numbers are US defaults
and must be verified for each deployment jurisdiction.
"""

from typing import Optional

from saneyar.domain.enums.crisis_enums import CrisisCategory, RiskLevel
from saneyar.domain.models.crisis_models import (
    CategoryScores,
    CrisisResource,
    Recommendations,
    score_of,
)


CRISIS_RESOURCES: tuple[CrisisResource, ...] = (
    CrisisResource(name="National Suicide Prevention Lifeline", contact="988"),
    CrisisResource(name="Crisis Text Line", contact="741741", resource_type="text"),
    CrisisResource(name="Emergency Services", contact="911", resource_type="emergency"),
)

# Level bundles: (immediate, short_term)
LEVEL_ACTIONS: dict[RiskLevel, tuple[tuple[str, ...], tuple[str, ...]]] = {
    RiskLevel.CRITICAL: (
        (
            "Contact emergency services immediately",
            "Notify crisis response team",
            "Initiate safety protocol",
            "Connect with on-call counselor",
            "Begin continuous monitoring",
        ),
        (),
    ),
    RiskLevel.HIGH: (
        (
            "Priority counselor assignment",
            "Safety planning session",
            "Family/support notification (if consented)",
            "Increase check-in frequency",
        ),
        (
            "Schedule urgent therapy session",
            "Medication review if applicable",
            "Crisis coping skills training",
        ),
    ),
    RiskLevel.MEDIUM: (
        (
            "Assign available counselor",
            "Provide crisis resources",
            "Schedule follow-up within 24 hours",
        ),
        (
            "Regular therapy sessions",
            "Support group referral",
            "Stress management techniques",
        ),
    ),
    RiskLevel.LOW: (
        (),
        (
            "Routine counselor check-in",
            "Self-care activity suggestions",
            "Monitoring for escalation",
        ),
    ),
}


class RecommendationGenerator:
    """
    Responder recommendation generator.

    Level bundles:
    - CRITICAL: emergency response plus crisis line resources
    - HIGH: priority counselor and safety planning
    - MEDIUM: counselor assignment and 24h follow-up
    - LOW: routine check-in
    - MINIMAL: nothing

    Category extras are appended after the level bundle:
    substance adds a long-term referral, isolation adds social
    connection work, violence adds anger management and
    conflict resolution.

    Usage:
        generator = RecommendationGenerator()
        recommendations = generator.generate(RiskLevel.HIGH, scores)
    """

    def __init__(self, resources: Optional[tuple[CrisisResource, ...]] = None) -> None:
        self._resources = CRISIS_RESOURCES if resources is None else tuple(resources)

    def generate(
        self,
        risk_level: RiskLevel,
        category_scores: CategoryScores,
    ) -> Recommendations:
        immediate_base, short_term_base = LEVEL_ACTIONS.get(risk_level, ((), ()))
        immediate = list(immediate_base)
        short_term = list(short_term_base)
        long_term: list[str] = []

        if score_of(category_scores, CrisisCategory.SUBSTANCE) > 0:
            long_term.append("Substance abuse counseling referral")

        if score_of(category_scores, CrisisCategory.ISOLATION) > 0:
            short_term.append("Social connection building activities")

        if score_of(category_scores, CrisisCategory.VIOLENCE) > 0:
            immediate.append("Anger management resources")
            short_term.append("Conflict resolution training")

        resources = self._resources if risk_level == RiskLevel.CRITICAL else ()

        return Recommendations(
            immediate=tuple(immediate),
            short_term=tuple(short_term),
            long_term=tuple(long_term),
            resources=resources,
        )
