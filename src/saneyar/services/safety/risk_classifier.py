"""
Risk Classifier

Maps category scores and risk factors to a discrete risk level.

SAFETY-CRITICAL: This classifier decides which messages
require an immediate alert. All thresholds are auditable.

ARCHITECTURE: Classification is a pure function. Rules are
evaluated in strict order and the first matching rule wins,
so rule order, not severity, decides when several rules match.
"""

from dataclasses import dataclass
from typing import Optional

from saneyar.domain.enums.crisis_enums import CrisisCategory, CrisisFrequency, RiskLevel
from saneyar.domain.models.crisis_models import CategoryScores, RiskFactors, UserHistory, score_of


@dataclass(frozen=True)
class RiskThresholds:
    """
    Score thresholds used by the ordered classification rules.

    CLINICAL_VALIDATION_REQUIRED: All threshold values
    require clinical validation before production use.
    """

    # Rule 1: critical
    critical_total: float = 30.0
    critical_suicide: float = 15.0
    critical_violence: float = 15.0
    critical_suicide_with_immediacy: float = 10.0
    critical_immediacy_with_suicide: float = 10.0

    # Rule 2: high
    high_total: float = 20.0
    high_suicide: float = 10.0
    high_violence: float = 10.0
    high_self_harm: float = 12.0

    # Rule 3: medium
    medium_total: float = 10.0
    medium_suicide: float = 5.0
    medium_self_harm: float = 8.0

    # Rule 4: low
    low_total: float = 3.0

    # Risk factors
    multiple_concerns_categories: int = 3
    recent_assessment_score: float = 15.0


def compute_risk_factors(
    category_scores: CategoryScores,
    history: Optional[UserHistory] = None,
    thresholds: Optional[RiskThresholds] = None,
) -> RiskFactors:
    """
    Derive combination and history risk factors.

    Args:
        category_scores: Score per category (missing keys count as 0)
        history: Optional user history signals
        thresholds: Threshold configuration

    Returns:
        RiskFactors for this analysis
    """
    thresholds = thresholds or RiskThresholds()
    history = history or UserHistory()

    def active(category: CrisisCategory) -> bool:
        return score_of(category_scores, category) > 0

    active_count = sum(1 for category in CrisisCategory if active(category))

    return RiskFactors(
        multiple_concerns=active_count >= thresholds.multiple_concerns_categories,
        suicide_with_method=active(CrisisCategory.SUICIDE) and active(CrisisCategory.METHODS),
        suicide_with_immediacy=active(CrisisCategory.SUICIDE) and active(CrisisCategory.IMMEDIACY),
        violence_with_immediacy=active(CrisisCategory.VIOLENCE) and active(CrisisCategory.IMMEDIACY),
        substance_with_suicide=active(CrisisCategory.SUBSTANCE) and active(CrisisCategory.SUICIDE),
        previous_crisis=history.previous_crisis_events > 0,
        recent_assessment=(
            history.last_assessment_score is not None
            and history.last_assessment_score > thresholds.recent_assessment_score
        ),
        escalating_pattern=history.crisis_frequency == CrisisFrequency.INCREASING,
    )


class RiskClassifier:
    """
    Ordered-rule risk classifier.

    Rules (first match wins):
    1. CRITICAL - total >= 30, suicide >= 15, violence >= 15,
       suicide >= 10 with immediacy >= 10, or suicide with method
    2. HIGH - total >= 20, suicide >= 10, violence >= 10,
       self-harm >= 12, suicide with immediacy, violence with immediacy
    3. MEDIUM - total >= 10, suicide >= 5, self-harm >= 8,
       multiple concerns, substance with suicide
    4. LOW - total >= 3
    5. MINIMAL otherwise

    History-derived risk factors do not affect the level.

    Usage:
        classifier = RiskClassifier()
        level = classifier.classify(total, category_scores, risk_factors)
    """

    def __init__(self, thresholds: Optional[RiskThresholds] = None) -> None:
        self.thresholds = thresholds or RiskThresholds()

    def classify(
        self,
        total_score: float,
        category_scores: CategoryScores,
        risk_factors: RiskFactors,
    ) -> RiskLevel:
        t = self.thresholds
        suicide = score_of(category_scores, CrisisCategory.SUICIDE)
        violence = score_of(category_scores, CrisisCategory.VIOLENCE)
        self_harm = score_of(category_scores, CrisisCategory.SELF_HARM)
        immediacy = score_of(category_scores, CrisisCategory.IMMEDIACY)

        if (
            total_score >= t.critical_total
            or suicide >= t.critical_suicide
            or violence >= t.critical_violence
            or (
                suicide >= t.critical_suicide_with_immediacy
                and immediacy >= t.critical_immediacy_with_suicide
            )
            or risk_factors.suicide_with_method
        ):
            return RiskLevel.CRITICAL

        if (
            total_score >= t.high_total
            or suicide >= t.high_suicide
            or violence >= t.high_violence
            or self_harm >= t.high_self_harm
            or risk_factors.suicide_with_immediacy
            or risk_factors.violence_with_immediacy
        ):
            return RiskLevel.HIGH

        if (
            total_score >= t.medium_total
            or suicide >= t.medium_suicide
            or self_harm >= t.medium_self_harm
            or risk_factors.multiple_concerns
            or risk_factors.substance_with_suicide
        ):
            return RiskLevel.MEDIUM

        if total_score >= t.low_total:
            return RiskLevel.LOW

        return RiskLevel.MINIMAL

    @staticmethod
    def requires_immediate(level: RiskLevel) -> bool:
        """HIGH and CRITICAL levels require an immediate alert."""
        return level >= RiskLevel.HIGH
