"""
Crisis Analysis Models

Data models produced by the crisis detection pipeline.

SAFETY-CRITICAL: CrisisAnalysisResult is the single artifact the
messaging subsystem uses to decide whether to raise an alert.

ARCHITECTURE: Every model here is immutable. A result is created
fresh per message, handed to the caller, and never mutated. No
timestamps or random identifiers are embedded, so identical input
always serializes identically.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from saneyar.domain.enums.crisis_enums import (
    ContextModifier,
    CrisisCategory,
    CrisisFrequency,
    RiskLevel,
    SeverityTier,
)


@dataclass(frozen=True)
class PhraseEntry:
    """A single crisis-indicative phrase in the corpus."""

    category: CrisisCategory
    tier: SeverityTier
    phrase: str


@dataclass(frozen=True)
class ContextAssessment:
    """
    Context modifiers found around one phrase occurrence.

    Attributes:
        multiplier: Product of all applied modifier multipliers
        negated: A negation term precedes the phrase
        intensified: An intensifier appears in the window
        certainty: A certainty/futurity term appears in the window
        surrounding_text: The inspected window
    """

    multiplier: float = 1.0
    negated: bool = False
    intensified: bool = False
    certainty: bool = False
    surrounding_text: str = ""

    @property
    def modifiers(self) -> frozenset[ContextModifier]:
        applied = set()
        if self.negated:
            applied.add(ContextModifier.NEGATION)
        if self.intensified:
            applied.add(ContextModifier.INTENSIFIER)
        if self.certainty:
            applied.add(ContextModifier.CERTAINTY)
        return frozenset(applied)


@dataclass(frozen=True)
class MatchRecord:
    """
    One matched phrase and how it was scored.

    Kept on the result for auditability: an alert record carries
    the full list so reviewers can see why a message escalated.
    """

    phrase: str
    category: CrisisCategory
    tier: SeverityTier
    raw_score: float
    context_multiplier: float
    final_score: float
    surrounding_text: str = ""

    def to_dict(self) -> dict:
        return {
            "phrase": self.phrase,
            "category": self.category.value,
            "tier": self.tier.value,
            "raw_score": round(self.raw_score, 3),
            "context_multiplier": round(self.context_multiplier, 3),
            "final_score": round(self.final_score, 3),
        }


@dataclass(frozen=True)
class CategoryScore:
    """Aggregate score for one crisis category."""

    category: CrisisCategory
    score: float = 0.0
    matches: tuple[MatchRecord, ...] = ()

    @property
    def is_active(self) -> bool:
        return self.score > 0

    def to_dict(self) -> dict:
        return {
            "score": round(self.score, 3),
            "matches": [m.to_dict() for m in self.matches],
        }


CategoryScores = Mapping[CrisisCategory, Union[CategoryScore, float]]


def score_of(scores: CategoryScores, category: CrisisCategory) -> float:
    """
    Read one category's score from a score mapping.

    Accepts CategoryScore values or plain numbers. A missing
    category counts as 0.0 rather than an error.
    """
    value = scores.get(category)
    if value is None:
        return 0.0
    if isinstance(value, CategoryScore):
        return value.score
    return float(value)


@dataclass(frozen=True)
class ContextFactors:
    """Which context modifiers fired anywhere in the message."""

    negation: bool = False
    intensified: bool = False
    certainty: bool = False

    def to_dict(self) -> dict:
        return {
            "negation": self.negation,
            "intensified": self.intensified,
            "certainty": self.certainty,
        }


@dataclass(frozen=True)
class UserHistory:
    """
    Lightweight historical signals for one user.

    Attributes:
        previous_crisis_events: Count of earlier crisis alerts
        last_assessment_score: Most recent PHQ-9/GAD-7 total
        crisis_frequency: Trend of crisis events
    """

    previous_crisis_events: int = 0
    last_assessment_score: Optional[float] = None
    crisis_frequency: Optional[CrisisFrequency] = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserHistory":
        frequency = data.get("crisis_frequency")
        return cls(
            previous_crisis_events=int(data.get("previous_crisis_events") or 0),
            last_assessment_score=data.get("last_assessment_score"),
            crisis_frequency=CrisisFrequency(frequency) if frequency else None,
        )


@dataclass(frozen=True)
class RiskFactors:
    """
    Derived booleans for dangerous category combinations.

    The combination flags feed risk level classification.
    The history flags only feed session priority.
    """

    multiple_concerns: bool = False
    suicide_with_method: bool = False
    suicide_with_immediacy: bool = False
    violence_with_immediacy: bool = False
    substance_with_suicide: bool = False

    # History-derived
    previous_crisis: bool = False
    recent_assessment: bool = False
    escalating_pattern: bool = False

    @property
    def has_history_signal(self) -> bool:
        return self.previous_crisis or self.recent_assessment or self.escalating_pattern

    def active(self) -> list[str]:
        """Names of the flags that are set."""
        return [name for name, value in self.to_dict().items() if value]

    def to_dict(self) -> dict:
        return {
            "multiple_concerns": self.multiple_concerns,
            "suicide_with_method": self.suicide_with_method,
            "suicide_with_immediacy": self.suicide_with_immediacy,
            "violence_with_immediacy": self.violence_with_immediacy,
            "substance_with_suicide": self.substance_with_suicide,
            "previous_crisis": self.previous_crisis,
            "recent_assessment": self.recent_assessment,
            "escalating_pattern": self.escalating_pattern,
        }


@dataclass(frozen=True)
class CrisisResource:
    """A crisis line or service offered alongside recommendations."""

    name: str
    contact: str
    resource_type: str = "hotline"  # hotline, text, emergency

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "contact": self.contact,
            "type": self.resource_type,
        }


@dataclass(frozen=True)
class Recommendations:
    """Action bundles for responders, grouped by time horizon."""

    immediate: tuple[str, ...] = ()
    short_term: tuple[str, ...] = ()
    long_term: tuple[str, ...] = ()
    resources: tuple[CrisisResource, ...] = ()

    def to_dict(self) -> dict:
        return {
            "immediate": list(self.immediate),
            "short_term": list(self.short_term),
            "long_term": list(self.long_term),
            "resources": [r.to_dict() for r in self.resources],
        }


@dataclass(frozen=True)
class ScoringResult:
    """Output of the scorer, before classification."""

    total_score: float
    category_scores: Mapping[CrisisCategory, CategoryScore]
    matched_keywords: tuple[MatchRecord, ...] = ()
    context_factors: ContextFactors = field(default_factory=ContextFactors)


@dataclass(frozen=True)
class CrisisAnalysisResult:
    """
    Complete crisis analysis for one message.

    Attributes:
        total_score: Sum of all phrase contributions (2 decimals)
        risk_level: Discrete classification
        category_scores: Score per category, all eight present
        matched_keywords: Every phrase match, for audit
        risk_factors: Derived combination and history flags
        context_factors: Modifiers seen anywhere in the message
        recommendations: Responder action bundles
        requires_immediate: Risk level is HIGH or CRITICAL
        confidence: min(total_score / 50, 1)

    SAFETY_NOTE: Callers must never swallow requires_immediate=True.
    """

    total_score: float = 0.0
    risk_level: RiskLevel = RiskLevel.MINIMAL
    category_scores: Mapping[CrisisCategory, CategoryScore] = field(
        default_factory=lambda: MappingProxyType({
            category: CategoryScore(category=category) for category in CrisisCategory
        })
    )
    matched_keywords: tuple[MatchRecord, ...] = ()
    risk_factors: RiskFactors = field(default_factory=RiskFactors)
    context_factors: ContextFactors = field(default_factory=ContextFactors)
    recommendations: Recommendations = field(default_factory=Recommendations)
    requires_immediate: bool = False
    confidence: float = 0.0

    def category_score(self, category: CrisisCategory) -> float:
        return score_of(self.category_scores, category)

    def active_categories(self) -> list[CrisisCategory]:
        """Categories with a positive score, in taxonomy order."""
        return [
            c for c in CrisisCategory
            if c in self.category_scores and self.category_scores[c].is_active
        ]

    def to_dict(self) -> dict:
        return {
            "total_score": self.total_score,
            "risk_level": self.risk_level.label,
            "category_scores": {
                category.value: self.category_scores[category].to_dict()
                if category in self.category_scores
                else CategoryScore(category=category).to_dict()
                for category in CrisisCategory
            },
            "matched_keywords": [m.to_dict() for m in self.matched_keywords],
            "risk_factors": self.risk_factors.to_dict(),
            "context_factors": self.context_factors.to_dict(),
            "recommendations": self.recommendations.to_dict(),
            "requires_immediate": self.requires_immediate,
            "confidence": round(self.confidence, 3),
        }
