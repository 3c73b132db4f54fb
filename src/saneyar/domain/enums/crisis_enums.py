"""
Crisis Detection Enumerations

Defines the crisis taxonomy (categories and severity tiers),
the context modifiers that adjust a phrase's contribution,
and the two separate output scales: discrete risk level for
triage display, and priority level for queue ordering.

CLINICAL_REVIEW_REQUIRED: Category boundaries and level
definitions should be validated by mental health professionals.
"""

from enum import IntEnum, StrEnum


class CrisisCategory(StrEnum):
    """
    Semantic bucket of crisis-indicative phrases.

    Every analysis reports a score for all eight categories.
    """

    SUICIDE = "suicide"
    SELF_HARM = "self_harm"
    VIOLENCE = "violence"
    IMMEDIACY = "immediacy"
    HOPELESSNESS = "hopelessness"
    SUBSTANCE = "substance"
    ISOLATION = "isolation"
    METHODS = "methods"


class SeverityTier(StrEnum):
    """How strongly a phrase implies risk before context adjustment."""

    CRITICAL = "critical"
    HIGH = "high"
    MEDIUM = "medium"


class ContextModifier(StrEnum):
    """Textual cue near a matched phrase that scales its contribution."""

    NEGATION = "negation"
    """Phrase is denied ("I don't want to ..."). Scales down."""

    INTENSIFIER = "intensifier"
    """Emphasis nearby ("really", "completely"). Scales up."""

    CERTAINTY = "certainty"
    """Resolve or futurity nearby ("will", "decided"). Scales up."""


class RiskLevel(IntEnum):
    """
    Discrete crisis risk classification.

    Higher values indicate higher risk requiring more
    immediate intervention. Serialized as lowercase names.

    LEGAL_REVIEW_REQUIRED: Risk level definitions and their
    associated actions have legal and clinical implications.
    """

    MINIMAL = 0
    """No crisis language, or only trace signals."""

    LOW = 1
    """
    Low risk - routine follow-up.
    - Weak or isolated signals
    - Monitor for escalation
    """

    MEDIUM = 2
    """
    Medium risk - counselor involvement.
    - Several concerns, or moderate suicidal/self-harm language
    - Follow-up within 24 hours
    """

    HIGH = 3
    """
    High risk - immediate responder attention.
    - Explicit suicidal or violent language, or a dangerous combination
    - Alert record and responder notification required
    """

    CRITICAL = 4
    """
    Critical risk - active crisis.
    - Plan, method, or imminent timeframe present
    - Emergency protocol, continuous monitoring

    SAFETY_NOTE: Alerts at this level are escalated further
    if no responder acknowledges them within a minute.
    """

    @property
    def label(self) -> str:
        """Lowercase wire name (minimal, low, medium, high, critical)."""
        return self.name.lower()

    @classmethod
    def from_label(cls, label: str) -> "RiskLevel":
        """Parse a wire name back into a level."""
        return cls[label.strip().upper()]


class CrisisFrequency(StrEnum):
    """Trend of a user's past crisis events, supplied by history."""

    DECREASING = "decreasing"
    STABLE = "stable"
    INCREASING = "increasing"


class PriorityLevel(StrEnum):
    """
    Urgency tier derived from the 0-100 session priority score.

    This is the scale schedulers sort on; risk level alone
    is too coarse for queue ordering.
    """

    LOW = "low"
    NORMAL = "normal"
    HIGH = "high"
    URGENT = "urgent"
    EMERGENCY = "emergency"
