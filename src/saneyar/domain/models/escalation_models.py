"""
Escalation Models

Data models for session priority, alert creation and
responder notification.

ARCHITECTURE: These models are produced from a
CrisisAnalysisResult by the escalation trigger. They describe
what should happen; the dispatcher and its collaborators do it.

LEGAL_REVIEW_REQUIRED: Alert retention and responder paging
policies need legal review per jurisdiction.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Mapping, Optional

from saneyar.domain.enums.crisis_enums import PriorityLevel, RiskLevel


@dataclass(frozen=True)
class SessionProfile:
    """
    Profile attributes that raise session priority.

    Attributes:
        is_minor: User is under 18
        has_history: User has a documented mental health history
        previous_attempts: User has previous suicide attempts
        is_isolated: User reports no support network
    """

    is_minor: bool = False
    has_history: bool = False
    previous_attempts: bool = False
    is_isolated: bool = False

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "SessionProfile":
        return cls(
            is_minor=bool(data.get("is_minor", False)),
            has_history=bool(data.get("has_history", False)),
            previous_attempts=bool(data.get("previous_attempts", False)),
            is_isolated=bool(data.get("is_isolated", False)),
        )


@dataclass(frozen=True)
class SessionPriority:
    """Continuous 0-100 priority used to order responder queues."""

    score: int
    level: PriorityLevel
    estimated_wait_time: str

    def to_dict(self) -> dict:
        return {
            "score": self.score,
            "level": self.level.value,
            "estimated_wait_time": self.estimated_wait_time,
        }


@dataclass(frozen=True)
class NotificationStrategy:
    """
    How many responders to page and how to pace them.

    Attributes:
        responder_count: Responders to notify in total
        staggered: Page one at a time rather than all at once
        stagger_delay_seconds: Gap between staggered pages
    """

    responder_count: int
    staggered: bool
    stagger_delay_seconds: int

    def to_dict(self) -> dict:
        return {
            "responder_count": self.responder_count,
            "staggered": self.staggered,
            "stagger_delay_seconds": self.stagger_delay_seconds,
        }


@dataclass(frozen=True)
class CrisisAlertDraft:
    """
    Alert record content, ready for persistence.

    Carries what a reviewer needs to audit the escalation:
    risk level, confidence, matched phrases and risk factors.
    Raw message text is deliberately absent.
    """

    severity: RiskLevel
    confidence: float
    priority_level: PriorityLevel
    priority_score: int
    categories: tuple[str, ...] = ()
    keywords: tuple[str, ...] = ()
    risk_factors: tuple[str, ...] = ()
    recommendations: Mapping[str, Any] = field(default_factory=dict)
    corpus_version: str = ""
    alert_type: str = "keyword-detection"
    session_id: Optional[str] = None
    user_id: Optional[str] = None

    def to_record(self) -> dict:
        """Create the persistence payload."""
        return {
            "type": self.alert_type,
            "severity": self.severity.label,
            "confidence": round(self.confidence, 3),
            "priority": self.priority_level.value,
            "priority_score": self.priority_score,
            "categories": list(self.categories),
            "keywords": list(self.keywords),
            "risk_factors": list(self.risk_factors),
            "recommendations": dict(self.recommendations),
            "corpus_version": self.corpus_version,
            "session_id": self.session_id,
            "user_id": self.user_id,
            "status": "active",
        }


@dataclass(frozen=True)
class EscalationDecision:
    """
    Decision made by the escalation trigger.

    Attributes:
        create_alert: Whether an alert record must be created
        risk_level: Risk level of the analysis
        priority: Session priority
        notification_strategy: Responder paging plan
        notify_administrators: Whether administrators are paged too
        escalation_timeout_seconds: Time before an unacknowledged
            alert escalates further (None when no alert)
        alert: Alert content when create_alert is set
    """

    create_alert: bool
    risk_level: RiskLevel
    priority: SessionPriority
    notification_strategy: NotificationStrategy
    notify_administrators: bool = False
    escalation_timeout_seconds: Optional[int] = None
    alert: Optional[CrisisAlertDraft] = None

    def to_dict(self) -> dict:
        return {
            "create_alert": self.create_alert,
            "risk_level": self.risk_level.label,
            "priority": self.priority.to_dict(),
            "notification_strategy": self.notification_strategy.to_dict(),
            "notify_administrators": self.notify_administrators,
            "escalation_timeout_seconds": self.escalation_timeout_seconds,
        }


@dataclass
class DispatchReceipt:
    """
    Outcome of carrying out an escalation decision.

    Attributes:
        alert_id: Identifier assigned by the alert repository
        responders_notified: Count reported by the notifier
        notification_error: Error text when notification failed
            after the alert was persisted
        dispatched_at: When dispatch completed
    """

    alert_id: Optional[str] = None
    responders_notified: int = 0
    notification_error: Optional[str] = None
    dispatched_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def fully_delivered(self) -> bool:
        return self.alert_id is not None and self.notification_error is None

    def to_dict(self) -> dict:
        return {
            "alert_id": self.alert_id,
            "responders_notified": self.responders_notified,
            "notification_error": self.notification_error,
            "dispatched_at": self.dispatched_at.isoformat(),
        }
