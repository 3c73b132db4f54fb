"""
Escalation Trigger

Turns a crisis analysis into an escalation decision: whether to
raise an alert, how urgently, and whom to page.

SAFETY-CRITICAL: create_alert mirrors requires_immediate and is
never suppressed here. Every HIGH or CRITICAL analysis yields
an alert draft.

ARCHITECTURE: Evaluation is pure. Side effects (persisting the
alert, paging responders) belong to the escalation dispatcher.
"""

from typing import Optional

from saneyar.config.logging_config import get_logger
from saneyar.domain.enums.crisis_enums import PriorityLevel, RiskLevel
from saneyar.domain.models.crisis_models import CrisisAnalysisResult
from saneyar.domain.models.escalation_models import (
    CrisisAlertDraft,
    EscalationDecision,
    NotificationStrategy,
    SessionPriority,
    SessionProfile,
)
from saneyar.infrastructure.metrics.prometheus_metrics import track_escalation_decision
from saneyar.services.safety.session_priority import classify_session_priority

logger = get_logger(__name__)


NOTIFICATION_STRATEGIES: dict[PriorityLevel, NotificationStrategy] = {
    PriorityLevel.EMERGENCY: NotificationStrategy(responder_count=3, staggered=False, stagger_delay_seconds=0),
    PriorityLevel.URGENT: NotificationStrategy(responder_count=2, staggered=True, stagger_delay_seconds=30),
    PriorityLevel.HIGH: NotificationStrategy(responder_count=2, staggered=True, stagger_delay_seconds=60),
    PriorityLevel.NORMAL: NotificationStrategy(responder_count=1, staggered=True, stagger_delay_seconds=120),
    PriorityLevel.LOW: NotificationStrategy(responder_count=1, staggered=True, stagger_delay_seconds=300),
}

# Seconds before an unacknowledged alert escalates further
ESCALATION_TIMEOUTS: dict[RiskLevel, Optional[int]] = {
    RiskLevel.CRITICAL: 60,
    RiskLevel.HIGH: 180,
    RiskLevel.MEDIUM: 300,
    RiskLevel.LOW: 600,
    RiskLevel.MINIMAL: None,
}

ADMIN_NOTIFY_LEVELS = frozenset({PriorityLevel.EMERGENCY, PriorityLevel.URGENT})


class EscalationTrigger:
    """
    Escalation decision maker.

    Decision content:
    - create_alert: analysis.requires_immediate
    - priority: session priority (risk level + profile + combinations)
    - notification_strategy: responders to page, keyed by priority
    - notify_administrators: emergency and urgent priorities
    - escalation_timeout_seconds: keyed by risk level
    - alert: audit-ready draft when create_alert is set

    Usage:
        trigger = EscalationTrigger(corpus_version=corpus.version)
        decision = trigger.evaluate(analysis, profile)
    """

    def __init__(self, corpus_version: str = "") -> None:
        self._corpus_version = corpus_version

    def evaluate(
        self,
        analysis: CrisisAnalysisResult,
        profile: Optional[SessionProfile] = None,
        session_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> EscalationDecision:
        """
        Build the escalation decision for an analysis.

        Args:
            analysis: Crisis analysis for the message
            profile: Optional user profile attributes
            session_id: Optional session reference for the alert
            user_id: Optional user reference for the alert

        Returns:
            EscalationDecision
        """
        priority = classify_session_priority(analysis, profile)
        create_alert = analysis.requires_immediate

        alert = None
        if create_alert:
            alert = self._build_alert(analysis, priority, session_id, user_id)

        decision = EscalationDecision(
            create_alert=create_alert,
            risk_level=analysis.risk_level,
            priority=priority,
            notification_strategy=NOTIFICATION_STRATEGIES[priority.level],
            notify_administrators=priority.level in ADMIN_NOTIFY_LEVELS,
            escalation_timeout_seconds=ESCALATION_TIMEOUTS[analysis.risk_level],
            alert=alert,
        )

        track_escalation_decision(priority.level.value, create_alert)

        if create_alert:
            logger.warning(
                "Crisis alert required",
                risk_level=analysis.risk_level.label,
                priority=priority.level.value,
                priority_score=priority.score,
                notify_administrators=decision.notify_administrators,
                session_id=session_id,
            )

        return decision

    def _build_alert(
        self,
        analysis: CrisisAnalysisResult,
        priority: SessionPriority,
        session_id: Optional[str],
        user_id: Optional[str],
    ) -> CrisisAlertDraft:
        return CrisisAlertDraft(
            severity=analysis.risk_level,
            confidence=analysis.confidence,
            priority_level=priority.level,
            priority_score=priority.score,
            categories=tuple(c.value for c in analysis.active_categories()),
            keywords=tuple(m.phrase for m in analysis.matched_keywords),
            risk_factors=tuple(analysis.risk_factors.active()),
            recommendations=analysis.recommendations.to_dict(),
            corpus_version=self._corpus_version,
            session_id=session_id,
            user_id=user_id,
        )
