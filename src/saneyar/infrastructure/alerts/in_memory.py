"""
In-Memory Alert Collaborators

Process-local alert store and notifier for development and tests.

WARNING: Alerts are lost on restart. Production deployments
must provide durable implementations.
"""

import asyncio
from typing import Optional
from uuid import uuid4

from saneyar.config.logging_config import get_logger
from saneyar.domain.models.escalation_models import CrisisAlertDraft, EscalationDecision
from saneyar.infrastructure.alerts.interfaces import AlertRepository, ResponderNotifier

logger = get_logger(__name__)


class InMemoryAlertRepository(AlertRepository):
    """Alert repository backed by a dict."""

    def __init__(self) -> None:
        self._alerts: dict[str, dict] = {}
        self._lock = asyncio.Lock()

    async def create_alert(self, draft: CrisisAlertDraft) -> str:
        alert_id = str(uuid4())
        async with self._lock:
            self._alerts[alert_id] = draft.to_record()
        logger.info(
            "Crisis alert stored",
            alert_id=alert_id,
            severity=draft.severity.label,
            priority=draft.priority_level.value,
        )
        return alert_id

    def get(self, alert_id: str) -> Optional[dict]:
        return self._alerts.get(alert_id)

    @property
    def alerts(self) -> dict[str, dict]:
        return dict(self._alerts)


class InMemoryResponderNotifier(ResponderNotifier):
    """
    Notifier that records pages instead of sending them.

    Staggered strategies are recorded with their delays but
    not slept on.
    """

    def __init__(self) -> None:
        self.pages: list[dict] = []

    async def notify(self, alert_id: str, decision: EscalationDecision) -> int:
        strategy = decision.notification_strategy
        for index in range(strategy.responder_count):
            delay = index * strategy.stagger_delay_seconds if strategy.staggered else 0
            self.pages.append({
                "alert_id": alert_id,
                "responder_index": index,
                "delay_seconds": delay,
                "priority": decision.priority.level.value,
            })
        if decision.notify_administrators:
            self.pages.append({
                "alert_id": alert_id,
                "responder_index": None,
                "delay_seconds": 0,
                "priority": decision.priority.level.value,
                "administrators": True,
            })
        return strategy.responder_count
