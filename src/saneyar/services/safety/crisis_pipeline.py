"""
Crisis Alert Pipeline

Screens inbound messages and starts alert dispatch when a
message requires an immediate response.

ARCHITECTURE: This pipeline is the integration point for the
messaging subsystem. screen() is pure and synchronous.
process_message() adds the side effects without blocking
message delivery on them.

SAFETY-CRITICAL: Every outcome with requires_immediate=True
carries an alert decision, and process_message always starts
dispatch for it.
"""

import asyncio
from dataclasses import dataclass
from typing import Optional

from saneyar.config.logging_config import get_logger
from saneyar.domain.models.crisis_models import CrisisAnalysisResult, UserHistory
from saneyar.domain.models.escalation_models import (
    DispatchReceipt,
    EscalationDecision,
    SessionProfile,
)
from saneyar.infrastructure.alerts.in_memory import (
    InMemoryAlertRepository,
    InMemoryResponderNotifier,
)
from saneyar.services.detection.crisis_analyzer import CrisisAnalyzer
from saneyar.services.safety.escalation_dispatcher import EscalationDispatcher
from saneyar.services.safety.escalation_trigger import EscalationTrigger

logger = get_logger(__name__)


@dataclass
class ScreeningOutcome:
    """
    Result of screening one message.

    Attributes:
        analysis: Crisis analysis
        decision: Escalation decision
        dispatch_task: Background dispatch, when an alert was required
    """

    analysis: CrisisAnalysisResult
    decision: EscalationDecision
    dispatch_task: Optional["asyncio.Task[DispatchReceipt]"] = None

    @property
    def requires_immediate(self) -> bool:
        return self.analysis.requires_immediate

    def to_dict(self) -> dict:
        return {
            "analysis": self.analysis.to_dict(),
            "decision": self.decision.to_dict(),
            "dispatch_started": self.dispatch_task is not None,
        }


class CrisisAlertPipeline:
    """
    Message screening pipeline.

    Orchestrates:
    1. Crisis analysis
    2. Escalation decision
    3. Background alert dispatch (process_message only)

    Usage:
        pipeline = CrisisAlertPipeline(analyzer, dispatcher=dispatcher)
        outcome = await pipeline.process_message(text, profile=profile)
    """

    def __init__(
        self,
        analyzer: Optional[CrisisAnalyzer] = None,
        trigger: Optional[EscalationTrigger] = None,
        dispatcher: Optional[EscalationDispatcher] = None,
    ) -> None:
        """
        Initialize pipeline.

        Args:
            analyzer: Crisis analyzer (built-in corpus if None)
            trigger: Escalation trigger
            dispatcher: Alert dispatcher (in-memory collaborators if None)
        """
        self._analyzer = analyzer or CrisisAnalyzer()
        self._trigger = trigger or EscalationTrigger(corpus_version=self._analyzer.corpus.version)
        if dispatcher is None:
            logger.warning("No alert dispatcher configured, using in-memory collaborators")
            dispatcher = EscalationDispatcher(
                InMemoryAlertRepository(),
                InMemoryResponderNotifier(),
            )
        self._dispatcher = dispatcher

    def screen(
        self,
        text: Optional[str],
        history: Optional[UserHistory] = None,
        profile: Optional[SessionProfile] = None,
        session_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> ScreeningOutcome:
        """
        Analyze a message and decide on escalation.

        No side effects beyond logging and metrics.
        """
        analysis = self._analyzer.analyze(text, history)
        decision = self._trigger.evaluate(
            analysis,
            profile,
            session_id=session_id,
            user_id=user_id,
        )
        return ScreeningOutcome(analysis=analysis, decision=decision)

    async def process_message(
        self,
        text: Optional[str],
        history: Optional[UserHistory] = None,
        profile: Optional[SessionProfile] = None,
        session_id: Optional[str] = None,
        user_id: Optional[str] = None,
    ) -> ScreeningOutcome:
        """
        Screen a message and start alert dispatch when required.

        Returns as soon as dispatch is scheduled. Await
        outcome.dispatch_task to observe the receipt.
        """
        outcome = self.screen(text, history, profile, session_id, user_id)

        if outcome.decision.create_alert:
            outcome.dispatch_task = self._dispatcher.schedule(outcome.decision)

        return outcome
