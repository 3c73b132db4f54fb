"""
Escalation Dispatcher

Carries out escalation decisions: persists the crisis alert,
then pages responders.

SAFETY-CRITICAL: An alert that cannot be persisted is a
critical failure. It is logged, counted and raised to the
caller, never swallowed.

ARCHITECTURE: Dispatch is the only asynchronous part of the
system. schedule() runs it as a background task so message
delivery latency does not depend on alert storage or paging.
"""

import asyncio
from typing import Callable, Optional

from tenacity import (
    AsyncRetrying,
    RetryCallState,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential,
)

from saneyar.config.logging_config import get_logger
from saneyar.config.settings import EscalationSettings
from saneyar.domain.models.escalation_models import DispatchReceipt, EscalationDecision
from saneyar.infrastructure.alerts.interfaces import (
    AlertDeliveryError,
    AlertRepository,
    ResponderNotifier,
)
from saneyar.infrastructure.metrics.prometheus_metrics import (
    track_dispatch,
    track_dispatch_outcome,
    track_dispatch_retry,
)

logger = get_logger(__name__)


class EscalationDeliveryError(Exception):
    """Raised when an alert required by a decision could not be persisted."""

    def __init__(self, message: str, original_error: Optional[Exception] = None) -> None:
        super().__init__(message)
        self.original_error = original_error


def _is_retryable(error: BaseException) -> bool:
    return isinstance(error, AlertDeliveryError) and error.is_retryable


def _retry_logger(operation: str) -> Callable[[RetryCallState], None]:
    def log_retry(retry_state: RetryCallState) -> None:
        track_dispatch_retry(operation)
        error = retry_state.outcome.exception() if retry_state.outcome else None
        logger.warning(
            "Alert collaborator call failed, retrying",
            operation=operation,
            attempt=retry_state.attempt_number,
            error=str(error),
        )
    return log_retry


class EscalationDispatcher:
    """
    Alert dispatcher.

    Steps:
    1. Persist the alert draft (retried on retryable errors)
    2. Notify responders (retried on retryable errors)

    Each collaborator call is bounded by the dispatch timeout.
    A timeout counts as a retryable delivery error. Any other
    collaborator exception becomes a non-retryable delivery error.

    Usage:
        dispatcher = EscalationDispatcher(repository, notifier)
        receipt = await dispatcher.dispatch(decision)
    """

    def __init__(
        self,
        repository: AlertRepository,
        notifier: ResponderNotifier,
        settings: Optional[EscalationSettings] = None,
    ) -> None:
        self._repository = repository
        self._notifier = notifier
        self._settings = settings or EscalationSettings()
        self._tasks: set[asyncio.Task] = set()

    def _retrying(self, operation: str) -> AsyncRetrying:
        return AsyncRetrying(
            stop=stop_after_attempt(self._settings.notification_max_attempts),
            wait=wait_exponential(
                multiplier=1,
                min=0,
                max=self._settings.notification_backoff_max_seconds,
            ),
            retry=retry_if_exception(_is_retryable),
            before_sleep=_retry_logger(operation),
            reraise=True,
        )

    async def _bounded(self, awaitable, operation: str):
        try:
            return await asyncio.wait_for(awaitable, timeout=self._settings.dispatch_timeout_seconds)
        except asyncio.TimeoutError as e:
            raise AlertDeliveryError(
                f"{operation} timed out after {self._settings.dispatch_timeout_seconds}s",
                is_retryable=True,
                original_error=e,
            ) from e
        except AlertDeliveryError:
            raise
        except Exception as e:
            logger.error("Unexpected alert collaborator error", operation=operation, error=str(e))
            raise AlertDeliveryError(
                f"{operation} failed: {e}",
                is_retryable=False,
                original_error=e,
            ) from e

    @track_dispatch
    async def dispatch(self, decision: EscalationDecision) -> DispatchReceipt:
        """
        Persist and notify for one decision.

        Args:
            decision: Decision with create_alert set and an alert draft

        Returns:
            DispatchReceipt

        Raises:
            ValueError: If the decision carries no alert
            EscalationDeliveryError: If the alert could not be persisted
        """
        if not decision.create_alert or decision.alert is None:
            raise ValueError("Escalation decision does not require an alert")

        draft = decision.alert

        try:
            async for attempt in self._retrying("persistence"):
                with attempt:
                    alert_id = await self._bounded(
                        self._repository.create_alert(draft),
                        "Alert persistence",
                    )
        except AlertDeliveryError as e:
            logger.critical(
                "Crisis alert could not be persisted",
                severity=draft.severity.label,
                priority=draft.priority_level.value,
                session_id=draft.session_id,
                error=str(e),
            )
            raise EscalationDeliveryError("Crisis alert could not be persisted", e) from e

        receipt = DispatchReceipt(alert_id=alert_id)

        try:
            async for attempt in self._retrying("notification"):
                with attempt:
                    receipt.responders_notified = await self._bounded(
                        self._notifier.notify(alert_id, decision),
                        "Responder notification",
                    )
        except AlertDeliveryError as e:
            receipt.notification_error = str(e)
            track_dispatch_outcome("notification_failed")
            logger.error(
                "Responder notification failed",
                alert_id=alert_id,
                priority=draft.priority_level.value,
                error=str(e),
            )
            return receipt

        track_dispatch_outcome("delivered")
        logger.info(
            "Crisis alert dispatched",
            alert_id=alert_id,
            responders_notified=receipt.responders_notified,
            notify_administrators=decision.notify_administrators,
        )
        return receipt

    def schedule(self, decision: EscalationDecision) -> asyncio.Task:
        """
        Start dispatch in the background.

        Must be called from a running event loop. The returned
        task re-raises dispatch failures when awaited; failures
        are also logged when the task finishes.
        """
        task = asyncio.create_task(self.dispatch(decision))
        self._tasks.add(task)
        task.add_done_callback(self._on_task_done)
        return task

    def _on_task_done(self, task: asyncio.Task) -> None:
        self._tasks.discard(task)
        if task.cancelled():
            logger.error("Alert dispatch task was cancelled")
            return
        error = task.exception()
        if error is not None:
            logger.error(
                "Alert dispatch task failed",
                error=str(error),
                error_type=type(error).__name__,
            )

    @property
    def pending(self) -> int:
        """Number of dispatch tasks still running."""
        return len(self._tasks)
