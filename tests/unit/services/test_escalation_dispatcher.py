"""
Unit Tests for Escalation Dispatcher

Tests alert persistence, notification retries and failure handling.
"""

import asyncio

import pytest
from prometheus_client import REGISTRY

from saneyar.config import EscalationSettings, Settings
from saneyar.domain.enums.crisis_enums import RiskLevel
from saneyar.domain.models.crisis_models import CrisisAnalysisResult
from saneyar.domain.models.escalation_models import CrisisAlertDraft, EscalationDecision
from saneyar.infrastructure.alerts import (
    AlertDeliveryError,
    AlertRepository,
    InMemoryAlertRepository,
    InMemoryResponderNotifier,
    ResponderNotifier,
)
from saneyar.services.safety.escalation_dispatcher import (
    EscalationDeliveryError,
    EscalationDispatcher,
)
from saneyar.services.safety.escalation_trigger import EscalationTrigger


class FailingRepository(AlertRepository):
    """Repository that fails a fixed number of times."""

    def __init__(self, failures: int, retryable: bool = True) -> None:
        self.failures = failures
        self.retryable = retryable
        self.calls = 0

    async def create_alert(self, draft: CrisisAlertDraft) -> str:
        self.calls += 1
        if self.calls <= self.failures:
            raise AlertDeliveryError("store unavailable", is_retryable=self.retryable)
        return "alert-1"


class FlakyNotifier(ResponderNotifier):
    """Notifier that fails a fixed number of times."""

    def __init__(self, failures: int, retryable: bool = True) -> None:
        self.failures = failures
        self.retryable = retryable
        self.calls = 0

    async def notify(self, alert_id: str, decision: EscalationDecision) -> int:
        self.calls += 1
        if self.calls <= self.failures:
            raise AlertDeliveryError("pager unavailable", is_retryable=self.retryable)
        return decision.notification_strategy.responder_count


class UnreachableNotifier(ResponderNotifier):
    """Notifier whose transport raises a plain connection error."""

    def __init__(self) -> None:
        self.calls = 0

    async def notify(self, alert_id: str, decision: EscalationDecision) -> int:
        self.calls += 1
        raise ConnectionError("push gateway down")


class CorruptRepository(AlertRepository):
    async def create_alert(self, draft: CrisisAlertDraft) -> str:
        raise RuntimeError("unique constraint violated")


class SlowNotifier(ResponderNotifier):
    async def notify(self, alert_id: str, decision: EscalationDecision) -> int:
        await asyncio.sleep(5)
        return 0


@pytest.fixture
def escalation_settings(test_settings: Settings) -> EscalationSettings:
    return test_settings.escalation


@pytest.fixture
def decision() -> EscalationDecision:
    analysis = CrisisAnalysisResult(risk_level=RiskLevel.CRITICAL, requires_immediate=True)
    return EscalationTrigger(corpus_version="test").evaluate(analysis)


class TestEscalationDispatcher:
    """Tests for EscalationDispatcher."""

    @pytest.mark.asyncio
    async def test_dispatch_persists_and_notifies(
        self,
        decision: EscalationDecision,
        escalation_settings: EscalationSettings,
    ) -> None:
        repository = InMemoryAlertRepository()
        notifier = InMemoryResponderNotifier()
        dispatcher = EscalationDispatcher(repository, notifier, escalation_settings)

        receipt = await dispatcher.dispatch(decision)

        assert receipt.fully_delivered is True
        assert receipt.responders_notified == 3
        assert repository.get(receipt.alert_id)["severity"] == "critical"
        # Three responders plus administrators
        assert len(notifier.pages) == 4

    @pytest.mark.asyncio
    async def test_retryable_notification_failure_is_retried(
        self,
        decision: EscalationDecision,
        escalation_settings: EscalationSettings,
    ) -> None:
        notifier = FlakyNotifier(failures=2)
        dispatcher = EscalationDispatcher(InMemoryAlertRepository(), notifier, escalation_settings)

        receipt = await dispatcher.dispatch(decision)

        assert notifier.calls == 3
        assert receipt.fully_delivered is True

    @pytest.mark.asyncio
    async def test_notification_failure_recorded_on_receipt(
        self,
        decision: EscalationDecision,
        escalation_settings: EscalationSettings,
    ) -> None:
        notifier = FlakyNotifier(failures=10)
        dispatcher = EscalationDispatcher(InMemoryAlertRepository(), notifier, escalation_settings)

        receipt = await dispatcher.dispatch(decision)

        assert notifier.calls == escalation_settings.notification_max_attempts
        assert receipt.alert_id is not None
        assert receipt.fully_delivered is False
        assert "pager unavailable" in receipt.notification_error

    @pytest.mark.asyncio
    async def test_non_retryable_failure_not_retried(
        self,
        decision: EscalationDecision,
        escalation_settings: EscalationSettings,
    ) -> None:
        notifier = FlakyNotifier(failures=1, retryable=False)
        dispatcher = EscalationDispatcher(InMemoryAlertRepository(), notifier, escalation_settings)

        receipt = await dispatcher.dispatch(decision)

        assert notifier.calls == 1
        assert receipt.notification_error is not None

    @pytest.mark.asyncio
    async def test_persistence_failure_raises(
        self,
        decision: EscalationDecision,
        escalation_settings: EscalationSettings,
    ) -> None:
        repository = FailingRepository(failures=10)
        notifier = InMemoryResponderNotifier()
        dispatcher = EscalationDispatcher(repository, notifier, escalation_settings)

        with pytest.raises(EscalationDeliveryError):
            await dispatcher.dispatch(decision)

        assert repository.calls == escalation_settings.notification_max_attempts
        assert notifier.pages == []

    @pytest.mark.asyncio
    async def test_transient_persistence_failure_recovers(
        self,
        decision: EscalationDecision,
        escalation_settings: EscalationSettings,
    ) -> None:
        repository = FailingRepository(failures=1)
        dispatcher = EscalationDispatcher(repository, InMemoryResponderNotifier(), escalation_settings)

        receipt = await dispatcher.dispatch(decision)

        assert receipt.alert_id == "alert-1"

    @pytest.mark.asyncio
    async def test_notification_timeout(self, decision: EscalationDecision) -> None:
        settings = EscalationSettings(
            dispatch_timeout_seconds=0.05,
            notification_max_attempts=1,
            notification_backoff_max_seconds=0.0,
        )
        dispatcher = EscalationDispatcher(InMemoryAlertRepository(), SlowNotifier(), settings)

        receipt = await dispatcher.dispatch(decision)

        assert "timed out" in receipt.notification_error

    @pytest.mark.asyncio
    async def test_decision_without_alert_rejected(
        self,
        escalation_settings: EscalationSettings,
    ) -> None:
        decision = EscalationTrigger().evaluate(CrisisAnalysisResult())
        dispatcher = EscalationDispatcher(
            InMemoryAlertRepository(),
            InMemoryResponderNotifier(),
            escalation_settings,
        )

        with pytest.raises(ValueError):
            await dispatcher.dispatch(decision)

    @pytest.mark.asyncio
    async def test_schedule_runs_in_background(
        self,
        decision: EscalationDecision,
        escalation_settings: EscalationSettings,
    ) -> None:
        dispatcher = EscalationDispatcher(
            InMemoryAlertRepository(),
            InMemoryResponderNotifier(),
            escalation_settings,
        )

        task = dispatcher.schedule(decision)
        receipt = await task

        assert receipt.fully_delivered is True
        assert dispatcher.pending == 0

    @pytest.mark.asyncio
    async def test_scheduled_failure_surfaces_through_task(
        self,
        decision: EscalationDecision,
        escalation_settings: EscalationSettings,
    ) -> None:
        dispatcher = EscalationDispatcher(
            FailingRepository(failures=10, retryable=False),
            InMemoryResponderNotifier(),
            escalation_settings,
        )

        task = dispatcher.schedule(decision)

        with pytest.raises(EscalationDeliveryError):
            await task

    @pytest.mark.asyncio
    async def test_unexpected_notifier_error_recorded_on_receipt(
        self,
        decision: EscalationDecision,
        escalation_settings: EscalationSettings,
    ) -> None:
        repository = InMemoryAlertRepository()
        notifier = UnreachableNotifier()
        dispatcher = EscalationDispatcher(repository, notifier, escalation_settings)

        receipt = await dispatcher.dispatch(decision)

        assert notifier.calls == 1
        assert receipt.alert_id in repository.alerts
        assert receipt.fully_delivered is False
        assert "push gateway down" in receipt.notification_error

    @pytest.mark.asyncio
    async def test_unexpected_repository_error_raises_delivery_error(
        self,
        decision: EscalationDecision,
        escalation_settings: EscalationSettings,
    ) -> None:
        notifier = InMemoryResponderNotifier()
        dispatcher = EscalationDispatcher(CorruptRepository(), notifier, escalation_settings)

        with pytest.raises(EscalationDeliveryError) as exc_info:
            await dispatcher.dispatch(decision)

        delivery_error = exc_info.value.original_error
        assert isinstance(delivery_error, AlertDeliveryError)
        assert isinstance(delivery_error.original_error, RuntimeError)
        assert notifier.pages == []

    @pytest.mark.asyncio
    async def test_retries_counted_per_operation(
        self,
        decision: EscalationDecision,
        escalation_settings: EscalationSettings,
    ) -> None:
        def retries(operation: str) -> float:
            value = REGISTRY.get_sample_value(
                "saneyar_alert_dispatch_retries_total",
                {"operation": operation},
            )
            return value or 0.0

        persistence_before = retries("persistence")
        notification_before = retries("notification")
        dispatcher = EscalationDispatcher(
            FailingRepository(failures=1),
            InMemoryResponderNotifier(),
            escalation_settings,
        )

        await dispatcher.dispatch(decision)

        assert retries("persistence") == persistence_before + 1
        assert retries("notification") == notification_before
