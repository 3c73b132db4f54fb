"""
Unit Tests for Escalation Trigger

Tests alert creation, paging strategy and alert content.
"""

import pytest

from saneyar.domain.enums.crisis_enums import PriorityLevel, RiskLevel
from saneyar.domain.models.crisis_models import CrisisAnalysisResult, RiskFactors
from saneyar.domain.models.escalation_models import SessionProfile
from saneyar.services.detection.crisis_analyzer import CrisisAnalyzer
from saneyar.services.safety.escalation_trigger import EscalationTrigger


class TestEscalationTrigger:
    """Tests for EscalationTrigger."""

    @pytest.fixture
    def trigger(self) -> EscalationTrigger:
        return EscalationTrigger(corpus_version="test-corpus")

    def test_minimal_creates_no_alert(self, trigger: EscalationTrigger) -> None:
        decision = trigger.evaluate(CrisisAnalysisResult())

        assert decision.create_alert is False
        assert decision.alert is None
        assert decision.escalation_timeout_seconds is None
        assert decision.priority.level == PriorityLevel.LOW
        assert decision.notification_strategy.responder_count == 1
        assert decision.notification_strategy.stagger_delay_seconds == 300

    def test_medium_has_timeout_without_alert(self, trigger: EscalationTrigger) -> None:
        decision = trigger.evaluate(CrisisAnalysisResult(risk_level=RiskLevel.MEDIUM))

        assert decision.create_alert is False
        assert decision.escalation_timeout_seconds == 300

    def test_requires_immediate_always_creates_alert(self, trigger: EscalationTrigger) -> None:
        analysis = CrisisAnalysisResult(risk_level=RiskLevel.HIGH, requires_immediate=True)

        decision = trigger.evaluate(analysis)

        assert decision.create_alert is True
        assert decision.alert is not None
        assert decision.escalation_timeout_seconds == 180
        assert decision.priority.level == PriorityLevel.URGENT
        assert decision.notify_administrators is True
        assert decision.notification_strategy.responder_count == 2
        assert decision.notification_strategy.stagger_delay_seconds == 30

    def test_emergency_pages_all_at_once(self, trigger: EscalationTrigger) -> None:
        analysis = CrisisAnalysisResult(
            risk_level=RiskLevel.CRITICAL,
            requires_immediate=True,
            risk_factors=RiskFactors(suicide_with_method=True),
        )

        decision = trigger.evaluate(analysis, SessionProfile(is_minor=True))

        assert decision.priority.level == PriorityLevel.EMERGENCY
        assert decision.notification_strategy.responder_count == 3
        assert decision.notification_strategy.staggered is False
        assert decision.escalation_timeout_seconds == 60

    def test_high_priority_does_not_page_administrators(self, trigger: EscalationTrigger) -> None:
        decision = trigger.evaluate(CrisisAnalysisResult(risk_level=RiskLevel.MEDIUM))

        assert decision.priority.level == PriorityLevel.HIGH
        assert decision.notify_administrators is False
        assert decision.notification_strategy.stagger_delay_seconds == 60

    def test_alert_content(self, trigger: EscalationTrigger, analyzer: CrisisAnalyzer) -> None:
        analysis = analyzer.analyze("I want to kill myself tonight")

        decision = trigger.evaluate(analysis, session_id="session-1", user_id="user-1")
        record = decision.alert.to_record()

        assert record["severity"] == "critical"
        assert record["status"] == "active"
        assert record["categories"] == ["suicide", "immediacy"]
        assert "kill myself" in record["keywords"]
        assert "tonight" in record["keywords"]
        assert "suicide_with_immediacy" in record["risk_factors"]
        assert record["corpus_version"] == "test-corpus"
        assert record["session_id"] == "session-1"
        assert record["recommendations"]["resources"][0]["contact"] == "988"

    def test_alert_record_has_no_message_text(
        self,
        trigger: EscalationTrigger,
        analyzer: CrisisAnalyzer,
    ) -> None:
        text = "I want to kill myself tonight"
        decision = trigger.evaluate(analyzer.analyze(text))

        assert text.lower() not in str(decision.alert.to_record()).lower()
