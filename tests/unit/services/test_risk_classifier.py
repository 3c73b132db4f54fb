"""
Unit Tests for Risk Classifier

Tests risk factor derivation and ordered classification rules.
"""

import pytest

from saneyar.domain.enums.crisis_enums import CrisisCategory, CrisisFrequency, RiskLevel
from saneyar.domain.models.crisis_models import RiskFactors, UserHistory
from saneyar.services.safety.risk_classifier import (
    RiskClassifier,
    RiskThresholds,
    compute_risk_factors,
)


class TestComputeRiskFactors:
    """Tests for compute_risk_factors."""

    def test_empty_scores(self) -> None:
        factors = compute_risk_factors({})

        assert factors.active() == []

    def test_multiple_concerns_needs_three_categories(self) -> None:
        two = compute_risk_factors({
            CrisisCategory.HOPELESSNESS: 3.0,
            CrisisCategory.ISOLATION: 2.0,
        })
        three = compute_risk_factors({
            CrisisCategory.HOPELESSNESS: 3.0,
            CrisisCategory.ISOLATION: 2.0,
            CrisisCategory.SUBSTANCE: 4.0,
        })

        assert two.multiple_concerns is False
        assert three.multiple_concerns is True

    def test_combination_flags(self) -> None:
        factors = compute_risk_factors({
            CrisisCategory.SUICIDE: 5.0,
            CrisisCategory.METHODS: 3.0,
            CrisisCategory.IMMEDIACY: 3.0,
            CrisisCategory.SUBSTANCE: 4.0,
        })

        assert factors.suicide_with_method is True
        assert factors.suicide_with_immediacy is True
        assert factors.substance_with_suicide is True
        assert factors.violence_with_immediacy is False

    def test_zero_score_is_inactive(self) -> None:
        factors = compute_risk_factors({
            CrisisCategory.VIOLENCE: 0.0,
            CrisisCategory.IMMEDIACY: 12.0,
        })

        assert factors.violence_with_immediacy is False

    def test_history_flags(self) -> None:
        history = UserHistory(
            previous_crisis_events=2,
            last_assessment_score=18,
            crisis_frequency=CrisisFrequency.INCREASING,
        )

        factors = compute_risk_factors({}, history)

        assert factors.previous_crisis is True
        assert factors.recent_assessment is True
        assert factors.escalating_pattern is True
        assert factors.has_history_signal is True

    def test_assessment_threshold_is_exclusive(self) -> None:
        factors = compute_risk_factors({}, UserHistory(last_assessment_score=15))

        assert factors.recent_assessment is False

    def test_history_from_dict(self) -> None:
        history = UserHistory.from_dict({
            "previous_crisis_events": 1,
            "crisis_frequency": "stable",
        })

        factors = compute_risk_factors({}, history)

        assert factors.previous_crisis is True
        assert factors.escalating_pattern is False


class TestRiskClassifier:
    """Tests for RiskClassifier."""

    @pytest.fixture
    def classifier(self) -> RiskClassifier:
        return RiskClassifier()

    @pytest.mark.parametrize(
        "total, scores, expected",
        [
            (30.0, {}, RiskLevel.CRITICAL),
            (15.0, {CrisisCategory.SUICIDE: 15.0}, RiskLevel.CRITICAL),
            (15.0, {CrisisCategory.VIOLENCE: 15.0}, RiskLevel.CRITICAL),
            (20.0, {CrisisCategory.SUICIDE: 10.0, CrisisCategory.IMMEDIACY: 10.0}, RiskLevel.CRITICAL),
            (20.0, {}, RiskLevel.HIGH),
            (10.0, {CrisisCategory.SUICIDE: 10.0}, RiskLevel.HIGH),
            (10.0, {CrisisCategory.VIOLENCE: 10.0}, RiskLevel.HIGH),
            (12.0, {CrisisCategory.SELF_HARM: 12.0}, RiskLevel.HIGH),
            (10.0, {}, RiskLevel.MEDIUM),
            (5.0, {CrisisCategory.SUICIDE: 5.0}, RiskLevel.MEDIUM),
            (8.0, {CrisisCategory.SELF_HARM: 8.0}, RiskLevel.MEDIUM),
            (3.0, {}, RiskLevel.LOW),
            (2.99, {}, RiskLevel.MINIMAL),
            (0.0, {}, RiskLevel.MINIMAL),
        ],
    )
    def test_score_thresholds(
        self,
        classifier: RiskClassifier,
        total: float,
        scores: dict,
        expected: RiskLevel,
    ) -> None:
        assert classifier.classify(total, scores, RiskFactors()) == expected

    def test_rule_order_decides(self, classifier: RiskClassifier) -> None:
        # Satisfies both the critical and the high rule
        scores = {CrisisCategory.SUICIDE: 15.0, CrisisCategory.SELF_HARM: 12.0}

        assert classifier.classify(27.0, scores, RiskFactors()) == RiskLevel.CRITICAL

    def test_suicide_with_method_is_critical(self, classifier: RiskClassifier) -> None:
        factors = RiskFactors(suicide_with_method=True)

        assert classifier.classify(4.0, {}, factors) == RiskLevel.CRITICAL

    def test_immediacy_combinations_are_high(self, classifier: RiskClassifier) -> None:
        assert classifier.classify(4.0, {}, RiskFactors(suicide_with_immediacy=True)) == RiskLevel.HIGH
        assert classifier.classify(4.0, {}, RiskFactors(violence_with_immediacy=True)) == RiskLevel.HIGH

    def test_medium_combinations(self, classifier: RiskClassifier) -> None:
        assert classifier.classify(4.0, {}, RiskFactors(multiple_concerns=True)) == RiskLevel.MEDIUM
        assert classifier.classify(4.0, {}, RiskFactors(substance_with_suicide=True)) == RiskLevel.MEDIUM

    def test_history_does_not_raise_level(self, classifier: RiskClassifier) -> None:
        factors = RiskFactors(previous_crisis=True, recent_assessment=True, escalating_pattern=True)

        assert classifier.classify(0.0, {}, factors) == RiskLevel.MINIMAL

    def test_missing_categories_count_as_zero(self, classifier: RiskClassifier) -> None:
        assert classifier.classify(4.0, {CrisisCategory.HOPELESSNESS: 4.0}, RiskFactors()) == RiskLevel.LOW

    def test_thresholds_substitutable(self) -> None:
        classifier = RiskClassifier(RiskThresholds(low_total=1.0))

        assert classifier.classify(1.5, {}, RiskFactors()) == RiskLevel.LOW

    @pytest.mark.parametrize(
        "level, expected",
        [
            (RiskLevel.CRITICAL, True),
            (RiskLevel.HIGH, True),
            (RiskLevel.MEDIUM, False),
            (RiskLevel.LOW, False),
            (RiskLevel.MINIMAL, False),
        ],
    )
    def test_requires_immediate(self, level: RiskLevel, expected: bool) -> None:
        assert RiskClassifier.requires_immediate(level) is expected

    @pytest.mark.parametrize("level", list(RiskLevel))
    def test_label_round_trip(self, level: RiskLevel) -> None:
        assert RiskLevel.from_label(level.label) is level
