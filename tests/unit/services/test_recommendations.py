"""
Unit Tests for Recommendation Generator

Tests level bundles and category-specific additions.
"""

import pytest

from saneyar.domain.enums.crisis_enums import CrisisCategory, RiskLevel
from saneyar.services.safety.recommendations import RecommendationGenerator


class TestRecommendationGenerator:
    """Tests for RecommendationGenerator."""

    @pytest.fixture
    def generator(self) -> RecommendationGenerator:
        return RecommendationGenerator()

    def test_critical_includes_crisis_lines(self, generator: RecommendationGenerator) -> None:
        result = generator.generate(RiskLevel.CRITICAL, {})

        assert result.immediate[0] == "Contact emergency services immediately"
        assert [r.contact for r in result.resources] == ["988", "741741", "911"]

    @pytest.mark.parametrize("level", [RiskLevel.HIGH, RiskLevel.MEDIUM, RiskLevel.LOW])
    def test_non_critical_has_no_resources(
        self,
        generator: RecommendationGenerator,
        level: RiskLevel,
    ) -> None:
        assert generator.generate(level, {}).resources == ()

    def test_high_bundle(self, generator: RecommendationGenerator) -> None:
        result = generator.generate(RiskLevel.HIGH, {})

        assert "Safety planning session" in result.immediate
        assert "Schedule urgent therapy session" in result.short_term

    def test_medium_bundle(self, generator: RecommendationGenerator) -> None:
        result = generator.generate(RiskLevel.MEDIUM, {})

        assert "Schedule follow-up within 24 hours" in result.immediate

    def test_low_has_only_short_term(self, generator: RecommendationGenerator) -> None:
        result = generator.generate(RiskLevel.LOW, {})

        assert result.immediate == ()
        assert result.short_term == (
            "Routine counselor check-in",
            "Self-care activity suggestions",
            "Monitoring for escalation",
        )

    def test_minimal_is_empty(self, generator: RecommendationGenerator) -> None:
        result = generator.generate(RiskLevel.MINIMAL, {})

        assert result.to_dict() == {
            "immediate": [],
            "short_term": [],
            "long_term": [],
            "resources": [],
        }

    def test_category_extras(self, generator: RecommendationGenerator) -> None:
        scores = {
            CrisisCategory.SUBSTANCE: 4.0,
            CrisisCategory.ISOLATION: 2.0,
            CrisisCategory.VIOLENCE: 5.0,
        }

        result = generator.generate(RiskLevel.MINIMAL, scores)

        assert result.long_term == ("Substance abuse counseling referral",)
        assert result.short_term == (
            "Social connection building activities",
            "Conflict resolution training",
        )
        assert result.immediate == ("Anger management resources",)

    def test_extras_appended_after_bundle(self, generator: RecommendationGenerator) -> None:
        result = generator.generate(RiskLevel.CRITICAL, {CrisisCategory.VIOLENCE: 10.0})

        assert result.immediate[-1] == "Anger management resources"
        assert len(result.immediate) == 6
