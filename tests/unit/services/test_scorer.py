"""
Unit Tests for Crisis Scorer

Tests phrase matching, context adjustment and aggregation.
"""

import pytest

from saneyar.domain.enums.crisis_enums import CrisisCategory, SeverityTier
from saneyar.domain.models.crisis_models import score_of
from saneyar.services.detection.phrase_corpus import PhraseCorpus
from saneyar.services.detection.scorer import CrisisScorer


class TestCrisisScorer:
    """Tests for CrisisScorer."""

    @pytest.fixture
    def scorer(self, corpus: PhraseCorpus) -> CrisisScorer:
        return CrisisScorer(corpus)

    @pytest.mark.parametrize("text", ["", None, "   ", "hello there", "12345 !!!"])
    def test_no_matches_yields_zeroed_categories(self, scorer: CrisisScorer, text) -> None:
        result = scorer.score(text)

        assert result.total_score == 0.0
        assert result.matched_keywords == ()
        assert set(result.category_scores) == set(CrisisCategory)
        assert all(s.score == 0.0 for s in result.category_scores.values())

    def test_single_phrase_score(self, scorer: CrisisScorer) -> None:
        result = scorer.score("I hurt myself")

        assert result.total_score == pytest.approx(7.0)
        assert result.category_scores[CrisisCategory.SELF_HARM].score == pytest.approx(7.0)

        match = result.matched_keywords[0]
        assert match.phrase == "hurt myself"
        assert match.tier == SeverityTier.HIGH
        assert match.raw_score == pytest.approx(7.0)
        assert match.context_multiplier == 1.0

    def test_matching_is_case_insensitive(self, scorer: CrisisScorer) -> None:
        lower = scorer.score("i hurt myself")
        upper = scorer.score("I HURT MYSELF")

        assert lower.total_score == upper.total_score

    def test_expanding_lowercase_keeps_window_aligned(self, scorer: CrisisScorer) -> None:
        result = scorer.score("İSTANBUL. I hurt myself")

        assert result.total_score == pytest.approx(7.0)
        assert "hurt myself" in result.matched_keywords[0].surrounding_text

    def test_first_occurrence_scored_once(self, scorer: CrisisScorer) -> None:
        once = scorer.score("i hurt myself")
        twice = scorer.score("i hurt myself, i hurt myself")

        assert twice.total_score == once.total_score
        assert len(twice.matched_keywords) == len(once.matched_keywords)

    def test_overlapping_phrases_each_count(self, scorer: CrisisScorer) -> None:
        result = scorer.score("no hope left")

        phrases = {m.phrase for m in result.matched_keywords}
        assert {"no hope left", "no hope"} <= phrases
        assert result.category_scores[CrisisCategory.HOPELESSNESS].score == pytest.approx(8.0 + 6.0)

    def test_phrase_shared_by_categories_counts_in_each(self, scorer: CrisisScorer) -> None:
        result = scorer.score("i have the gun")

        assert score_of(result.category_scores, CrisisCategory.SUICIDE) == pytest.approx(10.0)
        assert score_of(result.category_scores, CrisisCategory.METHODS) == pytest.approx(11.0)

    def test_negated_phrase_scores_lower(self, scorer: CrisisScorer) -> None:
        neutral = scorer.score("i hurt myself")
        negated = scorer.score("i don't want to hurt myself")

        assert negated.total_score < neutral.total_score
        assert negated.total_score == pytest.approx(7.0 * 0.3)
        assert negated.context_factors.negation is True

    def test_context_factors_aggregate(self, scorer: CrisisScorer) -> None:
        result = scorer.score("i really will hurt myself")

        assert result.context_factors.intensified is True
        assert result.context_factors.certainty is True
        assert result.context_factors.negation is False
        assert result.total_score == pytest.approx(7.0 * 1.5 * 1.3)

    def test_typographic_apostrophe_matches(self, scorer: CrisisScorer) -> None:
        result = scorer.score("I can’t live anymore")

        assert "can't live anymore" in {m.phrase for m in result.matched_keywords}

    def test_base_score_configurable(self, corpus: PhraseCorpus) -> None:
        scorer = CrisisScorer(corpus, base_score=20.0)

        assert scorer.score("i hurt myself").total_score == pytest.approx(14.0)

    def test_matches_reported_in_taxonomy_order(self, scorer: CrisisScorer) -> None:
        result = scorer.score("tonight i want to kill myself")

        categories = [m.category for m in result.matched_keywords]
        assert categories.index(CrisisCategory.SUICIDE) < categories.index(CrisisCategory.IMMEDIACY)
