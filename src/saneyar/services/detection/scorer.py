"""
Crisis Scorer

Aggregates phrase matches into per-category and total scores.

ARCHITECTURE: Pure function of (corpus, text). Scores are
unbounded positive floats; normalization to a confidence
happens in the analyzer.
"""

from types import MappingProxyType
from typing import Optional

from saneyar.domain.enums.crisis_enums import CrisisCategory
from saneyar.domain.models.crisis_models import (
    CategoryScore,
    ContextFactors,
    MatchRecord,
    ScoringResult,
)
from saneyar.services.detection.context_modifiers import ContextModifierEngine
from saneyar.services.detection.phrase_corpus import PhraseCorpus, normalize_text


class CrisisScorer:
    """
    Phrase-match scorer.

    For every corpus phrase that occurs in the normalized text,
    the first occurrence is scored:

        raw_score   = weight(category, tier) * base_score
        final_score = raw_score * context multiplier

    Final scores accumulate into the phrase's category and the
    running total. Every category is present in the output,
    with 0.0 when nothing matched.

    Usage:
        scorer = CrisisScorer(corpus)
        scoring = scorer.score("I want to kill myself tonight")
    """

    def __init__(
        self,
        corpus: PhraseCorpus,
        modifier_engine: Optional[ContextModifierEngine] = None,
        base_score: float = 10.0,
    ) -> None:
        self._corpus = corpus
        self._modifiers = modifier_engine or ContextModifierEngine(corpus.lexicon)
        self._base_score = base_score

    @property
    def corpus(self) -> PhraseCorpus:
        return self._corpus

    def score(self, text: Optional[str]) -> ScoringResult:
        """
        Score a message.

        Args:
            text: Raw message text (None is treated as empty)

        Returns:
            ScoringResult with all eight categories present
        """
        normalized = normalize_text(text or "")

        totals: dict[CrisisCategory, float] = {category: 0.0 for category in CrisisCategory}
        per_category: dict[CrisisCategory, list[MatchRecord]] = {
            category: [] for category in CrisisCategory
        }
        matched: list[MatchRecord] = []
        negation = intensified = certainty = False
        total_score = 0.0

        if normalized:
            for entry in self._corpus.get_phrase_table():
                index = normalized.find(entry.phrase)
                if index < 0:
                    continue

                raw_score = self._corpus.get_weight(entry.category, entry.tier) * self._base_score
                context = self._modifiers.assess(normalized, index, len(entry.phrase))
                final_score = raw_score * context.multiplier

                negation = negation or context.negated
                intensified = intensified or context.intensified
                certainty = certainty or context.certainty

                record = MatchRecord(
                    phrase=entry.phrase,
                    category=entry.category,
                    tier=entry.tier,
                    raw_score=raw_score,
                    context_multiplier=context.multiplier,
                    final_score=final_score,
                    surrounding_text=context.surrounding_text,
                )
                totals[entry.category] += final_score
                per_category[entry.category].append(record)
                matched.append(record)
                total_score += final_score

        category_scores = MappingProxyType({
            category: CategoryScore(
                category=category,
                score=totals[category],
                matches=tuple(per_category[category]),
            )
            for category in CrisisCategory
        })

        return ScoringResult(
            total_score=total_score,
            category_scores=category_scores,
            matched_keywords=tuple(matched),
            context_factors=ContextFactors(
                negation=negation,
                intensified=intensified,
                certainty=certainty,
            ),
        )
