"""
Crisis Analyzer

Main entry point for crisis analysis of a single message.

SAFETY-CRITICAL: The result's requires_immediate flag drives
alert creation. Callers must never suppress it.

ARCHITECTURE: Pipeline of pure stages over one message:
phrase matching -> context adjustment -> category scores ->
risk factors -> risk level -> recommendations. The only shared
state is the immutable phrase corpus.
"""

import time
from functools import lru_cache
from typing import Optional

from saneyar.config.logging_config import get_logger
from saneyar.config.settings import DetectionSettings
from saneyar.domain.enums.crisis_enums import RiskLevel
from saneyar.domain.models.crisis_models import CrisisAnalysisResult, UserHistory
from saneyar.infrastructure.metrics.prometheus_metrics import track_analysis
from saneyar.services.detection.context_modifiers import ContextModifierEngine
from saneyar.services.detection.phrase_corpus import PhraseCorpus, load_corpus
from saneyar.services.detection.scorer import CrisisScorer
from saneyar.services.safety.recommendations import RecommendationGenerator
from saneyar.services.safety.risk_classifier import RiskClassifier, compute_risk_factors

logger = get_logger(__name__)


class CrisisAnalyzer:
    """
    Deterministic crisis analyzer.

    Identical text and history always produce an identical
    result. The analyzer never raises for string input.

    Usage:
        analyzer = CrisisAnalyzer(corpus)
        result = analyzer.analyze("I want to kill myself tonight")
        if result.requires_immediate:
            ...
    """

    def __init__(
        self,
        corpus: Optional[PhraseCorpus] = None,
        settings: Optional[DetectionSettings] = None,
        scorer: Optional[CrisisScorer] = None,
        classifier: Optional[RiskClassifier] = None,
        recommender: Optional[RecommendationGenerator] = None,
    ) -> None:
        """
        Initialize analyzer.

        Args:
            corpus: Phrase corpus (built-in tables if None)
            settings: Detection settings
            scorer: Optional scorer override
            classifier: Optional classifier override
            recommender: Optional recommendation generator override
        """
        self._settings = settings or DetectionSettings()
        if scorer is None:
            corpus = corpus or PhraseCorpus.default()
            scorer = CrisisScorer(
                corpus,
                ContextModifierEngine(corpus.lexicon, self._settings.context_window),
                base_score=self._settings.base_match_score,
            )
        self._scorer = scorer
        self._classifier = classifier or RiskClassifier()
        self._recommender = recommender or RecommendationGenerator()

    @property
    def corpus(self) -> PhraseCorpus:
        return self._scorer.corpus

    def analyze(
        self,
        text: Optional[str],
        history: Optional[UserHistory] = None,
    ) -> CrisisAnalysisResult:
        """
        Analyze one message.

        Args:
            text: Message text (None is treated as empty)
            history: Optional user history signals

        Returns:
            CrisisAnalysisResult
        """
        start_time = time.perf_counter()

        scoring = self._scorer.score(text)
        total = scoring.total_score

        risk_factors = compute_risk_factors(
            scoring.category_scores,
            history,
            self._classifier.thresholds,
        )
        risk_level = self._classifier.classify(total, scoring.category_scores, risk_factors)
        recommendations = self._recommender.generate(risk_level, scoring.category_scores)
        confidence = min(max(total / self._settings.confidence_scale, 0.0), 1.0)

        result = CrisisAnalysisResult(
            total_score=round(total, 2),
            risk_level=risk_level,
            category_scores=scoring.category_scores,
            matched_keywords=scoring.matched_keywords,
            risk_factors=risk_factors,
            context_factors=scoring.context_factors,
            recommendations=recommendations,
            requires_immediate=RiskClassifier.requires_immediate(risk_level),
            confidence=confidence,
        )

        active = [category.value for category in result.active_categories()]
        modifiers = [
            name for name, fired in scoring.context_factors.to_dict().items() if fired
        ]
        track_analysis(
            risk_level=risk_level.label,
            categories=active,
            modifiers=modifiers,
            duration_seconds=time.perf_counter() - start_time,
        )

        if result.requires_immediate:
            logger.warning(
                "Crisis indicators require immediate response",
                risk_level=risk_level.label,
                total_score=result.total_score,
                categories=active,
                risk_factors=risk_factors.active(),
                corpus_version=self.corpus.version,
            )
        elif risk_level > RiskLevel.MINIMAL:
            logger.info(
                "Crisis indicators detected",
                risk_level=risk_level.label,
                total_score=result.total_score,
                match_count=len(result.matched_keywords),
            )

        return result


@lru_cache(maxsize=1)
def get_default_analyzer() -> CrisisAnalyzer:
    """Process-wide analyzer built from the configured corpus."""
    settings = DetectionSettings()
    return CrisisAnalyzer(load_corpus(settings), settings)


def analyze_crisis(
    text: Optional[str],
    history: Optional[UserHistory] = None,
) -> CrisisAnalysisResult:
    """Analyze a message with the default analyzer."""
    return get_default_analyzer().analyze(text, history)
