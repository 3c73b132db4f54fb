"""Detection services package."""

from saneyar.services.detection.phrase_corpus import (
    CorpusConfigurationError,
    PhraseCorpus,
    load_corpus,
)
from saneyar.services.detection.context_modifiers import ContextModifierEngine
from saneyar.services.detection.scorer import CrisisScorer
from saneyar.services.detection.crisis_analyzer import CrisisAnalyzer, analyze_crisis

__all__ = [
    "CorpusConfigurationError",
    "PhraseCorpus",
    "load_corpus",
    "ContextModifierEngine",
    "CrisisScorer",
    "CrisisAnalyzer",
    "analyze_crisis",
]
