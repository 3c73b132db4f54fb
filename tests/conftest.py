"""Tests configuration and fixtures."""

import pytest

from saneyar.config import DetectionSettings, EscalationSettings, Settings
from saneyar.services.detection.crisis_analyzer import CrisisAnalyzer
from saneyar.services.detection.phrase_corpus import PhraseCorpus


@pytest.fixture
def test_settings() -> Settings:
    """Create test settings with fast escalation retries."""
    return Settings(
        env="development",
        debug=True,
        detection=DetectionSettings(),
        escalation=EscalationSettings(
            dispatch_timeout_seconds=1.0,
            notification_max_attempts=3,
            notification_backoff_max_seconds=0.0,
        ),
    )


@pytest.fixture
def corpus() -> PhraseCorpus:
    return PhraseCorpus.default()


@pytest.fixture
def analyzer(corpus: PhraseCorpus) -> CrisisAnalyzer:
    return CrisisAnalyzer(corpus)
