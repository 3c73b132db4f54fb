"""Metrics infrastructure package."""

from saneyar.infrastructure.metrics.prometheus_metrics import (
    # Detection metrics
    CRISIS_ANALYSES_TOTAL,
    PHRASE_MATCHES_TOTAL,
    CONTEXT_MODIFIERS_TOTAL,
    ANALYSIS_DURATION,
    CORPUS_PHRASES,
    # Escalation metrics
    ESCALATION_DECISIONS_TOTAL,
    ALERT_DISPATCH_TOTAL,
    ALERT_DISPATCH_DURATION,
    DISPATCH_RETRIES_TOTAL,
    # Helpers
    track_dispatch,
    track_analysis,
    track_escalation_decision,
    track_dispatch_outcome,
    track_dispatch_retry,
    track_corpus_loaded,
    update_system_info,
    # Router
    metrics_router,
)

__all__ = [
    "CRISIS_ANALYSES_TOTAL",
    "PHRASE_MATCHES_TOTAL",
    "CONTEXT_MODIFIERS_TOTAL",
    "ANALYSIS_DURATION",
    "CORPUS_PHRASES",
    "ESCALATION_DECISIONS_TOTAL",
    "ALERT_DISPATCH_TOTAL",
    "ALERT_DISPATCH_DURATION",
    "DISPATCH_RETRIES_TOTAL",
    "track_dispatch",
    "track_analysis",
    "track_escalation_decision",
    "track_dispatch_outcome",
    "track_dispatch_retry",
    "track_corpus_loaded",
    "update_system_info",
    "metrics_router",
]
