"""
Prometheus Metrics

Metrics for SANEYAR crisis detection observability.
Exposes metrics at /metrics endpoint for Prometheus scraping.

ARCHITECTURE: Metrics are decoupled from business logic.
Only increment/observe; never block on metrics operations.
Labels carry levels and categories only, never message content.
"""

import time
from functools import wraps
from typing import Callable, Iterable

from prometheus_client import (
    Counter,
    Histogram,
    Gauge,
    Info,
    generate_latest,
    CONTENT_TYPE_LATEST,
    REGISTRY,
)
from fastapi import APIRouter, Response

from saneyar.config.logging_config import get_logger

logger = get_logger(__name__)

# =============================================================================
# DETECTION METRICS
# =============================================================================

CRISIS_ANALYSES_TOTAL = Counter(
    "saneyar_crisis_analyses_total",
    "Crisis analyses by risk level",
    ["risk_level"],  # minimal, low, medium, high, critical
)

PHRASE_MATCHES_TOTAL = Counter(
    "saneyar_phrase_matches_total",
    "Analyses with at least one phrase match, by category",
    ["category"],
)

CONTEXT_MODIFIERS_TOTAL = Counter(
    "saneyar_context_modifiers_total",
    "Analyses in which a context modifier fired",
    ["modifier"],  # negation, intensifier, certainty
)

ANALYSIS_DURATION = Histogram(
    "saneyar_analysis_duration_seconds",
    "Crisis analysis latency",
    buckets=[0.0005, 0.001, 0.0025, 0.005, 0.01, 0.025, 0.05, 0.1],
)

CORPUS_PHRASES = Gauge(
    "saneyar_corpus_phrases",
    "Number of phrases in the loaded corpus",
)

# =============================================================================
# ESCALATION METRICS
# =============================================================================

ESCALATION_DECISIONS_TOTAL = Counter(
    "saneyar_escalation_decisions_total",
    "Escalation decisions by priority level",
    ["priority_level", "create_alert"],
)

ALERT_DISPATCH_TOTAL = Counter(
    "saneyar_alert_dispatch_total",
    "Alert dispatch outcomes",
    ["outcome"],  # delivered, notification_failed, failed
)

ALERT_DISPATCH_DURATION = Histogram(
    "saneyar_alert_dispatch_duration_seconds",
    "Alert dispatch latency",
    buckets=[0.01, 0.05, 0.1, 0.25, 0.5, 1.0, 2.5, 5.0, 10.0],
)

DISPATCH_RETRIES_TOTAL = Counter(
    "saneyar_alert_dispatch_retries_total",
    "Alert collaborator retry attempts",
    ["operation"],  # persistence, notification
)

# =============================================================================
# SYSTEM INFO
# =============================================================================

SYSTEM_INFO = Info(
    "saneyar_system",
    "SANEYAR system information",
)

SYSTEM_INFO.info({
    "version": "0.1.0",
    "environment": "development",  # Updated at runtime
    "corpus_version": "unloaded",
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def track_dispatch(func: Callable) -> Callable:
    """Decorator to track alert dispatch latency and failures."""
    @wraps(func)
    async def wrapper(*args, **kwargs):
        start_time = time.perf_counter()
        try:
            return await func(*args, **kwargs)
        except Exception:
            ALERT_DISPATCH_TOTAL.labels(outcome="failed").inc()
            raise
        finally:
            ALERT_DISPATCH_DURATION.observe(time.perf_counter() - start_time)
    return wrapper


def track_analysis(
    risk_level: str,
    categories: Iterable[str],
    modifiers: Iterable[str],
    duration_seconds: float,
) -> None:
    """Record one crisis analysis."""
    CRISIS_ANALYSES_TOTAL.labels(risk_level=risk_level).inc()
    for category in categories:
        PHRASE_MATCHES_TOTAL.labels(category=category).inc()
    for modifier in modifiers:
        CONTEXT_MODIFIERS_TOTAL.labels(modifier=modifier).inc()
    ANALYSIS_DURATION.observe(duration_seconds)


def track_escalation_decision(priority_level: str, create_alert: bool) -> None:
    """Record escalation decision."""
    ESCALATION_DECISIONS_TOTAL.labels(
        priority_level=priority_level,
        create_alert=str(create_alert).lower(),
    ).inc()


def track_dispatch_outcome(outcome: str) -> None:
    """Record alert dispatch outcome."""
    ALERT_DISPATCH_TOTAL.labels(outcome=outcome).inc()


def track_dispatch_retry(operation: str) -> None:
    DISPATCH_RETRIES_TOTAL.labels(operation=operation).inc()


def track_corpus_loaded(phrase_count: int) -> None:
    CORPUS_PHRASES.set(phrase_count)


# =============================================================================
# METRICS ENDPOINT
# =============================================================================

metrics_router = APIRouter(tags=["metrics"])


@metrics_router.get("/metrics")
async def metrics() -> Response:
    """
    Prometheus metrics endpoint.

    Returns metrics in Prometheus text format for scraping.
    """
    return Response(
        content=generate_latest(REGISTRY),
        media_type=CONTENT_TYPE_LATEST,
    )


def update_system_info(
    environment: str,
    version: str = "0.1.0",
    corpus_version: str = "unloaded",
) -> None:
    """Update system info metric with current environment."""
    SYSTEM_INFO.info({
        "version": version,
        "environment": environment,
        "corpus_version": corpus_version,
    })
