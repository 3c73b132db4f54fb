"""Safety services package - classification and escalation."""

from saneyar.services.safety.risk_classifier import (
    RiskClassifier,
    RiskThresholds,
    compute_risk_factors,
)
from saneyar.services.safety.recommendations import RecommendationGenerator
from saneyar.services.safety.session_priority import classify_session_priority
from saneyar.services.safety.escalation_trigger import EscalationTrigger
from saneyar.services.safety.escalation_dispatcher import (
    EscalationDeliveryError,
    EscalationDispatcher,
)

# CrisisAlertPipeline lives in saneyar.services.safety.crisis_pipeline;
# it depends on the detection package, which imports this one.

__all__ = [
    # Classification
    "RiskClassifier",
    "RiskThresholds",
    "compute_risk_factors",
    # Recommendations and priority
    "RecommendationGenerator",
    "classify_session_priority",
    # Escalation
    "EscalationTrigger",
    "EscalationDispatcher",
    "EscalationDeliveryError",
]
