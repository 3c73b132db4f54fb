"""Alert persistence and notification package."""

from saneyar.infrastructure.alerts.interfaces import (
    AlertDeliveryError,
    AlertRepository,
    ResponderNotifier,
)
from saneyar.infrastructure.alerts.in_memory import (
    InMemoryAlertRepository,
    InMemoryResponderNotifier,
)

__all__ = [
    "AlertDeliveryError",
    "AlertRepository",
    "ResponderNotifier",
    "InMemoryAlertRepository",
    "InMemoryResponderNotifier",
]
