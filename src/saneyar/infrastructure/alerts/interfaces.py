"""
Alert Collaborator Interfaces

Defines the contracts for alert persistence and responder
notification used by the escalation dispatcher.

ARCHITECTURE: Storage and paging are owned by the host
platform. The dispatcher depends only on these interfaces,
so a database or paging service can be plugged in without
touching detection code.
"""

from abc import ABC, abstractmethod
from typing import Optional

from saneyar.domain.models.escalation_models import CrisisAlertDraft, EscalationDecision


class AlertRepository(ABC):
    """
    Abstract alert store.

    SAFETY-CRITICAL: create_alert must either durably store
    the alert and return its identifier or raise.
    """

    @abstractmethod
    async def create_alert(self, draft: CrisisAlertDraft) -> str:
        """
        Persist an alert record.

        Args:
            draft: Alert content

        Returns:
            Identifier of the stored alert

        Raises:
            AlertDeliveryError: If the alert could not be stored
        """
        pass


class ResponderNotifier(ABC):
    """Abstract responder paging service."""

    @abstractmethod
    async def notify(self, alert_id: str, decision: EscalationDecision) -> int:
        """
        Page responders about a stored alert.

        Args:
            alert_id: Identifier returned by the repository
            decision: Escalation decision with the paging strategy

        Returns:
            Number of responders notified

        Raises:
            AlertDeliveryError: On paging failures
        """
        pass


class AlertDeliveryError(Exception):
    """Base exception for alert collaborator failures."""

    def __init__(
        self,
        message: str,
        is_retryable: bool = False,
        original_error: Optional[Exception] = None,
    ) -> None:
        super().__init__(message)
        self.is_retryable = is_retryable
        self.original_error = original_error
