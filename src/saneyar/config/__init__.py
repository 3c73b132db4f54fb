"""
SANEYAR Configuration Module

Provides centralized configuration management with:
- Environment-based settings loading
- Validation of detection and escalation tuning values
"""

from saneyar.config.settings import (
    DetectionSettings,
    EscalationSettings,
    Settings,
    get_settings,
)

__all__ = ["DetectionSettings", "EscalationSettings", "Settings", "get_settings"]
