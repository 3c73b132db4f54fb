"""
SANEYAR - Crisis Detection and Escalation Core

This package provides the crisis language detection engine used by the
SANEYAR patient support platform. Messages from the chatbot, peer and
counselor channels are scored for crisis language, classified into a
risk level, and turned into escalation decisions for responders.

IMPORTANT: This is a safety-critical component.
A silent failure here means a person in crisis goes unnoticed.
"""

__version__ = "0.1.0"
__author__ = "SANEYAR Engineering Team"
