"""
SANEYAR Infrastructure Layer

Metrics and alert collaborator integrations.
Alert collaborators implement abstract interfaces for testability.
"""
