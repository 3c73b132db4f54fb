"""SANEYAR operational HTTP surface (health and metrics only)."""
