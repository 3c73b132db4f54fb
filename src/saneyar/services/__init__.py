"""
SANEYAR Services Layer

detection: phrase corpus, context modifiers, scoring, analysis
safety: risk classification, recommendations, priority, escalation
"""
