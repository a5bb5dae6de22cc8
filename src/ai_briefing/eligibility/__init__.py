"""Eligibility gates and confidence."""

from ai_briefing.eligibility.gates import (
    compute_confidence,
    is_influencer_only,
    is_social_only,
    passes_eligibility_gates,
    passes_source_count_gate,
)


__all__ = [
    "compute_confidence",
    "is_influencer_only",
    "is_social_only",
    "passes_eligibility_gates",
    "passes_source_count_gate",
]
