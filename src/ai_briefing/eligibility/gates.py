"""Trust gates and confidence assignment.

Confidence:
    Single source: Med if Primary, else Low.
    Multiple sources: High iff (Primary or 2+ publishers), no
    contradictions and C >= 4; else Med if C >= 3; else Low.
    Influencer-only groups never exceed Med.

Gates are evaluated in order by the selector: the source-count gate
first, then the trust gates. Influencer-only topics are routed to the
queue even when every gate passes.
"""

from collections.abc import Iterable, Sequence

from ai_briefing.config.schemas.base import Confidence
from ai_briefing.sources.mix import SourceMix, TypedSource


# Credibility needed for Med (and, with corroboration, for High)
MED_CREDIBILITY = 3
HIGH_CREDIBILITY = 4

# Hard floor: C and R must exceed this
HARD_FLOOR = 1
MULTI_SOURCE_MIN_CREDIBILITY = 3
MULTI_SOURCE_MIN_RELEVANCE = 2


def compute_confidence(
    credibility: int,
    sources: Iterable[TypedSource],
    contradictions: Sequence[str] = (),
) -> Confidence:
    """Assign a confidence label.

    Args:
        credibility: Credibility C of the group.
        sources: Members of the group.
        contradictions: Contradictions recorded between sources.

    Returns:
        Low, Med or High.
    """
    mix = SourceMix.from_sources(sources)

    if mix.is_single:
        confidence = Confidence.MED if mix.has_primary else Confidence.LOW
    elif (
        (mix.has_primary or mix.publisher_count >= 2)
        and not contradictions
        and credibility >= HIGH_CREDIBILITY
    ):
        confidence = Confidence.HIGH
    elif credibility >= MED_CREDIBILITY:
        confidence = Confidence.MED
    else:
        confidence = Confidence.LOW

    if mix.is_influencer_only and confidence == Confidence.HIGH:
        confidence = Confidence.MED

    return confidence


def passes_source_count_gate(sources: Iterable[TypedSource]) -> bool:
    """Check the briefing source-count gate.

    Args:
        sources: Members of the group.

    Returns:
        True for two or more sources, or a lone Primary source.
    """
    mix = SourceMix.from_sources(sources)
    return mix.count >= 2 or (mix.is_single and mix.has_primary)


def passes_eligibility_gates(
    credibility: int,
    relevance: int,
    sources: Iterable[TypedSource],
) -> bool:
    """Check the briefing trust gates.

    Args:
        credibility: Credibility C.
        relevance: Relevance subscore R.
        sources: Members of the group.

    Returns:
        True if every gate passes.
    """
    mix = SourceMix.from_sources(sources)

    if credibility <= HARD_FLOOR or relevance <= HARD_FLOOR:
        return False
    if mix.is_social_only:
        return False

    if mix.count < 2:
        return mix.has_primary

    if credibility < MULTI_SOURCE_MIN_CREDIBILITY:
        return False
    if relevance < MULTI_SOURCE_MIN_RELEVANCE:
        return False
    return mix.has_primary or mix.non_social_count >= 2


def is_social_only(sources: Iterable[TypedSource]) -> bool:
    """Whether every source is Social."""
    return SourceMix.from_sources(sources).is_social_only


def is_influencer_only(sources: Iterable[TypedSource]) -> bool:
    """Whether every source is an Influencer."""
    return SourceMix.from_sources(sources).is_influencer_only
