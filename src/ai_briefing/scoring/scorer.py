"""Deterministic credibility and rubric scoring.

Credibility C (0-5):
    +3 if any source is Primary; otherwise +2 if the types include both
    Trade and Mainstream, or at least two sources are not Social.
    +1 if two or more distinct publishers.
    Influencer-only groups are capped at 2.

Rubric subscores are lookups keyed by subdomain plus a few text signals.
Every value is clamped to its range; out-of-range input is never an error.
"""

import math
from collections.abc import Iterable

from ai_briefing.config.schemas.base import SourceType, Subdomain
from ai_briefing.scoring.constants import (
    CORROBORATED_CREDIBILITY,
    CREDIBILITY_RANGE,
    DEFAULT_IMPACT,
    DEFAULT_NOVELTY,
    DEFAULT_RELEVANCE,
    DEFAULT_TIME_SENSITIVITY,
    HIGH_IMPACT,
    HIGH_IMPACT_PATTERNS,
    IMPACT_RANGE,
    INFLUENCER_ONLY_CREDIBILITY_CAP,
    MULTI_PUBLISHER_BONUS,
    NOVELTY_RANGE,
    OPERATIONAL_PATTERN,
    OPERATIONAL_TIME_SENSITIVITY,
    PRIMARY_CREDIBILITY,
    REGULATION_IMPACT,
    REGULATION_TIME_SENSITIVITY,
    RELEVANCE_BY_SUBDOMAIN,
    RELEVANCE_RANGE,
    SECURITY_TIME_SENSITIVITY,
    TIME_SENSITIVITY_RANGE,
    TOTAL_RANGE,
)
from ai_briefing.scoring.models import ScoreRecord, Subscores
from ai_briefing.sources.mix import SourceMix, TypedSource


def clamp_int(value: float | int, low: int, high: int) -> int:
    """Truncate to an integer and clamp into [low, high].

    Args:
        value: Number to clamp.
        low: Lower bound; also returned for NaN or infinite input.
        high: Upper bound.

    Returns:
        Clamped integer.
    """
    if isinstance(value, float) and not math.isfinite(value):
        return low
    return max(low, min(high, int(value)))


def compute_credibility(sources: Iterable[TypedSource]) -> int:
    """Compute credibility C for a group of sources.

    Args:
        sources: Members of a cluster.

    Returns:
        Credibility in 0-5.
    """
    mix = SourceMix.from_sources(sources)
    credibility = 0
    if mix.has_primary:
        credibility += PRIMARY_CREDIBILITY
    elif {SourceType.TRADE, SourceType.MAINSTREAM} <= mix.types:
        credibility += CORROBORATED_CREDIBILITY
    elif mix.non_social_count >= 2:
        credibility += CORROBORATED_CREDIBILITY

    if mix.publisher_count >= 2:
        credibility += MULTI_PUBLISHER_BONUS

    if mix.is_influencer_only:
        credibility = min(credibility, INFLUENCER_ONLY_CREDIBILITY_CAP)

    return clamp_int(credibility, *CREDIBILITY_RANGE)


def compute_subscores(subdomain: Subdomain, combined_text: str) -> Subscores:
    """Compute the four rubric subscores.

    Args:
        subdomain: Topic subdomain.
        combined_text: Combined title and summary text of the members.

    Returns:
        Clamped subscores.
    """
    text = (combined_text or "").lower()

    relevance = RELEVANCE_BY_SUBDOMAIN.get(subdomain, DEFAULT_RELEVANCE)

    if any(p.search(text) for p in HIGH_IMPACT_PATTERNS):
        impact = HIGH_IMPACT
    elif subdomain == Subdomain.AI_REGULATION:
        impact = REGULATION_IMPACT
    else:
        impact = DEFAULT_IMPACT

    if subdomain == Subdomain.AI_SECURITY:
        time_sensitivity = SECURITY_TIME_SENSITIVITY
    elif subdomain == Subdomain.AI_REGULATION:
        time_sensitivity = REGULATION_TIME_SENSITIVITY
    elif OPERATIONAL_PATTERN.search(text):
        time_sensitivity = OPERATIONAL_TIME_SENSITIVITY
    else:
        time_sensitivity = DEFAULT_TIME_SENSITIVITY

    return Subscores(
        relevance=clamp_int(relevance, *RELEVANCE_RANGE),
        impact=clamp_int(impact, *IMPACT_RANGE),
        novelty=clamp_int(DEFAULT_NOVELTY, *NOVELTY_RANGE),
        time_sensitivity=clamp_int(time_sensitivity, *TIME_SENSITIVITY_RANGE),
    )


def build_score_record(
    subscores: Subscores,
    credibility: int,
) -> ScoreRecord:
    """Combine subscores and credibility into a score record.

    Args:
        subscores: Rubric subscores.
        credibility: Credibility C.

    Returns:
        ScoreRecord whose total is the clamped sum of all five values.
    """
    return clamp_score(
        relevance=subscores.relevance,
        impact=subscores.impact,
        novelty=subscores.novelty,
        credibility=credibility,
        time_sensitivity=subscores.time_sensitivity,
    )


def clamp_score(
    relevance: float,
    impact: float,
    novelty: float,
    credibility: float,
    time_sensitivity: float,
    total: float | None = None,
) -> ScoreRecord:
    """Clamp raw score values into a valid record.

    Args:
        relevance: Raw relevance.
        impact: Raw impact.
        novelty: Raw novelty.
        credibility: Raw credibility.
        time_sensitivity: Raw time sensitivity.
        total: Raw total; the sum of the clamped subscores if None.

    Returns:
        ScoreRecord with every value in range.
    """
    r = clamp_int(relevance, *RELEVANCE_RANGE)
    i = clamp_int(impact, *IMPACT_RANGE)
    n = clamp_int(novelty, *NOVELTY_RANGE)
    c = clamp_int(credibility, *CREDIBILITY_RANGE)
    t = clamp_int(time_sensitivity, *TIME_SENSITIVITY_RANGE)
    raw_total = r + i + n + c + t if total is None else total
    return ScoreRecord(
        relevance=r,
        impact=i,
        novelty=n,
        credibility=c,
        time_sensitivity=t,
        total=clamp_int(raw_total, *TOTAL_RANGE),
    )
