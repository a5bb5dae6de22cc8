"""Rubric ranges and text signals for topic scoring."""

import re

from ai_briefing.config.schemas.base import Subdomain

# Inclusive rubric ranges
RELEVANCE_RANGE: tuple[int, int] = (0, 5)
IMPACT_RANGE: tuple[int, int] = (0, 5)
NOVELTY_RANGE: tuple[int, int] = (0, 3)
CREDIBILITY_RANGE: tuple[int, int] = (0, 5)
TIME_SENSITIVITY_RANGE: tuple[int, int] = (0, 4)
TOTAL_RANGE: tuple[int, int] = (0, 22)

# Credibility contributions
PRIMARY_CREDIBILITY = 3
CORROBORATED_CREDIBILITY = 2
MULTI_PUBLISHER_BONUS = 1
INFLUENCER_ONLY_CREDIBILITY_CAP = 2

RELEVANCE_BY_SUBDOMAIN: dict[Subdomain, int] = {
    Subdomain.AI_SECURITY: 5,
    Subdomain.AI_REGULATION: 4,
    Subdomain.AI_APPS_TOOLS: 4,
    Subdomain.AI_INFRA: 3,
    Subdomain.MODEL_RELEASES: 3,
}
DEFAULT_RELEVANCE = 3

# Text signals, matched against lowercased combined text
HIGH_IMPACT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"pricing|cost|tier|billing"),
    re.compile(r"exploit|breach|vuln"),
    re.compile(r"flagship|frontier|state of the art|sota"),
)
OPERATIONAL_PATTERN: re.Pattern[str] = re.compile(r"outage|incident|downtime")

HIGH_IMPACT = 4
REGULATION_IMPACT = 3
DEFAULT_IMPACT = 2

# Novelty is not differentiated yet
DEFAULT_NOVELTY = 2

SECURITY_TIME_SENSITIVITY = 4
REGULATION_TIME_SENSITIVITY = 3
OPERATIONAL_TIME_SENSITIVITY = 4
DEFAULT_TIME_SENSITIVITY = 2
