"""Pre-compiled rule tables.

Compiling once per Normalizer keeps every instance independent of module
state while avoiding recompilation for each item.
"""

import re
from dataclasses import dataclass, field

from ai_briefing.config.schemas.base import Subdomain
from ai_briefing.config.schemas.rules import RulesConfig


@dataclass(frozen=True)
class CompiledAlias:
    """An alias rule with its compiled pattern."""

    pattern: re.Pattern[str]
    canonical: str


@dataclass(frozen=True)
class CompiledEntity:
    """A dictionary entity with its compiled pattern."""

    pattern: re.Pattern[str]
    name: str


@dataclass(frozen=True)
class CompiledSubdomain:
    """A subdomain pattern group, matched against lowercased text."""

    pattern: re.Pattern[str]
    subdomain: Subdomain


@dataclass(frozen=True)
class CompiledTitleRule:
    """An editorial title rule; every pattern must match."""

    patterns: tuple[re.Pattern[str], ...]
    title: str

    def matches(self, text_lower: str) -> bool:
        """Check the rule against lowercased text."""
        return all(p.search(text_lower) for p in self.patterns)


@dataclass(frozen=True)
class CompiledRules:
    """All rule tables of a RulesConfig in compiled form.

    Attributes:
        aliases: Ordered alias rules (case-insensitive).
        entities: Ordered entity dictionary (case-insensitive).
        subdomains: Ordered subdomain groups.
        default_subdomain: Fallback subdomain.
        stopwords: Lowercase stopwords.
        entity_denylist: Matches phrases containing a denylisted word, or None.
        entity_fillers: Exact phrases never accepted as entities.
        title_rules: Ordered editorial title rules.
    """

    aliases: tuple[CompiledAlias, ...]
    entities: tuple[CompiledEntity, ...]
    subdomains: tuple[CompiledSubdomain, ...]
    default_subdomain: Subdomain
    stopwords: frozenset[str]
    entity_denylist: re.Pattern[str] | None
    entity_fillers: frozenset[str] = field(default_factory=frozenset)
    title_rules: tuple[CompiledTitleRule, ...] = ()


def compile_rules(rules: RulesConfig) -> CompiledRules:
    """Compile every pattern of a rule table configuration.

    Args:
        rules: Validated rule tables.

    Returns:
        CompiledRules preserving the order of every table.
    """
    denylist = None
    if rules.entity_denylist:
        words = "|".join(re.escape(w) for w in rules.entity_denylist)
        denylist = re.compile(rf"\b(?:{words})\b")

    return CompiledRules(
        aliases=tuple(
            CompiledAlias(re.compile(a.pattern, re.IGNORECASE), a.canonical)
            for a in rules.aliases
        ),
        entities=tuple(
            CompiledEntity(re.compile(e.pattern, re.IGNORECASE), e.name)
            for e in rules.entities
        ),
        subdomains=tuple(
            CompiledSubdomain(re.compile(s.pattern), s.subdomain)
            for s in rules.subdomains
        ),
        default_subdomain=rules.default_subdomain,
        stopwords=frozenset(rules.stopwords),
        entity_denylist=denylist,
        entity_fillers=frozenset(rules.entity_fillers),
        title_rules=tuple(
            CompiledTitleRule(tuple(re.compile(p) for p in t.patterns), t.title)
            for t in rules.title_rules
        ),
    )
