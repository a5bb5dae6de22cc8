"""Alias folding, classification and extraction over free text.

Every operation is total: empty or odd input yields ``Other``, the default
subdomain or an empty list, never an exception.
"""

import re

from ai_briefing.config.defaults import default_rules
from ai_briefing.config.schemas.base import Subdomain
from ai_briefing.config.schemas.rules import RulesConfig
from ai_briefing.normalizer.constants import (
    CLUSTER_TOKEN_MIN_EXCLUSIVE,
    ENTITIES_MAX,
    ENTITY_PHRASE_MAX_LEN,
    ENTITY_PHRASE_MIN_LEN,
    ENTITY_PHRASE_PATTERN,
    KEYWORD_MIN_LEN,
    KEYWORDS_MAX,
    NON_TOKEN_PATTERN,
    OTHER_ENTITY,
)
from ai_briefing.normalizer.models import Fingerprint
from ai_briefing.normalizer.patterns import CompiledRules, compile_rules
from ai_briefing.sources.models import SourceItem


_PHRASE_RE = re.compile(ENTITY_PHRASE_PATTERN, re.ASCII)
_NON_TOKEN_RE = re.compile(NON_TOKEN_PATTERN)


class Normalizer:
    """Applies one set of rule tables to item text.

    Each instance compiles its own tables, so normalizers built from
    different RulesConfig values never interfere.
    """

    def __init__(self, rules: RulesConfig | None = None) -> None:
        """Initialize the normalizer.

        Args:
            rules: Rule tables. Uses the built-in tables if None.
        """
        self._rules = rules if rules is not None else default_rules()
        self._compiled: CompiledRules = compile_rules(self._rules)

    @property
    def rules(self) -> RulesConfig:
        """Rule tables this normalizer was built from."""
        return self._rules

    def fold_aliases(self, text: str | None) -> str:
        """Fold spelling variants into canonical names.

        Rules apply in order and each replaces its first match only, so a
        later rule sees the output of earlier ones.

        Args:
            text: Free text.

        Returns:
            Trimmed text with aliases folded.
        """
        folded = (text or "").strip()
        for alias in self._compiled.aliases:
            folded = alias.pattern.sub(lambda _m, c=alias.canonical: c, folded, count=1)
        return folded

    def normalize_item(self, item: SourceItem) -> SourceItem:
        """Return a copy of the item with folded title and summary."""
        return item.model_copy(
            update={
                "title": self.fold_aliases(item.title),
                "summary": self.fold_aliases(item.summary),
            }
        )

    def classify_subdomain(self, text: str | None) -> Subdomain:
        """Classify text into a subdomain; first matching group wins.

        Args:
            text: Free text (matched lowercased).

        Returns:
            Matched subdomain, or the configured default.
        """
        text_lower = (text or "").lower()
        for group in self._compiled.subdomains:
            if group.pattern.search(text_lower):
                return group.subdomain
        return self._compiled.default_subdomain

    def extract_primary_entity(self, text: str | None) -> str:
        """Find the single entity a story is about.

        Args:
            text: Free text; aliases are folded first.

        Returns:
            First alias canonical that matches, else first dictionary hit,
            else ``Other``.
        """
        folded = self.fold_aliases(text)
        for alias in self._compiled.aliases:
            if alias.pattern.search(folded):
                return alias.canonical
        for entity in self._compiled.entities:
            if entity.pattern.search(folded):
                return entity.name
        return OTHER_ENTITY

    def extract_entities(self, text: str | None) -> list[str]:
        """Extract display entities from raw text.

        Dictionary hits (alias canonicals, then entity names) come first in
        table order, followed by capitalised phrases in first-seen order.

        Args:
            text: Raw text, not alias-folded.

        Returns:
            Up to 8 entities; ``[primary entity]`` when nothing is found.
        """
        raw = text or ""
        out: list[str] = []
        seen: set[str] = set()

        def add(name: str) -> None:
            if name not in seen:
                seen.add(name)
                out.append(name)

        for alias in self._compiled.aliases:
            if alias.pattern.search(raw):
                add(alias.canonical)
        for entity in self._compiled.entities:
            if entity.pattern.search(raw):
                add(entity.name)

        for match in _PHRASE_RE.finditer(raw):
            if len(out) >= ENTITIES_MAX:
                break
            phrase = match.group(0).strip()
            if not ENTITY_PHRASE_MIN_LEN <= len(phrase) <= ENTITY_PHRASE_MAX_LEN:
                continue
            denylist = self._compiled.entity_denylist
            if denylist is not None and denylist.search(phrase):
                continue
            if phrase.lower() in self._compiled.stopwords:
                continue
            if phrase in self._compiled.entity_fillers:
                continue
            add(phrase)

        if not out:
            return [self.extract_primary_entity(raw)]
        return out[:ENTITIES_MAX]

    def _tokens(self, text: str | None) -> list[str]:
        lowered = self.fold_aliases(text).lower()
        return _NON_TOKEN_RE.sub(" ", lowered).split()

    def extract_keywords(self, text: str | None) -> list[str]:
        """Extract user-facing keywords.

        Args:
            text: Free text.

        Returns:
            Unique tokens of 4+ characters that are not stopwords, in
            first-seen order, at most 8.
        """
        out: list[str] = []
        for token in self._tokens(text):
            if len(token) < KEYWORD_MIN_LEN or token in self._compiled.stopwords:
                continue
            if token in out:
                continue
            out.append(token)
            if len(out) >= KEYWORDS_MAX:
                break
        return out

    def clustering_tokens(self, text: str | None) -> list[str]:
        """Tokenize text for clustering similarity.

        Looser than ``extract_keywords``: tokens longer than 2 characters
        are kept and duplicates are not removed.

        Args:
            text: Free text.

        Returns:
            Ordered non-stopword tokens.
        """
        return [
            token
            for token in self._tokens(text)
            if len(token) > CLUSTER_TOKEN_MIN_EXCLUSIVE
            and token not in self._compiled.stopwords
        ]

    def fingerprint(self, item: SourceItem, max_keywords: int = 8) -> Fingerprint:
        """Compute the clustering signature of an item.

        Args:
            item: Source item.
            max_keywords: Clustering tokens kept.

        Returns:
            Fingerprint of the folded ``title + " " + summary``.
        """
        text = self.fold_aliases(f"{item.title} {item.summary}")
        return Fingerprint(
            entity=self.extract_primary_entity(text),
            subdomain=self.classify_subdomain(text),
            keywords=tuple(self.clustering_tokens(text)[:max_keywords]),
        )

    def match_title_rule(self, text: str | None) -> str | None:
        """Find the editorial title for a story's text.

        Args:
            text: Combined member text.

        Returns:
            Title of the first rule whose patterns all match the folded,
            lowercased text, or None.
        """
        text_lower = self.fold_aliases(text).lower()
        for rule in self._compiled.title_rules:
            if rule.matches(text_lower):
                return rule.title
        return None
