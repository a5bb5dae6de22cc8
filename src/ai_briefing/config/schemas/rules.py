"""Rule table schema for text normalization and classification.

Rule tables are ordered value data: the order of every list is part of the
policy (first match wins), so loaders must never sort or dedupe them.
"""

import re
from typing import Annotated

from pydantic import Field, field_validator, model_validator

from ai_briefing.config.schemas.base import Subdomain
from ai_briefing.data_model import StrictBaseModel


def _check_pattern(pattern: str) -> str:
    try:
        re.compile(pattern)
    except re.error as e:
        msg = f"Invalid regular expression {pattern!r}: {e}"
        raise ValueError(msg) from e
    return pattern


class AliasRule(StrictBaseModel):
    """Folds spelling variants of a name into one canonical form.

    Attributes:
        pattern: Case-insensitive regular expression.
        canonical: Replacement text.
    """

    pattern: Annotated[str, Field(min_length=1)]
    canonical: Annotated[str, Field(min_length=1, max_length=40)]

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Ensure the pattern compiles."""
        return _check_pattern(v)


class EntityRule(StrictBaseModel):
    """Dictionary entry for a well-known entity.

    Attributes:
        pattern: Case-insensitive regular expression.
        name: Display name of the entity.
    """

    pattern: Annotated[str, Field(min_length=1)]
    name: Annotated[str, Field(min_length=1, max_length=40)]

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Ensure the pattern compiles."""
        return _check_pattern(v)


class SubdomainRule(StrictBaseModel):
    """Keyword pattern group signalling a subdomain.

    Attributes:
        subdomain: Subdomain assigned when the pattern matches.
        pattern: Regular expression tested against lowercased text.
    """

    subdomain: Subdomain
    pattern: Annotated[str, Field(min_length=1)]

    @field_validator("pattern")
    @classmethod
    def validate_pattern(cls, v: str) -> str:
        """Ensure the pattern compiles."""
        return _check_pattern(v)


class TitleRule(StrictBaseModel):
    """Editorial title used when every pattern matches the cluster text.

    Attributes:
        patterns: Regular expressions that must all match.
        title: Title to emit.
    """

    patterns: Annotated[list[str], Field(min_length=1)]
    title: Annotated[str, Field(min_length=1, max_length=60)]

    @field_validator("patterns")
    @classmethod
    def validate_patterns(cls, v: list[str]) -> list[str]:
        """Ensure every pattern compiles."""
        return [_check_pattern(p) for p in v]


class RulesConfig(StrictBaseModel):
    """Root configuration for rules.yaml.

    Attributes:
        version: Schema version.
        aliases: Ordered alias folding rules.
        entities: Ordered entity dictionary.
        subdomains: Ordered subdomain pattern groups.
        default_subdomain: Subdomain used when no group matches.
        stopwords: Tokens ignored by keyword extraction and clustering.
        entity_denylist: Narrative words that disqualify an entity phrase.
        entity_fillers: Single words never accepted as entities.
        title_rules: Ordered editorial title rules.
    """

    version: Annotated[str, Field(pattern=r"^\d+\.\d+$")] = "1.0"
    aliases: list[AliasRule] = Field(default_factory=list)
    entities: list[EntityRule] = Field(default_factory=list)
    subdomains: list[SubdomainRule] = Field(default_factory=list)
    default_subdomain: Subdomain = Subdomain.AI_BUSINESS_MARKET
    stopwords: list[str] = Field(default_factory=list)
    entity_denylist: list[str] = Field(default_factory=list)
    entity_fillers: list[str] = Field(default_factory=list)
    title_rules: list[TitleRule] = Field(default_factory=list)

    @field_validator("stopwords")
    @classmethod
    def validate_stopwords_lowercase(cls, v: list[str]) -> list[str]:
        """Stopwords are compared against lowercased tokens."""
        return [w.strip().lower() for w in v if w.strip()]

    @model_validator(mode="after")
    def validate_denylist_words(self) -> "RulesConfig":
        """Ensure denylist entries are single words."""
        for word in self.entity_denylist:
            if not re.fullmatch(r"\w+", word):
                msg = f"Entity denylist entries must be single words: {word!r}"
                raise ValueError(msg)
        return self
