"""Unit tests for the built-in rule tables."""

from ai_briefing.config.defaults import default_rules
from ai_briefing.config.schemas.base import Subdomain


class TestDefaultRules:
    """Tests for default_rules."""

    def test_table_sizes(self) -> None:
        """Test the shipped tables are complete."""
        rules = default_rules()
        assert len(rules.aliases) == 4
        assert len(rules.entities) == 11
        assert len(rules.title_rules) == 7
        assert "the" in rules.stopwords
        assert "Read" in rules.entity_denylist

    def test_subdomain_order(self) -> None:
        """Test security and regulation are checked first."""
        rules = default_rules()
        assert [s.subdomain for s in rules.subdomains] == [
            Subdomain.AI_SECURITY,
            Subdomain.AI_REGULATION,
            Subdomain.AI_INFRA,
            Subdomain.AI_APPS_TOOLS,
            Subdomain.AI_BUSINESS_MARKET,
            Subdomain.MODEL_RELEASES,
        ]
        assert rules.default_subdomain == Subdomain.AI_BUSINESS_MARKET

    def test_fresh_copies(self) -> None:
        """Test every call returns independent lists."""
        first = default_rules()
        second = default_rules()
        assert first == second
        assert first.aliases is not second.aliases
