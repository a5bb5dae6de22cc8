"""Unit tests for alias folding, classification and extraction."""

import pytest

from ai_briefing.config.defaults import default_rules
from ai_briefing.config.schemas.base import Subdomain
from ai_briefing.config.schemas.rules import AliasRule, RulesConfig
from ai_briefing.normalizer.normalizer import Normalizer
from tests.helpers.factories import make_source


@pytest.fixture
def normalizer() -> Normalizer:
    """Normalizer with the built-in rule tables."""
    return Normalizer()


class TestFoldAliases:
    """Tests for alias folding."""

    def test_folds_variant_to_canonical(self, normalizer: Normalizer) -> None:
        """Test a spelling variant is replaced by its canonical name."""
        assert normalizer.fold_aliases("Clawdbot launches") == "OpenClaw launches"

    def test_folding_is_case_insensitive(self, normalizer: Normalizer) -> None:
        """Test patterns match regardless of case."""
        assert normalizer.fold_aliases("CLAUDE   CODE tips") == "Claude Code tips"

    def test_replaces_first_match_only(self, normalizer: Normalizer) -> None:
        """Test each rule replaces only its first match."""
        assert normalizer.fold_aliases("copilot vs copilot") == "Copilot vs copilot"

    def test_trims_whitespace(self, normalizer: Normalizer) -> None:
        """Test surrounding whitespace is removed."""
        assert normalizer.fold_aliases("  claude code tips \n") == "Claude Code tips"

    def test_none_and_empty(self, normalizer: Normalizer) -> None:
        """Test missing text folds to an empty string."""
        assert normalizer.fold_aliases(None) == ""
        assert normalizer.fold_aliases("") == ""

    def test_text_without_aliases_unchanged(self, normalizer: Normalizer) -> None:
        """Test text without alias hits is only trimmed."""
        assert normalizer.fold_aliases("Mistral ships a model") == "Mistral ships a model"

    def test_normalize_item_folds_title_and_summary(
        self, normalizer: Normalizer
    ) -> None:
        """Test normalize_item returns a folded copy."""
        item = make_source(title="moltbot goes viral", summary="github copilot too")
        folded = normalizer.normalize_item(item)

        assert folded.title == "OpenClaw goes viral"
        assert folded.summary == "github Copilot too"
        assert item.title == "moltbot goes viral"


class TestClassifySubdomain:
    """Tests for subdomain classification."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("Jailbreak found in GPT-5", Subdomain.AI_SECURITY),
            ("EU passes AI Act", Subdomain.AI_REGULATION),
            ("NVIDIA unveils B200 GPU", Subdomain.AI_INFRA),
            ("Copilot adds meeting notes", Subdomain.AI_APPS_TOOLS),
            ("Startup raises funding round", Subdomain.AI_BUSINESS_MARKET),
            ("Mistral ships new model", Subdomain.MODEL_RELEASES),
        ],
    )
    def test_groups(
        self, normalizer: Normalizer, text: str, expected: Subdomain
    ) -> None:
        """Test each pattern group maps to its subdomain."""
        assert normalizer.classify_subdomain(text) == expected

    def test_first_matching_group_wins(self, normalizer: Normalizer) -> None:
        """Test security is checked before model releases."""
        assert normalizer.classify_subdomain("OpenAI model jailbreak") == (
            Subdomain.AI_SECURITY
        )

    def test_default_subdomain(self, normalizer: Normalizer) -> None:
        """Test unmatched and empty text fall back to the default."""
        assert normalizer.classify_subdomain("") == Subdomain.AI_BUSINESS_MARKET
        assert normalizer.classify_subdomain(None) == Subdomain.AI_BUSINESS_MARKET
        assert normalizer.classify_subdomain("quiet day") == (
            Subdomain.AI_BUSINESS_MARKET
        )


class TestExtractPrimaryEntity:
    """Tests for primary entity extraction."""

    def test_alias_canonical_first(self, normalizer: Normalizer) -> None:
        """Test alias canonicals take precedence over the dictionary."""
        assert normalizer.extract_primary_entity("clawdbot goes viral") == "OpenClaw"

    def test_dictionary_order(self, normalizer: Normalizer) -> None:
        """Test the first dictionary entry in table order wins."""
        assert normalizer.extract_primary_entity("Google and OpenAI partner") == (
            "OpenAI"
        )

    def test_word_boundaries(self, normalizer: Normalizer) -> None:
        """Test dictionary patterns respect word boundaries."""
        assert normalizer.extract_primary_entity("Europe reacts") == "Other"
        assert normalizer.extract_primary_entity("The EU reacts") == "EU"

    def test_other_when_nothing_matches(self, normalizer: Normalizer) -> None:
        """Test the Other sentinel."""
        assert normalizer.extract_primary_entity("nothing here") == "Other"
        assert normalizer.extract_primary_entity(None) == "Other"


class TestExtractEntities:
    """Tests for display entity extraction."""

    def test_dictionary_then_phrases(self, normalizer: Normalizer) -> None:
        """Test dictionary hits come first, then capitalised phrases."""
        entities = normalizer.extract_entities("OpenAI launches Sora Turbo")
        assert entities == ["OpenAI", "Sora Turbo"]

    def test_denylisted_phrase_rejected(self, normalizer: Normalizer) -> None:
        """Test phrases containing a denylisted word are dropped."""
        assert normalizer.extract_entities("Read More About Gemini") == ["Other"]

    def test_filler_and_stopword_rejected(self, normalizer: Normalizer) -> None:
        """Test single filler words are never entities."""
        assert normalizer.extract_entities("The model") == ["Other"]

    def test_capped_at_eight(self, normalizer: Normalizer) -> None:
        """Test at most eight entities are returned."""
        text = (
            "Alpha x Bravo x Charlie x Delta x Echo x Foxtrot x Golf x Hotel "
            "x India x Juliet"
        )
        entities = normalizer.extract_entities(text)
        assert len(entities) == 8
        assert entities[0] == "Alpha"
        assert entities[-1] == "Hotel"

    def test_deduplicates(self, normalizer: Normalizer) -> None:
        """Test repeated phrases appear once."""
        entities = normalizer.extract_entities("Anthropic ships Claude | Anthropic")
        assert entities == ["Anthropic", "Claude"]

    def test_empty_text_falls_back(self, normalizer: Normalizer) -> None:
        """Test empty input yields the primary entity."""
        assert normalizer.extract_entities(None) == ["Other"]


class TestKeywordsAndTokens:
    """Tests for keyword and clustering token extraction."""

    TEXT = "OpenAI's new GPT model: faster, cheaper, faster!"

    def test_extract_keywords(self, normalizer: Normalizer) -> None:
        """Test keywords are unique, 4+ chars and not stopwords."""
        assert normalizer.extract_keywords(self.TEXT) == [
            "openai",
            "model",
            "faster",
            "cheaper",
        ]

    def test_keywords_capped_at_eight(self, normalizer: Normalizer) -> None:
        """Test at most eight keywords are returned."""
        text = " ".join(f"word{i:02d}" for i in range(12))
        assert len(normalizer.extract_keywords(text)) == 8

    def test_clustering_tokens_are_looser(self, normalizer: Normalizer) -> None:
        """Test clustering tokens keep 3-char tokens and duplicates."""
        assert normalizer.clustering_tokens(self.TEXT) == [
            "openai",
            "gpt",
            "model",
            "faster",
            "cheaper",
            "faster",
        ]

    def test_empty_text(self, normalizer: Normalizer) -> None:
        """Test empty input yields no tokens."""
        assert normalizer.extract_keywords(None) == []
        assert normalizer.clustering_tokens("") == []


class TestFingerprint:
    """Tests for fingerprint computation."""

    def test_fingerprint_of_item(self, normalizer: Normalizer) -> None:
        """Test fingerprint uses folded title and summary."""
        item = make_source(title="Clawdbot agents go always-on")
        fp = normalizer.fingerprint(item)

        assert fp.entity == "OpenClaw"
        assert fp.subdomain == Subdomain.AI_BUSINESS_MARKET
        assert fp.keywords == ("openclaw", "agents", "always")
        assert fp.bucket_key == ("OpenClaw", Subdomain.AI_BUSINESS_MARKET)

    def test_max_keywords(self, normalizer: Normalizer) -> None:
        """Test clustering tokens are truncated to max_keywords."""
        item = make_source(title="alpha beta gamma delta epsilon zeta")
        fp = normalizer.fingerprint(item, max_keywords=3)
        assert fp.keywords == ("alpha", "beta", "gamma")


class TestTitleRules:
    """Tests for editorial title rules."""

    def test_single_pattern_rule(self, normalizer: Normalizer) -> None:
        """Test a single-pattern rule."""
        assert normalizer.match_title_rule(
            "Researchers warn about prompt injection"
        ) == "Prompt-injection risks resurface for tool-using AI agents"

    def test_all_patterns_must_match(self, normalizer: Normalizer) -> None:
        """Test multi-pattern rules need every pattern."""
        assert normalizer.match_title_rule("open source model weights") == (
            "Open-source model momentum shifts competitive baseline"
        )
        assert normalizer.match_title_rule("open source tooling") is None

    def test_rules_see_folded_text(self, normalizer: Normalizer) -> None:
        """Test title rules run after alias folding."""
        assert normalizer.match_title_rule("moltbot rename") == (
            "OpenClaw-style always-on agent workflows trend"
        )


class TestCustomRules:
    """Tests for normalizers built from custom tables."""

    def test_instances_are_independent(self) -> None:
        """Test custom tables do not leak into other normalizers."""
        custom = Normalizer(
            RulesConfig(aliases=[AliasRule(pattern=r"gpt-?5", canonical="GPT-5")])
        )
        default = Normalizer()

        assert custom.fold_aliases("gpt5 is out") == "GPT-5 is out"
        assert default.fold_aliases("gpt5 is out") == "gpt5 is out"
        assert custom.extract_primary_entity("gpt5 is out") == "GPT-5"

    def test_rules_property(self) -> None:
        """Test the rules property exposes the tables in use."""
        rules = default_rules()
        assert Normalizer(rules).rules is rules

    def test_empty_tables(self) -> None:
        """Test empty tables still classify and extract."""
        normalizer = Normalizer(RulesConfig())
        assert normalizer.classify_subdomain("gpu") == Subdomain.AI_BUSINESS_MARKET
        assert normalizer.extract_primary_entity("openai") == "Other"
        assert normalizer.match_title_rule("pricing") is None
