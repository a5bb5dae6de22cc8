"""Unit tests for the configuration loader."""

import hashlib
from pathlib import Path

import pytest

from ai_briefing.config.defaults import default_rules
from ai_briefing.config.loader import ConfigLoader, ConfigValidationError
from ai_briefing.config.state_machine import ConfigState, ConfigStateError


FIXTURES = Path(__file__).parent.parent.parent / "fixtures"


class TestConfigLoader:
    """Tests for ConfigLoader.load."""

    def test_defaults_without_files(self) -> None:
        """Test built-in tables and an empty registry are used."""
        loader = ConfigLoader(run_id="test")
        config = loader.load()

        assert loader.state == ConfigState.READY
        assert config.rules == default_rules()
        assert config.registry.publishers == []
        assert config.file_checksums == {}

    def test_loads_rules_and_registry(self) -> None:
        """Test YAML rules and a JSON registry load together."""
        loader = ConfigLoader(run_id="test")
        config = loader.load(
            rules_path=FIXTURES / "rules.yaml",
            registry_path=FIXTURES / "registry.json",
        )

        assert [a.canonical for a in config.rules.aliases] == ["GPT-5", "Claude Code"]
        assert config.rules.title_rules[0].title.startswith("Jailbreak")
        assert config.registry.always_show_map()["OpenAI Blog"] is True
        assert len(config.file_checksums) == 2

    def test_checksum_is_sha256_of_bytes(self) -> None:
        """Test checksums are computed over the raw file."""
        path = FIXTURES / "rules.yaml"
        loader = ConfigLoader(run_id="test")
        loader.load(rules_path=path)

        expected = hashlib.sha256(path.read_bytes()).hexdigest()
        assert loader.file_checksums == {str(path.resolve()): expected}

    def test_invalid_rules(self) -> None:
        """Test schema errors are collected and wrapped."""
        loader = ConfigLoader(run_id="test")
        path = FIXTURES / "rules_invalid.yaml"

        with pytest.raises(ConfigValidationError) as exc_info:
            loader.load(rules_path=path)

        assert loader.state == ConfigState.FAILED
        assert exc_info.value.file_path == str(path)
        locs = {e["loc"] for e in exc_info.value.errors}
        assert "aliases.0.pattern" in locs
        assert "subdomains.0.subdomain" in locs

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test a missing file is reported as a validation error."""
        loader = ConfigLoader(run_id="test")
        with pytest.raises(ConfigValidationError) as exc_info:
            loader.load(registry_path=tmp_path / "missing.json")

        assert exc_info.value.errors[0]["type"] == "file_not_found"
        assert loader.state == ConfigState.FAILED

    def test_unparsable_yaml(self, tmp_path: Path) -> None:
        """Test YAML syntax errors are reported."""
        path = tmp_path / "rules.yaml"
        path.write_text("aliases: [unclosed\n", encoding="utf-8")
        loader = ConfigLoader(run_id="test")

        with pytest.raises(ConfigValidationError) as exc_info:
            loader.load(rules_path=path)

        assert exc_info.value.errors[0]["type"] == "yaml_parse_error"

    def test_empty_rules_file(self, tmp_path: Path) -> None:
        """Test an empty file yields empty tables, not the defaults."""
        path = tmp_path / "rules.yaml"
        path.write_text("", encoding="utf-8")
        config = ConfigLoader(run_id="test").load(rules_path=path)

        assert config.rules.aliases == []
        assert config.rules.subdomains == []

    def test_loader_is_single_use(self) -> None:
        """Test a second load is rejected."""
        loader = ConfigLoader(run_id="test")
        loader.load()
        with pytest.raises(ConfigStateError):
            loader.load()

    def test_undecodable_file_fails(self, tmp_path: Path) -> None:
        """Test a file that is not UTF-8 is reported and moves to FAILED."""
        path = tmp_path / "rules.yaml"
        path.write_bytes(b"stopwords: ['\xff\xfe']\n")
        loader = ConfigLoader(run_id="test")

        with pytest.raises(ConfigValidationError) as exc_info:
            loader.load(rules_path=path)

        assert loader.state == ConfigState.FAILED
        assert exc_info.value.file_path == str(path)
        assert exc_info.value.errors[0]["type"] == "decode_error"
        assert isinstance(exc_info.value.__cause__, UnicodeDecodeError)

    def test_unreadable_file_fails(self, tmp_path: Path) -> None:
        """Test an OS-level read error is reported and moves to FAILED."""
        loader = ConfigLoader(run_id="test")

        with pytest.raises(ConfigValidationError) as exc_info:
            loader.load(registry_path=tmp_path)

        assert loader.state == ConfigState.FAILED
        assert exc_info.value.errors[0]["type"] == "file_read_error"
        assert isinstance(exc_info.value.__cause__, OSError)
