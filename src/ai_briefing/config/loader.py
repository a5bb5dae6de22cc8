"""Rule table and publisher registry loader."""

import hashlib
import time
from dataclasses import dataclass, field
from pathlib import Path

import structlog
import yaml
from pydantic import ValidationError

from ai_briefing.config.constants import (
    COMPONENT_CONFIG,
    FILE_TYPE_REGISTRY,
    FILE_TYPE_RULES,
)
from ai_briefing.config.defaults import default_rules
from ai_briefing.config.schemas.registry import PublisherRegistry
from ai_briefing.config.schemas.rules import RulesConfig
from ai_briefing.config.state_machine import ConfigState, ConfigStateMachine


logger = structlog.get_logger()


class ConfigValidationError(Exception):
    """Raised when a configuration file cannot be read or validated."""

    def __init__(self, errors: list[dict[str, str]], file_path: str) -> None:
        """Initialize the error.

        Args:
            errors: List of validation error details.
            file_path: Path to the file that failed validation.
        """
        self.errors = errors
        self.file_path = file_path
        super().__init__(f"Validation failed for {file_path}: {len(errors)} errors")


@dataclass(frozen=True)
class LoadedConfig:
    """Validated configuration handed to the engine.

    Attributes:
        rules: Rule tables (built-in defaults when no file was given).
        registry: Publisher registry (empty when no file was given).
        file_checksums: SHA-256 of every file read, keyed by resolved path.
    """

    rules: RulesConfig
    registry: PublisherRegistry
    file_checksums: dict[str, str] = field(default_factory=dict)


class ConfigLoader:
    """Loads and validates rule tables and the publisher registry.

    A loader is single-use: UNLOADED -> LOADING -> VALIDATED -> READY,
    or FAILED on the first bad file.
    """

    def __init__(self, run_id: str) -> None:
        """Initialize the loader.

        Args:
            run_id: Identifier of the current run.
        """
        self._state_machine = ConfigStateMachine()
        self._file_checksums: dict[str, str] = {}
        self._validation_errors: list[dict[str, str]] = []
        self._log = logger.bind(component=COMPONENT_CONFIG, run_id=run_id)

    @property
    def state(self) -> ConfigState:
        """Get the current loader state."""
        return self._state_machine.state

    @property
    def file_checksums(self) -> dict[str, str]:
        """Get SHA-256 checksums of loaded files."""
        return self._file_checksums.copy()

    @property
    def validation_errors(self) -> list[dict[str, str]]:
        """Get validation errors if any."""
        return self._validation_errors.copy()

    def _read_file(self, file_path: Path) -> object:
        """Read a YAML (or JSON) file and record its checksum.

        Args:
            file_path: Path to the file.

        Returns:
            Parsed document.
        """
        content_bytes = file_path.read_bytes()
        checksum = hashlib.sha256(content_bytes).hexdigest()
        self._file_checksums[str(file_path.resolve())] = checksum
        # JSON is a subset of YAML for the documents we accept.
        return yaml.safe_load(content_bytes.decode("utf-8"))

    def load(
        self,
        rules_path: Path | None = None,
        registry_path: Path | None = None,
    ) -> LoadedConfig:
        """Load and validate configuration files.

        Args:
            rules_path: Optional rules YAML; built-in tables when omitted.
            registry_path: Optional publisher registry (YAML or JSON).

        Returns:
            LoadedConfig with validated tables.

        Raises:
            ConfigValidationError: If a file is missing, unparsable or invalid.
            ConfigStateError: If the loader was already used.
        """
        start_time = time.perf_counter()
        self._state_machine.transition(ConfigState.LOADING)
        log = self._log.bind(phase=ConfigState.LOADING.name)

        current_path = ""
        try:
            rules = default_rules()
            if rules_path is not None:
                current_path = str(rules_path)
                log.info(
                    "loading_config_file",
                    file_path=current_path,
                    file_type=FILE_TYPE_RULES,
                )
                rules = RulesConfig.model_validate(self._read_file(rules_path) or {})
                log.info(
                    "config_file_loaded",
                    file_path=current_path,
                    alias_count=len(rules.aliases),
                    entity_count=len(rules.entities),
                    subdomain_rule_count=len(rules.subdomains),
                )

            registry = PublisherRegistry()
            if registry_path is not None:
                current_path = str(registry_path)
                log.info(
                    "loading_config_file",
                    file_path=current_path,
                    file_type=FILE_TYPE_REGISTRY,
                )
                registry = PublisherRegistry.model_validate(
                    self._read_file(registry_path) or []
                )
                log.info(
                    "config_file_loaded",
                    file_path=current_path,
                    publisher_count=len(registry.publishers),
                )

        except ValidationError as e:
            for err in e.errors():
                self._validation_errors.append(
                    {
                        "loc": ".".join(str(loc) for loc in err["loc"]),
                        "msg": err["msg"],
                        "type": err["type"],
                    }
                )
            self._fail(log, "config_validation_failed")
            raise ConfigValidationError(self.validation_errors, current_path) from e

        except FileNotFoundError as e:
            self._validation_errors.append(
                {"loc": "file", "msg": str(e), "type": "file_not_found"}
            )
            self._fail(log, "config_file_not_found")
            raise ConfigValidationError(self.validation_errors, current_path) from e

        except yaml.YAMLError as e:
            self._validation_errors.append(
                {"loc": "yaml", "msg": str(e), "type": "yaml_parse_error"}
            )
            self._fail(log, "config_yaml_parse_error")
            raise ConfigValidationError(self.validation_errors, current_path) from e

        except UnicodeDecodeError as e:
            self._validation_errors.append(
                {"loc": "encoding", "msg": str(e), "type": "decode_error"}
            )
            self._fail(log, "config_file_decode_error")
            raise ConfigValidationError(self.validation_errors, current_path) from e

        except OSError as e:
            self._validation_errors.append(
                {"loc": "file", "msg": str(e), "type": "file_read_error"}
            )
            self._fail(log, "config_file_read_error")
            raise ConfigValidationError(self.validation_errors, current_path) from e

        self._state_machine.transition(ConfigState.VALIDATED)
        duration_ms = (time.perf_counter() - start_time) * 1000
        log.info(
            "config_validation_complete",
            phase=ConfigState.VALIDATED.name,
            validation_error_count=0,
            config_validation_duration_ms=duration_ms,
        )

        loaded = LoadedConfig(
            rules=rules,
            registry=registry,
            file_checksums=self.file_checksums,
        )
        self._state_machine.transition(ConfigState.READY)
        log.info("config_ready", phase=ConfigState.READY.name)
        return loaded

    def _fail(self, log: structlog.stdlib.BoundLogger, event: str) -> None:
        self._state_machine.transition(ConfigState.FAILED)
        log.error(
            event,
            phase=ConfigState.FAILED.name,
            validation_error_count=len(self._validation_errors),
            errors=self._validation_errors,
        )
