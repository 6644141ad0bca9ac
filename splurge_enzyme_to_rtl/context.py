"""Pipeline context and migration configuration helpers.

This module defines the immutable dataclasses carried through the
migration pipeline: ``MigrationConfig`` for codemod and output options
and ``PipelineContext`` for per-file runtime information (paths, run id
and metadata). ``ContextManager`` loads configuration from YAML files.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import dataclasses
import logging
import re
import uuid
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from .exceptions import ConfigurationError
from .result import Result

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")
_ATTRIBUTE_NAME = re.compile(r"^[A-Za-z_][A-Za-z0-9_:.-]*$")

DEFAULT_FILE_PATTERNS = [
    "*.test.js",
    "*.test.jsx",
    "*.test.ts",
    "*.test.tsx",
    "*.spec.js",
    "*.spec.jsx",
    "*.spec.ts",
    "*.spec.tsx",
]


@dataclass(frozen=True)
class MigrationConfig:
    """Migration behavior configuration.

    Centralizes the options that control file discovery, the codemod
    passes and output handling. It round-trips through plain dictionaries
    so it can be loaded from YAML.
    """

    # Codemod settings
    test_id_attribute: str = "data-testid"
    """Attribute recognized in ``find`` selectors and emitted as ``getByTestId``"""
    dom_snapshot_file: str | None = None
    """Optional captured DOM snapshot used to sharpen selector suggestions"""
    emit_dom_setup: bool = False
    """Add jest-dom and ``configure({ testIdAttribute })`` setup to converted files"""

    # Output settings
    target_root: str | None = None
    root_directory: str | None = None
    target_suffix: str = ""
    # None means preserve the original extension
    target_extension: str | None = None
    backup_originals: bool = True
    backup_root: str | None = None

    # Discovery settings
    file_patterns: list[str] = field(default_factory=lambda: list(DEFAULT_FILE_PATTERNS))
    recurse_directories: bool = True

    # Behavior settings
    dry_run: bool = False
    fail_fast: bool = False
    verbose: bool = False
    log_level: str = "INFO"
    max_file_size_mb: int = 10
    """Maximum file size in MB to process"""

    def with_override(self, **kwargs: Any) -> "MigrationConfig":
        """Return a copy of this configuration with ``kwargs`` applied."""
        return dataclasses.replace(self, **kwargs)

    def validate(self) -> None:
        """Validate field values.

        Raises:
            ConfigurationError: If a field holds an unusable value.
        """
        if not self.test_id_attribute or not _ATTRIBUTE_NAME.match(self.test_id_attribute):
            raise ConfigurationError(
                f"test_id_attribute must be a valid attribute name: {self.test_id_attribute!r}", "test_id_attribute"
            )
        if str(self.log_level).upper() not in _LOG_LEVELS:
            raise ConfigurationError(f"log_level must be one of {', '.join(_LOG_LEVELS)}", "log_level")
        if not 1 <= int(self.max_file_size_mb) <= 100:
            raise ConfigurationError("max_file_size_mb must be between 1 and 100", "max_file_size_mb")
        if not self.file_patterns:
            raise ConfigurationError("file_patterns cannot be empty", "file_patterns")

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> "MigrationConfig":
        """Create a validated config from a dictionary.

        Unknown keys are ignored so configuration files can carry
        settings for other tools.

        Raises:
            ConfigurationError: If the resulting configuration is invalid.
        """
        filtered = {k: v for k, v in config_dict.items() if k in cls.__dataclass_fields__}
        config = cls(**filtered)
        config.validate()
        return config

    def to_dict(self) -> dict[str, Any]:
        return dataclasses.asdict(self)


@dataclass(frozen=True)
class PipelineContext:
    """Immutable context object passed through the migration pipeline.

    The context bundles the source and target file paths, the active
    :class:`MigrationConfig`, a stable ``run_id`` for correlating events
    and an optional metadata mapping (for example the DOM snapshot
    text). Create modified copies with ``with_metadata`` rather than
    mutating shared state.
    """

    source_file: str
    target_file: str
    config: MigrationConfig
    run_id: str
    metadata: dict[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # In-memory conversions construct contexts for files that do not exist.
        if not Path(self.source_file).exists():
            logging.getLogger(__name__).debug(
                "PipelineContext created with non-existent source_file: %s", self.source_file
            )

    @classmethod
    def create(
        cls,
        source_file: str,
        target_file: str | None = None,
        config: MigrationConfig | None = None,
        run_id: str | None = None,
    ) -> "PipelineContext":
        """Construct a ``PipelineContext`` from call-site information.

        Args:
            source_file: Path to the enzyme test file.
            target_file: Optional output path. When omitted the source
                path is reused.
            config: Optional ``MigrationConfig``; defaults are used when
                omitted.
            run_id: Optional run identifier; a UUID is generated when
                omitted.
        """
        if not target_file:
            target_file = str(Path(source_file))

        if not config:
            config = MigrationConfig()

        if not run_id:
            run_id = str(uuid.uuid4())

        return cls(source_file=source_file, target_file=target_file, config=config, run_id=run_id, metadata={})

    def with_metadata(self, key: str, value: Any) -> "PipelineContext":
        """Return a new context with ``key`` set in its metadata."""
        new_metadata = {**self.metadata, key: value}
        return dataclasses.replace(self, metadata=new_metadata)

    def with_config(self, **config_overrides: Any) -> "PipelineContext":
        new_config = self.config.with_override(**config_overrides)
        return dataclasses.replace(self, config=new_config)

    def is_dry_run(self) -> bool:
        return self.config.dry_run

    def to_dict(self) -> dict[str, Any]:
        return {
            "source_file": self.source_file,
            "target_file": self.target_file,
            "config": self.config.to_dict(),
            "run_id": self.run_id,
            "metadata": self.metadata,
        }

    def __str__(self) -> str:
        return f"PipelineContext(source={self.source_file}, target={self.target_file}, run_id={self.run_id[:8]}...)"


class ContextManager:
    """Helpers for loading pipeline configuration.

    Methods return ``Result`` instances so callers can react to failures
    in a structured way.
    """

    @staticmethod
    def load_config_from_file(config_file: str) -> Result[MigrationConfig]:
        """Load a ``MigrationConfig`` from a YAML file.

        Args:
            config_file: Path to the YAML configuration file.

        Returns:
            A ``Result`` holding the configuration, or an error describing
            why the file could not be used.
        """
        try:
            with open(config_file, encoding="utf-8") as f:
                config_data = yaml.safe_load(f)
        except FileNotFoundError:
            return Result.failure(
                FileNotFoundError(f"Configuration file not found: {config_file}"), {"config_file": config_file}
            )
        except (OSError, yaml.YAMLError) as e:
            return Result.failure(ConfigurationError(f"Error loading configuration: {e}"), {"config_file": config_file})

        if not isinstance(config_data, dict):
            return Result.failure(
                ConfigurationError("Configuration file must contain a mapping"), {"config_file": config_file}
            )

        try:
            return Result.success(MigrationConfig.from_dict(config_data))
        except (ConfigurationError, TypeError, ValueError) as e:
            return Result.failure(e, {"config_file": config_file})
