"""Tests for MigrationConfig, PipelineContext and configuration loading."""

import pytest
import yaml

from splurge_enzyme_to_rtl.context import (
    DEFAULT_FILE_PATTERNS,
    ContextManager,
    MigrationConfig,
    PipelineContext,
)
from splurge_enzyme_to_rtl.exceptions import ConfigurationError


class TestMigrationConfig:
    def test_defaults(self):
        config = MigrationConfig()

        assert config.test_id_attribute == "data-testid"
        assert config.backup_originals is True
        assert config.target_extension is None
        assert config.file_patterns == DEFAULT_FILE_PATTERNS
        config.validate()

    def test_with_override_returns_copy(self):
        config = MigrationConfig()

        changed = config.with_override(dry_run=True, test_id_attribute="data-qa")

        assert changed.dry_run is True
        assert changed.test_id_attribute == "data-qa"
        assert config.dry_run is False

    @pytest.mark.parametrize(
        "overrides, key",
        [
            ({"test_id_attribute": ""}, "test_id_attribute"),
            ({"test_id_attribute": "data id"}, "test_id_attribute"),
            ({"log_level": "LOUD"}, "log_level"),
            ({"max_file_size_mb": 0}, "max_file_size_mb"),
            ({"max_file_size_mb": 101}, "max_file_size_mb"),
            ({"file_patterns": []}, "file_patterns"),
        ],
    )
    def test_validate_rejects(self, overrides, key):
        with pytest.raises(ConfigurationError) as exc_info:
            MigrationConfig().with_override(**overrides).validate()

        assert exc_info.value.details["config_key"] == key

    def test_from_dict_ignores_unknown_keys(self):
        config = MigrationConfig.from_dict({"dry_run": True, "line_length": 120})

        assert config.dry_run is True

    def test_from_dict_validates(self):
        with pytest.raises(ConfigurationError):
            MigrationConfig.from_dict({"log_level": "chatty"})

    def test_dict_round_trip(self):
        config = MigrationConfig(target_root="out", emit_dom_setup=True)

        assert MigrationConfig.from_dict(config.to_dict()) == config


class TestPipelineContext:
    def test_create_defaults(self):
        context = PipelineContext.create("src/a.test.js")

        assert context.target_file == "src/a.test.js"
        assert context.config == MigrationConfig()
        assert context.run_id
        assert context.metadata == {}

    def test_with_metadata_does_not_mutate(self):
        context = PipelineContext.create("a.test.js", run_id="run-1")

        updated = context.with_metadata("dom_snapshot", "<p/>")

        assert updated.metadata == {"dom_snapshot": "<p/>"}
        assert context.metadata == {}
        assert updated.run_id == "run-1"

    def test_with_config_and_dry_run(self):
        context = PipelineContext.create("a.test.js").with_config(dry_run=True)

        assert context.is_dry_run()
        assert context.to_dict()["config"]["dry_run"] is True

    def test_str_shortens_run_id(self):
        context = PipelineContext.create("a.test.js", "b.test.js", run_id="0123456789abcdef")

        assert str(context) == "PipelineContext(source=a.test.js, target=b.test.js, run_id=01234567...)"


class TestLoadConfigFromFile:
    def test_loads_yaml(self, tmp_path):
        config_file = tmp_path / "rtl.yaml"
        config_file.write_text(yaml.dump({"test_id_attribute": "data-qa", "dry_run": True}), encoding="utf-8")

        result = ContextManager.load_config_from_file(str(config_file))

        assert result.is_success()
        assert result.data.test_id_attribute == "data-qa"
        assert result.data.dry_run is True

    def test_missing_file(self, tmp_path):
        result = ContextManager.load_config_from_file(str(tmp_path / "missing.yaml"))

        assert result.is_error()
        assert isinstance(result.error, FileNotFoundError)

    @pytest.mark.parametrize("content", ["- a\n- b\n", "key: [unclosed\n", "max_file_size_mb: 500\n"])
    def test_unusable_content(self, tmp_path, content):
        config_file = tmp_path / "rtl.yaml"
        config_file.write_text(content, encoding="utf-8")

        result = ContextManager.load_config_from_file(str(config_file))

        assert result.is_error()
        assert isinstance(result.error, ConfigurationError)
        assert result.metadata["config_file"] == str(config_file)
