import yaml
from typer.testing import CliRunner

import splurge_enzyme_to_rtl.cli as cli_mod
from splurge_enzyme_to_rtl.context import MigrationConfig
from splurge_enzyme_to_rtl.result import Result

runner = CliRunner()


def test_version_command(monkeypatch, capsys):
    import splurge_enzyme_to_rtl as pkg

    monkeypatch.setattr(pkg, "__version__", "0.1.0")
    cli_mod.version()
    captured = capsys.readouterr()
    assert "splurge-enzyme-to-rtl 0.1.0" in captured.out


def test_init_config_writes_defaults(tmp_path):
    target = tmp_path / "rtl.yaml"

    result = runner.invoke(cli_mod.app, ["init-config", str(target)])

    assert result.exit_code == 0
    assert f"Configuration file created: {target}" in result.stdout
    loaded = yaml.safe_load(target.read_text(encoding="utf-8"))
    assert MigrationConfig.from_dict(loaded) == MigrationConfig()


def test_info_and_debug_are_exclusive(tmp_path):
    result = runner.invoke(cli_mod.app, ["migrate", str(tmp_path), "--info", "--debug"])

    assert result.exit_code == 2
    assert "--info and --debug cannot be used together" in result.stdout


def test_invalid_option_value_exits(tmp_path):
    result = runner.invoke(cli_mod.app, ["migrate", str(tmp_path), "--test-id-attribute", "data id"])

    assert result.exit_code == 1
    assert "Invalid configuration" in result.stdout


def test_missing_config_file_exits(tmp_path):
    result = runner.invoke(cli_mod.app, ["migrate", str(tmp_path), "--config", str(tmp_path / "missing.yaml")])

    assert result.exit_code == 1
    assert "Error loading configuration file" in result.stdout


def test_no_files_found(tmp_path):
    result = runner.invoke(cli_mod.app, ["migrate", str(tmp_path)])

    assert result.exit_code == 1
    assert "No enzyme test files found." in result.stdout


def test_options_override_config_file(tmp_path, mocker):
    source = tmp_path / "a.test.jsx"
    source.write_text("import { mount } from 'enzyme';\n", encoding="utf-8")
    config_file = tmp_path / "rtl.yaml"
    config_file.write_text(yaml.dump({"test_id_attribute": "data-qa", "dry_run": False}), encoding="utf-8")
    migrate = mocker.patch.object(cli_mod.main_module, "migrate", return_value=Result.success([], {}))

    result = runner.invoke(
        cli_mod.app,
        ["migrate", str(source), "--config", str(config_file), "--dry-run", "--skip-backup", "--no-recurse"],
    )

    assert result.exit_code == 0
    config = migrate.call_args.kwargs["config"]
    assert config.test_id_attribute == "data-qa"
    assert config.dry_run is True
    assert config.backup_originals is False
    assert config.recurse_directories is False
    assert migrate.call_args.args[0] == [str(source)]


def test_migration_failure_exits(tmp_path, mocker):
    source = tmp_path / "a.test.jsx"
    source.write_text("import { mount } from 'enzyme';\n", encoding="utf-8")
    mocker.patch.object(cli_mod.main_module, "migrate", return_value=Result.failure(RuntimeError("boom")))

    result = runner.invoke(cli_mod.app, ["migrate", str(source)])

    assert result.exit_code == 1
    assert "Migration failed: boom" in result.stdout
