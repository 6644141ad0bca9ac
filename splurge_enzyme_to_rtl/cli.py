"""Command-line interface for the enzyme to React Testing Library migration tool.

This module defines the public CLI commands of the
`splurge-enzyme-to-rtl` command-line application. It uses ``typer`` to
expose the program entrypoint while delegating the heavy-lifting to the
programmatic API in :mod:`splurge_enzyme_to_rtl.main` so the same logic
can be used from Python code or the CLI.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import difflib
import logging
from pathlib import Path
from typing import Any

import typer
import yaml

from . import main as main_module
from .cli_helpers import (
    attach_progress_handlers,
    create_event_bus,
    set_quiet_mode,
    setup_logging,
    setup_logging_with_level,
    validate_source_files_with_patterns,
)
from .context import ContextManager, MigrationConfig
from .exceptions import ConfigurationError

# Initialize typer app
app = typer.Typer(
    name="splurge-enzyme-to-rtl",
    help="Migrate enzyme test suites to React Testing Library",
    add_completion=False,
)

logger = logging.getLogger(__name__)


def _load_base_config(config_file: str | None) -> MigrationConfig:
    if config_file is None:
        return MigrationConfig()
    config_result = ContextManager.load_config_from_file(config_file)
    if not config_result.is_success():
        typer.echo(f"Error loading configuration file: {config_result.error}")
        raise typer.Exit(code=1)
    logger.info(f"Loaded configuration from: {config_file}")
    return config_result.unwrap()


def _print_dry_run(generated: dict[str, str], diff: bool, list_files: bool) -> None:
    for fname, code in generated.items():
        display = Path(fname).as_posix()
        if list_files:
            typer.echo(f"== FILES: {display} ==")
        elif diff:
            original = Path(fname)
            orig_text = original.read_text(encoding="utf-8") if original.exists() else ""
            diff_lines = list(
                difflib.unified_diff(
                    orig_text.splitlines(keepends=True),
                    code.splitlines(keepends=True),
                    fromfile=f"orig:{display}",
                    tofile=f"new:{display}",
                )
            )
            typer.echo(f"== DIFF: {display} ==")
            typer.echo("".join(diff_lines) if diff_lines else "<no differences detected>")
        else:
            typer.echo(f"== RTL: {display} ==")
            typer.echo(code)


@app.command("migrate")
def migrate(
    source_files: list[str] = typer.Argument(..., help="Source enzyme test files or directories"),
    root_directory: str | None = typer.Option(None, "--dir", "-d", help="Root directory to search for test files"),
    file_patterns: list[str] | None = typer.Option(
        None, "--file", "-f", help="Glob patterns for test files (repeatable)"
    ),
    recurse: bool = typer.Option(True, "--recurse/--no-recurse", help="Recurse into directories when searching"),
    test_id_attribute: str | None = typer.Option(
        None, "--test-id-attribute", help="Attribute used as the test id in selectors (default: data-testid)"
    ),
    dom_snapshot: str | None = typer.Option(
        None, "--dom-snapshot", help="Captured DOM snapshot (HTML) used to improve selector suggestions"
    ),
    dom_setup: bool = typer.Option(
        False, "--dom-setup", help="Add jest-dom and testIdAttribute setup to converted files", is_flag=True
    ),
    target_root: str | None = typer.Option(None, "--target-root", "-t", help="Target root directory for output files"),
    suffix: str | None = typer.Option(None, "--suffix", help="Suffix appended to target filename stem"),
    ext: str | None = typer.Option(
        None, "--ext", help="Override target file extension. Defaults to preserving the original extension."
    ),
    skip_backup: bool = typer.Option(False, "--skip-backup", "-sb", help="Skip backup of original files", is_flag=True),
    backup_root: str | None = typer.Option(None, "--backup-root", help="Directory for backup files"),
    dry_run: bool = typer.Option(
        False, "--dry-run", "-dry", help="Show what would be done without making changes", is_flag=True
    ),
    diff: bool = typer.Option(False, "--diff", help="With --dry-run, show unified diffs", is_flag=True),
    list_files: bool = typer.Option(False, "--list", help="With --dry-run, list files only", is_flag=True),
    fail_fast: bool = typer.Option(False, "--fail-fast", help="Stop on first error", is_flag=True),
    config_file: str | None = typer.Option(None, "--config", "-c", help="YAML configuration file to load settings from"),
    log_level: str | None = typer.Option(None, "--log-level", help="Set logging level (DEBUG, INFO, WARNING, ERROR)"),
    max_file_size: int | None = typer.Option(None, "--max-file-size", help="Maximum file size in MB to process"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose output", is_flag=True),
    info: bool = typer.Option(False, "--info", help="Enable info logging output", is_flag=True),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging output", is_flag=True),
) -> None:
    """Migrate enzyme test files to React Testing Library.

    Settings from ``--config`` are applied first; explicit command-line
    options override them. Directories are searched with the file
    patterns and only files that use enzyme are migrated.

    Examples:
        splurge-enzyme-to-rtl migrate src/components/Button.test.tsx --dry-run
        splurge-enzyme-to-rtl migrate src/ --target-root converted/
        splurge-enzyme-to-rtl migrate --config rtl.yaml src/
    """
    if info and debug:
        typer.echo("Error: --info and --debug cannot be used together.")
        raise typer.Exit(code=2)

    base_config = _load_base_config(config_file)

    overrides: dict[str, Any] = {
        "root_directory": root_directory,
        "file_patterns": file_patterns or None,
        "test_id_attribute": test_id_attribute,
        "dom_snapshot_file": dom_snapshot,
        "target_root": target_root,
        "target_suffix": suffix,
        "target_extension": ext,
        "backup_root": backup_root,
        "log_level": log_level,
        "max_file_size_mb": max_file_size,
    }
    overrides = {key: value for key, value in overrides.items() if value is not None}
    # Flags only ever switch behavior on
    if dom_setup:
        overrides["emit_dom_setup"] = True
    if skip_backup:
        overrides["backup_originals"] = False
    if dry_run:
        overrides["dry_run"] = True
    if not recurse:
        overrides["recurse_directories"] = False
    if fail_fast:
        overrides["fail_fast"] = True
    if verbose:
        overrides["verbose"] = True

    try:
        config = base_config.with_override(**overrides)
        config.validate()
    except ConfigurationError as e:
        typer.echo(f"Invalid configuration: {e}")
        raise typer.Exit(code=1) from None

    if debug or info:
        setup_logging(debug)
    else:
        setup_logging_with_level(config.log_level)
    # Default behavior: quiet when neither debug nor info are set
    set_quiet_mode(not (debug or info))

    valid_files = validate_source_files_with_patterns(
        source_files,
        config.root_directory,
        config.file_patterns,
        config.recurse_directories,
        config.max_file_size_mb,
    )
    if not valid_files:
        typer.echo("No enzyme test files found.")
        raise typer.Exit(code=1)

    event_bus = create_event_bus()
    attach_progress_handlers(event_bus, verbose=config.verbose)
    logger.info(f"Found {len(valid_files)} test files to process")

    if config.dry_run:
        logger.info("Dry-run mode enabled. No files will be written.")

    result = main_module.migrate(valid_files, config=config, event_bus=event_bus)

    if result.is_error():
        typer.echo(f"Migration failed: {result.error}")
        raise typer.Exit(code=1)

    for warning in result.warnings:
        logger.warning(warning)
    logger.info(f"Migrated: {len(result.data or [])} files")

    if config.dry_run:
        _print_dry_run(result.metadata.get("generated_code", {}), diff, list_files)

    if result.metadata.get("failed_files"):
        raise typer.Exit(code=1)


@app.command("version")
def version() -> None:
    """Show the version of splurge-enzyme-to-rtl."""
    from . import __version__

    typer.echo(f"splurge-enzyme-to-rtl {__version__}")


@app.command("init-config")
def init_config(
    output_file: str = typer.Argument("splurge-enzyme-to-rtl.yaml", help="Output configuration file"),
) -> None:
    """Initialize a configuration file with default settings.

    This command creates a configuration file with all available options
    set to their default values, which you can then customize.
    """
    default_config = MigrationConfig().to_dict()

    try:
        with open(output_file, "w", encoding="utf-8") as f:
            yaml.dump(default_config, f, default_flow_style=False, sort_keys=False)
    except OSError as e:
        typer.echo(f"Failed to create configuration file: {e}")
        raise typer.Exit(code=1) from None

    typer.echo(f"Configuration file created: {output_file}")


def main() -> None:
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
