"""CLI helper functions for the enzyme to RTL migration tool.

This module contains utility functions used by the CLI commands,
separated from the main CLI module for better organization.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import glob
import logging
import os
from typing import Any

from .context import DEFAULT_FILE_PATTERNS, MigrationConfig
from .detectors import EnzymeFileDetector
from .events import EventBus, LoggingSubscriber
from .exceptions import MigrationError

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

logger = logging.getLogger(__name__)


def setup_logging(debug_mode: bool = False) -> None:
    """Set up logging configuration for the application."""
    setup_logging_with_level("DEBUG" if debug_mode else "INFO")


def setup_logging_with_level(log_level: str) -> None:
    """Set up logging with a specific level."""
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    logging.basicConfig(level=numeric_level, format=LOG_FORMAT, datefmt=LOG_DATE_FORMAT, force=True)


def set_quiet_mode(quiet: bool = False) -> None:
    """Set quiet mode by adjusting log levels."""
    if quiet:
        logging.getLogger().setLevel(logging.WARNING)


def create_event_bus() -> EventBus:
    """Create and configure the event bus for the application."""
    return EventBus()


def attach_progress_handlers(event_bus: EventBus, verbose: bool = False) -> LoggingSubscriber:
    """Attach a logging subscriber that reports progress and diagnostics."""
    return LoggingSubscriber(event_bus, verbose=verbose)


def create_config(
    dry_run: bool = False,
    test_id_attribute: str = "data-testid",
    dom_snapshot_file: str | None = None,
    emit_dom_setup: bool = False,
    target_root: str | None = None,
    file_patterns: list[str] | None = None,
    recurse: bool = True,
    backup_originals: bool = True,
    backup_root: str | None = None,
    target_suffix: str = "",
    target_extension: str | None = None,
    log_level: str = "INFO",
    max_file_size_mb: int = 10,
    fail_fast: bool = False,
    verbose: bool = False,
) -> MigrationConfig:
    """Create a validated configuration object from parameters."""
    config_dict: dict[str, Any] = {
        "dry_run": dry_run,
        "test_id_attribute": test_id_attribute,
        "dom_snapshot_file": dom_snapshot_file,
        "emit_dom_setup": emit_dom_setup,
        "target_root": target_root,
        "file_patterns": file_patterns or list(DEFAULT_FILE_PATTERNS),
        "recurse_directories": recurse,
        "backup_originals": backup_originals,
        "backup_root": backup_root,
        "target_suffix": target_suffix,
        "target_extension": target_extension,
        "log_level": log_level,
        "max_file_size_mb": max_file_size_mb,
        "fail_fast": fail_fast,
        "verbose": verbose,
    }
    return MigrationConfig.from_dict(config_dict)


def _files_matching(directory: str, file_patterns: list[str], recurse: bool) -> list[str]:
    matched: list[str] = []
    for pattern in file_patterns:
        full_pattern = os.path.join(directory, "**", pattern) if recurse else os.path.join(directory, pattern)
        matched.extend(path for path in glob.glob(full_pattern, recursive=recurse) if os.path.isfile(path))
    return sorted(set(matched))


def validate_source_files_with_patterns(
    source_files: list[str],
    root_directory: str | None,
    file_patterns: list[str],
    recurse: bool = True,
    max_file_size_mb: int = 10,
) -> list[str]:
    """Resolve CLI sources to a list of test files.

    Explicit files are always kept. Directories (given as sources or as
    ``root_directory``) are searched with ``file_patterns`` and only the
    files that use enzyme are kept.
    """
    detector = EnzymeFileDetector(max_file_size_mb)
    valid_files: list[str] = []

    directories = [root_directory] if root_directory and os.path.isdir(root_directory) else []
    for file_path in source_files:
        if os.path.isfile(file_path):
            valid_files.append(file_path)
        elif os.path.isdir(file_path):
            directories.append(file_path)
        else:
            logger.warning(f"Source not found: {file_path}")

    for directory in directories:
        for candidate in _files_matching(directory, file_patterns, recurse):
            try:
                if detector.is_enzyme_file(candidate):
                    valid_files.append(candidate)
            except (OSError, UnicodeDecodeError, MigrationError) as e:
                logger.debug(f"Skipping unreadable file {candidate}: {e}")

    return list(dict.fromkeys(valid_files))
