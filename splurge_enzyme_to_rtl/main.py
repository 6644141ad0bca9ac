"""Programmatic API for splurge_enzyme_to_rtl.

``migrate`` converts files on disk and is what the CLI calls;
``convert_source`` converts a source string in memory.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

from collections.abc import Iterable

from .context import MigrationConfig
from .events import EventBus
from .migration_orchestrator import MigrationOrchestrator
from .result import Result


def migrate(
    source_files: Iterable[str] | str,
    config: MigrationConfig | None = None,
    event_bus: EventBus | None = None,
) -> Result[list[str]]:
    """Migrate one or more source files programmatically.

    Args:
        source_files: Iterable of file paths (or single path string).
        config: Optional ``MigrationConfig`` to control migration behavior.
        event_bus: Optional event bus for progress and diagnostic events.

    Returns:
        ``Result`` containing the list of target file paths. The converted
        code per target is in ``metadata["generated_code"]`` and the
        codemod diagnostics of every file are the result's warnings. With
        ``fail_fast`` the first failing file stops the run; otherwise
        failures are listed in ``metadata["failed_files"]``.
    """
    files = [source_files] if isinstance(source_files, str) else list(source_files)

    if config is None:
        config = MigrationConfig()

    orchestrator = MigrationOrchestrator(event_bus)
    written: list[str] = []
    warnings: list[str] = []
    generated: dict[str, str] = {}
    failed: dict[str, str] = {}

    for src in files:
        res = orchestrator.migrate_file(src, config)

        if res.is_error():
            if config.fail_fast:
                return Result.failure(res.error, {"failed_files": [src]})
            failed[src] = str(res.error)
            continue

        target = str(res.data)
        written.append(target)
        warnings.extend(res.warnings)
        if "generated_code" in res.metadata:
            generated[target] = res.metadata["generated_code"]

    if failed and not written:
        first = next(iter(failed))
        return Result.failure(RuntimeError(f"Failed to migrate {first}: {failed[first]}"), {"failed_files": list(failed)})

    metadata = {"generated_code": generated, "failed_files": list(failed)}
    if failed:
        warnings.extend(f"Failed to migrate {src}: {error}" for src, error in failed.items())
    if warnings:
        return Result.warning(written, warnings, metadata)
    return Result.success(written, metadata)


def convert_source(
    source_code: str,
    file_path: str = "<memory>.tsx",
    config: MigrationConfig | None = None,
) -> Result[str]:
    """Convert enzyme test source held in memory.

    Args:
        source_code: Test file contents.
        file_path: Name used to pick the grammar and to resolve relative
            imports.
        config: Optional ``MigrationConfig``.

    Returns:
        ``Result`` containing the converted code, with the codemod
        diagnostics as warnings.
    """
    return MigrationOrchestrator().convert_source(source_code, file_path, config)
