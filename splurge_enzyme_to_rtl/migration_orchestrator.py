"""Main migration orchestrator that coordinates all jobs.

This module provides the high-level orchestration of the migration:
it resolves target paths, loads the optional DOM snapshot, reads the
source file and runs the collector and output jobs for each file.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from pathlib import Path
from typing import Any

from .context import MigrationConfig, PipelineContext
from .detectors import EnzymeFileDetector
from .events import EventBus, LoggingSubscriber
from .exceptions import MigrationError, ValidationError
from .helpers.path_utils import PathValidationError, build_target_path, validate_source_path, validate_target_path
from .jobs import CollectorJob, OutputJob
from .pipeline import Pipeline
from .result import Result
from .steps.parse_steps import DOM_SNAPSHOT_KEY
from .transformers import DomSnapshot


class MigrationOrchestrator:
    """Main orchestrator for enzyme to React Testing Library migration.

    The orchestrator wires together jobs and pipelines, exposes file and
    directory migration helpers, and publishes lifecycle events on the
    event bus.
    """

    def __init__(self, event_bus: EventBus | None = None) -> None:
        """Initialize the migration orchestrator.

        Args:
            event_bus: Optional external event bus to use. If None, creates a new one.
        """
        self.event_bus = event_bus or EventBus()
        self.logger_subscriber = LoggingSubscriber(self.event_bus)
        self._logger = logging.getLogger(__name__)

        self.collector_job = CollectorJob(self.event_bus)
        self.output_job = OutputJob(self.event_bus)

        self._logger.info("Migration orchestrator initialized")

    def _target_file(self, source: Path, config: MigrationConfig) -> str:
        target = build_target_path(source, config.target_root, config.target_suffix, config.target_extension)
        return str(validate_target_path(target))

    def _load_dom_snapshot(self, config: MigrationConfig) -> DomSnapshot | None:
        if not config.dom_snapshot_file:
            return None
        snapshot = DomSnapshot.from_file(config.dom_snapshot_file)
        self._logger.debug(f"Loaded DOM snapshot with {len(snapshot)} element(s) from {config.dom_snapshot_file}")
        return snapshot

    def create_context(self, source_file: str, config: MigrationConfig) -> PipelineContext:
        """Build the pipeline context for ``source_file``.

        Raises:
            PathValidationError: If the source or target path is invalid.
            OSError: If the configured DOM snapshot cannot be read.
        """
        validated_source = validate_source_path(source_file)
        context = PipelineContext.create(
            source_file=str(validated_source),
            target_file=self._target_file(validated_source, config),
            config=config,
        )
        snapshot = self._load_dom_snapshot(config)
        if snapshot is not None:
            context = context.with_metadata(DOM_SNAPSHOT_KEY, snapshot)
        return context

    def _read_source(self, source_path: Path, config: MigrationConfig) -> str:
        size = source_path.stat().st_size
        if size > config.max_file_size_mb * 1024 * 1024:
            raise ValidationError(
                f"File is larger than {config.max_file_size_mb} MB: {source_path}", "file_size", str(source_path)
            )
        source_code = source_path.read_text(encoding="utf-8")
        self._logger.debug(f"Read source code: {len(source_code)} characters")
        return source_code

    def migrate_file(self, source_file: str, config: MigrationConfig | None = None) -> Result[str]:
        """Migrate a single enzyme test file.

        Args:
            source_file: Path to the source test file.
            config: Optional ``MigrationConfig`` to control behavior.

        Returns:
            ``Result`` containing the path of the converted file. The
            converted code is in ``metadata["generated_code"]`` and the
            codemod diagnostics are the result's warnings.
        """
        if config is None:
            config = MigrationConfig()

        self._logger.info(f"Starting migration of {source_file}")

        try:
            context = self.create_context(source_file, config)
            source_code = self._read_source(Path(context.source_file), config)
        except (MigrationError, OSError, UnicodeDecodeError) as e:
            self._logger.error(f"Cannot migrate {source_file}: {e}")
            return Result.failure(e)

        pipeline = self._create_migration_pipeline()
        result = pipeline.execute(context, source_code)

        if result.is_error():
            self._logger.error(f"Migration failed for {source_file}: {result.error}")
        else:
            self._logger.info(f"Migration completed for {source_file} -> {result.data}")

        return result

    def convert_source(
        self, source_code: str, source_file: str = "<memory>.tsx", config: MigrationConfig | None = None
    ) -> Result[str]:
        """Convert ``source_code`` without touching the filesystem.

        ``source_file`` selects the grammar and anchors relative imports.

        Returns:
            ``Result`` containing the converted source code.
        """
        if config is None:
            config = MigrationConfig()

        context = PipelineContext.create(source_file=source_file, target_file=source_file, config=config)
        try:
            snapshot = self._load_dom_snapshot(config)
        except OSError as e:
            return Result.failure(e)
        if snapshot is not None:
            context = context.with_metadata(DOM_SNAPSHOT_KEY, snapshot)

        pipeline: Pipeline[str, str] = Pipeline("conversion", [self.collector_job], self.event_bus)
        return pipeline.execute(context, source_code)

    def find_enzyme_files(self, source_dir: Path, config: MigrationConfig) -> list[str]:
        """Files under ``source_dir`` matching the configured patterns that use enzyme."""
        detector = EnzymeFileDetector(config.max_file_size_mb)
        glob = source_dir.rglob if config.recurse_directories else source_dir.glob

        candidates: set[Path] = set()
        for pattern in config.file_patterns:
            candidates.update(path for path in glob(pattern) if path.is_file())

        enzyme_files = []
        for candidate in sorted(candidates):
            try:
                if detector.is_enzyme_file(candidate):
                    enzyme_files.append(str(candidate))
            except (OSError, UnicodeDecodeError, MigrationError) as e:
                self._logger.debug(f"Skipping unreadable file {candidate}: {e}")
        return enzyme_files

    def migrate_directory(self, source_dir: str, config: MigrationConfig | None = None) -> Result[list[str]]:
        """Migrate all enzyme test files under a directory.

        Args:
            source_dir: Path to the source directory.
            config: Optional ``MigrationConfig`` to control behavior.

        Returns:
            ``Result`` containing a list of migrated file paths on
            success. On partial failures a ``warning`` result is
            returned with metadata listing failed files.
        """
        if config is None:
            config = MigrationConfig()

        try:
            source_path = validate_source_path(source_dir)
        except PathValidationError as e:
            return Result.failure(e)

        if not source_path.is_dir():
            return Result.failure(ValueError(f"Path is not a directory: {source_dir}"))

        self._logger.info(f"Starting migration of directory {source_dir}")

        enzyme_files = self.find_enzyme_files(source_path, config)
        if not enzyme_files:
            self._logger.warning(f"No enzyme test files found in {source_dir}")
            return Result.success([])

        self._logger.info(f"Found {len(enzyme_files)} enzyme test files to migrate")

        migrated: list[str] = []
        failed: list[str] = []
        generated: dict[str, Any] = {}

        for enzyme_file in enzyme_files:
            result = self.migrate_file(enzyme_file, config)

            if result.is_error():
                failed.append(enzyme_file)
                self._logger.error(f"Failed to migrate {enzyme_file}: {result.error}")
                if config.fail_fast:
                    return Result.failure(result.error, {"failed_files": failed, "migrated_files": migrated})
                continue

            migrated.append(str(result.data))
            if "generated_code" in result.metadata:
                generated[str(result.data)] = result.metadata["generated_code"]

        self._logger.info(f"Migration completed: {len(migrated)} successful, {len(failed)} failed")

        if failed:
            return Result.warning(
                migrated,
                [f"Failed to migrate {len(failed)} files"],
                metadata={"failed_files": failed, "generated_code": generated},
            )

        return Result.success(migrated, metadata={"generated_code": generated})

    def _create_migration_pipeline(self) -> Pipeline[str, str]:
        """Create the collector -> output migration pipeline."""
        jobs: list[Any] = [self.collector_job, self.output_job]
        return Pipeline("migration", jobs, self.event_bus)
