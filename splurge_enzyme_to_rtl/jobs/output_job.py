"""Output job for writing converted files to disk.

This job handles the final phase of the pipeline: writing the converted
code, creating a backup when the original would be overwritten, and
emitting the completion events used by callers.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
import shutil
from pathlib import Path
from typing import Any

from ..context import PipelineContext
from ..events import EventBus
from ..pipeline import Job, Task
from ..result import Result
from ..steps import WriteOutputStep

BACKUP_SUFFIX = ".backup"


def backup_path_for(source_file: str | Path, backup_root: str | None = None) -> Path:
    """Where the backup of ``source_file`` goes: next to it, or flat under ``backup_root``."""
    source_path = Path(source_file)
    directory = Path(backup_root) if backup_root else source_path.parent
    return directory / f"{source_path.name}{BACKUP_SUFFIX}"


class OutputJob(Job[str, str]):
    """Write converted test files to the filesystem.

    When ``backup_originals`` is set and the target is the source file
    itself, the original is copied to ``<name>.backup`` before it is
    overwritten. Dry runs never touch the filesystem.
    """

    def __init__(self, event_bus: EventBus):
        super().__init__("output", [self._create_output_task(event_bus)], event_bus)
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _create_output_task(self, event_bus: EventBus) -> Task[Any, Any]:
        steps: list[Any] = [WriteOutputStep("write_output", event_bus)]
        return Task("output", steps, event_bus)

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[str]:
        """Run the output job and write the converted file.

        Args:
            context: Pipeline execution context containing ``target_file`` and
                configuration such as backup settings.
            initial_input: Converted source code from the collector job.

        Returns:
            A :class:`Result` containing the path written (as a string) on
            success or a failure result when the backup or write fails.
        """
        self._logger.info(f"Starting output job for {context.target_file}")

        overwrites_source = Path(context.target_file).resolve() == Path(context.source_file).resolve()
        if context.config.backup_originals and overwrites_source and not context.config.dry_run:
            try:
                self._create_backup(context.source_file, context.config.backup_root)
            except OSError as e:
                self._logger.error(f"Failed to create backup for {context.source_file}: {e}")
                return Result.failure(e, {"job": self.name, "context": context.run_id})
        else:
            self._logger.debug(
                f"Skipping backup: dry_run={context.config.dry_run}, "
                f"backup={context.config.backup_originals}, overwrites_source={overwrites_source}"
            )

        result = super().execute(context, initial_input)

        if result.is_error():
            self._logger.error(f"Output job failed for {context.target_file}: {result.error}")
        elif context.config.dry_run:
            self._logger.info(f"Dry-run: would write output to {context.target_file}")
        else:
            self._logger.info(f"Output job completed successfully: {context.target_file}")

        return result

    def _create_backup(self, source_file: str, backup_root: str | None = None) -> None:
        """Copy ``source_file`` to its backup location unless a backup already exists."""
        backup_path = backup_path_for(source_file, backup_root)
        backup_path.parent.mkdir(parents=True, exist_ok=True)

        if backup_path.exists():
            self._logger.info(f"Backup already exists, skipping: {backup_path}")
            return

        shutil.copy2(source_file, backup_path)
        self._logger.info(f"Created backup: {backup_path}")
