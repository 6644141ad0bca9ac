"""Collector job for parsing and converting enzyme test files.

This job performs the initial phases of the migration pipeline:

- Parse the test source into a ``SourceTree``
- Run the enzyme -> RTL codemod passes over it
- Serialize the converted source for the output job

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import logging
from pathlib import Path
from typing import Any

from ..context import PipelineContext
from ..events import EventBus
from ..pipeline import Job, Task
from ..result import Result
from ..steps import GenerateCodeStep, ParseSourceStep, TransformEnzymeStep


class CollectorJob(Job[str, str]):
    """Turn enzyme test source into converted source code.

    The job coordinates the parse, transform and generate steps and emits
    lifecycle events via the provided :class:`EventBus`.
    """

    def __init__(self, event_bus: EventBus):
        super().__init__("collector", [self._create_conversion_task(event_bus)], event_bus)
        self._logger = logging.getLogger(f"{__name__}.{self.name}")

    def _create_conversion_task(self, event_bus: EventBus) -> Task[str, str]:
        steps: list[Any] = [
            ParseSourceStep("parse_source", event_bus),
            TransformEnzymeStep("transform_enzyme", event_bus),
            GenerateCodeStep("generate_code", event_bus),
        ]
        return Task("conversion", steps, event_bus)

    def execute(self, context: PipelineContext, initial_input: Any = None) -> Result[str]:
        """Run the collector job.

        Args:
            context: Pipeline execution context containing the source file
                path and configuration.
            initial_input: Source text. When omitted the job reads
                ``context.source_file``.

        Returns:
            A :class:`Result` containing the converted source code on
            success or a failure result with the exception.
        """
        self._logger.info(f"Starting collection job for {context.source_file}")

        if initial_input is None:
            source_path = Path(context.source_file)
            if not source_path.exists():
                return Result.failure(FileNotFoundError(f"Source file not found: {context.source_file}"))
            try:
                initial_input = source_path.read_text(encoding="utf-8")
            except (OSError, UnicodeDecodeError) as e:
                return Result.failure(e)

        result = super().execute(context, initial_input)

        if result.is_error():
            self._logger.error(f"Collection job failed for {context.source_file}: {result.error}")
        else:
            self._logger.info(f"Collection job completed for {context.source_file}")

        return result
