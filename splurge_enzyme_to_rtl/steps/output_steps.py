"""Output steps used by the migration pipeline.

This module contains steps that write generated code to disk or prepare the
generated artifacts for dry-run presentation to callers (for example the CLI).

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from ..context import PipelineContext
from ..helpers.path_utils import PathValidationError, ensure_parent_dir
from ..pipeline import Step
from ..result import Result


class WriteOutputStep(Step[str, str]):
    """Write generated code to the configured target file.

    This step either writes the provided source code to ``context.target_file``
    or, when running in dry-run mode, returns the generated code in the
    result metadata so callers can present it without filesystem writes.
    """

    def execute(self, context: PipelineContext, code: str) -> Result[str]:
        """Write the generated code or return it for dry-run.

        Returns:
            A :class:`Result` with the target file path string. The
            generated code is always included as ``generated_code`` in the
            metadata; ``dry_run`` is set when nothing was written.
        """
        if context.config.dry_run:
            return Result.success(
                str(context.target_file),
                metadata={
                    "dry_run": True,
                    "target_file": context.target_file,
                    "generated_code": code,
                },
            )

        try:
            ensure_parent_dir(context.target_file)
            with open(context.target_file, "w", encoding="utf-8") as f:
                f.write(code)
            return Result.success(
                str(context.target_file),
                metadata={"target_file": context.target_file, "generated_code": code},
            )
        except (OSError, PathValidationError) as e:
            return Result.failure(e)
