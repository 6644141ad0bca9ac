"""Parsing and transformation steps for the migration pipeline.

This module exposes pipeline steps that parse a test file into a
:class:`~splurge_enzyme_to_rtl.tree.SourceTree`, run the enzyme -> RTL
codemod over it and serialize the converted source for the output steps.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import time

from ..context import PipelineContext
from ..diagnostics import Diagnostic, DiagnosticReporter
from ..events import DiagnosticEvent, TransformationCompletedEvent
from ..exceptions import MigrationError, ParseError
from ..pipeline import Step
from ..result import Result
from ..transformers import DomSnapshot, EnzymeToRtlCodemod
from ..tree import SourceTree

DOM_SNAPSHOT_KEY = "dom_snapshot"


class ParseSourceStep(Step[str, SourceTree]):
    """Parse JavaScript/TypeScript test source into a ``SourceTree``.

    The grammar is chosen from ``context.source_file``: plain ``.ts``
    files use the TypeScript grammar, everything else TSX.
    """

    def execute(self, context: PipelineContext, source_code: str) -> Result[SourceTree]:
        """Parse source code into a ``SourceTree``.

        Returns:
            A success :class:`Result` containing the tree, or a failure
            result carrying the :class:`ParseError`.
        """
        try:
            return Result.success(SourceTree(source_code, context.source_file))
        except ParseError as e:
            return Result.failure(e)


class TransformEnzymeStep(Step[SourceTree, SourceTree]):
    """Run the enzyme -> React Testing Library codemod over a parsed tree.

    Diagnostics reported by the passes are published as
    :class:`DiagnosticEvent` instances while the codemod runs and the
    warning-level ones become the warnings of the returned ``Result``. A
    :class:`TransformationCompletedEvent` summarizes what changed.
    """

    def execute(self, context: PipelineContext, tree: SourceTree) -> Result[SourceTree]:
        dom_snapshot = context.metadata.get(DOM_SNAPSHOT_KEY)
        if dom_snapshot is not None and not isinstance(dom_snapshot, DomSnapshot):
            dom_snapshot = DomSnapshot(str(dom_snapshot))

        def publish(diagnostic: Diagnostic) -> None:
            self.event_bus.publish(
                DiagnosticEvent(timestamp=time.time(), run_id=context.run_id, context=context, diagnostic=diagnostic)
            )

        codemod = EnzymeToRtlCodemod.from_config(context.config, dom_snapshot)
        reporter = DiagnosticReporter(context.source_file, publish)

        try:
            outcome = codemod.transform_tree(tree, reporter)
        except MigrationError as e:
            return Result.failure(e)

        self.event_bus.publish(
            TransformationCompletedEvent(
                timestamp=time.time(),
                run_id=context.run_id,
                context=context,
                render_function=outcome.render_function,
                wrapper_names=tuple(outcome.wrapper_names),
                statistics=outcome.statistics.to_dict(),
            )
        )

        metadata = {
            "render_function": outcome.render_function,
            "wrapper_names": outcome.wrapper_names,
            "statistics": outcome.statistics.to_dict(),
        }
        if outcome.warnings:
            return Result.warning(tree, outcome.warnings, metadata)
        return Result.success(tree, metadata)


class GenerateCodeStep(Step[SourceTree, str]):
    """Return the current source text of a transformed tree."""

    def execute(self, context: PipelineContext, tree: SourceTree) -> Result[str]:
        return Result.success(tree.code)
