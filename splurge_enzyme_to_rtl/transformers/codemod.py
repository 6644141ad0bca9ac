"""Enzyme -> React Testing Library codemod engine.

:class:`EnzymeToRtlCodemod` runs the rewrite passes over one parsed
source file in a fixed order:

1. imports (``enzyme`` out, ``@testing-library/react`` in, relative
   specifiers made absolute)
2. render calls (``mount``/``shallow`` to ``render``)
3. wrapper references (``const wrapper = renderX()`` collapsed)
4. ``find`` selectors to ``screen`` queries
5. text assertions, ``simulate`` calls, ``exists`` assertions and chain
   methods
6. suggestion comments for everything that is left

Each pass works on the current tree generation, and later passes use the
values earlier ones return (the render-function name feeds the wrapper
pass, whose binding names feed the suggestion pass). The engine neither
reads nor writes files.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import asdict, dataclass, field
from typing import Any

from ..context import MigrationConfig
from ..diagnostics import Diagnostic, DiagnosticLevel, DiagnosticReporter
from ..tree import SourceTree
from .dom_snapshot import DomSnapshot
from .import_transformer import rewrite_imports
from .method_transformers import (
    convert_exists_assertions,
    convert_simulate_calls,
    convert_text_assertions,
    remove_chain_methods,
)
from .render_transformer import normalize_render_calls
from .selector_transformer import rewrite_find_selectors
from .suggestion_transformer import add_suggestions
from .wrapper_resolver import resolve_wrapper_references

_logger = logging.getLogger(__name__)


@dataclass
class CodemodStatistics:
    """Per-file counters of what each pass changed."""

    legacy_import_replaced: bool = False
    selectors_rewritten: int = 0
    text_assertions_converted: int = 0
    simulate_calls_converted: int = 0
    exists_assertions_converted: int = 0
    chain_calls_removed: int = 0
    suggestions_added: int = 0

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass
class CodemodOutcome:
    """Result of converting one file."""

    code: str
    render_function: str | None
    wrapper_names: list[str]
    diagnostics: list[Diagnostic] = field(default_factory=list)
    statistics: CodemodStatistics = field(default_factory=CodemodStatistics)

    @property
    def warnings(self) -> list[str]:
        return [str(d) for d in self.diagnostics if d.level is DiagnosticLevel.WARNING]


class EnzymeToRtlCodemod:
    """Runs the conversion passes over a :class:`SourceTree`.

    Args:
        test_id_attribute: DOM attribute that marks test ids in selectors.
        emit_dom_setup: Also insert jest-dom and ``configure`` setup lines.
        dom_snapshot: Rendered DOM used to sharpen ``find`` guidance.
    """

    def __init__(
        self,
        test_id_attribute: str = "data-testid",
        emit_dom_setup: bool = False,
        dom_snapshot: DomSnapshot | None = None,
    ) -> None:
        self.test_id_attribute = test_id_attribute
        self.emit_dom_setup = emit_dom_setup
        self.dom_snapshot = dom_snapshot

    @classmethod
    def from_config(cls, config: MigrationConfig, dom_snapshot: DomSnapshot | None = None) -> EnzymeToRtlCodemod:
        return cls(
            test_id_attribute=config.test_id_attribute,
            emit_dom_setup=config.emit_dom_setup,
            dom_snapshot=dom_snapshot,
        )

    def transform_tree(self, tree: SourceTree, reporter: DiagnosticReporter) -> CodemodOutcome:
        """Run every pass over ``tree`` in order and return the outcome.

        Raises:
            UnsupportedInputError: If the file uses both ``mount`` and
                ``shallow``.
            TransformationValidationError: If a pass produced source that no
                longer parses.
        """
        stats = CodemodStatistics()

        stats.legacy_import_replaced = rewrite_imports(
            tree,
            tree.file_path,
            reporter,
            test_id_attribute=self.test_id_attribute,
            emit_dom_setup=self.emit_dom_setup,
        )
        render_function = normalize_render_calls(tree, reporter)
        wrapper_names = resolve_wrapper_references(tree, render_function, reporter)

        stats.selectors_rewritten = rewrite_find_selectors(tree, self.test_id_attribute, reporter)
        stats.text_assertions_converted = convert_text_assertions(tree)
        stats.simulate_calls_converted = convert_simulate_calls(tree, reporter)
        stats.exists_assertions_converted = convert_exists_assertions(tree)
        stats.chain_calls_removed = remove_chain_methods(tree)

        stats.suggestions_added = add_suggestions(
            tree,
            wrapper_names,
            reporter,
            test_id_attribute=self.test_id_attribute,
            dom_snapshot=self.dom_snapshot,
        )

        _logger.info(f"Converted {tree.file_path or '<memory>'}: {stats.to_dict()}")
        return CodemodOutcome(
            code=tree.code,
            render_function=render_function,
            wrapper_names=wrapper_names,
            diagnostics=reporter.diagnostics,
            statistics=stats,
        )

    def transform(
        self,
        source: str,
        file_path: str | None = None,
        listener: Callable[[Diagnostic], None] | None = None,
    ) -> CodemodOutcome:
        """Parse ``source`` and convert it.

        Args:
            source: Test file contents.
            file_path: Original location, used for grammar selection,
                relative import resolution and diagnostics.
            listener: Called with every diagnostic as it is reported.

        Raises:
            ParseError: If ``source`` does not parse.
        """
        tree = SourceTree(source, file_path)
        return self.transform_tree(tree, DiagnosticReporter(file_path, listener))

    def transform_code(self, source: str, file_path: str | None = None) -> str:
        return self.transform(source, file_path).code
