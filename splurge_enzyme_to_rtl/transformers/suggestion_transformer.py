"""Suggestion annotation pass.

Adds a ``// Conversion suggestion:`` line above every statement that
still uses the enzyme wrapper API after the mechanical passes ran.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
import re

from ..diagnostics import DiagnosticReporter
from ..tree import NodeKind, Path, Pattern, SourceTree, identifier, method_call
from ..tree.builders import argument_text, first_argument, method_name, string_value
from .dom_snapshot import DomSnapshot
from .suggestions import method_suggestion, selector_suggestion, simulate_suggestion

_logger = logging.getLogger(__name__)

_ANY_METHOD = re.compile(r"[\w$]+")

ENCLOSING_STATEMENTS = Pattern(
    kind=(
        NodeKind.LEXICAL_DECLARATION,
        NodeKind.VARIABLE_DECLARATION,
        NodeKind.EXPRESSION_STATEMENT,
        NodeKind.RETURN_STATEMENT,
    )
)


def enclosing_statement(call: Path) -> Path | None:
    return call.closest(ENCLOSING_STATEMENTS)


def _comment_block_above(statement: Path) -> list[str]:
    """``//`` comment lines directly above ``statement``, nearest first."""
    block = []
    for line in statement.tree.lines_before(statement.start_byte):
        if not line.startswith("//"):
            break
        block.append(line)
    return block


class _Annotator:
    """Inserts comments for one batch, never twice above the same statement."""

    def __init__(self, tree: SourceTree) -> None:
        self.tree = tree
        self.inserted = 0
        self._pending: set[tuple[int, str]] = set()

    def annotate(self, call: Path, comment: str | None) -> None:
        if comment is None:
            return
        statement = enclosing_statement(call)
        if statement is None:
            return
        key = (statement.start_byte, comment)
        if key in self._pending or comment in _comment_block_above(statement):
            return
        self._pending.add(key)
        statement.insert_before(comment)
        self.inserted += 1


def _wrapper_method_comment(call: Path, wrapper_name: str) -> str | None:
    method = method_name(call)
    if method is None:
        return None
    argument = first_argument(call)
    return method_suggestion(wrapper_name, method, argument.text if argument is not None else None)


def _find_comment(call: Path, test_id_attribute: str, dom_snapshot: DomSnapshot | None) -> str:
    argument = first_argument(call)
    return selector_suggestion(argument_text(call), string_value(argument), test_id_attribute, dom_snapshot)


def add_suggestions(
    tree: SourceTree,
    wrapper_names: list[str],
    reporter: DiagnosticReporter,
    test_id_attribute: str = "data-testid",
    dom_snapshot: DomSnapshot | None = None,
) -> int:
    """Annotate the remaining enzyme calls with migration guidance.

    Three kinds of calls are annotated: methods called directly on a
    wrapper binding (other than ``find``), any ``find`` call the selector
    pass left alone and any ``simulate`` call with an event that has no
    ``userEvent`` equivalent. A call outside any statement is skipped, as
    is a comment already present in the block directly above the
    statement.

    Args:
        tree: Tree to annotate.
        wrapper_names: Names returned by the wrapper-reference pass.
        reporter: Diagnostic sink for the file.
        test_id_attribute: Attribute that marks test ids in selectors.
        dom_snapshot: Optional rendered DOM used for ``find`` guidance.

    Returns:
        Number of comments inserted.
    """
    annotator = _Annotator(tree)

    with tree.batch():
        for name in wrapper_names:
            for call in tree.find(method_call(_ANY_METHOD, receiver=identifier(name))):
                if method_name(call) == "find":
                    continue
                annotator.annotate(call, _wrapper_method_comment(call, name))

        for call in tree.find(method_call("find")):
            annotator.annotate(call, _find_comment(call, test_id_attribute, dom_snapshot))

        for call in tree.find(method_call("simulate")):
            annotator.annotate(call, simulate_suggestion(argument_text(call)))

    _logger.debug(f"Inserted {annotator.inserted} suggestion comment(s) in {reporter.source_file or '<memory>'}")
    return annotator.inserted
