"""Selector rewriting pass: ``wrapper.find(sel)`` to ``screen`` queries.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging

from ..diagnostics import DiagnosticCode, DiagnosticReporter
from ..tree import NodeKind, Path, SourceTree, method_call
from ..tree.builders import call_text, first_argument, js_string
from .selectors import SelectorKind, classify

_logger = logging.getLogger(__name__)

FIND_CALLS = method_call("find")


def _is_negated_expect_argument(call: Path) -> bool:
    """True for the ``X`` in ``expect(X).not...``."""
    arguments = call.parent
    if arguments is None or arguments.type != NodeKind.ARGUMENTS.value:
        return False
    expect = arguments.parent
    if expect is None or expect.type != NodeKind.CALL_EXPRESSION.value:
        return False
    callee = expect.field("function")
    if callee is None or callee.text != "expect":
        return False
    member = expect.parent
    if member is None or member.type != NodeKind.MEMBER_EXPRESSION.value:
        return False
    obj = member.field("object")
    prop = member.field("property")
    return obj == expect and prop is not None and prop.text == "not"


def screen_query(call: Path, test_id_attribute: str) -> str | None:
    """Replacement text for one ``find`` call, or ``None`` to leave it alone."""
    selector = classify(first_argument(call), test_id_attribute)
    if selector.kind is SelectorKind.TEST_ID:
        query = "queryByTestId" if _is_negated_expect_argument(call) else "getByTestId"
        return call_text(f"screen.{query}", js_string(selector.value))
    if selector.kind is SelectorKind.ROLE:
        return call_text("screen.getByRole", js_string(selector.value))
    return None


def rewrite_find_selectors(tree: SourceTree, test_id_attribute: str, reporter: DiagnosticReporter) -> int:
    """Replace ``find`` calls whose selector names a test id or an ARIA role.

    Other selectors are left for the suggestion pass.

    Returns:
        Number of ``find`` calls rewritten.
    """

    def rewrite() -> None:
        tree.find(FIND_CALLS).replace_with(lambda call: screen_query(call, test_id_attribute))

    rewritten = tree.rewrite_until_stable(rewrite)

    for call in tree.find(FIND_CALLS):
        argument = first_argument(call)
        reporter.info(
            DiagnosticCode.UNCONVERTED_SELECTOR,
            f"Selector {argument.text if argument is not None else '<none>'} has no direct screen query",
            line=call.line,
        )

    _logger.debug(f"Rewrote {rewritten} find() call(s)")
    return rewritten
