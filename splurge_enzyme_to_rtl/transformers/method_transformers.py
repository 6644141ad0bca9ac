"""Method-call normalization passes.

Each pass rewrites one family of enzyme wrapper calls that has a direct
RTL counterpart:

* ``expect(x.text()).toBe(...)`` assertions become ``toHaveTextContent``
* ``x.simulate("click")`` and the mouse-hover events become ``userEvent`` calls
* ``expect(x.exists()).toBe(true)`` and friends become ``toBeInTheDocument``
* ``.first()``, ``.hostNodes()`` and ``.update()`` are dropped from chains

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
import re

from ..diagnostics import DiagnosticCode, DiagnosticReporter
from ..tree import NodeKind, Path, Pattern, SourceTree, call_to, method_call
from ..tree.builders import argument_text, call_text, first_argument, method_name, receiver_of, string_value
from .import_transformer import USER_EVENT_IMPORT, USER_EVENT_MODULE, has_import

_logger = logging.getLogger(__name__)

TEXT_MATCHERS = ("toEqual", "toContain", "toBe")

SIMULATE_EVENTS = {
    "click": "click",
    "mouseenter": "hover",
    "mouseEnter": "hover",
    "mouseleave": "unhover",
    "mouseLeave": "unhover",
}

EXISTS_MATCHERS = {
    "toBe": True,
    "toEqual": True,
    "toBeTruthy": False,
    "toBeFalsy": False,
}

CHAIN_METHODS = ("first", "hostNodes")

_TEXT_CALL = method_call("text", argc=0)
_EXISTS_CALL = method_call("exists", argc=0)
_BOOLEAN = Pattern(kind=(NodeKind.TRUE, NodeKind.FALSE))


def _expect_argument(expect: Path | None, pattern: Pattern) -> Path | None:
    """Sole argument of ``expect(...)`` when it matches ``pattern``."""
    if expect is None or not call_to("expect", argc=1).matches(expect):
        return None
    argument = first_argument(expect)
    return argument if pattern.matches(argument) else None


def convert_text_assertions(tree: SourceTree) -> int:
    """Rewrite ``expect(X.text()).toEqual|toContain|toBe(Y)`` to ``expect(X).toHaveTextContent(Y)``."""

    def build(assertion: Path) -> str | None:
        expect = assertion.field("function").field("object")
        text_call = _expect_argument(expect, _TEXT_CALL)
        if text_call is None:
            return None
        receiver = receiver_of(text_call)
        subject = expect.text_with([(text_call, receiver.text)])
        return f"{subject}.toHaveTextContent({argument_text(assertion)})"

    converted = tree.find(method_call(re.compile("|".join(TEXT_MATCHERS)))).replace_with(build)
    _logger.debug(f"Converted {converted} text assertion(s)")
    return converted


def convert_simulate_calls(tree: SourceTree, reporter: DiagnosticReporter) -> int:
    """Rewrite ``X.simulate(event)`` to ``userEvent.<method>(X)`` for mapped events.

    The ``userEvent`` default import is added once when at least one call
    was rewritten and the file does not import it already.

    Returns:
        Number of calls rewritten.
    """
    simulate = method_call("simulate", args=(Pattern(kind=NodeKind.STRING),))

    def build(call: Path) -> str | None:
        method = SIMULATE_EVENTS.get(string_value(first_argument(call)))
        receiver = receiver_of(call)
        if method is None or receiver is None:
            return None
        return call_text(f"userEvent.{method}", receiver.text)

    converted = tree.rewrite_until_stable(lambda: tree.find(simulate).replace_with(build))

    for call in tree.find(method_call("simulate")):
        event = first_argument(call)
        reporter.info(
            DiagnosticCode.UNMAPPED_SIMULATE_EVENT,
            f"simulate({event.text if event is not None else ''}) has no userEvent equivalent",
            line=call.line,
        )

    if converted and not has_import(tree, USER_EVENT_MODULE):
        tree.insert_at_top(USER_EVENT_IMPORT)

    _logger.debug(f"Converted {converted} simulate() call(s)")
    return converted


def _exists_replacement(assertion: Path) -> str | None:
    matcher = method_name(assertion)
    expected_true = True
    if EXISTS_MATCHERS[matcher]:
        arguments = assertion.field("arguments").named_children
        if len(arguments) != 1 or not _BOOLEAN.matches(arguments[0]):
            return None
        expected_true = arguments[0].type == NodeKind.TRUE.value
    else:
        if argument_text(assertion):
            return None
        expected_true = matcher == "toBeTruthy"

    subject = assertion.field("function").field("object")
    if subject.type == NodeKind.MEMBER_EXPRESSION.value and subject.field("property").text == "not":
        expected_true = not expected_true
        subject = subject.field("object")

    exists_call = _expect_argument(subject, _EXISTS_CALL)
    if exists_call is None:
        return None

    expect = subject.text_with([(exists_call, receiver_of(exists_call).text)])
    negation = "" if expected_true else ".not"
    return f"{expect}{negation}.toBeInTheDocument()"


def convert_exists_assertions(tree: SourceTree) -> int:
    """Rewrite ``expect(X.exists())`` boolean assertions to ``toBeInTheDocument``.

    Handles ``toBe(true|false)``, ``toEqual(true|false)``, ``toBeTruthy()``
    and ``toBeFalsy()``, with or without a ``.not`` in front of the matcher.
    """
    matchers = method_call(re.compile("|".join(EXISTS_MATCHERS)))
    converted = tree.find(matchers).replace_with(_exists_replacement)
    _logger.debug(f"Converted {converted} exists() assertion(s)")
    return converted


def remove_chain_methods(tree: SourceTree) -> int:
    """Drop ``.first()``, ``.hostNodes()`` and ``.update()`` from call chains.

    A statement that is only ``wrapper.update();`` on a plain identifier is
    deleted outright; any other ``update()`` is replaced by its receiver.
    """
    chained = method_call(re.compile("|".join(CHAIN_METHODS)), argc=0)
    update = method_call("update", argc=0)

    def rewrite() -> None:
        tree.find(chained).replace_with(lambda call: receiver_of(call).text)
        for call in tree.find(update):
            receiver = receiver_of(call)
            parent = call.parent
            if parent.type == NodeKind.EXPRESSION_STATEMENT.value and receiver.type == NodeKind.IDENTIFIER.value:
                parent.remove()
            else:
                call.replace_with(receiver.text)

    removed = tree.rewrite_until_stable(rewrite)
    _logger.debug(f"Removed {removed} chained call(s)")
    return removed
