"""Render-call normalization pass.

Turns enzyme's ``mount(...)``/``shallow(...)`` calls into RTL's
``render(...)`` and works out which name the test file uses to render
its component, so later passes can follow the wrapper it returns.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging

from ..diagnostics import DiagnosticCode, DiagnosticReporter
from ..exceptions import UnsupportedInputError
from ..tree import NodeKind, Path, Pattern, SourceTree, call_to
from ..tree.patterns import VARIABLE_DECLARATIONS

RENDER_PRIMITIVES = ("shallow", "mount")
RTL_RENDER = "render"
RENAMED_RENDER = "renderFunc"

_logger = logging.getLogger(__name__)

_FUNCTION_DECLARATION = Pattern(kind=NodeKind.FUNCTION_DECLARATION)
_VARIABLE_DECLARATION = Pattern(kind=VARIABLE_DECLARATIONS)
_ASSIGNMENT = Pattern(kind=NodeKind.ASSIGNMENT_EXPRESSION)


def _first_declarator(declaration: Path) -> Path | None:
    for child in declaration.named_children:
        if child.type == NodeKind.VARIABLE_DECLARATOR.value:
            return child
    return None


def _binding_identifier(call: Path) -> Path | None:
    """Identifier bound by the nearest declaration around ``call``.

    Function declarations win over variable declarations, which win over
    assignments.
    """
    function = call.closest(_FUNCTION_DECLARATION)
    if function is not None:
        name = function.field("name")
        if name is not None:
            return name

    declaration = call.closest(_VARIABLE_DECLARATION)
    if declaration is not None:
        declarator = _first_declarator(declaration)
        name = declarator.field("name") if declarator is not None else None
        if name is not None and name.type == NodeKind.IDENTIFIER.value:
            return name

    assignment = call.closest(_ASSIGNMENT)
    if assignment is not None:
        left = assignment.field("left")
        if left is not None and left.type == NodeKind.IDENTIFIER.value:
            return left

    return None


def normalize_render_calls(tree: SourceTree, reporter: DiagnosticReporter) -> str | None:
    """Rewrite ``mount``/``shallow`` calls to ``render`` and return the render-function name.

    A user helper already called ``render`` is renamed to ``renderFunc``
    at its declaration and at every call site, so it cannot collide with
    the imported RTL ``render``.

    Returns:
        The identifier bound around the first legacy render call, or
        ``None`` when the file has no such call or the call is unbound.

    Raises:
        UnsupportedInputError: If the file uses both ``mount`` and
            ``shallow``.
    """
    matches = {primitive: tree.find(call_to(primitive)).paths() for primitive in RENDER_PRIMITIVES}
    if all(matches.values()):
        raise UnsupportedInputError(
            "File uses both mount and shallow; convert one of them by hand first", tree.file_path
        )

    primitive = next((name for name in RENDER_PRIMITIVES if matches[name]), None)
    if primitive is None:
        reporter.warning(DiagnosticCode.MISSING_RENDER_CALL, "No mount or shallow call found")
        return None

    calls = matches[primitive]
    first_line = calls[0].line
    binding = _binding_identifier(calls[0])
    render_function = binding.text if binding is not None else None

    with tree.batch():
        if render_function == RTL_RENDER:
            render_function = RENAMED_RENDER
            binding.replace_with(RENAMED_RENDER)
            for call in tree.find(call_to(RTL_RENDER)):
                call.field("function").replace_with(RENAMED_RENDER)
        for call in calls:
            call.field("function").replace_with(RTL_RENDER)

    _logger.debug(f"Rewrote {len(calls)} {primitive}() call(s); render function is {render_function!r}")

    if render_function is None:
        reporter.warning(
            DiagnosticCode.UNBOUND_RENDER_CALL,
            f"{primitive}() result is not bound to a name; wrapper references cannot be traced",
            line=first_line,
        )
    return render_function

