"""Wrapper-reference resolution pass.

Enzyme tests keep the wrapper returned by the render helper in a local
(``const wrapper = renderComponent()``) and call wrapper methods on it.
RTL's ``render`` result is not used that way, so this pass collapses
those bindings to bare calls and reports the names that used to hold a
wrapper. The suggestion pass uses the names to flag the remaining
wrapper method calls.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging

from ..diagnostics import DiagnosticCode, DiagnosticReporter
from ..tree import NodeKind, Path, Pattern, SourceTree
from ..tree.builders import unwrap_await
from ..tree.patterns import VARIABLE_DECLARATIONS

_logger = logging.getLogger(__name__)


def _declarators(declaration: Path) -> list[Path]:
    return [child for child in declaration.named_children if child.type == NodeKind.VARIABLE_DECLARATOR.value]


def _sole_declarator(declaration: Path) -> Path | None:
    declarators = _declarators(declaration)
    return declarators[0] if len(declarators) == 1 else None


def _is_call(path: Path | None, callee: str | None = None) -> bool:
    """True for ``callee(...)`` or ``await callee(...)``; any call when ``callee`` is None."""
    inner = unwrap_await(path)
    if inner is None or inner.type != NodeKind.CALL_EXPRESSION.value:
        return False
    if callee is None:
        return True
    function = inner.field("function")
    return function is not None and function.type == NodeKind.IDENTIFIER.value and function.text == callee


def _declaration_value(declaration: Path) -> tuple[Path, Path] | None:
    parent = declaration.parent
    if parent is None or parent.type == NodeKind.EXPORT_STATEMENT.value:
        return None
    declarator = _sole_declarator(declaration)
    if declarator is None:
        return None
    name = declarator.field("name")
    value = declarator.field("value")
    if name is None or value is None:
        return None
    return name, value


def _collapse_declaration(declaration: Path, value: Path) -> None:
    declaration.replace_with(f"{value.text};")


def _remove_uninitialized(tree: SourceTree, names: set[str]) -> None:
    """Drop ``let x;`` declarators for ``names``; a lone declarator takes its declaration along."""
    for declaration in tree.find(Pattern(kind=VARIABLE_DECLARATIONS)):
        declarators = _declarators(declaration)
        doomed = [
            d
            for d in declarators
            if d.field("value") is None and d.field("name") is not None and d.field("name").text in names
        ]
        if not doomed:
            continue
        if len(doomed) == len(declarators):
            declaration.remove()
            continue
        keep = [d.text for d in declarators if d not in doomed]
        keyword = declaration.text.split(None, 1)[0]
        declaration.replace_with(f"{keyword} {', '.join(keep)};")


def _bindings_of_calls(tree: SourceTree, render_function: str) -> list[str]:
    """Patterns (a) and (b): results of calling the render function."""
    names: list[str] = []
    assigned: set[str] = set()

    with tree.batch():
        for declaration in tree.find(Pattern(kind=VARIABLE_DECLARATIONS)):
            parts = _declaration_value(declaration)
            if parts is None:
                continue
            name, value = parts
            if name.type == NodeKind.IDENTIFIER.value and _is_call(value, render_function):
                _collapse_declaration(declaration, value)
                names.append(name.text)

    with tree.batch():
        for assignment in tree.find(Pattern(kind=NodeKind.ASSIGNMENT_EXPRESSION)):
            left = assignment.field("left")
            right = assignment.field("right")
            if left is None or left.type != NodeKind.IDENTIFIER.value or not _is_call(right, render_function):
                continue
            assignment.replace_with(right.text)
            names.append(left.text)
            assigned.add(left.text)
        _remove_uninitialized(tree, assigned)

    return names


def _bindings_named_like(tree: SourceTree, render_function: str) -> list[str]:
    """Pattern (c): the render function name is itself the wrapper binding."""
    names: list[str] = []
    assigned = False

    with tree.batch():
        for declaration in tree.find(Pattern(kind=VARIABLE_DECLARATIONS)):
            parts = _declaration_value(declaration)
            if parts is None:
                continue
            name, value = parts
            if name.type == NodeKind.IDENTIFIER.value and name.text == render_function and _is_call(value):
                _collapse_declaration(declaration, value)
                names.append(name.text)
            elif name.type == NodeKind.OBJECT_PATTERN.value and _is_call(value, render_function):
                _collapse_declaration(declaration, value)

    with tree.batch():
        for assignment in tree.find(Pattern(kind=NodeKind.ASSIGNMENT_EXPRESSION)):
            left = assignment.field("left")
            right = assignment.field("right")
            if left is None or left.text != render_function or not _is_call(right):
                continue
            assignment.replace_with(right.text)
            names.append(render_function)
            assigned = True
        if assigned:
            _remove_uninitialized(tree, {render_function})

    return names


def resolve_wrapper_references(
    tree: SourceTree, render_function: str | None, reporter: DiagnosticReporter
) -> list[str]:
    """Collapse wrapper bindings of ``render_function`` and return their names.

    Handles, in order:

    * ``const x = f(...)`` which becomes ``f(...);``
    * ``x = f(...)`` which becomes ``f(...)``, dropping a separate ``let x;``
    * only when neither matched: declarations or assignments whose own name
      is ``f`` (``const wrapper = render(...)``) and destructuring
      declarations around a call to ``f``.

    Running the pass again on its own output finds nothing new.

    Args:
        tree: Tree to edit.
        render_function: Name returned by the render-call pass; ``None``
            skips the pass without a diagnostic.
        reporter: Receives ``NO_WRAPPER_BINDINGS`` when nothing matched.

    Returns:
        Binding names in order of discovery, without duplicates.
    """
    if render_function is None:
        return []

    names = _bindings_of_calls(tree, render_function)
    if not names:
        names = _bindings_named_like(tree, render_function)

    unique = list(dict.fromkeys(names))
    if not unique:
        reporter.warning(
            DiagnosticCode.NO_WRAPPER_BINDINGS, f"No wrapper bindings found for render function '{render_function}'"
        )
    _logger.debug(f"Wrapper bindings for {render_function}: {unique}")
    return unique
