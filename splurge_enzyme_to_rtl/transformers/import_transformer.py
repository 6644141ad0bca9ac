"""Import rewriting pass.

Replaces ``enzyme`` imports with the React Testing Library import and
turns relative module specifiers into absolute paths so the converted
file can be written somewhere other than next to the original.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging

from ..diagnostics import DiagnosticCode, DiagnosticReporter
from ..helpers.path_utils import is_relative_specifier, resolve_module_specifier
from ..tree import NodeKind, Pattern, SourceTree, call_arguments
from ..tree.builders import js_string, module_source, quote_like, string_value

LEGACY_MODULE = "enzyme"
RTL_IMPORT = 'import { render, screen } from "@testing-library/react";'
JEST_DOM_IMPORT = 'import "@testing-library/jest-dom";'
DOM_CONFIGURE_IMPORT = 'import { configure } from "@testing-library/dom";'
USER_EVENT_MODULE = "@testing-library/user-event"
USER_EVENT_IMPORT = f"import userEvent from {js_string(USER_EVENT_MODULE)};"

# Module specifiers that stay relative.
PRESERVED_SPECIFIERS = ("./enzyme-mount-adapter",)

MOCK_DIRECTIVES = frozenset(
    {"jest.mock", "jest.doMock", "jest.unmock", "jest.requireActual", "jest.requireMock", "require"}
)

_logger = logging.getLogger(__name__)


def imports_from(module: str) -> Pattern:
    """Import declarations whose source is exactly ``module``."""
    return Pattern(
        kind=NodeKind.IMPORT_DECLARATION,
        where=lambda p: string_value(module_source(p)) == module,
    )


def has_import(tree: SourceTree, module: str) -> bool:
    return tree.find(imports_from(module)).first() is not None


def dom_setup_lines(test_id_attribute: str) -> list[str]:
    return [
        JEST_DOM_IMPORT,
        DOM_CONFIGURE_IMPORT,
        f"configure({{ testIdAttribute: {js_string(test_id_attribute)} }});",
    ]


def rewrite_imports(
    tree: SourceTree,
    file_path: str | None,
    reporter: DiagnosticReporter,
    test_id_attribute: str = "data-testid",
    emit_dom_setup: bool = False,
) -> bool:
    """Swap the enzyme import for the RTL import and absolutize relative specifiers.

    Args:
        tree: Tree to edit.
        file_path: Original location of the file; relative specifiers are
            resolved against its directory. ``None`` skips that step.
        reporter: Receives ``MISSING_LEGACY_IMPORT`` when no enzyme import
            exists.
        test_id_attribute: Attribute used in the optional DOM setup.
        emit_dom_setup: Also add jest-dom and ``configure`` setup lines.

    Returns:
        True when a legacy import was replaced.
    """
    legacy = tree.find(imports_from(LEGACY_MODULE)).paths()

    header: list[str] = []
    if legacy:
        header.append(RTL_IMPORT)
        if emit_dom_setup:
            header.extend(dom_setup_lines(test_id_attribute))
    else:
        reporter.warning(DiagnosticCode.MISSING_LEGACY_IMPORT, f"No import from '{LEGACY_MODULE}' found")

    with tree.batch():
        for path in legacy:
            path.remove()
        # Prepended inserts stack newest first, so insert the header bottom up.
        for line in reversed(header):
            tree.insert_at_top(line)

    _logger.debug(f"Replaced {len(legacy)} enzyme import(s)")

    if file_path is not None:
        absolutize_relative_specifiers(tree, file_path)

    return bool(legacy)


def _rewritable(specifier: str | None) -> bool:
    if specifier is None or not is_relative_specifier(specifier):
        return False
    return not any(preserved in specifier for preserved in PRESERVED_SPECIFIERS)


def absolutize_relative_specifiers(tree: SourceTree, file_path: str) -> int:
    """Rewrite relative specifiers in imports, re-exports and mock directives.

    Returns:
        Number of specifiers rewritten.
    """
    module_sources = Pattern(
        kind=(NodeKind.IMPORT_DECLARATION, NodeKind.EXPORT_STATEMENT),
        where=lambda p: module_source(p) is not None,
    )
    directives = Pattern(
        kind=NodeKind.CALL_EXPRESSION,
        fields={"function": Pattern(where=lambda p: p.text in MOCK_DIRECTIVES)},
        args=(Pattern(kind=NodeKind.STRING),),
    )

    rewritten = 0
    with tree.batch():
        literals = [module_source(path) for path in tree.find(module_sources)]
        literals.extend(call_arguments(path)[0] for path in tree.find(directives))
        for literal in literals:
            specifier = string_value(literal)
            if literal is None or not _rewritable(specifier):
                continue
            resolved = resolve_module_specifier(specifier, file_path)
            literal.replace_with(quote_like(literal.text, resolved))
            rewritten += 1

    _logger.debug(f"Resolved {rewritten} relative module specifier(s) against {file_path}")
    return rewritten
