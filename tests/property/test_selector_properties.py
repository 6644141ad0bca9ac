"""Property-based tests for test-id selector extraction and rewriting.

These tests verify that any selector carrying ``attr="V"`` yields exactly
``V`` and that the rewritten query picks ``getByTestId`` or
``queryByTestId`` from the surrounding expectation.
"""

import json

from hypothesis import given

from splurge_enzyme_to_rtl.diagnostics import DiagnosticReporter
from splurge_enzyme_to_rtl.transformers.selector_transformer import rewrite_find_selectors
from splurge_enzyme_to_rtl.transformers.selectors import Selector, SelectorKind, extract_test_id
from splurge_enzyme_to_rtl.tree import SourceTree
from tests.hypothesis_config import DEFAULT_SETTINGS
from tests.property.strategies import selectors_with_test_id, wrapper_names


def _literal(selector: str) -> str:
    # Quote with whichever character the selector itself does not use
    quote = "'" if '"' in selector else '"'
    return f"{quote}{selector}{quote}"


class TestTestIdExtractionProperties:
    @DEFAULT_SETTINGS
    @given(case=selectors_with_test_id())
    def test_extracts_exact_value(self, case: tuple[str, str, str]) -> None:
        attribute, value, selector = case
        assert extract_test_id(selector, attribute) == value

    @DEFAULT_SETTINGS
    @given(case=selectors_with_test_id())
    def test_other_attribute_is_not_extracted(self, case: tuple[str, str, str]) -> None:
        attribute, _value, selector = case
        assert extract_test_id(selector, attribute + "-other") is None

    def test_opaque_selector_has_no_value(self) -> None:
        assert Selector.opaque() == Selector(SelectorKind.OPAQUE, None)


class TestSelectorRewriteProperties:
    @DEFAULT_SETTINGS
    @given(case=selectors_with_test_id(), name=wrapper_names)
    def test_positive_expectation_uses_get_by(self, case: tuple[str, str, str], name: str) -> None:
        attribute, value, selector = case
        source = f"expect({name}.find({_literal(selector)})).toBeInTheDocument();\n"
        tree = SourceTree(source)

        rewritten = rewrite_find_selectors(tree, attribute, DiagnosticReporter())

        assert rewritten == 1
        assert tree.code == f"expect(screen.getByTestId({json.dumps(value)})).toBeInTheDocument();\n"

    @DEFAULT_SETTINGS
    @given(case=selectors_with_test_id(), name=wrapper_names)
    def test_negated_expectation_uses_query_by(self, case: tuple[str, str, str], name: str) -> None:
        attribute, value, selector = case
        source = f"expect({name}.find({_literal(selector)})).not.toBeInTheDocument();\n"
        tree = SourceTree(source)

        rewrite_find_selectors(tree, attribute, DiagnosticReporter())

        assert tree.code == f"expect(screen.queryByTestId({json.dumps(value)})).not.toBeInTheDocument();\n"

    @DEFAULT_SETTINGS
    @given(case=selectors_with_test_id(), name=wrapper_names)
    def test_object_selector_matches_string_selector(self, case: tuple[str, str, str], name: str) -> None:
        attribute, value, _selector = case
        source = f"const el = {name}.find({{ {json.dumps(attribute)}: {json.dumps(value)} }});\n"
        tree = SourceTree(source)

        rewrite_find_selectors(tree, attribute, DiagnosticReporter())

        assert tree.code == f"const el = screen.getByTestId({json.dumps(value)});\n"
