"""Unit tests for selector classification and the find() rewriting pass."""

from splurge_enzyme_to_rtl.diagnostics import DiagnosticCode, DiagnosticLevel, DiagnosticReporter
from splurge_enzyme_to_rtl.transformers.selector_transformer import rewrite_find_selectors
from splurge_enzyme_to_rtl.transformers.selectors import SelectorKind, classify, extract_role, extract_test_id
from splurge_enzyme_to_rtl.tree import SourceTree, method_call
from splurge_enzyme_to_rtl.tree.builders import first_argument


def _classify(code: str, attribute: str = "data-testid"):
    tree = SourceTree(code)
    call = tree.find(method_call("find")).first()
    return classify(first_argument(call), attribute)


class TestSelectorHelpers:
    def test_extract_test_id_accepts_both_quotes(self):
        assert extract_test_id('[data-testid="save"]', "data-testid") == "save"
        assert extract_test_id("button[data-testid='save']", "data-testid") == "save"

    def test_extract_test_id_requires_quoted_value(self):
        assert extract_test_id("[data-testid]", "data-testid") is None
        assert extract_test_id('[data-qa="save"]', "data-testid") is None

    def test_extract_role_only_for_exact_shape(self):
        assert extract_role('[role="dialog"]') == "dialog"
        assert extract_role("[role='tab']") == "tab"
        assert extract_role('div[role="dialog"]') is None

    def test_classify_shapes(self):
        assert _classify("w.find('[data-testid=\"a\"]');").kind is SelectorKind.TEST_ID
        assert _classify("w.find({ 'data-testid': 'a' });").value == "a"
        assert _classify("w.find({ id: 'a' });").kind is SelectorKind.OPAQUE
        assert _classify("w.find('[role=\"tab\"]');").value == "tab"
        assert _classify("w.find(Button);").kind is SelectorKind.OPAQUE
        assert _classify("w.find(`.a`);").kind is SelectorKind.OPAQUE


class TestRewriteFindSelectors:
    def test_custom_attribute_selector(self):
        tree = SourceTree("wrapper.find('[data-id=\"element\"]');\n")

        count = rewrite_find_selectors(tree, "data-id", DiagnosticReporter())

        assert count == 1
        assert tree.code == 'screen.getByTestId("element");\n'

    def test_object_selector_under_not_uses_query(self):
        tree = SourceTree("expect(wrapper.find({ 'data-id': 'element' })).not.toBeInTheDocument();\n")

        rewrite_find_selectors(tree, "data-id", DiagnosticReporter())

        assert tree.code == 'expect(screen.queryByTestId("element")).not.toBeInTheDocument();\n'

    def test_not_only_counts_directly_after_expect(self):
        tree = SourceTree("expect(wrapper.find('[data-testid=\"a\"]').length).not.toBe(0);\n")

        rewrite_find_selectors(tree, "data-testid", DiagnosticReporter())

        assert tree.code == 'expect(screen.getByTestId("a").length).not.toBe(0);\n'

    def test_role_selector(self):
        tree = SourceTree("expect(wrapper.find('[role=\"dialog\"]')).toBeTruthy();\n")

        assert rewrite_find_selectors(tree, "data-testid", DiagnosticReporter()) == 1
        assert tree.code == 'expect(screen.getByRole("dialog")).toBeTruthy();\n'

    def test_nested_find_calls_keep_the_outer_rewrite(self):
        tree = SourceTree("w.find('[data-testid=\"outer\"]').find('[data-testid=\"inner\"]');\n")

        count = rewrite_find_selectors(tree, "data-testid", DiagnosticReporter())

        assert count == 1
        assert tree.code == 'screen.getByTestId("inner");\n'

    def test_opaque_selectors_are_reported(self):
        tree = SourceTree("it('a', () => {\n  wrapper.find('.item');\n  wrapper.find(Item);\n});\n")
        reporter = DiagnosticReporter()

        count = rewrite_find_selectors(tree, "data-testid", reporter)

        assert count == 0
        assert "wrapper.find('.item');" in tree.code
        diagnostics = reporter.diagnostics
        assert [d.code for d in diagnostics] == [DiagnosticCode.UNCONVERTED_SELECTOR] * 2
        assert all(d.level is DiagnosticLevel.INFO for d in diagnostics)
        assert [d.line for d in diagnostics] == [2, 3]
        assert reporter.warnings() == []
