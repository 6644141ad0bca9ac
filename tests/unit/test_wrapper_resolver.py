"""Unit tests for wrapper-reference resolution."""

import textwrap

from splurge_enzyme_to_rtl.diagnostics import DiagnosticCode, DiagnosticReporter
from splurge_enzyme_to_rtl.transformers.wrapper_resolver import resolve_wrapper_references
from splurge_enzyme_to_rtl.tree import SourceTree


def _source(text: str) -> str:
    return textwrap.dedent(text).lstrip()


def test_declarations_of_helper_results_are_collapsed():
    tree = SourceTree(
        _source(
            """
            const renderComponent = () => render(<Button />);
            it('a', () => {
              const wrapper = renderComponent();
              wrapper.setState({ open: true });
            });
            it('b', async () => {
              const component = await renderComponent();
            });
            """
        )
    )
    reporter = DiagnosticReporter()

    names = resolve_wrapper_references(tree, "renderComponent", reporter)

    assert names == ["wrapper", "component"]
    assert tree.code == _source(
        """
        const renderComponent = () => render(<Button />);
        it('a', () => {
          renderComponent();
          wrapper.setState({ open: true });
        });
        it('b', async () => {
          await renderComponent();
        });
        """
    )
    assert reporter.diagnostics == []


def test_assignments_are_collapsed_and_declarators_dropped():
    tree = SourceTree(
        _source(
            """
            let wrapper;
            let other, count = 0;
            beforeEach(() => {
              wrapper = setup();
              other = setup();
            });
            """
        )
    )

    names = resolve_wrapper_references(tree, "setup", DiagnosticReporter())

    assert names == ["wrapper", "other"]
    assert tree.code == _source(
        """
        let count = 0;
        beforeEach(() => {
          setup();
          setup();
        });
        """
    )


def test_duplicate_names_are_reported_once():
    tree = SourceTree("it('a', () => { const w = setup(); });\nit('b', () => { const w = setup(); });\n")

    assert resolve_wrapper_references(tree, "setup", DiagnosticReporter()) == ["w"]


def test_fallback_to_binding_named_like_render_function():
    tree = SourceTree("it('a', () => {\n  const wrapper = render(<A />);\n  wrapper.find(B);\n});\n")

    names = resolve_wrapper_references(tree, "wrapper", DiagnosticReporter())

    assert names == ["wrapper"]
    assert tree.code == "it('a', () => {\n  render(<A />);\n  wrapper.find(B);\n});\n"


def test_fallback_collapses_destructuring_of_helper_call():
    tree = SourceTree("const { getByText } = renderPage();\n")
    reporter = DiagnosticReporter()

    names = resolve_wrapper_references(tree, "renderPage", reporter)

    assert names == []
    assert tree.code == "renderPage();\n"
    assert [d.code for d in reporter.diagnostics] == [DiagnosticCode.NO_WRAPPER_BINDINGS]


def test_exported_declarations_are_left_alone():
    tree = SourceTree("export const wrapper = setup();\n")

    assert resolve_wrapper_references(tree, "setup", DiagnosticReporter()) == []
    assert tree.code == "export const wrapper = setup();\n"


def test_no_render_function_skips_silently():
    tree = SourceTree("const wrapper = setup();\n")
    reporter = DiagnosticReporter()

    assert resolve_wrapper_references(tree, None, reporter) == []
    assert tree.code == "const wrapper = setup();\n"
    assert reporter.diagnostics == []


def test_second_run_discovers_nothing_new():
    tree = SourceTree("let w;\nbeforeEach(() => { w = setup(); });\nit('a', () => { const x = setup(); });\n")
    resolve_wrapper_references(tree, "setup", DiagnosticReporter())
    once = tree.code

    assert resolve_wrapper_references(tree, "setup", DiagnosticReporter()) == []
    assert tree.code == once
