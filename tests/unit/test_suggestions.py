"""Unit tests for suggestion text generation."""

import pytest

from splurge_enzyme_to_rtl.transformers.dom_snapshot import DomSnapshot
from splurge_enzyme_to_rtl.transformers.suggestions import (
    DEFAULT_METHOD_GUIDANCE,
    DEFAULT_SELECTOR_GUIDANCE,
    SUGGESTION_MARKER,
    method_suggestion,
    selector_suggestion,
    simulate_suggestion,
    suggest_by_method,
    suggest_by_selector,
)


def test_method_suggestion_embeds_arguments():
    assert method_suggestion("wrapper", "state", "'count'") == (
        "// Conversion suggestion: wrapper.state('count') --> You need to query the DOM and assert "
        "the state changes by checking the element's attributes or text content for 'count'."
    )


def test_method_without_arguments():
    assert method_suggestion("form", "unmount", None) == (
        "// Conversion suggestion: form.unmount() --> Use unmount from the render result."
    )


def test_unknown_method_gets_default_guidance():
    assert suggest_by_method("dive", "'x'") == DEFAULT_METHOD_GUIDANCE


def test_set_props_template_keeps_braces():
    assert suggest_by_method("setProps", "{ open: true }") == (
        "Call rerender(<Component {...newProps} />) from the render result with the new props { open: true }."
    )


class TestSuggestBySelector:
    def test_test_id_wins_over_roles(self):
        assert suggest_by_selector('.button [data-testid="save"]', "data-testid") == "screen.getByTestId('save')"

    def test_snapshot_wins_over_role_substring(self):
        snapshot = DomSnapshot('<div class="button-row"><span>Go</span></div>')

        assert suggest_by_selector(".button-row", "data-testid", snapshot) == "screen.getByText('Go')"

    def test_snapshot_without_match_falls_through(self):
        snapshot = DomSnapshot("<p>nothing</p>")

        assert suggest_by_selector(".close-button", "data-testid", snapshot) == "screen.getByRole('button')"

    @pytest.mark.parametrize(
        "selector, role",
        [
            (".close-button", "button"),
            ("button[type=\"submit\"]", "button"),
            (".rowheader-title", "row"),
            (".article-link", "article"),
            ("#main-navigation", "navigation"),
        ],
    )
    def test_first_contained_role(self, selector, role):
        assert suggest_by_selector(selector, "data-testid") == f"screen.getByRole('{role}')"

    def test_default_guidance(self):
        assert suggest_by_selector(".overlay", "data-testid") == DEFAULT_SELECTOR_GUIDANCE


def test_selector_suggestion_for_non_string_argument():
    assert selector_suggestion("Item", None, "data-testid") == (
        f"{SUGGESTION_MARKER} .find(Item) --> {DEFAULT_SELECTOR_GUIDANCE}"
    )


def test_simulate_suggestion():
    assert simulate_suggestion("'keydown', { key: 'Escape' }") == (
        "// Conversion suggestion: .simulate('keydown', { key: 'Escape' }) --> userEvent.<method>(<DOM_element>)"
    )
