"""Migration guidance for enzyme calls that cannot be rewritten mechanically.

Every comment produced here starts with :data:`SUGGESTION_MARKER` so that
follow-up tooling can find the places that still need a human (or a
model) to finish the migration.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from .selectors import extract_test_id

if TYPE_CHECKING:
    from .dom_snapshot import DomSnapshot

SUGGESTION_MARKER = "// Conversion suggestion:"

DEFAULT_METHOD_GUIDANCE = (
    "Consider rewriting this part of the test to focus on user interactions and DOM assertions."
)

DEFAULT_SELECTOR_GUIDANCE = (
    "Use component rendered DOM to get the appropriate selector and method: "
    "screen.getByRole('selector') or screen.getByTestId('<data-id=...>')"
)

SIMULATE_GUIDANCE = "userEvent.<method>(<DOM_element>)"

# ``{args}`` is replaced with the original argument text.
METHOD_GUIDANCE: dict[str, str] = {
    "setState": "You need to simulate a user interaction or use a hook to change the state to {args}.",
    "setProps": "Call rerender(<Component {{...newProps}} />) from the render result with the new props {args}.",
    "setContext": "Wrap the component in its context provider with the value {args} and render it again.",
    "prop": (
        "Consider querying the element and checking its property {args} "
        "using screen.getBy... or screen.queryBy...."
    ),
    "props": "Assert on what the props produce in the DOM instead of reading them from the wrapper.",
    "state": (
        "You need to query the DOM and assert the state changes by checking "
        "the element's attributes or text content for {args}."
    ),
    "ref": "Query the element the ref points at with screen.getBy... instead of reading ref {args}.",
    "context": "Assert on the rendered output of the context value {args} rather than reading it.",
    "contains": "Use screen.getByText or screen.queryByText to check if the element contains {args}.",
    "containsMatchingElement": (
        "Use screen.queryBy... to find elements and then compare their structure "
        "with the expected output {args}."
    ),
    "containsAllMatchingElements": "Use screen.getAllBy... and assert every expected element {args} is present.",
    "containsAnyMatchingElements": "Use screen.queryAllBy... and assert at least one of {args} is present.",
    "findWhere": (
        "Use screen.getBy... or screen.queryBy... with a custom matcher function "
        "to find elements conditionally matching {args}."
    ),
    "filterWhere": "Use screen.getAllBy... and filter the returned elements with {args}.",
    "matchesElement": (
        "Use screen.getBy... or screen.queryBy... to find elements and then compare "
        "them with the expected output {args}."
    ),
    "equals": "Compare the rendered DOM with toEqual or a snapshot instead of comparing wrappers to {args}.",
    "instance": "Avoid testing implementation details. Focus on the component's output and behavior.",
    "name": "Use screen.getByRole to find elements by their role {args}.",
    "debug": "Use screen.debug() to print the DOM structure.",
    "getElement": (
        "Use screen.getBy... or screen.queryBy... to access the element directly. "
        "Consider checking for {args}."
    ),
    "getElements": (
        "Use screen.getAllBy... or screen.queryAllBy... to access multiple elements "
        "directly matching {args}."
    ),
    "getDOMNode": "Use screen.getBy... or screen.queryBy... to get the DOM node.",
    "hasClass": "Use expect(element).toHaveClass({args}) to check if an element has a specific class.",
    "html": "Use the container from the render result and read container.innerHTML.",
    "text": "Use screen.getByText to get the text content of the element.",
    "render": "The render result has no render method; query the DOM with screen instead.",
    "rerender": "Use rerender from the render result with the updated element {args}.",
    "unmount": "Use unmount from the render result.",
    "mount": "Render the component again with render(...) instead of mounting the wrapper.",
    "wrapper": "Focus on querying and interacting with the rendered output rather than the wrapper itself.",
    "children": "Query the child elements directly with screen.getAllBy... or within(element).",
    "parent": "Use element.parentElement on the queried DOM node.",
    "closest": "Use element.closest({args}) on the queried DOM node.",
    "at": "Use screen.getAllBy...()[{args}] to pick one of several matching elements.",
    "last": "Use the last element returned by screen.getAllBy....",
    "length": "Use screen.getAllBy... or screen.queryAllBy... and check the length of the result.",
    "map": "Use screen.getAllBy... and map over the returned elements with {args}.",
    "forEach": "Use screen.getAllBy... and iterate over the returned elements with {args}.",
    "simulate": "Use userEvent to reproduce the {args} interaction on the queried element.",
    "invoke": "Trigger the handler {args} through a user interaction with userEvent.",
    "exists": "Use expect(screen.queryBy...).toBeInTheDocument() or .not.toBeInTheDocument().",
    "is": "Query the element by role or test id and assert on it instead of matching {args}.",
}

SELECTOR_ROLES = (
    "article",
    "button",
    "checkbox",
    "combobox",
    "dialog",
    "form",
    "heading",
    "img",
    "link",
    "listitem",
    "menuitem",
    "menuitemcheckbox",
    "menuitemradio",
    "navigation",
    "option",
    "progressbar",
    "radio",
    "row",
    "rowheader",
    "search",
    "separator",
    "slider",
    "spinbutton",
    "switch",
    "tabpanel",
    "textbox",
)


def single_line(text: str) -> str:
    """Collapse runs of whitespace, including newlines, to single spaces."""
    return " ".join(text.split())


def suggest_by_method(method: str, args: str | None) -> str:
    template = METHOD_GUIDANCE.get(method, DEFAULT_METHOD_GUIDANCE)
    return template.format(args=args or "")


def method_suggestion(wrapper_name: str, method: str, args: str | None) -> str:
    """Comment text for ``wrapper_name.method(args)``."""
    # A line comment must not span lines
    comment = f"{SUGGESTION_MARKER} {wrapper_name}.{method}({args or ''}) --> {suggest_by_method(method, args)}"
    return single_line(comment)


def suggest_by_selector(
    selector: str,
    test_id_attribute: str,
    dom_snapshot: DomSnapshot | None = None,
) -> str:
    """Guidance for a ``find`` selector that was not rewritten.

    A test-id attribute wins, then a concrete query taken from the
    rendered DOM when a snapshot is available, then the first role name
    contained in the selector text. Role matching is a substring check,
    so ``'.rowheader-title'`` yields ``row``.
    """
    test_id = extract_test_id(selector, test_id_attribute)
    if test_id is not None:
        return f"screen.getByTestId('{test_id}')"

    if dom_snapshot is not None:
        query = dom_snapshot.suggest_query(selector, test_id_attribute)
        if query is not None:
            return query

    for role in SELECTOR_ROLES:
        if role in selector:
            return f"screen.getByRole('{role}')"

    return DEFAULT_SELECTOR_GUIDANCE


def selector_suggestion(
    selector_text: str,
    selector: str | None,
    test_id_attribute: str,
    dom_snapshot: DomSnapshot | None = None,
) -> str:
    """Comment text for ``.find(selector_text)``.

    ``selector`` is the literal value of the argument, or ``None`` when
    the argument is not a plain string.
    """
    guidance = (
        suggest_by_selector(selector, test_id_attribute, dom_snapshot)
        if selector is not None
        else DEFAULT_SELECTOR_GUIDANCE
    )
    return single_line(f"{SUGGESTION_MARKER} .find({selector_text}) --> {guidance}")


def simulate_suggestion(event_text: str) -> str:
    return single_line(f"{SUGGESTION_MARKER} .simulate({event_text}) --> {SIMULATE_GUIDANCE}")
