"""Rendered-DOM snapshot used to sharpen ``find`` selector guidance.

A snapshot is the HTML a test case rendered, captured outside this tool.
When one is available the suggestion for an unconverted ``find`` call can
name a concrete ``screen`` query for the element the selector picks out
instead of the generic advice. Selectors are matched with BeautifulSoup's
CSS support, so descendant and child combinators behave as in a browser.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from pathlib import Path

from bs4 import BeautifulSoup, Tag
from soupsieve import SelectorSyntaxError

_logger = logging.getLogger(__name__)

IMPLICIT_ROLES = {
    "article": "article",
    "button": "button",
    "dialog": "dialog",
    "form": "form",
    "h1": "heading",
    "h2": "heading",
    "h3": "heading",
    "h4": "heading",
    "h5": "heading",
    "h6": "heading",
    "hr": "separator",
    "img": "img",
    "li": "listitem",
    "nav": "navigation",
    "option": "option",
    "progress": "progressbar",
    "select": "combobox",
    "textarea": "textbox",
    "tr": "row",
}

INPUT_ROLES = {
    "checkbox": "checkbox",
    "radio": "radio",
    "range": "slider",
    "number": "spinbutton",
    "search": "searchbox",
    "button": "button",
    "submit": "button",
    "reset": "button",
    "text": "textbox",
    "email": "textbox",
    "tel": "textbox",
    "url": "textbox",
}


def element_role(element: Tag) -> str | None:
    """Explicit ``role`` attribute, or the implicit ARIA role of the tag."""
    explicit = element.get("role")
    if explicit:
        return str(explicit)
    if element.name == "a":
        return "link" if element.has_attr("href") else None
    if element.name == "input":
        return INPUT_ROLES.get(str(element.get("type", "text")))
    return IMPLICIT_ROLES.get(element.name)


def element_text(element: Tag) -> str:
    return " ".join(element.get_text(" ").split())


class DomSnapshot:
    """Parsed rendered DOM of one test file."""

    def __init__(self, html: str) -> None:
        self.soup = BeautifulSoup(html, "html.parser")

    @classmethod
    def from_file(cls, file_path: str | Path) -> DomSnapshot:
        return cls(Path(file_path).read_text(encoding="utf-8"))

    def __len__(self) -> int:
        return len(self.soup.find_all(True))

    def select(self, selector: str) -> list[Tag]:
        """Elements matching the CSS ``selector`` in document order.

        Selectors BeautifulSoup cannot parse (enzyme also accepts some
        that are not CSS) match nothing.
        """
        if not selector.strip():
            return []
        try:
            return list(self.soup.select(selector))
        except SelectorSyntaxError as e:
            _logger.debug(f"Selector {selector!r} is not usable against the snapshot: {e}")
            return []

    def suggest_query(self, selector: str, test_id_attribute: str) -> str | None:
        """A ``screen`` query for the first element ``selector`` matches.

        Prefers the element's test id, then its ARIA role, then its text.
        """
        matches = self.select(selector)
        if not matches:
            return None
        element = matches[0]
        test_id = element.get(test_id_attribute)
        if test_id:
            return f"screen.getByTestId('{test_id}')"
        role = element_role(element)
        if role:
            return f"screen.getByRole('{role}')"
        text = element_text(element)
        if text:
            return f"screen.getByText('{text}')"
        _logger.debug(f"Snapshot element for {selector!r} has no test id, role or text")
        return None
