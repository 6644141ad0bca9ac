"""Classification of enzyme ``find`` selectors.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

from ..tree import NodeKind, Path
from ..tree.builders import string_value

_ROLE_SELECTOR = re.compile(r"""\[role=["']([^"']+)["']\]""")


class SelectorKind(Enum):
    TEST_ID = "test_id"
    ROLE = "role"
    OPAQUE = "opaque"


@dataclass(frozen=True)
class Selector:
    """A classified ``find`` argument; ``value`` is set for test-id and role selectors."""

    kind: SelectorKind
    value: str | None = None

    @classmethod
    def opaque(cls) -> Selector:
        return cls(SelectorKind.OPAQUE)


def extract_test_id(selector: str, test_id_attribute: str) -> str | None:
    """Value of ``attr="V"`` (or ``attr='V'``) inside ``selector``.

    Returns ``None`` when the attribute is absent or has no quoted value.
    """
    if test_id_attribute not in selector:
        return None
    match = re.search(re.escape(test_id_attribute) + r"""\s*=\s*["']([^"']+)["']""", selector)
    return match.group(1) if match else None


def extract_role(selector: str) -> str | None:
    """``X`` from a selector of exactly the shape ``[role="X"]``."""
    match = _ROLE_SELECTOR.fullmatch(selector.strip())
    return match.group(1) if match else None


def _object_test_id(literal: Path, test_id_attribute: str) -> str | None:
    for pair in literal.named_children:
        if pair.type != NodeKind.PAIR.value:
            continue
        key = pair.field("key")
        if key is None:
            continue
        name = string_value(key) if key.type == NodeKind.STRING.value else key.text
        if name == test_id_attribute:
            return string_value(pair.field("value"))
    return None


def classify(argument: Path | None, test_id_attribute: str) -> Selector:
    """Classify the first argument of a ``find`` call."""
    if argument is None:
        return Selector.opaque()

    if argument.type == NodeKind.OBJECT.value:
        value = _object_test_id(argument, test_id_attribute)
        return Selector(SelectorKind.TEST_ID, value) if value else Selector.opaque()

    text = string_value(argument)
    if text is None:
        return Selector.opaque()

    test_id = extract_test_id(text, test_id_attribute)
    if test_id is not None:
        return Selector(SelectorKind.TEST_ID, test_id)

    role = extract_role(text)
    if role is not None:
        return Selector(SelectorKind.ROLE, role)

    return Selector.opaque()
