"""Structural patterns and lazy match sets over a ``SourceTree``.

A :class:`Pattern` is a partial description of a node: its kind, its
text, the shape of selected fields and, for calls, a prefix of its
arguments. Anything left unspecified matches. A :class:`MatchSet` is the
restartable, lazily evaluated collection of paths matching a pattern;
each iteration walks the current tree again.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import re
from collections.abc import Callable, Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum

from .source_tree import Path

# Nodes that are never call arguments.
_ARGUMENT_NOISE = frozenset({"comment"})


class NodeKind(Enum):
    """Grammar node types the codemod passes recognize."""

    PROGRAM = "program"
    IMPORT_DECLARATION = "import_statement"
    EXPORT_STATEMENT = "export_statement"
    LEXICAL_DECLARATION = "lexical_declaration"
    VARIABLE_DECLARATION = "variable_declaration"
    VARIABLE_DECLARATOR = "variable_declarator"
    ASSIGNMENT_EXPRESSION = "assignment_expression"
    CALL_EXPRESSION = "call_expression"
    MEMBER_EXPRESSION = "member_expression"
    ARGUMENTS = "arguments"
    IDENTIFIER = "identifier"
    PROPERTY_IDENTIFIER = "property_identifier"
    STRING = "string"
    TRUE = "true"
    FALSE = "false"
    OBJECT = "object"
    PAIR = "pair"
    OBJECT_PATTERN = "object_pattern"
    EXPRESSION_STATEMENT = "expression_statement"
    RETURN_STATEMENT = "return_statement"
    FUNCTION_DECLARATION = "function_declaration"
    ARROW_FUNCTION = "arrow_function"
    AWAIT_EXPRESSION = "await_expression"
    THIS = "this"


VARIABLE_DECLARATIONS = (NodeKind.LEXICAL_DECLARATION, NodeKind.VARIABLE_DECLARATION)


@dataclass(frozen=True)
class Pattern:
    """Partial node shape.

    Attributes:
        kind: Node kind, or a tuple of acceptable kinds.
        text: Exact source text, or a compiled regex that must fully match.
        fields: Field name to nested pattern; a plain string is shorthand
            for a pattern matching that exact text.
        args: Patterns for the leading call arguments.
        argc: Exact number of call arguments.
        where: Extra predicate evaluated last.
    """

    kind: NodeKind | tuple[NodeKind, ...] | None = None
    text: str | re.Pattern[str] | None = None
    fields: Mapping[str, Pattern | str] = field(default_factory=dict)
    args: tuple[Pattern | str, ...] | None = None
    argc: int | None = None
    where: Callable[[Path], bool] | None = None

    def matches(self, path: Path | None) -> bool:
        if path is None:
            return False
        if self.kind is not None:
            kinds = self.kind if isinstance(self.kind, tuple) else (self.kind,)
            if path.type not in {kind.value for kind in kinds}:
                return False
        if self.text is not None and not _text_matches(self.text, path.text):
            return False
        for name, expected in self.fields.items():
            if not _as_pattern(expected).matches(path.field(name)):
                return False
        if self.args is not None or self.argc is not None:
            arguments = call_arguments(path)
            if self.argc is not None and len(arguments) != self.argc:
                return False
            if self.args is not None:
                if len(arguments) < len(self.args):
                    return False
                for expected, actual in zip(self.args, arguments, strict=False):
                    if not _as_pattern(expected).matches(actual):
                        return False
        if self.where is not None and not self.where(path):
            return False
        return True


def _as_pattern(spec: Pattern | str) -> Pattern:
    return spec if isinstance(spec, Pattern) else Pattern(text=spec)


def _text_matches(expected: str | re.Pattern[str], actual: str) -> bool:
    if isinstance(expected, str):
        return expected == actual
    return expected.fullmatch(actual) is not None


def call_arguments(path: Path) -> list[Path]:
    """Argument nodes of a call expression (empty for anything else)."""
    arguments = path.field("arguments")
    if arguments is None or arguments.type != NodeKind.ARGUMENTS.value:
        return []
    return [child for child in arguments.named_children if child.type not in _ARGUMENT_NOISE]


def identifier(name: str | re.Pattern[str] | None = None) -> Pattern:
    return Pattern(kind=NodeKind.IDENTIFIER, text=name)


def call_to(name: str | re.Pattern[str], **kwargs) -> Pattern:
    """Calls whose callee is the bare identifier ``name``."""
    return Pattern(kind=NodeKind.CALL_EXPRESSION, fields={"function": identifier(name)}, **kwargs)


def method_call(
    method: str | re.Pattern[str],
    receiver: Pattern | None = None,
    **kwargs,
) -> Pattern:
    """Calls of the form ``<receiver>.<method>(...)``."""
    member_fields: dict[str, Pattern | str] = {"property": Pattern(kind=NodeKind.PROPERTY_IDENTIFIER, text=method)}
    if receiver is not None:
        member_fields["object"] = receiver
    return Pattern(
        kind=NodeKind.CALL_EXPRESSION,
        fields={"function": Pattern(kind=NodeKind.MEMBER_EXPRESSION, fields=member_fields)},
        **kwargs,
    )


class MatchSet:
    """Lazy, restartable collection of paths matching a pattern.

    The candidates are recomputed on every iteration from the roots the
    set was built on, so a match set reflects the tree as long as its
    generation is current and raises ``StalePathError`` afterwards.
    """

    def __init__(self, candidates: Callable[[], Iterator[Path]], pattern: Pattern | None = None) -> None:
        self._candidates = candidates
        self._pattern = pattern

    @classmethod
    def descendants_of(cls, roots: Iterable[Path], pattern: Pattern) -> MatchSet:
        root_list = list(roots)

        def candidates() -> Iterator[Path]:
            for root in root_list:
                yield from root.descendants()

        return cls(candidates, pattern)

    def __iter__(self) -> Iterator[Path]:
        seen: set[Path] = set()
        for path in self._candidates():
            if path in seen:
                continue
            if self._pattern is None or self._pattern.matches(path):
                seen.add(path)
                yield path

    def __len__(self) -> int:
        return sum(1 for _ in self)

    def __bool__(self) -> bool:
        return self.first() is not None

    def paths(self) -> list[Path]:
        return list(self)

    def first(self) -> Path | None:
        return next(iter(self), None)

    def filter(self, predicate: Callable[[Path], bool]) -> MatchSet:
        return MatchSet(lambda: (path for path in self if predicate(path)))

    def find(self, pattern: Pattern) -> MatchSet:
        """Descendants of every member that match ``pattern``."""

        def candidates() -> Iterator[Path]:
            for path in self:
                yield from path.descendants()

        return MatchSet(candidates, pattern)

    def closest(self, pattern: Pattern) -> MatchSet:
        """Nearest ancestor of every member that matches ``pattern``."""

        def candidates() -> Iterator[Path]:
            for path in self:
                ancestor = path.closest(pattern)
                if ancestor is not None:
                    yield ancestor

        return MatchSet(candidates)

    def for_each(self, action: Callable[[Path], None]) -> int:
        """Call ``action`` on every member inside one edit batch.

        Members are collected before the first call so edits recorded by
        ``action`` never disturb the walk.
        """
        paths = self.paths()
        if not paths:
            return 0
        with paths[0].tree.editing():
            for path in paths:
                action(path)
        return len(paths)

    def replace_with(self, build: str | Callable[[Path], str | None]) -> int:
        """Replace every member; a builder returning ``None`` leaves that member alone.

        Returns:
            Number of replacements recorded.
        """
        replaced = 0

        def replace(path: Path) -> None:
            nonlocal replaced
            replacement = build if isinstance(build, str) else build(path)
            if replacement is not None:
                path.replace_with(replacement)
                replaced += 1

        self.for_each(replace)
        return replaced

    def remove(self) -> int:
        return self.for_each(lambda path: path.remove())
