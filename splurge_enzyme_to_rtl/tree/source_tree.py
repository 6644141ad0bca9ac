"""Editable JavaScript/TypeScript source tree.

``SourceTree`` owns the source text of one test file and the tree-sitter
syntax tree parsed from it. Passes navigate the tree through ``Path``
handles and change it by recording byte-range edits; a committed batch
of edits is spliced into the text, the text is re-parsed and the tree
generation is bumped. Every ``Path`` remembers the generation it was
taken from, so a handle that outlives a commit raises
``StalePathError`` instead of pointing at the wrong code.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING

import tree_sitter_typescript as ts_typescript
from tree_sitter import Language, Node, Parser

from ..exceptions import ParseError, StalePathError, TransformationError, TransformationValidationError

if TYPE_CHECKING:
    from .patterns import MatchSet, Pattern

TSX_LANGUAGE = Language(ts_typescript.language_tsx())
TYPESCRIPT_LANGUAGE = Language(ts_typescript.language_typescript())

# Containers whose direct children are statements.
STATEMENT_CONTAINERS = frozenset({"program", "statement_block", "switch_case", "switch_default"})

_logger = logging.getLogger(__name__)


def language_for(file_path: str | None) -> Language:
    """Pick the grammar for ``file_path``.

    Plain ``.ts`` files use the TypeScript grammar because angle-bracket
    type assertions are not valid TSX; everything else (``.js``, ``.jsx``,
    ``.tsx``, in-memory sources) is parsed as TSX.
    """
    if file_path and file_path.endswith((".ts", ".mts", ".cts")) and not file_path.endswith(".d.ts"):
        return TYPESCRIPT_LANGUAGE
    return TSX_LANGUAGE


def first_error(node: Node) -> Node | None:
    """Return the first ERROR or MISSING node under ``node`` in document order."""
    if not node.has_error:
        return None
    stack = [node]
    while stack:
        current = stack.pop()
        if current.type == "ERROR" or current.is_missing:
            return current
        stack.extend(child for child in reversed(current.children) if child.has_error or child.is_missing)
    return None


@dataclass(frozen=True)
class Edit:
    """A pending splice of ``text`` over ``source[start:end]``."""

    start: int
    end: int
    text: bytes
    seq: int
    prepend: bool = False

    @property
    def is_insertion(self) -> bool:
        return self.start == self.end

    @property
    def sort_key(self) -> tuple[int, int, int, int]:
        # Prepended insertions run newest first, ahead of ordinary ones.
        order = -self.seq - 1 if self.prepend else self.seq
        return (self.start, 0 if self.is_insertion else 1, -self.end, order)


class EditBatch:
    """Edits recorded against one tree generation and applied together.

    Insertions at the same offset keep their recording order unless they
    were added with ``prepend=True``, which stacks them newest first. When two
    edits overlap the outermost one is applied and the others are listed
    in ``deferred`` so the caller can run its pass again on the new tree.
    """

    def __init__(self, tree: SourceTree) -> None:
        self._tree = tree
        self._generation = tree.generation
        self._edits: list[Edit] = []
        self._seen: set[tuple[int, int, bytes]] = set()
        self._committed = False
        self.applied = 0
        self.deferred: list[Edit] = []

    def __len__(self) -> int:
        return len(self._edits)

    def add(self, start: int, end: int, text: str, prepend: bool = False) -> None:
        if self._committed:
            raise TransformationError("Cannot add edits to a committed batch")
        if self._tree.generation != self._generation:
            raise StalePathError("Edit batch outlived its tree generation", self._generation, self._tree.generation)
        if start < 0 or end < start or end > len(self._tree.source_bytes):
            raise TransformationError(f"Edit range {start}:{end} is outside the source")
        encoded = text.encode("utf-8")
        key = (start, end, encoded)
        if key in self._seen:
            return
        self._seen.add(key)
        self._edits.append(Edit(start, end, encoded, len(self._edits), prepend))

    def commit(self) -> int:
        """Apply the recorded edits and re-parse the tree.

        Returns:
            Number of edits applied.

        Raises:
            TransformationValidationError: If the edited text no longer
                parses. The tree keeps its previous text and generation.
        """
        if self._committed:
            raise TransformationError("Edit batch already committed")
        self._committed = True
        if not self._edits:
            return 0

        ordered = sorted(self._edits, key=lambda e: e.sort_key)
        source = self._tree.source_bytes
        pieces: list[bytes] = []
        cursor = 0
        for edit in ordered:
            if edit.start < cursor:
                self.deferred.append(edit)
                continue
            pieces.append(source[cursor : edit.start])
            pieces.append(edit.text)
            cursor = edit.end
            self.applied += 1
        pieces.append(source[cursor:])

        self._tree._replace_source(b"".join(pieces))
        _logger.debug(
            "Committed %d edit(s), deferred %d (generation %d)",
            self.applied,
            len(self.deferred),
            self._tree.generation,
        )
        return self.applied


class SourceTree:
    """Source text of one file plus its current syntax tree.

    Args:
        source: Source text to parse.
        file_path: Path used for grammar selection and error reporting.

    Raises:
        ParseError: If the source contains syntax errors.
    """

    def __init__(self, source: str, file_path: str | None = None) -> None:
        self.file_path = file_path
        self._parser = Parser(language_for(file_path))
        self._source = source.encode("utf-8")
        self._tree = self._parser.parse(self._source)
        self._generation = 0
        self._batch: EditBatch | None = None

        error = first_error(self._tree.root_node)
        if error is not None:
            row, column = error.start_point
            raise ParseError(
                f"Syntax error at line {row + 1}, column {column}",
                file_path or "<memory>",
                line=row + 1,
                column=column,
            )

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def source_bytes(self) -> bytes:
        return self._source

    @property
    def code(self) -> str:
        """Current source text."""
        return self._source.decode("utf-8")

    @property
    def root(self) -> Path:
        return Path(self, self._tree.root_node)

    def text_of(self, node: Node) -> str:
        return self._source[node.start_byte : node.end_byte].decode("utf-8")

    def find(self, pattern: Pattern) -> MatchSet:
        """Return the lazy set of nodes matching ``pattern`` anywhere in the file."""
        return self.root.find(pattern)

    def check_generation(self, generation: int) -> None:
        if generation != self._generation:
            raise StalePathError(
                f"Path from generation {generation} used after the tree moved to generation {self._generation}",
                generation,
                self._generation,
            )

    @contextmanager
    def batch(self) -> Iterator[EditBatch]:
        """Collect edits made inside the block and commit them on exit.

        Edits made through ``Path`` methods outside any batch are committed
        one at a time. Nothing is committed when the block raises.
        """
        if self._batch is not None:
            raise TransformationError("Edit batches cannot be nested")
        edit_batch = EditBatch(self)
        self._batch = edit_batch
        try:
            yield edit_batch
        finally:
            self._batch = None
        edit_batch.commit()

    @contextmanager
    def editing(self) -> Iterator[EditBatch]:
        """Join the active batch, or open one for the duration of the block."""
        if self._batch is not None:
            yield self._batch
            return
        with self.batch() as edit_batch:
            yield edit_batch

    def rewrite_until_stable(self, rewrite: Callable[[], None], max_rounds: int = 50) -> int:
        """Run ``rewrite`` in fresh batches until none of its edits is deferred.

        ``rewrite`` must search the tree itself on every call; paths from a
        previous round are stale.

        Returns:
            Total number of edits applied over all rounds.
        """
        total = 0
        for _ in range(max_rounds):
            with self.batch() as edit_batch:
                rewrite()
            total += edit_batch.applied
            if not edit_batch.deferred:
                return total
        raise TransformationError(f"Rewrite did not settle after {max_rounds} rounds")

    def record_edit(self, start: int, end: int, text: str, prepend: bool = False) -> None:
        if self._batch is not None:
            self._batch.add(start, end, text, prepend=prepend)
            return
        with self.batch() as edit_batch:
            edit_batch.add(start, end, text, prepend=prepend)

    def insert_at_top(self, text: str) -> None:
        """Insert ``text`` as its own line before the first statement.

        A leading ``#!`` line stays first. Several inserts in one batch
        land in reverse order, so the most recent one ends up on top.
        """
        if not text:
            return
        offset = 0
        for child in self._tree.root_node.children:
            if child.type == "hash_bang_line":
                offset = self.line_end(child.end_byte)
                break
        self.record_edit(offset, offset, text + "\n", prepend=True)

    def line_start(self, offset: int) -> int:
        return self._source.rfind(b"\n", 0, offset) + 1

    def line_end(self, offset: int) -> int:
        """Offset just past the newline ending the line that contains ``offset``."""
        newline = self._source.find(b"\n", offset)
        return len(self._source) if newline == -1 else newline + 1

    def indentation_at(self, offset: int) -> str:
        start = self.line_start(offset)
        line = self._source[start:offset]
        indent = line[: len(line) - len(line.lstrip(b" \t"))]
        return indent.decode("utf-8")

    def lines_before(self, offset: int) -> list[str]:
        """Stripped lines that precede the line containing ``offset``, nearest first."""
        head = self._source[: self.line_start(offset)].decode("utf-8")
        return [line.strip() for line in reversed(head.splitlines())]

    def _replace_source(self, new_source: bytes) -> None:
        new_tree = self._parser.parse(new_source)
        error = first_error(new_tree.root_node)
        if error is not None:
            row, _column = error.start_point
            lines = new_source.decode("utf-8", errors="replace").splitlines()
            snippet = lines[row] if row < len(lines) else ""
            raise TransformationValidationError(
                f"Edit produced invalid source at line {row + 1}", line=row + 1, snippet=snippet
            )
        self._source = new_source
        self._tree = new_tree
        self._generation += 1


class Path:
    """Handle on one syntax node of a specific tree generation."""

    __slots__ = ("_tree", "_node", "_generation")

    def __init__(self, tree: SourceTree, node: Node) -> None:
        self._tree = tree
        self._node = node
        self._generation = tree.generation

    @property
    def tree(self) -> SourceTree:
        return self._tree

    @property
    def node(self) -> Node:
        self._tree.check_generation(self._generation)
        return self._node

    @property
    def type(self) -> str:
        return self.node.type

    @property
    def text(self) -> str:
        return self._tree.text_of(self.node)

    @property
    def start_byte(self) -> int:
        return self.node.start_byte

    @property
    def end_byte(self) -> int:
        return self.node.end_byte

    @property
    def line(self) -> int:
        """1-based line of the node's first character."""
        return self.node.start_point[0] + 1

    @property
    def parent(self) -> Path | None:
        parent = self.node.parent
        return Path(self._tree, parent) if parent is not None else None

    @property
    def named_children(self) -> list[Path]:
        return [Path(self._tree, child) for child in self.node.named_children]

    def field(self, name: str) -> Path | None:
        child = self.node.child_by_field_name(name)
        return Path(self._tree, child) if child is not None else None

    def ancestors(self) -> Iterator[Path]:
        """Yield the enclosing nodes from the parent up to the program."""
        parent = self.node.parent
        while parent is not None:
            yield Path(self._tree, parent)
            parent = parent.parent

    def descendants(self) -> Iterator[Path]:
        """Yield this node and all named descendants in document order."""
        stack = [self.node]
        while stack:
            current = stack.pop()
            yield Path(self._tree, current)
            stack.extend(reversed(current.named_children))

    def is_statement(self) -> bool:
        parent = self.node.parent
        return parent is not None and parent.type in STATEMENT_CONTAINERS

    def contains(self, other: Path) -> bool:
        return self.start_byte <= other.start_byte and other.end_byte <= self.end_byte

    def find(self, pattern: Pattern) -> MatchSet:
        from .patterns import MatchSet

        return MatchSet.descendants_of([self], pattern)

    def closest(self, pattern: Pattern) -> Path | None:
        """Nearest ancestor (excluding this node) matching ``pattern``."""
        for ancestor in self.ancestors():
            if pattern.matches(ancestor):
                return ancestor
        return None

    def text_with(self, replacements: list[tuple[Path, str]]) -> str:
        """Source text of this node with the given sub-nodes replaced.

        Replacements must lie inside this node and must not overlap.
        """
        start = self.start_byte
        source = self._tree.source_bytes
        pieces: list[bytes] = []
        cursor = start
        for path, text in sorted(replacements, key=lambda item: item[0].start_byte):
            if not self.contains(path) or path.start_byte < cursor:
                raise TransformationError("Replacement range is outside the node or overlaps another")
            pieces.append(source[cursor : path.start_byte])
            pieces.append(text.encode("utf-8"))
            cursor = path.end_byte
        pieces.append(source[cursor : self.end_byte])
        return b"".join(pieces).decode("utf-8")

    def replace_with(self, text: str) -> None:
        node = self.node
        self._tree.record_edit(node.start_byte, node.end_byte, text)

    def remove(self) -> None:
        """Delete the node; a statement on its own line takes the whole line with it."""
        node = self.node
        start, end = node.start_byte, node.end_byte
        if self.is_statement():
            start, end = self._line_extent(start, end)
        self._tree.record_edit(start, end, "")

    def insert_before(self, text: str) -> None:
        """Insert ``text`` on its own line above this statement, matching its indentation."""
        node = self.node
        line_start = self._tree.line_start(node.start_byte)
        indent = self._tree.indentation_at(node.start_byte)
        if self._tree.source_bytes[line_start : node.start_byte].strip():
            self._tree.record_edit(node.start_byte, node.start_byte, f"{text}\n{indent}")
        else:
            self._tree.record_edit(line_start, line_start, f"{indent}{text}\n")

    def _line_extent(self, start: int, end: int) -> tuple[int, int]:
        source = self._tree.source_bytes
        line_start = self._tree.line_start(start)
        line_end = self._tree.line_end(end)
        before = source[line_start:start]
        after = source[end:line_end]
        if before.strip() or after.strip():
            return start, end
        return line_start, line_end

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Path):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self) -> int:
        return hash(self._key())

    def _key(self) -> tuple[int, int, int, str]:
        return (self._generation, self._node.start_byte, self._node.end_byte, self._node.type)

    def __repr__(self) -> str:
        return f"Path({self._node.type}@{self._node.start_byte}:{self._node.end_byte}, gen={self._generation})"
