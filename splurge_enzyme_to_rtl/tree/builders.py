"""Helpers that read literal values from nodes and build replacement text.

New string literals are always emitted double-quoted; when an existing
literal is rewritten in place its original quote character is kept.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import json
import re

from .patterns import NodeKind, call_arguments
from .source_tree import Path

_ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|.)", re.DOTALL)
_SIMPLE_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "v": "\v", "0": "\0"}


def _unescape(match: re.Match[str]) -> str:
    body = match.group(1)
    if body.startswith("u{"):
        return chr(int(body[2:-1], 16))
    if body[0] in "ux" and len(body) > 1:
        return chr(int(body[1:], 16))
    if body == "\n":
        return ""
    return _SIMPLE_ESCAPES.get(body, body)


def js_string(value: str) -> str:
    """Double-quoted JavaScript string literal for ``value``."""
    return json.dumps(value, ensure_ascii=False)


def quote_like(original: str, value: str) -> str:
    """String literal for ``value`` using the quote character of ``original``."""
    quote = original[:1]
    if quote not in ("'", '"'):
        return js_string(value)
    escaped = value.replace("\\", "\\\\").replace(quote, "\\" + quote)
    return f"{quote}{escaped}{quote}"


def string_value(path: Path | None) -> str | None:
    """Value of a plain string literal, or ``None`` for any other node."""
    if path is None or path.type != NodeKind.STRING.value:
        return None
    raw = path.text[1:-1]
    return _ESCAPE.sub(_unescape, raw)


def module_source(statement: Path) -> Path | None:
    """String literal naming the module of an import or re-export statement."""
    source = statement.field("source")
    if source is not None or statement.type != NodeKind.IMPORT_DECLARATION.value:
        return source
    for child in statement.named_children:
        if child.type == NodeKind.STRING.value:
            return child
    return None


def first_argument(call: Path) -> Path | None:
    arguments = call_arguments(call)
    return arguments[0] if arguments else None


def argument_text(call: Path) -> str:
    """Source text between the call's parentheses."""
    arguments = call.field("arguments")
    if arguments is None:
        return ""
    return arguments.text[1:-1].strip()


def receiver_of(call: Path) -> Path | None:
    """``X`` in ``X.method(...)``."""
    callee = call.field("function")
    if callee is None or callee.type != NodeKind.MEMBER_EXPRESSION.value:
        return None
    return callee.field("object")


def method_name(call: Path) -> str | None:
    """``method`` in ``X.method(...)``."""
    callee = call.field("function")
    if callee is None or callee.type != NodeKind.MEMBER_EXPRESSION.value:
        return None
    prop = callee.field("property")
    return prop.text if prop is not None else None


def unwrap_await(path: Path | None) -> Path | None:
    """Inner expression of ``await X``; other nodes are returned unchanged."""
    while path is not None and path.type == NodeKind.AWAIT_EXPRESSION.value:
        inner = [child for child in path.named_children if child.type != "comment"]
        path = inner[0] if inner else None
    return path


def call_text(callee: str, *args: str) -> str:
    return f"{callee}({', '.join(args)})"
