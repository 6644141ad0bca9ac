"""Syntax tree model used by the codemod passes.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .patterns import MatchSet, NodeKind, Pattern, call_arguments, call_to, identifier, method_call
from .source_tree import EditBatch, Path, SourceTree

__all__ = [
    "EditBatch",
    "MatchSet",
    "NodeKind",
    "Path",
    "Pattern",
    "SourceTree",
    "call_arguments",
    "call_to",
    "identifier",
    "method_call",
]
