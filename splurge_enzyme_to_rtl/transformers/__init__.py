"""Codemod passes that rewrite enzyme tests for React Testing Library.

Each module holds one pass over a :class:`~splurge_enzyme_to_rtl.tree.SourceTree`;
:class:`EnzymeToRtlCodemod` runs them in order.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from .codemod import CodemodOutcome, CodemodStatistics, EnzymeToRtlCodemod
from .dom_snapshot import DomSnapshot
from .import_transformer import absolutize_relative_specifiers, rewrite_imports
from .method_transformers import (
    convert_exists_assertions,
    convert_simulate_calls,
    convert_text_assertions,
    remove_chain_methods,
)
from .render_transformer import normalize_render_calls
from .selector_transformer import rewrite_find_selectors
from .selectors import Selector, SelectorKind
from .suggestion_transformer import add_suggestions
from .suggestions import SUGGESTION_MARKER
from .wrapper_resolver import resolve_wrapper_references

__all__ = [
    "EnzymeToRtlCodemod",
    "CodemodOutcome",
    "CodemodStatistics",
    "DomSnapshot",
    "Selector",
    "SelectorKind",
    "SUGGESTION_MARKER",
    "rewrite_imports",
    "absolutize_relative_specifiers",
    "normalize_render_calls",
    "resolve_wrapper_references",
    "rewrite_find_selectors",
    "convert_text_assertions",
    "convert_simulate_calls",
    "convert_exists_assertions",
    "remove_chain_methods",
    "add_suggestions",
]
