"""Syntax-tree based enzyme file detection.

Directory migration only converts files that actually use enzyme. This
module decides that from the parsed syntax tree instead of a text search,
so a comment or string that merely mentions ``mount(`` is not a match.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

from pathlib import Path

from ..transformers.import_transformer import LEGACY_MODULE, has_import
from ..transformers.render_transformer import RENDER_PRIMITIVES
from ..tree import SourceTree, call_to


class EnzymeFileDetector:
    """Detects enzyme test files through structural analysis.

    A file counts as an enzyme test when it imports from ``enzyme`` or
    calls ``mount``/``shallow`` directly.

    Args:
        max_file_size_mb: Files larger than this are never reported.
    """

    def __init__(self, max_file_size_mb: int = 10) -> None:
        self.max_file_size_mb = max_file_size_mb
        self.has_enzyme_import = False
        self.has_render_call = False

    def is_enzyme_file(self, file_path: str | Path) -> bool:
        """Check if a file contains enzyme code.

        Args:
            file_path: Path to the test file to analyze.

        Returns:
            True if the file imports enzyme or renders with it.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            UnicodeDecodeError: If the file can't be decoded as UTF-8.
            ParseError: If the file contains syntax errors.
        """
        file_path = Path(file_path)
        if file_path.stat().st_size > self.max_file_size_mb * 1024 * 1024:
            return False

        source_code = file_path.read_text(encoding="utf-8")
        return self.is_enzyme_source(source_code, str(file_path))

    def is_enzyme_source(self, source_code: str, file_path: str | None = None) -> bool:
        tree = SourceTree(source_code, file_path)
        self.has_enzyme_import = has_import(tree, LEGACY_MODULE)
        self.has_render_call = any(tree.find(call_to(name)) for name in RENDER_PRIMITIVES)
        return self.has_enzyme_import or self.has_render_call
