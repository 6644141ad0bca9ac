"""Non-fatal findings reported by the codemod passes.

Expected absences (no enzyme import, no ``mount``/``shallow`` call, no
wrapper bindings) are not errors: the passes record them as
:class:`Diagnostic` values through a :class:`DiagnosticReporter`, which
logs them and hands them to an optional listener (the pipeline uses it
to publish ``DiagnosticEvent``s). Diagnostics never appear in the
converted source.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

_logger = logging.getLogger(__name__)


class DiagnosticLevel(Enum):
    INFO = "info"
    WARNING = "warning"


class DiagnosticCode(Enum):
    """Kinds of findings the passes report."""

    MISSING_LEGACY_IMPORT = "missing-legacy-import"
    MISSING_RENDER_CALL = "missing-render-call"
    UNBOUND_RENDER_CALL = "unbound-render-call"
    NO_WRAPPER_BINDINGS = "no-wrapper-bindings"
    UNCONVERTED_SELECTOR = "unconverted-selector"
    UNMAPPED_SIMULATE_EVENT = "unmapped-simulate-event"


@dataclass(frozen=True)
class Diagnostic:
    code: DiagnosticCode
    message: str
    level: DiagnosticLevel = DiagnosticLevel.WARNING
    source_file: str | None = None
    line: int | None = None

    def __str__(self) -> str:
        location = self.source_file or "<memory>"
        if self.line is not None:
            location = f"{location}:{self.line}"
        return f"{location}: {self.code.value}: {self.message}"


class DiagnosticReporter:
    """Collects diagnostics for one file.

    Args:
        source_file: File the diagnostics refer to.
        listener: Optional callable invoked with every new diagnostic.
    """

    def __init__(self, source_file: str | None = None, listener: Callable[[Diagnostic], None] | None = None) -> None:
        self.source_file = source_file
        self._listener = listener
        self._diagnostics: list[Diagnostic] = []

    @property
    def diagnostics(self) -> list[Diagnostic]:
        return list(self._diagnostics)

    def report(
        self,
        code: DiagnosticCode,
        message: str,
        level: DiagnosticLevel = DiagnosticLevel.WARNING,
        line: int | None = None,
    ) -> Diagnostic:
        diagnostic = Diagnostic(code=code, message=message, level=level, source_file=self.source_file, line=line)
        self._diagnostics.append(diagnostic)
        if level is DiagnosticLevel.WARNING:
            _logger.warning(str(diagnostic))
        else:
            _logger.info(str(diagnostic))
        if self._listener is not None:
            self._listener(diagnostic)
        return diagnostic

    def warning(self, code: DiagnosticCode, message: str, line: int | None = None) -> Diagnostic:
        return self.report(code, message, DiagnosticLevel.WARNING, line)

    def info(self, code: DiagnosticCode, message: str, line: int | None = None) -> Diagnostic:
        return self.report(code, message, DiagnosticLevel.INFO, line)

    def warnings(self) -> list[str]:
        """Warning-level diagnostics rendered as strings for ``Result.warnings``."""
        return [str(d) for d in self._diagnostics if d.level is DiagnosticLevel.WARNING]
