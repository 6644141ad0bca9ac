"""splurge_enzyme_to_rtl package.

This initializer is intentionally lightweight to avoid importing
submodules (and the tree-sitter grammars) at package import time.
Consumers and tests should import the submodules directly (for example:
``from splurge_enzyme_to_rtl import main`` will import the
``splurge_enzyme_to_rtl.main`` submodule on demand).

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

__version__ = "2025.0.1"
__author__ = "Jim Schilling"
__description__ = "Automated enzyme to React Testing Library migration tool"

# Public API names. Submodules are imported lazily when accessed.
__all__ = [
    "main",
    "MigrationOrchestrator",
    "PipelineContext",
    "MigrationConfig",
    "Result",
    "ResultStatus",
    "EventBus",
    "LoggingSubscriber",
    "Step",
    "Task",
    "Job",
    "Pipeline",
    "SourceTree",
    "EnzymeToRtlCodemod",
    "DomSnapshot",
    "Diagnostic",
    "DiagnosticCode",
    # Exceptions
    "MigrationError",
    "ParseError",
    "TransformationError",
    "TransformationValidationError",
    "UnsupportedInputError",
    "StalePathError",
    "ValidationError",
    "ConfigurationError",
]


def __getattr__(name: str):
    """Lazily import submodules/attributes on demand to avoid circular imports."""
    import importlib

    mapping = {
        "main": "splurge_enzyme_to_rtl.main",
        "cli": "splurge_enzyme_to_rtl.cli",
        "MigrationOrchestrator": "splurge_enzyme_to_rtl.migration_orchestrator",
        "PipelineContext": "splurge_enzyme_to_rtl.context",
        "MigrationConfig": "splurge_enzyme_to_rtl.context",
        "EventBus": "splurge_enzyme_to_rtl.events",
        "LoggingSubscriber": "splurge_enzyme_to_rtl.events",
        "Result": "splurge_enzyme_to_rtl.result",
        "ResultStatus": "splurge_enzyme_to_rtl.result",
        "Job": "splurge_enzyme_to_rtl.pipeline",
        "Pipeline": "splurge_enzyme_to_rtl.pipeline",
        "Task": "splurge_enzyme_to_rtl.pipeline",
        "Step": "splurge_enzyme_to_rtl.pipeline",
        "CollectorJob": "splurge_enzyme_to_rtl.jobs",
        "OutputJob": "splurge_enzyme_to_rtl.jobs",
        "SourceTree": "splurge_enzyme_to_rtl.tree",
        "EnzymeToRtlCodemod": "splurge_enzyme_to_rtl.transformers",
        "DomSnapshot": "splurge_enzyme_to_rtl.transformers",
        "Diagnostic": "splurge_enzyme_to_rtl.diagnostics",
        "DiagnosticCode": "splurge_enzyme_to_rtl.diagnostics",
        # Exceptions
        "MigrationError": "splurge_enzyme_to_rtl.exceptions",
        "ParseError": "splurge_enzyme_to_rtl.exceptions",
        "TransformationError": "splurge_enzyme_to_rtl.exceptions",
        "TransformationValidationError": "splurge_enzyme_to_rtl.exceptions",
        "UnsupportedInputError": "splurge_enzyme_to_rtl.exceptions",
        "StalePathError": "splurge_enzyme_to_rtl.exceptions",
        "ValidationError": "splurge_enzyme_to_rtl.exceptions",
        "ConfigurationError": "splurge_enzyme_to_rtl.exceptions",
    }

    if name not in mapping:
        raise AttributeError(f"module {__name__!r} has no attribute {name!r}")

    module = importlib.import_module(mapping[name])

    # For 'main' and 'cli' we return the module itself
    if name in {"main", "cli"}:
        return module

    return getattr(module, name)


def __dir__():
    return sorted(list(globals().keys()) + __all__)
