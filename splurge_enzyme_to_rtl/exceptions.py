"""Custom exception classes for the enzyme-to-RTL migration tool.

This module defines a small hierarchy of exceptions used by the
codemod passes and the migration pipeline. Each exception carries an
optional ``details`` mapping with structured context (source file,
line, node type) so callers can diagnose failures programmatically.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from typing import Any


class MigrationError(Exception):
    """Base exception for migration-related errors.

    Args:
        message: Human-readable error message.
        details: Optional mapping with structured diagnostic data.
    """

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ParseError(MigrationError):
    """Raised when a source file cannot be parsed as JavaScript/TypeScript.

    Args:
        message: Error message describing the parse failure.
        source_file: Path to the file being parsed.
        line: Optional 1-based line number of the first syntax error.
        column: Optional 0-based column of the first syntax error.
    """

    def __init__(self, message: str, source_file: str, line: int | None = None, column: int | None = None):
        details: dict[str, Any] = {"source_file": source_file}
        if line is not None:
            details["line"] = line
        if column is not None:
            details["column"] = column
        super().__init__(message, details)


class TransformationError(MigrationError):
    """Raised when a codemod pass cannot be applied.

    Args:
        message: Human-readable description of the failure.
        pass_name: Optional name of the pass that failed.
        node_type: Optional syntax node type involved in the failure.
    """

    def __init__(self, message: str, pass_name: str | None = None, node_type: str | None = None):
        details: dict[str, Any] = {}
        if pass_name:
            details["pass_name"] = pass_name
        if node_type:
            details["node_type"] = node_type
        super().__init__(message, details)


class TransformationValidationError(TransformationError):
    """Raised when a committed batch of edits yields unparseable source.

    The tree is left at its last valid state; the offending text is
    reported through ``details`` so it can be inspected.
    """

    def __init__(self, message: str, line: int | None = None, snippet: str | None = None):
        super().__init__(message, pass_name="validation")
        if line is not None:
            self.details["line"] = line
        if snippet is not None:
            self.details["snippet"] = snippet


class UnsupportedInputError(TransformationError):
    """Raised when a file mixes constructs the codemod refuses to guess about."""

    def __init__(self, message: str, source_file: str | None = None):
        super().__init__(message, pass_name="render")
        if source_file:
            self.details["source_file"] = source_file


class StalePathError(MigrationError):
    """Raised when a path or match set outlives the tree generation it was taken from."""

    def __init__(self, message: str, expected_generation: int, actual_generation: int):
        super().__init__(
            message,
            {"expected_generation": expected_generation, "actual_generation": actual_generation},
        )


class ValidationError(MigrationError):
    """Raised when input or configuration validation fails.

    Args:
        message: Description of the validation failure.
        validation_type: Identifier for the kind of validation performed.
        field: Optional field name that failed validation.
    """

    def __init__(self, message: str, validation_type: str, field: str | None = None):
        details: dict[str, Any] = {"validation_type": validation_type}
        if field:
            details["field"] = field
        super().__init__(message, details)


class ConfigurationError(MigrationError):
    """Raised when an application configuration is invalid.

    Args:
        message: Human readable description of the configuration problem.
        config_key: Optional configuration key that caused the error.
    """

    def __init__(self, message: str, config_key: str | None = None):
        details: dict[str, Any] = {}
        if config_key:
            details["config_key"] = config_key
        super().__init__(message, details)
