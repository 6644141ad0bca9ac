"""Result type carried between pipeline stages.

``Result[T]`` wraps the outcome of a step, task, job or whole file
migration: a value, the warnings raised while producing it (for example
codemod diagnostics), or the exception that stopped it.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

T = TypeVar("T")
R = TypeVar("R")


class ResultStatus(Enum):
    """Possible outcomes of a pipeline operation."""

    SUCCESS = "success"
    WARNING = "warning"
    ERROR = "error"
    SKIPPED = "skipped"


@dataclass(frozen=True)
class Result(Generic[T]):
    """Immutable operation outcome with warnings and metadata.

    Use the ``success``, ``warning``, ``failure`` and ``skipped``
    constructors rather than building instances directly.
    """

    status: ResultStatus
    data: T | None = None
    error: Exception | None = None
    warnings: list[str] | None = None
    metadata: dict[str, Any] | None = None

    def __post_init__(self) -> None:
        """Validate internal consistency of the result instance.

        Success results never carry an error and error results never
        carry data.
        """
        if self.status == ResultStatus.SUCCESS and self.error is not None:
            raise ValueError("Success results cannot have errors")
        if self.status == ResultStatus.ERROR and self.data is not None:
            raise ValueError("Error results cannot have data")
        if self.warnings is None:
            object.__setattr__(self, "warnings", [])
        if self.metadata is None:
            object.__setattr__(self, "metadata", {})

    @classmethod
    def success(cls, data: T, metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create a successful result.

        Args:
            data: Value produced by the operation.
            metadata: Optional metadata mapping.

        Returns:
            ``Result`` with ``status==SUCCESS``.
        """
        return cls(status=ResultStatus.SUCCESS, data=data, metadata=metadata or {})

    @classmethod
    def failure(cls, error: Exception, metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create an error result.

        Args:
            error: Exception describing the failure.
            metadata: Optional metadata mapping.

        Returns:
            ``Result`` with ``status==ERROR``.
        """
        return cls(status=ResultStatus.ERROR, error=error, metadata=metadata or {})

    @classmethod
    def warning(cls, data: T, warnings: list[str], metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create a result that produced ``data`` with warnings.

        Args:
            data: Value produced by the operation.
            warnings: Warning messages, for example codemod diagnostics.
            metadata: Optional metadata mapping.

        Returns:
            ``Result`` with ``status==WARNING``.
        """
        return cls(status=ResultStatus.WARNING, data=data, warnings=warnings, metadata=metadata or {})

    @classmethod
    def skipped(cls, reason: str, metadata: dict[str, Any] | None = None) -> "Result[T]":
        """Create a skipped result.

        Args:
            reason: Why the operation was skipped; stored under
                ``metadata["reason"]``.
            metadata: Optional metadata mapping.

        Returns:
            ``Result`` with ``status==SKIPPED``.
        """
        return cls(status=ResultStatus.SKIPPED, metadata={**(metadata or {}), "reason": reason})

    def is_success(self) -> bool:
        return self.status == ResultStatus.SUCCESS

    def is_error(self) -> bool:
        return self.status == ResultStatus.ERROR

    def is_warning(self) -> bool:
        return self.status == ResultStatus.WARNING

    def is_skipped(self) -> bool:
        return self.status == ResultStatus.SKIPPED

    def is_ok(self) -> bool:
        """Return True for results that produced usable data (success or warning)."""
        return self.status in (ResultStatus.SUCCESS, ResultStatus.WARNING)

    def map(self, func: Callable[[T], R]) -> "Result[R]":
        """Apply ``func`` to the data of a success or warning result.

        Errors and skips pass through unchanged; an exception raised by
        ``func`` becomes an error result.
        """
        if self.is_error():
            return Result[R](status=ResultStatus.ERROR, error=self.error, warnings=self.warnings, metadata=self.metadata)
        if self.is_skipped():
            return Result[R](status=ResultStatus.SKIPPED, metadata=self.metadata)
        if self.data is None:
            return Result.failure(ValueError("Cannot map over None data"), self.metadata)

        try:
            new_data = func(self.data)
        except Exception as e:
            return Result.failure(e, self.metadata)
        status = ResultStatus.WARNING if self.warnings else ResultStatus.SUCCESS
        return Result[R](status=status, data=new_data, warnings=self.warnings, metadata=self.metadata)

    def unwrap(self) -> T:
        """Return the data or raise the stored error.

        Raises:
            Exception: The wrapped error, or ``RuntimeError`` for skipped
                or empty results.
        """
        if self.is_error():
            raise self.error or RuntimeError("Result contains error")
        if self.is_skipped():
            raise RuntimeError("Result was skipped")
        if self.data is None:
            raise RuntimeError("Result contains no data")
        return self.data

    def unwrap_or(self, default_value: T) -> T:
        if self.is_ok() and self.data is not None:
            return self.data
        return default_value

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "data": self.data,
            "error": str(self.error) if self.error else None,
            "warnings": self.warnings,
            "metadata": self.metadata,
        }

    def __str__(self) -> str:
        if self.is_success():
            return f"Result(success, data={self.data})"
        elif self.is_error():
            return f"Result(error, error={self.error})"
        elif self.is_warning():
            return f"Result(warning, data={self.data}, warnings={self.warnings})"
        return f"Result(skipped, metadata={self.metadata})"
