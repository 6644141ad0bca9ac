"""Path validation and module-specifier helpers.

Copyright (c) 2025 Jim Schilling
This software is released under the MIT License.
"""

import os
import platform
import posixpath
from pathlib import Path

from ..exceptions import ValidationError

_INVALID_NAME_CHARS = '<>:"|?*'


class PathValidationError(ValidationError):
    """Raised when path validation fails."""

    def __init__(self, message: str, path: str, validation_type: str = "path"):
        self.path = path
        super().__init__(message, validation_type, field=path)


def validate_source_path(source_path: str | Path) -> Path:
    """Validate and normalize a source file path.

    Raises:
        PathValidationError: If the path is empty, too long for Windows or
            contains characters that are invalid in file names.
    """
    try:
        path = Path(source_path)
        path_str = str(source_path)

        if not path_str.strip():
            raise PathValidationError("Source path cannot be empty", path_str, "empty_path")

        if len(path_str) > 260 and platform.system() == "Windows":
            raise PathValidationError(
                f"Path length exceeds Windows limit of 260 characters: {len(path_str)}", path_str, "path_length"
            )

        if any(char in path.name for char in _INVALID_NAME_CHARS):
            raise PathValidationError(
                f"Path contains invalid characters: {_INVALID_NAME_CHARS}", path_str, "invalid_chars"
            )

        return path

    except (OSError, ValueError) as e:
        raise PathValidationError(f"Invalid path format: {e}", str(source_path), "path_format") from e


def validate_target_path(target_path: str | Path) -> Path:
    """Validate a target path without touching the filesystem.

    Raises:
        PathValidationError: If the path is empty or has an invalid name.
    """
    path = Path(target_path)
    if not str(target_path).strip():
        raise PathValidationError("Target path cannot be empty", str(target_path), "empty_path")
    if any(char in path.name for char in _INVALID_NAME_CHARS):
        raise PathValidationError(
            f"Path contains invalid characters: {_INVALID_NAME_CHARS}", str(path), "invalid_chars"
        )
    return path


def ensure_parent_dir(target_path: str | Path) -> None:
    """Create the parent directory of ``target_path`` when it is missing."""
    path = Path(target_path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PathValidationError(f"Cannot create parent directory: {e}", str(path.parent), "parent_creation") from e


def build_target_path(
    source_file: str | Path,
    target_root: str | None = None,
    suffix: str = "",
    extension: str | None = None,
) -> Path:
    """Compute where the converted copy of ``source_file`` is written.

    ``extension`` may be given with or without its leading dot. With no
    target root, suffix or extension the source path itself is returned.
    """
    source = Path(source_file)
    if extension is not None and extension and not extension.startswith("."):
        extension = f".{extension}"
    ext = extension if extension is not None else source.suffix
    name = f"{source.stem}{suffix}{ext}"
    directory = Path(target_root) if target_root else source.parent
    return directory / name


def is_relative_specifier(specifier: str) -> bool:
    return specifier.startswith("./") or specifier.startswith("../") or specifier in (".", "..")


def resolve_module_specifier(specifier: str, source_file: str | Path) -> str:
    """Resolve a relative module specifier against the importing file.

    The importing file's directory is resolved against the current working
    directory first, so the result is an absolute POSIX-style path that
    still points at the same module when the converted file lives
    elsewhere.
    """
    base_dir = Path(os.path.abspath(source_file)).parent.as_posix()
    return posixpath.normpath(posixpath.join(base_dir, specifier))
