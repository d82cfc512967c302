"""File helpers shared by config, policy and context loading.

Provides JSON loading with pydantic validation and readable error messages.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from zerotrust_engine.constants import CONFIG_DIR

__all__ = [
    "format_validation_errors",
    "get_app_dir",
    "load_json_file",
    "load_validated_json",
    "require_file_exists",
]

ModelT = TypeVar("ModelT", bound=BaseModel)


def get_app_dir() -> Path:
    """Get the OS-appropriate config directory.

    Returns:
        Path to the zerotrust-engine config directory.
    """
    return Path(CONFIG_DIR)


def require_file_exists(path: Path, file_type: str = "file") -> None:
    """Raise FileNotFoundError if path does not exist.

    Args:
        path: Path to check.
        file_type: Human-readable kind of file, used in the message.

    Raises:
        FileNotFoundError: If the file is missing.
    """
    if not path.exists():
        raise FileNotFoundError(f"{file_type.capitalize()} file not found at {path}.")


def format_validation_errors(error: ValidationError) -> str:
    """Format pydantic validation errors as an indented bullet list."""
    lines = []
    for item in error.errors():
        loc = ".".join(str(x) for x in item["loc"])
        lines.append(f"  - {loc}: {item['msg']}")
    return "\n".join(lines)


def load_json_file(path: Path, file_type: str = "file", encoding: str = "utf-8") -> Any:
    """Read and parse a JSON file.

    Args:
        path: File to read.
        file_type: Human-readable kind of file, used in error messages.
        encoding: Text encoding of the file.

    Returns:
        The parsed JSON value.

    Raises:
        ValueError: If the file cannot be read or is not valid JSON.
    """
    try:
        with path.open(encoding=encoding) as f:
            return json.load(f)
    except json.JSONDecodeError as e:
        raise ValueError(f"Invalid JSON in {file_type} file {path}: {e}") from e
    except OSError as e:
        raise ValueError(f"Could not read {file_type} file {path}: {e}") from e


def load_validated_json(
    path: Path,
    model: type[ModelT],
    file_type: str = "file",
    recovery_hint: str | None = None,
    encoding: str = "utf-8",
) -> ModelT:
    """Load a JSON file and validate it against a pydantic model.

    Args:
        path: File to read.
        model: Model class to validate against.
        file_type: Human-readable kind of file, used in error messages.
        recovery_hint: Optional line appended to validation errors.
        encoding: Text encoding of the file.

    Returns:
        Validated model instance.

    Raises:
        ValueError: If the file is unreadable, not JSON, or fails validation.
    """
    data = load_json_file(path, file_type=file_type, encoding=encoding)

    try:
        return model.model_validate(data)
    except ValidationError as e:
        message = f"Invalid {file_type} in {path}:\n" + format_validation_errors(e)
        if recovery_hint:
            message += f"\n\n{recovery_hint}"
        raise ValueError(message) from e
