"""Load a context snapshot from disk."""

from __future__ import annotations

from pathlib import Path

from zerotrust_engine.context.context import Context
from zerotrust_engine.utils.file_helpers import load_validated_json, require_file_exists

__all__ = ["load_context"]


def load_context(path: Path) -> Context:
    """Load a Context from a JSON file.

    Args:
        path: Path to the context JSON.

    Returns:
        Validated Context.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is not valid JSON or fails validation.
    """
    require_file_exists(path, file_type="context")
    return load_validated_json(path, Context, file_type="context")
