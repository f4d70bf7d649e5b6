# dutyroster/core/storage.py
"""
Loading of the shift type configuration file.
"""

import json
import logging
from functools import cache
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from dutyroster.core.config import DATA_DIR
from dutyroster.core.models import ShiftKind, ShiftType

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """General error type for problems loading data files."""

    pass


def _load_json(file_path: Path) -> list[Any] | dict[str, Any]:
    """
    Read and parse JSON with robust error handling.
    Args:
        file_path: Path to the JSON file
    Returns:
        Parsed JSON data as list or dict
    Raises:
        StorageError: If file cannot be read or JSON is invalid
    """
    try:
        raw = file_path.read_text(encoding="utf-8")
    except OSError as e:
        logger.exception("Failed to read JSON file %s", file_path)
        raise StorageError(f"Could not read JSON file {file_path}: {e}") from e

    try:
        return json.loads(raw)
    except json.JSONDecodeError as e:
        logger.exception("Invalid JSON in file %s", file_path)
        raise StorageError(f"Invalid JSON in file {file_path}: {e}") from e


def load_shift_types(data_dir: Path = DATA_DIR) -> list[ShiftType]:
    """
    Load shift type definitions (default times and colors) from data file.
    Returns:
        List of shift types
    Raises:
        StorageError: If file cannot be loaded or parsed, or a type is missing
    """
    file_path = data_dir / "shift_types.json"
    data = _load_json(file_path)
    try:
        if not isinstance(data, list):
            raise TypeError("Expected list of shift types")
        shift_types = [ShiftType(**item) for item in data]
    except (TypeError, ValidationError) as e:
        logger.exception("Failed to parse shift types from %s", file_path)
        raise StorageError(f"Could not parse shift types from {file_path}: {e}") from e

    missing = set(ShiftKind) - {st.code for st in shift_types}
    if missing:
        names = ", ".join(sorted(kind.value for kind in missing))
        logger.error("Shift types missing from %s: %s", file_path, names)
        raise StorageError(f"Shift types missing from {file_path}: {names}")

    return shift_types


@cache
def get_shift_types() -> dict[ShiftKind, ShiftType]:
    """Shift type definitions keyed by kind, loaded once per process."""
    return {st.code: st for st in load_shift_types()}
