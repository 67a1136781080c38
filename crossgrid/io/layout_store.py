"""Persisting and reloading solved layouts.

The record written to disk is::

    {
      "across": {"WORD": [offset, "hint"], ...},
      "down":   {"WORD": [offset, "hint"], ...},
      "blanks": [offset, ...],
      "size":   N
    }

Offsets are ``row * size + col``, zero-based and row-major. A grid can be
rebuilt from the record alone with :func:`reconstruct_grid`.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

from ..core.constants import Bounds, Direction
from ..core.exceptions import ValidationError
from ..engine.geometry import sequence
from ..utils.logger import get_logger

if TYPE_CHECKING:
    from ..engine.generator import CrosswordResult


LOGGER = get_logger(__name__)

DEFAULT_OUTPUT_PATH = Path("grid_details.json")


def save_layout(
    layout: Union["CrosswordResult", Mapping[str, Any]],
    path: Path | str = DEFAULT_OUTPUT_PATH,
) -> Path:
    """Write the layout record as JSON and return the path written."""

    record = layout.to_record() if hasattr(layout, "to_record") else dict(layout)
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(record, ensure_ascii=False, indent=2), encoding="utf-8")
    LOGGER.info("Layout saved: %s", path)
    return path


def load_layout(path: Path | str) -> Dict[str, Any]:
    path = Path(path)
    try:
        record = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        raise ValidationError(f"Cannot read layout record {path}: {exc}") from exc
    _check_record_shape(record)
    return record


def reconstruct_grid(record: Mapping[str, Any]) -> List[List[Optional[str]]]:
    """Rebuild the letter grid (``None`` for blanks) from a layout record."""

    _check_record_shape(record)
    size = record["size"]
    bounds = Bounds(size)
    letters: List[List[Optional[str]]] = [[None] * size for _ in range(size)]

    for direction in (Direction.ACROSS, Direction.DOWN):
        for word, (offset, _hint) in record[direction.key].items():
            head = bounds.cell_at(offset)
            for letter, (row, col) in zip(word, sequence(head, direction, word)):
                if not bounds.contains(row, col):
                    raise ValidationError(f"Word '{word}' at offset {offset} leaves the grid")
                existing = letters[row][col]
                if existing is not None and existing != letter:
                    raise ValidationError(
                        f"Word '{word}' conflicts with '{existing}' at ({row},{col})"
                    )
                letters[row][col] = letter

    blanks = set(record["blanks"])
    for row in range(size):
        for col in range(size):
            listed_blank = bounds.offset(row, col) in blanks
            if listed_blank != (letters[row][col] is None):
                raise ValidationError(
                    f"Blank list disagrees with placed words at ({row},{col})"
                )
    return letters


def _check_record_shape(record: Any) -> None:
    if not isinstance(record, Mapping):
        raise ValidationError("Layout record must be a mapping")
    missing = [key for key in ("across", "down", "blanks", "size") if key not in record]
    if missing:
        raise ValidationError(f"Layout record missing keys: {missing}")
    size = record["size"]
    if isinstance(size, bool) or not isinstance(size, int) or size <= 0:
        raise ValidationError(f"Layout record has invalid size {size!r}")
    for key in ("across", "down"):
        entries = record[key]
        if not isinstance(entries, Mapping):
            raise ValidationError(f"Layout record '{key}' must map words to [offset, hint]")
        for word, value in entries.items():
            if not isinstance(value, (list, tuple)) or len(value) != 2 or not isinstance(value[0], int):
                raise ValidationError(f"Entry for '{word}' must be [offset, hint]")
            if not 0 <= value[0] < size * size:
                raise ValidationError(f"Entry for '{word}' has offset {value[0]} outside the grid")
