"""Shared constants and enumerations for the layout engine."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Tuple


BLANK_SYMBOL = "#"


class Direction(str, Enum):
    """Placement orientations supported by the grid.

    ``ACROSS`` runs along increasing column, ``DOWN`` along increasing row.
    """

    ACROSS = "ACROSS"
    DOWN = "DOWN"

    @property
    def opposite(self) -> "Direction":
        return Direction.DOWN if self is Direction.ACROSS else Direction.ACROSS

    @property
    def key(self) -> str:
        """Lowercase name used in serialized layout records."""
        return self.value.lower()


ORTHOGONAL_STEPS: Tuple[Tuple[int, int], ...] = ((0, 1), (1, 0), (0, -1), (-1, 0))


@dataclass(frozen=True)
class Bounds:
    """Square grid bounds helper."""

    size: int

    def contains(self, row: int, col: int) -> bool:
        return 0 <= row < self.size and 0 <= col < self.size

    def offset(self, row: int, col: int) -> int:
        return row * self.size + col

    def cell_at(self, offset: int) -> Tuple[int, int]:
        return divmod(offset, self.size)
