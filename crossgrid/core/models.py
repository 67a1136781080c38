"""Data models supporting the layout engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Set, Tuple

from .constants import Direction


Coord = Tuple[int, int]


@dataclass(frozen=True)
class WordEntry:
    """A word to place together with its opaque hint."""

    word: str
    hint: str = ""


@dataclass
class Cell:
    """Per-cell occupancy state owned by the grid."""

    letter: Optional[str] = None
    directions: Set[Direction] = field(default_factory=set)
    stamps: Set[int] = field(default_factory=set)

    def is_blank(self) -> bool:
        return self.letter is None

    def is_crossing(self) -> bool:
        return len(self.directions) == 2


@dataclass(frozen=True)
class Placement:
    """A committed word placement."""

    word: str
    head: Coord
    direction: Direction
    cells: Tuple[Coord, ...]
    stamp: int


Classification = Dict[Direction, List[Tuple[int, str]]]


def empty_classification() -> Classification:
    return {Direction.ACROSS: [], Direction.DOWN: []}
