"""Pure placement geometry: which cells a word occupies."""

from __future__ import annotations

from typing import List, Sequence, Tuple

from ..core.constants import Direction
from ..core.models import Coord


def step(direction: Direction) -> Tuple[int, int]:
    """Return the (row, col) delta between consecutive letters."""
    return (0, 1) if direction == Direction.ACROSS else (1, 0)


def lateral_steps(direction: Direction) -> Tuple[Tuple[int, int], Tuple[int, int]]:
    """Return the two deltas orthogonal to the placement axis."""
    if direction == Direction.ACROSS:
        return ((-1, 0), (1, 0))
    return ((0, -1), (0, 1))


def sequence(head: Coord, direction: Direction, word: str) -> List[Coord]:
    """Cells covered by ``word`` starting at ``head``; bounds are not checked."""
    dr, dc = step(direction)
    row, col = head
    return [(row + dr * i, col + dc * i) for i in range(len(word))]


def before_head(cells: Sequence[Coord], direction: Direction) -> Coord:
    dr, dc = step(direction)
    row, col = cells[0]
    return row - dr, col - dc


def after_tail(cells: Sequence[Coord], direction: Direction) -> Coord:
    dr, dc = step(direction)
    row, col = cells[-1]
    return row + dr, col + dc


def head_for(anchor: Coord, index: int, direction: Direction) -> Coord:
    """Head that puts letter ``index`` of a word on ``anchor``."""
    dr, dc = step(direction)
    return anchor[0] - dr * index, anchor[1] - dc * index
