"""Head candidate generation for the backtracking search."""

from __future__ import annotations

from typing import Dict, List

from ..core.constants import Direction
from ..core.models import Coord
from .geometry import head_for
from .grid import CrosswordGrid


def letter_positions(word: str) -> Dict[str, List[int]]:
    positions: Dict[str, List[int]] = {}
    for index, letter in enumerate(word):
        positions.setdefault(letter, []).append(index)
    return positions


def candidate_heads(word: str, direction: Direction, grid: CrosswordGrid) -> List[Coord]:
    """Propose head cells for ``word`` in ``direction``.

    On a blank grid every cell is a candidate, in row-major order. Otherwise a
    head is proposed for each occupied cell not yet used in ``direction`` and
    each index of ``word`` holding that cell's letter, so the word would cross
    the existing letter there. Candidates are not bounds-checked and appear once,
    in first-seen order.
    """

    if grid.is_empty:
        return [(r, c) for r in range(grid.size) for c in range(grid.size)]

    positions = letter_positions(word)
    heads: List[Coord] = []
    seen = set()
    for row, col in grid.occupied():
        cell = grid.cell(row, col)
        if direction in cell.directions:
            continue
        for index in positions.get(cell.letter, ()):
            head = head_for((row, col), index, direction)
            if head not in seen:
                seen.add(head)
                heads.append(head)
    return heads
