"""Legality checks for a candidate word placement."""

from __future__ import annotations

from typing import Sequence

from ..core.constants import Direction
from ..core.models import Coord
from .geometry import after_tail, before_head, lateral_steps
from .grid import CrosswordGrid


def is_legal(word: str, cells: Sequence[Coord], direction: Direction, grid: CrosswordGrid) -> bool:
    """Return True when ``word`` may be written onto ``cells``.

    Checks run in order and stop at the first failure:

    1. every cell lies inside the grid;
    2. the cells just before the head and just after the tail are blank;
    3. no cell touches a non-sibling letter across the placement axis;
    4. occupied cells hold the same letter and are used only by the
       opposite direction.
    """

    return (
        within_bounds(cells, grid)
        and end_caps_clear(cells, direction, grid)
        and laterally_isolated(cells, direction, grid)
        and overlaps_consistent(word, cells, direction, grid)
    )


def within_bounds(cells: Sequence[Coord], grid: CrosswordGrid) -> bool:
    return all(grid.bounds.contains(row, col) for row, col in cells)


def end_caps_clear(cells: Sequence[Coord], direction: Direction, grid: CrosswordGrid) -> bool:
    for row, col in (before_head(cells, direction), after_tail(cells, direction)):
        if grid.bounds.contains(row, col) and not grid.is_blank(row, col):
            return False
    return True


def laterally_isolated(cells: Sequence[Coord], direction: Direction, grid: CrosswordGrid) -> bool:
    for loc in cells:
        for dr, dc in lateral_steps(direction):
            neighbor = (loc[0] + dr, loc[1] + dc)
            if not grid.bounds.contains(*neighbor) or grid.is_blank(*neighbor):
                continue
            if not grid.are_siblings(loc, neighbor):
                return False
    return True


def overlaps_consistent(
    word: str, cells: Sequence[Coord], direction: Direction, grid: CrosswordGrid
) -> bool:
    expected = {direction.opposite}
    for letter, (row, col) in zip(word, cells):
        cell = grid.cell(row, col)
        if cell.letter is None:
            continue
        if cell.letter != letter or cell.directions != expected:
            return False
    return True
