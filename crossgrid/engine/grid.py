"""Grid representation and helper utilities."""

from __future__ import annotations

from typing import Iterator, List, Optional, Sequence

from ..core.constants import BLANK_SYMBOL, Bounds, Direction, ORTHOGONAL_STEPS
from ..core.exceptions import PlacementError
from ..core.models import Cell, Coord, Placement


class CrosswordGrid:
    """Mutable square board shared by one restart attempt.

    Every committed word receives a stamp. A cell stores the stamps of the
    words covering it, so two cells are siblings exactly when they share a
    stamp, and undoing a word only has to discard its stamp from its cells.
    Commits and removals follow a strict stack order.
    """

    def __init__(self, size: int) -> None:
        if size <= 0:
            raise ValueError(f"Grid size must be positive, got {size}")
        self.size = size
        self.bounds = Bounds(size)
        self.cells: List[List[Cell]] = [[Cell() for _ in range(size)] for _ in range(size)]
        self._stack: List[Placement] = []
        self._next_stamp = 0
        self._filled_count = 0
        self._crossing_count = 0

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def cell(self, row: int, col: int) -> Cell:
        return self.cells[row][col]

    def letter(self, row: int, col: int) -> Optional[str]:
        return self.cells[row][col].letter

    def is_blank(self, row: int, col: int) -> bool:
        return self.cells[row][col].letter is None

    @property
    def is_empty(self) -> bool:
        return self._filled_count == 0

    @property
    def filled_count(self) -> int:
        return self._filled_count

    @property
    def crossing_count(self) -> int:
        """Number of cells used by both an across and a down word."""
        return self._crossing_count

    @property
    def placements(self) -> List[Placement]:
        return list(self._stack)

    def are_siblings(self, first: Coord, second: Coord) -> bool:
        a = self.cells[first[0]][first[1]]
        b = self.cells[second[0]][second[1]]
        return not a.stamps.isdisjoint(b.stamps)

    def neighbors(self, row: int, col: int) -> Iterator[Coord]:
        for dr, dc in ORTHOGONAL_STEPS:
            nr, nc = row + dr, col + dc
            if self.bounds.contains(nr, nc):
                yield nr, nc

    def occupied(self) -> Iterator[Coord]:
        """Yield non-blank cells in row-major order."""
        for r, row in enumerate(self.cells):
            for c, cell in enumerate(row):
                if cell.letter is not None:
                    yield r, c

    def blank_offsets(self) -> List[int]:
        return [
            self.bounds.offset(r, c)
            for r in range(self.size)
            for c in range(self.size)
            if self.cells[r][c].letter is None
        ]

    def rows(self) -> List[str]:
        """Letters per row with blanks rendered as ``#``."""
        return ["".join(cell.letter or BLANK_SYMBOL for cell in row) for row in self.cells]

    # ------------------------------------------------------------------
    # Word placement
    # ------------------------------------------------------------------
    def place_word(self, word: str, cells: Sequence[Coord], direction: Direction) -> Placement:
        """Write ``word`` onto ``cells`` and push it on the placement stack."""

        if len(word) != len(cells):
            raise PlacementError("Word length mismatch")
        for index, (row, col) in enumerate(cells):
            if not self.bounds.contains(row, col):
                raise PlacementError(f"Word extends outside grid at {(row, col)}")
            cell = self.cells[row][col]
            if cell.letter is not None and cell.letter != word[index]:
                raise PlacementError(f"Letter conflict at {(row, col)}")
            if direction in cell.directions:
                raise PlacementError(f"Cell {(row, col)} already used {direction.value}")

        stamp = self._next_stamp
        self._next_stamp += 1
        for index, (row, col) in enumerate(cells):
            cell = self.cells[row][col]
            if cell.letter is None:
                self._filled_count += 1
            cell.letter = word[index]
            cell.directions.add(direction)
            if len(cell.directions) == 2:
                self._crossing_count += 1
            cell.stamps.add(stamp)

        placement = Placement(
            word=word,
            head=tuple(cells[0]),
            direction=direction,
            cells=tuple(tuple(c) for c in cells),
            stamp=stamp,
        )
        self._stack.append(placement)
        return placement

    def remove_word(self, placement: Placement) -> None:
        """Undo the most recent placement."""

        if not self._stack or self._stack[-1] is not placement:
            raise PlacementError(f"Placement of {placement.word!r} is not the most recent commit")
        self._stack.pop()
        for row, col in placement.cells:
            cell = self.cells[row][col]
            if len(cell.directions) == 2:
                self._crossing_count -= 1
            cell.directions.discard(placement.direction)
            cell.stamps.discard(placement.stamp)
            if not cell.directions:
                cell.letter = None
                self._filled_count -= 1
        # Stamps are only reused once the stack unwinds past them.
        self._next_stamp = placement.stamp
