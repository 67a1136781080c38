"""Recursive place-and-undo search over one word ordering."""

from __future__ import annotations

from typing import List, Sequence

from ..core.constants import Direction
from ..core.exceptions import DepthExhausted
from ..core.models import Classification, empty_classification
from .geometry import sequence
from .grid import CrosswordGrid
from .heads import candidate_heads
from .legality import is_legal


class PlacementSearch:
    """Depth-first backtracking placement of every word onto one grid.

    Each recursion level flips the orientation it tries, which biases the
    search towards alternating across/down words. This is a speed heuristic
    only; some layouts reachable by trying both orientations per level are
    never explored. Legality alone is enforced by :func:`is_legal`.

    ``head_tries`` counts every head candidate tried across the whole run;
    exceeding ``max_depth`` raises :class:`DepthExhausted`.
    """

    def __init__(self, grid: CrosswordGrid, max_depth: int) -> None:
        self.grid = grid
        self.max_depth = max_depth
        self.head_tries = 0

    def run(self, words: Sequence[str], direction: Direction = Direction.ACROSS) -> bool:
        return self._place(list(words), direction)

    def _place(self, words: List[str], direction: Direction) -> bool:
        if not words:
            return True

        for index, word in enumerate(words):
            remaining = words[:index] + words[index + 1:]
            for head in candidate_heads(word, direction, self.grid):
                self.head_tries += 1
                if self.head_tries > self.max_depth:
                    raise DepthExhausted(self.max_depth)

                cells = sequence(head, direction, word)
                if not is_legal(word, cells, direction, self.grid):
                    continue

                placement = self.grid.place_word(word, cells, direction)
                if self._place(remaining, direction.opposite):
                    return True
                self.grid.remove_word(placement)
        return False

    def classification(self) -> Classification:
        """(offset, word) pairs per direction for the committed placements."""

        result = empty_classification()
        for placement in self.grid.placements:
            offset = self.grid.bounds.offset(*placement.head)
            result[placement.direction].append((offset, placement.word))
        return result
