"""Deterministic rule validation for finished layouts."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Sequence

from ..core.exceptions import ValidationError
from ..core.models import Placement
from ..utils.logger import get_logger
from .geometry import after_tail, before_head
from .grid import CrosswordGrid


LOGGER = get_logger(__name__)


@dataclass
class ValidationResult:
    ok: bool
    messages: List[str]


class LayoutValidator:
    """Re-checks the whole grid after the incremental search accepted it."""

    def validate(
        self,
        grid: CrosswordGrid,
        placements: Sequence[Placement],
        required_intersections: Optional[int] = None,
    ) -> ValidationResult:
        messages: List[str] = []
        try:
            self._check_cell_state(grid)
            self._check_letters_valid(grid)
            self._check_words_read_back(grid, placements)
            self._check_end_caps(grid, placements)
            self._check_adjacency(grid)
            if required_intersections is not None:
                self._check_crossings(grid, required_intersections)
        except ValidationError as exc:
            messages.append(str(exc))
            LOGGER.error("Validation failed: %s", exc)
            return ValidationResult(ok=False, messages=messages)
        return ValidationResult(ok=True, messages=[])

    def _check_cell_state(self, grid: CrosswordGrid) -> None:
        for r in range(grid.size):
            for c in range(grid.size):
                cell = grid.cell(r, c)
                if cell.is_blank():
                    if cell.directions or cell.stamps:
                        raise ValidationError(f"Blank cell ({r},{c}) still carries placement state")
                elif not 1 <= len(cell.directions) <= 2 or not cell.stamps:
                    raise ValidationError(f"Cell ({r},{c}) has inconsistent orientation usage")

    def _check_letters_valid(self, grid: CrosswordGrid) -> None:
        for r, c in grid.occupied():
            letter = grid.letter(r, c)
            if not letter or not letter.isalpha() or not letter.isupper():
                raise ValidationError(f"Invalid letter '{letter}' at ({r},{c})")

    def _check_words_read_back(self, grid: CrosswordGrid, placements: Sequence[Placement]) -> None:
        for placement in placements:
            text = "".join(grid.letter(r, c) or "" for r, c in placement.cells)
            if text != placement.word:
                raise ValidationError(
                    f"Word '{placement.word}' at {placement.head} reads back as '{text}'"
                )

    def _check_end_caps(self, grid: CrosswordGrid, placements: Sequence[Placement]) -> None:
        for placement in placements:
            for row, col in (
                before_head(placement.cells, placement.direction),
                after_tail(placement.cells, placement.direction),
            ):
                if grid.bounds.contains(row, col) and not grid.is_blank(row, col):
                    raise ValidationError(
                        f"Word '{placement.word}' runs into a letter at ({row},{col})"
                    )

    def _check_adjacency(self, grid: CrosswordGrid) -> None:
        for loc in grid.occupied():
            for neighbor in grid.neighbors(*loc):
                if grid.is_blank(*neighbor):
                    continue
                if not grid.are_siblings(loc, neighbor):
                    raise ValidationError(
                        f"Cells {loc} and {neighbor} touch without sharing a word"
                    )

    def _check_crossings(self, grid: CrosswordGrid, required: int) -> None:
        if grid.crossing_count < required:
            raise ValidationError(
                f"Layout has {grid.crossing_count} crossings, {required} required"
            )
