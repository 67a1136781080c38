"""Pretty-print helpers for crossword layouts."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from ..core.constants import BLANK_SYMBOL, Direction

if TYPE_CHECKING:
    from ..engine.generator import CrosswordResult
    from ..engine.grid import CrosswordGrid


def format_grid(grid: CrosswordGrid) -> str:
    width = grid.size
    header_cells = [f"{c:>2}" for c in range(width)]
    lines = ["    " + " ".join(header_cells)]
    lines.append("    " + "-" * (3 * width - 1))
    for r in range(width):
        row_cells = [grid.letter(r, c) or BLANK_SYMBOL for c in range(width)]
        row_render = " ".join(f"{symbol:>2}" for symbol in row_cells)
        lines.append(f"{r:>2} | {row_render}")
    return "\n".join(lines)


def format_plain(grid: CrosswordGrid) -> str:
    """Space separated letters, one row per line."""
    return "\n".join(" ".join(row) for row in grid.rows())


def pretty_print_grid(grid: CrosswordGrid, *, label: str | None = None, stream=None) -> None:
    """Print the crossword grid in a human-friendly format."""

    stream = stream or sys.stdout
    if label:
        print(label, file=stream)
    print(format_grid(grid), file=stream)


def print_layout_stats(result: CrosswordResult, *, stream=None) -> None:
    """Print grid, crossing count and the across/down word lists."""

    stream = stream or sys.stdout
    grid = result.grid
    pretty_print_grid(grid, stream=stream)

    total_cells = grid.size * grid.size
    print(file=stream)
    print("--- Grid ---", file=stream)
    print(f"  Size:          {grid.size} x {grid.size} ({total_cells} cells)", file=stream)
    print(f"  Letters:       {grid.filled_count} ({grid.filled_count / total_cells * 100:.0f}%)", file=stream)
    print(f"  Intersections: {result.intersections}", file=stream)
    if not result.meets_requirement:
        print("  (best effort: below the required intersections)", file=stream)

    for direction in (Direction.ACROSS, Direction.DOWN):
        entries = sorted(result.classification[direction])
        print(file=stream)
        print(f"--- {direction.value.capitalize()} ({len(entries)}) ---", file=stream)
        for offset, word in entries:
            row, col = grid.bounds.cell_at(offset)
            hint = result.hints.get(word, "")
            suffix = f"  {hint}" if hint else ""
            print(f"  {offset:>4} ({row},{col}) {word}{suffix}", file=stream)

    if result.seed is not None:
        print(file=stream)
        print(f"Seed: {result.seed}", file=stream)
