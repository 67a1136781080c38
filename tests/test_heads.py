import unittest

from crossgrid.core.constants import Direction
from crossgrid.engine.geometry import sequence
from crossgrid.engine.grid import CrosswordGrid
from crossgrid.engine.heads import candidate_heads, letter_positions


def place(grid: CrosswordGrid, word: str, head, direction: Direction):
    return grid.place_word(word, sequence(head, direction, word), direction)


class CandidateHeadTests(unittest.TestCase):
    def test_blank_grid_offers_every_cell(self) -> None:
        grid = CrosswordGrid(3)
        heads = candidate_heads("CAT", Direction.ACROSS, grid)
        self.assertEqual(heads, [(r, c) for r in range(3) for c in range(3)])

    def test_heads_align_with_matching_letters(self) -> None:
        grid = CrosswordGrid(3)
        place(grid, "CAT", (0, 0), Direction.ACROSS)
        self.assertEqual(candidate_heads("TAP", Direction.DOWN, grid), [(-1, 1), (0, 2)])

    def test_cells_used_in_direction_are_skipped(self) -> None:
        grid = CrosswordGrid(3)
        place(grid, "CAT", (0, 0), Direction.ACROSS)
        self.assertEqual(candidate_heads("TAP", Direction.ACROSS, grid), [])

    def test_no_shared_letters_means_no_heads(self) -> None:
        grid = CrosswordGrid(4)
        place(grid, "CAT", (0, 0), Direction.ACROSS)
        self.assertEqual(candidate_heads("DOG", Direction.DOWN, grid), [])

    def test_repeated_letter_yields_one_head_per_occurrence(self) -> None:
        grid = CrosswordGrid(5)
        place(grid, "CAT", (2, 0), Direction.ACROSS)
        self.assertEqual(candidate_heads("AHA", Direction.DOWN, grid), [(2, 1), (0, 1)])

    def test_duplicate_heads_are_listed_once(self) -> None:
        grid = CrosswordGrid(5)
        place(grid, "AX", (0, 0), Direction.ACROSS)
        place(grid, "AY", (2, 0), Direction.ACROSS)
        self.assertEqual(candidate_heads("ABA", Direction.DOWN, grid), [(0, 0), (-2, 0), (2, 0)])

    def test_letter_positions(self) -> None:
        self.assertEqual(letter_positions("BANANA"), {"B": [0], "A": [1, 3, 5], "N": [2, 4]})


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
