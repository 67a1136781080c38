import unittest
from typing import List

from crossgrid.core.constants import Direction
from crossgrid.core.exceptions import ConfigurationInvalid, GenerationFailed
from crossgrid.core.models import WordEntry
from crossgrid.engine.generator import (
    CrosswordGenerator,
    GeneratorConfig,
    longest_first,
    max_possible_intersections,
    run_attempt,
)
from crossgrid.io.layout_store import reconstruct_grid


CHAIN = [
    WordEntry("CAT", "Purring pet"),
    WordEntry("TOP", "Summit"),
    WordEntry("PEN", "Writing tool"),
    WordEntry("NUB", "Small lump"),
]


def entries(*words: str) -> List[WordEntry]:
    return [WordEntry(word, f"hint for {word}") for word in words]


class ConfigValidationTests(unittest.TestCase):
    def test_empty_word_list_is_invalid(self) -> None:
        with self.assertRaises(ConfigurationInvalid):
            GeneratorConfig(grid_size=3).validate([])

    def test_non_positive_grid_is_invalid(self) -> None:
        with self.assertRaises(ConfigurationInvalid):
            GeneratorConfig(grid_size=0).validate(entries("CAT"))

    def test_words_longer_than_grid_are_invalid(self) -> None:
        generator = CrosswordGenerator(GeneratorConfig(grid_size=2, max_iterations=5))
        with self.assertRaises(ConfigurationInvalid):
            generator.generate(entries("AAAA", "BBBB"))
        self.assertEqual(generator.stats.head_tries, 0)

    def test_duplicate_words_are_invalid(self) -> None:
        with self.assertRaises(ConfigurationInvalid):
            GeneratorConfig(grid_size=5).validate(entries("CAT", "CAT"))

    def test_lowercase_words_are_invalid(self) -> None:
        with self.assertRaises(ConfigurationInvalid):
            GeneratorConfig(grid_size=5).validate(entries("cat"))

    def test_negative_budgets_are_invalid(self) -> None:
        with self.assertRaises(ConfigurationInvalid):
            GeneratorConfig(grid_size=5, max_depth=-1).validate(entries("CAT"))
        with self.assertRaises(ConfigurationInvalid):
            GeneratorConfig(grid_size=5, required_intersections=-1).validate(entries("CAT"))

    def test_unreachable_intersections_are_invalid(self) -> None:
        self.assertEqual(max_possible_intersections(["CAT", "TAP"], 3), 1)
        with self.assertRaises(ConfigurationInvalid):
            GeneratorConfig(grid_size=3, required_intersections=2).validate(entries("CAT", "TAP"))

    def test_intersection_ceiling(self) -> None:
        self.assertEqual(max_possible_intersections(["CAT", "TOP", "PEN", "NUB"], 5), 4)
        self.assertEqual(max_possible_intersections(["AB", "CD", "EF", "GH", "IJ"], 9), 5)
        self.assertEqual(max_possible_intersections(["A" * 9] * 8, 2), 4)

    def test_longest_first_breaks_ties_alphabetically(self) -> None:
        self.assertEqual(longest_first(["TAP", "AB", "CATS", "CAT"]), ["CATS", "CAT", "TAP", "AB"])


class RunAttemptTests(unittest.TestCase):
    def test_first_attempt_keeps_order(self) -> None:
        outcome = run_attempt(1, ["CAT", "TAP"], 3, 100, None)
        self.assertTrue(outcome.placed)
        self.assertEqual(outcome.order, ["CAT", "TAP"])
        self.assertEqual(outcome.intersections, 1)
        self.assertIsNotNone(outcome.grid)

    def test_seeded_order_is_reproducible(self) -> None:
        words = ["ALPHA", "BRAVO", "DELTA", "ECHO", "GOLF"]
        first = run_attempt(2, words, 9, 10, 1234)
        second = run_attempt(2, words, 9, 10, 1234)
        self.assertEqual(first.order, second.order)
        self.assertEqual(sorted(first.order), sorted(words))

    def test_depth_exhaustion_is_reported(self) -> None:
        outcome = run_attempt(1, ["CAT", "TAP"], 3, 2, None)
        self.assertFalse(outcome.placed)
        self.assertTrue(outcome.depth_exhausted)
        self.assertIsNone(outcome.grid)


class GeneratorTests(unittest.TestCase):
    def test_two_words_produce_expected_record(self) -> None:
        generator = CrosswordGenerator(
            GeneratorConfig(grid_size=3, required_intersections=1, max_iterations=5, seed=7)
        )
        result = generator.generate([WordEntry("TAP", "Faucet"), WordEntry("CAT", "Feline")])
        self.assertEqual(result.attempt, 1)
        self.assertEqual(result.intersections, 1)
        self.assertTrue(result.meets_requirement)
        self.assertEqual(result.grid.rows(), ["CAT", "##A", "##P"])
        self.assertEqual(
            result.to_record(),
            {
                "across": {"CAT": [0, "Feline"]},
                "down": {"TAP": [2, "Faucet"]},
                "blanks": [3, 4, 6, 7],
                "size": 3,
            },
        )
        self.assertEqual(generator.stats.attempts, 1)

    def test_zero_iterations_fail_without_trying(self) -> None:
        generator = CrosswordGenerator(
            GeneratorConfig(grid_size=3, required_intersections=1, max_iterations=0)
        )
        with self.assertRaises(GenerationFailed) as ctx:
            generator.generate(entries("CAT", "TAP"))
        self.assertEqual(ctx.exception.iterations, 0)
        self.assertEqual(generator.stats.attempts, 0)
        self.assertEqual(generator.stats.head_tries, 0)

    def test_words_that_never_cross_exhaust_the_budget(self) -> None:
        generator = CrosswordGenerator(
            GeneratorConfig(grid_size=5, required_intersections=1, max_iterations=3, seed=1)
        )
        with self.assertRaises(GenerationFailed) as ctx:
            generator.generate(entries("AB", "CD"))
        self.assertEqual(generator.stats.attempts, 3)
        self.assertEqual(generator.stats.complete_layouts, 0)
        self.assertEqual(ctx.exception.best_intersections, -1)
        self.assertIn("3 attempts", str(ctx.exception))

    def test_depth_exhaustion_moves_to_next_attempt(self) -> None:
        generator = CrosswordGenerator(
            GeneratorConfig(grid_size=3, required_intersections=1, max_iterations=4, max_depth=2, seed=3)
        )
        with self.assertRaises(GenerationFailed) as ctx:
            generator.generate(entries("CAT", "TAP"))
        self.assertEqual(generator.stats.attempts, 4)
        self.assertEqual(generator.stats.depth_exhausted, 4)
        self.assertEqual(ctx.exception.max_depth, 2)

    def test_threshold_above_any_layout_fails(self) -> None:
        # The words only share letters pairwise along a chain, so three crossings is the most.
        generator = CrosswordGenerator(
            GeneratorConfig(grid_size=5, required_intersections=4, max_iterations=3, seed=11)
        )
        with self.assertRaises(GenerationFailed) as ctx:
            generator.generate(CHAIN)
        self.assertEqual(ctx.exception.best_intersections, 3)
        self.assertGreaterEqual(generator.stats.complete_layouts, 1)

    def test_best_effort_returns_best_layout(self) -> None:
        generator = CrosswordGenerator(
            GeneratorConfig(
                grid_size=5,
                required_intersections=4,
                max_iterations=3,
                seed=11,
                best_effort=True,
            )
        )
        result = generator.generate(CHAIN)
        self.assertFalse(result.meets_requirement)
        self.assertEqual(result.intersections, 3)
        self.assertEqual(result.attempt, 1)

    def test_accepted_layout_invariants(self) -> None:
        for seed in range(5):
            with self.subTest(seed=seed):
                generator = CrosswordGenerator(
                    GeneratorConfig(grid_size=5, required_intersections=3, max_iterations=50, seed=seed)
                )
                result = generator.generate(CHAIN)
                grid = result.grid
                self.assertGreaterEqual(result.intersections, 3)
                crossing_cells = sum(
                    1 for r in range(5) for c in range(5) if len(grid.cell(r, c).directions) == 2
                )
                self.assertEqual(crossing_cells, result.intersections)

                for placement in result.placements:
                    read = "".join(grid.letter(r, c) for r, c in placement.cells)
                    self.assertEqual(read, placement.word)

                for loc in grid.occupied():
                    for neighbor in grid.neighbors(*loc):
                        if not grid.is_blank(*neighbor):
                            self.assertTrue(grid.are_siblings(loc, neighbor))

                rebuilt = reconstruct_grid(result.to_record())
                expected = [[grid.letter(r, c) for c in range(5)] for r in range(5)]
                self.assertEqual(rebuilt, expected)

                placed = {word for direction in Direction for _, word in result.classification[direction]}
                self.assertEqual(placed, {entry.word for entry in CHAIN})

    def test_same_seed_same_layout(self) -> None:
        config = dict(grid_size=5, required_intersections=3, max_iterations=20, seed=99)
        first = CrosswordGenerator(GeneratorConfig(**config)).generate(CHAIN)
        second = CrosswordGenerator(GeneratorConfig(**config)).generate(CHAIN)
        self.assertEqual(first.to_record(), second.to_record())
        self.assertEqual(first.attempt, second.attempt)

    def test_parallel_workers_match_sequential_run(self) -> None:
        config = dict(
            grid_size=5,
            required_intersections=4,
            max_iterations=4,
            seed=5,
            best_effort=True,
        )
        sequential = CrosswordGenerator(GeneratorConfig(**config)).generate(CHAIN)
        parallel_generator = CrosswordGenerator(GeneratorConfig(workers=2, **config))
        parallel = parallel_generator.generate(CHAIN)
        self.assertEqual(sequential.to_record(), parallel.to_record())
        self.assertEqual(sequential.attempt, parallel.attempt)
        self.assertEqual(parallel_generator.stats.attempts, 4)


if __name__ == "__main__":  # pragma: no cover
    unittest.main()
