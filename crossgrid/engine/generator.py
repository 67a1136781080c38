"""Restart controller for crossword layout generation.

Each attempt builds a fresh grid, orders the words and runs the backtracking
search with its own head-try budget. The first complete layout with enough
crossings wins. Attempts share nothing, so they can run in worker processes;
results are always reduced in attempt order, which keeps a seeded run
reproducible whatever the number of workers.
"""

from __future__ import annotations

import random
from contextlib import closing
from concurrent.futures import ProcessPoolExecutor, as_completed
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, List, Optional, Sequence

from tqdm import tqdm

from ..core.constants import Direction
from ..core.exceptions import ConfigurationInvalid, DepthExhausted, GenerationFailed, ValidationError
from ..core.models import Classification, Placement, WordEntry
from ..utils.logger import get_logger
from .grid import CrosswordGrid
from .search import PlacementSearch
from .validator import LayoutValidator


LOGGER = get_logger(__name__)


@dataclass
class GeneratorConfig:
    grid_size: int
    required_intersections: int = 0
    max_iterations: int = 1000
    max_depth: int = 100_000
    seed: Optional[int] = None
    best_effort: bool = False
    workers: int = 1
    show_progress: bool = False

    def validate(self, entries: Sequence[WordEntry]) -> None:
        """Raise :class:`ConfigurationInvalid` if no layout can exist."""

        if self.grid_size <= 0:
            raise ConfigurationInvalid(f"Grid size must be positive, got {self.grid_size}")
        if self.required_intersections < 0:
            raise ConfigurationInvalid("Required intersections cannot be negative")
        if self.max_iterations < 0 or self.max_depth < 0:
            raise ConfigurationInvalid("Iteration and depth budgets cannot be negative")
        if self.workers < 1:
            raise ConfigurationInvalid("At least one worker is required")
        if not entries:
            raise ConfigurationInvalid("Word list is empty")

        seen = set()
        for entry in entries:
            word = entry.word
            if not word or not (word.isascii() and word.isalpha() and word.isupper()):
                raise ConfigurationInvalid(f"Word {word!r} must be non-empty uppercase letters")
            if word in seen:
                raise ConfigurationInvalid(f"Duplicate word {word!r}")
            seen.add(word)
            if len(word) > self.grid_size:
                raise ConfigurationInvalid(
                    f"Word {word!r} ({len(word)} letters) does not fit a {self.grid_size}x{self.grid_size} grid"
                )

        ceiling = max_possible_intersections([entry.word for entry in entries], self.grid_size)
        if self.required_intersections > ceiling:
            raise ConfigurationInvalid(
                f"{self.required_intersections} intersections requested, at most {ceiling} possible"
            )


def max_possible_intersections(words: Sequence[str], grid_size: int) -> int:
    """Upper bound on crossing cells for ``words``.

    An across and a down word cross at most once, a crossing consumes a letter
    from two words, and a crossing needs a cell.
    """

    count = len(words)
    pairs = (count // 2) * (count - count // 2)
    letters = sum(len(word) for word in words) // 2
    return min(pairs, letters, grid_size * grid_size)


def longest_first(words: Iterable[str]) -> List[str]:
    return sorted(words, key=lambda word: (-len(word), word))


@dataclass
class AttemptOutcome:
    attempt: int
    order: List[str]
    placed: bool
    intersections: int
    head_tries: int
    depth_exhausted: bool = False
    grid: Optional[CrosswordGrid] = None
    classification: Optional[Classification] = None


def run_attempt(
    attempt: int,
    words: Sequence[str],
    grid_size: int,
    max_depth: int,
    order_seed: Optional[int],
) -> AttemptOutcome:
    """Run one restart attempt; ``order_seed=None`` keeps ``words`` as given."""

    order = list(words)
    if order_seed is not None:
        random.Random(order_seed).shuffle(order)

    grid = CrosswordGrid(grid_size)
    search = PlacementSearch(grid, max_depth)
    try:
        placed = search.run(order, Direction.ACROSS)
    except DepthExhausted:
        return AttemptOutcome(
            attempt=attempt,
            order=order,
            placed=False,
            intersections=grid.crossing_count,
            head_tries=search.head_tries,
            depth_exhausted=True,
        )
    return AttemptOutcome(
        attempt=attempt,
        order=order,
        placed=placed,
        intersections=grid.crossing_count,
        head_tries=search.head_tries,
        grid=grid if placed else None,
        classification=search.classification() if placed else None,
    )


@dataclass
class GenerationStats:
    attempts: int = 0
    head_tries: int = 0
    depth_exhausted: int = 0
    complete_layouts: int = 0


@dataclass
class CrosswordResult:
    grid: CrosswordGrid
    placements: List[Placement]
    classification: Classification
    hints: Dict[str, str]
    intersections: int
    attempt: int
    meets_requirement: bool = True
    seed: Optional[int] = None
    validation_messages: List[str] = field(default_factory=list)

    @property
    def size(self) -> int:
        return self.grid.size

    def to_record(self) -> Dict[str, Any]:
        """Output record: per direction ``word -> [offset, hint]``, blanks, size."""

        record: Dict[str, Any] = {}
        for direction in (Direction.ACROSS, Direction.DOWN):
            record[direction.key] = {
                word: [offset, self.hints.get(word, "")]
                for offset, word in self.classification[direction]
            }
        record["blanks"] = self.grid.blank_offsets()
        record["size"] = self.grid.size
        return record


class CrosswordGenerator:
    """Randomized-restart driver around :class:`PlacementSearch`."""

    def __init__(self, config: GeneratorConfig, validator: Optional[LayoutValidator] = None) -> None:
        self.config = config
        self.rng = random.Random(config.seed)
        self.validator = validator or LayoutValidator()
        self.stats = GenerationStats()

    # ------------------------------------------------------------------
    # Public entrypoint
    # ------------------------------------------------------------------
    def generate(self, entries: Sequence[WordEntry]) -> CrosswordResult:
        self.config.validate(entries)
        self.stats = GenerationStats()
        self.rng = random.Random(self.config.seed)
        hints = {entry.word: entry.hint for entry in entries}
        words = longest_first(hints)

        LOGGER.info(
            "Placing %d words on a %dx%d grid (%d intersections required, %d attempts, depth %d)",
            len(words),
            self.config.grid_size,
            self.config.grid_size,
            self.config.required_intersections,
            self.config.max_iterations,
            self.config.max_depth,
        )

        best: Optional[AttemptOutcome] = None
        accepted: Optional[AttemptOutcome] = None
        with tqdm(
            total=self.config.max_iterations,
            desc="Attempts",
            leave=False,
            disable=not self.config.show_progress,
        ) as pbar, closing(self._outcomes(words)) as outcomes:
            for outcome in outcomes:
                pbar.update(1)
                self._record(outcome)
                if not outcome.placed:
                    continue
                if best is None or outcome.intersections > best.intersections:
                    best = outcome
                    pbar.set_postfix({"intersections": best.intersections})
                if outcome.intersections >= self.config.required_intersections:
                    accepted = outcome
                    break

        if accepted is not None:
            LOGGER.info(
                "Attempt %d accepted with %d intersections after %d head tries",
                accepted.attempt,
                accepted.intersections,
                accepted.head_tries,
            )
            return self._build_result(accepted, hints, meets_requirement=True)

        if self.config.best_effort and best is not None:
            LOGGER.warning(
                "No attempt reached %d intersections; returning best layout (%d) from attempt %d",
                self.config.required_intersections,
                best.intersections,
                best.attempt,
            )
            return self._build_result(best, hints, meets_requirement=False)

        raise GenerationFailed(
            iterations=self.config.max_iterations,
            max_depth=self.config.max_depth,
            required_intersections=self.config.required_intersections,
            best_intersections=best.intersections if best is not None else -1,
        )

    # ------------------------------------------------------------------
    # Attempt scheduling
    # ------------------------------------------------------------------
    def _order_seed(self, attempt: int) -> Optional[int]:
        # The first attempt keeps the longest-first order.
        if attempt == 1:
            return None
        return self.rng.getrandbits(64)

    def _outcomes(self, words: List[str]) -> Iterator[AttemptOutcome]:
        if self.config.workers > 1:
            yield from self._parallel_outcomes(words)
            return
        for attempt in range(1, self.config.max_iterations + 1):
            yield run_attempt(
                attempt,
                words,
                self.config.grid_size,
                self.config.max_depth,
                self._order_seed(attempt),
            )

    def _parallel_outcomes(self, words: List[str]) -> Iterator[AttemptOutcome]:
        batch_size = self.config.workers
        total = self.config.max_iterations
        with ProcessPoolExecutor(max_workers=batch_size) as executor:
            for start in range(1, total + 1, batch_size):
                batch = [
                    (attempt, self._order_seed(attempt))
                    for attempt in range(start, min(start + batch_size, total + 1))
                ]
                futures = {
                    executor.submit(
                        run_attempt,
                        attempt,
                        words,
                        self.config.grid_size,
                        self.config.max_depth,
                        order_seed,
                    ): attempt
                    for attempt, order_seed in batch
                }
                outcomes: List[AttemptOutcome] = []
                for future in as_completed(futures):
                    outcomes.append(future.result())
                outcomes.sort(key=lambda outcome: outcome.attempt)
                yield from outcomes

    def _record(self, outcome: AttemptOutcome) -> None:
        self.stats.attempts += 1
        self.stats.head_tries += outcome.head_tries
        if outcome.depth_exhausted:
            self.stats.depth_exhausted += 1
            LOGGER.debug(
                "Attempt %d abandoned: depth budget %d exhausted",
                outcome.attempt,
                self.config.max_depth,
            )
        elif not outcome.placed:
            LOGGER.debug("Attempt %d could not place every word", outcome.attempt)
        else:
            self.stats.complete_layouts += 1
            LOGGER.debug(
                "Attempt %d placed every word with %d intersections",
                outcome.attempt,
                outcome.intersections,
            )

    # ------------------------------------------------------------------
    # Result assembly
    # ------------------------------------------------------------------
    def _build_result(
        self,
        outcome: AttemptOutcome,
        hints: Dict[str, str],
        meets_requirement: bool,
    ) -> CrosswordResult:
        assert outcome.grid is not None and outcome.classification is not None
        grid = outcome.grid
        placements = grid.placements
        validation = self.validator.validate(
            grid,
            placements,
            self.config.required_intersections if meets_requirement else None,
        )
        if not validation.ok:
            raise ValidationError(f"Layout validation failed: {validation.messages}")
        return CrosswordResult(
            grid=grid,
            placements=placements,
            classification=outcome.classification,
            hints=dict(hints),
            intersections=outcome.intersections,
            attempt=outcome.attempt,
            meets_requirement=meets_requirement,
            seed=self.config.seed,
            validation_messages=validation.messages,
        )
