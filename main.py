"""CLI entrypoint for the crossword layout generator."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from crossgrid.core.exceptions import CrosswordError, GenerationFailed
from crossgrid.engine.generator import CrosswordGenerator
from crossgrid.io.layout_store import DEFAULT_OUTPUT_PATH, save_layout
from crossgrid.io.requirements import load_requirements
from crossgrid.utils.logger import configure_logging, get_logger
from crossgrid.utils.pretty import print_layout_stats


LOGGER = get_logger("crossgrid.cli")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Lay out a list of words as an intersecting crossword grid",
    )
    parser.add_argument(
        "requirements",
        type=Path,
        nargs="?",
        default=Path("requirements.toml"),
        help="TOML or JSON requirements file (default: requirements.toml)",
    )
    parser.add_argument("--iterations", type=int, help="Override the number of word shufflings to try")
    parser.add_argument("--depth", type=int, help="Override the head placements tried per shuffling")
    parser.add_argument("--intersections", type=int, help="Override the required number of crossings")
    parser.add_argument("--seed", type=int, help="Random seed for reproducibility")
    parser.add_argument("--workers", type=int, help="Run attempts in this many worker processes")
    parser.add_argument(
        "--best-effort",
        action="store_true",
        help="Return the layout with most crossings even if below the requirement",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_PATH,
        help=f"Path of the JSON layout record (default: {DEFAULT_OUTPUT_PATH})",
    )
    parser.add_argument("--no-progress", action="store_true", help="Hide the attempt progress bar")
    parser.add_argument(
        "--log-level",
        type=str,
        default="INFO",
        help="Logging level (DEBUG, INFO, WARNING, ERROR)",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    level = getattr(logging, args.log_level.upper(), logging.INFO)
    configure_logging(level)

    if not args.requirements.is_file():
        parser.error(f"requirements file {args.requirements} not found")

    try:
        requirements = load_requirements(args.requirements)
        config = requirements.to_generator_config(
            show_progress=not args.no_progress,
            max_iterations=args.iterations,
            max_depth=args.depth,
            required_intersections=args.intersections,
            seed=args.seed,
            workers=args.workers,
            best_effort=True if args.best_effort else None,
        )
        generator = CrosswordGenerator(config)
        result = generator.generate(requirements.entries)
    except GenerationFailed as exc:
        LOGGER.error("%s", exc)
        print(exc.suggestion, file=sys.stderr)
        return 1
    except CrosswordError as exc:
        LOGGER.error("%s", exc)
        return 1

    print_layout_stats(result)
    save_layout(result, args.output)
    return 0


if __name__ == "__main__":  # pragma: no cover
    sys.exit(main())
