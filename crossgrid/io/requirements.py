"""Requirements file loading.

A requirements file is TOML (or JSON with the same keys)::

    size = 14
    intersections = 12      # optional, defaults to size - 3
    iterations = 2000       # optional, restart budget
    depth = 100000          # optional, head tries per restart

    [hints]
    ANGIOGENESIS = "Growth of new blood vessels"
    MICROGLIA = "Resident immune cells of the brain"

``seed``, ``workers`` and ``best_effort`` are also accepted.
"""

from __future__ import annotations

import json
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Mapping, Optional

from ..core.exceptions import RequirementsLoadError
from ..core.models import WordEntry
from ..engine.generator import GeneratorConfig
from ..utils.logger import get_logger
from ..utils.normalization import clean_hint, clean_word


LOGGER = get_logger(__name__)

DEFAULT_ITERATIONS = 1000
DEFAULT_DEPTH = 100_000
INTERSECTION_SLACK = 3


@dataclass
class Requirements:
    size: int
    intersections: int
    iterations: int = DEFAULT_ITERATIONS
    depth: int = DEFAULT_DEPTH
    entries: List[WordEntry] = field(default_factory=list)
    seed: Optional[int] = None
    workers: int = 1
    best_effort: bool = False

    def to_generator_config(self, show_progress: bool = False, **overrides: Any) -> GeneratorConfig:
        """Build a :class:`GeneratorConfig`; ``None`` overrides are ignored."""

        values: Dict[str, Any] = {
            "grid_size": self.size,
            "required_intersections": self.intersections,
            "max_iterations": self.iterations,
            "max_depth": self.depth,
            "seed": self.seed,
            "best_effort": self.best_effort,
            "workers": self.workers,
            "show_progress": show_progress,
        }
        for key, value in overrides.items():
            if key not in values:
                raise TypeError(f"Unknown generator option {key!r}")
            if value is not None:
                values[key] = value
        return GeneratorConfig(**values)


def load_requirements(path: Path | str) -> Requirements:
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise RequirementsLoadError(f"Cannot read requirements file {path}: {exc}") from exc

    suffix = path.suffix.lower()
    try:
        if suffix == ".json":
            data = json.loads(text)
        elif suffix == ".toml":
            data = tomllib.loads(text)
        else:
            raise RequirementsLoadError(f"Unsupported requirements format '{suffix}' for {path}")
    except (json.JSONDecodeError, tomllib.TOMLDecodeError) as exc:
        raise RequirementsLoadError(f"Malformed requirements file {path}: {exc}") from exc

    if not isinstance(data, Mapping):
        raise RequirementsLoadError(f"Requirements file {path} must contain a table of settings")
    requirements = parse_requirements(data)
    LOGGER.info("Loaded %d words from %s", len(requirements.entries), path)
    return requirements


def parse_requirements(data: Mapping[str, Any]) -> Requirements:
    if "size" not in data:
        raise RequirementsLoadError("Requirements must define 'size'")
    if "hints" not in data and "words" not in data:
        raise RequirementsLoadError("Requirements must define 'hints'")

    size = _int_setting(data, "size")
    intersections = _int_setting(data, "intersections", max(size - INTERSECTION_SLACK, 0))
    iterations = _int_setting(data, "iterations", DEFAULT_ITERATIONS)
    depth = _int_setting(data, "depth", DEFAULT_DEPTH)
    workers = _int_setting(data, "workers", 1)
    seed = _int_setting(data, "seed", None)
    best_effort = data.get("best_effort", False)
    if not isinstance(best_effort, bool):
        raise RequirementsLoadError("'best_effort' must be true or false")

    return Requirements(
        size=size,
        intersections=intersections,
        iterations=iterations,
        depth=depth,
        entries=_collect_entries(data),
        seed=seed,
        workers=workers,
        best_effort=best_effort,
    )


def _int_setting(data: Mapping[str, Any], key: str, default: Any = ...) -> Any:
    if key not in data:
        if default is ...:
            raise RequirementsLoadError(f"Missing setting '{key}'")
        return default
    value = data[key]
    if isinstance(value, bool) or not isinstance(value, int):
        raise RequirementsLoadError(f"Setting '{key}' must be an integer, got {value!r}")
    return value


def _collect_entries(data: Mapping[str, Any]) -> List[WordEntry]:
    raw_hints = data.get("hints", {})
    if not isinstance(raw_hints, Mapping):
        raise RequirementsLoadError("'hints' must map words to hint text")
    raw_words = data.get("words", [])
    if not isinstance(raw_words, list):
        raise RequirementsLoadError("'words' must be a list")

    pairs = list(raw_hints.items()) + [(word, "") for word in raw_words]
    entries: List[WordEntry] = []
    seen = set()
    for raw_word, raw_hint in pairs:
        word = clean_word(str(raw_word))
        if not word:
            LOGGER.warning("Skipping entry %r: no letters left after normalization", raw_word)
            continue
        if word in seen:
            LOGGER.warning("Dropping duplicate word %s (from %r)", word, raw_word)
            continue
        seen.add(word)
        entries.append(WordEntry(word=word, hint=clean_hint(raw_hint)))
    return entries
