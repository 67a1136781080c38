"""Crossword layout generator.

Places a list of words on a square grid so that they cross at matching
letters, never touch illegally, and reach a required number of crossings.

This package exposes the public API surface via:

- ``crossgrid.engine.generator.CrosswordGenerator``: randomized-restart driver.
- ``crossgrid.engine.search.PlacementSearch``: backtracking placement of one ordering.
- ``crossgrid.io.requirements.load_requirements``: reads TOML/JSON requirement files.
- ``crossgrid.io.layout_store``: writes and reloads solved layout records.
"""

from .core.models import WordEntry
from .engine.generator import CrosswordGenerator, CrosswordResult, GeneratorConfig
from .io.layout_store import load_layout, reconstruct_grid, save_layout
from .io.requirements import Requirements, load_requirements

__all__ = [
    "CrosswordGenerator",
    "CrosswordResult",
    "GeneratorConfig",
    "Requirements",
    "WordEntry",
    "load_layout",
    "load_requirements",
    "reconstruct_grid",
    "save_layout",
]

__version__ = "0.1.0"
