"""Custom exception hierarchy for crossword layout generation."""

from __future__ import annotations


class CrosswordError(Exception):
    """Base exception for generator failures."""


class ConfigurationInvalid(CrosswordError):
    """Raised before the search when the parameters cannot yield a layout."""


class RequirementsLoadError(CrosswordError):
    """Raised when a requirements file cannot be read or parsed."""


class DepthExhausted(CrosswordError):
    """Raised when one restart attempt tries more heads than its depth budget."""

    def __init__(self, max_depth: int) -> None:
        super().__init__(f"Head-try budget of {max_depth} exhausted")
        self.max_depth = max_depth


class GenerationFailed(CrosswordError):
    """Raised when no restart attempt produced an acceptable layout."""

    def __init__(
        self,
        iterations: int,
        max_depth: int,
        required_intersections: int,
        best_intersections: int = -1,
    ) -> None:
        self.iterations = iterations
        self.max_depth = max_depth
        self.required_intersections = required_intersections
        self.best_intersections = best_intersections
        super().__init__(
            f"No valid crossword found after {iterations} attempts with a depth of "
            f"{max_depth} (required intersections: {required_intersections}, "
            f"best complete layout: {best_intersections if best_intersections >= 0 else 'none'})"
        )

    @property
    def suggestion(self) -> str:
        return (
            "Consider increasing the number of iterations (word shufflings to try) "
            "or the depth (head placements tried per shuffling). If it still does "
            "not work, increase the grid size and/or lower the number of intersections."
        )


class PlacementError(CrosswordError):
    """Raised when a word cannot be written to or removed from the grid."""


class ValidationError(CrosswordError):
    """Raised when a finished layout breaks a grid invariant."""
