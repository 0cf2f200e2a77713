"""Canonical source location value object."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True, order=True)
class LocationKey:
    """Identity used to aggregate execution counts.

    Two keys are equal iff file strings are equal and lines match.
    Ordered by (file, line).

    Attributes:
        file: Source file name as reported by the ingestion source
        line: Line number (1-based, must be > 0)
    """

    file: str
    line: int

    def __post_init__(self) -> None:
        """Validate invariants. FAIL-FIRST."""
        if not isinstance(self.file, str):
            raise TypeError(f"file must be str, got {type(self.file).__name__}")
        # bool is an int subclass but never a line number
        if isinstance(self.line, bool) or not isinstance(self.line, int):
            raise TypeError(f"line must be int, got {type(self.line).__name__}")
        if self.line <= 0:
            raise ValueError(f"line must be > 0, got {self.line}")

    def __str__(self) -> str:
        """Format as file:line."""
        return f"{self.file}:{self.line}"
