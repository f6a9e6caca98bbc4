"""
Error taxonomy for the rebound analysis pipeline.

Structural problems (bad files, duplicate panel keys, degenerate designs) are
fatal and raised. Missing values are resolved by excluding rows, so
``MissingValueError`` doubles as a warning category.
"""
from __future__ import annotations

from typing import Sequence


class AnalysisError(Exception):
    """Base class for every error raised by the analysis."""


class DataLoadError(AnalysisError):
    """A season file is missing, unreadable or lacks required columns."""

    def __init__(self, message: str, path=None, missing: Sequence[str] = ()):
        super().__init__(message)
        self.path = path
        self.missing = list(missing)


class MissingValueError(AnalysisError, UserWarning):
    """Rows with missing values were dropped (non-fatal, emitted as a warning)."""

    def __init__(self, n_rows: int, columns: Sequence[str] = ()):
        self.n_rows = int(n_rows)
        self.columns = list(columns)
        cols = ", ".join(self.columns) if self.columns else "n/a"
        super().__init__(f"Dropped {self.n_rows} rows with missing values (columns: {cols})")


class DuplicatePanelKeyError(AnalysisError):
    """The (player, time key) panel index is not unique."""

    def __init__(self, message: str, duplicates=None):
        super().__init__(message)
        self.duplicates = duplicates


class PanelOrderError(AnalysisError):
    """Source row order contradicts the game dates within a player-season."""


class EstimationError(AnalysisError):
    """The fixed-effects model cannot be estimated on this design."""
