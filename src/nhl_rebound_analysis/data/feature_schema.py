"""
SeasonSchema – canonical column lists for the per-season game logs.
"""
from dataclasses import dataclass, field
from typing import List

import pandas as pd

from src.nhl_rebound_analysis.config import config


@dataclass
class SeasonSchema:
    """Container class listing every column of a season file by role."""
    identifiers: List[str] = field(default_factory=lambda: list(config.ID_COLUMNS))
    icetime:     str       = config.ICETIME_COL
    counts:      List[str] = field(default_factory=lambda: list(config.COUNT_COLUMNS))
    optional:    List[str] = field(default_factory=lambda: list(config.OPTIONAL_COLUMNS))

    # ───── convenience helpers ────────────────────────────────────
    @property
    def required(self) -> List[str]:
        """Columns every season file must provide."""
        return self.identifiers + [self.icetime] + self.counts

    def missing_columns(self, df: pd.DataFrame) -> List[str]:
        return [c for c in self.required if c not in df.columns]

    def optional_present(self, df: pd.DataFrame) -> List[str]:
        return [c for c in self.optional if c in df.columns]
