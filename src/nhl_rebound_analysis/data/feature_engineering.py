"""
Feature engineering module for the NHL rebound analysis.
Turns raw per-game counts into per-minute rates and removes incomplete rows.
"""
from __future__ import annotations

import logging
import warnings
from typing import List

import numpy as np
import pandas as pd

from src.nhl_rebound_analysis.config import config
from src.nhl_rebound_analysis.exceptions import MissingValueError

logger = logging.getLogger(__name__)


def drop_invalid_icetime(df: pd.DataFrame) -> pd.DataFrame:
    """Remove rows whose ice time is missing, zero or negative."""
    icetime = pd.to_numeric(df[config.ICETIME_COL], errors="coerce")
    valid = icetime.notna() & (icetime > 0)
    removed = int((~valid).sum())
    if removed:
        logger.info("Excluded %d rows with missing or non-positive ice time", removed)
        print(f"🗑️  Filtered out {removed} rows without usable ice time")
    return df.loc[valid].copy()


def compute_rates(df: pd.DataFrame) -> pd.DataFrame:
    """
    Add per-minute rates and the zone-start differential.

    Adds:
    • hd_rate, goals_rate, reb_rate, phys_rate, take_rate, give_rate
    • mom_diff         – (xG for − xG against after shift) per minute
    • zone_start_diff  – offensive minus defensive zone starts
    """
    df = df.copy()
    icetime = df[config.ICETIME_COL].astype(float)

    for rate, numerator in config.RATE_DEFINITIONS.items():
        df[rate] = df[numerator] / icetime

    df["mom_diff"] = (
        df["xgoals_for_after_shift"] - df["xgoals_against_after_shift"]
    ) / icetime
    df["zone_start_diff"] = df["ozone_starts"] - df["dzone_starts"]
    return df


def drop_incomplete_rows(df: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
    """
    Drop every row with a missing (or infinite) value in ``columns``.

    Emits a ``MissingValueError`` warning with the number of rows removed.
    """
    values = df[columns].replace([np.inf, -np.inf], np.nan)
    incomplete = values.isna().any(axis=1)
    removed = int(incomplete.sum())
    if removed:
        bad_cols = values.columns[values.isna().any()].tolist()
        logger.info("Excluded %d incomplete rows (columns: %s)", removed, bad_cols)
        warnings.warn(MissingValueError(removed, bad_cols), stacklevel=2)
    return df.loc[~incomplete].copy()


def derive_features(raw: pd.DataFrame) -> pd.DataFrame:
    """
    Build the clean analysis table from the merged season table.

    Rows with unusable ice time are removed before any division; rows with a
    missing value in any source or derived field are removed afterwards. No
    values are imputed and ``raw`` is left untouched.
    """
    df = drop_invalid_icetime(raw)
    df = compute_rates(df)

    source_cols = list(config.REQUIRED_COLUMNS)
    df = drop_incomplete_rows(df, source_cols + config.DERIVED_COLUMNS)

    print(f"******* Derived rate features: {len(df):,} complete observations "
          f"({len(raw) - len(df):,} excluded)")
    return df
