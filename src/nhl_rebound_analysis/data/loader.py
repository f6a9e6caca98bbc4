"""
Data loading module for the NHL rebound analysis.
Reads one game-log CSV per season, tags rows with their season label and
stacks the seasons into a single table.
"""
from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Mapping, Optional

import pandas as pd

from src.nhl_rebound_analysis.config import config
from src.nhl_rebound_analysis.data.feature_schema import SeasonSchema
from src.nhl_rebound_analysis.exceptions import DataLoadError

logger = logging.getLogger(__name__)


def load_season(
    filepath: Path | str,
    season_label: str,
    *,
    column_aliases: Optional[Mapping[str, str]] = None,
    schema: Optional[SeasonSchema] = None,
) -> pd.DataFrame:
    """
    Load a single season of player-game statistics.

    Args:
        filepath: Path to the season CSV
        season_label: Label written into the ``season`` column
        column_aliases: Source header -> canonical name mapping
        schema: Column schema to validate against

    Returns:
        DataFrame with canonical column names, ``season`` and ``source_row``
    """
    schema = schema or SeasonSchema()
    aliases = config.COLUMN_ALIASES if column_aliases is None else column_aliases
    filepath = Path(filepath)

    if not filepath.is_file():
        raise DataLoadError(f"Season file not found: {filepath}", path=filepath)

    try:
        df = pd.read_csv(filepath)
    except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError, OSError) as e:
        raise DataLoadError(f"Unable to read season file {filepath}: {e}", path=filepath) from e

    df = df.rename(columns=dict(aliases))
    missing = schema.missing_columns(df)
    if missing:
        raise DataLoadError(
            f"Season file {filepath} is missing required columns: {missing}",
            path=filepath,
            missing=missing,
        )

    if config.SEASON_COL in df.columns:
        logger.debug("Overwriting source 'season' column in %s with %s", filepath.name, season_label)
    df[config.SEASON_COL] = season_label
    df[config.SOURCE_ROW_COL] = range(len(df))

    print(f"******* Loaded {len(df):,} player-games for {season_label} from {filepath}")
    return df


def load_seasons(
    season_files: Optional[Mapping[str, Path | str]] = None,
    *,
    column_aliases: Optional[Mapping[str, str]] = None,
) -> pd.DataFrame:
    """
    Load every season and stack them in mapping order.

    Only the required columns plus the optional columns shared by all seasons
    are kept, so every season contributes the same schema. Row order within a
    season is preserved.
    """
    season_files = config.SEASON_FILES if season_files is None else season_files
    if not season_files:
        raise DataLoadError("No season files given")

    schema = SeasonSchema()
    frames: Dict[str, pd.DataFrame] = {
        label: load_season(path, label, column_aliases=column_aliases, schema=schema)
        for label, path in season_files.items()
    }

    shared_optional = [
        c for c in schema.optional
        if all(c in df.columns for df in frames.values())
    ]
    keep = (
        schema.required
        + shared_optional
        + [config.SEASON_COL, config.SOURCE_ROW_COL]
    )
    merged = pd.concat([df[keep] for df in frames.values()], ignore_index=True)

    dropped_optional = sorted(
        {c for df in frames.values() for c in schema.optional_present(df)} - set(shared_optional)
    )
    if dropped_optional:
        logger.warning("Optional columns not present in every season were dropped: %s", dropped_optional)

    logger.info("Merged %d seasons → %s rows × %s cols", len(frames), *merged.shape)
    return merged


def summarize_seasons(df: pd.DataFrame) -> dict:
    """
    Get summary statistics of the merged table.

    Returns:
        Dictionary with row counts per season, unique players and ice time
    """
    return {
        "total_rows": len(df),
        "unique_players": df[config.ENTITY_COL].nunique(),
        "seasons": list(pd.unique(df[config.SEASON_COL])),
        "rows_per_season": df.groupby(config.SEASON_COL, sort=False).size().to_dict(),
        "total_icetime": float(df[config.ICETIME_COL].sum()),
    }


if __name__ == "__main__":
    print("Testing season loader...")
    try:
        df = load_seasons()
        print(df.head())
        print(summarize_seasons(df))
    except DataLoadError as e:
        print(f"------------- Error loading seasons: {e}")
        print("Note: This is expected if data files are not present.")
