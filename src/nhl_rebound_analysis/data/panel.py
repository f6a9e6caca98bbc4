"""
Panel indexing for the fixed-effects models.

Games carry no reliable timestamp in every season file, so the source row
order inside a season is taken as the chronological order of a player's
games. When a ``game_date`` column is available that assumption is checked
rather than trusted.
"""
from __future__ import annotations

import logging

import pandas as pd

from src.nhl_rebound_analysis.config import config
from src.nhl_rebound_analysis.exceptions import DuplicatePanelKeyError, PanelOrderError

logger = logging.getLogger(__name__)

_GROUP = [config.ENTITY_COL, config.SEASON_COL]


def make_time_key(season: pd.Series, game_seq: pd.Series) -> pd.Series:
    """Join season label and game number, e.g. ``2021-22_007``."""
    return season.astype(str) + "_" + game_seq.map("{:03d}".format)


def assign_game_sequence(df: pd.DataFrame) -> pd.DataFrame:
    """Number each player's games within a season 1..n in source row order."""
    df = df.sort_values(_GROUP + [config.SOURCE_ROW_COL], kind="stable")
    df[config.GAME_SEQ_COL] = df.groupby(_GROUP, sort=False).cumcount() + 1
    df[config.TIME_KEY_COL] = make_time_key(df[config.SEASON_COL], df[config.GAME_SEQ_COL])
    return df


def validate_chronology(df: pd.DataFrame) -> None:
    """
    Check source order against ``game_date`` when the column exists.

    Raises:
        PanelOrderError: a date decreases in source order within a player-season
        DuplicatePanelKeyError: a player has two rows on the same date
    """
    if config.DATE_COL not in df.columns:
        logger.info("No %s column – treating source row order as chronological", config.DATE_COL)
        return

    ordered = df.sort_values(_GROUP + [config.SOURCE_ROW_COL], kind="stable")
    dates = pd.to_datetime(ordered[config.DATE_COL], errors="coerce")
    deltas = dates.groupby([ordered[c] for c in _GROUP], sort=False).diff()

    backwards = ordered.loc[deltas < pd.Timedelta(0), _GROUP + [config.DATE_COL]]
    if not backwards.empty:
        raise PanelOrderError(
            f"{len(backwards)} games appear before an earlier row's date; "
            f"first offenders:\n{backwards.head().to_string(index=False)}"
        )

    same_day = ordered.loc[deltas == pd.Timedelta(0), _GROUP + [config.DATE_COL]]
    if not same_day.empty:
        raise DuplicatePanelKeyError(
            f"{len(same_day)} repeated player/date rows:\n{same_day.head().to_string(index=False)}",
            duplicates=same_day,
        )


def panel_key_counts(df: pd.DataFrame) -> pd.Series:
    """Occurrences of every (player, time key) pair."""
    return df.groupby([config.ENTITY_COL, config.TIME_KEY_COL]).size()


def validate_panel_keys(df: pd.DataFrame) -> None:
    """Raise ``DuplicatePanelKeyError`` if any (player, time key) occurs twice."""
    counts = panel_key_counts(df)
    dupes = counts[counts > 1]
    if not dupes.empty:
        raise DuplicatePanelKeyError(
            f"{len(dupes)} duplicate (player, time key) pairs, e.g. {dupes.index[:5].tolist()}",
            duplicates=dupes,
        )


def build_panel_frame(clean: pd.DataFrame) -> pd.DataFrame:
    """
    Index the clean table as a player × time panel.

    Returns:
        DataFrame indexed by (player_id, time_key), sorted by player then time
    """
    validate_chronology(clean)
    indexed = assign_game_sequence(clean)
    validate_panel_keys(indexed)

    panel = indexed.set_index([config.ENTITY_COL, config.TIME_KEY_COL]).sort_index()
    n_players = panel.index.get_level_values(0).nunique()
    logger.info("Panel frame: %d players, %d player-games", n_players, len(panel))
    print(f"******* Built panel: {n_players:,} players × {len(panel):,} player-games")
    return panel
