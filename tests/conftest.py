"""
Shared fixtures: synthetic multi-season player-game logs.
"""
import os
import sys

import matplotlib
matplotlib.use("Agg")

import numpy as np
import pandas as pd
import pytest

# Add project root to path so ``src.`` imports resolve
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))


def make_player_games(
    n_players: int = 3,
    n_games: int = 4,
    seasons=("2022-23",),
    seed: int = 0,
    reb_coef: float = 2.0,
    noise: float = 1e-4,
) -> pd.DataFrame:
    """
    Merged raw table as the loader returns it.

    goals_rate = player ability + reb_coef · reb_rate + N(0, noise); rows are
    interleaved game by game so a player's games are not contiguous.
    """
    rng = np.random.default_rng(seed)
    ability = {8478000 + p: rng.normal(0.02, 0.01) for p in range(n_players)}

    rows = []
    for s_idx, season in enumerate(seasons):
        start = pd.Timestamp(f"{2019 + s_idx}-10-01")
        for g in range(n_games):
            for pid, alpha in ability.items():
                icetime = rng.uniform(10.0, 24.0)
                reb_rate = rng.uniform(0.005, 0.05)
                hd_rate = rng.uniform(0.0, 0.3)
                goals_rate = alpha + reb_coef * reb_rate + rng.normal(0.0, noise)
                rows.append({
                    "player_id": pid,
                    "player_name": f"Player {pid}",
                    "game_date": (start + pd.Timedelta(days=2 * g)).date().isoformat(),
                    "icetime": icetime,
                    "goals": goals_rate * icetime,
                    "high_danger_shots": hd_rate * icetime,
                    "rebound_xgoals": reb_rate * icetime,
                    "hits": int(rng.integers(0, 6)),
                    "takeaways": int(rng.integers(0, 4)),
                    "giveaways": int(rng.integers(0, 4)),
                    "ozone_starts": int(rng.integers(0, 10)),
                    "dzone_starts": int(rng.integers(0, 10)),
                    "xgoals_for_after_shift": rng.uniform(0.0, 1.0),
                    "xgoals_against_after_shift": rng.uniform(0.0, 1.0),
                    "season": season,
                })

    df = pd.DataFrame(rows)
    df["source_row"] = df.groupby("season").cumcount()
    return df


def write_season_files(raw: pd.DataFrame, directory) -> dict:
    """Write one CSV per season, without the loader's bookkeeping columns."""
    files = {}
    for season, grp in raw.groupby("season", sort=False):
        path = directory / f"skaters_{season}.csv"
        grp.drop(columns=["season", "source_row"]).to_csv(path, index=False)
        files[season] = path
    return files


@pytest.fixture
def player_games():
    """Builder for synthetic raw tables."""
    return make_player_games


@pytest.fixture
def raw_games():
    """3 players × 4 games, one season."""
    return make_player_games()


@pytest.fixture
def clean_games(raw_games):
    from src.nhl_rebound_analysis.data.feature_engineering import derive_features
    return derive_features(raw_games)


@pytest.fixture
def panel(clean_games):
    from src.nhl_rebound_analysis.data.panel import build_panel_frame
    return build_panel_frame(clean_games)


@pytest.fixture
def large_panel():
    """12 players × 10 games × 2 seasons, enough for the interaction models."""
    from src.nhl_rebound_analysis.data.feature_engineering import derive_features
    from src.nhl_rebound_analysis.data.panel import build_panel_frame
    raw = make_player_games(n_players=12, n_games=10, seasons=("2021-22", "2022-23"), seed=7, noise=0.005)
    return build_panel_frame(derive_features(raw))


@pytest.fixture
def season_files(tmp_path):
    """Five season CSVs on disk, 8 players × 12 games each."""
    seasons = ("2019-20", "2020-21", "2021-22", "2022-23", "2023-24")
    raw = make_player_games(n_players=8, n_games=12, seasons=seasons, seed=3, noise=0.005)
    return write_season_files(raw, tmp_path)
