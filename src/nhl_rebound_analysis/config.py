"""
Configuration module for the NHL rebound analysis package.
Contains all constants, paths, variable lists and model formulas.
"""
from pathlib import Path
from typing import Dict, List


class Config:
    """Main configuration class for the NHL rebound analysis package."""

    # Base paths - relative to the project root so they work from any checkout
    _CONFIG_DIR = Path(__file__).parent.parent.parent  # Go up to project root
    PROJECT_ROOT = _CONFIG_DIR.resolve()

    DATA_DIR = PROJECT_ROOT / "data"
    RAW_DATA_DIR = DATA_DIR / "raw"
    OUTPUT_DIR = PROJECT_ROOT / "output"

    # Raw data files, one per season (label -> csv)
    SEASON_FILES: Dict[str, Path] = {
        "2019-20": RAW_DATA_DIR / "skaters_2019-20.csv",
        "2020-21": RAW_DATA_DIR / "skaters_2020-21.csv",
        "2021-22": RAW_DATA_DIR / "skaters_2021-22.csv",
        "2022-23": RAW_DATA_DIR / "skaters_2022-23.csv",
        "2023-24": RAW_DATA_DIR / "skaters_2023-24.csv",
    }
    SEASONS = list(SEASON_FILES)

    # Output artifacts
    HEATMAP_FILE = OUTPUT_DIR / "rate_correlation.png"
    CORRELATION_FILE = OUTPUT_DIR / "rate_correlation.csv"

    # ─── Column schema ───────────────────────────────────────────
    ENTITY_COL = "player_id"
    SEASON_COL = "season"
    ICETIME_COL = "icetime"          # minutes on ice
    DATE_COL = "game_date"
    SOURCE_ROW_COL = "source_row"
    GAME_SEQ_COL = "game_seq"
    TIME_KEY_COL = "time_key"

    ID_COLUMNS: List[str] = ["player_id"]
    COUNT_COLUMNS: List[str] = [
        "goals",
        "high_danger_shots",
        "rebound_xgoals",
        "hits",
        "takeaways",
        "giveaways",
        "ozone_starts",
        "dzone_starts",
        "xgoals_for_after_shift",
        "xgoals_against_after_shift",
    ]
    REQUIRED_COLUMNS: List[str] = ID_COLUMNS + [ICETIME_COL] + COUNT_COLUMNS
    OPTIONAL_COLUMNS: List[str] = ["player_name", "game_id", "game_date"]

    # MoneyPuck game-log headers -> canonical names
    COLUMN_ALIASES: Dict[str, str] = {
        "playerId": "player_id",
        "name": "player_name",
        "gameId": "game_id",
        "gameDate": "game_date",
        "I_F_goals": "goals",
        "I_F_highDangerShots": "high_danger_shots",
        "I_F_reboundxGoals": "rebound_xgoals",
        "I_F_hits": "hits",
        "I_F_takeaways": "takeaways",
        "I_F_giveaways": "giveaways",
        "I_F_oZoneShiftStarts": "ozone_starts",
        "I_F_dZoneShiftStarts": "dzone_starts",
        "xGoalsForAfterShifts": "xgoals_for_after_shift",
        "xGoalsAgainstAfterShifts": "xgoals_against_after_shift",
    }

    # ─── Derived variables ───────────────────────────────────────
    # per-minute rate -> numerator column
    RATE_DEFINITIONS: Dict[str, str] = {
        "hd_rate": "high_danger_shots",
        "goals_rate": "goals",
        "reb_rate": "rebound_xgoals",
        "phys_rate": "hits",
        "take_rate": "takeaways",
        "give_rate": "giveaways",
    }
    DERIVED_COLUMNS: List[str] = [
        "hd_rate", "goals_rate", "mom_diff", "reb_rate",
        "phys_rate", "take_rate", "give_rate", "zone_start_diff",
    ]

    CORRELATION_VARIABLES: List[str] = [
        "goals_rate", "hd_rate", "reb_rate", "phys_rate",
        "take_rate", "give_rate", "mom_diff",
    ]

    # ─── Model specifications (patsy syntax, intercept absorbed) ──
    MODEL_FORMULAS: Dict[str, str] = {
        "full": (
            "goals_rate ~ hd_rate + reb_rate + phys_rate + take_rate + give_rate"
            " + hd_rate:reb_rate + hd_rate:phys_rate"
            " + hd_rate:take_rate + hd_rate:give_rate"
        ),
        "simplified": (
            "goals_rate ~ hd_rate * reb_rate + phys_rate + take_rate + give_rate"
        ),
    }

    # Inference
    SIGNIFICANCE_LEVEL = 0.05
    CORRELATION_DECIMALS = 3

    # Visualization settings
    FIGURE_SIZE = (9, 7)
    DPI = 150

    @classmethod
    def ensure_directories(cls):
        """Create all required directories if they don't exist."""
        for dir_path in [cls.RAW_DATA_DIR, cls.OUTPUT_DIR]:
            dir_path.mkdir(parents=True, exist_ok=True)


# Create global config instance
config = Config()


if __name__ == "__main__":
    print("NHL Rebound Analysis Configuration")
    print("=" * 40)
    print(f"Data directory: {config.DATA_DIR}")
    for label, path in config.SEASON_FILES.items():
        print(f"  {label}: {path}")
    print(f"Correlation variables: {config.CORRELATION_VARIABLES}")
    for name, formula in config.MODEL_FORMULAS.items():
        print(f"{name}: {formula}")
