"""
Unit tests for the season loader.
"""
import unittest
import pandas as pd
from pathlib import Path
import tempfile
import shutil
import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from src.nhl_rebound_analysis.data.loader import load_season, load_seasons, summarize_seasons
from src.nhl_rebound_analysis.exceptions import DataLoadError


def _season_frame(player_ids, offset=0):
    n = len(player_ids)
    return pd.DataFrame({
        'player_id': player_ids,
        'player_name': [f'Player {p}' for p in player_ids],
        'icetime': [15.0 + i for i in range(n)],
        'goals': [i % 2 for i in range(n)],
        'high_danger_shots': [1 + offset] * n,
        'rebound_xgoals': [0.05] * n,
        'hits': [2] * n,
        'takeaways': [1] * n,
        'giveaways': [0] * n,
        'ozone_starts': [3] * n,
        'dzone_starts': [1] * n,
        'xgoals_for_after_shift': [0.4] * n,
        'xgoals_against_after_shift': [0.3] * n,
    })


class TestSeasonLoader(unittest.TestCase):
    """Test cases for load_season / load_seasons."""

    def setUp(self):
        """Set up test fixtures."""
        self.temp_dir = Path(tempfile.mkdtemp())

        self.season_a = _season_frame([1, 2, 1, 3])
        self.season_b = _season_frame([2, 3, 2], offset=1)
        self.season_b['game_date'] = ['2021-10-01', '2021-10-01', '2021-10-03']

        self.file_a = self.temp_dir / 'skaters_2020-21.csv'
        self.file_b = self.temp_dir / 'skaters_2021-22.csv'
        self.season_a.to_csv(self.file_a, index=False)
        self.season_b.to_csv(self.file_b, index=False)

    def tearDown(self):
        shutil.rmtree(self.temp_dir, ignore_errors=True)

    def test_load_season_tags_rows(self):
        """Season label and source row order are attached."""
        df = load_season(self.file_a, '2020-21')

        self.assertEqual(len(df), 4)
        self.assertTrue((df['season'] == '2020-21').all())
        self.assertListEqual(df['source_row'].tolist(), [0, 1, 2, 3])
        self.assertListEqual(df['player_id'].tolist(), [1, 2, 1, 3])

    def test_load_season_renames_moneypuck_headers(self):
        """MoneyPuck-style headers map onto the canonical schema."""
        raw = self.season_a.rename(columns={
            'player_id': 'playerId',
            'high_danger_shots': 'I_F_highDangerShots',
            'xgoals_for_after_shift': 'xGoalsForAfterShifts',
        })
        path = self.temp_dir / 'moneypuck.csv'
        raw.to_csv(path, index=False)

        df = load_season(path, '2020-21')
        self.assertIn('player_id', df.columns)
        self.assertIn('high_danger_shots', df.columns)
        self.assertIn('xgoals_for_after_shift', df.columns)

    def test_missing_file(self):
        with self.assertRaises(DataLoadError):
            load_season(self.temp_dir / 'nope.csv', '2020-21')

    def test_missing_required_columns(self):
        path = self.temp_dir / 'broken.csv'
        self.season_a.drop(columns=['hits', 'icetime']).to_csv(path, index=False)

        with self.assertRaises(DataLoadError) as ctx:
            load_season(path, '2020-21')
        self.assertListEqual(sorted(ctx.exception.missing), ['hits', 'icetime'])

    def test_empty_file(self):
        path = self.temp_dir / 'empty.csv'
        path.write_text('')
        with self.assertRaises(DataLoadError):
            load_season(path, '2020-21')

    def test_load_seasons_concatenates_in_order(self):
        """Seasons stack in mapping order, rows keep their order within a season."""
        df = load_seasons({'2020-21': self.file_a, '2021-22': self.file_b})

        self.assertEqual(len(df), 7)
        self.assertListEqual(df['season'].tolist(), ['2020-21'] * 4 + ['2021-22'] * 3)
        self.assertListEqual(df['player_id'].tolist(), [1, 2, 1, 3, 2, 3, 2])
        self.assertListEqual(df['source_row'].tolist(), [0, 1, 2, 3, 0, 1, 2])

    def test_load_seasons_keeps_only_shared_optional_columns(self):
        df = load_seasons({'2020-21': self.file_a, '2021-22': self.file_b})

        self.assertIn('player_name', df.columns)
        self.assertNotIn('game_date', df.columns)

    def test_load_seasons_fails_on_any_bad_file(self):
        with self.assertRaises(DataLoadError):
            load_seasons({'2020-21': self.file_a, '2021-22': self.temp_dir / 'missing.csv'})

    def test_summarize_seasons(self):
        df = load_seasons({'2020-21': self.file_a, '2021-22': self.file_b})
        summary = summarize_seasons(df)

        self.assertEqual(summary['total_rows'], 7)
        self.assertEqual(summary['unique_players'], 3)
        self.assertListEqual(summary['seasons'], ['2020-21', '2021-22'])
        self.assertDictEqual(summary['rows_per_season'], {'2020-21': 4, '2021-22': 3})

if __name__ == '__main__':
    unittest.main()
