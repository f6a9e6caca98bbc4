"""
Data module for the NHL rebound analysis.
"""

from .loader import load_season, load_seasons, summarize_seasons
from .feature_engineering import derive_features
from .panel import build_panel_frame

__all__ = ['load_season', 'load_seasons', 'summarize_seasons', 'derive_features', 'build_panel_frame']
