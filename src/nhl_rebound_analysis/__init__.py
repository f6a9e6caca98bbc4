"""
NHL Rebound Analysis Package
Fixed-effects study of how high-danger shooting and rebound generation
jointly predict per-minute goal scoring.
"""

__version__ = "1.0.0"
__author__ = "NHL Analytics Team"

# Import main entry points for easy access
from .config import config
from .data.loader import load_seasons
from .data.feature_engineering import derive_features
from .data.panel import build_panel_frame
from .models.fixed_effects import FixedEffectsEstimator, FittedPanelModel
from .models.robust import cluster_robust

__all__ = [
    'config',
    'load_seasons',
    'derive_features',
    'build_panel_frame',
    'FixedEffectsEstimator',
    'FittedPanelModel',
    'cluster_robust',
]
