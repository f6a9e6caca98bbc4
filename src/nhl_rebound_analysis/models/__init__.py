"""Models module for the NHL rebound analysis."""

from .fixed_effects import FixedEffectsEstimator, FittedPanelModel
from .robust import cluster_robust

__all__ = ['FixedEffectsEstimator', 'FittedPanelModel', 'cluster_robust']
