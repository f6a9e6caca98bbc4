"""Utils module for the NHL rebound analysis."""

from .metrics import ModelEvaluator, significance_stars

__all__ = ['ModelEvaluator', 'significance_stars']
