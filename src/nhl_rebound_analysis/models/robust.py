"""
Cluster-robust inference for fitted fixed-effects models.

The sandwich covariance is clustered by player with the HC1-style correction
G/(G−1) · (n−1)/(n−k); t-statistics use G−1 degrees of freedom. Coefficients
are carried over untouched.
"""
from __future__ import annotations

import dataclasses
import logging

from src.nhl_rebound_analysis.exceptions import EstimationError
from src.nhl_rebound_analysis.models.fixed_effects import FittedPanelModel, inference_series

logger = logging.getLogger(__name__)


def cluster_robust(model: FittedPanelModel) -> FittedPanelModel:
    """Return ``model`` with player-clustered standard errors, t and p values."""
    n_clusters = len(set(model.groups.tolist()))
    if n_clusters < 2:
        raise EstimationError(f"Clustered covariance needs at least 2 players, got {n_clusters}")

    robust = model.results.get_robustcov_results(
        cov_type="cluster",
        groups=model.groups,
        use_correction=True,
        df_correction=True,
        use_t=True,
    )
    logger.info("Cluster-robust inference for %s over %d players", model.name, n_clusters)
    return dataclasses.replace(
        model,
        cov_type="clustered",
        df_inference=float(n_clusters - 1),
        results=robust,
        **inference_series(robust, model.regressors),
    )
