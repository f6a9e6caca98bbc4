"""
Within-player fixed-effects regression.

Each player's own mean is subtracted from the outcome and from every design
column, removing time-invariant player ability, and the demeaned data are
fitted by OLS. Residual degrees of freedom account for the absorbed player
means (n − k − G), which the plain OLS fit on demeaned data would not.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

import numpy as np
import pandas as pd
import patsy
import statsmodels.api as sm

from src.nhl_rebound_analysis.config import config
from src.nhl_rebound_analysis.exceptions import EstimationError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class FittedPanelModel:
    """Estimated coefficients with their inference and fit statistics."""
    name: str
    formula: str
    dependent: str
    params: pd.Series
    std_errors: pd.Series
    tstats: pd.Series
    pvalues: pd.Series
    cov_type: str
    nobs: int
    n_entities: int
    n_excluded: int
    rsquared: float
    rsquared_within: float
    df_resid: float
    df_inference: float
    results: Any = field(repr=False)
    groups: np.ndarray = field(repr=False)

    @property
    def regressors(self) -> list[str]:
        return list(self.params.index)


def inference_series(results, names) -> Dict[str, pd.Series]:
    """params / bse / t / p of a statsmodels result as named Series."""
    index = pd.Index(names)
    return {
        "params": pd.Series(np.asarray(results.params), index=index, name="coef"),
        "std_errors": pd.Series(np.asarray(results.bse), index=index, name="std_err"),
        "tstats": pd.Series(np.asarray(results.tvalues), index=index, name="t_stat"),
        "pvalues": pd.Series(np.asarray(results.pvalues), index=index, name="p_value"),
    }


def demean(frame, entities: pd.Series):
    """Subtract each entity's mean (the within transformation)."""
    return frame - frame.groupby(entities.to_numpy()).transform("mean")


class FixedEffectsEstimator:
    """Fits patsy formulas with entity fixed effects absorbed by demeaning."""

    def __init__(self, entity: str = config.ENTITY_COL):
        self.entity = entity

    # ------------------------------------------------------------------
    # Design construction
    # ------------------------------------------------------------------
    def design(self, panel: pd.DataFrame, formula: str) -> Tuple[pd.Series, pd.DataFrame, pd.Series]:
        """
        Build outcome, design matrix and entity labels for ``formula``.

        The intercept is always dropped since the entity means absorb it.
        """
        data = panel.reset_index()
        if self.entity not in data.columns:
            raise EstimationError(f"Entity column '{self.entity}' not found in panel")
        try:
            y, X = patsy.dmatrices(f"{formula} - 1", data, NA_action="raise", return_type="dataframe")
        except patsy.PatsyError as e:
            raise EstimationError(f"Cannot build design for '{formula}': {e}") from e
        if X.shape[1] == 0:
            raise EstimationError(f"Formula '{formula}' has no regressors")
        return y.iloc[:, 0], X, data.loc[X.index, self.entity]

    def drop_singletons(self, y, X, entities) -> Tuple[pd.Series, pd.DataFrame, pd.Series, int]:
        """Remove entities observed only once; the within transform is undefined for them."""
        sizes = entities.map(entities.value_counts())
        keep = (sizes > 1).to_numpy()
        n_excluded = int((~keep).sum())
        if n_excluded:
            logger.warning("Excluded %d rows from single-observation players", n_excluded)
        if not keep.any():
            raise EstimationError("No player has more than one observation; sample is empty")
        return y[keep], X[keep], entities[keep], n_excluded

    @staticmethod
    def check_rank(X_dm: pd.DataFrame) -> None:
        """Raise if the demeaned design is not of full column rank."""
        rank = np.linalg.matrix_rank(X_dm.to_numpy())
        if rank < X_dm.shape[1]:
            flat = X_dm.columns[np.isclose(X_dm.abs().max(), 0.0)].tolist()
            detail = f"; no within-player variation in {flat}" if flat else ""
            raise EstimationError(
                f"Design matrix is rank deficient (rank {rank} < {X_dm.shape[1]} columns: "
                f"{X_dm.columns.tolist()}){detail}"
            )

    # ------------------------------------------------------------------
    # Estimation
    # ------------------------------------------------------------------
    def fit(self, panel: pd.DataFrame, formula: str, name: Optional[str] = None) -> FittedPanelModel:
        """
        Estimate ``formula`` with player fixed effects.

        Args:
            panel: Panel frame indexed by (player_id, time_key)
            formula: patsy formula, e.g. ``"goals_rate ~ hd_rate * reb_rate"``
            name: Label for the fitted model

        Returns:
            FittedPanelModel with model-based (non-robust) inference
        """
        y, X, entities = self.design(panel, formula)
        y, X, entities, n_excluded = self.drop_singletons(y, X, entities)

        y_dm = demean(y, entities)
        X_dm = demean(X, entities)
        self.check_rank(X_dm)

        n, k = X_dm.shape
        n_entities = int(entities.nunique())
        df_resid = n - k - n_entities
        if df_resid <= 0:
            raise EstimationError(
                f"Not enough observations: {n} rows, {k} regressors, {n_entities} players"
            )

        ols = sm.OLS(y_dm, X_dm)
        ols.df_resid = float(df_resid)
        results = ols.fit(use_t=True)

        ssr = float(results.ssr)
        within_tss = float((y_dm ** 2).sum())
        total_tss = float(((y - y.mean()) ** 2).sum())

        model = FittedPanelModel(
            name=name or formula,
            formula=formula,
            dependent=str(y.name),
            cov_type="unadjusted",
            nobs=int(n),
            n_entities=n_entities,
            n_excluded=n_excluded,
            rsquared=1.0 - ssr / total_tss if total_tss > 0 else float("nan"),
            rsquared_within=1.0 - ssr / within_tss if within_tss > 0 else float("nan"),
            df_resid=float(df_resid),
            df_inference=float(df_resid),
            results=results,
            groups=pd.factorize(entities)[0],
            **inference_series(results, X.columns),
        )
        logger.info(
            "Fitted %s: n=%d, players=%d, within R²=%.4f",
            model.name, model.nobs, model.n_entities, model.rsquared_within,
        )
        return model
