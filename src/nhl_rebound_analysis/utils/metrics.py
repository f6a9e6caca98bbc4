"""
Coefficient tables and model comparisons for the fixed-effects fits.
"""
from __future__ import annotations

from typing import Dict

import numpy as np
import pandas as pd

from src.nhl_rebound_analysis.config import config
from src.nhl_rebound_analysis.models.fixed_effects import FittedPanelModel


def significance_stars(p: float) -> str:
    if np.isnan(p):
        return ""
    if p < 0.001:
        return "***"
    if p < 0.01:
        return "**"
    if p < 0.05:
        return "*"
    return ""


class ModelEvaluator:
    """Tabulates fitted models for the console report and CSV output."""

    @staticmethod
    def coefficient_table(model: FittedPanelModel) -> pd.DataFrame:
        """One row per regressor: coef, std_err, t_stat, p_value, stars."""
        table = pd.concat(
            [model.params, model.std_errors, model.tstats, model.pvalues], axis=1
        )
        table["stars"] = table["p_value"].map(significance_stars)
        table.index.name = "term"
        return table

    @staticmethod
    def compare_inference(
        base: FittedPanelModel,
        robust: FittedPanelModel,
        alpha: float = config.SIGNIFICANCE_LEVEL,
    ) -> pd.DataFrame:
        """
        Model-based vs. cluster-robust inference side by side.

        ``significance_changed`` marks terms whose significance at ``alpha``
        differs between the two; that is a finding about the data, the point
        estimates are the same in both columns.
        """
        table = pd.DataFrame({
            "coef": base.params,
            "se_model": base.std_errors,
            "se_robust": robust.std_errors,
            "p_model": base.pvalues,
            "p_robust": robust.pvalues,
        })
        table["se_ratio"] = table["se_robust"] / table["se_model"]
        table["significance_changed"] = (table["p_model"] < alpha) != (table["p_robust"] < alpha)
        table.index.name = "term"
        return table

    @staticmethod
    def compare_models(models: Dict[str, FittedPanelModel]) -> pd.DataFrame:
        """Fit statistics per model, one row each."""
        rows = {
            name: {
                "nobs": m.nobs,
                "players": m.n_entities,
                "excluded_singletons": m.n_excluded,
                "regressors": len(m.params),
                "r2": m.rsquared,
                "r2_within": m.rsquared_within,
                "df_resid": m.df_resid,
                "cov_type": m.cov_type,
            }
            for name, m in models.items()
        }
        return pd.DataFrame.from_dict(rows, orient="index")
