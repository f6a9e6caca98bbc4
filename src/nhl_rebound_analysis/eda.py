"""
Descriptive utilities for the rate variables: summary statistics, the
Pearson correlation matrix and its heat-map.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Sequence

import matplotlib.pyplot as plt
import numpy as np
import pandas as pd
import seaborn as sns

from src.nhl_rebound_analysis.config import config

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CorrelationResult:
    """Pearson matrix plus the columns that had no variance."""
    matrix: pd.DataFrame
    constant_columns: List[str] = field(default_factory=list)

    def rounded(self, decimals: int = config.CORRELATION_DECIMALS) -> pd.DataFrame:
        return self.matrix.round(decimals)


def describe_rates(
    df: pd.DataFrame,
    columns: Sequence[str] = tuple(config.CORRELATION_VARIABLES),
) -> pd.DataFrame:
    """count / mean / std / quartiles for each rate variable, one row per variable."""
    return df[list(columns)].describe().T


def correlation_matrix(
    df: pd.DataFrame,
    columns: Sequence[str] = tuple(config.CORRELATION_VARIABLES),
) -> CorrelationResult:
    """
    Pairwise Pearson correlations between ``columns``.

    A constant column has no defined correlation; it is listed in
    ``constant_columns`` and its row/column stay NaN.
    """
    columns = list(columns)
    data = df[columns].astype(float)

    constant = [c for c in columns if data[c].nunique(dropna=True) <= 1]
    if constant:
        logger.warning("Correlation undefined for constant columns: %s", constant)

    corr = data.corr(method="pearson")
    for c in columns:
        if c not in constant:
            corr.loc[c, c] = 1.0

    return CorrelationResult(matrix=corr, constant_columns=constant)


def plot_correlation_heatmap(
    corr: pd.DataFrame,
    savefig: Path | None = None,
) -> plt.Figure:
    """Annotated heat-map of a correlation matrix."""
    fig, ax = plt.subplots(figsize=config.FIGURE_SIZE)
    mask = np.triu(np.ones_like(corr, dtype=bool), k=1)
    sns.heatmap(
        corr,
        mask=mask,
        annot=True,
        fmt=f".{config.CORRELATION_DECIMALS}f",
        cmap="coolwarm",
        vmin=-1,
        vmax=1,
        square=True,
        ax=ax,
    )
    ax.set_title("Per-Minute Rate Correlation Matrix")

    plt.tight_layout()
    if savefig:
        fig.savefig(savefig, dpi=config.DPI, bbox_inches="tight")
        logger.info("Correlation heat-map saved → %s", savefig)
    return fig
