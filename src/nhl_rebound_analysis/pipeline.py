"""
End-to-end rebound analysis: load → derive → index → correlate → fit → cluster.

Every stage receives the previous stage's output and returns a new object;
nothing is shared between stages except what is passed along.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Mapping, Optional, Tuple

import matplotlib.pyplot as plt
import pandas as pd

from src.nhl_rebound_analysis.config import config
from src.nhl_rebound_analysis.data.feature_engineering import derive_features
from src.nhl_rebound_analysis.data.loader import load_seasons, summarize_seasons
from src.nhl_rebound_analysis.data.panel import build_panel_frame
from src.nhl_rebound_analysis.eda import (
    CorrelationResult,
    correlation_matrix,
    describe_rates,
    plot_correlation_heatmap,
)
from src.nhl_rebound_analysis.models.fixed_effects import FittedPanelModel, FixedEffectsEstimator
from src.nhl_rebound_analysis.models.robust import cluster_robust
from src.nhl_rebound_analysis.utils.metrics import ModelEvaluator

# ───────────────────── configuration ────────────────────────────
logger = logging.getLogger(__name__)
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s │ %(levelname)s │ %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)


@dataclass(frozen=True, eq=False)
class AnalysisReport:
    """Everything a run produced."""
    clean: pd.DataFrame
    panel: pd.DataFrame
    correlation: CorrelationResult
    models: Dict[str, Tuple[FittedPanelModel, FittedPanelModel]]
    inference: Dict[str, pd.DataFrame]
    fit_summary: pd.DataFrame


def fit_specifications(
    panel: pd.DataFrame,
    formulas: Mapping[str, str] = config.MODEL_FORMULAS,
) -> Dict[str, Tuple[FittedPanelModel, FittedPanelModel]]:
    """Fit each formula, returning (model-based, cluster-robust) per name."""
    estimator = FixedEffectsEstimator()
    fitted = {}
    for name, formula in formulas.items():
        base = estimator.fit(panel, formula, name=name)
        fitted[name] = (base, cluster_robust(base))
    return fitted


def _print_table(title: str, table: pd.DataFrame) -> None:
    print(f"\n{title}")
    print(table.to_string(float_format=lambda v: f"{v:.4f}"))


def run_analysis(
    season_files: Optional[Mapping[str, Path | str]] = None,
    *,
    output_dir: Path | str | None = None,
    formulas: Mapping[str, str] = config.MODEL_FORMULAS,
) -> AnalysisReport:
    """Run the whole analysis once and write the figures/tables to ``output_dir``."""
    output_dir = Path(output_dir) if output_dir is not None else config.OUTPUT_DIR
    output_dir.mkdir(parents=True, exist_ok=True)
    evaluator = ModelEvaluator()

    print("── Section 1 Load Seasons ──")
    raw = load_seasons(season_files)
    logger.info("Season summary: %s", summarize_seasons(raw))

    print("── Section 2 Derive Rate Features ──")
    clean = derive_features(raw)

    print("── Section 3 Build Panel Index ──")
    panel = build_panel_frame(clean)

    print("── Section 4 Correlation Analysis ──")
    _print_table("Rate variable summary:", describe_rates(clean))
    correlation = correlation_matrix(clean)
    if correlation.constant_columns:
        print(f"⚠️  Constant columns, correlation undefined: {correlation.constant_columns}")
    print("\nCorrelation matrix:")
    print(correlation.rounded().to_string())
    correlation.rounded().to_csv(output_dir / config.CORRELATION_FILE.name)
    fig = plot_correlation_heatmap(correlation.matrix, savefig=output_dir / config.HEATMAP_FILE.name)
    plt.close(fig)

    print("── Section 5 Fixed-Effects Models ──")
    models = fit_specifications(panel, formulas)

    print("── Section 6 Cluster-Robust Inference ──")
    inference = {}
    for name, (base, robust) in models.items():
        _print_table(f"{name} model – unadjusted standard errors:", evaluator.coefficient_table(base))
        _print_table(f"{name} model – player-clustered standard errors:", evaluator.coefficient_table(robust))
        inference[name] = evaluator.compare_inference(base, robust)
        inference[name].to_csv(output_dir / f"coefficients_{name}.csv")

        changed = inference[name].index[inference[name]["significance_changed"]].tolist()
        if changed:
            print(f"Significance at {config.SIGNIFICANCE_LEVEL:.0%} changes under clustering for: {changed}")

    fit_summary = evaluator.compare_models({name: base for name, (base, _) in models.items()})
    _print_table("Model fit:", fit_summary)
    fit_summary.to_csv(output_dir / "model_fit.csv")

    logger.info("All outputs saved in %s", output_dir.resolve())
    return AnalysisReport(
        clean=clean,
        panel=panel,
        correlation=correlation,
        models=models,
        inference=inference,
        fit_summary=fit_summary,
    )


if __name__ == "__main__":
    config.ensure_directories()
    run_analysis()
