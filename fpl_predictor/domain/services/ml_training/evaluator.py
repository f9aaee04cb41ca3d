"""
ModelEvaluator - holdout metrics for the points regression model.

Standard regression metrics (MAE, RMSE) plus Spearman rank correlation,
which measures how well the model orders players regardless of scale.
"""

import math
from typing import Any, Dict

import numpy as np
import pandas as pd
from scipy.stats import spearmanr
from sklearn.metrics import mean_absolute_error, mean_squared_error


class ModelEvaluator:
    """Evaluate a fitted pipeline on held-out rows."""

    def evaluate_model(self, model: Any, X: pd.DataFrame, y: np.ndarray) -> Dict[str, Any]:
        """
        Evaluate a model on test data.

        Args:
            model: Fitted sklearn pipeline
            X: Test features
            y: Test target

        Returns:
            Dictionary with mae, rmse, spearman and n_samples. Spearman is
            None when either series is constant.
        """
        y_pred = model.predict(X)

        metrics: Dict[str, Any] = {
            "mae": float(mean_absolute_error(y, y_pred)),
            "rmse": float(np.sqrt(mean_squared_error(y, y_pred))),
            "n_samples": int(len(y)),
        }

        corr, _ = spearmanr(y, y_pred)
        metrics["spearman"] = None if corr is None or math.isnan(corr) else float(corr)
        return metrics

    def format_results(self, metrics: Dict[str, Any]) -> str:
        """Format metrics for logging."""
        spearman = metrics.get("spearman")
        lines = [
            f"   MAE: {metrics.get('mae', 0):.3f}",
            f"   RMSE: {metrics.get('rmse', 0):.3f}",
            f"   Spearman: {spearman:.3f}" if spearman is not None else "   Spearman: n/a",
        ]
        return "\n".join(lines)
