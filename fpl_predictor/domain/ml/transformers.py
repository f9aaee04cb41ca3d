"""Custom sklearn transformers for the points regression pipelines."""

from typing import List

import numpy as np
import pandas as pd
from sklearn.base import BaseEstimator, TransformerMixin


class FeatureSelector(BaseEstimator, TransformerMixin):
    """
    Select and order features by name from a DataFrame.

    The first step of every training pipeline. The selector pins the column
    order to the schema the model was fitted on, so callers may pass frames
    with extra or reordered columns and the regressor still sees the same
    layout at training and prediction time.

    Parameters
    ----------
    feature_names : list of str
        Names of features to select, in model input order
    """

    def __init__(self, feature_names: List[str]):
        self.feature_names = feature_names

    def fit(self, X, y=None):
        """No-op; selection needs no fitted state."""
        return self

    def transform(self, X):
        """
        Select the schema columns in schema order.

        Parameters
        ----------
        X : DataFrame, shape (n_samples, n_features_input)
            Input features (may include extra columns)

        Returns
        -------
        X_selected : DataFrame, shape (n_samples, len(feature_names))
        """
        if not isinstance(X, pd.DataFrame):
            raise TypeError(
                f"FeatureSelector requires DataFrame input, got {type(X).__name__}"
            )

        missing = [name for name in self.feature_names if name not in X.columns]
        if missing:
            shown = missing[:10]
            suffix = "..." if len(missing) > 10 else ""
            raise ValueError(f"Missing required features: {shown}{suffix}")

        return X[list(self.feature_names)]

    def get_feature_names_out(self, input_features=None):
        return np.array(self.feature_names)
