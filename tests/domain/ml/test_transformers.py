"""Tests for FeatureSelector."""

import numpy as np
import pandas as pd
import pytest

from fpl_predictor.domain.ml import FeatureSelector


class TestFeatureSelector:
    @pytest.fixture
    def frame(self):
        return pd.DataFrame({"c": [3.0], "a": [1.0], "b": [2.0], "extra": [9.0]})

    def test_selects_in_given_order(self, frame):
        """Output columns follow the selector's order, not the input's."""
        out = FeatureSelector(["a", "b", "c"]).fit(frame).transform(frame)
        assert list(out.columns) == ["a", "b", "c"]
        assert out.iloc[0].tolist() == [1.0, 2.0, 3.0]

    def test_missing_features_raise(self, frame):
        with pytest.raises(ValueError, match="Missing required features"):
            FeatureSelector(["a", "zzz"]).transform(frame)

    def test_requires_dataframe(self):
        with pytest.raises(TypeError):
            FeatureSelector(["a"]).transform(np.array([[1.0]]))

    def test_feature_names_out(self):
        names = FeatureSelector(["x", "y"]).get_feature_names_out()
        assert names.tolist() == ["x", "y"]
