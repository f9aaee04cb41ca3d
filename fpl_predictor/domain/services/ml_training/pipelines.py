"""
Pipeline construction for ML training.

Centralizes the regressor definitions and preprocessing strategies in one
place. Every pipeline starts with a FeatureSelector pinned to the feature
schema, so column order is identical at fit and predict time.
"""

from typing import Any, List, Optional

from sklearn.ensemble import GradientBoostingRegressor, RandomForestRegressor
from sklearn.linear_model import Ridge
from sklearn.pipeline import Pipeline
from sklearn.preprocessing import RobustScaler, StandardScaler

from fpl_predictor.domain.ml import FeatureSelector, field_schema

REGRESSOR_MAP = {
    "gradient-boost": "GradientBoostingRegressor",
    "random-forest": "RandomForestRegressor",
    "ridge": "Ridge",
    "lightgbm": "LGBMRegressor",
}


def get_regressor(regressor_name: str, random_seed: int = 42) -> Any:
    """
    Get regressor instance by name.

    Args:
        regressor_name: Name of regressor (see REGRESSOR_MAP)
        random_seed: Random seed for reproducibility

    Returns:
        Regressor instance
    """
    if regressor_name == "lightgbm":
        try:
            import lightgbm as lgb
        except ImportError as e:
            raise ImportError("LightGBM not installed. Run: pip install lightgbm") from e

        return lgb.LGBMRegressor(
            random_state=random_seed,
            n_jobs=1,
            verbose=-1,
            n_estimators=300,
            learning_rate=0.05,
            num_leaves=31,
        )

    elif regressor_name == "random-forest":
        return RandomForestRegressor(random_state=random_seed, n_jobs=1)

    elif regressor_name == "gradient-boost":
        return GradientBoostingRegressor(
            random_state=random_seed,
            n_estimators=300,
            learning_rate=0.05,
            max_depth=5,
        )

    elif regressor_name == "ridge":
        return Ridge(random_state=random_seed)

    else:
        raise ValueError(f"Unknown regressor: {regressor_name}")


def get_scaler(preprocessing: str) -> Optional[Any]:
    """Scaler for the preprocessing strategy, None for ``"none"``."""
    if preprocessing == "standard":
        return StandardScaler()
    if preprocessing == "robust":
        return RobustScaler()
    if preprocessing == "none":
        return None
    raise ValueError(f"Unknown preprocessing strategy: {preprocessing}")


def build_pipeline(
    regressor_name: str,
    preprocessing: str = "standard",
    random_seed: int = 42,
    feature_names: Optional[List[str]] = None,
) -> Pipeline:
    """
    Build a selector + scaler + regressor pipeline.

    Args:
        regressor_name: Name of regressor
        preprocessing: "standard", "robust" or "none"
        random_seed: Random seed
        feature_names: Input columns; defaults to the full feature schema

    Returns:
        Unfitted sklearn Pipeline
    """
    steps = [("feature_selector", FeatureSelector(feature_names or field_schema()))]
    scaler = get_scaler(preprocessing)
    if scaler is not None:
        steps.append(("scaler", scaler))
    steps.append(("regressor", get_regressor(regressor_name, random_seed)))
    return Pipeline(steps)
