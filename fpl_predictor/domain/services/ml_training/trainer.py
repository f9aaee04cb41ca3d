"""
ModelTrainer - fits the points regression pipeline on assembled training rows.

Feature columns always follow ``field_schema()``. The schema is saved with
the model and checked again on load, so a model fitted against a different
field order can never be used for prediction.
"""

import json
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Tuple

import joblib
import numpy as np
import pandas as pd
from loguru import logger
from sklearn.model_selection import train_test_split

from fpl_predictor.domain.ml import field_schema
from fpl_predictor.domain.models.training import TrainingRow

from .config import TrainingConfig
from .evaluator import ModelEvaluator
from .pipelines import build_pipeline


def metadata_path_for(pipeline_path: Path) -> Path:
    """``<base>_pipeline.joblib`` -> ``<base>.json``."""
    name = pipeline_path.name
    if name.endswith("_pipeline.joblib"):
        name = name[: -len("_pipeline.joblib")]
    else:
        name = pipeline_path.stem
    return pipeline_path.with_name(f"{name}.json")


class ModelTrainer:
    """Training orchestration for the points regression model."""

    def __init__(self, config: Optional[TrainingConfig] = None):
        self.config = config or TrainingConfig()
        self.evaluator = ModelEvaluator()

    def prepare_data(self, rows: Sequence[TrainingRow]) -> Tuple[pd.DataFrame, np.ndarray]:
        """
        Turn training rows into a feature frame and target vector.

        Args:
            rows: Assembled training rows

        Returns:
            (X with columns in schema order, y)

        Raises:
            ValueError: If there are no rows
            KeyError: If a row lacks a schema field
        """
        if not rows:
            raise ValueError("No training rows to prepare")

        schema = field_schema()
        X = pd.DataFrame([row.to_vector(schema) for row in rows], columns=schema)
        y = np.array([row.label for row in rows], dtype=float)
        return X, y

    def train(self, rows: Sequence[TrainingRow]) -> Tuple[Any, Dict[str, Any]]:
        """
        Fit the configured pipeline.

        When enough rows are available a holdout share is fitted against
        first to report metrics; the returned pipeline is then refitted on
        every row.

        Args:
            rows: Assembled training rows

        Returns:
            (fitted pipeline, metadata)
        """
        X, y = self.prepare_data(rows)
        cfg = self.config

        logger.info(
            f"🏋️ Training {cfg.regressor} on {len(X)} rows x {X.shape[1]} features"
        )

        metrics: Optional[Dict[str, Any]] = None
        n_holdout = int(len(X) * cfg.validation_split)
        if n_holdout >= cfg.min_holdout_rows and len(X) - n_holdout >= 1:
            X_train, X_test, y_train, y_test = train_test_split(
                X, y, test_size=n_holdout, random_state=cfg.random_seed
            )
            holdout_pipeline = build_pipeline(
                cfg.regressor, cfg.preprocessing, cfg.random_seed
            )
            holdout_pipeline.fit(X_train, y_train)
            metrics = self.evaluator.evaluate_model(holdout_pipeline, X_test, y_test)
            logger.info(f"📊 Holdout metrics:\n{self.evaluator.format_results(metrics)}")
        else:
            logger.warning(
                f"⚠️ Only {len(X)} rows, skipping holdout evaluation "
                f"(needs {cfg.min_holdout_rows} holdout rows)"
            )

        pipeline = build_pipeline(cfg.regressor, cfg.preprocessing, cfg.random_seed)
        pipeline.fit(X, y)

        metadata = {
            "regressor": cfg.regressor,
            "preprocessing": cfg.preprocessing,
            "n_samples": int(len(X)),
            "feature_schema": list(X.columns),
            "holdout_metrics": metrics,
        }
        logger.info("✅ Training complete")
        return pipeline, metadata

    def save_model(
        self,
        pipeline: Any,
        metadata: Dict[str, Any],
        name_prefix: Optional[str] = None,
    ) -> Path:
        """
        Save trained model and metadata.

        Args:
            pipeline: Trained sklearn pipeline
            metadata: Training metadata
            name_prefix: Optional prefix for filename

        Returns:
            Path to saved pipeline
        """
        output_dir = Path(self.config.output_dir)
        output_dir.mkdir(parents=True, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        base_name = f"{name_prefix or self.config.regressor}_{timestamp}"

        pipeline_path = output_dir / f"{base_name}_pipeline.joblib"
        joblib.dump(pipeline, pipeline_path)

        metadata_to_save = {
            **metadata,
            "feature_schema": metadata.get("feature_schema", field_schema()),
            "config": self.config.model_dump(),
            "created_at": datetime.now().isoformat(),
        }
        with open(metadata_path_for(pipeline_path), "w") as f:
            json.dump(metadata_to_save, f, indent=2, default=str)

        logger.info(f"💾 Saved: {pipeline_path.name}")
        return pipeline_path

    @staticmethod
    def load_model(pipeline_path: Path) -> Tuple[Any, Dict[str, Any]]:
        """
        Load a saved pipeline and its metadata.

        Raises:
            FileNotFoundError: If the pipeline or its metadata is missing
            ValueError: If the saved feature schema differs from the current one
        """
        pipeline_path = Path(pipeline_path)
        meta_path = metadata_path_for(pipeline_path)
        if not meta_path.exists():
            raise FileNotFoundError(f"Model metadata not found: {meta_path}")

        with open(meta_path) as f:
            metadata = json.load(f)

        saved_schema: List[str] = metadata.get("feature_schema", [])
        if saved_schema != field_schema():
            raise ValueError(
                "Saved model was trained on a different feature schema "
                f"({len(saved_schema)} fields vs {len(field_schema())}); retrain it"
            )

        pipeline = joblib.load(pipeline_path)
        logger.info(f"📦 Loaded model: {pipeline_path.name}")
        return pipeline, metadata
