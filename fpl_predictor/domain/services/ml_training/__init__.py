"""
ML Training module for FPL points prediction.

Provides training, evaluation, persistence and inference for the regression
model fitted on the assembled (player, fixture) training set.
"""

from .config import TrainingConfig
from .evaluator import ModelEvaluator
from .pipelines import REGRESSOR_MAP, build_pipeline, get_regressor
from .predictor import PointsPredictor, Recommendation
from .trainer import ModelTrainer

__all__ = [
    # Config
    "TrainingConfig",
    # Core classes
    "ModelTrainer",
    "ModelEvaluator",
    "PointsPredictor",
    "Recommendation",
    # Pipeline utilities
    "build_pipeline",
    "get_regressor",
    "REGRESSOR_MAP",
]
