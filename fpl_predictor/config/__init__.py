"""
FPL Predictor Configuration Module

Provides centralized configuration management for the entire application.
Import the global config instance to access all configuration values.

Usage:
    from fpl_predictor.config import config

    # Access feature configuration
    league_goals = config.features.league_average_goals

    # Access dataset configuration
    strategy = config.dataset.label_strategy
"""

from .settings import (
    AggregationConfig,
    DatasetConfig,
    ExecutionConfig,
    FeatureConfig,
    PredictorConfig,
    StorageConfig,
    TrainingSettings,
    config,
    load_config,
)

__all__ = [
    "AggregationConfig",
    "DatasetConfig",
    "ExecutionConfig",
    "FeatureConfig",
    "PredictorConfig",
    "StorageConfig",
    "TrainingSettings",
    "config",
    "load_config",
]
