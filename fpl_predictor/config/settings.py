"""
Global Configuration System for FPL Predictor

Centralized configuration for the aggregation, feature, dataset, storage and
training stages. Provides type-safe configuration with validation and
environment variable support.
"""

import json
import os
from pathlib import Path
from typing import Dict, List, Literal, Optional

from loguru import logger
from pydantic import BaseModel, Field, field_validator, model_validator


class AggregationConfig(BaseModel):
    """Per-entity aggregation configuration"""

    form_window: int = Field(
        default=5, description="Games used for the recent form average", ge=1, le=10
    )
    fixture_lookahead: int = Field(
        default=5,
        description="Upcoming fixtures averaged for difficulty (fixed divisor)",
        ge=1,
        le=10,
    )
    default_prior_season_starts: int = Field(
        default=38,
        description="Starts assumed for a past season that reports none",
        ge=1,
        le=38,
    )


class FeatureConfig(BaseModel):
    """Engineered feature configuration"""

    # Player form
    form_trend_weights: List[float] = Field(
        default_factory=lambda: [0.10, 0.15, 0.20, 0.25, 0.30],
        description="Weights for the last five games, oldest to newest",
    )
    neutral_difficulty: float = Field(
        default=3.0,
        description="Difficulty that leaves points unadjusted",
        gt=0.0,
        le=5.0,
    )

    # Fixture expected goals
    league_average_goals: float = Field(
        default=1.25, description="League-average goals per team", gt=0.0
    )
    neutral_strength: float = Field(
        default=1000.0,
        description="Strength rating used when a team rating is absent",
        gt=0.0,
    )

    # League table
    league_size: int = Field(
        default=20, description="Teams in the league table", ge=2, le=30
    )
    position_strength_floor: float = Field(
        default=0.05, description="Minimum strength for any table position", ge=0.0
    )
    unknown_position_strength: float = Field(
        default=0.5, description="Strength for a team without a table position"
    )

    # Derby heuristic
    derby_code_distance: int = Field(
        default=3, description="Max team code gap treated as a derby", ge=0
    )

    # Cards
    cards_base: float = Field(
        default=2.5, description="Expected cards at zero difficulty", ge=0.0
    )
    cards_per_difficulty: float = Field(
        default=0.5, description="Extra cards per point of mean difficulty", ge=0.0
    )

    @field_validator("form_trend_weights")
    @classmethod
    def validate_form_trend_weights(cls, v: List[float]) -> List[float]:
        if len(v) != 5:
            raise ValueError("form_trend_weights must contain exactly 5 weights")
        if any(w < 0 for w in v):
            raise ValueError("form_trend_weights must be non-negative")
        return v


class DatasetConfig(BaseModel):
    """Training set assembly configuration"""

    label_strategy: Literal["random", "realized"] = Field(
        default="random",
        description="random = placeholder draw, realized = points scored in the fixture",
    )
    placeholder_max_points: float = Field(
        default=20.0, description="Upper bound of the placeholder draw", gt=0.0
    )
    label_seed: Optional[int] = Field(
        default=None, description="Seed for the placeholder draw (None = unseeded)", ge=0
    )


class ExecutionConfig(BaseModel):
    """Per-entity computation configuration"""

    max_workers: int = Field(
        default=4, description="Worker threads for feature derivation (1 = in-line)", ge=1, le=64
    )


class StorageConfig(BaseModel):
    """JSON store locations"""

    raw_data_dir: Path = Field(
        default=Path("data/raw"), description="Directory holding raw record JSON"
    )
    feature_store_dir: Path = Field(
        default=Path("data/features"), description="Directory holding feature JSON"
    )
    max_validation_error_rate: float = Field(
        default=0.1,
        ge=0.0,
        le=0.5,
        description="Max share of raw records that may fail validation (0-50%)",
    )


class TrainingSettings(BaseModel):
    """Model training configuration"""

    regressor: Literal["gradient-boost", "random-forest", "ridge", "lightgbm"] = Field(
        default="gradient-boost", description="Regressor algorithm to use"
    )
    preprocessing: Literal["standard", "robust", "none"] = Field(
        default="standard", description="Feature scaling strategy"
    )
    validation_split: float = Field(
        default=0.2, ge=0.0, lt=1.0, description="Share of rows held out for metrics"
    )
    random_seed: int = Field(default=42, description="Random seed")
    model_dir: Path = Field(default=Path("models"), description="Output directory")


class PredictorConfig(BaseModel):
    """Master FPL Predictor Configuration Container"""

    aggregation: AggregationConfig = Field(
        default_factory=AggregationConfig, description="Aggregation Configuration"
    )
    features: FeatureConfig = Field(
        default_factory=FeatureConfig, description="Feature Configuration"
    )
    dataset: DatasetConfig = Field(
        default_factory=DatasetConfig, description="Dataset Configuration"
    )
    execution: ExecutionConfig = Field(
        default_factory=ExecutionConfig, description="Execution Configuration"
    )
    storage: StorageConfig = Field(
        default_factory=StorageConfig, description="Storage Configuration"
    )
    training: TrainingSettings = Field(
        default_factory=TrainingSettings, description="Training Configuration"
    )

    @model_validator(mode="after")
    def validate_config_consistency(self):
        """Validate cross-field consistency"""
        if self.features.position_strength_floor > 1.0:
            raise ValueError("features.position_strength_floor must be at most 1.0")

        if self.aggregation.form_window > len(self.features.form_trend_weights):
            logger.debug(
                "form_window exceeds form trend weights; form trend uses the last 5 games only"
            )

        return self


def _coerce_env_value(value: str):
    if value.lower() in ("true", "false"):
        return value.lower() == "true"
    if value.isdigit() or (value.startswith("-") and value[1:].isdigit()):
        return int(value)
    if "." in value:
        try:
            return float(value)
        except ValueError:
            return value
    return value


def load_config(
    config_path: Optional[Path] = None, config_data: Optional[Dict] = None
) -> PredictorConfig:
    """
    Load configuration with environment variable overrides and optional config file

    Args:
        config_path: Optional path to JSON configuration file
        config_data: Optional dictionary of configuration data

    Environment variables can override any config value using the pattern:
    FPL_{SECTION}_{FIELD} = value

    Example: FPL_EXECUTION_MAX_WORKERS=8
    """
    config_dict: Dict = {}

    if config_path and config_path.exists():
        try:
            with open(config_path, "r") as f:
                if config_path.suffix.lower() == ".json":
                    config_dict = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            logger.warning(f"⚠️ Failed to load config file {config_path}: {e}")

    if config_data:
        config_dict.update(config_data)

    sections = set(PredictorConfig.model_fields)
    env_overrides: Dict[str, Dict] = {}
    for env_var, value in os.environ.items():
        if not env_var.startswith("FPL_"):
            continue
        parts = env_var.split("_")[1:]
        if len(parts) < 2:
            continue
        section = parts[0].lower()
        if section not in sections:
            continue
        field = "_".join(parts[1:]).lower()
        env_overrides.setdefault(section, {})[field] = _coerce_env_value(value)

    for section, fields in env_overrides.items():
        config_dict.setdefault(section, {})
        config_dict[section].update(fields)

    try:
        return PredictorConfig(**config_dict)
    except ValueError as e:
        logger.warning(f"⚠️ Configuration validation failed: {e}")
        logger.warning("Using default configuration...")
        return PredictorConfig()


# Global configuration instance
config = load_config()
