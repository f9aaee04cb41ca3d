"""
Configuration models for ML training.

Uses Pydantic for validation and type safety.
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from fpl_predictor.config import TrainingSettings


class TrainingConfig(BaseModel):
    """Configuration for training the points regression model."""

    regressor: Literal["gradient-boost", "random-forest", "ridge", "lightgbm"] = Field(
        default="gradient-boost", description="Regressor algorithm to use"
    )
    preprocessing: Literal["standard", "robust", "none"] = Field(
        default="standard", description="Feature scaling strategy"
    )

    # Holdout evaluation
    validation_split: float = Field(
        default=0.2, ge=0.0, lt=1.0, description="Share of rows held out for metrics"
    )
    min_holdout_rows: int = Field(
        default=5, ge=1, description="Skip holdout metrics below this many rows"
    )

    # Output
    output_dir: Path = Field(default=Path("models"), description="Output directory")

    # Reproducibility
    random_seed: int = Field(default=42, description="Random seed")

    model_config = {"arbitrary_types_allowed": True}

    @classmethod
    def from_settings(cls, settings: TrainingSettings) -> "TrainingConfig":
        """Build from the application-level training settings."""
        return cls(
            regressor=settings.regressor,
            preprocessing=settings.preprocessing,
            validation_split=settings.validation_split,
            output_dir=settings.model_dir,
            random_seed=settings.random_seed,
        )
