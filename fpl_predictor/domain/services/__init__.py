"""Domain services for feature derivation and dataset assembly."""

from .aggregation_service import AggregationService
from .dataset_assembly_service import DatasetAssemblyService
from .feature_engineering_service import FeatureEngineeringService
from .fixture_feature_service import FixtureFeatureService
from .label_strategies import (
    LabelStrategy,
    RandomPlaceholderLabel,
    RealizedOutcomeLabel,
    create_label_strategy,
)
from .pipeline_service import FeaturePipelineService, PipelineRunSummary
from .player_feature_service import PlayerFeatureService

__all__ = [
    "AggregationService",
    "DatasetAssemblyService",
    "FeatureEngineeringService",
    "FeaturePipelineService",
    "FixtureFeatureService",
    "LabelStrategy",
    "PipelineRunSummary",
    "PlayerFeatureService",
    "RandomPlaceholderLabel",
    "RealizedOutcomeLabel",
    "create_label_strategy",
]
