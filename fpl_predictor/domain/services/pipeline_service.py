"""
Pipeline orchestration.

Runs the stages strictly in sequence: read raw records, derive features and
replace the stored feature sets, then assemble and replace the training set.
Any store failure raises PipelineStageError and nothing downstream runs.
"""

from typing import List, Optional, Tuple

from loguru import logger
from pydantic import BaseModel

from fpl_predictor.config import PredictorConfig
from fpl_predictor.config import config as default_config

from ..common.result import PipelineStageError, Result
from ..models.fixture import FixtureFeatureSet, FixtureRawRecord
from ..models.player import PlayerFeatureSet, PlayerRawRecord
from ..models.team import TeamRawRecord
from ..models.training import TrainingRow
from ..repositories.feature_store_repository import FeatureStoreRepository
from ..repositories.raw_record_repository import RawRecordRepository
from .dataset_assembly_service import DatasetAssemblyService
from .feature_engineering_service import FeatureEngineeringService
from .label_strategies import LabelStrategy, create_label_strategy

FEATURE_STAGE = "feature_derivation"


class PipelineRunSummary(BaseModel):
    """Counts produced by one full pipeline run."""

    players: int
    fixtures: int
    teams: int
    training_rows: int
    label_strategy: str


def _unwrap(result: Result, what: str) -> list:
    if result.is_failure:
        raise PipelineStageError(FEATURE_STAGE, f"Failed to read {what}: {result.error.message}")
    return result.value


class FeaturePipelineService:
    """End-to-end feature derivation and dataset assembly."""

    def __init__(
        self,
        raw_store: RawRecordRepository,
        feature_store: FeatureStoreRepository,
        config: Optional[PredictorConfig] = None,
        label_strategy: Optional[LabelStrategy] = None,
    ):
        self.raw_store = raw_store
        self.feature_store = feature_store
        self.config = config or default_config
        self.label_strategy = label_strategy
        self.feature_engineering = FeatureEngineeringService(
            aggregation_config=self.config.aggregation,
            feature_config=self.config.features,
            execution_config=self.config.execution,
        )
        self._player_records: Optional[List[PlayerRawRecord]] = None

    def load_raw_records(
        self,
    ) -> Tuple[List[PlayerRawRecord], List[FixtureRawRecord], List[TeamRawRecord]]:
        """Read all raw collections; any failed read aborts the stage."""
        players = _unwrap(self.raw_store.get_player_records(), "player records")
        fixtures = _unwrap(self.raw_store.get_fixture_records(), "fixture records")
        teams = _unwrap(self.raw_store.get_team_records(), "team records")
        logger.info(
            f"📥 Loaded {len(players)} players, {len(fixtures)} fixtures, {len(teams)} teams"
        )
        return players, fixtures, teams

    def run_feature_stage(
        self,
    ) -> Tuple[List[PlayerFeatureSet], List[FixtureFeatureSet], int]:
        """
        Derive and store player and fixture features.

        Returns:
            (player features, fixture features, team count)

        Raises:
            PipelineStageError: If a raw read or a feature store write fails
        """
        logger.info("🔧 Stage 1: feature derivation")
        players, fixtures, teams = self.load_raw_records()
        self._player_records = players

        player_features = self.feature_engineering.build_player_features(players, teams)
        fixture_features = self.feature_engineering.build_fixture_features(fixtures, teams)

        try:
            self.feature_store.replace_player_features(player_features)
            self.feature_store.replace_fixture_features(fixture_features)
        except OSError as e:
            raise PipelineStageError(FEATURE_STAGE, f"Failed to write features: {e}") from e

        logger.info("💾 Feature store updated")
        return player_features, fixture_features, len(teams)

    def resolve_label_strategy(self) -> LabelStrategy:
        """The injected strategy, or one built from the dataset configuration."""
        if self.label_strategy is not None:
            return self.label_strategy
        records = self._player_records
        if self.config.dataset.label_strategy == "realized" and records is None:
            records = _unwrap(self.raw_store.get_player_records(), "player records")
        return create_label_strategy(self.config.dataset, records)

    def assemble(self, label_strategy: Optional[LabelStrategy] = None) -> List[TrainingRow]:
        """Assemble the training set from the current feature store contents."""
        logger.info("🔧 Stage 2: dataset assembly")
        strategy = label_strategy or self.resolve_label_strategy()
        assembler = DatasetAssemblyService(self.feature_store, strategy)
        return assembler.assemble_training_set()

    def run(self) -> PipelineRunSummary:
        """
        Run every stage to completion, in order.

        Raises:
            PipelineStageError: On the first stage failure
        """
        logger.info("🚀 Starting feature pipeline")
        player_features, fixture_features, team_count = self.run_feature_stage()
        strategy = self.resolve_label_strategy()
        rows = self.assemble(strategy)

        summary = PipelineRunSummary(
            players=len(player_features),
            fixtures=len(fixture_features),
            teams=team_count,
            training_rows=len(rows),
            label_strategy=strategy.name,
        )
        logger.info(
            f"🎉 Pipeline complete: {summary.players} players, "
            f"{summary.fixtures} fixtures, {summary.training_rows} training rows"
        )
        return summary
