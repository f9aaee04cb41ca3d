"""
Dataset assembly: turns stored feature sets into labeled training rows.

Rows are the full cross-join of players and fixtures. No eligibility filter
is applied, so the set includes pairings where the player's team does not
play in the fixture. Those rows carry a label like any other; consumers that
need only relevant pairings filter on ``FixtureFeatureSet.involves_team``.
"""

from typing import List, Optional, Sequence

from loguru import logger

from ..common.result import PipelineStageError
from ..ml.feature_schema import build_feature_vector
from ..models.fixture import FixtureFeatureSet
from ..models.player import PlayerFeatureSet
from ..models.training import TrainingRow
from ..repositories.feature_store_repository import FeatureStoreRepository
from .label_strategies import LabelStrategy, RandomPlaceholderLabel

STAGE = "dataset_assembly"


class DatasetAssemblyService:
    """Builds and persists the training set from the feature store."""

    def __init__(
        self,
        feature_store: FeatureStoreRepository,
        label_strategy: Optional[LabelStrategy] = None,
    ):
        self.feature_store = feature_store
        self.label_strategy = label_strategy or RandomPlaceholderLabel()

    def combine(
        self,
        player_features: Sequence[PlayerFeatureSet],
        fixture_features: Sequence[FixtureFeatureSet],
    ) -> List[TrainingRow]:
        """
        Cross-join players with fixtures into labeled rows.

        Args:
            player_features: Player feature sets
            fixture_features: Fixture feature sets

        Returns:
            len(player_features) * len(fixture_features) rows, players in the
            outer loop; empty when either input is empty
        """
        rows: List[TrainingRow] = []
        irrelevant = 0
        for player in player_features:
            for fixture in fixture_features:
                if not fixture.involves_team(player.team_id):
                    irrelevant += 1
                rows.append(
                    TrainingRow(
                        player_id=player.player_id,
                        fixture_id=fixture.fixture_id,
                        features=build_feature_vector(player, fixture),
                        label=self.label_strategy.label(player, fixture),
                    )
                )

        if irrelevant:
            logger.warning(
                f"⚠️ {irrelevant}/{len(rows)} training rows pair a player with a "
                "fixture their team does not play in"
            )
        return rows

    def assemble_training_set(self) -> List[TrainingRow]:
        """
        Read both feature collections, combine them and replace the stored training set.

        Raises:
            PipelineStageError: If the feature store cannot be read or written
        """
        players_result = self.feature_store.get_player_features()
        if players_result.is_failure:
            raise PipelineStageError(STAGE, players_result.error.message)
        fixtures_result = self.feature_store.get_fixture_features()
        if fixtures_result.is_failure:
            raise PipelineStageError(STAGE, fixtures_result.error.message)

        players = players_result.value
        fixtures = fixtures_result.value
        logger.info(
            f"🔗 Combining {len(players)} players x {len(fixtures)} fixtures "
            f"(labels: {self.label_strategy.name})"
        )
        rows = self.combine(players, fixtures)

        try:
            self.feature_store.replace_training_set(rows)
        except OSError as e:
            raise PipelineStageError(STAGE, f"Failed to write training set: {e}") from e

        logger.info(f"✅ Training set replaced with {len(rows)} rows")
        return rows
