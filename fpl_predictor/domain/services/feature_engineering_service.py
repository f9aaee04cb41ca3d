"""
Feature engineering orchestration.

Maps the per-entity derivations over whole collections. Each player and each
fixture is derived independently, so the map runs on a thread pool; output
order always equals input order.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Callable, Dict, Iterable, List, Optional, Sequence, TypeVar

from loguru import logger

from fpl_predictor.config import AggregationConfig, ExecutionConfig, FeatureConfig

from ..models.fixture import FixtureFeatureSet, FixtureRawRecord
from ..models.player import PlayerFeatureSet, PlayerRawRecord
from ..models.team import TeamRawRecord, TeamSummary
from .aggregation_service import AggregationService
from .fixture_feature_service import FixtureFeatureService
from .player_feature_service import PlayerFeatureService

S = TypeVar("S")
T = TypeVar("T")


def parallel_map(func: Callable[[S], T], items: Sequence[S], max_workers: int = 1) -> List[T]:
    """
    Apply ``func`` to every item, preserving input order.

    Runs in-line when ``max_workers`` is 1 or there is at most one item.
    An exception raised by ``func`` propagates to the caller.
    """
    if max_workers <= 1 or len(items) <= 1:
        return [func(item) for item in items]
    with ThreadPoolExecutor(max_workers=min(max_workers, len(items))) as executor:
        return list(executor.map(func, items))


class FeatureEngineeringService:
    """Derives player and fixture feature sets for whole collections."""

    def __init__(
        self,
        aggregation_config: Optional[AggregationConfig] = None,
        feature_config: Optional[FeatureConfig] = None,
        execution_config: Optional[ExecutionConfig] = None,
    ):
        self.aggregation_config = aggregation_config or AggregationConfig()
        self.feature_config = feature_config or FeatureConfig()
        self.execution_config = execution_config or ExecutionConfig()

        self.aggregator = AggregationService(self.aggregation_config)
        self.player_features = PlayerFeatureService(
            self.feature_config, form_window=self.aggregation_config.form_window
        )
        self.fixture_features = FixtureFeatureService(self.feature_config)

    @property
    def max_workers(self) -> int:
        return self.execution_config.max_workers

    def summarize_teams(self, teams: Iterable[TeamRawRecord]) -> Dict[int, TeamSummary]:
        """Team summaries keyed by team ID."""
        return {team.id: self.aggregator.summarize_team(team) for team in teams}

    def build_player_features(
        self,
        players: Sequence[PlayerRawRecord],
        teams: Sequence[TeamRawRecord],
    ) -> List[PlayerFeatureSet]:
        """
        Derive a feature set for every player.

        Args:
            players: Validated player records
            teams: Team records, used for team performance impact

        Returns:
            One PlayerFeatureSet per player, in input order
        """
        teams_by_id = {team.id: team for team in teams}

        def derive(record: PlayerRawRecord) -> PlayerFeatureSet:
            summary = self.aggregator.summarize_player(record)
            team = teams_by_id.get(record.team) if record.team is not None else None
            if team is None:
                logger.debug(f"Player {record.id}: team {record.team} unknown")
            return self.player_features.derive(record, summary, team)

        logger.info(
            f"🧮 Deriving features for {len(players)} players "
            f"(workers={self.max_workers})"
        )
        features = parallel_map(derive, players, self.max_workers)
        logger.info(f"✅ Derived {len(features)} player feature sets")
        return features

    def build_fixture_features(
        self,
        fixtures: Sequence[FixtureRawRecord],
        teams: Sequence[TeamRawRecord],
    ) -> List[FixtureFeatureSet]:
        """
        Derive a feature set for every fixture.

        Args:
            fixtures: Validated fixture records
            teams: Team records, used for strengths, positions and codes

        Returns:
            One FixtureFeatureSet per fixture, in input order
        """
        team_summaries = self.summarize_teams(teams)

        def derive(record: FixtureRawRecord) -> FixtureFeatureSet:
            summary = self.aggregator.summarize_fixture(record)
            home = team_summaries.get(record.team_h)
            away = team_summaries.get(record.team_a)
            if home is None or away is None:
                logger.debug(
                    f"Fixture {record.id}: team {record.team_h} or {record.team_a} unknown, "
                    "using neutral strengths"
                )
            return self.fixture_features.derive(record, summary, home, away)

        logger.info(
            f"🧮 Deriving features for {len(fixtures)} fixtures "
            f"(workers={self.max_workers})"
        )
        features = parallel_map(derive, fixtures, self.max_workers)
        logger.info(f"✅ Derived {len(features)} fixture feature sets")
        return features
