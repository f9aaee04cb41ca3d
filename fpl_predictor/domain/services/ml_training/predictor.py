"""
PointsPredictor - inference over stored feature sets.

Builds each input vector with the same schema used for training, so a single
prediction sees exactly the column layout the model was fitted on.
"""

from typing import Any, Dict, List, Optional

import pandas as pd
from loguru import logger
from pydantic import BaseModel

from fpl_predictor.domain.ml import build_feature_vector, field_schema
from fpl_predictor.domain.models.fixture import FixtureFeatureSet
from fpl_predictor.domain.models.player import PlayerFeatureSet
from fpl_predictor.domain.repositories.feature_store_repository import (
    FeatureStoreRepository,
)


class Recommendation(BaseModel):
    """A player ranked by mean predicted points over upcoming fixtures."""

    player_id: int
    web_name: Optional[str] = None
    element_type: Optional[int] = None
    team_id: Optional[int] = None
    now_cost: int
    predicted_points: float
    fixtures_considered: int


class PointsPredictor:
    """Predicts player points for fixtures from the feature store contents."""

    def __init__(self, pipeline: Any, feature_store: FeatureStoreRepository):
        self.pipeline = pipeline
        self.feature_store = feature_store
        self._players: Optional[Dict[int, PlayerFeatureSet]] = None
        self._fixtures: Optional[List[FixtureFeatureSet]] = None

    def _load(self) -> None:
        if self._players is not None:
            return
        players = self.feature_store.get_player_features()
        if players.is_failure:
            raise ValueError(f"Cannot load player features: {players.error.message}")
        fixtures = self.feature_store.get_fixture_features()
        if fixtures.is_failure:
            raise ValueError(f"Cannot load fixture features: {fixtures.error.message}")
        self._players = {p.player_id: p for p in players.value}
        self._fixtures = list(fixtures.value)

    def _predict(self, pairs: List[tuple]) -> List[float]:
        schema = field_schema()
        vectors = [build_feature_vector(player, fixture) for player, fixture in pairs]
        X = pd.DataFrame(vectors, columns=schema)
        return [float(p) for p in self.pipeline.predict(X)]

    def predict_player_points(self, player_id: int, fixture_id: int) -> float:
        """
        Predict points for one player in one fixture.

        Raises:
            ValueError: If the player or fixture has no stored features
        """
        self._load()
        player = self._players.get(player_id)
        fixture = next((f for f in self._fixtures if f.fixture_id == fixture_id), None)
        if player is None or fixture is None:
            raise ValueError(f"Player {player_id} or fixture {fixture_id} not found")
        return self._predict([(player, fixture)])[0]

    def upcoming_fixtures(
        self, player: PlayerFeatureSet, horizon: int
    ) -> List[FixtureFeatureSet]:
        """
        The next ``horizon`` unfinished fixtures for the player's team.

        Falls back to the first ``horizon`` stored fixtures when the player's
        team is unknown or has no unfinished fixtures.
        """
        own = [
            f
            for f in self._fixtures
            if not f.finished and f.involves_team(player.team_id)
        ]
        own.sort(key=lambda f: (f.event is None, f.event or 0, f.fixture_id))
        return own[:horizon] if own else self._fixtures[:horizon]

    def generate_recommendations(
        self, budget: int, limit: int = 5, horizon: int = 5
    ) -> List[Recommendation]:
        """
        Rank affordable players by mean predicted points.

        Args:
            budget: Maximum price in 0.1m units (compared with now_cost)
            limit: Number of recommendations to return
            horizon: Number of upcoming fixtures to average over

        Returns:
            Up to ``limit`` recommendations, best first
        """
        self._load()
        recommendations: List[Recommendation] = []

        for player in self._players.values():
            if player.now_cost > budget:
                continue
            fixtures = self.upcoming_fixtures(player, horizon)
            if not fixtures:
                continue
            predictions = self._predict([(player, f) for f in fixtures])
            recommendations.append(
                Recommendation(
                    player_id=player.player_id,
                    web_name=player.web_name,
                    element_type=player.element_type,
                    team_id=player.team_id,
                    now_cost=player.now_cost,
                    predicted_points=sum(predictions) / len(predictions),
                    fixtures_considered=len(predictions),
                )
            )

        recommendations.sort(key=lambda r: r.predicted_points, reverse=True)
        logger.info(
            f"🎯 {len(recommendations)} players within budget {budget}, "
            f"returning top {min(limit, len(recommendations))}"
        )
        return recommendations[:limit]
