"""In-memory repository implementations for tests and embedding callers."""

from typing import List, Optional, Sequence

from fpl_predictor.domain.common.result import DomainError, Result
from fpl_predictor.domain.models.fixture import FixtureFeatureSet, FixtureRawRecord
from fpl_predictor.domain.models.player import PlayerFeatureSet, PlayerRawRecord
from fpl_predictor.domain.models.team import TeamRawRecord
from fpl_predictor.domain.models.training import TrainingRow
from fpl_predictor.domain.repositories.feature_store_repository import (
    FeatureStoreRepository,
)
from fpl_predictor.domain.repositories.raw_record_repository import (
    RawRecordRepository,
)


class InMemoryRawRecordRepository(RawRecordRepository):
    """
    Raw record store over already-validated records.

    Set ``unavailable`` to simulate an unreachable store: every read then
    returns a DATA_ACCESS_ERROR failure.
    """

    def __init__(
        self,
        players: Optional[Sequence[PlayerRawRecord]] = None,
        fixtures: Optional[Sequence[FixtureRawRecord]] = None,
        teams: Optional[Sequence[TeamRawRecord]] = None,
        unavailable: bool = False,
    ):
        self.players = list(players or [])
        self.fixtures = list(fixtures or [])
        self.teams = list(teams or [])
        self.unavailable = unavailable

    def _read(self, records: list, what: str) -> Result[list]:
        if self.unavailable:
            return Result.failure(
                DomainError.data_access_error(f"Raw record store unavailable ({what})")
            )
        return Result.success(list(records))

    def get_player_records(self) -> Result[List[PlayerRawRecord]]:
        return self._read(self.players, "players")

    def get_fixture_records(self) -> Result[List[FixtureRawRecord]]:
        return self._read(self.fixtures, "fixtures")

    def get_team_records(self) -> Result[List[TeamRawRecord]]:
        return self._read(self.teams, "teams")


class InMemoryFeatureStoreRepository(FeatureStoreRepository):
    """
    Feature store held in process memory.

    Each replace materializes the new list completely before rebinding the
    attribute, so an exception while consuming the input leaves the previous
    collection visible.
    """

    def __init__(self):
        self.player_features: List[PlayerFeatureSet] = []
        self.fixture_features: List[FixtureFeatureSet] = []
        self.training_set: List[TrainingRow] = []

    def replace_player_features(self, features: Sequence[PlayerFeatureSet]) -> None:
        staged = list(features)
        self.player_features = staged

    def replace_fixture_features(self, features: Sequence[FixtureFeatureSet]) -> None:
        staged = list(features)
        self.fixture_features = staged

    def replace_training_set(self, rows: Sequence[TrainingRow]) -> None:
        staged = list(rows)
        self.training_set = staged

    def get_player_features(self) -> Result[List[PlayerFeatureSet]]:
        return Result.success(list(self.player_features))

    def get_fixture_features(self) -> Result[List[FixtureFeatureSet]]:
        return Result.success(list(self.fixture_features))

    def get_training_set(self) -> Result[List[TrainingRow]]:
        return Result.success(list(self.training_set))
