"""Repository interface for the engineered feature store."""

from abc import ABC, abstractmethod
from typing import List, Sequence

from ..common.result import Result
from ..models.fixture import FixtureFeatureSet
from ..models.player import PlayerFeatureSet
from ..models.training import TrainingRow


class FeatureStoreRepository(ABC):
    """
    Abstract repository for engineered features and the training set.

    Every ``replace_*`` call swaps the whole collection. Implementations
    stage the new collection first and only then make it visible, so a
    failure mid-write leaves the previous collection in place. Write failures
    raise; reads return a Result.
    """

    @abstractmethod
    def replace_player_features(self, features: Sequence[PlayerFeatureSet]) -> None:
        """Replace the stored player features with ``features``."""
        pass

    @abstractmethod
    def replace_fixture_features(self, features: Sequence[FixtureFeatureSet]) -> None:
        """Replace the stored fixture features with ``features``."""
        pass

    @abstractmethod
    def replace_training_set(self, rows: Sequence[TrainingRow]) -> None:
        """Replace the stored training set with ``rows``."""
        pass

    @abstractmethod
    def get_player_features(self) -> Result[List[PlayerFeatureSet]]:
        """
        Get all stored player features.

        Returns:
            Result containing the player features (empty if none stored yet)
        """
        pass

    @abstractmethod
    def get_fixture_features(self) -> Result[List[FixtureFeatureSet]]:
        """
        Get all stored fixture features.

        Returns:
            Result containing the fixture features (empty if none stored yet)
        """
        pass

    @abstractmethod
    def get_training_set(self) -> Result[List[TrainingRow]]:
        """
        Get the stored training set.

        Returns:
            Result containing the training rows (empty if none stored yet)
        """
        pass
