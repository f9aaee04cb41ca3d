"""Repository interface for raw record access."""

from abc import ABC, abstractmethod
from typing import List

from ..common.result import Result
from ..models.fixture import FixtureRawRecord
from ..models.player import PlayerRawRecord
from ..models.team import TeamRawRecord


class RawRecordRepository(ABC):
    """
    Abstract read-only repository for unprocessed FPL records.

    Implementations validate documents into domain records at this boundary.
    A failed Result means the store could not be reached or read at all.
    """

    @abstractmethod
    def get_player_records(self) -> Result[List[PlayerRawRecord]]:
        """
        Get all player records with their history, fixtures and past seasons.

        Returns:
            Result containing list of player records or error information
        """
        pass

    @abstractmethod
    def get_fixture_records(self) -> Result[List[FixtureRawRecord]]:
        """
        Get all fixture records for the season.

        Returns:
            Result containing list of fixture records or error information
        """
        pass

    @abstractmethod
    def get_team_records(self) -> Result[List[TeamRawRecord]]:
        """
        Get all team records.

        Returns:
            Result containing list of team records or error information
        """
        pass
