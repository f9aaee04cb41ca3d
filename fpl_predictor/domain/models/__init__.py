"""Domain models with strict data contracts for the feature pipeline."""

from .fixture import (
    FixtureFeatureSet,
    FixtureRawRecord,
    FixtureSummary,
    StatEntry,
    StatValue,
)
from .player import (
    GameEntry,
    PastSeason,
    PlayerFeatureSet,
    PlayerRawRecord,
    PlayerSummary,
    UpcomingFixture,
)
from .team import TeamRawRecord, TeamSummary
from .training import TrainingRow

__all__ = [
    "FixtureFeatureSet",
    "FixtureRawRecord",
    "FixtureSummary",
    "StatEntry",
    "StatValue",
    "GameEntry",
    "PastSeason",
    "PlayerFeatureSet",
    "PlayerRawRecord",
    "PlayerSummary",
    "UpcomingFixture",
    "TeamRawRecord",
    "TeamSummary",
    "TrainingRow",
]
