"""Fixture domain models."""

from datetime import datetime
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fpl_predictor.utils import safe_int


class StatValue(BaseModel):
    """One player's contribution to a fixture stat."""

    model_config = ConfigDict(extra="ignore")

    element: int = Field(..., description="Player ID")
    value: int = Field(default=0)

    @field_validator("value", mode="before")
    @classmethod
    def coerce_value(cls, v):
        return safe_int(v)


class StatEntry(BaseModel):
    """A named fixture stat split by side (``h`` home, ``a`` away)."""

    model_config = ConfigDict(extra="ignore")

    identifier: str = Field(..., min_length=1, description="e.g. goals_scored")
    h: List[StatValue] = Field(default_factory=list)
    a: List[StatValue] = Field(default_factory=list)

    @field_validator("h", "a", mode="before")
    @classmethod
    def coerce_sides(cls, v):
        return v if v is not None else []


class FixtureRawRecord(BaseModel):
    """Unprocessed fixture document from the ``fixtures`` endpoint."""

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., gt=0, description="Unique fixture ID")
    event: Optional[int] = Field(None, ge=1, description="Gameweek number")
    team_h: int = Field(..., gt=0, description="Home team ID")
    team_a: int = Field(..., gt=0, description="Away team ID")
    team_h_difficulty: int = Field(default=0, ge=0, le=5)
    team_a_difficulty: int = Field(default=0, ge=0, le=5)
    kickoff_time: Optional[datetime] = None
    finished: bool = False
    started: bool = False
    minutes: int = Field(default=0, ge=0)
    team_h_score: Optional[int] = None
    team_a_score: Optional[int] = None
    stats: List[StatEntry] = Field(default_factory=list)

    @field_validator("team_h_difficulty", "team_a_difficulty", "minutes", mode="before")
    @classmethod
    def coerce_counts(cls, v):
        return safe_int(v)

    @field_validator("finished", "started", mode="before")
    @classmethod
    def coerce_flags(cls, v):
        return bool(v) if v is not None else False

    @field_validator("stats", mode="before")
    @classmethod
    def coerce_stats(cls, v):
        return v if v is not None else []


class FixtureSummary(BaseModel):
    """Per-side sums of the fixture's stat lists."""

    model_config = ConfigDict(frozen=True)

    fixture_id: int
    home_goals: int = 0
    away_goals: int = 0
    home_assists: int = 0
    away_assists: int = 0
    home_own_goals: int = 0
    away_own_goals: int = 0
    home_penalties_saved: int = 0
    away_penalties_saved: int = 0
    home_penalties_missed: int = 0
    away_penalties_missed: int = 0
    home_yellow_cards: int = 0
    away_yellow_cards: int = 0
    home_red_cards: int = 0
    away_red_cards: int = 0
    home_saves: int = 0
    away_saves: int = 0
    home_bonus: int = 0
    away_bonus: int = 0
    home_bps: int = 0
    away_bps: int = 0


class FixtureFeatureSet(BaseModel):
    """
    Engineered features for one fixture.

    ``actual_result``, ``actual_goals`` and ``actual_cards`` are only set for
    finished fixtures. They are ``None`` otherwise and are still written out,
    so every stored record has the same keys.
    """

    model_config = ConfigDict(frozen=True)

    fixture_id: int = Field(..., gt=0)
    event: Optional[int] = None
    home_team_id: int
    away_team_id: int

    home_team_strength: float = 0.0
    away_team_strength: float = 0.0
    strength_difference: float = 0.0
    home_attack_strength: float = 0.0
    home_defence_strength: float = 0.0
    away_attack_strength: float = 0.0
    away_defence_strength: float = 0.0

    expected_home_goals: float = 0.0
    expected_away_goals: float = 0.0
    expected_goals: float = 0.0
    home_factor: float = 1.0
    away_factor: float = 1.0
    home_position_strength: float = 0.0
    away_position_strength: float = 0.0
    expected_home_clean_sheet: float = 0.0
    expected_away_clean_sheet: float = 0.0
    expected_cards: float = 0.0
    is_derby: bool = False

    finished: bool = False
    actual_result: Optional[Literal["H", "A", "D"]] = None
    actual_goals: Optional[int] = None
    actual_cards: Optional[int] = None

    def involves_team(self, team_id: Optional[int]) -> bool:
        """Check whether the given team plays in this fixture."""
        return team_id is not None and team_id in (self.home_team_id, self.away_team_id)
