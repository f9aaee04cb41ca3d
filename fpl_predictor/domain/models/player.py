"""Player domain models: raw ingestion records, aggregates and feature sets."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fpl_predictor.utils import safe_float, safe_int


_COUNT_FIELDS = (
    "minutes",
    "total_points",
    "goals_scored",
    "assists",
    "clean_sheets",
    "goals_conceded",
    "saves",
    "bonus",
    "yellow_cards",
    "red_cards",
    "value",
)

_EXPECTED_FIELDS = (
    "expected_goals",
    "expected_assists",
    "expected_goal_involvements",
)


class GameEntry(BaseModel):
    """
    One completed match for a player (an entry of element-summary ``history``).

    Missing counts are coerced to 0 and the string-typed expected stats are
    parsed here, so downstream aggregation never has to re-check them.
    """

    model_config = ConfigDict(extra="ignore")

    round: int = Field(..., ge=1, description="Gameweek the match belongs to")
    fixture: Optional[int] = Field(None, description="Fixture ID")
    opponent_team: Optional[int] = Field(None, description="Opponent team ID")
    was_home: bool = Field(default=False, description="Played at home")
    minutes: int = Field(default=0, ge=0)
    total_points: int = Field(default=0, description="FPL points (can be negative)")
    goals_scored: int = Field(default=0, ge=0)
    assists: int = Field(default=0, ge=0)
    clean_sheets: int = Field(default=0, ge=0)
    goals_conceded: int = Field(default=0, ge=0)
    saves: int = Field(default=0, ge=0)
    bonus: int = Field(default=0, ge=0)
    yellow_cards: int = Field(default=0, ge=0)
    red_cards: int = Field(default=0, ge=0)
    expected_goals: float = Field(default=0.0)
    expected_assists: float = Field(default=0.0)
    expected_goal_involvements: float = Field(default=0.0)
    value: int = Field(default=0, ge=0, description="Price in 0.1m units at that round")
    difficulty: Optional[int] = Field(
        None, ge=1, le=5, description="Opponent difficulty rating"
    )

    @field_validator(*_COUNT_FIELDS, mode="before")
    @classmethod
    def coerce_counts(cls, v):
        return safe_int(v)

    @field_validator(*_EXPECTED_FIELDS, mode="before")
    @classmethod
    def parse_expected_stats(cls, v):
        """Expected stats arrive as strings such as "0.45"; unparseable means 0."""
        return safe_float(v)

    @field_validator("was_home", mode="before")
    @classmethod
    def coerce_was_home(cls, v):
        return bool(v) if v is not None else False

    @field_validator("difficulty", mode="before")
    @classmethod
    def coerce_difficulty(cls, v):
        if v is None or v == "":
            return None
        parsed = safe_int(v)
        return parsed if 1 <= parsed <= 5 else None


class UpcomingFixture(BaseModel):
    """An unplayed fixture from element-summary ``fixtures``."""

    model_config = ConfigDict(extra="ignore")

    difficulty: int = Field(default=0, ge=0, le=5)
    event: Optional[int] = Field(None)
    is_home: Optional[bool] = Field(None)

    @field_validator("difficulty", mode="before")
    @classmethod
    def coerce_difficulty(cls, v):
        return safe_int(v)


class PastSeason(BaseModel):
    """A prior-season summary from element-summary ``history_past``."""

    model_config = ConfigDict(extra="ignore")

    season_name: Optional[str] = Field(None)
    total_points: int = Field(default=0)
    starts: int = Field(default=0, ge=0)

    @field_validator("total_points", "starts", mode="before")
    @classmethod
    def coerce_counts(cls, v):
        return safe_int(v)


class PlayerRawRecord(BaseModel):
    """
    Unprocessed player document as held by the raw record store.

    Combines bootstrap element fields with the element-summary lists. The
    ``history`` list is stably sorted by round at construction so the most
    recent match is always last.
    """

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., gt=0, description="Unique FPL player ID")
    web_name: Optional[str] = Field(None, description="Display name")
    team: Optional[int] = Field(None, description="Team ID")
    element_type: Optional[int] = Field(
        None, ge=1, le=5, description="Position 1-5 (5 = assistant manager)"
    )
    history: List[GameEntry] = Field(default_factory=list)
    fixtures: List[UpcomingFixture] = Field(default_factory=list)
    history_past: List[PastSeason] = Field(default_factory=list)
    now_cost: int = Field(default=0, ge=0, description="Price in 0.1m units")
    selected_by_percent: float = Field(default=0.0, ge=0.0, le=100.0)
    form: float = Field(default=0.0, description="Form as declared by FPL")
    value_form: float = Field(default=0.0)
    value_season: float = Field(default=0.0)
    points_per_game: float = Field(default=0.0)

    @field_validator("history", "fixtures", "history_past", mode="before")
    @classmethod
    def coerce_lists(cls, v):
        return v if v is not None else []

    @field_validator("history")
    @classmethod
    def order_history(cls, v: List[GameEntry]) -> List[GameEntry]:
        return sorted(v, key=lambda entry: entry.round)

    @field_validator("element_type", mode="before")
    @classmethod
    def coerce_element_type(cls, v):
        if v is None or v == "":
            return None
        parsed = safe_int(v)
        return parsed if 1 <= parsed <= 5 else None

    @field_validator("now_cost", mode="before")
    @classmethod
    def coerce_cost(cls, v):
        return safe_int(v)

    @field_validator(
        "selected_by_percent",
        "form",
        "value_form",
        "value_season",
        "points_per_game",
        mode="before",
    )
    @classmethod
    def coerce_decimals(cls, v):
        return safe_float(v)

    @property
    def last_season(self) -> Optional[PastSeason]:
        """Most recent past season, if any."""
        return self.history_past[-1] if self.history_past else None


class PlayerSummary(BaseModel):
    """Per-player aggregates produced by the aggregation stage."""

    model_config = ConfigDict(frozen=True)

    player_id: int
    games_played: int = 0

    # Season totals
    total_points: int = 0
    minutes_played: int = 0
    goals_scored: int = 0
    assists: int = 0
    clean_sheets: int = 0
    goals_conceded: int = 0
    saves: int = 0
    bonus: int = 0

    # Rates
    average_points: float = 0.0
    minutes_per_game: float = 0.0
    goals_per_game: float = 0.0
    assists_per_game: float = 0.0
    form: float = 0.0

    # Expected stats (per-game means)
    xg: float = 0.0
    xa: float = 0.0
    xgi: float = 0.0

    upcoming_fixture_difficulty: float = 0.0
    season_on_season_performance: float = 1.0
    last_season_points: int = 0
    last_season_average_points: float = 0.0

    # Pass-through market data
    now_cost: int = 0
    selected_by_percent: float = 0.0
    value_form: float = 0.0
    value_season: float = 0.0
    points_per_game: float = 0.0


class PlayerFeatureSet(BaseModel):
    """Engineered features for one player, as persisted in the feature store."""

    model_config = ConfigDict(frozen=True)

    player_id: int = Field(..., gt=0)
    web_name: Optional[str] = None
    team_id: Optional[int] = None
    element_type: Optional[int] = None
    now_cost: int = 0

    recent_form_score: float = 0.0
    price_performance_ratio: float = 0.0
    consistency_score: float = 0.0
    upcoming_fixture_difficulty: float = 0.0
    goal_contribution_rate: float = 0.0
    xg_overperformance: float = 0.0
    xa_overperformance: float = 0.0
    home_away_performance_delta: float = 0.0
    form_trend: float = 0.0
    season_on_season_improvement: float = 0.0
    injury_proneness: float = 0.0
    price_change_resilience: float = 0.0
    team_performance_impact: float = 0.0
    difficulty_adjusted_performance: float = 0.0
    clean_sheet_contribution: float = 0.0
    save_percentage: float = 0.0
    bonus_points_per_game: float = 0.0
