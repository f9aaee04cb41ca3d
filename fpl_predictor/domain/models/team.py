"""Team domain models."""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from fpl_predictor.utils import safe_int


class TeamRawRecord(BaseModel):
    """
    Unprocessed team document from the bootstrap ``teams`` list.

    Strength ratings stay ``None`` when absent; each consumer applies its own
    documented default (0 for aggregates, a neutral 1000 for expected goals).
    """

    model_config = ConfigDict(extra="ignore")

    id: int = Field(..., gt=0, description="Team ID")
    code: Optional[int] = Field(None, description="Stable club code")
    name: Optional[str] = Field(None, description="Full team name")
    short_name: Optional[str] = Field(None, description="3-letter team code")

    # Season standing
    played: int = Field(default=0, ge=0)
    win: int = Field(default=0, ge=0)
    draw: int = Field(default=0, ge=0)
    loss: int = Field(default=0, ge=0)
    points: int = Field(default=0, ge=0)
    position: Optional[int] = Field(None, description="League table position")

    # Strength ratings
    strength: Optional[int] = Field(None, description="Overall 1-5 rating")
    strength_overall_home: Optional[int] = None
    strength_overall_away: Optional[int] = None
    strength_attack_home: Optional[int] = None
    strength_attack_away: Optional[int] = None
    strength_defence_home: Optional[int] = None
    strength_defence_away: Optional[int] = None

    @field_validator("played", "win", "draw", "loss", "points", mode="before")
    @classmethod
    def coerce_counts(cls, v):
        return safe_int(v)

    @field_validator("code", mode="before")
    @classmethod
    def coerce_code(cls, v):
        if v is None or v == "":
            return None
        return safe_int(v)

    @field_validator("position", mode="before")
    @classmethod
    def coerce_position(cls, v):
        parsed = safe_int(v)
        return parsed if parsed > 0 else None


class TeamSummary(BaseModel):
    """Averages and home/away biases of a team's strength ratings."""

    model_config = ConfigDict(frozen=True)

    team: TeamRawRecord
    average_overall_strength: float = 0.0
    average_attack_strength: float = 0.0
    average_defence_strength: float = 0.0
    overall_strength_home_bias: float = 0.0
    attack_strength_home_bias: float = 0.0
    defence_strength_home_bias: float = 0.0

    @property
    def team_id(self) -> int:
        return self.team.id
