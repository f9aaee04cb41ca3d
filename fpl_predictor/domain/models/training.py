"""Training set domain model."""

from typing import Dict, List, Sequence

from pydantic import BaseModel, ConfigDict, Field


class TrainingRow(BaseModel):
    """
    One labeled (player, fixture) example.

    ``features`` holds a flattened copy of the player's and the fixture's
    feature values keyed by schema field name, inserted in schema order.
    """

    model_config = ConfigDict(frozen=True)

    player_id: int = Field(..., gt=0)
    fixture_id: int = Field(..., gt=0)
    features: Dict[str, float] = Field(default_factory=dict)
    label: float = Field(..., description="Target points for this pairing")

    def to_vector(self, field_names: Sequence[str]) -> List[float]:
        """Feature values in the given field order (KeyError if one is missing)."""
        return [self.features[name] for name in field_names]
