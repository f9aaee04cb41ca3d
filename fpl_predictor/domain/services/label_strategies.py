"""
Label strategies for training rows.

The assembler asks a strategy for the target value of each (player, fixture)
pairing. Two strategies are provided:

- RandomPlaceholderLabel: uniform random points, a stand-in until realized
  outcomes are wired in. Seeded runs are reproducible.
- RealizedOutcomeLabel: the points the player actually scored in the fixture.
"""

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List, Mapping, Optional

import numpy as np

from fpl_predictor.config import DatasetConfig

from ..models.fixture import FixtureFeatureSet
from ..models.player import GameEntry, PlayerFeatureSet, PlayerRawRecord


class LabelStrategy(ABC):
    """Produces the target value for one player/fixture pairing."""

    name: str = "base"

    @abstractmethod
    def label(self, player: PlayerFeatureSet, fixture: FixtureFeatureSet) -> float:
        pass


class RandomPlaceholderLabel(LabelStrategy):
    """
    Uniform draw in ``[0, max_points)``.

    With a seed, each pairing gets its own generator keyed on
    ``(seed, player_id, fixture_id)``, so labels do not depend on the order
    in which pairings are visited and repeated runs produce identical rows.
    """

    name = "random"

    def __init__(self, max_points: float = 20.0, seed: Optional[int] = None):
        if max_points <= 0:
            raise ValueError(f"max_points must be positive, got {max_points}")
        if seed is not None and seed < 0:
            raise ValueError(f"seed must be non-negative, got {seed}")
        self.max_points = max_points
        self.seed = seed
        self._rng = np.random.default_rng()

    def label(self, player: PlayerFeatureSet, fixture: FixtureFeatureSet) -> float:
        if self.seed is None:
            rng = self._rng
        else:
            rng = np.random.default_rng([self.seed, player.player_id, fixture.fixture_id])
        return float(rng.uniform(0.0, self.max_points))


class RealizedOutcomeLabel(LabelStrategy):
    """Points the player scored in the fixture; 0 when they have no entry for it."""

    name = "realized"

    def __init__(self, histories: Mapping[int, Iterable[GameEntry]]):
        self._points: Dict[int, Dict[int, float]] = {}
        for player_id, history in histories.items():
            by_fixture: Dict[int, float] = {}
            for entry in history:
                if entry.fixture is not None:
                    # Duplicate entries for one fixture are summed
                    by_fixture[entry.fixture] = by_fixture.get(entry.fixture, 0.0) + float(
                        entry.total_points
                    )
            self._points[player_id] = by_fixture

    @classmethod
    def from_records(cls, records: List[PlayerRawRecord]) -> "RealizedOutcomeLabel":
        return cls({record.id: record.history for record in records})

    def label(self, player: PlayerFeatureSet, fixture: FixtureFeatureSet) -> float:
        return self._points.get(player.player_id, {}).get(fixture.fixture_id, 0.0)


def create_label_strategy(
    dataset_config: DatasetConfig,
    player_records: Optional[List[PlayerRawRecord]] = None,
) -> LabelStrategy:
    """
    Build the configured label strategy.

    Args:
        dataset_config: Dataset configuration (strategy name, seed, max points)
        player_records: Raw player records, required for the realized strategy

    Returns:
        LabelStrategy instance
    """
    if dataset_config.label_strategy == "realized":
        if player_records is None:
            raise ValueError("Realized labels require the raw player records")
        return RealizedOutcomeLabel.from_records(player_records)
    return RandomPlaceholderLabel(
        max_points=dataset_config.placeholder_max_points,
        seed=dataset_config.label_seed,
    )
