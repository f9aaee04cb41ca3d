"""
Feature vector schema shared by dataset assembly, training and inference.

``FEATURE_SCHEMA`` is the one ordered list of feature names. Training rows
are flattened in this order, models are fitted on columns in this order and
saved with it, and prediction builds its input vector from it. Reordering the
schema invalidates previously saved models (``ModelTrainer.load_model``
rejects them).
"""

from typing import Dict, List, Tuple

from ..models.fixture import FixtureFeatureSet
from ..models.player import PlayerFeatureSet

PLAYER_FEATURE_FIELDS: Tuple[str, ...] = (
    "recent_form_score",
    "price_performance_ratio",
    "consistency_score",
    "upcoming_fixture_difficulty",
    "goal_contribution_rate",
    "xg_overperformance",
    "xa_overperformance",
    "home_away_performance_delta",
    "form_trend",
    "season_on_season_improvement",
    "injury_proneness",
    "price_change_resilience",
    "team_performance_impact",
    "difficulty_adjusted_performance",
    "clean_sheet_contribution",
    "save_percentage",
    "bonus_points_per_game",
)

# Outcome fields (actual_*) are excluded: they are unknown at prediction time
FIXTURE_FEATURE_FIELDS: Tuple[str, ...] = (
    "home_team_strength",
    "away_team_strength",
    "strength_difference",
    "home_attack_strength",
    "home_defence_strength",
    "away_attack_strength",
    "away_defence_strength",
    "expected_home_goals",
    "expected_away_goals",
    "expected_goals",
    "home_factor",
    "away_factor",
    "home_position_strength",
    "away_position_strength",
    "expected_home_clean_sheet",
    "expected_away_clean_sheet",
    "expected_cards",
    "is_derby",
)

FEATURE_SCHEMA: Tuple[str, ...] = PLAYER_FEATURE_FIELDS + FIXTURE_FEATURE_FIELDS


def _check_schema() -> None:
    missing_player = set(PLAYER_FEATURE_FIELDS) - set(PlayerFeatureSet.model_fields)
    missing_fixture = set(FIXTURE_FEATURE_FIELDS) - set(FixtureFeatureSet.model_fields)
    if missing_player or missing_fixture:
        raise ImportError(
            f"Feature schema references unknown fields: "
            f"{sorted(missing_player | missing_fixture)}"
        )
    if len(set(FEATURE_SCHEMA)) != len(FEATURE_SCHEMA):
        raise ImportError("Feature schema contains duplicate field names")


_check_schema()


def field_schema() -> List[str]:
    """Ordered feature names: player fields, then fixture fields."""
    return list(FEATURE_SCHEMA)


def build_feature_vector(
    player: PlayerFeatureSet, fixture: FixtureFeatureSet
) -> Dict[str, float]:
    """
    Flatten one player/fixture pairing into a schema-ordered mapping.

    Booleans (``is_derby``) become 0.0 / 1.0.
    """
    vector: Dict[str, float] = {}
    for name in PLAYER_FEATURE_FIELDS:
        vector[name] = float(getattr(player, name))
    for name in FIXTURE_FEATURE_FIELDS:
        vector[name] = float(getattr(fixture, name))
    return vector
