"""
Player feature derivation.

Pure functions over a player's match history and aggregates. Each one is
total: empty histories and zero denominators return a documented fallback
(0 for sums and averages, a denominator of 1 where a count is guarded).
"""

from typing import List, Optional, Sequence

import numpy as np

from fpl_predictor.config import FeatureConfig
from fpl_predictor.utils import mean_or_zero, safe_divide

from ..models.player import GameEntry, PlayerFeatureSet, PlayerRawRecord, PlayerSummary
from ..models.team import TeamRawRecord

FORM_TREND_WEIGHTS = (0.10, 0.15, 0.20, 0.25, 0.30)


def recent_form_score(history: Sequence[GameEntry], window: int = 5) -> float:
    """Mean points over the last ``window`` games (fewer if shorter), 0 if empty."""
    if not history:
        return 0.0
    recent = history[-window:]
    return sum(gw.total_points for gw in recent) / len(recent)


def consistency_score(history: Sequence[GameEntry]) -> float:
    """Population standard deviation of points across the full history."""
    if not history:
        return 0.0
    return float(np.std([gw.total_points for gw in history], ddof=0))


def form_trend(
    history: Sequence[GameEntry], weights: Sequence[float] = FORM_TREND_WEIGHTS
) -> float:
    """
    Weighted sum of the last five games' points.

    weights[i] multiplies the i-th game of the slice, left to right. With
    fewer than five games only the first len(slice) weights are used, so
    three games take 0.10, 0.15 and 0.20.
    """
    recent = history[-len(weights) :]
    return float(sum(w * gw.total_points for w, gw in zip(weights, recent)))


def season_on_season_improvement(current_average: float, last_average: float) -> float:
    """Percentage change from last season's to this season's average points."""
    return (current_average - last_average) / (last_average or 1) * 100


def injury_proneness(history: Sequence[GameEntry]) -> float:
    """Percentage of history entries with zero minutes played."""
    if not history:
        return 0.0
    missed = sum(1 for gw in history if gw.minutes == 0)
    return missed / len(history) * 100


def price_change_resilience(history: Sequence[GameEntry]) -> float:
    """Mean absolute points change across game-to-game transitions where the price moved."""
    changes = [
        abs(curr.total_points - prev.total_points)
        for prev, curr in zip(history, history[1:])
        if curr.value != prev.value
    ]
    return mean_or_zero(changes)


def home_away_performance_delta(history: Sequence[GameEntry]) -> float:
    """Average home points minus average away points, each side 0 when empty."""
    home = mean_or_zero(gw.total_points for gw in history if gw.was_home)
    away = mean_or_zero(gw.total_points for gw in history if not gw.was_home)
    return home - away


def difficulty_adjusted_performance(
    history: Sequence[GameEntry], neutral_difficulty: float = 3.0
) -> float:
    """Mean points scaled by opponent difficulty; a missing rating counts as neutral."""
    return mean_or_zero(
        gw.total_points * ((gw.difficulty or neutral_difficulty) / neutral_difficulty)
        for gw in history
    )


def save_percentage(saves: int, goals_conceded: int) -> float:
    """Saves as a percentage of shots faced on target (saves + goals conceded)."""
    return safe_divide(saves, saves + goals_conceded) * 100


class PlayerFeatureService:
    """Builds a PlayerFeatureSet from a raw record and its aggregates."""

    def __init__(self, config: Optional[FeatureConfig] = None, form_window: int = 5):
        self.config = config or FeatureConfig()
        self.form_window = form_window

    def derive(
        self,
        record: PlayerRawRecord,
        summary: PlayerSummary,
        team: Optional[TeamRawRecord] = None,
    ) -> PlayerFeatureSet:
        """
        Derive all engineered features for one player.

        Args:
            record: Validated raw player record (for the ordered history)
            summary: Aggregates from AggregationService.summarize_player
            team: The player's team record, if known

        Returns:
            Frozen PlayerFeatureSet
        """
        history: List[GameEntry] = record.history
        games = summary.games_played

        team_impact = 0.0
        if team is not None:
            team_impact = summary.total_points / (team.points or 1)

        return PlayerFeatureSet(
            player_id=record.id,
            web_name=record.web_name,
            team_id=record.team,
            element_type=record.element_type,
            now_cost=record.now_cost,
            recent_form_score=recent_form_score(history, self.form_window),
            price_performance_ratio=summary.total_points / (record.now_cost or 1),
            consistency_score=consistency_score(history),
            upcoming_fixture_difficulty=summary.upcoming_fixture_difficulty,
            goal_contribution_rate=safe_divide(
                summary.goals_scored + summary.assists, games
            ),
            xg_overperformance=summary.goals_per_game - summary.xg,
            xa_overperformance=summary.assists_per_game - summary.xa,
            home_away_performance_delta=home_away_performance_delta(history),
            form_trend=form_trend(history, self.config.form_trend_weights),
            season_on_season_improvement=season_on_season_improvement(
                summary.average_points, summary.last_season_average_points
            ),
            injury_proneness=injury_proneness(history),
            price_change_resilience=price_change_resilience(history),
            team_performance_impact=team_impact,
            difficulty_adjusted_performance=difficulty_adjusted_performance(
                history, self.config.neutral_difficulty
            ),
            clean_sheet_contribution=safe_divide(summary.clean_sheets, games),
            save_percentage=save_percentage(summary.saves, summary.goals_conceded),
            bonus_points_per_game=safe_divide(summary.bonus, games),
        )
