"""
Aggregation service: reduces raw player, team and fixture records to summaries.

Every aggregate has an explicit zero default, so records with empty histories
or missing optional fields summarize cleanly instead of raising.
"""

from typing import List, Optional

from fpl_predictor.config import AggregationConfig
from fpl_predictor.utils import mean_or_zero, safe_divide

from ..models.fixture import FixtureRawRecord, FixtureSummary, StatEntry
from ..models.player import PlayerRawRecord, PlayerSummary
from ..models.team import TeamRawRecord, TeamSummary

# Stat identifiers summed per side into FixtureSummary (identifier, field stem)
FIXTURE_STAT_FIELDS = (
    ("goals_scored", "goals"),
    ("assists", "assists"),
    ("own_goals", "own_goals"),
    ("penalties_saved", "penalties_saved"),
    ("penalties_missed", "penalties_missed"),
    ("yellow_cards", "yellow_cards"),
    ("red_cards", "red_cards"),
    ("saves", "saves"),
    ("bonus", "bonus"),
    ("bps", "bps"),
)


def sum_stat(stats: List[StatEntry], identifier: str, side: str) -> int:
    """
    Sum one side of a named fixture stat.

    Args:
        stats: The fixture's stat entries
        identifier: Stat name, e.g. "yellow_cards"
        side: "h" for home or "a" for away

    Returns:
        Sum of the side's values, 0 when the identifier is absent
    """
    if side not in ("h", "a"):
        raise ValueError(f"side must be 'h' or 'a', got {side!r}")
    entry = next((s for s in stats if s.identifier == identifier), None)
    if entry is None:
        return 0
    return sum(item.value for item in getattr(entry, side))


class AggregationService:
    """Per-entity summary metrics for players, teams and fixtures."""

    def __init__(self, config: Optional[AggregationConfig] = None):
        self.config = config or AggregationConfig()

    def summarize_player(self, record: PlayerRawRecord) -> PlayerSummary:
        """
        Summarize a player's current-season history.

        Args:
            record: Validated raw player record

        Returns:
            PlayerSummary with totals, per-game rates, expected-stat means,
            upcoming difficulty and season-on-season performance
        """
        history = record.history
        games_played = len(history)

        total_points = sum(gw.total_points for gw in history)
        total_minutes = sum(gw.minutes for gw in history)
        goals_scored = sum(gw.goals_scored for gw in history)
        assists = sum(gw.assists for gw in history)

        recent_games = history[-self.config.form_window :]
        average_points = safe_divide(total_points, games_played)

        upcoming = record.fixtures[: self.config.fixture_lookahead]
        upcoming_difficulty = (
            sum(f.difficulty for f in upcoming) / self.config.fixture_lookahead
            if upcoming
            else 0.0
        )

        last_season = record.last_season
        last_season_points = last_season.total_points if last_season else 0
        last_season_average = 0.0
        season_on_season = 1.0
        if last_season_points:
            starts = last_season.starts or self.config.default_prior_season_starts
            last_season_average = last_season_points / starts
            season_on_season = safe_divide(average_points, last_season_average, 1.0)

        return PlayerSummary(
            player_id=record.id,
            games_played=games_played,
            total_points=total_points,
            minutes_played=total_minutes,
            goals_scored=goals_scored,
            assists=assists,
            clean_sheets=sum(gw.clean_sheets for gw in history),
            goals_conceded=sum(gw.goals_conceded for gw in history),
            saves=sum(gw.saves for gw in history),
            bonus=sum(gw.bonus for gw in history),
            average_points=average_points,
            minutes_per_game=safe_divide(total_minutes, games_played),
            goals_per_game=safe_divide(goals_scored, games_played),
            assists_per_game=safe_divide(assists, games_played),
            form=mean_or_zero(gw.total_points for gw in recent_games),
            xg=mean_or_zero(gw.expected_goals for gw in history),
            xa=mean_or_zero(gw.expected_assists for gw in history),
            xgi=mean_or_zero(gw.expected_goal_involvements for gw in history),
            upcoming_fixture_difficulty=upcoming_difficulty,
            season_on_season_performance=season_on_season,
            last_season_points=last_season_points,
            last_season_average_points=last_season_average,
            now_cost=record.now_cost,
            selected_by_percent=record.selected_by_percent,
            value_form=record.value_form,
            value_season=record.value_season,
            points_per_game=record.points_per_game,
        )

    def summarize_team(self, record: TeamRawRecord) -> TeamSummary:
        """Average and home-minus-away strength metrics; absent ratings count as 0."""
        overall_home = record.strength_overall_home or 0
        overall_away = record.strength_overall_away or 0
        attack_home = record.strength_attack_home or 0
        attack_away = record.strength_attack_away or 0
        defence_home = record.strength_defence_home or 0
        defence_away = record.strength_defence_away or 0

        return TeamSummary(
            team=record,
            average_overall_strength=(overall_home + overall_away) / 2,
            average_attack_strength=(attack_home + attack_away) / 2,
            average_defence_strength=(defence_home + defence_away) / 2,
            overall_strength_home_bias=overall_home - overall_away,
            attack_strength_home_bias=attack_home - attack_away,
            defence_strength_home_bias=defence_home - defence_away,
        )

    def summarize_fixture(self, record: FixtureRawRecord) -> FixtureSummary:
        """Sum each tracked stat for both sides of the fixture."""
        sums = {}
        for identifier, stem in FIXTURE_STAT_FIELDS:
            sums[f"home_{stem}"] = sum_stat(record.stats, identifier, "h")
            sums[f"away_{stem}"] = sum_stat(record.stats, identifier, "a")
        return FixtureSummary(fixture_id=record.id, **sums)
