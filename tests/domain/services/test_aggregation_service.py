"""Tests for AggregationService."""

import pytest

from fpl_predictor.config import AggregationConfig
from fpl_predictor.domain.models import FixtureRawRecord, PlayerRawRecord, StatEntry
from fpl_predictor.domain.services.aggregation_service import (
    AggregationService,
    sum_stat,
)


@pytest.fixture
def aggregator():
    return AggregationService(AggregationConfig())


class TestSummarizePlayer:
    """Tests for per-player aggregates."""

    def test_empty_history_gives_zero_aggregates(self, aggregator):
        """A player with no matches summarizes to zeros, never raises."""
        summary = aggregator.summarize_player(PlayerRawRecord(id=1))

        assert summary.games_played == 0
        assert summary.total_points == 0
        assert summary.average_points == 0.0
        assert summary.goals_per_game == 0.0
        assert summary.form == 0.0
        assert summary.xg == 0.0
        assert summary.upcoming_fixture_difficulty == 0.0
        assert summary.season_on_season_performance == 1.0

    def test_totals_and_rates(self, aggregator, make_player, game):
        record = make_player(
            history=[
                game(1, 8, goals_scored=1, assists=1, minutes=90, expected_goals="0.6"),
                game(2, 2, minutes=60, expected_goals="0.2"),
            ]
        )
        summary = aggregator.summarize_player(record)

        assert summary.games_played == 2
        assert summary.total_points == 10
        assert summary.minutes_played == 150
        assert summary.goals_scored == 1
        assert summary.assists == 1
        assert summary.average_points == 5.0
        assert summary.minutes_per_game == 75.0
        assert summary.goals_per_game == 0.5
        assert summary.xg == pytest.approx(0.4)

    def test_form_uses_last_window(self, make_player):
        record = make_player(points=(10, 10, 1, 2, 3, 4, 5))
        summary = AggregationService(AggregationConfig(form_window=5)).summarize_player(record)
        assert summary.form == 3.0

    def test_upcoming_difficulty_uses_fixed_divisor(self, aggregator, make_player):
        """Fewer than five known fixtures still divide by five."""
        record = make_player(
            fixtures=[{"difficulty": 4}, {"difficulty": 3}, {"difficulty": 3}]
        )
        summary = aggregator.summarize_player(record)
        assert summary.upcoming_fixture_difficulty == pytest.approx(10 / 5)

    def test_upcoming_difficulty_only_counts_lookahead(self, aggregator, make_player):
        record = make_player(fixtures=[{"difficulty": 2}] * 5 + [{"difficulty": 5}] * 3)
        summary = aggregator.summarize_player(record)
        assert summary.upcoming_fixture_difficulty == 2.0

    def test_season_on_season_performance(self, aggregator, make_player):
        # Current average 6.0; last season 114 points over 38 starts = 3.0
        record = make_player(points=(2, 4, 6, 8, 10))
        summary = aggregator.summarize_player(record)

        assert summary.last_season_points == 114
        assert summary.last_season_average_points == 3.0
        assert summary.season_on_season_performance == 2.0

    def test_missing_starts_default_to_full_season(self, aggregator, make_player):
        record = make_player(
            points=(4,), history_past=[{"season_name": "2023/24", "total_points": 76}]
        )
        summary = aggregator.summarize_player(record)
        assert summary.last_season_average_points == 2.0

    def test_no_last_season_points_is_neutral(self, aggregator, make_player):
        record = make_player(history_past=[])
        summary = aggregator.summarize_player(record)
        assert summary.season_on_season_performance == 1.0
        assert summary.last_season_average_points == 0.0


class TestSummarizeTeam:
    def test_averages_and_biases(self, aggregator, make_team):
        summary = aggregator.summarize_team(make_team())

        assert summary.average_overall_strength == 1150.0
        assert summary.average_attack_strength == 1175.0
        assert summary.average_defence_strength == 1075.0
        assert summary.overall_strength_home_bias == 100.0
        assert summary.attack_strength_home_bias == 50.0
        assert summary.defence_strength_home_bias == 50.0

    def test_absent_strengths_count_as_zero(self, aggregator, make_team):
        team = make_team(strength_overall_away=None, strength_attack_home=None)
        summary = aggregator.summarize_team(team)

        assert summary.average_overall_strength == 600.0
        assert summary.overall_strength_home_bias == 1200.0
        assert summary.attack_strength_home_bias == -1150.0


class TestFixtureStats:
    """Tests for fixture stat sums."""

    @pytest.fixture
    def stats(self):
        return [
            StatEntry.model_validate(
                {
                    "identifier": "goals_scored",
                    "h": [{"element": 1, "value": 2}, {"element": 2, "value": 1}],
                    "a": [{"element": 9, "value": 1}],
                }
            ),
            StatEntry.model_validate(
                {
                    "identifier": "yellow_cards",
                    "h": [{"element": 3, "value": 1}],
                    "a": [{"element": 8, "value": 1}, {"element": 7, "value": 1}],
                }
            ),
        ]

    def test_sum_stat_per_side(self, stats):
        assert sum_stat(stats, "goals_scored", "h") == 3
        assert sum_stat(stats, "goals_scored", "a") == 1

    def test_absent_identifier_is_zero(self, stats):
        assert sum_stat(stats, "red_cards", "h") == 0
        assert sum_stat([], "goals_scored", "a") == 0

    def test_invalid_side_raises(self, stats):
        with pytest.raises(ValueError):
            sum_stat(stats, "goals_scored", "x")

    def test_summarize_fixture(self, aggregator, stats):
        record = FixtureRawRecord(id=5, team_h=1, team_a=2, stats=stats)
        summary = aggregator.summarize_fixture(record)

        assert summary.fixture_id == 5
        assert summary.home_goals == 3
        assert summary.away_goals == 1
        assert summary.home_yellow_cards == 1
        assert summary.away_yellow_cards == 2
        assert summary.home_red_cards == 0
        assert summary.home_bps == 0
