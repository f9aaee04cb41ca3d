"""Tests for fixture feature derivation."""

import math

import pytest

from fpl_predictor.domain.models import TeamRawRecord
from fpl_predictor.domain.services.aggregation_service import AggregationService
from fpl_predictor.domain.services.fixture_feature_service import (
    FixtureFeatureService,
    expected_cards,
    expected_clean_sheet,
    expected_goals,
    expected_goals_split,
    is_derby,
    match_result,
    position_strength,
)


def team(team_id=1, code=1, **strengths):
    return TeamRawRecord(id=team_id, code=code, **strengths)


class TestExpectedGoals:
    def test_reference_value(self):
        """(1200/1000)*1.25 + (900/1100)*1.25 = 2.5227..."""
        home = team(1, strength_attack_home=1200, strength_defence_home=1100)
        away = team(2, strength_attack_away=900, strength_defence_away=1000)

        assert expected_goals(home, away) == pytest.approx(2.5227, abs=1e-4)

    def test_split_matches_total(self):
        home = team(1, strength_attack_home=1200, strength_defence_home=1100)
        away = team(2, strength_attack_away=900, strength_defence_away=1000)

        home_goals, away_goals = expected_goals_split(home, away)

        assert home_goals == pytest.approx(1.5)
        assert away_goals == pytest.approx(900 / 1100 * 1.25)

    def test_absent_ratings_are_neutral(self):
        """Missing strengths fall back to 1000, giving the league average each way."""
        assert expected_goals(team(1), team(2)) == pytest.approx(2.5)
        assert expected_goals(None, None) == pytest.approx(2.5)


class TestCleanSheet:
    @pytest.mark.parametrize("lam", [0.1, 0.5, 1.25, 2.0, 4.0])
    def test_probability_strictly_between_zero_and_one(self, lam):
        p = expected_clean_sheet(lam)
        assert 0.0 < p < 1.0
        assert p == pytest.approx(math.exp(-lam))

    def test_approaches_one_as_expected_goals_vanish(self):
        assert expected_clean_sheet(1e-6) == pytest.approx(1.0, abs=1e-5)
        assert expected_clean_sheet(0.01) > expected_clean_sheet(0.5)


class TestPositionStrength:
    def test_leader_and_bottom(self):
        assert position_strength(1) == 1.0
        assert position_strength(20) == pytest.approx(0.05)

    def test_linear_in_between(self):
        assert position_strength(10) == pytest.approx(1 - 9 / 19)

    def test_floor_applies(self):
        assert position_strength(25) == 0.05

    def test_unknown_rank_is_neutral(self):
        assert position_strength(None) == 0.5


class TestDerbyAndCards:
    def test_close_codes_are_a_derby(self):
        assert is_derby(team(1, code=3), team(2, code=6))

    def test_distant_codes_are_not(self):
        assert not is_derby(team(1, code=3), team(2, code=20))

    def test_unknown_team_is_not_a_derby(self):
        assert not is_derby(team(1, code=3), None)

    def test_missing_codes_are_not_a_derby(self):
        """An absent club code never counts as close to another code."""
        assert not is_derby(TeamRawRecord(id=1), TeamRawRecord(id=3))
        assert not is_derby(TeamRawRecord(id=1), team(4, code=2))
        assert not is_derby(team(1, code=0), TeamRawRecord(id=2))

    def test_expected_cards(self):
        assert expected_cards(3, 4) == pytest.approx(2.5 + 0.5 * 3.5)

    @pytest.mark.parametrize("h,a,expected", [(2, 1, "H"), (0, 3, "A"), (1, 1, "D")])
    def test_match_result(self, h, a, expected):
        assert match_result(h, a) == expected


class TestFixtureFeatureService:
    """Tests for the composed fixture feature set."""

    @pytest.fixture
    def service(self):
        return FixtureFeatureService()

    def derive(self, service, fixture, home=None, away=None):
        aggregator = AggregationService()
        summary = aggregator.summarize_fixture(fixture)
        return service.derive(
            fixture,
            summary,
            aggregator.summarize_team(home) if home else None,
            aggregator.summarize_team(away) if away else None,
        )

    def test_unfinished_fixture(self, service, make_fixture, make_team):
        home = make_team(1, code=3, position=1)
        away = make_team(2, code=43, position=20)

        features = self.derive(service, make_fixture(team_h=1, team_a=2), home, away)

        assert features.home_team_strength == 1200.0
        assert features.away_team_strength == 1100.0
        assert features.strength_difference == 100.0
        assert features.expected_home_goals == pytest.approx(1200 / 1050 * 1.25)
        assert features.expected_away_goals == pytest.approx(1150 / 1100 * 1.25)
        assert features.expected_goals == pytest.approx(
            features.expected_home_goals + features.expected_away_goals
        )
        assert features.home_factor == pytest.approx(1200 / 1150)
        assert features.away_factor == pytest.approx(1100 / 1150)
        assert features.home_position_strength == 1.0
        assert features.away_position_strength == pytest.approx(0.05)
        assert features.expected_home_clean_sheet == pytest.approx(
            math.exp(-features.expected_away_goals)
        )
        assert features.expected_cards == pytest.approx(2.5 + 0.5 * 3.5)
        assert features.is_derby is False
        assert features.finished is False
        assert features.actual_result is None
        assert features.actual_goals is None
        assert features.actual_cards is None

    def test_finished_fixture_uses_final_score(self, service, make_fixture, make_team):
        fixture = make_fixture(
            finished=True,
            team_h_score=2,
            team_a_score=2,
            stats=[
                {"identifier": "yellow_cards", "h": [{"element": 1, "value": 2}], "a": []},
                {"identifier": "red_cards", "h": [], "a": [{"element": 5, "value": 1}]},
            ],
        )

        features = self.derive(service, fixture, make_team(1), make_team(2))

        assert features.actual_result == "D"
        assert features.actual_goals == 4
        assert features.actual_cards == 3

    def test_finished_fixture_falls_back_to_goal_stats(self, service, make_fixture):
        fixture = make_fixture(
            finished=True,
            stats=[
                {
                    "identifier": "goals_scored",
                    "h": [{"element": 1, "value": 1}],
                    "a": [{"element": 7, "value": 2}],
                }
            ],
        )

        features = self.derive(service, fixture)

        assert features.actual_result == "A"
        assert features.actual_goals == 3
        assert features.actual_cards == 0

    def test_unknown_teams_use_neutral_values(self, service, make_fixture):
        """Fixtures referencing unknown teams still produce every feature."""
        features = self.derive(service, make_fixture())

        assert features.home_team_strength == 0.0
        assert features.away_team_strength == 0.0
        assert features.expected_goals == pytest.approx(2.5)
        assert features.home_factor == 1.0
        assert features.home_position_strength == 0.5
        assert features.is_derby is False
