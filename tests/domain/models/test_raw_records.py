"""Tests for ingestion-boundary validation of raw records."""

import pytest
from pydantic import ValidationError

from fpl_predictor.domain.models import (
    FixtureFeatureSet,
    FixtureRawRecord,
    GameEntry,
    PlayerFeatureSet,
    PlayerRawRecord,
    TeamRawRecord,
    TrainingRow,
)


class TestGameEntry:
    """Tests for per-match history entries."""

    def test_expected_stats_parsed_from_strings(self):
        entry = GameEntry.model_validate(
            {"round": 1, "expected_goals": "0.45", "expected_assists": "0.10"}
        )
        assert entry.expected_goals == pytest.approx(0.45)
        assert entry.expected_assists == pytest.approx(0.10)

    def test_unparseable_expected_stat_is_zero(self):
        entry = GameEntry.model_validate({"round": 1, "expected_goals": "n/a"})
        assert entry.expected_goals == 0.0

    def test_null_counts_default_to_zero(self):
        """Missing or null numeric fields are coerced, never an error."""
        entry = GameEntry.model_validate(
            {"round": 3, "minutes": None, "total_points": None, "bonus": None}
        )
        assert entry.minutes == 0
        assert entry.total_points == 0
        assert entry.bonus == 0
        assert entry.was_home is False

    def test_out_of_range_difficulty_dropped(self):
        entry = GameEntry.model_validate({"round": 1, "difficulty": 9})
        assert entry.difficulty is None

    def test_round_required(self):
        with pytest.raises(ValidationError):
            GameEntry.model_validate({"total_points": 2})


class TestPlayerRawRecord:
    """Tests for player records."""

    def test_history_sorted_by_round(self):
        """History is ordered oldest to newest regardless of input order."""
        record = PlayerRawRecord.model_validate(
            {
                "id": 1,
                "history": [
                    {"round": 3, "total_points": 3},
                    {"round": 1, "total_points": 1},
                    {"round": 2, "total_points": 2},
                ],
            }
        )
        assert [gw.round for gw in record.history] == [1, 2, 3]

    def test_sort_is_stable_for_double_gameweeks(self):
        record = PlayerRawRecord.model_validate(
            {
                "id": 1,
                "history": [
                    {"round": 2, "fixture": 21, "total_points": 5},
                    {"round": 1, "fixture": 11, "total_points": 1},
                    {"round": 2, "fixture": 22, "total_points": 7},
                ],
            }
        )
        assert [gw.fixture for gw in record.history] == [11, 21, 22]

    def test_null_lists_become_empty(self):
        record = PlayerRawRecord.model_validate(
            {"id": 5, "history": None, "fixtures": None, "history_past": None}
        )
        assert record.history == []
        assert record.fixtures == []
        assert record.last_season is None

    def test_string_numerics_parsed(self):
        record = PlayerRawRecord.model_validate(
            {"id": 5, "now_cost": "65", "selected_by_percent": "23.4", "form": "5.2"}
        )
        assert record.now_cost == 65
        assert record.selected_by_percent == pytest.approx(23.4)
        assert record.form == pytest.approx(5.2)

    def test_last_season_is_most_recent(self):
        record = PlayerRawRecord.model_validate(
            {
                "id": 5,
                "history_past": [
                    {"season_name": "2022/23", "total_points": 90},
                    {"season_name": "2023/24", "total_points": 150},
                ],
            }
        )
        assert record.last_season.season_name == "2023/24"

    def test_invalid_id_rejected(self):
        with pytest.raises(ValidationError):
            PlayerRawRecord.model_validate({"id": 0})

    def test_assistant_manager_position_accepted(self):
        record = PlayerRawRecord.model_validate({"id": 1, "element_type": 5})
        assert record.element_type == 5

    @pytest.mark.parametrize("raw", [0, 9, "x", None])
    def test_unrecognised_position_becomes_none(self, raw):
        """An odd position drops the field, not the whole document."""
        record = PlayerRawRecord.model_validate({"id": 1, "element_type": raw})
        assert record.element_type is None


class TestTeamAndFixtureRecords:
    def test_team_code_absent_is_none(self):
        assert TeamRawRecord.model_validate({"id": 1}).code is None
        assert TeamRawRecord.model_validate({"id": 1, "code": "14"}).code == 14

    def test_team_position_zero_is_unknown(self):
        team = TeamRawRecord.model_validate({"id": 1, "position": 0})
        assert team.position is None
        assert team.strength_attack_home is None

    def test_fixture_defaults(self):
        fixture = FixtureRawRecord.model_validate(
            {"id": 1, "team_h": 1, "team_a": 2, "stats": None, "finished": None}
        )
        assert fixture.stats == []
        assert fixture.finished is False
        assert fixture.team_h_score is None

    def test_fixture_stats_parsed(self):
        fixture = FixtureRawRecord.model_validate(
            {
                "id": 1,
                "team_h": 1,
                "team_a": 2,
                "stats": [
                    {
                        "identifier": "goals_scored",
                        "h": [{"element": 10, "value": 2}],
                        "a": None,
                    }
                ],
            }
        )
        assert fixture.stats[0].h[0].value == 2
        assert fixture.stats[0].a == []


class TestFeatureModels:
    def test_feature_sets_are_frozen(self):
        features = PlayerFeatureSet(player_id=1)
        with pytest.raises(ValidationError):
            features.recent_form_score = 5.0

    def test_unfinished_outcomes_dumped_as_null(self):
        """Outcome keys are present (as None) on every stored fixture record."""
        dumped = FixtureFeatureSet(fixture_id=1, home_team_id=1, away_team_id=2).model_dump()
        assert "actual_result" in dumped
        assert dumped["actual_result"] is None
        assert dumped["actual_goals"] is None
        assert dumped["actual_cards"] is None

    def test_involves_team(self):
        fixture = FixtureFeatureSet(fixture_id=1, home_team_id=1, away_team_id=2)
        assert fixture.involves_team(1)
        assert fixture.involves_team(2)
        assert not fixture.involves_team(3)
        assert not fixture.involves_team(None)

    def test_training_row_vector_order(self):
        row = TrainingRow(player_id=1, fixture_id=2, features={"a": 1.0, "b": 2.0}, label=3.0)
        assert row.to_vector(["b", "a"]) == [2.0, 1.0]
        with pytest.raises(KeyError):
            row.to_vector(["c"])
