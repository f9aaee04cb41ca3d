"""Shared fixtures: builders for raw player, team and fixture records."""

import pytest

from fpl_predictor.domain.models import (
    FixtureRawRecord,
    PlayerRawRecord,
    TeamRawRecord,
)


def _game(round_, points, **overrides):
    entry = {
        "round": round_,
        "fixture": round_ * 10,
        "opponent_team": 2,
        "was_home": round_ % 2 == 1,
        "minutes": 90,
        "total_points": points,
        "goals_scored": 0,
        "assists": 0,
        "clean_sheets": 0,
        "goals_conceded": 1,
        "saves": 0,
        "bonus": 0,
        "expected_goals": "0.10",
        "expected_assists": "0.05",
        "expected_goal_involvements": "0.15",
        "value": 50,
        "difficulty": 3,
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def game():
    """Builder for a single element-summary history entry (raw dict)."""
    return _game


@pytest.fixture
def make_player():
    """Builder for PlayerRawRecord with a points history."""

    def _make(player_id=1, points=(2, 4, 6, 8, 10), team=1, now_cost=50, **overrides):
        document = {
            "id": player_id,
            "web_name": f"Player{player_id}",
            "team": team,
            "element_type": 3,
            "now_cost": now_cost,
            "history": [_game(i + 1, p) for i, p in enumerate(points)],
            "fixtures": [{"difficulty": 2, "event": len(points) + 1, "is_home": True}],
            "history_past": [
                {"season_name": "2023/24", "total_points": 114, "starts": 38}
            ],
            "selected_by_percent": "12.5",
            "form": "6.0",
        }
        document.update(overrides)
        return PlayerRawRecord.model_validate(document)

    return _make


@pytest.fixture
def make_team():
    """Builder for TeamRawRecord with directional strengths."""

    def _make(team_id=1, code=3, position=None, points=30, **overrides):
        document = {
            "id": team_id,
            "code": code,
            "name": f"Team{team_id}",
            "short_name": f"T{team_id:02d}",
            "points": points,
            "position": position if position is not None else team_id,
            "strength_overall_home": 1200,
            "strength_overall_away": 1100,
            "strength_attack_home": 1200,
            "strength_attack_away": 1150,
            "strength_defence_home": 1100,
            "strength_defence_away": 1050,
        }
        document.update(overrides)
        return TeamRawRecord.model_validate(document)

    return _make


@pytest.fixture
def make_fixture():
    """Builder for FixtureRawRecord."""

    def _make(fixture_id=100, team_h=1, team_a=2, finished=False, **overrides):
        document = {
            "id": fixture_id,
            "event": 6,
            "team_h": team_h,
            "team_a": team_a,
            "team_h_difficulty": 3,
            "team_a_difficulty": 4,
            "finished": finished,
            "started": finished,
            "minutes": 90 if finished else 0,
            "team_h_score": None,
            "team_a_score": None,
            "stats": [],
        }
        document.update(overrides)
        return FixtureRawRecord.model_validate(document)

    return _make
