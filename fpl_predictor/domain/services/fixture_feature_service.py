"""
Fixture feature derivation.

Team-strength based expectations for a fixture (expected goals, clean-sheet
probability, cards) plus the realized outcome once the fixture is finished.
"""

from typing import Optional, Tuple

from scipy.stats import poisson

from fpl_predictor.config import FeatureConfig
from fpl_predictor.utils import safe_divide

from ..models.fixture import FixtureFeatureSet, FixtureRawRecord, FixtureSummary
from ..models.team import TeamRawRecord, TeamSummary

LEAGUE_AVERAGE_GOALS = 1.25
NEUTRAL_STRENGTH = 1000.0


def _rating(value: Optional[int], default: float) -> float:
    return float(value) if value else default


def expected_team_goals(
    attack: Optional[int],
    opponent_defence: Optional[int],
    league_average_goals: float = LEAGUE_AVERAGE_GOALS,
    neutral_strength: float = NEUTRAL_STRENGTH,
) -> float:
    """Single-direction expected goals: attack / opposing defence, scaled to the league average."""
    return (
        _rating(attack, neutral_strength)
        / _rating(opponent_defence, neutral_strength)
        * league_average_goals
    )


def expected_goals_split(
    home: Optional[TeamRawRecord],
    away: Optional[TeamRawRecord],
    league_average_goals: float = LEAGUE_AVERAGE_GOALS,
    neutral_strength: float = NEUTRAL_STRENGTH,
) -> Tuple[float, float]:
    """Expected (home, away) goals from directional attack/defence ratings."""
    home_goals = expected_team_goals(
        home.strength_attack_home if home else None,
        away.strength_defence_away if away else None,
        league_average_goals,
        neutral_strength,
    )
    away_goals = expected_team_goals(
        away.strength_attack_away if away else None,
        home.strength_defence_home if home else None,
        league_average_goals,
        neutral_strength,
    )
    return home_goals, away_goals


def expected_goals(
    home: Optional[TeamRawRecord],
    away: Optional[TeamRawRecord],
    league_average_goals: float = LEAGUE_AVERAGE_GOALS,
    neutral_strength: float = NEUTRAL_STRENGTH,
) -> float:
    """
    Total expected goals for a fixture.

    (homeAttack / awayDefence) * 1.25 + (awayAttack / homeDefence) * 1.25,
    where every absent rating is the neutral 1000.
    """
    home_goals, away_goals = expected_goals_split(
        home, away, league_average_goals, neutral_strength
    )
    return home_goals + away_goals


def expected_clean_sheet(expected_opponent_goals: float) -> float:
    """Poisson probability that the opponent scores zero goals."""
    return float(poisson.pmf(0, max(expected_opponent_goals, 0.0)))


def position_strength(
    rank: Optional[int],
    league_size: int = 20,
    floor: float = 0.05,
    unknown: float = 0.5,
) -> float:
    """
    Strength implied by league table position.

    1.0 for the leader, falling linearly to the floor at the bottom of a
    ``league_size`` table. An unknown position gets the neutral ``unknown``.
    """
    if rank is None or rank < 1:
        return unknown
    return max(floor, 1 - (rank - 1) / (league_size - 1))


def is_derby(
    home: Optional[TeamRawRecord],
    away: Optional[TeamRawRecord],
    max_code_distance: int = 3,
) -> bool:
    """
    Flag a fixture as a derby when the two club codes are close.

    This is a code-proximity heuristic, not a curated rivalry list: it will
    miss some rivalries and flag some unrelated clubs.
    """
    if home is None or away is None:
        return False
    if home.code is None or away.code is None:
        return False
    return abs(home.code - away.code) <= max_code_distance


def expected_cards(
    home_difficulty: int, away_difficulty: int, base: float = 2.5, per_difficulty: float = 0.5
) -> float:
    """Linear card estimate from the mean of the two difficulty ratings."""
    return base + per_difficulty * (home_difficulty + away_difficulty) / 2


def venue_factor(venue_strength: Optional[int], average_strength: float) -> float:
    """Venue strength relative to the team's average overall strength (1 when unknown)."""
    if venue_strength is None:
        return 1.0
    return safe_divide(venue_strength, average_strength, 1.0)


def match_result(home_goals: int, away_goals: int) -> str:
    if home_goals > away_goals:
        return "H"
    if away_goals > home_goals:
        return "A"
    return "D"


class FixtureFeatureService:
    """Builds a FixtureFeatureSet from a fixture, its stat sums and both teams."""

    def __init__(self, config: Optional[FeatureConfig] = None):
        self.config = config or FeatureConfig()

    def derive(
        self,
        fixture: FixtureRawRecord,
        summary: FixtureSummary,
        home: Optional[TeamSummary] = None,
        away: Optional[TeamSummary] = None,
    ) -> FixtureFeatureSet:
        """
        Derive all engineered features for one fixture.

        Args:
            fixture: Validated raw fixture record
            summary: Stat sums from AggregationService.summarize_fixture
            home: Home team summary, None when the team is unknown
            away: Away team summary, None when the team is unknown

        Returns:
            Frozen FixtureFeatureSet; outcome fields are None unless finished
        """
        cfg = self.config
        home_team = home.team if home else None
        away_team = away.team if away else None

        home_strength = float(home_team.strength_overall_home or 0) if home_team else 0.0
        away_strength = float(away_team.strength_overall_away or 0) if away_team else 0.0

        home_goals, away_goals = expected_goals_split(
            home_team, away_team, cfg.league_average_goals, cfg.neutral_strength
        )

        outcome = {}
        if fixture.finished:
            outcome = self._realized_outcome(fixture, summary)

        return FixtureFeatureSet(
            fixture_id=fixture.id,
            event=fixture.event,
            home_team_id=fixture.team_h,
            away_team_id=fixture.team_a,
            home_team_strength=home_strength,
            away_team_strength=away_strength,
            strength_difference=home_strength - away_strength,
            home_attack_strength=_rating(
                home_team.strength_attack_home if home_team else None,
                cfg.neutral_strength,
            ),
            home_defence_strength=_rating(
                home_team.strength_defence_home if home_team else None,
                cfg.neutral_strength,
            ),
            away_attack_strength=_rating(
                away_team.strength_attack_away if away_team else None,
                cfg.neutral_strength,
            ),
            away_defence_strength=_rating(
                away_team.strength_defence_away if away_team else None,
                cfg.neutral_strength,
            ),
            expected_home_goals=home_goals,
            expected_away_goals=away_goals,
            expected_goals=home_goals + away_goals,
            home_factor=venue_factor(
                home_team.strength_overall_home if home_team else None,
                home.average_overall_strength if home else 0.0,
            ),
            away_factor=venue_factor(
                away_team.strength_overall_away if away_team else None,
                away.average_overall_strength if away else 0.0,
            ),
            home_position_strength=self._position_strength(home_team),
            away_position_strength=self._position_strength(away_team),
            expected_home_clean_sheet=expected_clean_sheet(away_goals),
            expected_away_clean_sheet=expected_clean_sheet(home_goals),
            expected_cards=expected_cards(
                fixture.team_h_difficulty,
                fixture.team_a_difficulty,
                cfg.cards_base,
                cfg.cards_per_difficulty,
            ),
            is_derby=is_derby(home_team, away_team, cfg.derby_code_distance),
            finished=fixture.finished,
            **outcome,
        )

    def _position_strength(self, team: Optional[TeamRawRecord]) -> float:
        cfg = self.config
        return position_strength(
            team.position if team else None,
            cfg.league_size,
            cfg.position_strength_floor,
            cfg.unknown_position_strength,
        )

    @staticmethod
    def _realized_outcome(fixture: FixtureRawRecord, summary: FixtureSummary) -> dict:
        # Final score when reported, otherwise the goals_scored stat sums
        if fixture.team_h_score is not None and fixture.team_a_score is not None:
            home_goals, away_goals = fixture.team_h_score, fixture.team_a_score
        else:
            home_goals, away_goals = summary.home_goals, summary.away_goals

        cards = (
            summary.home_yellow_cards
            + summary.away_yellow_cards
            + summary.home_red_cards
            + summary.away_red_cards
        )
        return {
            "actual_result": match_result(home_goals, away_goals),
            "actual_goals": home_goals + away_goals,
            "actual_cards": cards,
        }
