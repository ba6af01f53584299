import logging
from itertools import groupby
from typing import Dict, List, Optional, Sequence

from models import GameOutcome, GroupDefinition, TeamStats
from constants import TIEBREAK_GOAL_DIFFERENCE, TIEBREAK_HEAD_TO_HEAD, TIEBREAK_MODES
from app.exceptions import ValidationError
from services.standings_calculator import StandingsCalculator
from .team_resolution import is_group_complete

logger = logging.getLogger(__name__)


def _stats_key(team: TeamStats):
    return (team.points, team.goal_difference, team.goals_for)


def _unique_fixtures(group_games: Sequence[GameOutcome]) -> List[GameOutcome]:
    """Keeps the first outcome per game_id. Outcomes without an id are kept as they are."""
    seen = set()
    fixtures = []
    for game in group_games:
        if game.game_id is not None:
            if game.game_id in seen:
                logger.warning(f"Duplicate outcome for game {game.game_id}, keeping the first one")
                continue
            seen.add(game.game_id)
        fixtures.append(game)
    return fixtures


def resolve_group_standings(
    team_ids: List[str],
    group_games: Sequence[GameOutcome],
    tiebreak_mode: str = TIEBREAK_GOAL_DIFFERENCE,
    expected_game_count: Optional[int] = None,
    conduct_scores: Optional[Dict[str, int]] = None,
    group: Optional[str] = None
) -> Optional[List[TeamStats]]:
    """
    Calculates the final ranking of a group.

    Returns the teams ordered from first to last, or None when the group cannot be
    ranked yet: a fixture is missing its score, a team has no fixture, or fewer/more
    fixtures than `expected_game_count` were supplied. Without `expected_game_count`
    a single round robin is expected. A partial order is never returned.

    Ordering: points, goal difference, goals for, direct match (head_to_head mode,
    exactly two teams still tied), conduct score (lower first), listing order.
    """
    if tiebreak_mode not in TIEBREAK_MODES:
        raise ValidationError(f"Unknown tiebreak mode '{tiebreak_mode}'", field='tiebreak_mode')

    team_set = set(team_ids)
    fixtures = []
    for game in _unique_fixtures(group_games):
        if game.home_team in team_set and game.away_team in team_set:
            fixtures.append(game)
        else:
            logger.warning(f"Game {game.game_id} is not a fixture of group {group or '?'}, ignoring it")

    if expected_game_count is None:
        # Single round robin
        expected_game_count = len(team_set) * (len(team_set) - 1) // 2

    if not fixtures:
        return None
    if len(fixtures) != expected_game_count:
        return None
    if not all(game.has_score for game in fixtures):
        return None
    if not all(any(game.involves(team_id) for game in fixtures) for team_id in team_set):
        return None

    calculator = StandingsCalculator()
    standings = calculator.calculate_standings_from_games(team_ids, fixtures, group)

    for team_id, team_stats in standings.items():
        team_stats.conduct_score = (conduct_scores or {}).get(team_id, 0)
        team_stats.is_complete = True

    return _rank_teams(list(standings.values()), fixtures, tiebreak_mode)


def calculate_partial_group_table(
    team_ids: List[str],
    group_games: Sequence[GameOutcome],
    tiebreak_mode: str = TIEBREAK_GOAL_DIFFERENCE,
    conduct_scores: Optional[Dict[str, int]] = None,
    group: Optional[str] = None
) -> List[TeamStats]:
    """
    Table for display while a group is still being played. Uses the same ordering
    as resolve_group_standings but every record keeps is_complete=False, so it
    must never feed playoff slots.
    """
    calculator = StandingsCalculator()
    scored = [g for g in _unique_fixtures(group_games) if g.has_score]
    standings = calculator.calculate_standings_from_games(team_ids, scored, group)
    for team_id, team_stats in standings.items():
        team_stats.conduct_score = (conduct_scores or {}).get(team_id, 0)
    return _rank_teams(list(standings.values()), scored, tiebreak_mode)


def _rank_teams(team_stats: List[TeamStats], games: Sequence[GameOutcome], tiebreak_mode: str) -> List[TeamStats]:
    listing_order = {ts.team_id: index for index, ts in enumerate(team_stats)}

    # Sort by pts (desc), gd (desc), gf (desc)
    ordered = sorted(team_stats, key=_stats_key, reverse=True)

    result: List[TeamStats] = []
    for _, tied in groupby(ordered, key=_stats_key):
        result.extend(_sort_tied_teams(list(tied), games, tiebreak_mode, listing_order))

    for i, ts in enumerate(result):
        ts.position = i + 1
    return result


def _sort_tied_teams(
    tied_teams: List[TeamStats],
    games: Sequence[GameOutcome],
    tiebreak_mode: str,
    listing_order: Dict[str, int]
) -> List[TeamStats]:
    """
    Sort teams level on points, goal difference and goals for.
    """
    if len(tied_teams) <= 1:
        return tied_teams

    if tiebreak_mode == TIEBREAK_HEAD_TO_HEAD and len(tied_teams) == 2:
        winner_id = _direct_match_winner(tied_teams[0].team_id, tied_teams[1].team_id, games)
        if winner_id is not None:
            return sorted(tied_teams, key=lambda ts: ts.team_id != winner_id)

    return sorted(tied_teams, key=lambda ts: (ts.conduct_score, listing_order[ts.team_id]))


def _direct_match_winner(team1: str, team2: str, games: Sequence[GameOutcome]) -> Optional[str]:
    """
    Winner of the games between two teams, by points earned in those games.
    Returns None if they never met or shared the points.
    """
    h2h_points = {team1: 0, team2: 0}
    played = False

    for game in games:
        if not game.has_score or {game.home_team, game.away_team} != {team1, team2}:
            continue
        played = True
        if game.home_score > game.away_score:
            h2h_points[game.home_team] += 3
        elif game.away_score > game.home_score:
            h2h_points[game.away_team] += 3
        else:
            h2h_points[team1] += 1
            h2h_points[team2] += 1

    if not played or h2h_points[team1] == h2h_points[team2]:
        return None
    return team1 if h2h_points[team1] > h2h_points[team2] else team2


def select_group_outcomes(
    game_ids: Sequence[str],
    results: Dict[str, GameOutcome],
    guesses: Dict[str, GameOutcome]
) -> Optional[List[GameOutcome]]:
    """
    Picks the outcomes a group is ranked from, all-or-nothing per group:
    official results when every game has one, the user's guesses when no game has
    a result yet, and None otherwise. Results and guesses are never mixed.
    """
    if not game_ids:
        return None

    scored_results = [results[game_id] for game_id in game_ids
                      if game_id in results and results[game_id].has_score]
    if len(scored_results) == len(game_ids):
        return scored_results
    if scored_results:
        # Group partially played, results and guesses are never mixed
        return None

    scored_guesses = [guesses[game_id] for game_id in game_ids
                      if game_id in guesses and guesses[game_id].has_score]
    if len(scored_guesses) == len(game_ids):
        return scored_guesses
    return None


def calculate_group_standings(
    group: GroupDefinition,
    results: Dict[str, GameOutcome],
    guesses: Optional[Dict[str, GameOutcome]] = None,
    conduct_scores: Optional[Dict[str, int]] = None
) -> Optional[List[TeamStats]]:
    """Standings of a group definition, or None while it cannot be fully ranked."""
    outcomes = select_group_outcomes(group.game_ids, results, guesses or {})
    if outcomes is None:
        return None
    return resolve_group_standings(
        group.team_ids,
        outcomes,
        group.tiebreak_mode,
        expected_game_count=len(group.game_ids),
        conduct_scores=conduct_scores,
        group=group.group_letter.upper()
    )


def standings_from_positions(positions_by_group: Dict[str, List[TeamStats]]) -> Dict[str, Optional[List[TeamStats]]]:
    """
    Accepts precomputed positions per group letter and keeps only groups whose
    records are all complete; the others become unresolved.
    """
    return {
        group_letter.upper(): list(positions) if positions and is_group_complete(positions) else None
        for group_letter, positions in positions_by_group.items()
    }
