from typing import Dict, Iterable, Optional

from models import GameOutcome, Team, TeamStats, _is_score


def get_winner_by_scores(
    home_score: Optional[int],
    away_score: Optional[int],
    home_penalty_winner: bool = False,
    away_penalty_winner: bool = False,
    home_team: Optional[str] = None,
    away_team: Optional[str] = None
) -> Optional[str]:
    """
    Returns the winning team for a pair of scores.
    A level score is only decided by a penalty-winner flag; the home flag is checked first.
    Returns None when the scores are missing or the tie is undecided.
    """
    if not _is_score(home_score) or not _is_score(away_score):
        return None
    if home_score > away_score:
        return home_team
    if away_score > home_score:
        return away_team
    if home_penalty_winner:
        return home_team
    if away_penalty_winner:
        return away_team
    return None


def _penalty_flags(outcome: GameOutcome):
    # Results carry shoot-out scores, guesses carry winner flags
    if outcome.has_penalty_score and outcome.home_penalty_score != outcome.away_penalty_score:
        return (outcome.home_penalty_score > outcome.away_penalty_score,
                outcome.away_penalty_score > outcome.home_penalty_score)
    return bool(outcome.home_penalty_winner), bool(outcome.away_penalty_winner)


def get_winner(outcome: Optional[GameOutcome],
               home_team: Optional[str] = None,
               away_team: Optional[str] = None) -> Optional[str]:
    """
    Winner of a game outcome. `home_team`/`away_team` override the teams stored on the outcome.
    """
    if outcome is None:
        return None
    home_team = home_team or outcome.home_team
    away_team = away_team or outcome.away_team
    home_flag, away_flag = _penalty_flags(outcome)
    return get_winner_by_scores(outcome.home_score, outcome.away_score,
                                home_flag, away_flag, home_team, away_team)


def get_loser(outcome: Optional[GameOutcome],
              home_team: Optional[str] = None,
              away_team: Optional[str] = None) -> Optional[str]:
    """Loser of a game outcome, None when the winner cannot be determined."""
    if outcome is None:
        return None
    home_team = home_team or outcome.home_team
    away_team = away_team or outcome.away_team
    winner = get_winner(outcome, home_team, away_team)
    if winner is None:
        return None
    return away_team if winner == home_team else home_team


def is_group_complete(team_positions: Iterable[TeamStats]) -> bool:
    """True when every team record of a group is complete. An empty group counts as complete."""
    return all(team_stat.is_complete for team_stat in team_positions)


def get_team_names(
    home_team_id: Optional[str],
    away_team_id: Optional[str],
    teams_map: Dict[str, Team],
    guess: Optional[GameOutcome] = None
) -> Dict[str, Optional[str]]:
    """
    Resolves display names for both participants of a game.
    Playoff games without assigned teams fall back to the teams of the user's guess.
    """
    if guess is not None:
        home_team_id = home_team_id or guess.home_team
        away_team_id = away_team_id or guess.away_team

    home_team = teams_map.get(home_team_id) if home_team_id else None
    away_team = teams_map.get(away_team_id) if away_team_id else None

    return {
        'homeTeamId': home_team_id,
        'awayTeamId': away_team_id,
        'homeTeamName': home_team.name if home_team else None,
        'awayTeamName': away_team.name if away_team else None,
        'homeTeamShortName': home_team.short_name if home_team else None,
        'awayTeamShortName': away_team.short_name if away_team else None,
    }
