"""
StandingsCalculator Service für die Berechnung der Gruppentabellen
Berechnet Punkte, Siege, Unentschieden, Niederlagen und Tore basierend auf
Ergebnissen oder Tipps
"""

import logging
from typing import Dict, Iterable, List

from models import TeamStats, GameOutcome
from constants import POINTS_FOR_WIN, POINTS_FOR_DRAW, POINTS_FOR_LOSS

logger = logging.getLogger(__name__)


class StandingsCalculator:
    """
    Service zur Berechnung und Aktualisierung der Teamstatistiken
    basierend auf Spielergebnissen (3-1-0 Punkteschema)
    """

    def update_team_stats(self, team: TeamStats, game: GameOutcome, is_home: bool) -> None:
        """
        Aktualisiert die Statistiken eines Teams basierend auf einem Spielergebnis

        Args:
            team: Das TeamStats-Objekt, dessen Statistiken aktualisiert werden sollen
            game: Ergebnis oder Tipp des Spiels
            is_home: True wenn das Team Heimmannschaft ist, False wenn Auswärtsmannschaft
        """
        team.games_played += 1

        if is_home:
            goals_for, goals_against = game.home_score, game.away_score
        else:
            goals_for, goals_against = game.away_score, game.home_score

        team.goals_for += goals_for
        team.goals_against += goals_against

        if goals_for > goals_against:
            self._handle_win(team)
        elif goals_for == goals_against:
            self._handle_draw(team)
        else:
            self._handle_loss(team)

    def _handle_win(self, team: TeamStats) -> None:
        team.win += 1
        team.points += POINTS_FOR_WIN

    def _handle_draw(self, team: TeamStats) -> None:
        team.draw += 1
        team.points += POINTS_FOR_DRAW

    def _handle_loss(self, team: TeamStats) -> None:
        team.loss += 1
        team.points += POINTS_FOR_LOSS

    def calculate_standings_from_games(self, team_ids: List[str], games: Iterable[GameOutcome],
                                       group: str = None) -> Dict[str, TeamStats]:
        """
        Berechnet die Statistiken aller Teams einer Gruppe aus einer Liste von Spielen

        Spiele ohne vollständiges Ergebnis werden übersprungen, ebenso Spiele mit
        Teams, die nicht zur Gruppe gehören.

        Args:
            team_ids: Die Teams der Gruppe in ihrer ursprünglichen Reihenfolge
            games: Ergebnisse oder Tipps der Gruppenspiele
            group: Optionaler Gruppenbuchstabe für die TeamStats-Objekte

        Returns:
            Dictionary von Team-ID zu TeamStats (Reihenfolge wie team_ids)
        """
        standings = {team_id: TeamStats(team_id=team_id, group=group) for team_id in team_ids}

        for game in games:
            if not game.has_score:
                continue
            if game.home_team not in standings or game.away_team not in standings:
                logger.warning(f"Game {game.game_id} ({game.home_team} vs {game.away_team}) "
                               f"involves a team outside group {group or '?'}, ignoring it")
                continue

            self.update_team_stats(standings[game.home_team], game, is_home=True)
            self.update_team_stats(standings[game.away_team], game, is_home=False)

        return standings
