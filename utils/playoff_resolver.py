"""
PlayoffResolver - Zentralisierte Klasse zur Auflösung der Playoff-Teams

Diese Klasse kapselt die komplette Logik, um aus Gruppenergebnissen (oder Tipps)
und Playoff-Ergebnissen die Teams jedes Playoff-Spiels über alle Runden hinweg
zu bestimmen, inklusive Platzhaltern wie 'A1', 'W(25)' oder 'L(29)'.
"""

import dataclasses
from typing import Dict, List, Optional, Tuple

from models import (
    GameOutcome, GroupDefinition, GroupFinishRule, PlayoffGame, PlayoffRound, SlotAssignment, TeamStats,
    parse_slot_rule
)
from .standings import calculate_group_standings
from .playoff_mapping import build_slot_rules, resolve_playoff_slots
from .team_resolution import get_winner, get_loser
from .third_place import ThirdPlaceRuleTable


class PlayoffResolver:
    """
    Zentrale Klasse zur Auflösung der Playoff-Teams.

    Die Runden werden in ihrer Reihenfolge aufgelöst; jedes Spiel einer Runde
    bezieht sich nur auf Gruppentabellen oder auf bereits aufgelöste Spiele
    früherer Runden, daher genügt ein Durchlauf pro Runde.
    """

    def __init__(
        self,
        groups: List[GroupDefinition],
        playoff_rounds: List[PlayoffRound],
        results: Optional[Dict[str, GameOutcome]] = None,
        guesses: Optional[Dict[str, GameOutcome]] = None,
        third_place_rules: Optional[ThirdPlaceRuleTable] = None,
        conduct_scores: Optional[Dict[str, int]] = None
    ):
        """
        Initialisiert den PlayoffResolver mit den notwendigen Daten.

        Args:
            groups: Gruppendefinitionen (Teams, erwartete Spiele, Tie-Break-Modus)
            playoff_rounds: Playoff-Runden mit ihren Slot-Regeln
            results: Offizielle Ergebnisse nach game_id
            guesses: Tipps des Benutzers nach game_id
            third_place_rules: Regeltabelle für die Drittplatzierten (optional)
            conduct_scores: Fair-Play-Punkte nach Team (optional)
        """
        self.groups = groups
        self.playoff_rounds = sorted(playoff_rounds, key=lambda r: r.order)
        self.results = results or {}
        self.guesses = guesses or {}
        self.third_place_rules = third_place_rules
        self.conduct_scores = conduct_scores
        self._group_standings: Optional[Dict[str, Optional[List[TeamStats]]]] = None
        self._assignments: Optional[Dict[str, SlotAssignment]] = None
        self._outcomes_by_number: Dict[int, GameOutcome] = {}

    def group_standings(self) -> Dict[str, Optional[List[TeamStats]]]:
        """
        Tabellen aller Gruppen nach Gruppenbuchstabe; None für Gruppen, die noch
        nicht vollständig gespielt (oder getippt) sind.
        """
        if self._group_standings is None:
            self._group_standings = {
                group.group_letter.upper(): calculate_group_standings(
                    group, self.results, self.guesses, self.conduct_scores)
                for group in self.groups
            }
        return self._group_standings

    def resolve_round(self, playoff_round: PlayoffRound) -> Dict[str, SlotAssignment]:
        """
        Löst die Teams einer einzelnen Runde auf. Ergebnisse früherer Runden
        müssen bereits über resolve_all() bekannt sein.
        """
        assignments = resolve_playoff_slots(
            build_slot_rules(playoff_round.games),
            self.group_standings(),
            self._outcomes_by_number,
            self.third_place_rules
        )

        for game in playoff_round.games:
            assignment = assignments[game.game_id]
            # Bereits feststehende Teams haben Vorrang vor berechneten
            if game.home_team:
                assignment.home_team = game.home_team
            if game.away_team:
                assignment.away_team = game.away_team
        return assignments

    def resolve_all(self) -> Dict[str, SlotAssignment]:
        """
        Löst alle Runden nacheinander auf.

        Returns:
            Dictionary von game_id zu SlotAssignment für alle Playoff-Spiele
        """
        if self._assignments is not None:
            return self._assignments

        self._outcomes_by_number = {}
        all_assignments: Dict[str, SlotAssignment] = {}

        for playoff_round in self.playoff_rounds:
            round_assignments = self.resolve_round(playoff_round)
            all_assignments.update(round_assignments)

            for game in playoff_round.games:
                outcome = self._knockout_outcome(game, round_assignments[game.game_id])
                if outcome is not None:
                    self._outcomes_by_number[game.game_number] = outcome

        self._assignments = all_assignments
        return all_assignments

    def _knockout_outcome(self, game: PlayoffGame, assignment: SlotAssignment) -> Optional[GameOutcome]:
        """
        Ergebnis (bevorzugt) oder Tipp eines K.o.-Spiels. Fehlende Teams auf dem
        Datensatz werden aus der berechneten Zuordnung ergänzt.
        """
        outcome = self.results.get(game.game_id)
        if outcome is None or not outcome.has_score:
            outcome = self.guesses.get(game.game_id)
        if outcome is None or not outcome.has_score:
            return None

        return dataclasses.replace(
            outcome,
            home_team=game.home_team or outcome.home_team or assignment.home_team,
            away_team=game.away_team or outcome.away_team or assignment.away_team,
            game_number=game.game_number
        )

    def get_all_resolutions(self) -> Dict[str, Optional[str]]:
        """
        Gibt alle Platzhalter-zu-Team-Zuordnungen zurück ('A1', 'W(25)', ...).

        Nützlich für Debugging und für die Anzeige des Turnierbaums.
        """
        self.resolve_all()
        resolutions: Dict[str, Optional[str]] = {}

        for group_letter, table in self.group_standings().items():
            if not table:
                continue
            for team_stat in table:
                resolutions[f"{group_letter}{team_stat.position}"] = team_stat.team_id

        for playoff_round in self.playoff_rounds:
            for game in playoff_round.games:
                outcome = self._outcomes_by_number.get(game.game_number)
                resolutions[f"W({game.game_number})"] = get_winner(outcome)
                resolutions[f"L({game.game_number})"] = get_loser(outcome)

        return resolutions

    def get_resolved_code(self, placeholder_code: Optional[str]) -> Optional[str]:
        """
        Hauptmethode zur Auflösung eines Team-Platzhalters.

        Args:
            placeholder_code: Der aufzulösende Platzhalter (z.B. 'A1', 'W(25)')

        Returns:
            Die Team-ID oder None, falls keine Auflösung möglich ist. Codes, die
            kein Platzhalter sind, gelten bereits als Team-ID. Ein Gruppencode wie
            'B12' ist nur dann ein Platzhalter, wenn Gruppe B existiert und
            mindestens 12 Teams hat; sonst wird er als Team-ID zurückgegeben.
        """
        if not placeholder_code:
            return None
        code = placeholder_code.strip()
        resolutions = self.get_all_resolutions()
        if code.upper() in resolutions:
            return resolutions[code.upper()]

        rule = parse_slot_rule(code)
        if isinstance(rule, GroupFinishRule):
            group_sizes = {group.group_letter.upper(): len(group.team_ids) for group in self.groups}
            if not 1 <= rule.position <= group_sizes.get(rule.group, 0):
                return code
        if rule is not None:
            return None
        return code

    def resolve_game_participants(self, game: PlayoffGame) -> Tuple[Optional[str], Optional[str]]:
        """
        Löst beide Teilnehmer eines Spiels auf.

        Returns:
            Tupel mit (Heimteam, Auswärtsteam), None für noch offene Plätze
        """
        assignment = self.resolve_all().get(game.game_id)
        if assignment is None:
            return None, None
        return assignment.home_team, assignment.away_team


# Convenience-Funktion für einfache Nutzung
def resolve_playoff_code(
    placeholder_code: str,
    groups: List[GroupDefinition],
    playoff_rounds: List[PlayoffRound],
    results: Optional[Dict[str, GameOutcome]] = None,
    guesses: Optional[Dict[str, GameOutcome]] = None,
    third_place_rules: Optional[ThirdPlaceRuleTable] = None
) -> Optional[str]:
    """
    Convenience-Funktion zur direkten Auflösung eines Playoff-Codes.
    """
    resolver = PlayoffResolver(groups, playoff_rounds, results, guesses, third_place_rules)
    return resolver.get_resolved_code(placeholder_code)
