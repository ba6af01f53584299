"""
Bracket Service für die Prode-Turnierlogik
Übersetzt JSON-Payloads in Modelle und ruft die Auflösungs-Engine auf
"""

from typing import Any, Dict, List, Optional
import logging

from models import (
    GameOutcome, GroupDefinition, GroupFinishRule, PlayoffGame, PlayoffRound, SlotRule, TeamStats,
    TeamWinnerRule, _is_score, parse_slot_rule
)
from constants import GROUP_GAMES_PER_GROUP_OF_FOUR
from app.exceptions import NotFoundError, ValidationError
from repositories.third_place_rules_repository import ThirdPlaceRulesRepository
from utils.playoff_resolver import PlayoffResolver
from utils.playoff_structure import build_default_bracket
from utils.third_place import resolve_third_place_slots

OUTCOME_SCORE_FIELDS = ('home_score', 'away_score', 'home_penalty_score', 'away_penalty_score')


class BracketService:
    """
    Service für Tabellen und Playoff-Zuordnungen
    Hält keinen Zustand zwischen Aufrufen, jede Anfrage wird komplett neu berechnet
    """

    def __init__(self, rules_repository: ThirdPlaceRulesRepository):
        self.rules_repository = rules_repository
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    # --- Öffentliche Operationen ---

    def calculate_standings(self, payload: Dict[str, Any]) -> Dict[str, Optional[List[Dict]]]:
        """
        Berechnet die Tabellen aller Gruppen

        Args:
            payload: {"groups": [...], "results": [...], "guesses": [...], "conduct_scores": {...}}

        Returns:
            Gruppenbuchstabe -> Liste der Tabellenzeilen oder None (noch nicht auflösbar)
        """
        resolver = PlayoffResolver(
            self._parse_groups(payload),
            [],
            self._parse_outcomes(payload.get('results'), 'results'),
            self._parse_outcomes(payload.get('guesses'), 'guesses'),
            conduct_scores=self._parse_conduct_scores(payload.get('conduct_scores'))
        )
        return self._standings_to_dict(resolver.group_standings())

    def resolve_playoff_slots(self, tournament_id: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        """
        Löst die Teams aller Playoff-Spiele auf

        Ohne "rounds" im Payload wird der Standard-Turnierbaum (vier Gruppen) verwendet.
        Die Drittplatzierten-Regeln werden für tournament_id geladen.
        """
        groups = self._parse_groups(payload)
        rounds_data = payload.get('rounds')
        playoff_rounds = self._parse_rounds(rounds_data) if rounds_data is not None else build_default_bracket()

        rules_map = self.rules_repository.get_rules_map(tournament_id)
        if not rules_map:
            self.logger.info(f"Tournament {tournament_id} has no third-place rules, third places use group positions")

        resolver = PlayoffResolver(
            groups,
            playoff_rounds,
            self._parse_outcomes(payload.get('results'), 'results'),
            self._parse_outcomes(payload.get('guesses'), 'guesses'),
            third_place_rules=rules_map or None,
            conduct_scores=self._parse_conduct_scores(payload.get('conduct_scores'))
        )
        assignments = resolver.resolve_all()

        open_slots = sum(1 for a in assignments.values() if not a.is_complete)
        self.logger.debug(f"Tournament {tournament_id}: {len(assignments)} playoff games, {open_slots} with open slots")

        return {
            'standings': self._standings_to_dict(resolver.group_standings()),
            'assignments': {game_id: a.to_dict() for game_id, a in assignments.items()},
        }

    def resolve_third_place_slots(self, tournament_id: str, payload: Dict[str, Any]) -> Dict[str, Optional[str]]:
        """
        Ordnet die Drittplatzierten den Positionen im Turnierbaum zu

        Args:
            payload: {"key": "ABCD", "third_place": {"A": "team-id" | null, ...}}

        Raises:
            NotFoundError: Wenn für das Turnier keine Regeln existieren
        """
        rules_map = self.rules_repository.get_rules_map(tournament_id)
        if not rules_map:
            raise NotFoundError("Third-place rules", tournament_id)

        key = payload.get('key')
        if key is not None:
            if not isinstance(key, str):
                raise ValidationError("key must be a string of group letters", field='key')
            key = ''.join(sorted(key.upper()))
            if key not in rules_map:
                self.logger.warning(f"Tournament {tournament_id}: no rule mapping for combination '{key}'")

        third_place = payload.get('third_place') or {}
        if not isinstance(third_place, dict):
            raise ValidationError("third_place must be an object keyed by group letter", field='third_place')

        third_place_teams: Dict[str, Optional[TeamStats]] = {}
        for letter, team_id in third_place.items():
            if team_id is not None and not isinstance(team_id, str):
                raise ValidationError(f"Third-placed team of group {letter} must be a string", field='third_place')
            third_place_teams[letter.upper()] = TeamStats(team_id=team_id, group=letter.upper()) if team_id else None

        return resolve_third_place_slots(key, third_place_teams, rules_map)

    # --- Payload-Parsing ---

    def _parse_groups(self, payload: Dict[str, Any]) -> List[GroupDefinition]:
        if not isinstance(payload, dict):
            raise ValidationError("Request body must be a JSON object")
        groups_data = payload.get('groups')
        if not isinstance(groups_data, list):
            raise ValidationError("groups must be a list", field='groups')

        groups = []
        seen_letters = set()
        for entry in groups_data:
            if not isinstance(entry, dict):
                raise ValidationError("Each group must be an object", field='groups')
            letter = entry.get('group_letter') or entry.get('group')
            if not isinstance(letter, str) or not letter.strip():
                raise ValidationError("Group letter is required", field='groups')
            letter = letter.strip().upper()
            if letter in seen_letters:
                raise ValidationError(f"Group {letter} is defined twice", field='groups')
            seen_letters.add(letter)

            team_ids = entry.get('team_ids', entry.get('teams'))
            game_ids = entry.get('game_ids', entry.get('games', []))
            if not isinstance(team_ids, list) or not all(isinstance(t, str) for t in team_ids):
                raise ValidationError(f"Group {letter}: team_ids must be a list of strings", field='team_ids')
            if not isinstance(game_ids, list):
                raise ValidationError(f"Group {letter}: game_ids must be a list", field='game_ids')
            if len(team_ids) == 4 and len(game_ids) != GROUP_GAMES_PER_GROUP_OF_FOUR:
                self.logger.warning(f"Group {letter} lists {len(game_ids)} games, "
                                    f"a group of four plays {GROUP_GAMES_PER_GROUP_OF_FOUR}")

            head_to_head = entry.get('head_to_head', entry.get('sort_by_games_between_teams', False))
            if not isinstance(head_to_head, bool):
                raise ValidationError(f"Group {letter}: head_to_head must be true or false", field='head_to_head')

            groups.append(GroupDefinition(
                group_letter=letter,
                team_ids=team_ids,
                game_ids=[str(game_id) for game_id in game_ids],
                head_to_head=head_to_head,
                group_id=entry.get('group_id')
            ))
        return groups

    def _parse_outcomes(self, data: Any, field_name: str) -> Dict[str, GameOutcome]:
        """Ergebnisse oder Tipps, als Liste oder als Objekt nach game_id"""
        if data is None:
            return {}
        if isinstance(data, dict):
            data = [dict(entry, game_id=game_id) if isinstance(entry, dict) else entry
                    for game_id, entry in data.items()]
        if not isinstance(data, list):
            raise ValidationError(f"{field_name} must be a list or an object", field=field_name)

        outcomes: Dict[str, GameOutcome] = {}
        for entry in data:
            outcome = self._parse_outcome(entry, field_name)
            if outcome.game_id in outcomes:
                self.logger.warning(f"Duplicate {field_name} entry for game {outcome.game_id}, keeping the first one")
                continue
            outcomes[outcome.game_id] = outcome
        return outcomes

    def _parse_outcome(self, entry: Any, field_name: str) -> GameOutcome:
        if not isinstance(entry, dict) or entry.get('game_id') is None:
            raise ValidationError(f"Each {field_name} entry needs a game_id", field=field_name)

        for score_field in OUTCOME_SCORE_FIELDS:
            value = entry.get(score_field)
            if value is not None and (not _is_score(value) or value < 0):
                raise ValidationError(f"{score_field} of game {entry['game_id']} must be a non-negative integer",
                                      field=score_field)

        for team_field in ('home_team', 'away_team'):
            value = entry.get(team_field)
            if value is not None and not isinstance(value, str):
                raise ValidationError(f"{team_field} of game {entry['game_id']} must be a string", field=team_field)

        game_number = entry.get('game_number')
        if game_number is not None and not _is_score(game_number):
            raise ValidationError(f"game_number of game {entry['game_id']} must be an integer", field='game_number')

        return GameOutcome(
            game_id=str(entry['game_id']),
            home_team=entry.get('home_team'),
            away_team=entry.get('away_team'),
            home_score=entry.get('home_score'),
            away_score=entry.get('away_score'),
            home_penalty_score=entry.get('home_penalty_score'),
            away_penalty_score=entry.get('away_penalty_score'),
            home_penalty_winner=bool(entry.get('home_penalty_winner', False)),
            away_penalty_winner=bool(entry.get('away_penalty_winner', False)),
            game_number=game_number
        )

    def _parse_conduct_scores(self, data: Any) -> Optional[Dict[str, int]]:
        if data is None:
            return None
        if not isinstance(data, dict) or not all(_is_score(v) for v in data.values()):
            raise ValidationError("conduct_scores must map team ids to integers", field='conduct_scores')
        return data

    def _parse_rounds(self, rounds_data: Any) -> List[PlayoffRound]:
        if not isinstance(rounds_data, list):
            raise ValidationError("rounds must be a list", field='rounds')

        rounds = []
        for index, entry in enumerate(rounds_data, start=1):
            if not isinstance(entry, dict) or not isinstance(entry.get('games', []), list):
                raise ValidationError("Each round must be an object with a list of games", field='rounds')
            order = entry.get('order', index)
            if not _is_score(order):
                raise ValidationError("Round order must be an integer", field='order')
            rounds.append(PlayoffRound(
                round_name=entry.get('round_name') or entry.get('name') or f"Round {index}",
                order=order,
                games=[self._parse_playoff_game(game) for game in entry.get('games', [])]
            ))
        return rounds

    def _parse_playoff_game(self, entry: Any) -> PlayoffGame:
        if not isinstance(entry, dict):
            raise ValidationError("Each playoff game must be an object", field='games')
        game_number = entry.get('game_number')
        if not _is_score(game_number):
            raise ValidationError("Each playoff game needs an integer game_number", field='game_number')

        return PlayoffGame(
            game_id=str(entry.get('game_id', game_number)),
            game_number=game_number,
            home_rule=self._parse_slot_rule(entry.get('home_rule'), game_number),
            away_rule=self._parse_slot_rule(entry.get('away_rule'), game_number),
            home_team=entry.get('home_team'),
            away_team=entry.get('away_team')
        )

    def _parse_slot_rule(self, data: Any, game_number: int) -> Optional[SlotRule]:
        """
        Slot-Regel als Objekt ({"group": "A", "position": 1} / {"game": 57, "winner": true})
        oder als Platzhalter-Code ("A1", "W(57)")
        """
        if data is None:
            return None
        if isinstance(data, str):
            rule = parse_slot_rule(data)
            if rule is None:
                # Unbekannte Codes bleiben offen statt die Anfrage abzulehnen
                self.logger.warning(f"Game {game_number}: unrecognised slot code '{data}'")
            return rule
        if isinstance(data, dict):
            if 'game' in data:
                if not _is_score(data['game']):
                    raise ValidationError(f"Game {game_number}: slot rule 'game' must be an integer", field='game')
                return TeamWinnerRule(game=data['game'], winner=bool(data.get('winner', True)))
            if 'group' in data and 'position' in data:
                if not isinstance(data['group'], str) or not _is_score(data['position']):
                    raise ValidationError(f"Game {game_number}: invalid group slot rule", field='position')
                return GroupFinishRule(group=data['group'], position=data['position'])
        raise ValidationError(f"Game {game_number}: malformed slot rule {data!r}", field='slot_rule')

    @staticmethod
    def _standings_to_dict(standings: Dict[str, Optional[List[TeamStats]]]) -> Dict[str, Optional[List[Dict]]]:
        return {
            letter: [team_stat.to_dict() for team_stat in table] if table is not None else None
            for letter, table in standings.items()
        }
