import logging
from typing import Dict, Iterable, List, Mapping, Optional

from models import (
    GameOutcome, GroupFinishRule, PlayoffGame, SlotAssignment, SlotRule, TeamStats, TeamWinnerRule
)
from constants import THIRD_PLACE_POSITION
from .team_resolution import get_winner, get_loser
from .third_place import (
    ThirdPlaceRuleTable, build_qualifying_groups_key, get_third_placed_team, resolve_third_place_slots
)

logger = logging.getLogger(__name__)

# game_id -> {'home': SlotRule, 'away': SlotRule}
SlotRules = Mapping[str, Mapping[str, Optional[SlotRule]]]


def build_slot_rules(playoff_games: Iterable[PlayoffGame]) -> Dict[str, Dict[str, Optional[SlotRule]]]:
    """Slot rule map for a list of playoff games, keyed by game id."""
    return {game.game_id: {'home': game.home_rule, 'away': game.away_rule} for game in playoff_games}


def _is_third_place_rule(rule: Optional[SlotRule]) -> bool:
    return isinstance(rule, GroupFinishRule) and rule.position == THIRD_PLACE_POSITION


def resolve_playoff_slots(
    slot_rules: SlotRules,
    group_standings_by_letter: Mapping[str, Optional[List[TeamStats]]],
    game_outcomes: Mapping[int, GameOutcome],
    third_place_rules: Optional[ThirdPlaceRuleTable] = None
) -> Dict[str, SlotAssignment]:
    """
    Resolves the teams of each playoff game from its slot rules.

    Group rules ('A1') take the team at that position of a resolved group.
    Game rules ('W(57)', 'L(57)') take the winner or loser of the referenced
    outcome. When `third_place_rules` is given, position-3 rules are filled by the
    third-place qualifier selection, their `group` field being the bracket label.

    Every game gets an entry; a team stays None until it can be determined.
    """
    standings = {letter.upper(): table for letter, table in group_standings_by_letter.items()}

    third_place_slots: Dict[str, Optional[str]] = {}
    if third_place_rules is not None:
        third_place_slots = _resolve_third_place_labels(slot_rules, standings, third_place_rules)

    assignments: Dict[str, SlotAssignment] = {}
    for game_id, rules in slot_rules.items():
        home_team = _resolve_slot(rules.get('home'), standings, game_outcomes,
                                  third_place_slots, third_place_rules is not None, game_id)
        away_team = _resolve_slot(rules.get('away'), standings, game_outcomes,
                                  third_place_slots, third_place_rules is not None, game_id)
        assignments[game_id] = SlotAssignment(game_id=game_id, home_team=home_team, away_team=away_team)

    return assignments


def _resolve_third_place_labels(
    slot_rules: SlotRules,
    standings: Mapping[str, Optional[List[TeamStats]]],
    third_place_rules: ThirdPlaceRuleTable
) -> Dict[str, Optional[str]]:
    labels = [
        rule.group
        for rules in slot_rules.values()
        for rule in (rules.get('home'), rules.get('away'))
        if _is_third_place_rule(rule)
    ]
    if not labels:
        return {}

    key = build_qualifying_groups_key(standings, len(labels))
    if key is not None and key not in third_place_rules:
        logger.warning(f"No third-place rule mapping for combination '{key}'")

    third_placed = {letter: get_third_placed_team(table) for letter, table in standings.items()}
    return resolve_third_place_slots(key, third_placed, third_place_rules, positions=labels)


def _resolve_slot(
    rule: Optional[SlotRule],
    standings: Mapping[str, Optional[List[TeamStats]]],
    game_outcomes: Mapping[int, GameOutcome],
    third_place_slots: Dict[str, Optional[str]],
    third_place_enabled: bool,
    game_id: str
) -> Optional[str]:
    if rule is None:
        return None

    if isinstance(rule, GroupFinishRule):
        if third_place_enabled and rule.position == THIRD_PLACE_POSITION:
            return third_place_slots.get(rule.group)

        group_letter = rule.group.upper()
        if group_letter not in standings:
            logger.warning(f"Game {game_id}: slot rule {rule.to_code()} references unknown group '{rule.group}'")
            return None
        table = standings[group_letter]
        if table is None:
            return None
        if rule.position < 1 or rule.position > len(table):
            logger.warning(f"Game {game_id}: position {rule.position} is out of range for group {group_letter}")
            return None
        return table[rule.position - 1].team_id

    if isinstance(rule, TeamWinnerRule):
        outcome = game_outcomes.get(rule.game)
        return get_winner(outcome) if rule.winner else get_loser(outcome)

    logger.warning(f"Game {game_id}: unsupported slot rule {rule!r}")
    return None
