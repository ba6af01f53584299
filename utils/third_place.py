"""
Third-place qualifier selection.

When only some of the third-placed teams advance, the bracket slot each of them
fills depends on which groups they come from. The assignment table is configured
per tournament (see repositories.third_place_rules_repository) and is keyed by
the sorted letters of the qualifying groups, e.g. 'ABCD'.
"""

from typing import Dict, Iterable, List, Optional, Tuple

from models import TeamStats
from constants import THIRD_PLACE_POSITION

ThirdPlaceRuleMapping = Dict[str, str]
ThirdPlaceRuleTable = Dict[str, ThirdPlaceRuleMapping]


def get_third_placed_team(standings: Optional[List[TeamStats]]) -> Optional[TeamStats]:
    if not standings or len(standings) < THIRD_PLACE_POSITION:
        return None
    return standings[THIRD_PLACE_POSITION - 1]


def rank_third_placed_teams(
    standings_by_group: Dict[str, Optional[List[TeamStats]]]
) -> List[Tuple[str, TeamStats]]:
    """
    Third-placed teams of all resolved groups, best first.
    Ordered by points, goal difference, goals for, conduct score (lower first) and group letter.
    """
    third_teams = []
    for group_letter, standings in standings_by_group.items():
        team = get_third_placed_team(standings)
        if team is not None:
            third_teams.append((group_letter.upper(), team))

    third_teams.sort(key=lambda item: (
        -item[1].points,
        -item[1].goal_difference,
        -item[1].goals_for,
        item[1].conduct_score,
        item[0]
    ))
    return third_teams


def build_qualifying_groups_key(
    standings_by_group: Dict[str, Optional[List[TeamStats]]],
    qualifier_count: int
) -> Optional[str]:
    """
    Combination key of the groups whose third-placed teams qualify, e.g. 'ABCD'.
    None until every group has a third-placed team, since the ranking across
    groups is only meaningful once all of them are finished.
    """
    if qualifier_count <= 0 or not standings_by_group:
        return None

    third_teams = rank_third_placed_teams(standings_by_group)
    if len(third_teams) != len(standings_by_group):
        return None

    qualifying_letters = sorted(letter for letter, _ in third_teams[:qualifier_count])
    return ''.join(qualifying_letters)


def _all_positions(rule_table: Optional[ThirdPlaceRuleTable]) -> List[str]:
    positions: List[str] = []
    for mapping in (rule_table or {}).values():
        for position in mapping:
            if position not in positions:
                positions.append(position)
    return positions


def resolve_third_place_slots(
    qualifying_groups_key: Optional[str],
    third_place_standings_by_group: Dict[str, Optional[TeamStats]],
    rule_table: Optional[ThirdPlaceRuleTable],
    positions: Optional[Iterable[str]] = None
) -> Dict[str, Optional[str]]:
    """
    Assigns third-placed teams to abstract bracket positions.

    Args:
        qualifying_groups_key: Sorted letters of the qualifying groups, or None if not known yet
        third_place_standings_by_group: Third-placed team per group letter (None = unresolved)
        rule_table: Combination key -> {position label -> group letter}
        positions: Labels to return; defaults to every label found in the table

    Returns:
        Position label -> team id, None where the slot cannot be filled. A key
        missing from the table leaves every position unresolved.
    """
    wanted = list(positions) if positions is not None else _all_positions(rule_table)
    resolved: Dict[str, Optional[str]] = {position: None for position in wanted}

    if not qualifying_groups_key or not rule_table:
        return resolved
    mapping = rule_table.get(qualifying_groups_key)
    if not mapping:
        return resolved

    third_by_letter = {letter.upper(): team for letter, team in third_place_standings_by_group.items()}
    for position in wanted:
        group_letter = mapping.get(position)
        team = third_by_letter.get(group_letter.upper()) if group_letter else None
        resolved[position] = team.team_id if team is not None else None

    return resolved
