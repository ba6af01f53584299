"""
Tests for the playoff slot assigner (utils/playoff_mapping.py).
"""

import pytest
from unittest.mock import patch

from models import GroupFinishRule, PlayoffGame, TeamStats, TeamWinnerRule, parse_slot_rule
from utils.playoff_mapping import build_slot_rules, resolve_playoff_slots
from conftest import make_outcome


def _table(letter, size=4):
    return [TeamStats(team_id=f"{letter}-{i}", group=letter, position=i, is_complete=True)
            for i in range(1, size + 1)]


@pytest.fixture
def standings():
    return {"A": _table("A"), "B": _table("B"), "C": None}


class TestResolvePlayoffSlots:

    def test_group_positions(self, standings):
        rules = {"25": {'home': GroupFinishRule("A", 1), 'away': GroupFinishRule("B", 2)}}

        assignments = resolve_playoff_slots(rules, standings, {})

        assert assignments["25"].to_dict() == {'game_id': "25", 'home_team': "A-1", 'away_team': "B-2"}
        assert assignments["25"].is_complete

    def test_unresolved_group_leaves_slot_open(self, standings):
        rules = {"27": {'home': GroupFinishRule("C", 1), 'away': GroupFinishRule("A", 2)}}

        assignment = resolve_playoff_slots(rules, standings, {})["27"]

        assert assignment.home_team is None
        assert assignment.away_team == "A-2"
        assert not assignment.is_complete

    def test_winner_and_loser_of_decided_game(self, standings):
        rules = {"61": {'home': TeamWinnerRule(57, winner=True), 'away': TeamWinnerRule(57, winner=False)}}
        outcomes = {57: make_outcome("57", "X", "Y", 3, 1)}

        assignment = resolve_playoff_slots(rules, standings, outcomes)["61"]

        assert (assignment.home_team, assignment.away_team) == ("X", "Y")

    def test_penalty_decided_tie(self, standings):
        rules = {"61": {'home': TeamWinnerRule(57), 'away': TeamWinnerRule(58)}}
        outcomes = {
            57: make_outcome("57", "X", "Y", 1, 1, home_penalty_score=5, away_penalty_score=4),
            58: make_outcome("58", "P", "Q", 0, 0, away_penalty_winner=True),
        }

        assignment = resolve_playoff_slots(rules, standings, outcomes)["61"]

        assert (assignment.home_team, assignment.away_team) == ("X", "Q")

    def test_undecided_tie_leaves_slot_open(self, standings):
        rules = {"61": {'home': TeamWinnerRule(57), 'away': TeamWinnerRule(57, winner=False)}}
        outcomes = {57: make_outcome("57", "X", "Y", 2, 2)}

        assignment = resolve_playoff_slots(rules, standings, outcomes)["61"]

        assert assignment.home_team is None
        assert assignment.away_team is None

    def test_missing_source_game(self, standings):
        rules = {"61": {'home': TeamWinnerRule(99), 'away': None}}

        assignment = resolve_playoff_slots(rules, standings, {})["61"]

        assert assignment.home_team is None
        assert assignment.away_team is None

    def test_position_out_of_range_is_logged(self, standings):
        rules = {"25": {'home': GroupFinishRule("A", 5), 'away': GroupFinishRule("A", 0)}}

        with patch('utils.playoff_mapping.logger') as mock_logger:
            assignment = resolve_playoff_slots(rules, standings, {})["25"]

        assert assignment.home_team is None
        assert assignment.away_team is None
        assert mock_logger.warning.call_count == 2

    def test_unknown_group_is_logged(self, standings):
        rules = {"25": {'home': GroupFinishRule("Z", 1), 'away': GroupFinishRule("a", 1)}}

        with patch('utils.playoff_mapping.logger') as mock_logger:
            assignment = resolve_playoff_slots(rules, standings, {})["25"]

        assert assignment.home_team is None
        assert assignment.away_team == "A-1"
        mock_logger.warning.assert_called_once()

    def test_every_game_gets_an_entry(self, standings):
        rules = {"25": {'home': None, 'away': None}, "26": {'home': GroupFinishRule("B", 1), 'away': None}}

        assignments = resolve_playoff_slots(rules, standings, {})

        assert set(assignments) == {"25", "26"}


class TestThirdPlaceSlots:

    @pytest.fixture
    def six_groups(self):
        tables = {}
        for letter in "ABCDEF":
            table = _table(letter)
            # Third-placed teams of E and F are the best two
            table[2].points = 4 if letter in "EF" else 2
            tables[letter] = table
        return tables

    def test_third_place_labels_use_rule_table(self, six_groups):
        rules = {
            "37": {'home': GroupFinishRule("B", 1), 'away': GroupFinishRule("A/D/E/F", 3)},
            "38": {'home': GroupFinishRule("C", 1), 'away': GroupFinishRule("D/E/F", 3)},
        }
        rule_table = {"EF": {"A/D/E/F": "F", "D/E/F": "E"}}

        assignments = resolve_playoff_slots(rules, six_groups, {}, rule_table)

        assert assignments["37"].away_team == "F-3"
        assert assignments["38"].away_team == "E-3"

    def test_missing_combination_is_logged(self, six_groups):
        rules = {"37": {'home': GroupFinishRule("B", 1), 'away': GroupFinishRule("A/D/E/F", 3)}}

        with patch('utils.playoff_mapping.logger') as mock_logger:
            assignment = resolve_playoff_slots(rules, six_groups, {}, {"ABCD": {"A/D/E/F": "A"}})["37"]

        assert assignment.home_team == "B-1"
        assert assignment.away_team is None
        mock_logger.warning.assert_called_once()

    def test_unfinished_group_keeps_third_place_slots_open(self, six_groups):
        six_groups["A"] = None
        rules = {"37": {'home': GroupFinishRule("B", 1), 'away': GroupFinishRule("A/D/E/F", 3)}}

        assignment = resolve_playoff_slots(rules, six_groups, {}, {"EF": {"A/D/E/F": "F"}})["37"]

        assert assignment.away_team is None

    def test_without_rule_table_position_three_is_a_plain_group_position(self, six_groups):
        rules = {"25": {'home': GroupFinishRule("A", 3), 'away': GroupFinishRule("B", 3)}}

        assignment = resolve_playoff_slots(rules, six_groups, {})["25"]

        assert (assignment.home_team, assignment.away_team) == ("A-3", "B-3")


class TestSlotRuleParsing:

    def test_build_slot_rules(self):
        games = [PlayoffGame(game_id="25", game_number=25, home_rule=parse_slot_rule("A1"),
                             away_rule=parse_slot_rule("W(57)"))]

        rules = build_slot_rules(games)

        assert rules == {"25": {'home': GroupFinishRule("A", 1), 'away': TeamWinnerRule(57, True)}}

    @pytest.mark.parametrize("code, expected", [
        ("a2", GroupFinishRule("A", 2)),
        ("L(61)", TeamWinnerRule(61, False)),
        (" W(7) ", TeamWinnerRule(7, True)),
        ("ARG", None),
        ("", None),
        (None, None),
    ])
    def test_parse_slot_rule(self, code, expected):
        assert parse_slot_rule(code) == expected

    def test_rule_codes(self):
        assert GroupFinishRule("b", 3).to_code() == "B3"
        assert TeamWinnerRule(61, False).to_code() == "L(61)"
