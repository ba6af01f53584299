"""
Static playoff structure for tournaments with four groups of four
Defines the slot rules used for each playoff stage
"""

from typing import Dict, List

from models import PlayoffGame, PlayoffRound, parse_slot_rule
from constants import (
    QUARTERFINAL_1, QUARTERFINAL_2, QUARTERFINAL_3, QUARTERFINAL_4,
    SEMIFINAL_1, SEMIFINAL_2, THIRD_PLACE_GAME, FINAL
)

# Static playoff team mapping structure
# Which placeholders are used for each playoff stage
playoff_team_map: Dict[str, Dict[int, List[str]]] = {
    'Quarter-Finals': {
        QUARTERFINAL_1: ['A1', 'B2'],
        QUARTERFINAL_2: ['B1', 'A2'],
        QUARTERFINAL_3: ['C1', 'D2'],
        QUARTERFINAL_4: ['D1', 'C2']
    },
    'Semi-Finals': {
        SEMIFINAL_1: [f'W({QUARTERFINAL_1})', f'W({QUARTERFINAL_3})'],
        SEMIFINAL_2: [f'W({QUARTERFINAL_2})', f'W({QUARTERFINAL_4})']
    },
    'Third Place': {
        THIRD_PLACE_GAME: [f'L({SEMIFINAL_1})', f'L({SEMIFINAL_2})']
    },
    'Final': {
        FINAL: [f'W({SEMIFINAL_1})', f'W({SEMIFINAL_2})']
    }
}


def build_default_bracket() -> List[PlayoffRound]:
    """
    Playoff rounds for the static structure above. Game ids are the game
    numbers as strings.
    """
    rounds = []
    for order, (round_name, games) in enumerate(playoff_team_map.items(), start=1):
        rounds.append(PlayoffRound(
            round_name=round_name,
            order=order,
            games=[
                PlayoffGame(
                    game_id=str(game_number),
                    game_number=game_number,
                    home_rule=parse_slot_rule(home_code),
                    away_rule=parse_slot_rule(away_code)
                )
                for game_number, (home_code, away_code) in games.items()
            ]
        ))
    return rounds
