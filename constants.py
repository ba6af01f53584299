# Punkte pro Spiel (3-1-0)
POINTS_FOR_WIN = 3
POINTS_FOR_DRAW = 1
POINTS_FOR_LOSS = 0

# Tie-break modes for group standings
TIEBREAK_GOAL_DIFFERENCE = 'goal_difference'
TIEBREAK_HEAD_TO_HEAD = 'head_to_head'
TIEBREAK_MODES = [TIEBREAK_GOAL_DIFFERENCE, TIEBREAK_HEAD_TO_HEAD]

# Position, deren Slots über die Drittplatzierten-Regeln aufgelöst werden
THIRD_PLACE_POSITION = 3

# Playoff-Spielnummern Konstanten (4 Gruppen, 8 Teams im Viertelfinale)
QUARTERFINAL_1 = 25  # Viertelfinale 1
QUARTERFINAL_2 = 26  # Viertelfinale 2
QUARTERFINAL_3 = 27  # Viertelfinale 3
QUARTERFINAL_4 = 28  # Viertelfinale 4
SEMIFINAL_1 = 29     # Halbfinale 1
SEMIFINAL_2 = 30     # Halbfinale 2
THIRD_PLACE_GAME = 31  # Spiel um Platz 3
FINAL = 32           # Finale

# Gruppierte Spielnummern für einfachere Verwendung
QUARTERFINAL_GAME_NUMBERS = [QUARTERFINAL_1, QUARTERFINAL_2, QUARTERFINAL_3, QUARTERFINAL_4]
SEMIFINAL_GAME_NUMBERS = [SEMIFINAL_1, SEMIFINAL_2]
MEDAL_GAME_NUMBERS = [THIRD_PLACE_GAME, FINAL]
ALL_PLAYOFF_GAME_NUMBERS = QUARTERFINAL_GAME_NUMBERS + SEMIFINAL_GAME_NUMBERS + MEDAL_GAME_NUMBERS

# Anzahl der Gruppenspiele bei einer Vierergruppe (jeder gegen jeden)
GROUP_GAMES_PER_GROUP_OF_FOUR = 6

# Config defaults
DEFAULT_LOG_LEVEL = 'INFO'
THIRD_PLACE_RULES_FILE_SUFFIX = '.json'

# Legacy third-place assignment rules for the EURO format (6 groups, 4 third-place
# qualifiers). Keys are the sorted letters of the qualifying groups, values map the
# bracket label used in the slot rule to the group whose third-placed team fills it.
# New tournaments ship their own rule table instead.
LEGACY_THIRD_PLACE_RULES = {
    'ABCD': {'A/D/E/F': 'A', 'D/E/F': 'D', 'A/B/C/D': 'B', 'A/B/C': 'C'},
    'ABCE': {'A/D/E/F': 'A', 'D/E/F': 'E', 'A/B/C/D': 'B', 'A/B/C': 'C'},
    'ABCF': {'A/D/E/F': 'A', 'D/E/F': 'F', 'A/B/C/D': 'B', 'A/B/C': 'C'},
    'ABDE': {'A/D/E/F': 'D', 'D/E/F': 'E', 'A/B/C/D': 'A', 'A/B/C': 'B'},
    'ABDF': {'A/D/E/F': 'D', 'D/E/F': 'F', 'A/B/C/D': 'A', 'A/B/C': 'B'},
    'ABEF': {'A/D/E/F': 'E', 'D/E/F': 'F', 'A/B/C/D': 'B', 'A/B/C': 'A'},
    'ACDE': {'A/D/E/F': 'E', 'D/E/F': 'D', 'A/B/C/D': 'C', 'A/B/C': 'A'},
    'ACDF': {'A/D/E/F': 'F', 'D/E/F': 'D', 'A/B/C/D': 'C', 'A/B/C': 'A'},
    'ACEF': {'A/D/E/F': 'E', 'D/E/F': 'F', 'A/B/C/D': 'C', 'A/B/C': 'A'},
    'ADEF': {'A/D/E/F': 'E', 'D/E/F': 'F', 'A/B/C/D': 'D', 'A/B/C': 'A'},
    'BCDE': {'A/D/E/F': 'E', 'D/E/F': 'D', 'A/B/C/D': 'B', 'A/B/C': 'C'},
    'BCDF': {'A/D/E/F': 'F', 'D/E/F': 'D', 'A/B/C/D': 'C', 'A/B/C': 'B'},
    'BCEF': {'A/D/E/F': 'F', 'D/E/F': 'E', 'A/B/C/D': 'C', 'A/B/C': 'B'},
    'BDEF': {'A/D/E/F': 'F', 'D/E/F': 'E', 'A/B/C/D': 'D', 'A/B/C': 'B'},
    'CDEF': {'A/D/E/F': 'F', 'D/E/F': 'E', 'A/B/C/D': 'D', 'A/B/C': 'C'},
}
