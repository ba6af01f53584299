import re
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Union

# --- Dataclass for Team Statistics ---
@dataclass
class TeamStats:
    team_id: str
    group: Optional[str] = None
    games_played: int = 0; win: int = 0; draw: int = 0; loss: int = 0
    goals_for: int = 0; goals_against: int = 0; points: int = 0
    conduct_score: int = 0  # Disciplinary points, lower is better
    is_complete: bool = False
    position: int = 0  # 1-based rank inside the group once ordered

    @property
    def goal_difference(self) -> int:
        return self.goals_for - self.goals_against

    def to_dict(self) -> Dict:
        return {
            'team_id': self.team_id,
            'group': self.group,
            'position': self.position,
            'games_played': self.games_played,
            'win': self.win,
            'draw': self.draw,
            'loss': self.loss,
            'points': self.points,
            'goals_for': self.goals_for,
            'goals_against': self.goals_against,
            'goal_difference': self.goal_difference,
            'conduct_score': self.conduct_score,
            'is_complete': self.is_complete,
        }


def _is_score(value) -> bool:
    # bool is a subclass of int and never a valid score
    return isinstance(value, int) and not isinstance(value, bool)


@dataclass
class GameOutcome:
    """Official result or user guess for one fixture. Both share this shape."""
    game_id: str
    home_team: Optional[str] = None
    away_team: Optional[str] = None
    home_score: Optional[int] = None
    away_score: Optional[int] = None
    home_penalty_score: Optional[int] = None
    away_penalty_score: Optional[int] = None
    home_penalty_winner: bool = False
    away_penalty_winner: bool = False
    game_number: Optional[int] = None

    @property
    def has_score(self) -> bool:
        return _is_score(self.home_score) and _is_score(self.away_score)

    @property
    def has_penalty_score(self) -> bool:
        return _is_score(self.home_penalty_score) and _is_score(self.away_penalty_score)

    def involves(self, team_id: str) -> bool:
        return team_id in (self.home_team, self.away_team)


# --- Slot rules ---
GROUP_POSITION_PATTERN = re.compile(r"^([A-Za-z])(\d+)$")
GAME_RESULT_PATTERN = re.compile(r"^([WL])\((\d+)\)$")


@dataclass(frozen=True)
class GroupFinishRule:
    """Team finishing at `position` in `group`. For third-place slots `group` holds the bracket label."""
    group: str
    position: int

    def to_code(self) -> str:
        return f"{self.group.upper()}{self.position}"


@dataclass(frozen=True)
class TeamWinnerRule:
    """Winner (or loser, when `winner` is False) of the game keyed by `game`."""
    game: int
    winner: bool = True

    def to_code(self) -> str:
        return f"{'W' if self.winner else 'L'}({self.game})"


SlotRule = Union[GroupFinishRule, TeamWinnerRule]


def parse_slot_rule(code: Optional[str]) -> Optional[SlotRule]:
    """
    Parses a placeholder code ('A1', 'W(57)', 'L(61)') into a slot rule.
    Returns None for anything else, e.g. a final team id.
    """
    if not code:
        return None
    code = code.strip()
    match = GAME_RESULT_PATTERN.match(code)
    if match:
        return TeamWinnerRule(game=int(match.group(2)), winner=match.group(1) == 'W')
    match = GROUP_POSITION_PATTERN.match(code)
    if match:
        return GroupFinishRule(group=match.group(1).upper(), position=int(match.group(2)))
    return None


@dataclass
class GroupDefinition:
    group_letter: str
    team_ids: List[str]
    game_ids: List[str] = field(default_factory=list)
    head_to_head: bool = False  # sort_by_games_between_teams
    group_id: Optional[str] = None

    @property
    def tiebreak_mode(self) -> str:
        return 'head_to_head' if self.head_to_head else 'goal_difference'


@dataclass
class PlayoffGame:
    game_id: str
    game_number: int
    home_rule: Optional[SlotRule] = None
    away_rule: Optional[SlotRule] = None
    home_team: Optional[str] = None  # Known team, once the data layer has one
    away_team: Optional[str] = None
    def __repr__(self): return f'<PlayoffGame {self.game_number}: {self.home_rule} vs {self.away_rule}>'


@dataclass
class PlayoffRound:
    round_name: str
    order: int
    games: List[PlayoffGame] = field(default_factory=list)


@dataclass
class SlotAssignment:
    game_id: str
    home_team: Optional[str] = None
    away_team: Optional[str] = None

    @property
    def is_complete(self) -> bool:
        return self.home_team is not None and self.away_team is not None

    def to_dict(self) -> Dict:
        return {'game_id': self.game_id, 'home_team': self.home_team, 'away_team': self.away_team}


@dataclass
class Team:
    id: str
    name: str
    short_name: Optional[str] = None
