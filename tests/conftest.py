"""
Shared test fixtures and configuration for the bracket resolution tests.
"""

import pytest

from app import create_app
from models import GameOutcome, GroupDefinition


# Round-robin pairings for a group of four (indices into the team list)
ROUND_ROBIN_PAIRINGS = [(0, 1), (2, 3), (0, 2), (1, 3), (0, 3), (1, 2)]

# Scores that rank the teams in listing order: 9, 6, 3 and 0 points
LISTING_ORDER_SCORES = [(2, 1), (1, 0), (3, 0), (2, 0), (1, 0), (1, 0)]


def make_outcome(game_id, home_team, away_team, home_score=None, away_score=None, **kwargs):
    """Erstellt ein GameOutcome für Tests."""
    return GameOutcome(
        game_id=game_id,
        home_team=home_team,
        away_team=away_team,
        home_score=home_score,
        away_score=away_score,
        **kwargs
    )


def group_teams(letter):
    return [f"{letter}-T{i}" for i in range(1, 5)]


def round_robin(letter, teams, scores):
    """
    Outcomes of a full round robin. `scores` holds one (home, away) tuple per
    pairing in ROUND_ROBIN_PAIRINGS; None leaves the game unplayed.
    """
    outcomes = []
    for n, ((home, away), score) in enumerate(zip(ROUND_ROBIN_PAIRINGS, scores), start=1):
        home_score, away_score = score if score is not None else (None, None)
        outcomes.append(make_outcome(f"g-{letter.lower()}{n}", teams[home], teams[away], home_score, away_score))
    return outcomes


def build_group_stage(letters="ABCD", scores_by_group=None, head_to_head=False):
    """
    Groups of four with six fixtures each.

    Returns:
        (groups, results) - results keyed by game_id
    """
    scores_by_group = scores_by_group or {}
    groups = []
    results = {}
    for letter in letters:
        teams = group_teams(letter)
        outcomes = round_robin(letter, teams, scores_by_group.get(letter, LISTING_ORDER_SCORES))
        groups.append(GroupDefinition(
            group_letter=letter,
            team_ids=teams,
            game_ids=[o.game_id for o in outcomes],
            head_to_head=head_to_head
        ))
        results.update({o.game_id: o for o in outcomes})
    return groups, results


def outcome_payload(outcome):
    """JSON form of an outcome as sent to the API."""
    return {
        'game_id': outcome.game_id,
        'home_team': outcome.home_team,
        'away_team': outcome.away_team,
        'home_score': outcome.home_score,
        'away_score': outcome.away_score,
    }


def group_payload(group):
    return {
        'group_letter': group.group_letter,
        'team_ids': group.team_ids,
        'game_ids': group.game_ids,
        'head_to_head': group.head_to_head,
    }


@pytest.fixture
def group_stage():
    """Four complete groups, every table in listing order."""
    return build_group_stage()


@pytest.fixture
def rules_dir(tmp_path):
    """Empty directory for third-place rule files."""
    directory = tmp_path / "third_place_rules"
    directory.mkdir()
    return directory


@pytest.fixture
def app(rules_dir):
    """Create and configure a test Flask application."""
    app = create_app({
        'TESTING': True,
        'SECRET_KEY': 'test-secret-key',
        'THIRD_PLACE_RULES_DIR': str(rules_dir),
        'USE_LEGACY_THIRD_PLACE_RULES': True,
    })
    yield app


@pytest.fixture
def client(app):
    """Create a test client for the Flask application."""
    return app.test_client()
