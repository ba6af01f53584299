"""
Tests für die Bracket-API-Endpunkte.
"""

import json

from conftest import build_group_stage, group_payload, outcome_payload


def _payload(letters="ABCD"):
    groups, results = build_group_stage(letters)
    return {
        'groups': [group_payload(g) for g in groups],
        'results': [outcome_payload(o) for o in results.values()],
    }


class TestStandingsEndpoint:

    def test_standings(self, client):
        response = client.post('/api/standings', json=_payload("AB"))

        assert response.status_code == 200
        data = response.get_json()
        assert [row['team_id'] for row in data["B"]] == ["B-T1", "B-T2", "B-T3", "B-T4"]

    def test_non_json_body(self, client):
        response = client.post('/api/standings', data="groups", content_type='text/plain')

        assert response.status_code == 400
        assert response.get_json()['error'] == 'VALIDATION_ERROR'

    def test_validation_error_names_field(self, client):
        response = client.post('/api/standings', json={'groups': "A"})

        assert response.status_code == 400
        assert response.get_json() == {
            'error': 'VALIDATION_ERROR',
            'message': 'groups must be a list',
            'field': 'groups',
        }

    def test_non_string_team_is_rejected(self, client):
        payload = _payload("A")
        payload['results'][0]['home_team'] = ["A-T1"]

        response = client.post('/api/standings', json=payload)

        assert response.status_code == 400
        assert response.get_json()['field'] == 'home_team'


class TestPlayoffSlotsEndpoint:

    def test_default_bracket(self, client):
        response = client.post('/api/tournaments/wc-test/playoff-slots', json=_payload())

        assert response.status_code == 200
        data = response.get_json()
        assert data['assignments']["26"] == {'game_id': "26", 'home_team': "B-T1", 'away_team': "A-T2"}
        assert data['standings']["C"][2]['team_id'] == "C-T3"

    def test_custom_rule_file_is_used(self, client, rules_dir):
        # Third-placed teams are level, the group letter puts A ahead
        (rules_dir / "mini.json").write_text(json.dumps({"A": {"best-third": "A"}}))
        payload = _payload("AB")
        payload['rounds'] = [{'games': [
            {'game_id': "x", 'game_number': 1, 'home_rule': "B1",
             'away_rule': {'group': "best-third", 'position': 3}},
        ]}]

        response = client.post('/api/tournaments/mini/playoff-slots', json=payload)

        assert response.status_code == 200
        assert response.get_json()['assignments']["x"] == {'game_id': "x", 'home_team': "B-T1", 'away_team': "A-T3"}

    def test_invalid_tournament_id(self, client):
        response = client.post('/api/tournaments/bad.id/playoff-slots', json=_payload())

        assert response.status_code == 400
        assert response.get_json()['field'] == 'tournament_id'

    def test_malformed_rule_file(self, client, rules_dir):
        (rules_dir / "broken.json").write_text("{oops")

        response = client.post('/api/tournaments/broken/playoff-slots', json=_payload())

        assert response.status_code == 500
        assert response.get_json()['error'] == 'CONFIGURATION_ERROR'


class TestThirdPlaceSlotsEndpoint:

    def test_legacy_rules(self, client):
        response = client.post('/api/tournaments/euro2024/third-place-slots', json={
            'key': "ABCD",
            'third_place': {"A": "ITA", "B": "ESP", "C": "ENG", "D": "NED"},
        })

        assert response.status_code == 200
        assert response.get_json() == {"A/D/E/F": "ITA", "D/E/F": "NED", "A/B/C/D": "ESP", "A/B/C": "ENG"}

    def test_unresolved_group(self, client):
        response = client.post('/api/tournaments/euro2024/third-place-slots', json={
            'key': "ABCD",
            'third_place': {"A": "ITA", "B": None, "C": "ENG", "D": "NED"},
        })

        assert response.get_json()["A/B/C/D"] is None

    def test_no_rules_configured(self, app, client):
        app.config['USE_LEGACY_THIRD_PLACE_RULES'] = False

        response = client.post('/api/tournaments/euro2024/third-place-slots', json={'key': "ABCD"})

        assert response.status_code == 404
        assert response.get_json()['error'] == 'NOT_FOUND'
