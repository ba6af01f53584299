from flask import jsonify, request, current_app

from routes.blueprints import bracket_bp
from app.exceptions import ValidationError
from repositories.third_place_rules_repository import ThirdPlaceRulesRepository
from services.bracket_service import BracketService


def _get_bracket_service() -> BracketService:
    repository = ThirdPlaceRulesRepository(
        current_app.config['THIRD_PLACE_RULES_DIR'],
        use_legacy_rules=current_app.config.get('USE_LEGACY_THIRD_PLACE_RULES', True)
    )
    return BracketService(repository)


def _get_json_body():
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        raise ValidationError("Request body must be a JSON object")
    return payload


@bracket_bp.route('/api/standings', methods=['POST'])
def calculate_standings():
    """Gruppentabellen aus Ergebnissen oder Tipps"""
    payload = _get_json_body()
    standings = _get_bracket_service().calculate_standings(payload)
    current_app.logger.debug(f"Calculated standings for {len(standings)} groups")
    return jsonify(standings)


@bracket_bp.route('/api/tournaments/<tournament_id>/playoff-slots', methods=['POST'])
def resolve_playoff_slots(tournament_id):
    """Teams aller Playoff-Spiele, über alle Runden aufgelöst"""
    payload = _get_json_body()
    result = _get_bracket_service().resolve_playoff_slots(tournament_id, payload)
    return jsonify(result)


@bracket_bp.route('/api/tournaments/<tournament_id>/third-place-slots', methods=['POST'])
def resolve_third_place_slots(tournament_id):
    """Zuordnung der Drittplatzierten zu den Positionen im Turnierbaum"""
    payload = _get_json_body()
    slots = _get_bracket_service().resolve_third_place_slots(tournament_id, payload)
    return jsonify(slots)
