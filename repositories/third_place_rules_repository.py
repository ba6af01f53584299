"""
ThirdPlaceRulesRepository - Zugriff auf die Drittplatzierten-Regeln eines Turniers
Die Regeln liegen als JSON-Datei pro Turnier im konfigurierten Verzeichnis
"""

import json
import logging
import os
import re
from typing import Dict

from constants import LEGACY_THIRD_PLACE_RULES, THIRD_PLACE_RULES_FILE_SUFFIX
from app.exceptions import ConfigurationError, ValidationError

TOURNAMENT_ID_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")


class ThirdPlaceRulesRepository:
    """
    Lädt die Regeltabelle (Kombinationsschlüssel -> {Position -> Gruppe}) eines Turniers

    Unterstützte Dateiformate:
        {"ABCD": {"A/D/E/F": "A", ...}, ...}
        [{"combination_key": "ABCD", "rules": {"A/D/E/F": "A", ...}}, ...]
    """

    def __init__(self, rules_dir: str, use_legacy_rules: bool = True):
        """
        Args:
            rules_dir: Verzeichnis mit den Dateien <tournament_id>.json
            use_legacy_rules: Fallback auf die alte EURO-Tabelle, wenn keine Datei existiert
        """
        self.rules_dir = rules_dir
        self.use_legacy_rules = use_legacy_rules
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    def _rules_path(self, tournament_id: str) -> str:
        if not tournament_id or not TOURNAMENT_ID_PATTERN.match(tournament_id):
            raise ValidationError(f"Invalid tournament id '{tournament_id}'", field='tournament_id')
        return os.path.join(self.rules_dir, f"{tournament_id}{THIRD_PLACE_RULES_FILE_SUFFIX}")

    def get_rules_map(self, tournament_id: str) -> Dict[str, Dict[str, str]]:
        """
        Gibt die Regeltabelle eines Turniers zurück

        Returns:
            Kombinationsschlüssel -> {Position -> Gruppenbuchstabe}. Leer, wenn
            das Turnier keine Regeln hat und der Fallback deaktiviert ist.
        """
        path = self._rules_path(tournament_id)
        if not os.path.exists(path):
            if self.use_legacy_rules:
                self.logger.debug(f"No third-place rules for {tournament_id}, using legacy rules")
                return {key: dict(mapping) for key, mapping in LEGACY_THIRD_PLACE_RULES.items()}
            return {}

        try:
            with open(path, 'r', encoding='utf-8') as f:
                raw_rules = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            raise ConfigurationError(f"Could not read third-place rules for {tournament_id}: {str(e)}",
                                     config_key='THIRD_PLACE_RULES_DIR')

        rules_map = self._normalize(raw_rules, tournament_id)
        self.logger.info(f"Loaded {len(rules_map)} third-place combinations for {tournament_id}")
        return rules_map

    def _normalize(self, raw_rules, tournament_id: str) -> Dict[str, Dict[str, str]]:
        if isinstance(raw_rules, list):
            try:
                raw_rules = {entry['combination_key']: entry['rules'] for entry in raw_rules}
            except (KeyError, TypeError):
                raise ConfigurationError(f"Malformed third-place rule list for {tournament_id}",
                                         config_key='THIRD_PLACE_RULES_DIR')

        if not isinstance(raw_rules, dict):
            raise ConfigurationError(f"Third-place rules for {tournament_id} must be an object or a list",
                                     config_key='THIRD_PLACE_RULES_DIR')

        rules_map: Dict[str, Dict[str, str]] = {}
        for combination_key, mapping in raw_rules.items():
            if not isinstance(mapping, dict):
                raise ConfigurationError(f"Rule '{combination_key}' for {tournament_id} is not a mapping",
                                         config_key='THIRD_PLACE_RULES_DIR')
            # Schlüssel sind sortierte Gruppenbuchstaben
            normalized_key = ''.join(sorted(str(combination_key).upper()))
            rules_map[normalized_key] = {str(position): str(group).upper() for position, group in mapping.items()}
        return rules_map
