"""
Repository Layer für die Prode-Turnierkonfiguration
Abstrahiert den Zugriff auf die Drittplatzierten-Regeln
"""

from .third_place_rules_repository import ThirdPlaceRulesRepository

__all__ = ['ThirdPlaceRulesRepository']
