"""
Services Modul für die Prode-Turnierlogik
Exportiert die Service-Klassen für die Geschäftslogik
"""

from .standings_calculator import StandingsCalculator

# BracketService wird direkt aus services.bracket_service importiert,
# da es von utils abhängt und utils wiederum den StandingsCalculator nutzt

__all__ = [
    'StandingsCalculator',
]
