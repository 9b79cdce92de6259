"""Game collaborator adapters (geode catalog, treasure calculator, game state)."""

from .game import GeodeService, ObjectProvider, StardewGame, TreasureCalculator

__all__ = [
    "GeodeService",
    "ObjectProvider",
    "StardewGame",
    "TreasureCalculator",
]
