"""
Domain objects for ChefAcademy.

The domain layer holds the plain data the engines work on: the static
catalog, garden plots, stock ledgers and the player's progress.  These
classes have no side effects outside themselves to ease unit testing.
"""

from .catalog import Badge, Catalog, PantryItem, Recipe, VegetableType, load_catalog
from .garden import GardenPlot
from .inventory import StockLedger
from .progress import GameSettings, HealthStats, PlayerProgress
from .types import HealthStat, PlotState

__all__ = [
    "Badge",
    "Catalog",
    "PantryItem",
    "Recipe",
    "VegetableType",
    "load_catalog",
    "GardenPlot",
    "StockLedger",
    "GameSettings",
    "HealthStats",
    "PlayerProgress",
    "HealthStat",
    "PlotState",
]
