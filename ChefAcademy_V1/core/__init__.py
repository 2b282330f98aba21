"""
Engines of the game loop (GROW -> BUY -> COOK -> FEED).

Each engine mutates the shared PlayerProgress and notifies the EventBus;
GameSession wires them together for the view layer.
"""

from .economy import EconomyEngine
from .events import EventBus, GameEvent
from .game import GameSession
from .garden import GardenEngine
from .kitchen import RecipeResolver
from .quests import QuestTracker
from .store import JsonFileStorage, MemoryStorage, PlayerRecord, ProgressionStore

__all__ = [
    "EconomyEngine",
    "EventBus",
    "GameEvent",
    "GameSession",
    "GardenEngine",
    "RecipeResolver",
    "QuestTracker",
    "JsonFileStorage",
    "MemoryStorage",
    "PlayerRecord",
    "ProgressionStore",
]
