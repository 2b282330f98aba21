import logging
from datetime import datetime
from typing import Callable, Dict, List, Optional

from ChefAcademy_V1.core.economy import EconomyEngine
from ChefAcademy_V1.core.events import EventBus, GameEvent
from ChefAcademy_V1.core.garden import Clock, GardenEngine
from ChefAcademy_V1.core.kitchen import RecipeResolver
from ChefAcademy_V1.core.quests import QuestTracker
from ChefAcademy_V1.core.results import CookResult, HarvestResult, PlotResult, PurchaseResult
from ChefAcademy_V1.core.store import ProgressionStore
from ChefAcademy_V1.domain.catalog import Catalog, Recipe
from ChefAcademy_V1.domain.errors import PersistenceWriteError
from ChefAcademy_V1.domain.progress import GameSettings, PlayerProgress
from ChefAcademy_V1.domain.types import EventKind, PlotState
from ChefAcademy_V1.rules.scoring import StarPolicy, stars_for_score

logger = logging.getLogger(__name__)


class GameSession:
    """
    One player's session: loads the progress and wires the engines on it.

    The view layer talks to this object only.  Intents either return a
    result or raise a GameError; queries never mutate anything.
    """

    def __init__(
        self,
        store: ProgressionStore,
        catalog: Optional[Catalog] = None,
        settings: Optional[GameSettings] = None,
        clock: Optional[Clock] = None,
        star_policy: StarPolicy = stars_for_score,
    ):
        self.store = store
        self.catalog = catalog or store.catalog
        self.settings = settings or store.settings
        self.clock = clock
        self.events = EventBus()
        self._wire(store.load(), star_policy)

    def _wire(self, progress: PlayerProgress, star_policy: StarPolicy) -> None:
        self.progress = progress
        self.garden = GardenEngine(
            progress, self.catalog, self.events, self.clock, self.settings.harvest_xp
        )
        self.economy = EconomyEngine(progress, self.catalog, self.events)
        self.kitchen = RecipeResolver(progress, self.catalog, self.events, star_policy)
        self.quests = QuestTracker(progress, self.catalog, self.events)

    def subscribe(self, listener: Callable[[GameEvent], None]) -> Callable[[], None]:
        return self.events.subscribe(listener)

    # -------- Garden --------

    def plant(self, plot_id: int, vegetable_id: str, now: Optional[datetime] = None) -> PlotResult:
        return self.garden.plant(plot_id, vegetable_id, now)

    def water(self, plot_id: int, now: Optional[datetime] = None) -> PlotResult:
        return self.garden.water(plot_id, now)

    def harvest(self, plot_id: int, now: Optional[datetime] = None) -> HarvestResult:
        return self.garden.harvest(plot_id, now)

    def tick(self, now: Optional[datetime] = None) -> List[int]:
        return self.garden.tick(now)

    def growth_progress(self, plot_id: int, now: Optional[datetime] = None) -> float:
        return self.garden.growth_progress(plot_id, now)

    def plot_state(self, plot_id: int, now: Optional[datetime] = None) -> PlotState:
        return self.garden.plot_state(plot_id, now)

    # -------- Shop --------

    def buy_pantry_item(self, item_id: str, quantity: int = 1) -> bool:
        return self.economy.buy_pantry_item(item_id, quantity)

    def try_buy_pantry_item(self, item_id: str, quantity: int = 1) -> bool:
        return self.economy.try_buy_pantry_item(item_id, quantity)

    def buy_seeds(self, vegetable_id: str, quantity: int = 1) -> PurchaseResult:
        return self.economy.buy_seeds(vegetable_id, quantity)

    def sell_harvest(self, vegetable_id: str, quantity: int = 1) -> PurchaseResult:
        return self.economy.sell_harvest(vegetable_id, quantity)

    def pantry_quantity(self, item_id: str) -> int:
        return self.economy.pantry_quantity(item_id)

    # -------- Kitchen --------

    def cook(self, recipe_id: str, score: Optional[float] = None) -> CookResult:
        return self.kitchen.cook(recipe_id, score)

    def cookable_recipes(self) -> List[Recipe]:
        return list(self.kitchen.cookable_recipes())

    def missing_ingredients(self, recipe_id: str) -> Dict[str, int]:
        return self.kitchen.missing_ingredients(recipe_id)

    def unlock(self, recipe_id: str) -> bool:
        return self.kitchen.unlock(recipe_id)

    def complete_badge(self, badge_id: str) -> List[str]:
        return self.kitchen.complete_badge(badge_id)

    # -------- Persistence --------

    def save(self, now: Optional[datetime] = None) -> None:
        """Persist the progress. PersistenceWriteError is logged and re-raised."""
        try:
            self.store.save(self.progress, now)
        except PersistenceWriteError:
            logger.exception("Progress not saved, it stays in memory")
            raise

    def reset(self, now: Optional[datetime] = None) -> PlayerProgress:
        """Start over with a new player (saved immediately)."""
        progress = self.store.reset(now)
        # the old tracker stays subscribed if the save above failed
        self.quests.close()
        self._wire(progress, self.kitchen.star_policy)
        self.events.emit(EventKind.PROGRESS_RESET)
        return self.progress
