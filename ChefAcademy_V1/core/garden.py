"""
Garden engine: plant, water and harvest intents on the player's plots.

Plot states move along

    empty -> growing -> ready -> (harvest) -> empty
                 |  ^
                 v  | (water)
             needs_water

Growth is evaluated lazily from timestamps (see rules.growth); `tick` only
materialises the computed state and notifies listeners of transitions.
"""

import logging
from datetime import datetime, timezone
from typing import Callable, List, Optional

from ChefAcademy_V1.core.events import EventBus
from ChefAcademy_V1.core.results import HarvestResult, PlotResult
from ChefAcademy_V1.core.rewards import grant_xp
from ChefAcademy_V1.data.game_params import HARVEST_XP
from ChefAcademy_V1.domain.catalog import Catalog, VegetableType
from ChefAcademy_V1.domain.errors import InsufficientSeeds, InvalidState
from ChefAcademy_V1.domain.garden import GardenPlot
from ChefAcademy_V1.domain.progress import PlayerProgress
from ChefAcademy_V1.domain.types import EventKind, PlotState
from ChefAcademy_V1.rules import growth

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class GardenEngine:
    def __init__(
        self,
        progress: PlayerProgress,
        catalog: Catalog,
        events: Optional[EventBus] = None,
        clock: Optional[Clock] = None,
        harvest_xp: int = HARVEST_XP,
    ):
        self.progress = progress
        self.catalog = catalog
        self.events = events if events is not None else EventBus()
        self.clock = clock or utc_now
        self.harvest_xp = harvest_xp

    # -------- Helpers --------

    def _now(self, now: Optional[datetime]) -> datetime:
        return now if now is not None else self.clock()

    def _plot(self, plot_id: int) -> GardenPlot:
        plot = self.progress.plot(plot_id)
        if plot is None:
            raise InvalidState(f"Unknown plot {plot_id}", plot_id=plot_id)
        return plot

    def _vegetable(self, plot: GardenPlot) -> VegetableType:
        return self.catalog.vegetable(plot.vegetable)

    def _result(self, plot: GardenPlot, now: datetime) -> PlotResult:
        return PlotResult(
            plot_id=plot.id,
            state=self.plot_state(plot.id, now),
            vegetable=plot.vegetable,
            progress=self.growth_progress(plot.id, now),
        )

    # -------- Queries (pure) --------

    def growth_progress(self, plot_id: int, now: Optional[datetime] = None) -> float:
        plot = self._plot(plot_id)
        if plot.is_empty:
            return 0.0
        return growth.growth_progress(plot, self._vegetable(plot), self._now(now))

    def plot_state(self, plot_id: int, now: Optional[datetime] = None) -> PlotState:
        plot = self._plot(plot_id)
        if plot.is_empty:
            return PlotState.EMPTY
        return growth.evaluate_state(plot, self._vegetable(plot), self._now(now))

    def seconds_until_ready(self, plot_id: int, now: Optional[datetime] = None) -> float:
        plot = self._plot(plot_id)
        if plot.is_empty:
            return 0.0
        return growth.seconds_until_ready(plot, self._vegetable(plot), self._now(now))

    def plots_in_state(self, state: PlotState, now: Optional[datetime] = None) -> List[int]:
        now = self._now(now)
        return [p.id for p in self.progress.plots if self.plot_state(p.id, now) == state]

    # -------- Intents --------

    def tick(self, now: Optional[datetime] = None) -> List[int]:
        """
        Store the live state on every plot and notify PLOT_CHANGED for each
        transition; returns the ids that changed.

        Unlike the pure plot_state / growth_progress reads, this intent writes
        the plots. Calling it again at the same instant changes nothing.
        """
        now = self._now(now)
        changed = []
        for plot in self.progress.plots:
            new_state = self.plot_state(plot.id, now)
            if new_state == plot.state:
                continue
            old_state, plot.state = plot.state, new_state
            changed.append(plot.id)
            self.events.emit(
                EventKind.PLOT_CHANGED,
                plot_id=plot.id,
                old_state=old_state.value,
                state=new_state.value,
            )
        return changed

    def plant(self, plot_id: int, vegetable_id: str, now: Optional[datetime] = None) -> PlotResult:
        plot = self._plot(plot_id)
        self.catalog.vegetable(vegetable_id)
        if not plot.is_empty:
            raise InvalidState(
                f"Plot {plot_id} is not empty ({plot.state.value})",
                plot_id=plot_id,
                state=plot.state,
            )
        self.progress.seeds.remove(vegetable_id, 1, shortfall_error=InsufficientSeeds)

        now = self._now(now)
        plot.plant(vegetable_id, now)
        logger.debug("Planted %s in plot %d", vegetable_id, plot_id)
        self.events.emit(EventKind.PLANTED, plot_id=plot_id, vegetable=vegetable_id)
        return self._result(plot, now)

    def water(self, plot_id: int, now: Optional[datetime] = None) -> PlotResult:
        plot = self._plot(plot_id)
        now = self._now(now)
        state = self.plot_state(plot_id, now)
        if state != PlotState.NEEDS_WATER:
            raise InvalidState(
                f"Plot {plot_id} does not need water ({state.value})",
                plot_id=plot_id,
                state=state,
            )
        vegetable = self._vegetable(plot)
        # bank the growth reached before the plot dried out
        plot.grown_seconds = growth.effective_growth_seconds(plot, vegetable, now)
        plot.last_watered_at = now
        plot.state = PlotState.GROWING
        self.events.emit(EventKind.WATERED, plot_id=plot_id, vegetable=plot.vegetable)
        return self._result(plot, now)

    def harvest(self, plot_id: int, now: Optional[datetime] = None) -> HarvestResult:
        plot = self._plot(plot_id)
        now = self._now(now)
        state = self.plot_state(plot_id, now)
        if state != PlotState.READY:
            raise InvalidState(
                f"Plot {plot_id} is not ready to harvest ({state.value})",
                plot_id=plot_id,
                state=state,
            )
        vegetable = self._vegetable(plot)
        quantity = vegetable.harvest_yield
        self.progress.harvested.add(vegetable.id, quantity)
        plot.reset()

        level_before = self.progress.level
        grant_xp(self.progress, self.harvest_xp, self.catalog, self.events)
        logger.debug("Harvested %d %s from plot %d", quantity, vegetable.id, plot_id)
        self.events.emit(
            EventKind.HARVESTED, plot_id=plot_id, vegetable=vegetable.id, quantity=quantity
        )
        return HarvestResult(
            plot_id=plot_id,
            vegetable=vegetable.id,
            quantity=quantity,
            xp_gained=self.harvest_xp,
            level=self.progress.level,
            leveled_up=self.progress.level > level_before,
            recipe_hints=[r.id for r in self.catalog.recipes_using(vegetable.id)],
        )
