from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional

from ChefAcademy_V1.domain.types import PlotState


@dataclass
class GardenPlot:
    """
    One planting slot of the garden.
    - state : last materialised state (the live state is evaluated lazily
      from the timestamps, see rules.growth).
    - grown_seconds : growth banked before the last watering.
    Invariant: vegetable is set iff state != EMPTY.
    """

    id: int
    state: PlotState = PlotState.EMPTY
    vegetable: Optional[str] = None
    planted_at: Optional[datetime] = None
    last_watered_at: Optional[datetime] = None
    grown_seconds: float = 0.0

    @property
    def is_empty(self) -> bool:
        return self.vegetable is None

    def plant(self, vegetable_id: str, now: datetime) -> None:
        self.vegetable = vegetable_id
        self.planted_at = now
        self.last_watered_at = now
        self.grown_seconds = 0.0
        self.state = PlotState.GROWING

    def reset(self) -> None:
        self.state = PlotState.EMPTY
        self.vegetable = None
        self.planted_at = None
        self.last_watered_at = None
        self.grown_seconds = 0.0


def create_starter_plots(count: int) -> List[GardenPlot]:
    """Fixed-size garden, ids are the slot indexes."""
    return [GardenPlot(id=i) for i in range(count)]
