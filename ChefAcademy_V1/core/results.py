from typing import Dict, List, Optional

from pydantic import BaseModel

from ChefAcademy_V1.domain.types import HealthStat, PlotState


class PlotResult(BaseModel):
    """Plot snapshot returned by plant / water."""

    plot_id: int
    state: PlotState
    vegetable: Optional[str] = None
    progress: float = 0.0


class HarvestResult(BaseModel):
    plot_id: int
    vegetable: str
    quantity: int
    xp_gained: int
    level: int
    leveled_up: bool = False
    # recipes that use this vegetable, as a "what can I cook" hint
    recipe_hints: List[str] = []


class PurchaseResult(BaseModel):
    item_id: str
    quantity: int
    coins_delta: int
    coins: int
    stock: int


class CookResult(BaseModel):
    """Rewards of a successful cook."""

    recipe_id: str
    score: float
    stars: int
    best_stars: int
    coins_gained: int
    xp_gained: int
    coins: int
    xp: int
    level: int
    leveled_up: bool = False
    health_delta: Dict[HealthStat, int] = {}
    unlocked_recipes: List[str] = []
