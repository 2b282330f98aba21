# ChefAcademy_V1/domain/progress.py
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Mapping, Optional, Set, Tuple

from pydantic import BaseModel, Field, ValidationError

from ChefAcademy_V1.data import game_params as params
from ChefAcademy_V1.domain.garden import GardenPlot, create_starter_plots
from ChefAcademy_V1.domain.inventory import StockLedger
from ChefAcademy_V1.domain.types import HealthStat
from ChefAcademy_V1.utils import clamp, load_and_validate


class GameSettings(BaseModel):
    """Per-session overrides of the new-player defaults."""

    starting_coins: int = Field(default=params.STARTING_COINS, ge=0)
    plot_count: int = Field(
        default=params.DEFAULT_PLOT_COUNT,
        ge=params.MIN_PLOT_COUNT,
        le=params.MAX_PLOT_COUNT,
    )
    starter_seeds: Dict[str, int] = Field(
        default_factory=lambda: dict(params.STARTER_SEEDS)
    )
    starter_recipes: Tuple[str, ...] = params.STARTER_RECIPES
    starting_health: int = Field(
        default=params.STARTING_HEALTH, ge=params.HEALTH_MIN, le=params.HEALTH_MAX
    )
    harvest_xp: int = Field(default=params.HARVEST_XP, ge=0)


def load_settings(path: Path | str) -> GameSettings:
    """Read a settings JSON file; missing keys keep their defaults."""
    try:
        return load_and_validate(Path(path), GameSettings)
    except ValidationError as e:
        raise ValueError(f"Invalid game settings in {path}: {e}")


@dataclass
class HealthStats:
    """Body Buddy meters, each kept in [0, 100]."""

    brain: int = params.STARTING_HEALTH
    muscle: int = params.STARTING_HEALTH
    bone: int = params.STARTING_HEALTH
    heart: int = params.STARTING_HEALTH
    immune: int = params.STARTING_HEALTH
    energy: int = params.STARTING_HEALTH

    def __post_init__(self):
        for stat in HealthStat:
            self.set(stat, getattr(self, stat.value))

    @classmethod
    def uniform(cls, value: int) -> "HealthStats":
        return cls(**{stat.value: value for stat in HealthStat})

    def get(self, stat: HealthStat) -> int:
        return getattr(self, HealthStat(stat).value)

    def set(self, stat: HealthStat, value: int) -> None:
        setattr(
            self,
            HealthStat(stat).value,
            clamp(value, params.HEALTH_MIN, params.HEALTH_MAX),
        )

    def apply(self, deltas: Mapping[HealthStat, int]) -> Dict[HealthStat, int]:
        """Add the deltas (re-clamped) and return the change actually applied."""
        applied = {}
        for stat, delta in deltas.items():
            before = self.get(stat)
            self.set(stat, before + delta)
            applied[HealthStat(stat)] = self.get(stat) - before
        return applied

    def as_dict(self) -> Dict[str, int]:
        return {stat.value: self.get(stat) for stat in HealthStat}


@dataclass
class PlayerProgress:
    """
    Aggregate root of a player's game: the single mutable source of truth.
    Engines mutate it, the progression store is the only writer of its
    persisted form, the view layer only reads it.
    """

    coins: int = params.STARTING_COINS
    xp: int = 0
    level: int = params.STARTING_LEVEL
    seeds: StockLedger = field(default_factory=StockLedger)
    harvested: StockLedger = field(default_factory=StockLedger)
    pantry: StockLedger = field(default_factory=StockLedger)
    plots: List[GardenPlot] = field(
        default_factory=lambda: create_starter_plots(params.DEFAULT_PLOT_COUNT)
    )
    unlocked_recipes: Set[str] = field(
        default_factory=lambda: set(params.STARTER_RECIPES)
    )
    recipe_stars: Dict[str, int] = field(default_factory=dict)
    health: HealthStats = field(default_factory=HealthStats)
    completed_badges: Set[str] = field(default_factory=set)
    last_saved: Optional[datetime] = None

    @classmethod
    def new_player(cls, settings: Optional[GameSettings] = None) -> "PlayerProgress":
        settings = settings or GameSettings()
        return cls(
            coins=settings.starting_coins,
            xp=0,
            level=params.STARTING_LEVEL,
            seeds=StockLedger.from_mapping(settings.starter_seeds),
            plots=create_starter_plots(settings.plot_count),
            unlocked_recipes=set(settings.starter_recipes),
            health=HealthStats.uniform(settings.starting_health),
        )

    def plot(self, plot_id: int) -> Optional[GardenPlot]:
        if 0 <= plot_id < len(self.plots):
            return self.plots[plot_id]
        return None
