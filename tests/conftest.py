from datetime import datetime, timedelta, timezone

import pytest

from ChefAcademy_V1.core.events import EventBus
from ChefAcademy_V1.domain.catalog import Badge, Catalog, PantryItem, Recipe, VegetableType
from ChefAcademy_V1.domain.progress import GameSettings, PlayerProgress
from ChefAcademy_V1.domain.types import HealthStat, ShopCategory

T0 = datetime(2026, 3, 1, 8, 0, tzinfo=timezone.utc)


def at(seconds: float) -> datetime:
    return T0 + timedelta(seconds=seconds)


@pytest.fixture
def catalog() -> Catalog:
    """Small catalog with round numbers."""
    return Catalog.from_entries(
        vegetables=[
            VegetableType(id="lettuce", name="Lettuce", growth_seconds=30, harvest_yield=1, seed_cost=5, sell_price=3),
            VegetableType(id="carrot", name="Carrot", growth_seconds=60, harvest_yield=1, seed_cost=10, sell_price=5),
            VegetableType(
                id="pumpkin",
                name="Pumpkin",
                growth_seconds=100,
                harvest_yield=2,
                seed_cost=25,
                sell_price=18,
                water_interval_seconds=40,
            ),
        ],
        pantry_items=[
            PantryItem(id="dressing", name="Dressing", category=ShopCategory.SAUCES, price=5),
            PantryItem(id="cheese", name="Cheese", category=ShopCategory.DAIRY, price=15),
        ],
        recipes=[
            Recipe(
                id="garden-salad",
                title="Garden Salad",
                vegetables={"lettuce": 2},
                pantry={"dressing": 1},
                xp_reward=25,
                coin_reward=30,
                health={HealthStat.IMMUNE: 6, HealthStat.HEART: 4},
            ),
            Recipe(
                id="veggie-wrap",
                title="Veggie Wrap",
                vegetables={"carrot": 1},
                pantry={"cheese": 1},
                xp_reward=25,
                coin_reward=30,
            ),
            Recipe(
                id="pumpkin-soup",
                title="Pumpkin Soup",
                vegetables={"pumpkin": 1},
                xp_reward=35,
                coin_reward=40,
                unlock_level=2,
            ),
            Recipe(
                id="carrot-sticks",
                title="Carrot Sticks",
                vegetables={"carrot": 1},
                xp_reward=15,
                coin_reward=20,
                unlock_badge="green-thumb",
            ),
        ],
        badges=[Badge(id="green-thumb", name="Green Thumb")],
    )


@pytest.fixture
def settings() -> GameSettings:
    return GameSettings(
        starting_coins=100,
        plot_count=4,
        starter_seeds={"lettuce": 2, "carrot": 1, "pumpkin": 1},
        starter_recipes=("garden-salad", "veggie-wrap"),
    )


@pytest.fixture
def progress(settings) -> PlayerProgress:
    return PlayerProgress.new_player(settings)


@pytest.fixture
def events() -> EventBus:
    return EventBus()


@pytest.fixture
def recorded(events):
    """Kinds of every event emitted on the bus."""
    kinds = []
    events.subscribe(lambda event: kinds.append(event.kind))
    return kinds
