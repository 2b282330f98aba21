import logging
from typing import List, Optional

from ChefAcademy_V1.core.events import EventBus
from ChefAcademy_V1.domain.catalog import Catalog
from ChefAcademy_V1.domain.progress import PlayerProgress
from ChefAcademy_V1.domain.types import EventKind
from ChefAcademy_V1.rules.leveling import level_for_xp

logger = logging.getLogger(__name__)


def credit_coins(progress: PlayerProgress, amount: int, events: Optional[EventBus] = None) -> None:
    amount = int(amount)
    if amount < 0:
        raise ValueError(f"Cannot credit a negative amount: {amount}")
    if amount == 0:
        return
    progress.coins += amount
    if events is not None:
        events.emit(EventKind.COINS_CHANGED, delta=amount, coins=progress.coins)


def unlock_recipe(
    progress: PlayerProgress, recipe_id: str, events: Optional[EventBus] = None
) -> bool:
    """Add a recipe to the unlocked set. False when it already was."""
    if recipe_id in progress.unlocked_recipes:
        return False
    progress.unlocked_recipes.add(recipe_id)
    logger.info("Recipe unlocked: %s", recipe_id)
    if events is not None:
        events.emit(EventKind.RECIPE_UNLOCKED, recipe_id=recipe_id)
    return True


def unlock_level_recipes(
    progress: PlayerProgress, catalog: Catalog, events: Optional[EventBus] = None
) -> List[str]:
    """Unlock every recipe whose unlock level is reached; returns the new ids."""
    unlocked = []
    for recipe in sorted(catalog.recipes.values(), key=lambda r: r.id):
        if recipe.unlock_level is None or recipe.unlock_level > progress.level:
            continue
        if unlock_recipe(progress, recipe.id, events):
            unlocked.append(recipe.id)
    return unlocked


def grant_xp(
    progress: PlayerProgress,
    amount: int,
    catalog: Catalog,
    events: Optional[EventBus] = None,
) -> List[str]:
    """
    Add XP, recompute the level and unlock the recipes of the levels reached.
    Returns the recipes unlocked by a level-up ([] otherwise).
    """
    amount = int(amount)
    if amount < 0:
        raise ValueError(f"Cannot grant a negative amount of XP: {amount}")
    progress.xp += amount
    new_level = max(progress.level, level_for_xp(progress.xp))
    if new_level == progress.level:
        return []
    old_level, progress.level = progress.level, new_level
    logger.info("Level up: %d -> %d (%d XP)", old_level, new_level, progress.xp)
    if events is not None:
        events.emit(EventKind.LEVEL_UP, old_level=old_level, level=new_level)
    return unlock_level_recipes(progress, catalog, events)
