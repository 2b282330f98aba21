"""
Recipe resolver: what can be cooked, cooking, star ratings and unlocks.

A recipe is cookable when it is unlocked and both its vegetable needs (from
the harvested stock) and its pantry needs are covered.  Cooking checks the
full requirement set before consuming anything.
"""

import logging
from typing import Dict, Iterator, List, Optional

from ChefAcademy_V1.core.events import EventBus
from ChefAcademy_V1.core.results import CookResult
from ChefAcademy_V1.core.rewards import (
    credit_coins,
    grant_xp,
    unlock_level_recipes,
    unlock_recipe,
)
from ChefAcademy_V1.domain.catalog import Catalog, Recipe
from ChefAcademy_V1.domain.errors import RecipeLocked, RecipeNotCookable
from ChefAcademy_V1.domain.progress import PlayerProgress
from ChefAcademy_V1.domain.types import EventKind
from ChefAcademy_V1.rules.scoring import PERFECT_SCORE, StarPolicy, stars_for_score

logger = logging.getLogger(__name__)


class RecipeResolver:
    def __init__(
        self,
        progress: PlayerProgress,
        catalog: Catalog,
        events: Optional[EventBus] = None,
        star_policy: StarPolicy = stars_for_score,
    ):
        self.progress = progress
        self.catalog = catalog
        self.events = events if events is not None else EventBus()
        self.star_policy = star_policy

    # -------- Queries --------

    def is_unlocked(self, recipe_id: str) -> bool:
        return recipe_id in self.progress.unlocked_recipes

    def missing_ingredients(self, recipe_id: str) -> Dict[str, int]:
        """Shortfall per ingredient id, {} when everything is in stock."""
        return self._missing(self.catalog.recipe(recipe_id))

    def can_cook(self, recipe_id: str) -> bool:
        return self.is_unlocked(recipe_id) and not self.missing_ingredients(recipe_id)

    def cookable_recipes(self) -> Iterator[Recipe]:
        """Unlocked recipes whose every requirement is covered right now."""
        for recipe_id in sorted(self.progress.unlocked_recipes):
            recipe = self.catalog.recipes.get(recipe_id)
            if recipe is not None and not self._missing(recipe):
                yield recipe

    def garden_ready_recipes(self) -> List[Recipe]:
        """Unlocked recipes whose vegetables are all harvested (pantry not checked)."""
        ready = []
        for recipe_id in sorted(self.progress.unlocked_recipes):
            recipe = self.catalog.recipes.get(recipe_id)
            if recipe is not None and not self.progress.harvested.shortfall(recipe.vegetables):
                ready.append(recipe)
        return ready

    def stars(self, recipe_id: str) -> int:
        return self.progress.recipe_stars.get(recipe_id, 0)

    def _missing(self, recipe: Recipe) -> Dict[str, int]:
        missing = self.progress.harvested.shortfall(recipe.vegetables)
        missing.update(self.progress.pantry.shortfall(recipe.pantry))
        return missing

    # -------- Cooking --------

    def cook(self, recipe_id: str, score: Optional[float] = None) -> CookResult:
        """
        Cook a recipe and pay its rewards.

        Raises UnknownCatalogItem, RecipeLocked or RecipeNotCookable; in every
        failure case the progress is left untouched.
        """
        recipe = self.catalog.recipe(recipe_id)
        if not self.is_unlocked(recipe_id):
            raise RecipeLocked(recipe_id)
        missing = self._missing(recipe)
        if missing:
            raise RecipeNotCookable(recipe_id, missing)

        score = PERFECT_SCORE if score is None else max(0, min(PERFECT_SCORE, score))
        stars = self.star_policy(score, recipe.star_thresholds)

        # requirements checked above: the removals cannot fail halfway
        self.progress.harvested.remove_all(recipe.vegetables)
        self.progress.pantry.remove_all(recipe.pantry)

        credit_coins(self.progress, recipe.coin_reward, self.events)
        level_before = self.progress.level
        unlocked = grant_xp(self.progress, recipe.xp_reward, self.catalog, self.events)
        health_delta = self.progress.health.apply(recipe.health)

        best = max(self.stars(recipe_id), stars)
        self.progress.recipe_stars[recipe_id] = best

        logger.info(
            "Cooked %s: %d star(s), +%d coins, +%d XP",
            recipe_id,
            stars,
            recipe.coin_reward,
            recipe.xp_reward,
        )
        self.events.emit(
            EventKind.COOKED,
            recipe_id=recipe_id,
            stars=stars,
            coins=recipe.coin_reward,
            xp=recipe.xp_reward,
        )
        return CookResult(
            recipe_id=recipe_id,
            score=score,
            stars=stars,
            best_stars=best,
            coins_gained=recipe.coin_reward,
            xp_gained=recipe.xp_reward,
            coins=self.progress.coins,
            xp=self.progress.xp,
            level=self.progress.level,
            leveled_up=self.progress.level > level_before,
            health_delta=health_delta,
            unlocked_recipes=unlocked,
        )

    # -------- Unlocks --------

    def unlock(self, recipe_id: str) -> bool:
        """Unlock a recipe; no-op returning False when already unlocked."""
        self.catalog.recipe(recipe_id)
        return unlock_recipe(self.progress, recipe_id, self.events)

    def unlock_for_level(self) -> List[str]:
        return unlock_level_recipes(self.progress, self.catalog, self.events)

    def complete_badge(self, badge_id: str) -> List[str]:
        """Record a badge and unlock the recipes it gates; returns the new ids."""
        self.catalog.badge(badge_id)
        if badge_id not in self.progress.completed_badges:
            self.progress.completed_badges.add(badge_id)
            logger.info("Badge completed: %s", badge_id)
            self.events.emit(EventKind.BADGE_COMPLETED, badge_id=badge_id)
        unlocked = []
        for recipe in sorted(self.catalog.recipes.values(), key=lambda r: r.id):
            if recipe.unlock_badge == badge_id and self.unlock(recipe.id):
                unlocked.append(recipe.id)
        return unlocked
