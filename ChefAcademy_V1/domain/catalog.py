# ChefAcademy_V1/domain/catalog.py
"""
Static reference data: vegetables, pantry items, recipes and badges.

The catalog is plain data validated with Pydantic.  It holds no game logic;
engines look entries up by id so that adding a vegetable or a recipe is a
change to the JSON files only.
"""

from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    ValidationError,
    field_validator,
    model_validator,
)

from ChefAcademy_V1.domain.errors import UnknownCatalogItem
from ChefAcademy_V1.domain.types import (
    Difficulty,
    HealthStat,
    RecipeCategory,
    ShopCategory,
)
from ChefAcademy_V1.utils import load_json

DEFAULT_DATA_DIR = Path(__file__).resolve().parent.parent / "data"

# Default star bands, aligned with the cooking session score (0..100)
DEFAULT_STAR_THRESHOLDS: Tuple[int, int, int] = (0, 60, 85)


class VegetableType(BaseModel):
    """A vegetable you can grow in the garden."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    emoji: str = ""
    image: str = ""
    growth_seconds: float = Field(gt=0)
    harvest_yield: int = Field(default=1, ge=1)
    seed_cost: int = Field(default=0, ge=0)
    sell_price: int = Field(default=0, ge=0)
    # None => never needs water
    water_interval_seconds: Optional[float] = Field(default=None, gt=0)
    nutrients: Tuple[str, ...] = ()


class PantryItem(BaseModel):
    """Non-grown ingredient bought from the farm shop."""

    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    emoji: str = ""
    category: ShopCategory
    price: int = Field(ge=0)


class Badge(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    name: str
    description: str = ""


class Recipe(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    description: str = ""
    category: RecipeCategory = RecipeCategory.LUNCH
    difficulty: Difficulty = Difficulty.EASY
    vegetables: Dict[str, PositiveInt] = Field(default_factory=dict)
    pantry: Dict[str, PositiveInt] = Field(default_factory=dict)
    xp_reward: int = Field(default=25, ge=0)
    coin_reward: int = Field(default=30, ge=0)
    health: Dict[HealthStat, int] = Field(default_factory=dict)
    star_thresholds: Tuple[int, int, int] = DEFAULT_STAR_THRESHOLDS
    unlock_level: Optional[int] = Field(default=None, ge=1)
    unlock_badge: Optional[str] = None
    nutrition_facts: Tuple[str, ...] = ()

    @field_validator("star_thresholds")
    @classmethod
    def _thresholds_sorted(cls, value: Tuple[int, int, int]) -> Tuple[int, int, int]:
        if any(not 0 <= t <= 100 for t in value):
            raise ValueError("star thresholds must lie in 0..100")
        if list(value) != sorted(value):
            raise ValueError("star thresholds must be non-decreasing")
        return value


class Catalog(BaseModel):
    """Id-keyed tables of everything the engines can reference."""

    vegetables: Dict[str, VegetableType]
    pantry_items: Dict[str, PantryItem]
    recipes: Dict[str, Recipe]
    badges: Dict[str, Badge] = Field(default_factory=dict)

    @model_validator(mode="after")
    def _check_references(self) -> "Catalog":
        for recipe in self.recipes.values():
            for veg_id in recipe.vegetables:
                if veg_id not in self.vegetables:
                    raise ValueError(f"{recipe.id}: unknown vegetable {veg_id}")
            for item_id in recipe.pantry:
                if item_id not in self.pantry_items:
                    raise ValueError(f"{recipe.id}: unknown pantry item {item_id}")
            if recipe.unlock_badge and recipe.unlock_badge not in self.badges:
                raise ValueError(f"{recipe.id}: unknown badge {recipe.unlock_badge}")
        return self

    @classmethod
    def from_entries(
        cls,
        vegetables: Iterable[VegetableType],
        pantry_items: Iterable[PantryItem],
        recipes: Iterable[Recipe],
        badges: Iterable[Badge] = (),
    ) -> "Catalog":
        return cls(
            vegetables={v.id: v for v in vegetables},
            pantry_items={p.id: p for p in pantry_items},
            recipes={r.id: r for r in recipes},
            badges={b.id: b for b in badges},
        )

    # -------- Lookups --------

    def vegetable(self, vegetable_id: str) -> VegetableType:
        try:
            return self.vegetables[vegetable_id]
        except KeyError:
            raise UnknownCatalogItem("vegetable", vegetable_id) from None

    def pantry_item(self, item_id: str) -> PantryItem:
        try:
            return self.pantry_items[item_id]
        except KeyError:
            raise UnknownCatalogItem("pantry item", item_id) from None

    def recipe(self, recipe_id: str) -> Recipe:
        try:
            return self.recipes[recipe_id]
        except KeyError:
            raise UnknownCatalogItem("recipe", recipe_id) from None

    def badge(self, badge_id: str) -> Badge:
        try:
            return self.badges[badge_id]
        except KeyError:
            raise UnknownCatalogItem("badge", badge_id) from None

    def pantry_by_category(self, category: ShopCategory) -> List[PantryItem]:
        return [p for p in self.pantry_items.values() if p.category == category]

    def recipes_using(self, vegetable_id: str) -> List[Recipe]:
        """Recipes that need a given vegetable (shown after a harvest)."""
        return [r for r in self.recipes.values() if vegetable_id in r.vegetables]


def _load_entries(path: Path, model) -> list:
    entries = []
    for payload in load_json(path):
        try:
            entries.append(model.model_validate(payload))
        except ValidationError as e:
            raise ValueError(
                f"Validation error for {path.name} entry {payload.get('id')}: {e}"
            )
    return entries


def load_catalog(data_dir: Optional[Path | str] = None) -> Catalog:
    """Load the catalog from the JSON files of a data directory.

    Parameters
    ----------
    data_dir : Path | str, optional
        Directory holding ``vegetables.json``, ``pantry_items.json``,
        ``recipes.json`` and ``badges.json``. Defaults to the directory
        shipped with the package.

    Returns
    -------
    Catalog
        Validated catalog, cross references checked.

    Raises
    ------
    FileNotFoundError
        If one of the required files is missing.
    ValueError
        If an entry does not match its model or references an unknown id.
    """
    directory = Path(data_dir) if data_dir is not None else DEFAULT_DATA_DIR

    vegetables = _load_entries(directory / "vegetables.json", VegetableType)
    pantry_items = _load_entries(directory / "pantry_items.json", PantryItem)
    recipes = _load_entries(directory / "recipes.json", Recipe)
    badges_path = directory / "badges.json"
    badges = _load_entries(badges_path, Badge) if badges_path.exists() else []

    try:
        return Catalog.from_entries(vegetables, pantry_items, recipes, badges)
    except ValidationError as e:
        raise ValueError(f"Inconsistent catalog in {directory}: {e}")
