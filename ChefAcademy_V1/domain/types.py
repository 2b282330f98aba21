# ChefAcademy_V1/domain/types.py
from enum import Enum


class PlotState(str, Enum):
    # Values aligned with the persisted record
    EMPTY = "empty"
    GROWING = "growing"
    READY = "ready"
    NEEDS_WATER = "needsWater"


class ShopCategory(str, Enum):
    DAIRY = "dairy"
    PROTEIN = "protein"
    GRAINS = "grains"
    OILS_AND_FATS = "oilsAndFats"
    BASICS = "basics"
    SAUCES = "sauces"


class RecipeCategory(str, Enum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACKS = "snacks"


class Difficulty(str, Enum):
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"  # "Needs Help"


class HealthStat(str, Enum):
    """The six Body Buddy meters (0..100)."""

    BRAIN = "brain"
    MUSCLE = "muscle"
    BONE = "bone"
    HEART = "heart"
    IMMUNE = "immune"
    ENERGY = "energy"


class EventKind(str, Enum):
    PLANTED = "planted"
    WATERED = "watered"
    HARVESTED = "harvested"
    PLOT_CHANGED = "plot_changed"
    PURCHASED = "purchased"
    SOLD = "sold"
    COINS_CHANGED = "coins_changed"
    COOKED = "cooked"
    LEVEL_UP = "level_up"
    RECIPE_UNLOCKED = "recipe_unlocked"
    BADGE_COMPLETED = "badge_completed"
    QUEST_COMPLETED = "quest_completed"
    PROGRESS_RESET = "progress_reset"
